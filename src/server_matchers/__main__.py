# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Print the effective matcher configuration and supported environment variables."""

import logging
import sys

from .config import ConfigManager
from .exceptions import ConfigurationError

logging.basicConfig(
    level=logging.WARNING,
    stream=sys.stderr,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Show configuration as JSON (default) or YAML when called with ``yaml``."""
    args = sys.argv[1:] if argv is None else argv
    output_format = args[0] if args else "json"

    try:
        manager = ConfigManager()
    except ConfigurationError:
        logger.exception("Configuration error")
        return 1

    if manager.config.debug_mode:
        logging.getLogger("server_matchers").setLevel(logging.DEBUG)

    print(manager.export_config(output_format))
    print()
    for env_var, description in manager.get_env_var_help().items():
        print(f"{env_var}: {description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
