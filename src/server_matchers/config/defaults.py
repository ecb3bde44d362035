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

"""Default configuration values for server matchers.

The defaults work out-of-the-box without any environment variable
configuration.
"""

from .schema import ConfigSchema

# Default configuration instance
DEFAULT_CONFIG = ConfigSchema()

# Points at a JSON or YAML configuration file
CONFIG_FILE_ENV_VAR = "SMX_CONFIG_FILE"

# Environment variable mapping for easy reference
ENV_VAR_MAPPING = {
    # Benchmark calibration
    "SMX_MIN_SAMPLE_SECONDS": "benchmark.min_sample_seconds",
    "SMX_CLOCK_TARGET_SECONDS": "benchmark.clock_target_seconds",
    "SMX_MAX_CALIBRATION_ROUNDS": "benchmark.max_calibration_rounds",
    # Deadlines
    "SMX_DEADLINE_STRATEGY": "deadline.strategy",
    # Lint
    "SMX_LINT_STRICT_WARNINGS": "lint.strict_warnings",
    # General
    "SMX_DEBUG_MODE": "debug_mode",
}

# Type mapping for environment variable conversion
ENV_VAR_TYPES = {
    "SMX_MIN_SAMPLE_SECONDS": float,
    "SMX_CLOCK_TARGET_SECONDS": float,
    "SMX_MAX_CALIBRATION_ROUNDS": int,
    "SMX_DEADLINE_STRATEGY": str,
    "SMX_LINT_STRICT_WARNINGS": bool,
    "SMX_DEBUG_MODE": bool,
}
