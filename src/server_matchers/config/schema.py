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

"""Configuration schema definitions for server matchers.

This module defines the complete configuration schema using Pydantic models
for type safety, validation, and auto-completion support.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BenchmarkConfig(BaseModel):
    """Configuration for the adaptive benchmark calibration loop."""

    # Calibration stops once a batch takes at least this long
    min_sample_seconds: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Minimum duration a calibration batch must reach",
    )
    clock_target_seconds: float = Field(
        default=0.1,
        gt=0.0,
        le=60.0,
        description="Target duration of the full timed run",
    )
    max_calibration_rounds: int = Field(
        default=10,
        ge=1,
        le=15,
        description="Maximum number of batch-size growth rounds",
    )

    @field_validator("clock_target_seconds")
    @classmethod
    def validate_clock_target(cls, v, info):
        """Ensure the timed run is at least as long as a calibration sample."""
        if info.data:
            min_sample = info.data.get("min_sample_seconds", 0.01)
            if v < min_sample:
                raise ValueError(
                    f"clock_target_seconds ({v}) must not be less than min_sample_seconds ({min_sample})",
                )
        return v


class DeadlineConfig(BaseModel):
    """Configuration for the bounded-wait facility."""

    strategy: Literal["auto", "signal", "thread"] = Field(
        default="auto",
        description="How deadlines are enforced: SIGALRM timer, worker thread, or auto-detect",
    )


class LintConfig(BaseModel):
    """Configuration for WSGI conformance checks."""

    strict_warnings: bool = Field(
        default=False,
        description="Treat wsgiref WSGIWarning as a lint failure",
    )


class ConfigSchema(BaseModel):
    """Complete configuration schema for server matchers."""

    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
    deadline: DeadlineConfig = Field(default_factory=DeadlineConfig)
    lint: LintConfig = Field(default_factory=LintConfig)

    debug_mode: bool = Field(default=False, description="Enable debug logging")
    config_version: str = Field(default="1.0", description="Configuration schema version")
