"""Configuration management for unifeed."""

import logging
import os
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 512


@dataclass
class ParserConfig:
    """Configuration shared by every parser."""

    max_depth: int = DEFAULT_MAX_DEPTH
    # None leaves the unifeed loggers as the host application set them
    log_level: str | None = None


class Config:
    """Reads parser settings from environment variables."""

    MAX_DEPTH_VAR = "UNIFEED_MAX_DEPTH"
    LOG_LEVEL_VAR = "UNIFEED_LOG_LEVEL"

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.max_depth = os.getenv(self.MAX_DEPTH_VAR, str(DEFAULT_MAX_DEPTH))
        self.log_level = os.getenv(self.LOG_LEVEL_VAR)

    def get_parser_config(self) -> ParserConfig:
        """Get a validated parser configuration.

        Raises:
            ValueError: If the depth limit is not a positive integer or the
                log level is unknown
        """
        try:
            max_depth = int(self.max_depth)
        except ValueError:
            raise ValueError(
                f"{self.MAX_DEPTH_VAR} must be an integer: {self.max_depth!r}"
            )
        if max_depth <= 0:
            raise ValueError(f"{self.MAX_DEPTH_VAR} must be positive: {max_depth}")

        log_level = None
        if self.log_level:
            log_level = self.log_level.upper()
            if not isinstance(logging.getLevelName(log_level), int):
                raise ValueError(f"Unknown log level: {self.log_level}")

        return ParserConfig(max_depth=max_depth, log_level=log_level)
