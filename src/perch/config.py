"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation, with every field
defaulted. Override what you need::

    config = AppConfig(port=3000, cache_max_age=60)
"""

from dataclasses import dataclass
from pathlib import Path

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation."""

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False  # forces debug logging, overriding log_level

    # Conditional caching
    cache_max_age: int = 3600  # Cache-Control: max-age=<seconds>

    # Static files (``perch serve``)
    static_dir: str | Path = "."
    verify_static: bool = True  # re-stat files before answering 304

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.cache_max_age < 0:
            msg = f"cache_max_age must be >= 0, got {self.cache_max_age}"
            raise ValueError(msg)
        if self.log_level.lower() not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            raise ValueError(msg)

    @property
    def effective_log_level(self) -> str:
        """The level logging and uvicorn actually run at."""
        return "debug" if self.debug else self.log_level.lower()
