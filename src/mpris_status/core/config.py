"""
Configuration for mpris-status

All settings come from command-line flags; there is no config file.
"""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from mpris_status.domain.metadata.store import DEFAULT_CAPACITY

MPRIS_BUS_PREFIX = "org.mpris.MediaPlayer2"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class BusConfig:
    """Where the Metadata property is fetched from."""

    player: str = "spotify"  # Suffix of the MPRIS well-known name
    object_path: str = "/org/mpris/MediaPlayer2"
    player_interface: str = "org.mpris.MediaPlayer2.Player"
    property_name: str = "Metadata"

    @property
    def bus_name(self) -> str:
        return f"{MPRIS_BUS_PREFIX}.{self.player}"


@dataclass
class StoreConfig:
    """Configuration for the metadata store."""

    capacity: int = DEFAULT_CAPACITY

    def validate(self) -> None:
        """Validate store configuration values.

        Raises:
            ValueError: If capacity is not positive
        """
        if self.capacity < 1:
            raise ValueError(f"Store capacity must be at least 1, got {self.capacity}")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"  # stderr sink level
    log_file: Optional[Path] = None  # Optional rotating file sink


@dataclass
class Config:
    """Main configuration object."""

    bus: BusConfig = field(default_factory=BusConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        """Build configuration from parsed command-line arguments."""
        config = cls()

        if getattr(args, "player", None):
            config.bus = BusConfig(player=args.player)

        capacity = getattr(args, "capacity", None)
        if capacity is not None:
            config.store = StoreConfig(capacity=capacity)
            config.store.validate()

        level = getattr(args, "log_level", None)
        log_file = getattr(args, "log_file", None)
        config.logging = LoggingConfig(
            level=(level or config.logging.level).upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )

        return config
