"""Report commands that read a populated metadata store."""

from .report import format_entry, metadata, track

# Command name -> handler(store) -> exit code
COMMANDS = {
    "track": track,
    "metadata": metadata,
}

__all__ = ["COMMANDS", "format_entry", "metadata", "track"]
