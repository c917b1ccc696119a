"""Session bus access for mpris-status.

Fetches the MPRIS Metadata property from a running media player.
"""

from .client import BusError, PlayerNotRunningError, fetch_metadata

__all__ = ["BusError", "PlayerNotRunningError", "fetch_metadata"]
