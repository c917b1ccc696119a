"""
Report command handlers for mpris-status.

Handles: track, metadata
"""

import sys
from typing import List

from mpris_status.core.console import safe_print
from mpris_status.domain.metadata import MetadataEntry, MetadataStore, TypeTag

ARTIST_KEY = "xesam:artist"
TITLE_KEY = "xesam:title"


def format_entry(entry: MetadataEntry) -> str:
    """Format one entry as '<key>\\t<Type>: <value>'."""
    return f"{entry.key}\t{entry.type.label}: {entry.value}"


def track(store: MetadataStore) -> int:
    """
    Print "<artist> - <title>" with no trailing newline.

    Returns:
        Exit code (0 for success, 1 if artist or title is missing)
    """
    missing: List[str] = []
    values = {}
    for key in (ARTIST_KEY, TITLE_KEY):
        result = store.lookup(key, TypeTag.STRING)
        if result.found:
            values[key] = result.value
        else:
            missing.append(f"{key} ({result.status.value})")

    if missing:
        safe_print(
            f"ERROR: missing track metadata: {', '.join(missing)}",
            style="bold red",
            stderr=True,
        )
        return 1

    sys.stdout.write(f"{values[ARTIST_KEY]} - {values[TITLE_KEY]}")
    sys.stdout.flush()
    return 0


def metadata(store: MetadataStore) -> int:
    """Print every entry in insertion order, one per line."""
    for entry in store:
        print(format_entry(entry))
    return 0
