"""Metadata domain - decoded now-playing properties.

This domain handles:
- Tagged scalar values for the storable D-Bus wire types
- The bounded, insertion-ordered metadata store with typed lookup
- Flattening D-Bus variant values into store entries
"""

# Models
from .models import (
    LookupResult,
    LookupStatus,
    MetadataEntry,
    TaggedValue,
    TypeTag,
)

# Store
from .store import (
    DEFAULT_CAPACITY,
    RETRIEVABLE_TYPES,
    MetadataStore,
    StoreClosedError,
)

# Decoder
from .decoder import decode, decode_metadata, iter_leaves

__all__ = [
    # Models
    "LookupResult",
    "LookupStatus",
    "MetadataEntry",
    "TaggedValue",
    "TypeTag",
    # Store
    "DEFAULT_CAPACITY",
    "RETRIEVABLE_TYPES",
    "MetadataStore",
    "StoreClosedError",
    # Decoder
    "decode",
    "decode_metadata",
    "iter_leaves",
]
