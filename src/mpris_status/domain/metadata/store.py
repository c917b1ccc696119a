"""
Metadata store - bounded, insertion-ordered collection of decoded entries.

Keys may repeat (arrays are flattened under their parent key) and are never
merged. Lookups return the first entry for a key.
"""

from typing import Iterator, List, Optional

from loguru import logger

from .models import (
    LookupResult,
    MetadataEntry,
    ScalarValue,
    TaggedValue,
    TypeTag,
)

DEFAULT_CAPACITY = 100

# Types the lookup path knows how to hand back. DOUBLE is storable but a
# lookup for it reports NotFound.
RETRIEVABLE_TYPES = frozenset({TypeTag.STRING, TypeTag.INT32, TypeTag.UINT64})


class StoreClosedError(RuntimeError):
    """Raised when a store is used after close()."""


class MetadataStore:
    """Insertion-ordered metadata entries with a fixed capacity.

    Use as a context manager so the entries are released on every exit path:

        with MetadataStore() as store:
            decode_metadata(reply, store)
            artist = store.get_string("xesam:artist")
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Store capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._entries: List[MetadataEntry] = []
        self._closed = False

    def __enter__(self) -> "MetadataStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        self._check_open()
        return len(self._entries)

    def __iter__(self) -> Iterator[MetadataEntry]:
        self._check_open()
        return iter(list(self._entries))

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"size={len(self._entries)}"
        return f"MetadataStore({state}, capacity={self._capacity})"

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_full(self) -> bool:
        self._check_open()
        return len(self._entries) >= self._capacity

    def insert(self, key: str, tag: TypeTag, value: ScalarValue) -> bool:
        """
        Append a (key, tag, value) entry.

        String values are copied up to the first NUL character.

        Args:
            key: Metadata key (e.g. "xesam:title")
            tag: Wire type of the value
            value: Python scalar matching the tag

        Returns:
            True if stored, False if the store is full

        Raises:
            TypeError: If value does not match tag
            ValueError: If an integer value is out of range for tag
        """
        if tag is TypeTag.STRING and isinstance(value, str):
            value = value.split("\x00", 1)[0]
        return self.add(key, TaggedValue(tag, value))

    def add(self, key: str, value: TaggedValue) -> bool:
        """Append an already tagged value. Same contract as insert()."""
        self._check_open()
        if len(self._entries) >= self._capacity:
            logger.warning(
                f"Metadata store full ({self._capacity} entries), dropping '{key}'"
            )
            return False

        self._entries.append(MetadataEntry(key=str(key), value=value))
        return True

    def lookup(self, key: str, expected_type: TypeTag) -> LookupResult:
        """
        Find the first entry for key and return its value if the type matches.

        Only the first entry for a key is considered; a later duplicate with
        the expected type is never reached.

        Returns:
            LookupResult with status FOUND, NOT_FOUND or WRONG_TYPE
        """
        self._check_open()
        for entry in self._entries:
            if entry.key != key:
                continue
            if entry.type is not expected_type:
                return LookupResult.wrong_type()
            if entry.type not in RETRIEVABLE_TYPES:
                logger.debug(f"'{key}' holds a {entry.type.label}, which lookup does not return")
                return LookupResult.miss()
            return LookupResult.hit(entry.value.value)

        return LookupResult.miss()

    def get_string(self, key: str) -> Optional[str]:
        """Return the string stored under key, or None unless lookup finds one."""
        result = self.lookup(key, TypeTag.STRING)
        return result.value if result.found else None

    def close(self) -> None:
        """Release every entry. The store can't be used afterwards."""
        if self._closed:
            return
        logger.debug(f"Releasing {len(self._entries)} metadata entries")
        self._entries.clear()
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise StoreClosedError("Metadata store has been closed")
