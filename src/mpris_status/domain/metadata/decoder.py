"""
Variant decoder - flattens D-Bus variant values into metadata entries.

Scalars become one entry each. Arrays are unrolled recursively and every
element is stored under the key of the array it came from. Any other wire
type (booleans, object paths, dictionaries, nested variants, ...) is dropped.
"""

from typing import Any, Iterator, Mapping, Tuple

from dbus_next import Variant
from dbus_next.signature import SignatureType
from loguru import logger

from .models import TaggedValue, TypeTag
from .store import MetadataStore

ARRAY_TOKEN = "a"


def iter_leaves(
    key: str, signature_type: SignatureType, value: Any
) -> Iterator[Tuple[str, TaggedValue]]:
    """
    Walk a value tree and yield its scalar leaves.

    Args:
        key: Key every leaf is reported under
        signature_type: Parsed D-Bus type of value
        value: Unmarshalled value (str, int, float, list, ...)

    Yields:
        (key, TaggedValue) pairs in traversal order
    """
    token = signature_type.token
    tag = TypeTag.from_token(token)

    if tag is not None:
        if tag is TypeTag.DOUBLE:
            value = float(value)
        yield key, TaggedValue(tag, value)
    elif token == ARRAY_TOKEN:
        element_type = signature_type.children[0]
        elements = value.items() if isinstance(value, Mapping) else value
        for element in elements:
            yield from iter_leaves(key, element_type, element)
    else:
        logger.info(f"Unhandled variant type '{token}' for '{key}'")


def decode(variant: Variant, key: str, store: MetadataStore) -> int:
    """Flatten one dictionary entry into the store.

    Returns:
        Number of entries inserted
    """
    inserted = 0
    for leaf_key, tagged in iter_leaves(key, variant.type, variant.value):
        if store.insert(leaf_key, tagged.tag, tagged.value):
            inserted += 1
    return inserted


def decode_metadata(metadata: Mapping[str, Variant], store: MetadataStore) -> int:
    """Flatten every entry of a Metadata reply dictionary into the store."""
    inserted = 0
    for key, variant in metadata.items():
        inserted += decode(variant, key, store)

    logger.debug(f"Decoded {len(metadata)} metadata keys into {inserted} entries")
    return inserted
