"""Tests for flattening D-Bus variants into the metadata store."""

import pytest
from dbus_next import Variant
from dbus_next.signature import SignatureTree

from mpris_status.domain.metadata.decoder import decode, decode_metadata, iter_leaves
from mpris_status.domain.metadata.models import LookupStatus, TaggedValue, TypeTag
from mpris_status.domain.metadata.store import MetadataStore


@pytest.fixture
def store():
    """Create an empty store and close it after the test."""
    with MetadataStore() as s:
        yield s


def leaves(key, variant):
    return list(iter_leaves(key, variant.type, variant.value))


class TestIterLeaves:
    """Tests for the pure traversal."""

    @pytest.mark.parametrize(
        "signature, value, tag",
        [
            ("s", "Radiohead", TypeTag.STRING),
            ("i", -3, TypeTag.INT32),
            ("t", 264000000, TypeTag.UINT64),
            ("d", 0.75, TypeTag.DOUBLE),
        ],
    )
    def test_scalar_yields_one_leaf(self, signature, value, tag):
        assert leaves("k", Variant(signature, value)) == [("k", TaggedValue(tag, value))]

    def test_array_yields_leaf_per_element_under_parent_key(self):
        result = leaves("xesam:artist", Variant("as", ["Thom", "Jonny", "Ed"]))
        assert result == [
            ("xesam:artist", TaggedValue(TypeTag.STRING, "Thom")),
            ("xesam:artist", TaggedValue(TypeTag.STRING, "Jonny")),
            ("xesam:artist", TaggedValue(TypeTag.STRING, "Ed")),
        ]

    def test_nested_arrays_are_flattened_in_order(self):
        result = leaves("k", Variant("aai", [[1, 2], [], [3]]))
        assert [tagged.value for _, tagged in result] == [1, 2, 3]
        assert {key for key, _ in result} == {"k"}

    def test_empty_array_yields_nothing(self):
        assert leaves("xesam:genre", Variant("as", [])) == []

    def test_integer_double_is_coerced(self):
        double_type = SignatureTree("d").types[0]
        assert list(iter_leaves("k", double_type, 1)) == [
            ("k", TaggedValue(TypeTag.DOUBLE, 1.0))
        ]

    @pytest.mark.parametrize(
        "signature, value",
        [
            ("b", True),
            ("o", "/org/mpris/MediaPlayer2/Track/1"),
            ("g", "as"),
            ("x", -1),
            ("u", 1),
            ("ay", b"\x01\x02"),
            ("a{sv}", {"nested": Variant("s", "dict")}),
            ("v", Variant("s", "inner")),
            ("(si)", ["struct", 1]),
        ],
    )
    def test_unsupported_types_are_dropped(self, signature, value):
        assert leaves("k", Variant(signature, value)) == []

    def test_array_of_variants_is_dropped(self):
        assert leaves("k", Variant("av", [Variant("s", "a"), Variant("i", 1)])) == []


class TestDecode:
    """Tests for inserting decoded leaves into the store."""

    def test_decoded_string_is_cut_at_nul(self, store):
        assert decode(Variant("s", "Airbag\x00garbage"), "xesam:title", store) == 1
        assert store.get_string("xesam:title") == "Airbag"

    def test_array_of_k_scalars_makes_k_entries(self, store):
        inserted = decode(Variant("as", ["Thom", "Jonny", "Ed"]), "xesam:artist", store)
        assert inserted == 3
        assert len(store) == 3
        assert [(e.key, e.value.value) for e in store] == [
            ("xesam:artist", "Thom"),
            ("xesam:artist", "Jonny"),
            ("xesam:artist", "Ed"),
        ]
        assert store.get_string("xesam:artist") == "Thom"

    def test_unsupported_type_leaves_siblings_intact(self, store):
        reply = {
            "xesam:artist": Variant("as", ["Radiohead"]),
            "mpris:trackid": Variant("o", "/com/spotify/track/abc"),
            "xesam:userRating": Variant("b", False),
            "xesam:title": Variant("s", "Karma Police"),
        }
        assert decode_metadata(reply, store) == 2
        assert [e.key for e in store] == ["xesam:artist", "xesam:title"]
        assert store.get_string("xesam:title") == "Karma Police"

    def test_decode_stops_inserting_at_capacity(self):
        with MetadataStore(capacity=2) as small:
            inserted = decode(Variant("at", [1, 2, 3, 4]), "k", small)
            assert inserted == 2
            assert [e.value.value for e in small] == [1, 2]

    def test_spotify_style_reply(self, store):
        reply = {
            "mpris:trackid": Variant("s", "spotify:track:63OQupATfueTdZMWTxW03A"),
            "mpris:length": Variant("t", 264066000),
            "mpris:artUrl": Variant("s", "https://i.scdn.co/image/ab67616d"),
            "xesam:album": Variant("s", "OK Computer"),
            "xesam:albumArtist": Variant("as", ["Radiohead"]),
            "xesam:artist": Variant("as", ["Radiohead"]),
            "xesam:autoRating": Variant("d", 0.79),
            "xesam:discNumber": Variant("i", 1),
            "xesam:title": Variant("s", "Karma Police"),
            "xesam:trackNumber": Variant("i", 6),
            "xesam:url": Variant("s", "https://open.spotify.com/track/63OQupATfueTdZMWTxW03A"),
        }
        assert decode_metadata(reply, store) == 11
        assert store.lookup("mpris:length", TypeTag.UINT64).value == 264066000
        assert store.lookup("xesam:trackNumber", TypeTag.INT32).value == 6
        assert store.lookup("xesam:autoRating", TypeTag.DOUBLE).status is LookupStatus.NOT_FOUND
        assert store.get_string("xesam:artist") == "Radiohead"
