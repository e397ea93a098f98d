"""
Sequence encoding tests.

Tests the concatenation law for sequences and the accepted ambiguity of
encodings without length prefixes.
"""

import pytest

from simple_hash import I16, U8, U16, U32, digest, encode


class TestConcatenationLaw:
    """Test that sequence encoding adds no framing."""

    @pytest.mark.unit
    @pytest.mark.parametrize("a, b", [
        (U8(1), U8(2)),
        (U16(0x0102), U32(7)),
        ("ab", "cd"),
        (True, I16(-2)),
        ([U8(1), U8(2)], [U8(3)]),
        (b"\x00", "z"),
    ])
    def test_pair_encodes_as_concatenation(self, a, b):
        """encode([a, b]) is encode(a) followed by encode(b)."""
        assert encode([a, b]) == encode(a) + encode(b)

    @pytest.mark.unit
    def test_record_elements(self, foo, foo_bytes):
        """Records inside sequences concatenate like any other element."""
        assert encode([foo, foo]) == foo_bytes + foo_bytes

    @pytest.mark.unit
    def test_empty_sequence(self):
        """An empty sequence contributes no bytes."""
        assert encode([]) == b""
        assert encode(()) == b""

    @pytest.mark.unit
    def test_tuple_and_list_agree(self):
        """Sequence kind is not encoded, only the elements."""
        assert encode((U8(1), U8(2))) == encode([U8(1), U8(2)])

    @pytest.mark.unit
    def test_element_order_matters(self):
        """Sequences are visited in order."""
        assert digest([U8(1), U8(2)]) != digest([U8(2), U8(1)])

    @pytest.mark.unit
    def test_nested_sequences(self):
        assert encode([[U8(1)], [U8(2), U8(3)], []]) == b"\x01\x02\x03"


class TestBoundaryAmbiguity:
    """
    Element boundaries are not encoded.

    Distinct sequences whose elements concatenate to the same bytes share a
    digest. This is the documented behaviour of the encoding.
    """

    @pytest.mark.unit
    def test_split_text_collides(self):
        """["a", "b"], ["ab"] and "ab" share one encoding."""
        assert digest(["a", "b"]) == digest(["ab"])
        assert digest(["a", "b"]) == digest("ab")

    @pytest.mark.unit
    def test_regrouped_text_collides(self):
        assert encode(["ab", "c"]) == encode(["a", "bc"])

    @pytest.mark.unit
    def test_regrouped_nested_sequences_collide(self):
        assert digest([[U8(1)], [U8(2), U8(3)]]) == digest([[U8(1), U8(2)], [U8(3)]])

    @pytest.mark.unit
    def test_width_change_collides(self):
        """A u16 and two u8 with the same bytes are indistinguishable."""
        assert encode(U16(0x0201)) == encode([U8(1), U8(2)])
