import hashlib

from mcp_sha256.encoding import encode_text, to_bytes
from mcp_sha256.sha256 import Sha256


class TestEncodeText:
    """Text packing used for messages and keys."""

    def test_ascii_passthrough(self):
        assert encode_text("abc") == b"abc"

    def test_two_byte_range(self):
        assert encode_text("\u00e9") == b"\xc3\xa9"
        assert encode_text("\u07ff") == b"\xdf\xbf"

    def test_three_byte_range(self):
        assert encode_text("\u20ac") == b"\xe2\x82\xac"
        assert encode_text("\uffff") == b"\xef\xbf\xbf"

    def test_astral_code_point(self):
        assert encode_text("\U0001F680") == "\U0001F680".encode("utf-8")

    def test_matches_utf8_for_well_formed_text(self):
        text = "Hello, 世界! \U0001F680 ñ"
        assert encode_text(text) == text.encode("utf-8")

    def test_surrogate_pair_is_combined(self):
        # explicit UTF-16 halves of U+1F680
        assert encode_text("\ud83d\ude80") == "\U0001F680".encode("utf-8")

    def test_unmatched_high_surrogate_consumes_next_char(self):
        # 'A' is folded in as the low half: 0x10000 + (0x3d << 10 | 0x41)
        out = encode_text("\ud83dA!")
        code = 0x10000 + ((0xD83D & 0x3FF) << 10 | (ord("A") & 0x3FF))
        assert out == chr(code).encode("utf-8") + b"!"

    def test_trailing_lone_surrogate(self):
        out = encode_text("x\ud800")
        assert out == b"x" + chr(0x10000).encode("utf-8")
        assert len(out) == 5

    def test_lone_surrogate_before_astral_char(self):
        # U+1F680 is read as its halves D83D DE80; the first half pairs with
        # the lone surrogate and the second half trails on its own
        out = encode_text("\ud83d\U0001F680")
        first = 0x10000 + ((0xD83D & 0x3FF) << 10 | (0xD83D & 0x3FF))
        second = 0x10000 + ((0xDE80 & 0x3FF) << 10)
        assert out == chr(first).encode("utf-8") + chr(second).encode("utf-8")
        assert len(out) == 8

    def test_astral_char_after_lone_surrogate_is_not_dropped(self):
        assert encode_text("\ud800\U0001F680x") != encode_text("\ud800x")

    def test_lone_low_surrogate(self):
        out = encode_text("\udc00")
        assert len(out) == 4

    def test_digest_of_lone_surrogate_does_not_raise(self):
        assert len(Sha256().update("\ud800").hex()) == 64


class TestToBytes:
    def test_passthrough_types(self):
        assert to_bytes(b"ab") == b"ab"
        assert to_bytes(bytearray(b"ab")) == b"ab"
        assert to_bytes(memoryview(b"ab")) == b"ab"

    def test_int_sequence(self):
        assert to_bytes([0, 127, 255]) == b"\x00\x7f\xff"
        assert to_bytes((1, 2)) == b"\x01\x02"

    def test_out_of_range_ints_keep_low_byte(self):
        assert to_bytes([256, 257, -1]) == b"\x00\x01\xff"

    def test_text(self):
        assert to_bytes("é") == "é".encode("utf-8")

    def test_text_digest_matches_hashlib(self):
        text = "Grüße, 世界"
        assert Sha256().update(text).hex() == hashlib.sha256(text.encode("utf-8")).hexdigest()
