"""Tests for reading AES-256 key material from configured key strings."""

import base64

import pytest

from fieldvault.infrastructure.security import (
    ImportedKey,
    KeyEncoding,
    KeyImportFailure,
    forgiving_base64_decode,
    import_key,
)
from tests.shared.fixtures.keys import (
    RAW_KEY,
    SECOND_KEY_B64,
    SECOND_KEY_BYTES,
    ZERO_KEY_B64,
    ZERO_KEY_BYTES,
)


class TestForgivingBase64Decode:
    """Tests for the lenient base64 decoder."""

    def test_decodes_padded_input(self):
        assert forgiving_base64_decode("aGVsbG8=") == b"hello"

    def test_padding_is_optional(self):
        assert forgiving_base64_decode("aGVsbG8") == b"hello"

    def test_ascii_whitespace_is_ignored(self):
        assert forgiving_base64_decode(" aGVs\nbG8=\t") == b"hello"

    def test_empty_input_decodes_to_nothing(self):
        assert forgiving_base64_decode("") == b""

    def test_rejects_remainder_of_one(self):
        """A single dangling character cannot encode any byte."""
        assert forgiving_base64_decode("aGVsb") is None

    def test_rejects_url_safe_alphabet(self):
        assert forgiving_base64_decode("ab-_") is None

    def test_rejects_padding_in_the_middle(self):
        assert forgiving_base64_decode("aG=sbG8=") is None

    def test_rejects_too_much_padding(self):
        assert forgiving_base64_decode("aGVsbA===") is None


class TestImportKey:
    """Tests for the base64-then-UTF-8 key import order."""

    def test_base64_key_of_32_bytes(self):
        result = import_key(ZERO_KEY_B64)

        assert isinstance(result, ImportedKey)
        assert result.material == ZERO_KEY_BYTES
        assert result.encoding == KeyEncoding.BASE64

    def test_base64_key_without_padding_or_with_line_breaks(self):
        unpadded = SECOND_KEY_B64.rstrip("=")
        wrapped = SECOND_KEY_B64[:20] + "\n" + SECOND_KEY_B64[20:]

        assert import_key(unpadded).material == SECOND_KEY_BYTES
        assert import_key(wrapped).material == SECOND_KEY_BYTES

    def test_raw_32_character_key(self):
        result = import_key(RAW_KEY)

        assert isinstance(result, ImportedKey)
        assert result.material == RAW_KEY.encode("utf-8")
        assert result.encoding == KeyEncoding.UTF8

    def test_base64_reading_wins_when_both_are_32_bytes(self):
        """A 44-char base64 string decoding to 32 bytes is never read raw."""
        result = import_key(ZERO_KEY_B64)
        assert result.encoding == KeyEncoding.BASE64

    def test_32_character_base64_alphabet_string_falls_back_to_utf8(self):
        """32 base64 chars decode to 24 bytes, so the raw reading is used."""
        key = "A" * 32
        result = import_key(key)

        assert isinstance(result, ImportedKey)
        assert result.encoding == KeyEncoding.UTF8
        assert result.material == key.encode("utf-8")

    @pytest.mark.parametrize(
        "key_string",
        [
            "short",
            "x" * 31,
            "x" * 33,
            base64.b64encode(bytes(16)).decode("ascii"),
        ],
    )
    def test_other_lengths_fail(self, key_string: str):
        result = import_key(key_string)

        assert isinstance(result, KeyImportFailure)
        assert result.utf8_length == len(key_string.encode("utf-8"))
        assert "need 32" in result.reason

    def test_failure_records_base64_length(self):
        result = import_key(base64.b64encode(bytes(16)).decode("ascii"))

        assert isinstance(result, KeyImportFailure)
        assert result.base64_length == 16

    def test_multibyte_characters_count_in_bytes(self):
        """16 two-byte characters are 32 bytes of UTF-8."""
        key = "é" * 16
        result = import_key(key)

        assert isinstance(result, ImportedKey)
        assert result.encoding == KeyEncoding.UTF8
        assert len(result.material) == 32

    def test_repr_hides_material(self):
        assert "AAAA" not in repr(import_key(ZERO_KEY_B64))
        assert "*****" in repr(import_key(ZERO_KEY_B64))
