# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the strict base64 segment codec."""

from __future__ import annotations

import pytest

from edgetoken.codec.base64 import BASE64_ALPHABET, decode_base64, encode_base64
from edgetoken.kernel.exceptions import EncodingError, InvalidEncoding


class TestEncodeBase64:
    def test_empty_bytes_encode_to_empty_string(self):
        assert encode_base64(b"") == ""

    def test_standard_padded_output(self):
        assert encode_base64(b"hello") == "aGVsbG8="

    def test_output_stays_inside_alphabet(self):
        encoded = encode_base64(bytes(range(256)))
        assert set(encoded) <= BASE64_ALPHABET
        assert "." not in encoded


class TestDecodeBase64:
    def test_empty_string_decodes_to_empty_bytes(self):
        assert decode_base64("") == b""

    def test_round_trip_all_byte_values(self):
        raw = bytes(range(256))
        assert decode_base64(encode_base64(raw)) == raw

    @pytest.mark.parametrize(
        "text",
        [
            "aGVs$G8=",  # outside the alphabet
            "aGVsbG8",  # missing padding
            "aGVs bG8=",  # embedded whitespace
            "aGVsbG8-",  # url-safe alphabet
            "é",
        ],
    )
    def test_malformed_input_raises(self, text: str):
        with pytest.raises(InvalidEncoding) as exc_info:
            decode_base64(text)
        assert exc_info.value.code == "INVALID_ENCODING"

    def test_non_canonical_trailing_bits_rejected(self):
        # "AA==" is the canonical form of b"\x00"; "AB==" sets unused bits.
        assert decode_base64("AA==") == b"\x00"
        with pytest.raises(InvalidEncoding) as exc_info:
            decode_base64("AB==")
        assert exc_info.value.code == "NON_CANONICAL_ENCODING"

    def test_invalid_encoding_is_an_encoding_error(self):
        with pytest.raises(EncodingError):
            decode_base64("!!!!")
