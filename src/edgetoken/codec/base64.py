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
"""Standard base64 codec for token segments.

Decoding is strict: only the standard alphabet with correct padding is
accepted, and the text must be the canonical encoding of the bytes it
decodes to. Two different strings therefore never decode to the same bytes,
so altering any character of a segment is always detectable.
"""

from __future__ import annotations

import base64
import binascii
import string

from edgetoken.kernel.exceptions import InvalidEncoding

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
BASE64_ALPHABET: frozenset[str] = frozenset(string.ascii_letters + string.digits + "+/=")
"""Every character that can appear in encoded output, padding included."""


def encode_base64(data: bytes) -> str:
    """Encode *data* as standard, padded base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_base64(text: str) -> bytes:
    """Decode canonical base64 *text* back into bytes.

    An empty string decodes to ``b""``.

    Raises:
        InvalidEncoding: If *text* uses characters outside the alphabet, has
            bad padding or length, or is not the canonical form of its bytes.
    """
    if not text:
        return b""
    try:
        raw = base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncoding(
            "Invalid base64 string provided for decoding",
            code="INVALID_ENCODING",
        ) from exc

    # Non-zero trailing bits before the padding decode silently otherwise.
    if encode_base64(raw) != text:
        raise InvalidEncoding(
            "Non-canonical base64 string provided for decoding",
            code="NON_CANONICAL_ENCODING",
        )
    return raw
