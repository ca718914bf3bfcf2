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
"""Token generation and verification.

A token is a separator-joined list of base64 segments::

    [data.][timestamp.]random.signature

The data segment appears only in "show data" mode with non-empty data, the
timestamp segment only in timed mode. The signature is the HMAC of::

    random || data || timestamp

Data bytes are always part of the MAC input, even when they are not shown,
so a hidden-data token still binds the expected data. Verification returns a
plain boolean and never raises on a submitted token.
"""

from __future__ import annotations

import re
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from edgetoken.codec.base64 import decode_base64, encode_base64
from edgetoken.data.serializer import DataSerializer
from edgetoken.data.values import ABSENT, Structured, TokenData
from edgetoken.kernel.exceptions import EncodingError
from edgetoken.security.keys import HmacKey

logger = structlog.get_logger("edgetoken.security.token")

Clock = Callable[[], int]

# Epoch milliseconds fit comfortably in 20 digits.
_TIMESTAMP_RE = re.compile(r"-?[0-9]{1,20}")


def epoch_millis() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class TokenParts:
    """Raw segments of a submitted token, before decoding."""

    random: str
    signature: str
    data: str | None = None
    timestamp: str | None = None


def split_token(submitted: str, separator: str, show_data: bool, timed: bool) -> TokenParts | None:
    """Split *submitted* into the segments implied by the mode.

    Returns ``None`` when the number of segments does not match exactly.
    """
    parts = [part.strip() for part in submitted.split(separator)]
    expected = 2 + int(show_data) + int(timed)
    if len(parts) != expected:
        return None

    idx = 0
    data = timestamp = None
    if show_data:
        data = parts[idx]
        idx += 1
    if timed:
        timestamp = parts[idx]
        idx += 1
    return TokenParts(random=parts[idx], signature=parts[idx + 1], data=data, timestamp=timestamp)


def _serialize(serializer: DataSerializer, data: TokenData | None) -> bytes:
    return serializer.serialize(ABSENT if data is None else data)


def generate_token(
    key: HmacKey,
    data: TokenData | None,
    show_data: bool,
    timed: bool,
    token_byte_length: int,
    separator: str,
    serializer: DataSerializer,
    clock: Clock = epoch_millis,
) -> str:
    """Generate a signed token.

    Args:
        key: HMAC key used for signing.
        data: Data bound to the token (``None`` binds nothing).
        show_data: Embed the serialized data as the first segment.
        timed: Embed the issue time so the token can expire.
        token_byte_length: Number of random bytes in the token.
        separator: Character placed between segments.
        serializer: Turns data and the timestamp into bytes.
        clock: Source of the current time in epoch milliseconds.

    Raises:
        SigningError: If the MAC engine fails.
        DataSerializationError: If the default serializer cannot represent
            *data*. Custom serializers may raise their own errors.
    """
    parts: list[str] = []

    random_bytes = secrets.token_bytes(token_byte_length)
    data_bytes = _serialize(serializer, data)
    if show_data and data_bytes:
        parts.append(encode_base64(data_bytes))

    timestamp_bytes = serializer.serialize(Structured(clock())) if timed else b""
    if timed:
        parts.append(encode_base64(timestamp_bytes))

    signature = key.sign(random_bytes + data_bytes + timestamp_bytes)

    parts.append(encode_base64(random_bytes))
    parts.append(encode_base64(signature))
    return separator.join(parts)


def parse_timestamp(raw: bytes) -> int | None:
    """Parse a decoded timestamp segment, or return ``None`` if it is not an integer."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if not _TIMESTAMP_RE.fullmatch(text):
        return None
    return int(text)


def _reject(reason: str) -> bool:
    logger.debug("token_rejected", reason=reason)
    return False


def verify_token(
    key: HmacKey,
    submitted: str,
    data: TokenData | None,
    show_data: bool,
    timed: bool,
    separator: str,
    serializer: DataSerializer,
    max_age_ms: int | None = None,
    clock: Clock = epoch_millis,
) -> bool:
    """Verify a submitted token against the expected data.

    Args:
        key: HMAC key used for verification.
        submitted: Untrusted token text.
        data: The data the token is expected to be bound to.
        show_data: The token carries a data segment.
        timed: The token carries a timestamp segment.
        separator: Character placed between segments.
        serializer: Turns data and the timestamp into bytes.
        max_age_ms: Reject timed tokens older than this many milliseconds.
        clock: Source of the current time in epoch milliseconds.

    Returns:
        ``True`` if the token is authentic, bound to *data* and not expired;
        ``False`` for every other outcome.
    """
    if not isinstance(submitted, str):
        return _reject("not_a_string")
    parts = split_token(submitted, separator, show_data, timed)
    if parts is None:
        return _reject("segment_count")

    try:
        random_bytes = decode_base64(parts.random)
    except EncodingError:
        return _reject("random_encoding")

    try:
        expected_bytes = _serialize(serializer, data)
    except Exception:
        logger.warning("expected_data_serialization_failed", exc_info=True)
        return False

    if show_data:
        if not parts.data:
            return _reject("data_missing")
        try:
            embedded_bytes = decode_base64(parts.data)
        except EncodingError:
            return _reject("data_encoding")
        if not secrets.compare_digest(embedded_bytes, expected_bytes):
            return _reject("data_mismatch")

    combined = random_bytes + expected_bytes

    token_time: int | None = None
    if timed:
        if not parts.timestamp:
            return _reject("timestamp_missing")
        try:
            token_time = parse_timestamp(decode_base64(parts.timestamp))
        except EncodingError:
            return _reject("timestamp_encoding")
        if token_time is None:
            return _reject("timestamp_invalid")
        try:
            combined += serializer.serialize(Structured(token_time))
        except Exception:
            logger.warning("timestamp_serialization_failed", exc_info=True)
            return False

    try:
        signature = decode_base64(parts.signature)
    except EncodingError:
        return _reject("signature_encoding")

    try:
        verified = key.verify(combined, signature)
    except (TypeError, ValueError):
        return _reject("mac_error")
    if not verified:
        return _reject("bad_signature")

    if max_age_ms is not None and token_time is not None and clock() - token_time > max_age_ms:
        return _reject("expired")

    return True
