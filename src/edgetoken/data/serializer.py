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
"""Data serializer port and the default JSON/UTF-8 adapter."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from edgetoken.data.values import Absent, Bytes, Structured, Text, TokenData
from edgetoken.kernel.exceptions import DataSerializationError


@runtime_checkable
class DataSerializer(Protocol):
    """Port for turning token data into the bytes fed to the MAC.

    ``decode`` is optional; serializers without it fall back to
    :func:`default_data_decoder` when embedded data is inspected.
    """

    def serialize(self, data: TokenData) -> bytes:
        """Serialize *data* into bytes."""
        ...


def default_data_serializer(data: TokenData) -> bytes:
    """Serialize *data* using the default rules.

    - Text: UTF-8 encoding of the string
    - Bytes: used directly
    - Structured: compact JSON with sorted keys, UTF-8 encoded; mapping keys
      become JSON strings first, sets become sorted lists, and objects JSON
      cannot represent fall back to their ``str()`` form
    - Absent: empty bytes

    Raises:
        DataSerializationError: If two keys of one mapping turn into the same
            JSON string, such as ``1`` and ``"1"``.
    """
    if isinstance(data, Text):
        return data.value.encode("utf-8")
    if isinstance(data, Bytes):
        return data.value
    if isinstance(data, Structured):
        return _compact_json(_canonical(data.value)).encode("utf-8")
    if isinstance(data, Absent):
        return b""
    raise TypeError(f"Unsupported token data: {type(data).__name__}")


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False, default=str)


def _json_key(key: Any) -> str:
    # Same text json uses for non-string keys.
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


def _canonical(value: Any) -> Any:
    """Rewrite *value* so that json can sort it and its text is stable across processes."""
    if isinstance(value, dict):
        result: dict[str, Any] = {}
        for key, item in value.items():
            name = _json_key(key)
            if name in result:
                raise DataSerializationError(
                    f"Mapping keys collide as JSON string {name!r}",
                    code="DUPLICATE_KEY",
                    context={"key": name},
                )
            result[name] = _canonical(item)
        return result
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_canonical(item) for item in value), key=_compact_json)
    return value


def default_data_decoder(raw: bytes) -> Any:
    """Decode bytes produced by :func:`default_data_serializer`.

    JSON is parsed when possible; anything else comes back as the decoded
    text. Never raises.
    """
    text = bytes(raw).decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


class JsonDataSerializer:
    """Default DataSerializer adapter (UTF-8 text, JSON, raw bytes)."""

    def serialize(self, data: TokenData) -> bytes:
        return default_data_serializer(data)

    def decode(self, raw: bytes) -> Any:
        return default_data_decoder(raw)

    def __repr__(self) -> str:
        return "JsonDataSerializer()"


class CallableDataSerializer:
    """DataSerializer adapter around plain functions.

    The wrapped functions receive and return application values, not
    :data:`TokenData` variants: ``serialize_fn`` gets the variant's ``value``
    (``None`` when absent).

    Args:
        serialize_fn: Maps an application value to bytes.
        decode_fn: Maps bytes back to an application value. Defaults to
            :func:`default_data_decoder`.
    """

    def __init__(
        self,
        serialize_fn: Callable[[Any], bytes],
        decode_fn: Callable[[bytes], Any] | None = None,
    ) -> None:
        self._serialize_fn = serialize_fn
        self._decode_fn = decode_fn

    def serialize(self, data: TokenData) -> bytes:
        return bytes(self._serialize_fn(data.value))

    def decode(self, raw: bytes) -> Any:
        if self._decode_fn is None:
            return default_data_decoder(raw)
        return self._decode_fn(raw)

    def __repr__(self) -> str:
        return f"CallableDataSerializer({self._serialize_fn!r}, {self._decode_fn!r})"


def resolve_decoder(serializer: DataSerializer) -> Callable[[bytes], Any]:
    """Return the serializer's ``decode`` method, falling back to the default decoder."""
    decode = getattr(serializer, "decode", None)
    return decode if callable(decode) else default_data_decoder
