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
"""Token options: immutable values merged from defaults and user overrides."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from edgetoken.codec.base64 import BASE64_ALPHABET
from edgetoken.data.serializer import (
    CallableDataSerializer,
    DataSerializer,
    JsonDataSerializer,
    default_data_serializer,
    resolve_decoder,
)
from edgetoken.data.values import to_token_data
from edgetoken.kernel.exceptions import ConfigurationError
from edgetoken.security.keys import DEFAULT_ALGORITHM

logger = structlog.get_logger("edgetoken.security.options")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_TOKEN_BYTE_LENGTH: int = 32
"""Number of random bytes in a token when none is configured."""

DEFAULT_SEPARATOR: str = "."
"""Character placed between token segments when none is configured."""


@dataclass(frozen=True)
class TokenOptions:
    """Everything needed to generate and verify tokens for one secret.

    Build instances with :func:`merge_options` so that values are validated.
    """

    secret: str | bytes = field(default="", repr=False)
    algorithm: str = DEFAULT_ALGORITHM
    token_byte_length: int = DEFAULT_TOKEN_BYTE_LENGTH
    separator: str = DEFAULT_SEPARATOR
    serializer: DataSerializer = field(default_factory=JsonDataSerializer)

    @property
    def data_decoder(self) -> Callable[[bytes], Any]:
        """Decoder used to inspect embedded data."""
        return resolve_decoder(self.serializer)


def default_options() -> TokenOptions:
    """Return a fresh default :class:`TokenOptions`."""
    return TokenOptions()


def _serialize_value(value: Any) -> bytes:
    return default_data_serializer(to_token_data(value))


def merge_options(base: TokenOptions | None = None, /, **overrides: Any) -> TokenOptions:
    """Merge *overrides* over *base* (or the defaults) and validate the result.

    Besides the :class:`TokenOptions` fields, ``data_serializer`` and
    ``data_decoder`` accept plain functions; they are wrapped into a single
    :class:`CallableDataSerializer`. ``None`` values are ignored.

    Raises:
        ConfigurationError: On unknown option names or invalid values.
    """
    base = base if base is not None else default_options()
    data_serializer = overrides.pop("data_serializer", None)
    data_decoder = overrides.pop("data_decoder", None)

    known = {f.name for f in dataclasses.fields(TokenOptions)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown token options: {', '.join(unknown)}",
            code="UNKNOWN_OPTION",
            context={"options": unknown},
        )

    values = {name: value for name, value in overrides.items() if value is not None}
    if data_serializer is not None or data_decoder is not None:
        if "serializer" in values:
            raise ConfigurationError(
                "Pass either 'serializer' or 'data_serializer'/'data_decoder', not both",
                code="CONFLICTING_SERIALIZER",
            )
        values["serializer"] = CallableDataSerializer(data_serializer or _serialize_value, data_decoder)

    return validate_options(dataclasses.replace(base, **values))


def validate_options(options: TokenOptions) -> TokenOptions:
    """Check *options*, returning a corrected copy where a fallback applies.

    A non-positive ``token_byte_length`` falls back to the default.

    Raises:
        ConfigurationError: If the separator or serializer is unusable.
    """
    length = options.token_byte_length
    if isinstance(length, bool) or not isinstance(length, int):
        raise ConfigurationError(
            f"token_byte_length must be an integer, got {type(length).__name__}",
            code="INVALID_TOKEN_BYTE_LENGTH",
        )
    if length <= 0:
        logger.warning(
            "token_byte_length_reset",
            configured=length,
            default=DEFAULT_TOKEN_BYTE_LENGTH,
        )
        options = dataclasses.replace(options, token_byte_length=DEFAULT_TOKEN_BYTE_LENGTH)

    separator = options.separator
    if not isinstance(separator, str) or len(separator) != 1:
        raise ConfigurationError(
            f"separator must be a single character, got {separator!r}",
            code="INVALID_SEPARATOR",
        )
    if separator.isspace() or separator in BASE64_ALPHABET:
        raise ConfigurationError(
            f"separator {separator!r} can appear inside an encoded segment",
            code="INVALID_SEPARATOR",
        )

    if not isinstance(options.serializer, DataSerializer):
        raise ConfigurationError(
            f"serializer must provide serialize(), got {type(options.serializer).__name__}",
            code="INVALID_SERIALIZER",
        )
    return options
