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
"""EdgeToken — generate and verify signed anti-forgery tokens.

The facade wires one :class:`TokenOptions` and its derived key to the token
codec and exposes four modes, each with a generate/verify pair:

========================  ==============  =========
mode                      data segment    timestamp
========================  ==============  =========
plain                     no              no
with data                 yes             no
timed                     no              yes
with data, timed          yes             yes
========================  ==============  =========

Data passed to the plain and timed variants is still bound to the token; it
is only hidden from the token text.
"""

from __future__ import annotations

from typing import Any

import structlog

from edgetoken.codec.base64 import decode_base64
from edgetoken.config.properties.token import TokenProperties
from edgetoken.core.config import Config
from edgetoken.data.values import TokenData, normalize, to_token_data
from edgetoken.kernel.exceptions import EncodingError
from edgetoken.security.keys import HmacKey, derive_key
from edgetoken.security.options import TokenOptions, merge_options, validate_options
from edgetoken.security.token_codec import (
    Clock,
    epoch_millis,
    generate_token,
    parse_timestamp,
    split_token,
    verify_token,
)

logger = structlog.get_logger("edgetoken.security")


class EdgeToken:
    """Token generator/verifier bound to one secret and hash algorithm.

    The HMAC key is derived once, at construction. Instances hold no mutable
    state and can be shared freely between threads.

    Args:
        options: Validated token options (see :func:`merge_options`).
        clock: Source of the current time in epoch milliseconds.

    Raises:
        ConfigurationError: If *options* are invalid.
        KeyDerivationError: If the secret or algorithm cannot be used.
    """

    def __init__(self, options: TokenOptions, *, clock: Clock = epoch_millis) -> None:
        self._options = validate_options(options)
        self._key: HmacKey = derive_key(self._options.secret, self._options.algorithm)
        self._clock = clock
        logger.debug(
            "edge_token_ready",
            algorithm=self._key.algorithm,
            token_byte_length=self._options.token_byte_length,
        )

    @classmethod
    def from_config(cls, config: Config, *, clock: Clock = epoch_millis, **overrides: Any) -> EdgeToken:
        """Build a facade from the ``edgetoken.token`` section of *config*.

        Keyword *overrides* win over configured values.
        """
        props = config.bind(TokenProperties)
        options = merge_options(
            secret=props.secret,
            algorithm=props.algorithm,
            token_byte_length=props.token_byte_length,
            separator=props.separator,
        )
        return cls(merge_options(options, **overrides), clock=clock)

    @property
    def options(self) -> TokenOptions:
        return self._options

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _prepare(data: Any) -> TokenData:
        return normalize(to_token_data(data))

    def _generate(self, data: Any, with_data: bool, timed: bool) -> str:
        token_data = self._prepare(data)
        return generate_token(
            self._key,
            token_data,
            with_data and not token_data.is_empty_like(),
            timed,
            self._options.token_byte_length,
            self._options.separator,
            self._options.serializer,
            clock=self._clock,
        )

    def _verify(
        self,
        submitted: str,
        data: Any,
        with_data: bool,
        timed: bool,
        max_age_ms: int | None = None,
    ) -> bool:
        token_data = self._prepare(data)
        return verify_token(
            self._key,
            submitted,
            token_data,
            with_data and not token_data.is_empty_like(),
            timed,
            self._options.separator,
            self._options.serializer,
            max_age_ms,
            clock=self._clock,
        )

    # -- plain --------------------------------------------------------------

    def generate(self, data: Any = None) -> str:
        """Generate a token without embedded data and without a timestamp."""
        return self._generate(data, with_data=False, timed=False)

    def verify(self, submitted: str, data: Any = None) -> bool:
        """Verify a token produced by :meth:`generate`."""
        return self._verify(submitted, data, with_data=False, timed=False)

    # -- with data ----------------------------------------------------------

    def generate_with_data(self, data: Any) -> str:
        """Generate a token that carries *data* as its first segment.

        Empty-like data produces the same two-segment shape as :meth:`generate`.
        """
        return self._generate(data, with_data=True, timed=False)

    def verify_with_data(self, submitted: str, data: Any) -> bool:
        """Verify a token produced by :meth:`generate_with_data`."""
        return self._verify(submitted, data, with_data=True, timed=False)

    # -- timed --------------------------------------------------------------

    def generate_timed(self, data: Any = None) -> str:
        """Generate a token that records its issue time."""
        return self._generate(data, with_data=False, timed=True)

    def verify_timed(self, submitted: str, data: Any = None, max_age_ms: int | None = None) -> bool:
        """Verify a token produced by :meth:`generate_timed`.

        Args:
            submitted: Token text.
            data: Data the token is expected to be bound to.
            max_age_ms: Reject tokens older than this; ``None`` disables expiry.
        """
        return self._verify(submitted, data, with_data=False, timed=True, max_age_ms=max_age_ms)

    # -- with data, timed ---------------------------------------------------

    def generate_with_data_timed(self, data: Any) -> str:
        """Generate a token that carries *data* and records its issue time."""
        return self._generate(data, with_data=True, timed=True)

    def verify_with_data_timed(self, submitted: str, data: Any, max_age_ms: int | None = None) -> bool:
        """Verify a token produced by :meth:`generate_with_data_timed`."""
        return self._verify(submitted, data, with_data=True, timed=True, max_age_ms=max_age_ms)

    # -- inspection ---------------------------------------------------------

    def has_data_segment(self, token: str, *, timed: bool = False) -> bool:
        """Return ``True`` if *token* carries a non-empty data segment."""
        parts = split_token(token, self._options.separator, True, timed)
        return parts is not None and bool(parts.data)

    def read_data(self, token: str, *, timed: bool = False) -> Any:
        """Return the data embedded in *token*, decoded with the configured decoder.

        The token is NOT verified; never trust the result without calling the
        matching verify method. Returns ``None`` if the token has no data
        segment; use :meth:`has_data_segment` to tell that apart from data that
        decodes to ``None``.
        """
        parts = split_token(token, self._options.separator, True, timed)
        if parts is None or not parts.data:
            return None
        try:
            raw = decode_base64(parts.data)
        except EncodingError:
            return None
        return self._options.data_decoder(raw)

    def read_timestamp(self, token: str, *, with_data: bool = False) -> int | None:
        """Return the unverified issue time of a timed *token* in epoch milliseconds."""
        parts = split_token(token, self._options.separator, with_data, True)
        if parts is None or not parts.timestamp:
            return None
        try:
            return parse_timestamp(decode_base64(parts.timestamp))
        except EncodingError:
            return None

    def __repr__(self) -> str:
        return (
            f"EdgeToken(algorithm={self._key.algorithm!r}, "
            f"token_byte_length={self._options.token_byte_length}, "
            f"separator={self._options.separator!r})"
        )


def edge_token(options: TokenOptions | None = None, /, **overrides: Any) -> EdgeToken:
    """Create an :class:`EdgeToken` from user values merged over the defaults.

    Usage:
        tokens = edge_token(secret="s3cr3t", token_byte_length=16)
        token = tokens.generate_with_data({"uid": 42})
        assert tokens.verify_with_data(token, {"uid": 42})
    """
    clock = overrides.pop("clock", epoch_millis)
    return EdgeToken(merge_options(options, **overrides), clock=clock)
