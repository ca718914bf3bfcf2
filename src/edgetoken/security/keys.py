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
"""HMAC key derivation backed by PyJWT's HMAC algorithm."""

from __future__ import annotations

import hashlib

import structlog
from jwt.algorithms import HMACAlgorithm
from jwt.utils import force_bytes

from edgetoken.kernel.exceptions import KeyDerivationError, SigningError

logger = structlog.get_logger("edgetoken.security.keys")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_ALGORITHM: str = "SHA-256"
"""Hash used for HMAC when none is configured."""

_HASHES = {
    "SHA1": hashlib.sha1,
    "SHA256": hashlib.sha256,
    "SHA384": hashlib.sha384,
    "SHA512": hashlib.sha512,
}


def _canonical_name(algorithm: str) -> str:
    return algorithm.strip().upper().replace("-", "").replace("_", "")


def supported_algorithms() -> list[str]:
    """Names accepted by :func:`derive_key`, in ``SHA-256`` form."""
    return [f"SHA-{name[3:]}" for name in _HASHES]


class HmacKey:
    """Opaque signing/verification key for one secret and hash algorithm.

    Instances are immutable and safe to share between threads.
    """

    __slots__ = ("_algorithm", "_engine", "_material")

    def __init__(self, engine: HMACAlgorithm, material: bytes, algorithm: str) -> None:
        self._engine = engine
        self._material = material
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def sign(self, message: bytes) -> bytes:
        """Return the HMAC tag of *message*.

        Raises:
            SigningError: If the MAC engine rejects the input.
        """
        try:
            return self._engine.sign(message, self._material)
        except (TypeError, ValueError) as exc:
            raise SigningError(
                f"Failed to sign token with {self._algorithm}: {exc}",
                code="SIGNING_FAILED",
            ) from exc

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check *signature* against *message* in constant time."""
        return self._engine.verify(message, self._material, signature)

    def __repr__(self) -> str:
        return f"HmacKey(algorithm={self._algorithm!r})"


def derive_key(secret: str | bytes, algorithm: str = DEFAULT_ALGORITHM) -> HmacKey:
    """Import *secret* as raw HMAC key material for *algorithm*.

    The secret is used as is, whatever it looks like; no key format is
    parsed.

    Args:
        secret: Raw key material. Strings are UTF-8 encoded.
        algorithm: Hash name such as ``SHA-256`` (``sha256`` is accepted too).

    Raises:
        KeyDerivationError: If the algorithm is unsupported or the secret is
            empty.
    """
    hash_alg = _HASHES.get(_canonical_name(algorithm)) if isinstance(algorithm, str) else None
    if hash_alg is None:
        raise KeyDerivationError(
            f"Unsupported HMAC algorithm: {algorithm!r}",
            code="UNSUPPORTED_ALGORITHM",
            context={"algorithm": algorithm, "supported": supported_algorithms()},
        )
    if not isinstance(secret, (str, bytes)) or not secret:
        raise KeyDerivationError("A non-empty secret is required", code="MISSING_SECRET")

    engine = HMACAlgorithm(hash_alg)
    material = force_bytes(secret)

    name = f"SHA-{_canonical_name(algorithm)[3:]}"
    logger.debug("hmac_key_derived", algorithm=name)
    return HmacKey(engine, material, name)
