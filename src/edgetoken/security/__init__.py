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
"""EdgeToken Security — HMAC keys, token codec and the EdgeToken facade."""

from edgetoken.security.edge_token import EdgeToken, edge_token
from edgetoken.security.keys import DEFAULT_ALGORITHM, HmacKey, derive_key, supported_algorithms
from edgetoken.security.options import (
    DEFAULT_SEPARATOR,
    DEFAULT_TOKEN_BYTE_LENGTH,
    TokenOptions,
    default_options,
    merge_options,
    validate_options,
)
from edgetoken.security.token_codec import epoch_millis, generate_token, verify_token

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_SEPARATOR",
    "DEFAULT_TOKEN_BYTE_LENGTH",
    "EdgeToken",
    "HmacKey",
    "TokenOptions",
    "default_options",
    "derive_key",
    "edge_token",
    "epoch_millis",
    "generate_token",
    "merge_options",
    "supported_algorithms",
    "validate_options",
    "verify_token",
]
