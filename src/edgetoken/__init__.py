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
"""EdgeToken — Compact signed anti-forgery (CSRF) tokens."""

from edgetoken.data import (
    CallableDataSerializer,
    DataSerializer,
    JsonDataSerializer,
    default_data_decoder,
    default_data_serializer,
    is_edge_case,
)
from edgetoken.kernel.exceptions import (
    ConfigurationError,
    DataSerializationError,
    EdgeTokenException,
    EncodingError,
    InvalidEncoding,
    KeyDerivationError,
    SecurityException,
    SigningError,
)
from edgetoken.security import (
    EdgeToken,
    TokenOptions,
    default_options,
    derive_key,
    edge_token,
    generate_token,
    merge_options,
    verify_token,
)

__version__ = "0.1.0"

__all__ = [
    "CallableDataSerializer",
    "ConfigurationError",
    "DataSerializationError",
    "DataSerializer",
    "EdgeToken",
    "EdgeTokenException",
    "EncodingError",
    "InvalidEncoding",
    "JsonDataSerializer",
    "KeyDerivationError",
    "SecurityException",
    "SigningError",
    "TokenOptions",
    "__version__",
    "default_data_decoder",
    "default_data_serializer",
    "default_options",
    "derive_key",
    "edge_token",
    "generate_token",
    "is_edge_case",
    "merge_options",
    "verify_token",
]
