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
"""EdgeToken Data — Token data variants and serializer strategies."""

from edgetoken.data.serializer import (
    CallableDataSerializer,
    DataSerializer,
    JsonDataSerializer,
    default_data_decoder,
    default_data_serializer,
    resolve_decoder,
)
from edgetoken.data.values import (
    ABSENT,
    EMPTY,
    Absent,
    Bytes,
    Structured,
    Text,
    TokenData,
    is_edge_case,
    normalize,
    to_token_data,
)

__all__ = [
    "ABSENT",
    "Absent",
    "Bytes",
    "CallableDataSerializer",
    "DataSerializer",
    "EMPTY",
    "JsonDataSerializer",
    "Structured",
    "Text",
    "TokenData",
    "default_data_decoder",
    "default_data_serializer",
    "is_edge_case",
    "normalize",
    "resolve_decoder",
    "to_token_data",
]
