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
"""TokenData — the closed set of values a token can be bound to.

Application values are lifted into one of four variants exactly once, at the
facade boundary. Everything past that point works with the variant and its
``is_empty_like`` predicate instead of inspecting arbitrary Python objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Absent:
    """No data was supplied."""

    @property
    def value(self) -> None:
        return None

    def is_empty_like(self) -> bool:
        return True


@dataclass(frozen=True)
class Text:
    """A text value, serialized as UTF-8."""

    value: str

    def is_empty_like(self) -> bool:
        return self.value == ""


@dataclass(frozen=True)
class Bytes:
    """Raw bytes, passed through untouched."""

    value: bytes

    def is_empty_like(self) -> bool:
        return len(self.value) == 0


@dataclass(frozen=True)
class Structured:
    """A JSON value: mapping, sequence, set, number, boolean or null."""

    value: Any

    def is_empty_like(self) -> bool:
        value = self.value
        if value is None or value is False:
            return True
        if isinstance(value, (int, float)):
            return value == 0
        if isinstance(value, (dict, list, tuple, set, frozenset)):
            return len(value) == 0
        return False


TokenData = Union[Absent, Text, Bytes, Structured]

ABSENT = Absent()
EMPTY = Text("")


def to_token_data(value: Any) -> TokenData:
    """Lift an application value into its :data:`TokenData` variant.

    Values that already are a variant are returned unchanged.
    """
    if isinstance(value, (Absent, Text, Bytes, Structured)):
        return value
    if value is None:
        return ABSENT
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Bytes(bytes(value))
    return Structured(value)


def normalize(data: TokenData) -> TokenData:
    """Collapse every empty-like variant to ``Text("")``."""
    return EMPTY if data.is_empty_like() else data


def is_edge_case(value: Any) -> bool:
    """Return ``True`` for empty-like values.

    ``None``, ``""``, ``0``, ``False``, ``b""`` and empty containers are edge
    cases. The facade normalizes them to an empty string so that "no data"
    tokens look the same whichever falsy form the caller passed.
    """
    return to_token_data(value).is_empty_like()
