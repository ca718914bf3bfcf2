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
"""Tests for TokenOptions merging and validation."""

from __future__ import annotations

import pytest

from edgetoken.data.serializer import CallableDataSerializer, JsonDataSerializer, default_data_decoder
from edgetoken.data.values import Text
from edgetoken.kernel.exceptions import ConfigurationError
from edgetoken.security.options import (
    DEFAULT_SEPARATOR,
    DEFAULT_TOKEN_BYTE_LENGTH,
    TokenOptions,
    default_options,
    merge_options,
)


class TestDefaultOptions:
    def test_defaults(self):
        options = default_options()
        assert options.secret == ""
        assert options.algorithm == "SHA-256"
        assert options.token_byte_length == DEFAULT_TOKEN_BYTE_LENGTH == 32
        assert options.separator == DEFAULT_SEPARATOR == "."
        assert isinstance(options.serializer, JsonDataSerializer)

    def test_fresh_value_each_call(self):
        assert default_options() is not default_options()
        assert default_options().serializer is not default_options().serializer

    def test_default_decoder(self):
        assert default_options().data_decoder(b'{"a":1}') == {"a": 1}


class TestMergeOptions:
    def test_overrides_win(self):
        options = merge_options(secret="s", algorithm="SHA-512", token_byte_length=8, separator="~")
        assert (options.secret, options.algorithm, options.token_byte_length, options.separator) == (
            "s",
            "SHA-512",
            8,
            "~",
        )

    def test_base_is_not_mutated(self):
        base = merge_options(secret="a")
        merged = merge_options(base, secret="b")
        assert base.secret == "a"
        assert merged.secret == "b"

    def test_none_values_are_ignored(self):
        base = merge_options(secret="a", algorithm="SHA-384")
        assert merge_options(base, algorithm=None).algorithm == "SHA-384"

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError) as exc_info:
            merge_options(seperator="~")
        assert exc_info.value.code == "UNKNOWN_OPTION"
        assert exc_info.value.context["options"] == ["seperator"]

    @pytest.mark.parametrize("length", [0, -5])
    def test_non_positive_length_resets(self, length: int):
        assert merge_options(token_byte_length=length).token_byte_length == 32

    @pytest.mark.parametrize("length", ["16", 1.5, True])
    def test_non_integer_length(self, length):
        with pytest.raises(ConfigurationError) as exc_info:
            merge_options(token_byte_length=length)
        assert exc_info.value.code == "INVALID_TOKEN_BYTE_LENGTH"

    @pytest.mark.parametrize("separator", ["", "::", "/", "A", "9", "\t"])
    def test_invalid_separator(self, separator: str):
        with pytest.raises(ConfigurationError) as exc_info:
            merge_options(separator=separator)
        assert exc_info.value.code == "INVALID_SEPARATOR"

    @pytest.mark.parametrize("separator", [".", "~", ":", "|", "_", "-"])
    def test_valid_separator(self, separator: str):
        assert merge_options(separator=separator).separator == separator

    def test_function_serializer_is_wrapped(self):
        options = merge_options(data_serializer=lambda value: b"x")
        assert isinstance(options.serializer, CallableDataSerializer)
        assert options.serializer.serialize(Text("anything")) == b"x"
        assert options.data_decoder(b'"q"') == "q"

    def test_decoder_only_keeps_default_serialization(self):
        options = merge_options(data_decoder=lambda raw: raw)
        assert options.serializer.serialize(Text("abc")) == b"abc"
        assert options.data_decoder(b"raw") == b"raw"

    def test_serializer_and_function_conflict(self):
        with pytest.raises(ConfigurationError) as exc_info:
            merge_options(serializer=JsonDataSerializer(), data_serializer=lambda value: b"")
        assert exc_info.value.code == "CONFLICTING_SERIALIZER"

    def test_serializer_without_serialize(self):
        with pytest.raises(ConfigurationError) as exc_info:
            merge_options(serializer=object())
        assert exc_info.value.code == "INVALID_SERIALIZER"

    def test_serializer_object_without_decode_uses_default_decoder(self):
        class SerializeOnly:
            def serialize(self, data):
                return b""

        options = merge_options(serializer=SerializeOnly())
        assert options.data_decoder is default_data_decoder

    def test_options_are_frozen(self):
        options = TokenOptions()
        with pytest.raises(AttributeError):
            options.secret = "x"  # type: ignore[misc]
