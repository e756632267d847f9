import dataclasses
import os

import pytest

from jsontable.config import ResolvedConfig, resolve_config
from jsontable.errors import ConfigError, ConversionError


class TestResolveConfig:

    def test_defaults(self):
        config = resolve_config()

        assert config.path_separator == "."
        assert config.row_delimiter == ";"
        assert config.array_join_separator == ","
        assert config.end_of_line == os.linesep
        assert config.include_headers is True
        assert config.sort_headers_by_frequency is True
        assert config.undefined_placeholder == ""
        assert config.vertical_object_output is True
        assert config.boolean_true_text == "true"
        assert config.boolean_false_text == "false"
        assert config.render_string is None
        assert config.top_level_array_key is None

    def test_each_call_builds_a_new_config(self):
        first = resolve_config({"rowDelimiter": ","})
        second = resolve_config()

        assert first.row_delimiter == ","
        assert second.row_delimiter == ";"
        assert first is not second

    def test_config_is_frozen(self):
        config = resolve_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.row_delimiter = ","

    def test_aliases_and_overrides(self):
        config = resolve_config({"headerPathString": "/", "row_delimiter": ","}, row_delimiter="|")

        assert config.path_separator == "/"
        assert config.row_delimiter == "|"

    def test_resolved_config_passthrough(self):
        config = ResolvedConfig(row_delimiter="\t")

        assert resolve_config(config) is config
        replaced = resolve_config(config, verticalOutput=False)
        assert replaced.row_delimiter == "\t"
        assert replaced.vertical_object_output is False
        assert config.vertical_object_output is True

    def test_none_falls_back_to_defaults(self):
        config = resolve_config({"endOfLine": None, "booleanTrueString": None, "booleanFalseString": None})

        assert config.end_of_line == os.linesep
        assert config.boolean_true_text == "true"
        assert config.boolean_false_text == "false"

    def test_unknown_option(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_config({"colour": "red"})

        assert "Unknown conversion option: colour" in str(exc_info.value)
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, ConversionError)

    def test_render_override_must_be_callable(self):
        with pytest.raises(ConfigError):
            resolve_config(handleString="upper")

    def test_text_options_must_be_strings(self):
        with pytest.raises(ConfigError):
            resolve_config(row_delimiter=1)
        with pytest.raises(ConfigError):
            resolve_config(path_separator=None)

    def test_flag_options_must_be_booleans(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_config({"includeHeaders": "false"})

        assert "include_headers" in str(exc_info.value)
        with pytest.raises(ConfigError):
            resolve_config(sort_headers_by_frequency=1)
        with pytest.raises(ConfigError):
            resolve_config(verticalOutput=None)

    def test_options_must_be_mapping(self):
        with pytest.raises(ConfigError):
            resolve_config(["rowDelimiter"])
