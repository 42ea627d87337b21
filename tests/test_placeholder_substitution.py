"""
Tests for parameter decoding and placeholder substitution.
"""
import pytest

from engine.exceptions import MalformedParameterToken, MissingParameterValue, UnsupportedParameterType
from engine.models import ParameterBinding, ParameterSet, ParameterType
from tools.components.parameter_decoder import (
    decode_parameters, format_parameters, iter_bracket_contents, split_token
)
from tools.components.placeholder_substitution import (
    fill_placeholders, format_value, quote_string, try_fill_placeholders
)


class TestParameterDecoder:
    """Test suite for the parameter decoder."""

    def test_decode_basic(self):
        params = decode_parameters("[String:1:hello][Int:2:42]")

        assert len(params) == 2
        assert params.get(1) == ParameterBinding(ParameterType.STRING, "String", 1, "hello")
        assert params.get(2).type is ParameterType.INTEGER
        assert params.get(2).raw_value == "42"

    def test_value_may_contain_colons(self):
        params = decode_parameters("[Timestamp:1:2024-01-01 10:00:00]")
        binding = params.get(1)
        assert binding.raw_value == "2024-01-01 10:00:00"
        assert binding.type is ParameterType.OTHER
        assert binding.type_name == "Timestamp"

    def test_malformed_brackets_are_dropped(self):
        params = decode_parameters("[String:1:ok][garbage][Int:x:5][Int:3:7]")
        assert params.positions == [1, 3]

    def test_duplicate_position_last_wins(self):
        params = decode_parameters("[String:1:first][Int:2:2][String:1:second]")
        assert len(params) == 2
        assert params.get(1).raw_value == "second"

    def test_empty_value_and_empty_input(self):
        assert decode_parameters("[String:1:]").get(1).raw_value == ""
        assert len(decode_parameters("")) == 0
        assert len(decode_parameters("[]")) == 0

    def test_iter_bracket_contents_ignores_unclosed(self):
        assert list(iter_bracket_contents("[a:1:b][c:2:d")) == ["a:1:b"]

    def test_split_token_errors(self):
        with pytest.raises(MalformedParameterToken):
            split_token("String:1")
        with pytest.raises(MalformedParameterToken):
            split_token("String:one:abc")
        assert split_token("Long:10:a:b") == ("Long", 10, "a:b")

    @pytest.mark.parametrize("position", [" 1", "+1", "1_0", "1 ", "", "-", "١"])
    def test_position_must_be_plain_digits(self, position):
        with pytest.raises(MalformedParameterToken):
            split_token(f"Int:{position}:5")

    def test_negative_position_is_accepted(self):
        assert split_token("Int:-1:5") == ("Int", -1, "5")

    def test_loose_position_drops_only_that_bracket(self):
        params = decode_parameters("[Int:1_0:5][String:2:kept]")
        assert params.positions == [2]

    def test_type_tokens_are_case_insensitive(self):
        assert ParameterType.from_token("STRING") is ParameterType.STRING
        assert ParameterType.from_token("BigDecimal") is ParameterType.DECIMAL
        assert ParameterType.from_token("number") is ParameterType.DECIMAL
        assert ParameterType.from_token("Integer") is ParameterType.OTHER

    def test_format_parameters(self):
        formatted = format_parameters(decode_parameters("[String:1:hello][Int:2:42]"))
        assert "  [1] String: hello\n" in formatted
        assert "  [2] Int: 42\n" in formatted
        assert format_parameters(ParameterSet()) == "Not found"


class TestPlaceholderSubstitution:
    """Test suite for placeholder substitution."""

    def test_replace_placeholders(self):
        params = decode_parameters("[String:1:John][Int:2:42]")
        result = fill_placeholders("SELECT * FROM users WHERE name = ? AND id = ?", params)
        assert result == "SELECT * FROM users WHERE name = 'John' AND id = 42"

    def test_escape_quotes(self):
        params = decode_parameters("[String:1:O'Brien]")
        result = fill_placeholders("INSERT INTO t (name) VALUES (?)", params)
        assert result == "INSERT INTO t (name) VALUES ('O''Brien')"

    @pytest.mark.parametrize("type_name", ["bigdecimal", "Number", "INT", "Long", "float"])
    def test_numeric_types_unquoted(self, type_name):
        params = decode_parameters(f"[{type_name}:1:12.50]")
        assert fill_placeholders("x = ?", params) == "x = 12.50"

    def test_string_null_is_quoted(self):
        """Only quote-doubling is applied to strings; 'null' stays a literal string."""
        assert fill_placeholders("x = ?", decode_parameters("[String:1:null]")) == "x = 'null'"

    def test_out_of_order_bindings(self):
        params = decode_parameters("[Int:3:30][Int:1:10][Int:2:20]")
        assert fill_placeholders("(?, ?, ?)", params) == "(10, 20, 30)"

    def test_unconsumed_positions_are_ignored(self):
        params = decode_parameters("[Int:1:10][Int:5:50]")
        assert fill_placeholders("a = ?", params) == "a = 10"

    def test_preserves_other_characters(self):
        template = "SELECT  'x'\n\tFROM t WHERE a=? -- 日本語"
        result = fill_placeholders(template, decode_parameters("[Int:1:1]"))
        assert result == "SELECT  'x'\n\tFROM t WHERE a=1 -- 日本語"
        assert "?" not in result

    def test_no_placeholders_no_params(self):
        assert fill_placeholders("SELECT 1", ParameterSet()) == "SELECT 1"

    def test_missing_value(self):
        with pytest.raises(MissingParameterValue) as exc_info:
            fill_placeholders("a = ? AND b = ?", decode_parameters("[Int:1:1]"))
        assert exc_info.value.position == 2

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedParameterType) as exc_info:
            fill_placeholders("a = ?", decode_parameters("[Unsupported:1:x]"))
        assert exc_info.value.type_name == "Unsupported"

    def test_unsupported_type_fails_even_if_unconsumed(self):
        with pytest.raises(UnsupportedParameterType):
            fill_placeholders("a = ?", decode_parameters("[Int:1:1][Blob:2:00ff]"))

    def test_try_fill_falls_back_to_template(self):
        template = "SELECT * FROM t WHERE a = ?"
        filled, error = try_fill_placeholders(template, decode_parameters("[Unsupported:1:x]"))
        assert filled == template
        assert error == "Unsupported type: Unsupported"

        filled, error = try_fill_placeholders(template, ParameterSet())
        assert filled == template
        assert error == "Missing value for position 1"

        filled, error = try_fill_placeholders(template, decode_parameters("[Int:1:9]"))
        assert filled == "SELECT * FROM t WHERE a = 9"
        assert error is None

    def test_quote_helpers(self):
        assert quote_string("it's") == "'it''s'"
        assert quote_string("") == "''"
        binding = ParameterBinding.from_fields("Float", 1, "1.5")
        assert format_value(binding) == "1.5"
