"""Tests for the pipe-chain grammar."""

from htmlmapper.pipes.parser import (
    is_quoted_literal,
    parse_entry,
    parse_pipes,
    split_chain,
)
from htmlmapper.types import PipeSpec


class TestParseEntry:

    def test_name_only(self):
        assert parse_entry("trim") == PipeSpec("trim")

    def test_single_arg(self):
        assert parse_entry("attr:href") == PipeSpec("attr", ("href",))

    def test_multiple_args_are_trimmed(self):
        assert parse_entry(" substr : 1 ; 5 ") == PipeSpec("substr", ("1", "5"))

    def test_only_first_colon_splits(self):
        spec = parse_entry("log:at 12:30;x")
        assert spec.name == "log"
        assert spec.args == ("at 12:30", "x")

    def test_empty_args_dropped(self):
        assert parse_entry("default:;  ;fallback;") == PipeSpec("default", ("fallback",))
        assert parse_entry("trim:") == PipeSpec("trim", ())

    def test_structured_entry(self):
        assert parse_entry({"name": "attr", "args": ["href"]}) == PipeSpec("attr", ("href",))
        assert parse_entry({"name": "upper"}) == PipeSpec("upper", ())

    def test_malformed_entries_dropped(self):
        assert parse_entry("") is None
        assert parse_entry(42) is None
        assert parse_entry(None) is None
        assert parse_entry({"args": ["x"]}) is None
        assert parse_entry({"name": 3}) is None


class TestParsePipes:

    def test_delimited_string(self):
        pipes = parse_pipes("trim|substr:0;3|upper", "|")
        assert [p.name for p in pipes] == ["trim", "substr", "upper"]
        assert pipes[1].args == ("0", "3")

    def test_list_of_strings(self):
        pipes = parse_pipes(["trim", "default:x"], "|")
        assert pipes == [PipeSpec("trim"), PipeSpec("default", ("x",))]

    def test_mixed_list_skips_garbage(self):
        pipes = parse_pipes(["trim", 5, {"name": "lower"}, "", None], "|")
        assert [p.name for p in pipes] == ["trim", "lower"]

    def test_none_and_empty(self):
        assert parse_pipes(None) == []
        assert parse_pipes("", "|") == []
        assert parse_pipes([]) == []

    def test_custom_delimiter(self):
        pipes = parse_pipes("trim>>upper", ">>")
        assert [p.name for p in pipes] == ["trim", "upper"]

    def test_without_delimiter_string_is_single_pipe(self):
        assert parse_pipes("default:a|b") == [PipeSpec("default", ("a|b",))]


class TestHelpers:

    def test_split_chain(self):
        assert split_chain("a.b|trim|attr:x", "|") == ["a.b", "trim", "attr:x"]
        assert split_chain("h1", "|") == ["h1"]
        assert split_chain("|upper", "|") == ["", "upper"]
        assert split_chain("a::b::c", "::") == ["a", "b", "c"]

    def test_quoted_literal(self):
        assert is_quoted_literal('"hello"')
        assert is_quoted_literal("'hello'")
        assert is_quoted_literal("''")
        assert not is_quoted_literal("'")
        assert not is_quoted_literal("'mixed\"")
        assert not is_quoted_literal("h1")
        assert not is_quoted_literal("'a' b")
