"""Tests for model-text normalization and JSON repair."""

import json

import pytest

from recruitmaxxing.errors import NoJsonFound, UnrepairableStructure
from recruitmaxxing.utils.json_parser import extract_object, normalize, parse_object, repair
from recruitmaxxing.utils.result import Failure, Ok


class TestNormalize:
    def test_strips_json_fence(self):
        result = normalize('```json\n{"keySkills": []}\n```')
        assert result == Ok('{"keySkills": []}')

    def test_strips_untagged_fence(self):
        assert normalize('```\n{"key": "value"}\n```').unwrap() == '{"key": "value"}'

    def test_strips_fence_with_uppercase_tag_and_prose(self):
        text = 'Result:\n```JSON\n{"a": 1}\n```\nDone.'
        assert normalize(text).unwrap() == '{"a": 1}'

    def test_slices_embedded_object(self):
        text = 'Sure! The analysis is: {"score": 90, "pass": true} as shown above.'
        assert normalize(text).unwrap() == '{"score": 90, "pass": true}'

    def test_replaces_typographic_quotes(self):
        text = "{“name”: ‘Python’}"
        assert normalize(text).unwrap() == "{\"name\": 'Python'}"

    def test_idempotent_on_normalized_text(self):
        once = normalize('Here you go:\n```json\n{"a": {"b": [1, 2]}}\n```').unwrap()
        assert normalize(once).unwrap() == once
        assert normalize('{"a": 1}').unwrap() == '{"a": 1}'

    def test_refusal_has_no_json(self):
        result = normalize("Sorry, I cannot help with that.")
        assert isinstance(result, Failure)
        assert isinstance(result.error, NoJsonFound)

    @pytest.mark.parametrize("raw", ["", None, "   ", "Here: {", "} backwards {"])
    def test_no_brace_pair(self, raw):
        result = normalize(raw)
        assert not result.ok
        assert isinstance(result.error, NoJsonFound)

    def test_truncated_object_passes_through(self):
        assert normalize('{"a": [1, 2').unwrap() == '{"a": [1, 2'


class TestRepair:
    def test_valid_json_unchanged(self):
        text = '{"a": [1, 2], "b": {"c": null}}'
        assert repair(text).unwrap() == text

    def test_trailing_commas(self):
        result = repair('{"a": [1, 2,], "b": 3,}')
        assert json.loads(result.unwrap()) == {"a": [1, 2], "b": 3}

    def test_unquoted_keys_and_single_quotes(self):
        result = repair("{name: 'Python', importance: 'required'}")
        assert json.loads(result.unwrap()) == {"name": "Python", "importance": "required"}

    def test_python_literals(self):
        result = repair("{'a': True, 'b': None, 'c': False}")
        assert json.loads(result.unwrap()) == {"a": True, "b": None, "c": False}

    def test_truncated_string_and_containers(self):
        text = '{"keySkills": [{"name": "Python", "importance": "req'
        result = repair(text)
        assert json.loads(result.unwrap()) == {
            "keySkills": [{"name": "Python", "importance": "req"}]
        }

    def test_truncated_after_key_drops_key(self):
        assert json.loads(repair('{"a": 1, "b":').unwrap()) == {"a": 1}

    def test_truncated_inside_key_drops_key(self):
        assert json.loads(repair('{"a": 1, "bb').unwrap()) == {"a": 1}

    def test_deep_nesting(self):
        result = repair('{"a": {"b": {"c": {"d": [1, 2')
        assert json.loads(result.unwrap()) == {"a": {"b": {"c": {"d": [1, 2]}}}}

    def test_missing_comma_between_lines(self):
        text = '{\n  "a": "x"\n  "b": "y"\n}'
        assert json.loads(repair(text).unwrap()) == {"a": "x", "b": "y"}

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('{"a": "x" "b": "y"}', {"a": "x", "b": "y"}),
            ('{"a": ["x" "y"]}', {"a": ["x", "y"]}),
            ("{'a': 'x' 'b': 'y'}", {"a": "x", "b": "y"}),
        ],
    )
    def test_missing_comma_on_one_line(self, text, expected):
        assert json.loads(repair(text).unwrap()) == expected

    def test_surrogate_pair_escape_becomes_one_character(self):
        text = '{"keySkills": [{"name": "Python \\ud83d\\ude80", "importance": "required",},]}'
        parsed = json.loads(repair(text).unwrap())
        assert parsed["keySkills"][0]["name"] == "Python \U0001F680"

    def test_lone_surrogate_escape_replaced(self):
        result = repair('{"a": "x \\ud83d y",}')
        assert json.loads(result.unwrap()) == {"a": "x \ufffd y"}

    def test_raw_newline_in_string(self):
        result = repair('{"a": "line1\nline2"}')
        assert json.loads(result.unwrap()) == {"a": "line1\nline2"}

    def test_unescaped_inner_quotes(self):
        result = repair('{"a": "He said "hi" to me"}')
        assert json.loads(result.unwrap()) == {"a": 'He said "hi" to me'}

    def test_trailing_prose_ignored(self):
        result = repair('{"a": 1} and that is all')
        assert json.loads(result.unwrap()) == {"a": 1}

    def test_mismatched_close_bracket(self):
        result = repair('{"a": [1, 2}')
        assert json.loads(result.unwrap()) == {"a": [1, 2]}

    def test_object_in_key_position_is_unrepairable(self):
        result = repair('{ {"a": 1} }')
        assert isinstance(result.error, UnrepairableStructure)

    def test_array_root_rejected(self):
        result = repair("[1, 2]")
        assert isinstance(result.error, UnrepairableStructure)

    def test_empty_text(self):
        assert isinstance(repair("").error, UnrepairableStructure)


class TestParseObject:
    def test_parses_object(self):
        assert parse_object('{"a": 1}') == Ok({"a": 1})

    def test_rejects_invalid(self):
        assert isinstance(parse_object("{nope").error, UnrepairableStructure)


class TestExtractObject:
    def test_fenced_with_prose(self):
        text = """Here's the output:
```json
{
  "name": "Python",
  "alternatives": ["Django", "Flask"],
}
```"""
        result = extract_object(text)
        assert result.unwrap() == {"name": "Python", "alternatives": ["Django", "Flask"]}

    def test_stops_at_first_failure(self):
        result = extract_object("no json here at all")
        assert isinstance(result.error, NoJsonFound)
        with pytest.raises(NoJsonFound):
            result.unwrap()
