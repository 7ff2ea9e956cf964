import json

from link_suggester.llm.models import Suggestion
from link_suggester.llm.parsing import parse_suggestions, strip_code_fence


def entry(i):
    return {"originalText": f"orig {i}", "suggestedChange": f"changed {i}"}


def test_fenced_json_is_parsed():
    raw = '```json\n[{"originalText":"a","suggestedChange":"b"}]\n```'
    assert parse_suggestions(raw) == [Suggestion(original_text="a", suggested_change="b")]


def test_bare_fence_is_parsed():
    raw = '```\n[{"originalText":"a","suggestedChange":"b"}]\n```'
    assert len(parse_suggestions(raw)) == 1


def test_plain_json_is_parsed():
    raw = json.dumps([entry(1), entry(2)])
    result = parse_suggestions(raw)
    assert [s.original_text for s in result] == ["orig 1", "orig 2"]


def test_array_embedded_in_prose_is_recovered():
    raw = "Here are my suggestions:\n" + json.dumps([entry(1)]) + "\nHope this helps!"
    result = parse_suggestions(raw)
    assert result == [Suggestion(original_text="orig 1", suggested_change="changed 1")]


def test_garbage_without_brackets_yields_empty_list():
    assert parse_suggestions("I cannot help with that.") == []


def test_unparseable_brackets_yield_empty_list():
    assert parse_suggestions("see [this] and [that") == []


def test_empty_output_yields_empty_list():
    assert parse_suggestions("") == []
    assert parse_suggestions("   ") == []


def test_result_capped_at_three():
    raw = json.dumps([entry(i) for i in range(5)])
    result = parse_suggestions(raw)
    assert [s.original_text for s in result] == ["orig 0", "orig 1", "orig 2"]


def test_custom_limit():
    raw = json.dumps([entry(i) for i in range(5)])
    assert len(parse_suggestions(raw, limit=1)) == 1


def test_entries_missing_fields_are_dropped():
    raw = json.dumps([
        {"originalText": "no change"},
        entry(1),
        {"originalText": "wrong type", "suggestedChange": 5},
        "not an object",
        None,
        entry(2),
    ])
    result = parse_suggestions(raw)
    assert [s.original_text for s in result] == ["orig 1", "orig 2"]


def test_filtering_happens_before_truncation():
    raw = json.dumps([{"bad": 1}, {"bad": 2}, entry(1), entry(2), entry(3), entry(4)])
    result = parse_suggestions(raw)
    assert [s.original_text for s in result] == ["orig 1", "orig 2", "orig 3"]


def test_non_array_json_falls_back_to_embedded_array():
    raw = json.dumps({"suggestions": [entry(1)]})
    result = parse_suggestions(raw)
    assert [s.original_text for s in result] == ["orig 1"]


def test_non_array_json_without_array_yields_empty_list():
    assert parse_suggestions('{"answer": "none"}') == []


def test_suggestion_serializes_with_camel_case():
    s = parse_suggestions(json.dumps([entry(1)]))[0]
    assert s.model_dump(by_alias=True) == entry(1)


def test_strip_code_fence():
    assert strip_code_fence("```json\n[1]\n```") == "[1]"
    assert strip_code_fence("[1]") == "[1]"
    assert strip_code_fence("  ```\n[1]```  ") == "[1]"


def test_deeply_nested_output_yields_empty_list():
    raw = "[" * 100000 + "]" * 100000
    assert parse_suggestions(raw) == []


def test_deeply_nested_output_inside_prose_yields_empty_list():
    raw = "Result: " + "[" * 100000 + "]" * 100000 + " done"
    assert parse_suggestions(raw) == []
