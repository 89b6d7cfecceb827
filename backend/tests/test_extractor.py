"""Unit tests for JSON recovery from model output."""
import json

import pytest

from interview_api.errors import ExtractionError
from interview_api.services.questions.extractor import (
    collapse_control_whitespace,
    extract,
    normalize_smart_quotes,
    normalize_whitespace,
    quote_bare_keys,
    repair,
    single_to_double_quotes,
    split_top_level_objects,
    strip_comments,
    strip_markdown,
    strip_trailing_commas,
)


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

def test_strip_trailing_commas():
    assert strip_trailing_commas('{"a": [1, 2,],}') == '{"a": [1, 2]}'
    assert strip_trailing_commas('["a,]"]') == '["a,]"]'


def test_quote_bare_keys():
    assert quote_bare_keys('{name: "x", age: 3}') == '{"name": "x", "age": 3}'
    assert quote_bare_keys('{"text": "First, note: this"}') == '{"text": "First, note: this"}'


def test_single_to_double_quotes():
    assert single_to_double_quotes("{'a': 'b'}") == '{"a": "b"}'
    assert single_to_double_quotes("['x', 'y']") == '["x", "y"]'
    assert single_to_double_quotes("{'a': 'say \"hi\"'}") == '{"a": "say \\"hi\\""}'


def test_single_to_double_quotes_keeps_apostrophes():
    text = "{'question': 'What's your goal?', 'answer': 'I'd say growth'}"
    assert json.loads(single_to_double_quotes(text)) == {
        "question": "What's your goal?",
        "answer": "I'd say growth",
    }


def test_single_to_double_quotes_leaves_double_quoted_strings():
    text = '{"a": "it\'s fine", "b": \'ok\'}'
    assert json.loads(single_to_double_quotes(text)) == {"a": "it's fine", "b": "ok"}


def test_normalize_smart_quotes_outside_strings_only():
    assert normalize_smart_quotes("{“a”: ‘b’}") == "{\"a\": 'b'}"
    text = '{"q": "What does “ownership” mean?"}'
    assert normalize_smart_quotes(text) == text


def test_strip_comments_keeps_urls_in_strings():
    text = '{"u": "http://x.io"} // trailing\n/* block */'
    assert strip_comments(text).strip() == '{"u": "http://x.io"}'


def test_whitespace_transforms():
    assert collapse_control_whitespace("a\n\tb\r\nc") == "a b c"
    assert normalize_whitespace("  a   b  ") == "a b"


def test_strip_markdown():
    assert strip_markdown("```json\n[1]\n```") == "[1]"
    assert strip_markdown("```\n[1]\n```") == "[1]"
    assert strip_markdown("<think>plan [x]</think>\n[2]") == "[2]"


def test_split_top_level_objects():
    text = 'x {"a": "}"} y {"b": {"c": 1}} {"trunc": '
    assert split_top_level_objects(text) == ['{"a": "}"}', '{"b": {"c": 1}}']


def test_repair_combined():
    text = "[{question: 'Q', // note\n answer: 'A',\n tips: ['x',],},]"
    assert json.loads(repair(text)) == [{"question": "Q", "answer": "A", "tips": ["x"]}]


# ---------------------------------------------------------------------------
# extract()
# ---------------------------------------------------------------------------

def test_extract_clean_array():
    assert extract('[{"question": "Q"}]') == [{"question": "Q"}]


def test_extract_wraps_single_object():
    assert extract('{"question": "Q"}') == [{"question": "Q"}]


def test_extract_markdown_wrapped_with_prose():
    raw = (
        "Here is the list:\n```json\n"
        "[{question:'Tell me about yourself', answer:'...', tips:['a','b','c']}]\n```"
    )
    assert extract(raw) == [
        {"question": "Tell me about yourself", "answer": "...", "tips": ["a", "b", "c"]}
    ]


def test_extract_concatenated_objects():
    raw = (
        '{"question": "Q1", "answer": "A1", "tips": []}\n'
        '{"question": "Q2", "answer": "A2", "tips": []}'
    )
    assert [item["question"] for item in extract(raw)] == ["Q1", "Q2"]


def test_extract_truncated_array_keeps_complete_items():
    raw = (
        '[{"question": "Q1", "answer": "A1", "tips": ["a", "b", "c"]}, '
        '{"question": "Q2", "answ'
    )
    parsed = extract(raw)
    assert len(parsed) == 1
    assert parsed[0]["question"] == "Q1"


def test_extract_keeps_urls_in_values():
    raw = '[{"question": "See https://example.com", answer: "A"}]'
    assert extract(raw)[0]["question"] == "See https://example.com"


def test_extract_keeps_typographic_quotes_in_values():
    raw = '[{"question": "What does “ownership” mean to you?", "answer": "A", "tips": ["a", "b", "c",]}]'
    parsed = extract(raw)
    assert parsed[0]["question"] == "What does “ownership” mean to you?"
    assert parsed[0]["tips"] == ["a", "b", "c"]


def test_extract_recovers_smart_quoted_delimiters():
    raw = "[{“question”: “Q”, “answer”: “A”, “tips”: []}]"
    assert extract(raw) == [{"question": "Q", "answer": "A", "tips": []}]


def test_extract_recovers_single_quoted_records():
    records = [
        {"question": "Why this role?", "answer": "I'm drawn to it.", "tips": ["t1", "t2", "t3"]},
        {"question": "Biggest win?", "answer": "Shipping v2.", "tips": ["u1", "u2", "u3"]},
    ]
    raw = (
        "[{question: 'Why this role?', answer: 'I'm drawn to it.', tips: ['t1', 't2', 't3'],},\n"
        " {'question': 'Biggest win?', 'answer': 'Shipping v2.', 'tips': ['u1', 'u2', 'u3']},]"
    )
    assert extract(raw) == records


def test_extract_is_idempotent():
    raw = "```json\n[{'question': 'Q', 'answer': 'A', 'tips': ['x']}]\n```"
    once = extract(raw)
    assert extract(json.dumps(once)) == once


@pytest.mark.parametrize("raw", ["", "   \n\t"])
def test_extract_empty_input(raw):
    with pytest.raises(ExtractionError):
        extract(raw)


def test_extract_without_json_structure():
    with pytest.raises(ExtractionError) as exc_info:
        extract("Sorry, I cannot help with that.")
    err = exc_info.value
    assert err.raw_length == len("Sorry, I cannot help with that.")
    assert err.head.startswith("Sorry")


@pytest.mark.parametrize("raw", ["42", "[this is not json]", "{{{ :: }"])
def test_extract_unrecoverable(raw):
    with pytest.raises(ExtractionError):
        extract(raw)


def test_extract_too_deeply_nested():
    with pytest.raises(ExtractionError):
        extract("[" * 100000 + "]" * 100000)
