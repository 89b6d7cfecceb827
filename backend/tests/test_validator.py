"""Unit tests for question validation and padding."""
import pytest

from conftest import make_questions
from interview_api.errors import QuestionValidationError
from interview_api.models.schemas import QuestionRecord
from interview_api.services.questions import fallback
from interview_api.services.questions.validator import ValidationPolicy, truncate_words, validate


def generic_fallback(n):
    return fallback.provide(count=n)


def test_truncates_to_target_in_order():
    records = validate(make_questions(12), 10, generic_fallback)
    assert len(records) == 10
    assert [r.id for r in records] == list(range(1, 11))
    assert [r.question for r in records] == [f"Question {i}?" for i in range(1, 11)]


@pytest.mark.parametrize("n", [0, 1, 9, 10, 15])
def test_output_always_has_target_count(n):
    records = validate(make_questions(n), 10, generic_fallback)
    assert len(records) == 10
    assert [r.id for r in records] == list(range(1, 11))


def test_pads_with_fallback_after_model_questions():
    records = validate(make_questions(3), 5, generic_fallback)
    assert [r.question for r in records[:3]] == ["Question 1?", "Question 2?", "Question 3?"]
    assert records[3].question == generic_fallback(1)[0].question
    assert records[4].id == 5


def test_padding_cycles_short_fallback_set():
    small = [
        QuestionRecord(id=1, question="A?", answer="a", tips=[]),
        QuestionRecord(id=2, question="B?", answer="b", tips=[]),
    ]
    records = validate([], 5, lambda n: small)
    assert [r.question for r in records] == ["A?", "B?", "A?", "B?", "A?"]
    assert [r.id for r in records] == [1, 2, 3, 4, 5]


def test_trims_text_and_tips():
    item = {"question": "  Why?  ", "answer": "\nBecause.\n", "tips": [" a ", "b", "c "]}
    record = validate([item], 1, generic_fallback)[0]
    assert record.question == "Why?"
    assert record.answer == "Because."
    assert record.tips == ["a", "b", "c"]


@pytest.mark.parametrize(
    "item, field",
    [
        ({"answer": "A", "tips": ["a", "b", "c"]}, "question"),
        ({"question": "   ", "answer": "A", "tips": ["a", "b", "c"]}, "question"),
        ({"question": "Q", "answer": "", "tips": ["a", "b", "c"]}, "answer"),
        ({"question": "Q", "answer": 5, "tips": ["a", "b", "c"]}, "answer"),
        ({"question": "Q", "answer": "A", "tips": "a, b, c"}, "tips"),
        ({"question": "Q", "answer": "A", "tips": ["a", "b"]}, "tips"),
        ("just a string", "question"),
    ],
)
def test_rejects_unusable_items(item, field):
    items = make_questions(2) + [item]
    with pytest.raises(QuestionValidationError) as exc_info:
        validate(items, 10, generic_fallback)
    assert exc_info.value.index == 2
    assert exc_info.value.field == field


def test_any_tip_count_when_exact_count_disabled():
    policy = ValidationPolicy(exact_tip_count=None)
    item = {"question": "Q", "answer": "A", "tips": [1, " two ", None, "", "3", "4"]}
    record = validate([item], 1, generic_fallback, policy)[0]
    assert record.tips == ["1", "two", "3"]


def test_tips_optional_when_not_required():
    policy = ValidationPolicy(require_tips=False, exact_tip_count=None)
    record = validate([{"question": "Q", "answer": "A"}], 1, generic_fallback, policy)[0]
    assert record.tips == []


def test_long_tips_are_cut_not_rejected():
    policy = ValidationPolicy(exact_tip_count=None, tip_max_words=3)
    item = {"question": "Q", "answer": "A", "tips": ["one two three four five", "short tip"]}
    record = validate([item], 1, generic_fallback, policy)[0]
    assert record.tips == ["one two three...", "short tip"]


def test_truncate_words():
    assert truncate_words("a b c", 3) == "a b c"
    assert truncate_words("a b c d", 2) == "a b..."


def test_extra_fields_dropped_by_default():
    item = {"question": "Q", "answer": "A", "tips": ["a", "b", "c"], "difficulty": "easy", "id": 99}
    record = validate([item], 1, generic_fallback)[0]
    dumped = record.model_dump()
    assert "difficulty" not in dumped
    assert dumped["id"] == 1


def test_extra_fields_kept_when_enabled():
    policy = ValidationPolicy(keep_extra_fields=True)
    item = {"question": "Q", "answer": "A", "tips": ["a", "b", "c"], "difficulty": "easy", "id": 99}
    record = validate([item], 1, generic_fallback, policy)[0]
    dumped = record.model_dump()
    assert dumped["difficulty"] == "easy"
    assert dumped["id"] == 1
