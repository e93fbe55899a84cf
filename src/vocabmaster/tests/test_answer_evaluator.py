"""Tests for answer checks."""
import pytest

from vocabmaster.services import answer_evaluator


@pytest.mark.parametrize(
    "answer, expected, result",
    [
        ("кот", "кот", True),
        ("  Кот ", "кот", True),
        ("CAT", "cat", True),
        ("cats", "cat", False),
        ("", "cat", False),
    ],
)
def test_check_typed(answer: str, expected: str, result: bool) -> None:
    """Test that typed answers only ignore case and surrounding whitespace."""
    assert answer_evaluator.check_typed(answer, expected) is result


def test_check_choice_is_exact() -> None:
    """Test that multiple-choice answers must match the option exactly."""
    assert answer_evaluator.check_choice("собака", "собака")
    assert not answer_evaluator.check_choice("Собака", "собака")


def test_check_self_report() -> None:
    assert answer_evaluator.check_self_report(True) is True
    assert answer_evaluator.check_self_report(False) is False


def test_check_pair() -> None:
    assert answer_evaluator.check_pair("w1", "w1")
    assert not answer_evaluator.check_pair("w1", "w2")


def test_clean_spoken() -> None:
    """Test that punctuation and filler words are dropped."""
    assert answer_evaluator.clean_spoken("The Dog!") == "dog"
    assert answer_evaluator.clean_spoken("  a   piece of cake ") == "piece cake"
    assert answer_evaluator.clean_spoken("") == ""


def test_levenshtein_distance() -> None:
    assert answer_evaluator.levenshtein_distance("kitten", "sitting") == 3
    assert answer_evaluator.levenshtein_distance("", "abc") == 3
    assert answer_evaluator.levenshtein_distance("same", "same") == 0


def test_similarity_article_stripped() -> None:
    """Test that an article in the transcript does not fail the answer."""
    assert answer_evaluator.check_similarity("a dog", "dog") is True


def test_similarity_different_words() -> None:
    assert answer_evaluator.check_similarity("cat", "dog") is False


def test_similarity_containment_and_typos() -> None:
    """Test containment and small recognition errors."""
    assert answer_evaluator.check_similarity("the red apple", "apple")
    assert answer_evaluator.check_similarity("elephent", "elephant")
    assert not answer_evaluator.check_similarity("elephant", "element")


def test_similarity_empty_transcript() -> None:
    assert answer_evaluator.check_similarity("", "dog") is False
    assert answer_evaluator.check_similarity("the", "a") is True


def test_similarity_threshold_override() -> None:
    assert not answer_evaluator.check_similarity("elephent", "elephant", threshold=0.9)
