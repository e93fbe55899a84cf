"""Tests for the in-memory word store."""
from datetime import datetime, timedelta
from typing import List

import pytest
from faker import Faker

from vocabmaster.exceptions import DuplicateWordError, WordNotFoundError
from vocabmaster.models.vocabulary import Word
from vocabmaster.services.word_store import WordStore

fake = Faker()


@pytest.fixture
def store(animals: List[Word]) -> WordStore:
    return WordStore(animals)


def test_get_and_contains(store: WordStore, animals: List[Word]) -> None:
    """Test lookups by id and by source text."""
    cat = animals[0]
    assert cat.id in store
    assert store.get(cat.id) is cat
    assert store.get_by_source("  CAT ") is cat
    assert store.get_by_source("cow") is None
    assert len(store) == 4


def test_get_unknown_word(store: WordStore) -> None:
    with pytest.raises(WordNotFoundError):
        store.get(fake.uuid4())


def test_add_duplicate_source(store: WordStore, now: datetime) -> None:
    """Test that the duplicate check ignores case."""
    with pytest.raises(DuplicateWordError):
        store.add(Word.create("Cat", "кошка", now=now))
    assert store.count() == 4


def test_update_word(store: WordStore, animals: List[Word], now: datetime) -> None:
    """Test editing text, example and tags."""
    dog = animals[1]
    later = now + timedelta(hours=1)
    updated = store.update(dog.id, now=later, target=" пёс ", example="The dog barks.", tags=["Pets", "pets", "a b"])

    assert updated is dog
    assert dog.target == "пёс"
    assert dog.example == "The dog barks."
    assert dog.tags == ["pets", "ab"]
    assert dog.updated_at == later


def test_update_rejects_stats_and_duplicates(store: WordStore, animals: List[Word]) -> None:
    dog = animals[1]
    with pytest.raises(ValueError):
        store.update(dog.id, interval_days=10)
    with pytest.raises(DuplicateWordError):
        store.update(dog.id, source="cat")
    # Renaming to its own source in another case is allowed
    store.update(dog.id, source="Dog")
    assert dog.source == "Dog"


def test_remove_word(store: WordStore, animals: List[Word]) -> None:
    removed = store.remove(animals[2].id)
    assert removed is animals[2]
    assert animals[2].id not in store
    with pytest.raises(WordNotFoundError):
        store.remove(animals[2].id)


def test_due_words(store: WordStore, animals: List[Word], now: datetime) -> None:
    """Test that due words are the ones at or before now, most overdue first."""
    animals[0].stats.next_review_at = now + timedelta(days=1)
    animals[1].stats.next_review_at = now - timedelta(days=2)
    animals[2].stats.next_review_at = now
    animals[3].stats.next_review_at = now + timedelta(seconds=1)

    assert store.due_words(now) == [animals[1], animals[2]]
    assert store.due_count(now) == 2


def test_filter(store: WordStore, animals: List[Word]) -> None:
    """Test status, tag and query filters."""
    animals[0].stats.learned = True
    animals[1].tags = ["pets"]
    animals[0].tags = ["pets"]

    assert store.filter("learned") == [animals[0]]
    assert store.filter("learning") == animals[1:]
    assert store.filter(tag="PETS") == [animals[0], animals[1]]
    assert store.filter("learning", tag="pets") == [animals[1]]
    assert store.filter(query="ПТИ") == [animals[2]]
    assert store.learned_count() == 1
    with pytest.raises(ValueError):
        store.filter("forgotten")


def test_word_of_the_day_is_stable(store: WordStore, now: datetime) -> None:
    """Test that the same day always yields the same word."""
    day = now.date()
    assert store.word_of_the_day(day) is store.word_of_the_day(day)
    assert store.word_of_the_day(day) in store.all()
    assert WordStore().word_of_the_day(day) is None


def test_added_per_day(store: WordStore, animals: List[Word], now: datetime) -> None:
    animals[0].created_at = now - timedelta(days=1)
    animals[1].created_at = now - timedelta(days=30)

    counts = store.added_per_day(now.date(), days=3)
    assert list(counts) == [now.date() - timedelta(days=2), now.date() - timedelta(days=1), now.date()]
    assert list(counts.values()) == [0, 1, 2]


def test_query_matches_tags(now: datetime) -> None:
    """Test that the text query also searches the tags."""
    cat = Word.create("cat", "кот", tags=["pets"], now=now)
    owl = Word.create("owl", "сова", tags=["birds"], now=now)
    store = WordStore([cat, owl])

    assert store.filter(query="pet") == [cat]
    assert store.filter(query="BIRD") == [owl]
    assert store.filter(query="fish") == []


@pytest.fixture
def sortable(animals: List[Word], now: datetime) -> List[Word]:
    """cat, dog, bird, fish created a day apart in reverse order, with varied accuracy."""
    for offset, word in enumerate(animals):
        word.created_at = now - timedelta(days=offset)
    # cat 1/4, dog 3/4, bird unseen, fish 2/4
    for word, correct in zip(animals, (1, 3, 0, 2)):
        if word.source != "bird":
            word.stats.times_shown = 4
            word.stats.times_correct = correct
    return animals


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("date-asc", ["fish", "bird", "dog", "cat"]),
        ("date-desc", ["cat", "dog", "bird", "fish"]),
        ("alpha-asc", ["bird", "cat", "dog", "fish"]),
        ("alpha-desc", ["fish", "dog", "cat", "bird"]),
        ("progress-asc", ["cat", "fish", "dog", "bird"]),
        ("progress-desc", ["bird", "dog", "fish", "cat"]),
        (None, ["cat", "dog", "bird", "fish"]),
    ],
)
def test_filter_sort_orders(sortable: List[Word], sort, expected: List[str]) -> None:
    """Test the word list sort orders; an unseen word counts as fully correct."""
    store = WordStore(sortable)
    assert [w.source for w in store.filter(sort=sort)] == expected


def test_filter_sort_alpha_ignores_case(now: datetime) -> None:
    store = WordStore([Word.create("Zebra", "зебра", now=now), Word.create("apple", "яблоко", now=now)])
    assert [w.source for w in store.filter(sort="alpha-asc")] == ["apple", "Zebra"]


def test_filter_unknown_sort(store: WordStore) -> None:
    with pytest.raises(ValueError):
        store.filter(sort="random")


@pytest.mark.parametrize("field", ["source", "target"])
def test_update_rejects_empty_text(store: WordStore, animals: List[Word], field: str) -> None:
    """Test that source and target cannot be blanked, and nothing is changed on refusal."""
    dog = animals[1]
    with pytest.raises(ValueError):
        store.update(dog.id, example="Woof", **{field: "   "})
    assert (dog.source, dog.target, dog.example) == ("dog", "собака", "")


def test_update_allows_empty_example(store: WordStore, animals: List[Word]) -> None:
    store.update(animals[1].id, example="Woof")
    store.update(animals[1].id, example="  ")
    assert animals[1].example == ""
