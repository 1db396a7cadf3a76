# src/e2e/test_dictionary_index.py
import pytest

from parrot.dictionary import Dictionary, insert_word_into_indices, sort_sentences
from parrot.tokenize import split_words


def _assert_index_consistent(d: Dictionary) -> None:
    for word, positions in d.indices.items():
        assert len(positions) == len(set(positions))
        for p in positions:
            assert 0 <= p < len(d.sentences)
            assert word in split_words(d.sentences[p].lower())


def test_rebuild_indices_sorts_and_indexes():
    d = Dictionary(
        sentences=[
            "this is a test.",
            "this is is not a trick!",  # the double "is" is intentional
            "hello world!",
        ],
        indices={},
    )
    d.rebuild_indices()

    assert d.sentences == ["hello world!", "this is a test.", "this is is not a trick!"]
    assert d.indices == {
        "this": [1, 2],
        "is": [1, 2],
        "a": [1, 2],
        "test": [1],
        "not": [2],
        "trick": [2],
        "hello": [0],
        "world": [0],
    }


def test_rebuild_is_idempotent():
    d = Dictionary.new_empty()
    d.learn("Zebras run. Apples fall! apples fall again? Monkeys climb.")
    d.rebuild_indices()
    once = Dictionary(sentences=list(d.sentences), indices={k: list(v) for k, v in d.indices.items()})
    d.rebuild_indices()
    assert d == once


def test_sort_is_case_insensitive_and_stable():
    sentences = ["b", "A", "a", "B"]
    sort_sentences(sentences)
    assert sentences == ["A", "a", "b", "B"]


@pytest.mark.parametrize("sentences,indices,expected", [
    (["hello world"], {}, True),
    (["hello world"], {"hello": [0], "world": [0]}, False),
    ([], {}, False),
])
def test_needs_index_rebuild(sentences, indices, expected):
    assert Dictionary(sentences=sentences, indices=indices).needs_index_rebuild() is expected


def test_knows_sentence():
    d = Dictionary(sentences=["hello world", "i am a little teapot.", "my name is foo..."])
    assert d.knows_sentence("my name is foo...")
    assert d.knows_sentence("i am a little teapot.")
    assert not d.knows_sentence("i shouldn't know this")
    assert not d.knows_sentence("")
    assert not d.knows_sentence("a")


def test_knows_word():
    d = Dictionary(
        sentences=["and i am a little teapot"],
        indices={w: [0] for w in ["and", "i", "am", "a", "little", "teapot"]},
    )
    assert d.knows_word("teapot")
    assert not d.knows_word("rat")
    assert not d.knows_word(" ")
    assert not d.knows_word("")


def test_insert_word_into_indices():
    indices = {"joy": [1, 2]}
    insert_word_into_indices(indices, "john", 10)
    assert indices == {"joy": [1, 2], "john": [10]}
    insert_word_into_indices(indices, "john", 20)
    insert_word_into_indices(indices, "joy", 1)
    insert_word_into_indices(indices, "joy", 6)
    assert indices == {"joy": [1, 2, 6], "john": [10, 20]}


def test_learn_appends_and_updates_index_incrementally():
    d = Dictionary.new_empty()
    assert d.learn("Hey there, everyone!") is True
    assert d == Dictionary(
        sentences=["hey there, everyone!"],
        indices={"hey": [0], "there": [0], "everyone": [0]},
    )

    assert d.learn("How is everyone doing today?!") is True
    assert d.sentences == ["hey there, everyone!", "how is everyone doing today?!"]
    assert d.indices["everyone"] == [0, 1]

    d.learn("I've been doing fine today, what about you?")
    assert d.sentences[2] == "i've been doing fine today, what about you?"
    assert d.indices["doing"] == [1, 2]
    assert d.indices["today"] == [1, 2]
    assert d.indices["i've"] == [2]
    _assert_index_consistent(d)


def test_learn_is_idempotent_per_sentence():
    d = Dictionary.new_empty()
    assert d.learn("Same thing. Same thing.") is True
    assert d.sentences == ["same thing."]
    assert d.learn("SAME THING.") is False
    assert d.sentences == ["same thing."]
    assert d.learn("") is False


def test_learn_without_resort_keeps_positions():
    d = Dictionary.new_empty()
    d.learn("zebra stripes.")
    d.learn("apple pie.")
    # incremental learning never resorts
    assert d.sentences == ["zebra stripes.", "apple pie."]
    d.rebuild_indices()
    assert d.sentences == ["apple pie.", "zebra stripes."]
    assert d.indices["zebra"] == [1]
    _assert_index_consistent(d)


def test_known_words_keeps_order_and_duplicates():
    d = Dictionary(
        sentences=["hello world!", "i love pizza."],
        indices={"hello": [0], "world": [0], "i": [1], "love": [1], "pizza": [1]},
    )
    assert d.known_words("I Love Pizza") == ["i", "love", "pizza"]
    assert d.known_words("I Hate Pizza!") == ["i", "pizza"]
    assert d.known_words("pizza, pizza and PIZZA") == ["pizza", "pizza", "pizza"]
    assert d.known_words("foo likes cake") == []
    assert d.known_words("pizzacake") == []


def test_sentences_with_word():
    d = Dictionary(
        sentences=["hello world!", "i love pizza.", "pizza is like, cool"],
        indices={
            "hello": [0], "world": [0], "i": [1], "love": [1],
            "pizza": [1, 2], "is": [2], "like": [2], "cool": [2],
        },
    )
    assert d.sentences_with_word("pizza") == ["i love pizza.", "pizza is like, cool"]
    assert d.sentences_with_word("love") == ["i love pizza."]
    assert d.sentences_with_word("nonexisting") == []
    assert d.sentences_with_word("") == []
