import json
import random

import pytest

from chatwordle.services.lexicon_service import LexiconError, WordListLexicon


@pytest.fixture()
def packaged_lexicon():
    return WordListLexicon.from_file(rng=random.Random(7))


def write_lexicon(tmp_path, data):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_packaged_lexicon_loads_and_validates(packaged_lexicon):
    assert packaged_lexicon.validate_integrity() is True
    assert "CRANE" in packaged_lexicon.answers


def test_random_word_is_uppercase_target(packaged_lexicon):
    for _ in range(20):
        word = packaged_lexicon.get_random_word(5)
        assert word.isupper()
        assert len(word) == 5
        assert word in packaged_lexicon.answers


def test_random_word_is_reproducible_with_seeded_rng():
    first = WordListLexicon.from_file(rng=random.Random(42))
    second = WordListLexicon.from_file(rng=random.Random(42))

    assert [first.get_random_word(5) for _ in range(5)] == [second.get_random_word(5) for _ in range(5)]


def test_no_word_of_requested_length(packaged_lexicon):
    with pytest.raises(LexiconError):
        packaged_lexicon.get_random_word(7)


def test_validation_accepts_answers_and_allowed_words_case_insensitively(packaged_lexicon):
    assert packaged_lexicon.is_valid_word("crane")
    assert packaged_lexicon.is_valid_word("ADIEU")
    assert not packaged_lexicon.is_valid_word("ZZZZZ")
    assert not packaged_lexicon.is_valid_word(None)


def test_definition_lookup(packaged_lexicon):
    entry = packaged_lexicon.get_definition("crane")

    assert entry.meanings
    assert entry.examples


def test_definition_absent_for_allowed_only_or_empty_entry(packaged_lexicon):
    assert packaged_lexicon.get_definition("ADIEU") is None
    assert packaged_lexicon.get_definition("MAGIC") is None


def test_statistics(packaged_lexicon):
    stats = packaged_lexicon.statistics()

    assert stats["total_words"] == len(packaged_lexicon.answers)
    assert stats["valid_words"] > stats["total_words"]
    assert len(stats["most_common_letters"]) == 5


def test_missing_file_raises(tmp_path):
    with pytest.raises(LexiconError):
        WordListLexicon.from_file(str(tmp_path / "missing.json"))


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LexiconError):
        WordListLexicon.from_file(str(path))


def test_missing_answers_raises(tmp_path):
    with pytest.raises(LexiconError):
        WordListLexicon.from_file(write_lexicon(tmp_path, {"allowed": ["CRANE"]}))


def test_non_alphabetic_word_raises(tmp_path):
    with pytest.raises(LexiconError):
        WordListLexicon.from_file(write_lexicon(tmp_path, {"answers": {"CR4NE": {}}}))


def test_word_in_both_lists_raises(tmp_path):
    data = {"answers": {"crane": {"meanings": ["bird"]}}, "allowed": ["CRANE"]}

    with pytest.raises(LexiconError):
        WordListLexicon.from_file(write_lexicon(tmp_path, data))


def test_lowercase_file_words_are_normalized(tmp_path):
    data = {"answers": {"crane": {"meanings": ["bird"], "examples": []}}, "allowed": ["slate"]}

    lexicon = WordListLexicon.from_file(write_lexicon(tmp_path, data))

    assert lexicon.get_random_word(5) == "CRANE"
    assert lexicon.is_valid_word("SLATE")
    assert lexicon.get_definition("CRANE").meanings == ["bird"]
