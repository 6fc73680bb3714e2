"""Tests for content providers."""
import json
from pathlib import Path

import pytest

from ieltsprep.config import DEFAULT_VOCABULARY_FILE
from ieltsprep.errors import InvalidConfiguration
from ieltsprep.models.vocab import PartOfSpeech, VocabCategory, VocabDifficulty
from ieltsprep.services.catalog_service import CategoryIndex, ContentCatalog
from ieltsprep.services.content_provider import JsonContentProvider, word_from_dict


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def test_word_from_dict() -> None:
    """Test converting a content entry."""
    word = word_from_dict({
        "id": "mitigate",
        "word": "mitigate",
        "category": "environment",
        "difficulty": "advanced",
        "part_of_speech": "verb",
        "english_meaning": "to make less severe",
        "synonyms": ["alleviate", "reduce"],
    })

    assert word.category is VocabCategory.ENVIRONMENT
    assert word.difficulty is VocabDifficulty.ADVANCED
    assert word.part_of_speech is PartOfSpeech.VERB
    assert word.synonyms == ("alleviate", "reduce")
    assert word.collocations == ()
    assert word.grammar_tip is None


def test_word_from_dict_rejects_unknown_category() -> None:
    """Test an entry with a category outside the closed set."""
    with pytest.raises(InvalidConfiguration):
        word_from_dict({"id": "x", "word": "x", "category": "sports", "difficulty": "beginner"})


def test_word_from_dict_requires_id() -> None:
    """Test an entry without an id."""
    with pytest.raises(InvalidConfiguration):
        word_from_dict({"word": "x", "category": "health", "difficulty": "beginner"})


def test_json_provider_loads_file(tmp_path: Path) -> None:
    """Test loading words from a JSON file."""
    path = _write(tmp_path / "words.json", [
        {"id": "a", "word": "a", "category": "health", "difficulty": "beginner"},
        {"id": "b", "word": "b", "category": "business", "difficulty": "advanced"},
    ])

    words = JsonContentProvider(path).load_words()
    assert [word.id for word in words] == ["a", "b"]


def test_json_provider_missing_file(tmp_path: Path) -> None:
    """Test a missing content file."""
    with pytest.raises(InvalidConfiguration):
        JsonContentProvider(tmp_path / "missing.json").load_words()


def test_json_provider_requires_list(tmp_path: Path) -> None:
    """Test a content file that is not a list."""
    path = _write(tmp_path / "words.json", {"id": "a"})
    with pytest.raises(InvalidConfiguration):
        JsonContentProvider(path).load_words()


def test_bundled_vocabulary() -> None:
    """Test the vocabulary shipped with the package."""
    catalog = ContentCatalog.from_provider(JsonContentProvider(DEFAULT_VOCABULARY_FILE))
    index = CategoryIndex(catalog)

    assert catalog.size() == 190
    assert catalog.get_by_id("furthermore").bangla_meaning == "তাছাড়া"
    assert len(index.get_by_category(VocabCategory.LINKING)) == 42
    assert len(index.get_by_category(VocabCategory.ACADEMIC)) == 45
    assert index.get_by_category(VocabCategory.DAILY) == ()
