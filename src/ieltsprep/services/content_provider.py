"""Read-only providers of vocabulary content."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol, Sequence, Tuple

from ieltsprep.errors import InvalidConfiguration
from ieltsprep.models.vocab import PartOfSpeech, VocabCategory, VocabDifficulty, VocabWord

logger = logging.getLogger(__name__)


class ContentProvider(Protocol):
    """Supplies the vocabulary entries loaded into the catalog."""

    def load_words(self) -> Sequence[VocabWord]:
        ...


def _enum_value(enum_cls, raw: Any, field_name: str, word_id: str):
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError as e:
        raise InvalidConfiguration(f"Word {word_id!r} has invalid {field_name} {raw!r}") from e


def _as_tuple(raw: Any) -> Tuple[str, ...]:
    if raw is None:
        return ()
    return tuple(str(item) for item in raw)


def word_from_dict(data: Dict[str, Any]) -> VocabWord:
    """Build a VocabWord from a plain mapping as stored in the content file."""
    word_id = str(data.get("id") or "").strip()
    headword = str(data.get("word") or "").strip()
    if not word_id or not headword:
        raise InvalidConfiguration(f"Vocabulary entry needs 'id' and 'word': {data!r}")

    return VocabWord(
        id=word_id,
        word=headword,
        category=_enum_value(VocabCategory, data.get("category"), "category", word_id),
        difficulty=_enum_value(VocabDifficulty, data.get("difficulty"), "difficulty", word_id),
        part_of_speech=_enum_value(
            PartOfSpeech, data.get("part_of_speech", PartOfSpeech.NOUN.value), "part_of_speech", word_id
        ),
        english_meaning=data.get("english_meaning", ""),
        bangla_meaning=data.get("bangla_meaning", ""),
        example=data.get("example", ""),
        example_bangla=data.get("example_bangla", ""),
        grammar_tip=data.get("grammar_tip"),
        synonyms=_as_tuple(data.get("synonyms")),
        collocations=_as_tuple(data.get("collocations")),
    )


class JsonContentProvider:
    """Loads words from a JSON file holding a list of objects."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load_words(self) -> List[VocabWord]:
        if not self.path.exists():
            raise InvalidConfiguration(f"Vocabulary file not found: {self.path}")

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise InvalidConfiguration("Vocabulary file must contain a list of objects")

        words = [word_from_dict(item) for item in data]
        logger.info(f"Loaded {len(words)} words from {self.path}")
        return words


class StaticContentProvider:
    """Serves an in-memory sequence of words, used for synthetic catalogs."""

    def __init__(self, words: Iterable[VocabWord]):
        self._words = tuple(words)

    def load_words(self) -> Tuple[VocabWord, ...]:
        return self._words
