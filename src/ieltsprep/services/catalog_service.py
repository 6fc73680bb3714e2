"""Immutable word catalog and the category index derived from it."""
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from ieltsprep.errors import InvalidConfiguration, NotFound
from ieltsprep.models.vocab import VocabCategory, VocabWord
from ieltsprep.services.content_provider import ContentProvider


class ContentCatalog:
    """Ordered, read-only collection of vocabulary entries.

    The catalog is never mutated after construction, so it can be shared
    between threads without locking.
    """

    def __init__(self, words: Iterable[VocabWord]):
        ordered = tuple(words)
        by_id: Dict[str, VocabWord] = {}
        for word in ordered:
            if word.id in by_id:
                raise InvalidConfiguration(f"Duplicate word id {word.id!r} in catalog")
            by_id[word.id] = word
        self._words = ordered
        self._by_id = MappingProxyType(by_id)

    @classmethod
    def from_provider(cls, provider: ContentProvider) -> "ContentCatalog":
        """Build a catalog from a content provider."""
        return cls(provider.load_words())

    def get_all(self) -> Tuple[VocabWord, ...]:
        """Get all words in catalog order."""
        return self._words

    def get_by_id(self, word_id: str) -> VocabWord:
        """Get a word by its id, raising NotFound if absent."""
        try:
            return self._by_id[word_id]
        except KeyError:
            raise NotFound(word_id) from None

    def size(self) -> int:
        """Number of words in the catalog."""
        return len(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word_id: object) -> bool:
        return word_id in self._by_id

    def __iter__(self) -> Iterator[VocabWord]:
        return iter(self._words)

    def __getitem__(self, index: int) -> VocabWord:
        return self._words[index]


def _coerce_category(category: Union[VocabCategory, str]) -> VocabCategory:
    if isinstance(category, VocabCategory):
        return category
    try:
        return VocabCategory(str(category).strip().lower())
    except ValueError as e:
        raise InvalidConfiguration(f"Unknown category {category!r}") from e


class CategoryIndex:
    """Category to word-id lookup, built once from a catalog."""

    def __init__(self, catalog: ContentCatalog):
        buckets: Dict[VocabCategory, List[str]] = {category: [] for category in VocabCategory}
        for word in catalog.get_all():
            buckets[word.category].append(word.id)
        self._index: Mapping[VocabCategory, Tuple[str, ...]] = MappingProxyType(
            {category: tuple(ids) for category, ids in buckets.items()}
        )

    def get_by_category(self, category: Union[VocabCategory, str]) -> Tuple[str, ...]:
        """Word ids of a category in catalog order; empty when it has no members."""
        return self._index[_coerce_category(category)]

    def categories(self) -> List[VocabCategory]:
        """Categories that have at least one word."""
        return [category for category in VocabCategory if self._index[category]]

    def counts(self) -> Dict[VocabCategory, int]:
        """Number of words per category, including empty ones."""
        return {category: len(ids) for category, ids in self._index.items()}
