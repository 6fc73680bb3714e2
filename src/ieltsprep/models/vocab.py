"""Vocabulary and review-state data structures."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class VocabCategory(Enum):
    """Closed set of vocabulary categories."""
    ACADEMIC = "academic"
    ENVIRONMENT = "environment"
    TECHNOLOGY = "technology"
    SOCIETY = "society"
    HEALTH = "health"
    EDUCATION = "education"
    BUSINESS = "business"
    OPINION = "opinion"
    LINKING = "linking"
    DAILY = "daily"


class VocabDifficulty(Enum):
    """Difficulty tier of a word."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class PartOfSpeech(Enum):
    """Part of speech of a headword."""
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    PHRASE = "phrase"


@dataclass(frozen=True)
class VocabWord:
    """A catalog entry. Only id and category matter for scheduling."""
    id: str
    word: str
    category: VocabCategory
    difficulty: VocabDifficulty
    part_of_speech: PartOfSpeech = PartOfSpeech.NOUN
    english_meaning: str = ""
    bangla_meaning: str = ""
    example: str = ""
    example_bangla: str = ""
    grammar_tip: Optional[str] = None
    synonyms: Tuple[str, ...] = field(default_factory=tuple)
    collocations: Tuple[str, ...] = field(default_factory=tuple)


@dataclass
class ReviewState:
    """Progress of one learner on one word."""
    review_count: int
    is_learned: bool
    next_review_date: datetime
    last_reviewed_at: Optional[datetime] = None

    @classmethod
    def initial(cls, now: datetime) -> "ReviewState":
        """State of a word that has never been reviewed."""
        return cls(review_count=0, is_learned=False, next_review_date=now)

    def is_due(self, now: datetime) -> bool:
        """Whether the word should be reviewed at ``now``."""
        return self.next_review_date <= now
