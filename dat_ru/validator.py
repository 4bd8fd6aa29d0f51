"""
Validator - per-slot acceptability checks for user-entered words

Outcomes are values the caller renders next to each input slot; nothing here
raises for bad user input. Accepted-word state is owned by the caller.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Collection, Iterable, List, Optional

from .lexicon import Lexicon

LATIN_PATTERN = re.compile(r'[a-zA-Z]')
WHITESPACE_PATTERN = re.compile(r'\s')
CYRILLIC_WORD_PATTERN = re.compile(r'^[а-яёА-ЯЁ-]+$')


class ValidationStatus(Enum):
    EMPTY = 'empty'
    CONTAINS_NON_CYRILLIC = 'contains_non_cyrillic'
    MULTIPLE_WORDS = 'multiple_words'
    INVALID_CHARACTERS = 'invalid_characters'
    UNKNOWN_WORD = 'unknown_word'
    DUPLICATE = 'duplicate'
    ACCEPTED = 'accepted'


MESSAGES = {
    ValidationStatus.EMPTY: '',
    ValidationStatus.CONTAINS_NON_CYRILLIC: 'Только русские буквы',
    ValidationStatus.MULTIPLE_WORDS: 'Одно слово',
    ValidationStatus.INVALID_CHARACTERS: 'Только буквы',
    ValidationStatus.UNKNOWN_WORD: 'Нет в словаре',
    ValidationStatus.DUPLICATE: 'Повтор',
    ValidationStatus.ACCEPTED: '',
}


@dataclass(frozen=True)
class ValidationOutcome:
    status: ValidationStatus
    lemma: Optional[str] = None  # resolved lemma for ACCEPTED, the clashing lemma for DUPLICATE

    @property
    def accepted(self) -> bool:
        return self.status is ValidationStatus.ACCEPTED

    @property
    def message(self) -> str:
        return MESSAGES[self.status]


@dataclass
class CandidateEntry:
    """One input slot. Mutated on every edit, reset between attempts."""
    raw_text: str = ''
    lemma: Optional[str] = None
    outcome: ValidationOutcome = field(default_factory=lambda: ValidationOutcome(ValidationStatus.EMPTY))

    def reset(self):
        self.raw_text = ''
        self.lemma = None
        self.outcome = ValidationOutcome(ValidationStatus.EMPTY)


def validate(lexicon: Lexicon, raw_input: str, already_accepted: Collection[str] = ()) -> ValidationOutcome:
    """
    Classify one raw input.

    Script and shape checks run before the dictionary lookup; the duplicate
    check compares resolved lemmas, not raw text.
    """
    raw = raw_input.strip()

    if not raw:
        return ValidationOutcome(ValidationStatus.EMPTY)
    if LATIN_PATTERN.search(raw):
        return ValidationOutcome(ValidationStatus.CONTAINS_NON_CYRILLIC)
    if WHITESPACE_PATTERN.search(raw):
        return ValidationOutcome(ValidationStatus.MULTIPLE_WORDS)
    if not CYRILLIC_WORD_PATTERN.match(raw):
        return ValidationOutcome(ValidationStatus.INVALID_CHARACTERS)

    lemma = lexicon.normalize(raw)
    if lemma is None:
        return ValidationOutcome(ValidationStatus.UNKNOWN_WORD)

    if lemma in already_accepted:
        return ValidationOutcome(ValidationStatus.DUPLICATE, lemma)

    return ValidationOutcome(ValidationStatus.ACCEPTED, lemma)


def validate_entries(lexicon: Lexicon, entries: List[CandidateEntry]) -> List[CandidateEntry]:
    """
    Re-validate every slot in order; earlier slots win duplicate clashes.

    Only the later slot of a clashing pair is marked DUPLICATE, so the slot
    that stays ACCEPTED is the one collect_valid_lemmas keeps. The web form
    this replaces flagged both slots of the pair.
    """
    accepted = set()
    for entry in entries:
        outcome = validate(lexicon, entry.raw_text, accepted)
        entry.outcome = outcome
        entry.lemma = outcome.lemma if outcome.accepted else None
        if outcome.accepted:
            accepted.add(outcome.lemma)
    return entries


def collect_valid_lemmas(lexicon: Lexicon, entries: Iterable) -> List[str]:
    """
    Distinct lemmas in slot order, first occurrence kept.

    Entries may be raw strings or CandidateEntry objects. The scorer takes the
    leading lemmas of this list, so the order here decides what gets scored.
    """
    result = []
    seen = set()
    for entry in entries:
        raw = entry.raw_text if isinstance(entry, CandidateEntry) else entry
        lemma = lexicon.normalize(raw)
        if lemma and lemma not in seen:
            seen.add(lemma)
            result.append(lemma)
    return result
