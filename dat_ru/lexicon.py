"""
Lexicon - canonical word forms (lemmas) and surface-form lookup

The lemma list order defines the row order of the embedding matrix, so the
lexicon is the single source of lemma -> row index mapping.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import MalformedDictionary

logger = logging.getLogger(__name__)


def fold_word(text: str) -> str:
    """Lowercase, trim and fold "ё" to "е"."""
    return text.lower().strip().replace('ё', 'е')


class Lexicon:
    """Ordered lemma list with O(1) membership, row index and form lookup."""

    def __init__(self, lemmas: Iterable[str], forms: Optional[Mapping[str, str]] = None):
        self._lemmas: Tuple[str, ...] = tuple(lemmas)
        self._word_to_index: Dict[str, int] = {}

        for i, lemma in enumerate(self._lemmas):
            if lemma in self._word_to_index:
                raise MalformedDictionary(
                    f"Duplicate lemma {lemma!r} at rows {self._word_to_index[lemma]} and {i}",
                    word=lemma,
                )
            self._word_to_index[lemma] = i

        self._forms: Dict[str, str] = dict(forms or {})
        for form, lemma in self._forms.items():
            if lemma not in self._word_to_index:
                raise MalformedDictionary(
                    f"Form {form!r} maps to unknown lemma {lemma!r}",
                    word=lemma,
                )

    @classmethod
    def load(cls, lemma_list: Iterable[str], form_map: Optional[Mapping[str, str]] = None) -> 'Lexicon':
        return cls(lemma_list, form_map)

    @classmethod
    def from_files(cls, words_path, forms_path=None) -> 'Lexicon':
        """Load from words.json (list of lemmas) and forms.json ({form: lemma})."""
        words_path = Path(words_path)
        logger.info(f"Loading lemma list from {words_path}")
        with open(words_path, 'r', encoding='utf-8') as f:
            lemmas = json.load(f)
        if not isinstance(lemmas, list):
            raise MalformedDictionary(f"Expected a list in {words_path}, got {type(lemmas).__name__}")

        forms = {}
        if forms_path is not None:
            forms_path = Path(forms_path)
            logger.info(f"Loading word forms from {forms_path}")
            with open(forms_path, 'r', encoding='utf-8') as f:
                forms = json.load(f)
            if not isinstance(forms, dict):
                raise MalformedDictionary(f"Expected an object in {forms_path}, got {type(forms).__name__}")

        lexicon = cls(lemmas, forms)
        logger.info(f"Lexicon loaded: {len(lexicon)} lemmas, {len(forms)} forms")
        return lexicon

    def __len__(self) -> int:
        return len(self._lemmas)

    def __contains__(self, lemma: str) -> bool:
        return lemma in self._word_to_index

    @property
    def lemmas(self) -> Tuple[str, ...]:
        return self._lemmas

    @property
    def form_count(self) -> int:
        return len(self._forms)

    def index_of(self, lemma: str) -> Optional[int]:
        """Row index of a lemma, or None."""
        return self._word_to_index.get(lemma)

    def normalize(self, raw_text: str) -> Optional[str]:
        """
        Resolve raw user text to a lemma.

        The folded text is returned directly when it is itself a lemma,
        otherwise the surface-form map is consulted.
        """
        word = fold_word(raw_text)
        if word in self._word_to_index:
            return word
        return self._forms.get(word)

    def has_word(self, raw_text: str) -> bool:
        return self.normalize(raw_text) is not None

    def indices_of(self, lemmas: Iterable[str]) -> List[Optional[int]]:
        return [self._word_to_index.get(lemma) for lemma in lemmas]
