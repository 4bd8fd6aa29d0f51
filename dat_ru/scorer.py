"""
Scorer - Divergent Association Task scoring

Scores the first 7 distinct lemmas: the mean cosine distance over all 21
pairs, on a 0-100 scale, passed through a calibration strategy.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .calibration import POWER, Calibration
from .embedding_store import EmbeddingStore
from .errors import InsufficientWords, UnknownLemma
from .lexicon import Lexicon

logger = logging.getLogger(__name__)

WORDS_REQUIRED = 7
MIN_WORDS_REQUIRED = 2  # at least one pair to average

SCORE_BANDS = [
    (60, 'Низкий балл. Слова слишком связаны между собой.'),
    (70, 'Ниже среднего. Есть куда расти.'),
    (78, 'Чуть ниже среднего. Неплохо!'),
    (83, 'Выше среднего! Хорошее дивергентное мышление.'),
    (90, 'Отлично! Высокая вербальная креативность.'),
]
TOP_BAND = 'Исключительно! Такие баллы — редкость.'


def _distance(dot: int, norm_a: int, norm_b: int) -> float:
    if norm_a == 0 or norm_b == 0:
        return 0.0
    # Integer product under one sqrt keeps d(v, v) exactly 0
    return 1.0 - dot / math.sqrt(norm_a * norm_b)


def cosine_distance(vec_a: np.ndarray, vec_b: np.ndarray) -> float:
    """
    1 - cosine similarity of two integer vectors.

    Accumulates in int64 so int8 components cannot overflow. A zero vector
    on either side gives 0.0.
    """
    a = np.asarray(vec_a, dtype=np.int64)
    b = np.asarray(vec_b, dtype=np.int64)
    return _distance(int(np.dot(a, b)), int(np.dot(a, a)), int(np.dot(b, b)))


@dataclass(frozen=True)
class PairDistance:
    i: int
    j: int
    distance: float


def pairwise_distances(vectors: Sequence[np.ndarray]) -> List[PairDistance]:
    """Distances for every pair i < j, in row-major pair order."""
    stacked = np.stack([np.asarray(v, dtype=np.int64) for v in vectors])
    gram = stacked @ stacked.T

    pairs = []
    n = len(stacked)
    for i in range(n):
        for j in range(i + 1, n):
            dist = _distance(int(gram[i, j]), int(gram[i, i]), int(gram[j, j]))
            pairs.append(PairDistance(i, j, dist))
    return pairs


@dataclass(frozen=True)
class ScoringResult:
    words: Tuple[str, ...]
    distances: Tuple[PairDistance, ...]
    raw_score: float
    score: float
    calibration: str

    @property
    def average_distance(self) -> float:
        return self.raw_score / 100

    def distance_matrix(self) -> np.ndarray:
        """Symmetric n x n matrix of pair distances, zero diagonal."""
        n = len(self.words)
        matrix = np.zeros((n, n), dtype=np.float64)
        for pair in self.distances:
            matrix[pair.i, pair.j] = pair.distance
            matrix[pair.j, pair.i] = pair.distance
        return matrix

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.distance_matrix(), index=list(self.words), columns=list(self.words))

    def heat_levels(self) -> List[float]:
        """Pair distances rescaled to [0, 1] between the closest and farthest pair."""
        values = [pair.distance for pair in self.distances]
        lo, hi = min(values), max(values)
        if hi <= lo:
            return [0.5] * len(values)
        return [(v - lo) / (hi - lo) for v in values]

    def to_dict(self) -> Dict:
        return {
            'score': self.score,
            'raw_score': self.raw_score,
            'words': list(self.words),
            'distances': [asdict(pair) for pair in self.distances],
            'calibration': self.calibration,
        }


def describe_score(score: float) -> str:
    for upper, label in SCORE_BANDS:
        if score < upper:
            return label
    return TOP_BAND


class Scorer:
    """Computes ScoringResult values against one lexicon and matrix."""

    def __init__(self, lexicon: Lexicon, store: EmbeddingStore,
                 calibration: Calibration = POWER, words_required: int = WORDS_REQUIRED):
        if words_required < MIN_WORDS_REQUIRED:
            raise ValueError(f"words_required must be at least {MIN_WORDS_REQUIRED}, got {words_required}")
        self.lexicon = lexicon
        self.store = store
        self.calibration = calibration
        self.words_required = words_required

    def score(self, lemmas: Sequence[str]) -> ScoringResult:
        distinct = list(dict.fromkeys(lemmas))
        if len(distinct) < self.words_required:
            raise InsufficientWords(self.words_required, len(distinct))

        score_words = distinct[:self.words_required]

        vectors = []
        for lemma in score_words:
            row = self.lexicon.index_of(lemma)
            if row is None:
                raise UnknownLemma(lemma)
            vectors.append(self.store.vector(row))

        distances = pairwise_distances(vectors)
        total = sum(pair.distance for pair in distances)
        raw_score = total / len(distances) * 100
        score = self.calibration(raw_score)

        logger.debug(f"Scored {score_words}: raw={raw_score:.4f}, {self.calibration.name}={score:.4f}")

        return ScoringResult(
            words=tuple(score_words),
            distances=tuple(distances),
            raw_score=raw_score,
            score=score,
            calibration=self.calibration.name,
        )
