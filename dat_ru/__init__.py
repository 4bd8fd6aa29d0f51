"""
DAT-RU scoring engine

Scores the Russian Divergent Association Task from precomputed int8 word
embeddings:
- Lexicon: lemma list, surface-form lookup, ё/е folding
- EmbeddingStore: binary matrix loading and row views
- Validator: per-slot input checks and ordered lemma collection
- Scorer: pairwise cosine distances and calibrated score
- Engine: the loaded assets bundled for a session

Usage:
    from dat_ru import Engine

    engine = Engine.from_config("params.yaml")
    result = engine.score_entries(["кот", "вулкан", "ложка", ...])
"""

from .calibration import CALIBRATIONS, LINEAR, POWER, Calibration, get_calibration
from .config import EngineConfig, load_config
from .embedding_store import DIM, EmbeddingStore, pack_matrix, write_matrix
from .engine import Engine
from .errors import (
    ConfigError,
    DimensionMismatch,
    EngineError,
    IndexOutOfRange,
    InsufficientWords,
    MalformedDictionary,
    SizeMismatch,
    UnknownLemma,
)
from .lexicon import Lexicon, fold_word
from .scorer import PairDistance, Scorer, ScoringResult, cosine_distance, describe_score, pairwise_distances
from .validator import (
    CandidateEntry,
    ValidationOutcome,
    ValidationStatus,
    collect_valid_lemmas,
    validate,
    validate_entries,
)

__all__ = [
    'CALIBRATIONS',
    'LINEAR',
    'POWER',
    'Calibration',
    'get_calibration',
    'EngineConfig',
    'load_config',
    'DIM',
    'EmbeddingStore',
    'pack_matrix',
    'write_matrix',
    'Engine',
    'ConfigError',
    'DimensionMismatch',
    'EngineError',
    'IndexOutOfRange',
    'InsufficientWords',
    'MalformedDictionary',
    'SizeMismatch',
    'UnknownLemma',
    'Lexicon',
    'fold_word',
    'PairDistance',
    'Scorer',
    'ScoringResult',
    'cosine_distance',
    'describe_score',
    'pairwise_distances',
    'CandidateEntry',
    'ValidationOutcome',
    'ValidationStatus',
    'collect_valid_lemmas',
    'validate',
    'validate_entries',
]

__version__ = '1.0.0'
