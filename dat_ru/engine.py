"""
Engine - the loaded lexicon and embedding matrix for one session

Construct once at startup and pass it to whatever drives the form; it holds
no per-attempt state, so repeated validate/score calls can share it freely.
"""

import logging
import time
from pathlib import Path
from typing import Collection, Dict, Iterable, List, Optional

from .calibration import POWER, Calibration
from .config import EngineConfig, load_config
from .embedding_store import DIM, EmbeddingStore
from .errors import SizeMismatch
from .lexicon import Lexicon
from .scorer import WORDS_REQUIRED, Scorer, ScoringResult
from .validator import CandidateEntry, ValidationOutcome, collect_valid_lemmas, validate, validate_entries

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, lexicon: Lexicon, store: EmbeddingStore,
                 calibration: Calibration = POWER, words_required: int = WORDS_REQUIRED):
        if store.num_words != len(lexicon):
            raise SizeMismatch(len(lexicon), store.num_words, what="matrix rows vs lexicon lemmas")
        self.lexicon = lexicon
        self.store = store
        self.scorer = Scorer(lexicon, store, calibration=calibration, words_required=words_required)

    @classmethod
    def from_config(cls, config) -> 'Engine':
        """Build from an EngineConfig or a path to params.yaml."""
        if not isinstance(config, EngineConfig):
            config = load_config(config)

        logger.info(f"Loading engine assets from {config.data_dir}")
        start_time = time.time()

        lexicon = Lexicon.from_files(config.words_path, config.forms_path)
        store = EmbeddingStore.from_file(config.matrix_path, expected_dim=config.dimension)
        engine = cls(lexicon, store,
                     calibration=config.build_calibration(),
                     words_required=config.words_required)

        logger.info(f"Engine ready in {time.time() - start_time:.2f}s: "
                    f"{len(lexicon)} lemmas, calibration={engine.calibration.name}")
        return engine

    @classmethod
    def from_directory(cls, data_dir, calibration: str = POWER.name, expected_dim: int = DIM) -> 'Engine':
        forms_file = 'forms.json' if (Path(data_dir) / 'forms.json').exists() else None
        config = EngineConfig(data_dir=Path(data_dir), forms_file=forms_file,
                              dimension=expected_dim, calibration=calibration)
        return cls.from_config(config)

    @property
    def calibration(self) -> Calibration:
        return self.scorer.calibration

    @property
    def words_required(self) -> int:
        return self.scorer.words_required

    def normalize(self, raw_text: str) -> Optional[str]:
        return self.lexicon.normalize(raw_text)

    def validate(self, raw_input: str, already_accepted: Collection[str] = ()) -> ValidationOutcome:
        return validate(self.lexicon, raw_input, already_accepted)

    def validate_entries(self, entries: List[CandidateEntry]) -> List[CandidateEntry]:
        return validate_entries(self.lexicon, entries)

    def collect_valid_lemmas(self, entries: Iterable) -> List[str]:
        return collect_valid_lemmas(self.lexicon, entries)

    def can_submit(self, entries: Iterable) -> bool:
        return len(self.collect_valid_lemmas(entries)) >= self.words_required

    def score(self, lemmas) -> ScoringResult:
        return self.scorer.score(lemmas)

    def score_entries(self, entries: Iterable) -> ScoringResult:
        """Score the first distinct valid lemmas of the given slots."""
        return self.scorer.score(self.collect_valid_lemmas(entries))

    def get_stats(self) -> Dict:
        return {
            'total_words': len(self.lexicon),
            'total_forms': self.lexicon.form_count,
            'dimension': self.store.dimension,
            'memory_usage_mb': self.store.nbytes / 1024 / 1024,
            'calibration': self.calibration.name,
        }
