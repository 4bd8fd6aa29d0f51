"""
Engine configuration loaded from params.yaml.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from .calibration import CALIBRATIONS, DEFAULT_CALIBRATION, Calibration, get_calibration
from .embedding_store import DIM
from .errors import ConfigError
from .scorer import MIN_WORDS_REQUIRED, WORDS_REQUIRED

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Asset locations and scoring parameters"""
    data_dir: Path = Path('data')
    words_file: str = 'words.json'
    forms_file: Optional[str] = 'forms.json'
    matrix_file: str = 'matrix.bin'
    dimension: int = DIM
    words_required: int = WORDS_REQUIRED
    calibration: str = DEFAULT_CALIBRATION
    calibration_params: Dict[str, float] = field(default_factory=dict)

    @property
    def words_path(self) -> Path:
        return self.data_dir / self.words_file

    @property
    def forms_path(self) -> Optional[Path]:
        return self.data_dir / self.forms_file if self.forms_file else None

    @property
    def matrix_path(self) -> Path:
        return self.data_dir / self.matrix_file

    def build_calibration(self) -> Calibration:
        try:
            return get_calibration(self.calibration, **self.calibration_params)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_dict(cls, data: Dict, base_dir: Optional[Path] = None) -> 'EngineConfig':
        paths = data.get('paths') or {}
        embeddings = data.get('embeddings') or {}
        scoring = data.get('scoring') or {}

        data_dir = Path(paths.get('data_dir', 'data'))
        if base_dir is not None and not data_dir.is_absolute():
            data_dir = base_dir / data_dir

        calibration = scoring.get('calibration', DEFAULT_CALIBRATION)
        if calibration not in CALIBRATIONS:
            raise ConfigError(f"Unknown calibration {calibration!r}, expected one of {sorted(CALIBRATIONS)}")

        dimension = int(embeddings.get('dimension', DIM))
        if dimension != DIM:
            raise ConfigError(f"embeddings.dimension must be {DIM}, got {dimension}")

        words_required = int(scoring.get('words_required', WORDS_REQUIRED))
        if words_required < MIN_WORDS_REQUIRED:
            raise ConfigError(f"scoring.words_required must be at least {MIN_WORDS_REQUIRED}, got {words_required}")

        config = cls(
            data_dir=data_dir,
            words_file=paths.get('words', 'words.json'),
            forms_file=paths.get('forms', 'forms.json'),
            matrix_file=paths.get('matrix', 'matrix.bin'),
            dimension=dimension,
            words_required=words_required,
            calibration=calibration,
            calibration_params=dict(scoring.get('calibration_params') or {}),
        )
        # Validates override keys
        config.build_calibration()
        return config


def load_config(config_path) -> EngineConfig:
    """Load engine configuration; relative paths resolve against the file's directory."""
    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(f"Configuration file not found: {config_path}")
        raise ConfigError(f"Configuration file not found: {config_path}") from None
    except yaml.YAMLError as e:
        logger.error(f"Error parsing configuration file: {e}")
        raise ConfigError(f"Error parsing configuration file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {config_path}")

    return EngineConfig.from_dict(data, base_dir=config_path.parent)
