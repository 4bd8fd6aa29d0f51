"""
Score calibration strategies.

Both strategies share one form, adjusted = scale * (raw / 100) ** exponent + offset:

- linear: the plain average distance on a 0-100 scale (scale=100, exponent=1, offset=0)
- power:  fitted on 5000 random 7-word sets so the random median (raw ~87)
          lands at ~78, related words (raw ~52) at ~54, far sets (raw ~95)
          at ~89; reaching 100 needs raw ~102
"""

from dataclasses import dataclass, replace
from typing import Dict


@dataclass(frozen=True)
class Calibration:
    name: str
    scale: float
    exponent: float
    offset: float

    def __call__(self, raw_score: float) -> float:
        x = raw_score / 100
        return self.scale * x ** self.exponent + self.offset

    def with_params(self, **params) -> 'Calibration':
        unknown = set(params) - {'scale', 'exponent', 'offset'}
        if unknown:
            raise ValueError(f"Unknown calibration parameters: {sorted(unknown)}")
        return replace(self, **{k: float(v) for k, v in params.items()})


LINEAR = Calibration('linear', scale=100.0, exponent=1.0, offset=0.0)
POWER = Calibration('power', scale=47.4548, exponent=3.3820, offset=48.5157)

CALIBRATIONS: Dict[str, Calibration] = {
    LINEAR.name: LINEAR,
    POWER.name: POWER,
}

DEFAULT_CALIBRATION = POWER.name


def get_calibration(name: str = DEFAULT_CALIBRATION, **params) -> Calibration:
    """Look up a named strategy, optionally overriding its constants."""
    try:
        calibration = CALIBRATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown calibration {name!r}, expected one of {sorted(CALIBRATIONS)}") from None
    if params:
        calibration = calibration.with_params(**params)
    return calibration
