from enum import Enum

import pandas as pd

LOW_MAX: float = 3.0
MEDIUM_MAX: float = 7.0


class DepressionBand(str, Enum):
    """Categorical bucket over a 0-10 depression score."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def label(self) -> str:
        return BAND_LABELS[self]


BAND_LABELS: dict[DepressionBand, str] = {
    DepressionBand.LOW: "Low (0-3)",
    DepressionBand.MEDIUM: "Medium (4-7)",
    DepressionBand.HIGH: "High (8-10)",
}

BAND_COLORS: dict[DepressionBand, str] = {
    DepressionBand.LOW: "#57A773",
    DepressionBand.MEDIUM: "#FFD166",
    DepressionBand.HIGH: "#EF476F",
}


def score_to_band(score: float) -> DepressionBand:
    """Map a depression score to its band.

    Scores up to 3 are Low, above 3 up to 7 are Medium, and anything higher
    is High. Callers are expected to have dropped NaN and out-of-range
    scores already.
    """
    if score <= LOW_MAX:
        return DepressionBand.LOW
    if score <= MEDIUM_MAX:
        return DepressionBand.MEDIUM
    return DepressionBand.HIGH


def scores_to_bands(scores: pd.Series) -> pd.Series:
    """Vectorized ``score_to_band`` returning a Series of DepressionBand."""
    return scores.map(score_to_band)
