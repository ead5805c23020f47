import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

GENRE_COLUMN = "Fav genre"
DEPRESSION_COLUMN = "Depression"

# Survey columns that hold numbers; anything unparseable becomes NaN.
NUMERIC_COLUMNS: tuple[str, ...] = (
    "Age",
    "Hours per day",
    "BPM",
    "Anxiety",
    "Depression",
    "Insomnia",
    "OCD",
)


def coerce_survey_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize a raw survey DataFrame into the shape the metrics expect.

    Numeric columns are converted with ``errors="coerce"`` so malformed
    values become NaN instead of raising. Missing numeric columns are added
    as all-NaN. The genre column is stripped and empty labels become NA.

    Args:
        df (pd.DataFrame): Raw survey rows, one respondent per row.

    Returns:
        pd.DataFrame: A copy with coerced columns.

    Raises:
        ValueError: If the genre column is absent.
    """
    if GENRE_COLUMN not in df.columns:
        raise ValueError(f"Survey data is missing required column '{GENRE_COLUMN}'")

    df = df.copy()
    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        else:
            df[col] = float("nan")

    genres = df[GENRE_COLUMN].astype("string").str.strip()
    df[GENRE_COLUMN] = genres.mask(genres == "")
    return df


def load_survey(path: str | Path) -> pd.DataFrame:
    """Load the Music & Mental Health survey CSV into a DataFrame.

    Args:
        path (str | Path): Path to ``mxmh_survey_results.csv`` or a file
            with the same columns.

    Returns:
        pd.DataFrame: Survey rows with numeric columns coerced.

    Raises:
        OSError: If the file does not exist.
        ValueError: If the genre column is absent.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        logger.error("Survey CSV not found at resolved path '%s'", csv_path)
        raise OSError(f"Survey CSV not found at resolved path '{csv_path}'")

    raw = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    df = coerce_survey_frame(raw)
    logger.info("Loaded %d survey rows from %s", len(df), csv_path)
    return df
