from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from mxmh.io import DEPRESSION_COLUMN, GENRE_COLUMN

SCORE_MIN: float = 0.0
SCORE_MAX: float = 10.0


def valid_genre_mask(df: pd.DataFrame) -> pd.Series:
    """Boolean mask of rows whose genre label is present and non-blank."""
    if df.empty:
        return pd.Series(False, index=df.index, dtype=bool)
    genres = df[GENRE_COLUMN].astype("string").str.strip()
    return (genres.notna() & genres.ne("")).fillna(False).astype(bool)


def valid_depression_mask(df: pd.DataFrame) -> pd.Series:
    """Boolean mask of rows whose depression score is numeric and in [0, 10]."""
    if df.empty or DEPRESSION_COLUMN not in df.columns:
        return pd.Series(False, index=df.index, dtype=bool)
    scores = pd.to_numeric(df[DEPRESSION_COLUMN], errors="coerce")
    return scores.between(SCORE_MIN, SCORE_MAX).fillna(False).astype(bool)


def filter_valid_genres(df: pd.DataFrame) -> pd.DataFrame:
    """Keep respondents with a non-empty favourite genre.

    Args:
        df (pd.DataFrame): Survey rows.

    Returns:
        pd.DataFrame: A copy holding only rows with a genre label.
    """
    return df.loc[valid_genre_mask(df)].copy()


def filter_flow_records(df: pd.DataFrame) -> pd.DataFrame:
    """Keep respondents usable for the genre to depression flow.

    A row qualifies when it has a genre label and a numeric depression
    score within [0, 10]. Anything else is dropped without error.
    """
    mask = valid_genre_mask(df) & valid_depression_mask(df)
    return df.loc[mask].copy()


def apply_selection_filter(df: pd.DataFrame, selection: Iterable[str] | None) -> pd.DataFrame:
    """Restrict survey rows to the currently selected genres.

    An empty (or None) selection means "no filter" and the input is
    returned unchanged. Otherwise only rows whose genre is a member of the
    selection are kept.

    Args:
        df (pd.DataFrame): Survey rows.
        selection (Iterable[str] | None): Selected genre labels.

    Returns:
        pd.DataFrame: The input itself for an empty selection, otherwise a
            filtered copy.
    """
    selected = set(selection or ())
    if not selected:
        return df
    if df.empty:
        return df.copy()
    genres = df[GENRE_COLUMN].astype("string").str.strip()
    mask = genres.isin(selected).fillna(False).astype(bool)
    return df.loc[mask].copy()
