from typing import Any

import pandas as pd


def normalize_genre(value: Any) -> str | None:
    """Normalize a genre label read from the survey or from a chart click.

    Args:
        value (Any): Raw label. Should be a string.

    Returns:
        str | None: The stripped label, or None if it is missing or blank.
    """
    if isinstance(value, str):
        return value.strip() or None
    if value is None or isinstance(value, list | tuple | set | dict):
        return None
    if pd.isna(value):
        return None
    return str(value).strip() or None


def format_percentage(part: float, total: float) -> str:
    """Format ``part / total`` as a percentage with one decimal place."""
    if not total:
        return "0.0"
    return f"{part / total * 100:.1f}"
