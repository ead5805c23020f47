import logging
import os
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from mxmh.io import load_survey
from mxmh.metrics.metrics import DEFAULT_BAR_LIMIT, DEFAULT_TOP_N

# Only override environment variables in explicit local/test scenarios to prevent overwriting deploy-time env vars
should_override = os.environ.get("ENVIRONMENT", "") in ["local", "dev", "development", "test"]
load_dotenv(override=should_override)

# Configure logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def get_survey_path() -> str:
    """Get the path to the survey CSV from environment or default.

    Returns:
        str: Resolved path to the survey CSV file.

    Raises:
        OSError: If the file does not exist.
    """
    csv_path = os.getenv("MXMH_CSV", "data/mxmh_survey_results.csv")

    # Expand environment variables and user home before checking
    expanded_path = os.path.expanduser(os.path.expandvars(csv_path))

    if not Path(expanded_path).exists():
        logger.error(
            "Survey CSV not found at resolved path '%s' (set MXMH_CSV to override)",
            expanded_path,
        )
        raise OSError(
            f"Survey CSV not found at resolved path '{expanded_path}' (set MXMH_CSV to override)"
        )

    return expanded_path


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default


def get_top_n() -> int:
    """Number of genres shown individually in the donut and Sankey charts."""
    return _int_setting("MXMH_TOP_N", DEFAULT_TOP_N)


def get_bar_limit() -> int:
    """Number of genres shown in the grouped bar chart."""
    return _int_setting("MXMH_BAR_LIMIT", DEFAULT_BAR_LIMIT)


def load_survey_data() -> pd.DataFrame:
    """Load the survey CSV configured for this deployment.

    Returns:
        pd.DataFrame: Coerced survey rows.
    """
    path = get_survey_path()
    try:
        return load_survey(path)
    except Exception as e:
        logger.error("Failed to load survey data: %s", e)
        raise
