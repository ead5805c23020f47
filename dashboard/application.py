"""
Module to create and run the Dash Music & Mental Health survey dashboard.

The survey CSV is loaded once at start-up; every interaction recomputes the
aggregates from that in-memory DataFrame.
"""

import logging
import os
from pathlib import Path

import dash_bootstrap_components as dbc
import dash_mantine_components as dmc  # type: ignore
import pandas as pd
from dash import Dash
from dotenv import load_dotenv

from dashboard.callbacks.callbacks import register_callbacks
from dashboard.conn import get_bar_limit, get_top_n, load_survey_data
from dashboard.layouts.layouts import create_layout

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(asctime)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Only override environment variables in explicit local/test scenarios to prevent overwriting deploy-time env vars
should_override = os.environ.get("ENVIRONMENT", "") in ["local", "dev", "development", "test"]
load_dotenv(override=should_override)


def create_app(survey_df: pd.DataFrame | None = None) -> Dash:
    """Create and configure the Dash application.

    Loads the survey data (unless a DataFrame is supplied), sets up the app
    layout and callbacks, and returns the Dash app instance.

    Args:
        survey_df (pd.DataFrame | None): Preloaded, coerced survey rows.
            When omitted the CSV configured by MXMH_CSV is loaded.

    Returns:
        Dash: Configured Dash application.

    Raises:
        OSError: If the configured survey CSV does not exist.
        ValueError: If the CSV lacks the favourite-genre column.
    """
    # Path to dashboard assets directory
    assets_path = Path(__file__).parent / "assets"
    # Initialize Dash app with external Bootstrap stylesheet
    app = Dash(
        __name__,
        assets_folder=str(assets_path),
        external_stylesheets=[dbc.themes.BOOTSTRAP],
        title="Music & Mental Health",
    )

    if survey_df is None:
        try:
            survey_df = load_survey_data()
        except Exception:
            logger.exception("Error loading survey data:")
            raise

    top_n = get_top_n()
    bar_limit = get_bar_limit()

    # Initialize app layout and register callbacks
    logger.info("Initializing layout and callbacks...")
    app.layout = dmc.MantineProvider(
        id="mantine-provider",
        defaultColorScheme="light",
        withCssVariables=True,
        theme={
            "primaryColor": "blue",
        },
        children=create_layout(survey_df, top_n, bar_limit),
    )
    register_callbacks(app, survey_df, top_n, bar_limit)
    logger.info("App initialization complete.")

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
