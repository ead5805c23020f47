"""Simple CLI for the Music & Mental Health survey dashboard.

Provides a `summary` command that prints the genre distribution and the
genre to depression-band flow for a survey CSV, and a `serve` command that
runs the Dash app.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from mxmh.io import load_survey
from mxmh.metrics.metrics import (
    DEFAULT_TOP_N,
    compute_genre_depression_flow,
    compute_genre_distribution,
    top_flow_genres,
)
from mxmh.preprocessing import apply_selection_filter
from mxmh.selection import SelectionState, on_toggle_genre, summarize_selection


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main() -> None:
    """Music & Mental Health survey CLI."""


@main.command("summary")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(path_type=Path),
    default=Path("data/mxmh_survey_results.csv"),
    show_default=True,
    help="Path to the survey CSV file.",
)
@click.option(
    "--top-n",
    type=int,
    default=DEFAULT_TOP_N,
    show_default=True,
    help="Genres kept before bucketing the rest into 'Other'.",
)
@click.option(
    "--genre",
    "genres",
    multiple=True,
    help="Select a genre (repeatable); toggling twice deselects it.",
)
def summary(csv_path: Path, top_n: int, genres: tuple[str, ...]) -> None:
    """Print the genre distribution and depression flow for a survey CSV.

    Example:
      mxmh summary --csv data/mxmh_survey_results.csv --genre Rock --genre Pop
    """
    try:
        df = load_survey(csv_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    state = SelectionState()
    for genre in genres:
        state = on_toggle_genre(state, genre)

    filtered = apply_selection_filter(df, state.genres)
    click.echo(summarize_selection(df, state))

    distribution = compute_genre_distribution(filtered, top_n=top_n)
    click.echo("")
    click.echo("Genre distribution:")
    if distribution.empty:
        click.echo("  (no data)")
    for genre, count, share in zip(
        distribution["genre"], distribution["count"], distribution["percentage"], strict=False
    ):
        click.echo(f"  {genre:<20} {int(count):>6}  {share * 100:5.1f}%")

    flow = compute_genre_depression_flow(filtered, top_flow_genres(filtered, top_n=top_n))
    click.echo("")
    click.echo("Genre -> depression flow:")
    if flow.is_empty:
        click.echo("  No data available for selected genres")
    for genre, band, weight in flow.edges():
        click.echo(f"  {genre:<20} -> {band.label:<14} {weight:>6}")


@main.command("serve")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Survey CSV to serve (defaults to env MXMH_CSV or data/mxmh_survey_results.csv).",
)
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8050, show_default=True)
@click.option("--debug/--no-debug", default=False, show_default=True)
def serve(csv_path: Path | None, host: str, port: int, debug: bool) -> None:
    """Run the Dash dashboard."""
    if csv_path is not None:
        os.environ["MXMH_CSV"] = str(csv_path)

    from dashboard.application import create_app

    try:
        app = create_app()
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
