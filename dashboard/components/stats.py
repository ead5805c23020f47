import pandas as pd
from dash import html

from mxmh.preprocessing import filter_flow_records, filter_valid_genres


def format_stat(value: int | float) -> str:
    """Format a numeric statistic for display.

    Args:
        value (int or float): Numeric value to format.

    Returns:
        str: Number formatted with comma separators and one decimal
            place for floats.
    """
    if isinstance(value, float):
        # Format floats with one decimal and comma separators.
        return f"{value:,.1f}"
    # Format integers with comma separators.
    return f"{value:,}"


def compute_survey_stats(df: pd.DataFrame) -> dict[str, str]:
    """Summarize the loaded survey for the stats table.

    Args:
        df (pd.DataFrame): Survey rows with 'Fav genre', 'Depression', 'Age'
            and 'Hours per day' columns.

    Returns:
        dict[str, str]: Metric name to formatted value, in display order.
    """
    with_genre = filter_valid_genres(df)
    flow_ready = filter_flow_records(df)
    ages = pd.to_numeric(df["Age"], errors="coerce").dropna() if not df.empty else pd.Series(dtype=float)
    hours = (
        pd.to_numeric(df["Hours per day"], errors="coerce").dropna()
        if not df.empty
        else pd.Series(dtype=float)
    )

    return {
        "Respondents": format_stat(len(df)),
        "With Favorite Genre": format_stat(len(with_genre)),
        "With Valid Depression Score": format_stat(len(flow_ready)),
        "Distinct Genres": format_stat(int(with_genre["Fav genre"].nunique())),
        "Median Age": format_stat(float(ages.median())) if not ages.empty else "—",
        "Average Listening Time": (
            f"{format_stat(float(hours.mean()))} hours/day" if not hours.empty else "—"
        ),
    }


def create_stats_table(df: pd.DataFrame) -> html.Table:
    """Create a Dash HTML table summarizing the survey.

    Args:
        df (pd.DataFrame): Survey rows.

    Returns:
        html.Table: Dash HTML Table component displaying metrics and values.
    """
    stats = compute_survey_stats(df)

    # Build Dash HTML table.
    return html.Table(
        [
            html.Thead(html.Tr([html.Th("Metric"), html.Th("Value")])),
            html.Tbody(
                [html.Tr([html.Td(metric), html.Td(value)]) for metric, value in stats.items()]
            ),
        ],
        className="stats-table",
    )
