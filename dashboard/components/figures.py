"""Plotly figure builders for the three survey charts.

Every builder is a pure function from a view model to a figure dict, so the
callbacks stay thin and the figures can be tested without a browser.
"""

from typing import Any

import pandas as pd

from mxmh.metrics.bands import BAND_COLORS
from mxmh.metrics.metrics import OTHER_LABEL, SankeyData

# d3.schemeCategory10
CATEGORY_COLORS: list[str] = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
]

METRIC_COLORS: dict[str, str] = {
    "anxiety": "#FF9B54",
    "depression": "#4A7B9D",
    "insomnia": "#AC3931",
    "ocd": "#57A773",
}

METRIC_SERIES: list[tuple[str, str, str]] = [
    ("Anxiety", "avg_anxiety", "anxiety"),
    ("Depression", "avg_depression", "depression"),
    ("Insomnia", "avg_insomnia", "insomnia"),
    ("OCD", "avg_ocd", "ocd"),
]

FADED_OPACITY = 0.3
MIN_LABEL_SHARE = 0.03
NO_DATA_MESSAGE = "No data available for selected genres"
OTHER_COLOR = "#bbbbbb"


def get_plotly_theme(is_dark: bool = False) -> dict[str, Any]:
    """Get Plotly layout defaults for the light or dark theme.

    Args:
        is_dark (bool): Whether dark mode is enabled.

    Returns:
        dict: Plotly layout configuration for the theme.
    """
    if is_dark:
        return {
            "template": "plotly_dark",
            "paper_bgcolor": "#1e1e1e",
            "plot_bgcolor": "#1e1e1e",
            "font": {"color": "#e0e0e0", "family": "Segoe UI, sans-serif"},
            "xaxis": {"gridcolor": "#333"},
            "yaxis": {"gridcolor": "#333"},
            "colorway": CATEGORY_COLORS,
        }
    return {
        "template": "plotly",
        "paper_bgcolor": "white",
        "plot_bgcolor": "white",
        "font": {"family": "Segoe UI, sans-serif"},
        "xaxis": {"gridcolor": "#eee"},
        "yaxis": {"gridcolor": "#eee"},
        "colorway": CATEGORY_COLORS,
    }


def hex_to_rgba(color: str, alpha: float) -> str:
    """Convert ``#rrggbb`` to an ``rgba(...)`` string."""
    c = color.lstrip("#")
    r, g, b = (int(c[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def genre_color_map(genres: list[str]) -> dict[str, str]:
    """Assign categorical colors to genres in the given order."""
    return {g: CATEGORY_COLORS[i % len(CATEGORY_COLORS)] for i, g in enumerate(genres)}


def build_genre_colors(distribution: pd.DataFrame, flow: SankeyData | None = None) -> dict[str, str]:
    """One color per genre shared by the donut and the Sankey diagram.

    Colors follow the distribution order; Sankey genres folded into "Other"
    on the donut are appended after it.
    """
    genres = [] if distribution.empty else [str(g) for g in distribution["genre"]]
    genres = [g for g in genres if g != OTHER_LABEL]
    if flow is not None:
        for node in flow.nodes:
            if node.band is None and node.label not in genres:
                genres.append(node.label)
    colors = genre_color_map(genres)
    colors[OTHER_LABEL] = OTHER_COLOR
    return colors


def _title(text: str) -> dict[str, Any]:
    return {"text": f"<b>{text}</b>", "x": 0.5, "xanchor": "center", "font": {"size": 16}}


def create_no_data_figure(message: str = NO_DATA_MESSAGE, is_dark: bool = False) -> dict:
    """Empty figure carrying a centred placeholder message."""
    theme = get_plotly_theme(is_dark)
    return {
        "data": [],
        "layout": {
            **theme,
            "xaxis": {"visible": False},
            "yaxis": {"visible": False},
            "annotations": [
                {
                    "text": message,
                    "xref": "paper",
                    "yref": "paper",
                    "x": 0.5,
                    "y": 0.5,
                    "showarrow": False,
                    "font": {"size": 16, "color": "#666"},
                }
            ],
        },
    }


def create_genre_bar_figure(
    genre_mental_health: pd.DataFrame,
    selected: frozenset[str] | set[str] = frozenset(),
    is_dark: bool = False,
) -> dict:
    """Grouped bar chart of mean mental-health scores per favourite genre.

    Genres outside a non-empty selection are faded.
    """
    if genre_mental_health.empty:
        return create_no_data_figure("No survey responses with a favourite genre", is_dark)

    genres = genre_mental_health["genre"].astype(str).tolist()
    if selected:
        opacity = [1.0 if g in selected else FADED_OPACITY for g in genres]
        line_width = [3 if g in selected else 1 for g in genres]
    else:
        opacity = [1.0] * len(genres)
        line_width = [1] * len(genres)
    line_color = ["#000" if g in selected else "white" for g in genres]

    traces = []
    for name, column, key in METRIC_SERIES:
        values = genre_mental_health[column].astype(float).round(2)
        traces.append(
            {
                "type": "bar",
                "name": name,
                "x": genres,
                "y": [None if pd.isna(v) else float(v) for v in values],
                "customdata": genres,
                "marker": {
                    "color": METRIC_COLORS[key],
                    "opacity": opacity,
                    "line": {"color": line_color, "width": line_width},
                },
                "hovertemplate": f"Genre: %{{x}}<br>{name}: %{{y:.2f}}<extra></extra>",
            }
        )

    theme = get_plotly_theme(is_dark)
    return {
        "data": traces,
        "layout": {
            **theme,
            "title": _title("Mental Health Metrics by Favorite Music Genre"),
            "barmode": "group",
            "bargap": 0.3,
            "xaxis": {**theme["xaxis"], "title": "Music Genre", "tickangle": -45},
            "yaxis": {**theme["yaxis"], "title": "Mental Health Score (0-10)", "rangemode": "tozero"},
            "legend": {"x": 1, "xanchor": "right", "y": 1},
            "margin": {"t": 60, "r": 40, "b": 110, "l": 60},
        },
    }


def create_donut_figure(
    distribution: pd.DataFrame,
    selected: frozenset[str] | set[str] = frozenset(),
    is_dark: bool = False,
    colors: dict[str, str] | None = None,
) -> dict:
    """Donut chart of favourite-genre counts.

    Slices keep the distribution order. Percent labels are only drawn for
    slices above 3% and selected slices are outlined and pulled out. A
    legend click hides the slice, which surfaces the label through
    ``relayoutData["hiddenlabels"]``; every render starts with nothing
    hidden.
    """
    if distribution.empty:
        return create_no_data_figure(NO_DATA_MESSAGE, is_dark)

    genres = distribution["genre"].astype(str).tolist()
    counts = distribution["count"].astype(int).tolist()
    total = sum(counts)
    colors = colors or build_genre_colors(distribution)
    text = [
        f"{c / total * 100:.1f}%" if total and c / total > MIN_LABEL_SHARE else "" for c in counts
    ]

    trace = {
        "type": "pie",
        "hole": 0.5,
        "sort": False,
        "direction": "clockwise",
        "labels": genres,
        "values": counts,
        "customdata": genres,
        "text": text,
        "textinfo": "text",
        "textposition": "inside",
        "pull": [0.06 if g in selected else 0 for g in genres],
        "marker": {
            "colors": [colors.get(g, OTHER_COLOR) for g in genres],
            "line": {
                "color": ["#000" if g in selected else "white" for g in genres],
                "width": [4 if g in selected else 2 for g in genres],
            },
        },
        "hovertemplate": "Genre: %{label}<br>Count: %{value}<br>Percentage: %{percent}<extra></extra>",
    }

    theme = get_plotly_theme(is_dark)
    return {
        "data": [trace],
        "layout": {
            **theme,
            "title": _title("Distribution of Favorite Music Genres (Click to Select)"),
            "legend": {"itemclick": "toggle", "itemdoubleclick": False},
            "hiddenlabels": [],
            "annotations": [
                {
                    "text": "Click slices, legend entries or bars to select genres",
                    "xref": "paper",
                    "yref": "paper",
                    "x": 0,
                    "y": 1.08,
                    "showarrow": False,
                    "font": {"size": 12, "color": "#666"},
                }
            ],
            "margin": {"t": 70, "r": 20, "b": 20, "l": 20},
        },
    }


def create_sankey_figure(
    flow: SankeyData,
    filter_label: str | None = None,
    is_dark: bool = False,
    colors: dict[str, str] | None = None,
) -> dict:
    """Sankey diagram from favourite genre to depression band.

    Falls back to the "no data" placeholder when the flow has no nodes or
    no links.
    """
    if flow.is_empty:
        return create_no_data_figure(NO_DATA_MESSAGE, is_dark)

    if colors is None:
        colors = genre_color_map([n.label for n in flow.nodes if n.band is None])
    node_colors = [
        BAND_COLORS[n.band] if n.band is not None else colors.get(n.label, OTHER_COLOR)
        for n in flow.nodes
    ]
    by_id = {n.id: n for n in flow.nodes}
    link_colors = [
        hex_to_rgba(colors.get(by_id[link.source].label, OTHER_COLOR), 0.5) for link in flow.links
    ]

    trace = {
        "type": "sankey",
        "arrangement": "snap",
        "node": {
            "pad": 10,
            "thickness": 15,
            "line": {"color": "#000", "width": 1},
            "label": [n.label for n in flow.nodes],
            "color": node_colors,
            "hovertemplate": "%{label}<br>Total: %{value}<extra></extra>",
        },
        "link": {
            "source": [link.source for link in flow.links],
            "target": [link.target for link in flow.links],
            "value": [link.value for link in flow.links],
            "color": link_colors,
            "hovertemplate": "%{source.label} → %{target.label}<br>Count: %{value}<extra></extra>",
        },
    }

    title = "Music Genres and Depression Levels" + (" (Filtered)" if filter_label else "")
    annotations = []
    if filter_label:
        annotations.append(
            {
                "text": filter_label,
                "xref": "paper",
                "yref": "paper",
                "x": 0,
                "y": 1.06,
                "showarrow": False,
                "font": {"size": 12, "color": "#666"},
            }
        )

    theme = get_plotly_theme(is_dark)
    return {
        "data": [trace],
        "layout": {
            **theme,
            "title": _title(title),
            "annotations": annotations,
            "margin": {"t": 70, "r": 40, "b": 20, "l": 40},
        },
    }
