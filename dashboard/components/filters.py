import dash_bootstrap_components as dbc
from dash import dcc, html


def create_top_n_slider(top_n: int) -> html.Div:
    """Create a slider for how many genres the donut and Sankey keep.

    Args:
        top_n (int): Initial value.

    Returns:
        html.Div: Div containing the labelled slider.
    """
    return html.Div(
        [
            html.Label("Top Genres (donut and Sankey)", className="filter-label"),
            dcc.Slider(
                id="top-n-slider",
                min=3,
                max=15,
                step=1,
                value=top_n,
                marks={i: str(i) for i in (3, 5, 8, 10, 15)},
                persistence=True,
                persistence_type="local",
            ),
        ],
        className="filter-item",
    )


def create_bar_limit_slider(bar_limit: int) -> html.Div:
    """Create a slider for how many genres the grouped bar chart shows."""
    return html.Div(
        [
            html.Label("Genres in Bar Chart", className="filter-label"),
            dcc.Slider(
                id="bar-limit-slider",
                min=4,
                max=20,
                step=1,
                value=bar_limit,
                marks={i: str(i) for i in (4, 8, 12, 16, 20)},
                persistence=True,
                persistence_type="local",
            ),
        ],
        className="filter-item",
    )


def create_global_settings(top_n: int, bar_limit: int) -> html.Div:
    """Generate the chart settings panel.

    Returns:
        html.Div: Div containing both sliders.
    """
    return html.Div(
        [
            html.Div(
                [create_top_n_slider(top_n), create_bar_limit_slider(bar_limit)],
                className="filters-section",
            )
        ]
    )


def create_selection_controls() -> html.Div:
    """Selection toolbar: the clear button shown above the focus charts."""
    return html.Div(
        [
            html.H3("Genre Selection", className="card-title"),
            html.Div(
                [
                    html.Span(
                        "Click donut slices or genre bars to filter the donut and Sankey charts.",
                        className="filter-label",
                    ),
                    dbc.Button(
                        "Clear selection",
                        id="clear-selection-button",
                        color="secondary",
                        size="sm",
                        n_clicks=0,
                    ),
                ],
                className="filters-section",
            ),
        ]
    )
