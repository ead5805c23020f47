import dash_bootstrap_components as dbc
import dash_mantine_components as dmc  # type: ignore
import pandas as pd
from dash import dcc, html
from dash.development.base_component import Component

from dashboard.components.filters import create_global_settings, create_selection_controls
from dashboard.components.graphs import create_graphs_section
from dashboard.components.stats import create_stats_table


def create_layout(df: pd.DataFrame, top_n: int, bar_limit: int) -> Component:
    """Generate the main dashboard layout.

    The layout includes a header with the theme toggle and a collapsible
    chart settings panel, the selection toolbar, the three charts and a
    survey summary table.

    Args:
        df (pd.DataFrame): Survey DataFrame.
        top_n (int): Initial top-N for the donut and Sankey charts.
        bar_limit (int): Initial number of genres in the bar chart.

    Returns:
        Component: Dash HTML component for the dashboard layout.
    """
    return html.Div(
        [
            html.Div(
                [
                    # Store for theme state
                    dcc.Store(id="theme-store", storage_type="local"),
                    # Per-session genre selection; cleared on reload
                    dcc.Store(id="selected-genres", storage_type="memory", data=[]),
                    # Written by assets/resize.js on (debounced) window resize
                    dcc.Store(id="viewport-store", storage_type="memory"),
                    # Header
                    html.Div(
                        html.Div(
                            [
                                html.Div(
                                    [
                                        html.H1(
                                            "Music & Mental Health Survey",
                                            className="dashboard-title",
                                        ),
                                        html.Div(
                                            [
                                                dmc.Switch(
                                                    id="theme-toggle",
                                                    checked=False,
                                                    size="md",
                                                    color="blue",
                                                    onLabel="☀️",
                                                    offLabel="🌙",
                                                    className="theme-toggle-switch",
                                                    persistence=True,
                                                    persistence_type="local",
                                                ),
                                                dbc.Button(
                                                    html.Span("☰"),
                                                    id="collapse-button",
                                                    title="Chart settings",
                                                    className="header-settings-button",
                                                    color="light",
                                                    size="sm",
                                                    n_clicks=0,
                                                ),
                                            ],
                                            className="theme-toggle-container",
                                        ),
                                    ],
                                    className="header-content",
                                ),
                            ],
                            className="container",
                        ),
                        className="dashboard-header",
                    ),
                    # Chart settings collapsible panel
                    html.Div(
                        [
                            dbc.Collapse(
                                dbc.Card(dbc.CardBody([create_global_settings(top_n, bar_limit)])),
                                id="collapse",
                                is_open=False,
                            ),
                        ],
                        className="global-settings-container",
                    ),
                    html.Div(
                        [
                            html.Div(create_selection_controls(), className="card"),
                            create_graphs_section(),
                            html.Div(
                                [
                                    html.H3("Survey Summary", className="card-title"),
                                    html.Div(create_stats_table(df), id="survey-stats"),
                                ],
                                className="card",
                            ),
                        ],
                        className="container",
                    ),
                ],
                id="app-container",
                className="",
            )
        ]
    )
