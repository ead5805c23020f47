from dash import dcc, html
from dash.development.base_component import Component


def _graph_card(title: str, graph_id: str, min_height: str, extra: list | None = None) -> Component:
    return html.Div(
        className="graph-card card",
        children=[
            html.H3(title, className="card-title"),
            *(extra or []),
            dcc.Loading(
                children=dcc.Graph(
                    id=graph_id,
                    config={"displayModeBar": False, "responsive": True},
                    style={"minHeight": min_height},
                ),
                delay_show=0,
                overlay_style={
                    "visibility": "visible",
                    "backgroundColor": "rgba(0,0,0,0.15)",
                },
                type="default",
            ),
        ],
    )


def create_genre_bar_graph() -> Component:
    """Overview card: mean mental-health scores per genre (grouped bars)."""
    return _graph_card("Mental Health by Genre", "genre-bar-graph", "440px")


def create_donut_graph() -> Component:
    """Focus card: genre distribution donut plus the selection status line."""
    return _graph_card(
        "Favorite Genres",
        "genre-donut-graph",
        "420px",
        extra=[html.Div(id="donut-status", className="selection-status")],
    )


def create_sankey_graph() -> Component:
    """Focus card: genre to depression-band Sankey diagram."""
    return _graph_card("Genres and Depression", "genre-sankey-graph", "420px")


def create_graphs_section() -> Component:
    """Compose the overview row and the two coordinated focus charts."""
    return html.Div(
        children=[
            html.Div(children=[create_genre_bar_graph()], className="graph-container"),
            html.Div(
                children=[create_donut_graph(), create_sankey_graph()],
                className="graph-container",
            ),
        ]
    )
