import logging
from typing import Any

import dash
import pandas as pd
from dash import Dash, Input, Output, State
from dash.exceptions import PreventUpdate

from dashboard.components.figures import (
    build_genre_colors,
    create_donut_figure,
    create_genre_bar_figure,
    create_sankey_figure,
)
from mxmh.selection import SelectionState, build_view_models, on_resize, on_toggle_genre

logger = logging.getLogger(__name__)

# Component ids that act as genre selectors
CLICK_SOURCES = ("genre-donut-graph", "genre-bar-graph")
RESET_SOURCES = ("clear-selection-button", "viewport-store")
# Pseudo-source for legend clicks on the donut (its relayoutData)
LEGEND_SOURCE = "genre-donut-legend"


def genre_from_click(click_data: dict | None) -> str | None:
    """Extract the genre label from a Plotly ``clickData`` payload.

    Pie slices and bars both carry the genre in ``customdata``; ``label``
    and ``x`` are used as fallbacks.
    """
    if not click_data:
        return None
    points = click_data.get("points") or []
    if not points:
        return None
    point = points[0]
    custom = point.get("customdata")
    if isinstance(custom, list | tuple):
        custom = custom[0] if custom else None
    for value in (custom, point.get("label"), point.get("x")):
        if isinstance(value, str) and value.strip():
            return value
    return None


def genre_from_legend(relayout_data: dict | None) -> str | None:
    """Extract the genre hidden by a donut legend click.

    Plotly reports pie legend clicks as ``{"hiddenlabels": [...]}``. The
    figure is re-rendered with nothing hidden after every selection event,
    so the most recently hidden label is the one that was clicked. Other
    relayout events (autosize, zoom) carry no genre.
    """
    if not relayout_data:
        return None
    hidden = relayout_data.get("hiddenlabels")
    if not isinstance(hidden, list | tuple) or not hidden:
        return None
    label = hidden[-1]
    if isinstance(label, str) and label.strip():
        return label
    return None


def dispatch_selection_event(
    trigger_id: str | None,
    selected: list[str] | None,
    click_data: dict | None = None,
    legend_data: dict | None = None,
) -> list[str]:
    """Apply one UI event to the stored selection and return the new store value.

    Slice, bar and legend clicks toggle a genre; the clear button and a
    viewport resize reset the selection. A legend click on "Other" still
    returns the unchanged selection so the donut re-renders and un-hides it.

    Raises:
        PreventUpdate: If the event does not map to a selection command.
    """
    state = SelectionState.from_store(selected)
    if trigger_id in RESET_SOURCES:
        return on_resize(state).to_store()
    if trigger_id in CLICK_SOURCES:
        genre = genre_from_click(click_data)
    elif trigger_id == LEGEND_SOURCE:
        genre = genre_from_legend(legend_data)
    else:
        raise PreventUpdate
    if genre is None:
        raise PreventUpdate
    return on_toggle_genre(state, genre).to_store()


def render_dashboard(
    df: pd.DataFrame,
    selected: list[str] | None,
    top_n: int,
    bar_limit: int,
    is_dark: bool = False,
) -> tuple[dict, dict, dict, str]:
    """Build the three figures and the status line for the current selection."""
    state = SelectionState.from_store(selected)
    vm = build_view_models(df, state, top_n=top_n, bar_limit=bar_limit)
    colors = build_genre_colors(vm.distribution, vm.flow)
    return (
        create_genre_bar_figure(vm.genre_mental_health, state.genres, is_dark),
        create_donut_figure(vm.distribution, state.genres, is_dark, colors=colors),
        create_sankey_figure(vm.flow, vm.flow_filter_label, is_dark, colors=colors),
        vm.status_text,
    )


def register_callbacks(app: Dash, df: pd.DataFrame, top_n: int, bar_limit: int) -> None:
    """Register all Dash callbacks for the survey dashboard.

    Args:
        app (Dash): Dash application instance.
        df (pd.DataFrame): Survey DataFrame loaded at start-up.
        top_n (int): Fallback top-N when the slider has no value.
        bar_limit (int): Fallback bar-chart genre count.
    """

    @app.callback(
        Output("collapse", "is_open"),
        [Input("collapse-button", "n_clicks")],
        [State("collapse", "is_open")],
    )
    def toggle_collapse(n_clicks: int, is_open: bool) -> bool:
        """Toggle the visibility of the chart settings panel."""
        if n_clicks:
            return not is_open
        return is_open

    @app.callback(
        Output("theme-store", "data"),
        Output("app-container", "className"),
        Input("theme-toggle", "checked"),
    )
    def update_theme(checked: bool | None):
        is_dark = bool(checked)
        return {"dark": is_dark}, ("dark-theme" if is_dark else "")

    @app.callback(
        Output("selected-genres", "data"),
        Output("genre-donut-graph", "clickData"),
        Output("genre-bar-graph", "clickData"),
        Output("genre-donut-graph", "relayoutData"),
        Input("genre-donut-graph", "clickData"),
        Input("genre-bar-graph", "clickData"),
        Input("genre-donut-graph", "relayoutData"),
        Input("clear-selection-button", "n_clicks"),
        Input("viewport-store", "data"),
        State("selected-genres", "data"),
        prevent_initial_call=True,
    )
    def update_selection(donut_click, bar_click, donut_relayout, _clear_clicks, _viewport, selected):
        trigger_id = dash.ctx.triggered_id
        click_data: dict[str, Any] | None = None
        if "genre-donut-graph.relayoutData" in dash.ctx.triggered_prop_ids:
            trigger_id = LEGEND_SOURCE
        elif trigger_id == "genre-donut-graph":
            click_data = donut_click
        elif trigger_id == "genre-bar-graph":
            click_data = bar_click
        new_selection = dispatch_selection_event(
            trigger_id, selected, click_data, legend_data=donut_relayout
        )
        # Reset click and relayout data so repeating the same click fires again
        return new_selection, None, None, None

    @app.callback(
        Output("genre-bar-graph", "figure"),
        Output("genre-donut-graph", "figure"),
        Output("genre-sankey-graph", "figure"),
        Output("donut-status", "children"),
        Input("selected-genres", "data"),
        Input("top-n-slider", "value"),
        Input("bar-limit-slider", "value"),
        Input("theme-store", "data"),
    )
    def update_charts(selected, top_n_value, bar_limit_value, theme_data):
        is_dark = bool(theme_data and theme_data.get("dark"))
        return render_dashboard(
            df,
            selected,
            int(top_n_value or top_n),
            int(bar_limit_value or bar_limit),
            is_dark,
        )
