"""Genre selection state shared by the donut chart and the Sankey diagram.

The state is an explicit value owned by the caller (the Dash session store
in the dashboard) and threaded through every recomputation. Handlers return
new state rather than mutating anything global.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import pandas as pd

from mxmh.metrics.metrics import (
    DEFAULT_BAR_LIMIT,
    DEFAULT_TOP_N,
    OTHER_LABEL,
    SankeyData,
    compute_genre_depression_flow,
    compute_genre_distribution,
    compute_genre_mental_health,
    top_flow_genres,
)
from mxmh.metrics.utils import format_percentage, normalize_genre
from mxmh.preprocessing import apply_selection_filter, filter_valid_genres

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def toggle_selection(selection: set[str], genre: str | None) -> set[str]:
    """Flip ``genre`` membership in ``selection`` in place.

    The reserved "Other" bucket and blank labels are never selectable and
    leave the set untouched.

    Returns:
        set[str]: The same set object, for chaining.
    """
    label = normalize_genre(genre)
    if label is None or label == OTHER_LABEL:
        return selection
    if label in selection:
        selection.discard(label)
    else:
        selection.add(label)
    return selection


@dataclass(frozen=True)
class SelectionState:
    """Immutable snapshot of the selected genres."""

    genres: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_filtered(self) -> bool:
        return bool(self.genres)

    def to_store(self) -> list[str]:
        """Serialize for a ``dcc.Store`` (sorted for stable JSON)."""
        return sorted(self.genres)

    @classmethod
    def from_store(cls, data: Iterable[str] | None) -> SelectionState:
        labels = (normalize_genre(g) for g in (data or ()))
        return cls(frozenset(g for g in labels if g is not None and g != OTHER_LABEL))


def on_toggle_genre(state: SelectionState, genre: str | None) -> SelectionState:
    """Handle a click on a genre slice or legend entry."""
    updated = toggle_selection(set(state.genres), genre)
    new_state = SelectionState(frozenset(updated))
    if new_state != state:
        logger.debug("Selection changed: %s", new_state.to_store())
    return new_state


def on_resize(state: SelectionState) -> SelectionState:
    """Handle a viewport resize: the selection is always cleared."""
    if state.is_filtered:
        logger.debug("Clearing selection %s on resize", state.to_store())
    return SelectionState()


def summarize_selection(df: pd.DataFrame, state: SelectionState) -> str:
    """Status line shown above the donut chart.

    The percentage is the selected genres' share of all respondents with a
    favourite genre.
    """
    if not state.is_filtered:
        return "No genres selected"
    total = len(filter_valid_genres(df))
    selected = len(filter_valid_genres(apply_selection_filter(df, state.genres)))
    names = ", ".join(state.to_store())
    return f"Selected: {names} ({format_percentage(selected, total)}% of total)"


@dataclass
class DashboardViewModel:
    """Everything the three chart renderers need for one interaction."""

    genre_mental_health: pd.DataFrame
    distribution: pd.DataFrame
    flow: SankeyData
    selection: SelectionState
    status_text: str

    @property
    def flow_filter_label(self) -> str | None:
        if not self.selection.is_filtered:
            return None
        return f"Filtered by: {', '.join(self.selection.to_store())}"


def build_view_models(
    df: pd.DataFrame,
    state: SelectionState,
    *,
    top_n: int = DEFAULT_TOP_N,
    bar_limit: int | None = DEFAULT_BAR_LIMIT,
) -> DashboardViewModel:
    """Run the full aggregation pipeline for the current selection.

    The same selection filter feeds both the donut distribution and the
    Sankey flow, so the two charts always describe one population. The flow
    derives its own top genres from that filtered population. The bar chart
    covers every respondent and only highlights the selection.
    """
    filtered = apply_selection_filter(df, state.genres)
    return DashboardViewModel(
        genre_mental_health=compute_genre_mental_health(df, limit=bar_limit),
        distribution=compute_genre_distribution(filtered, top_n=top_n),
        flow=compute_genre_depression_flow(filtered, top_flow_genres(filtered, top_n=top_n)),
        selection=state,
        status_text=summarize_selection(df, state),
    )
