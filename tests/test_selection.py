import pandas as pd

from mxmh.metrics.bands import DepressionBand
from mxmh.metrics.metrics import OTHER_LABEL
from mxmh.preprocessing import apply_selection_filter
from mxmh.selection import (
    SelectionState,
    build_view_models,
    on_resize,
    on_toggle_genre,
    summarize_selection,
    toggle_selection,
)


def test_toggle_selection_adds_and_removes():
    selection: set[str] = set()
    toggle_selection(selection, "Rock")
    assert selection == {"Rock"}
    toggle_selection(selection, "Rock")
    assert selection == set()


def test_toggle_selection_twice_is_identity():
    selection = {"Jazz", "Pop"}
    original = set(selection)
    toggle_selection(selection, "Metal")
    toggle_selection(selection, "Metal")
    assert selection == original
    toggle_selection(selection, "Jazz")
    toggle_selection(selection, "Jazz")
    assert selection == original


def test_toggle_selection_ignores_other_and_blank():
    selection = {"Rock"}
    toggle_selection(selection, OTHER_LABEL)
    toggle_selection(selection, "")
    toggle_selection(selection, None)
    assert selection == {"Rock"}


def test_selection_sequence_example(example_df):
    state = SelectionState()
    for genre in ("Rock", "Jazz", "Rock"):
        state = on_toggle_genre(state, genre)
    assert state.genres == frozenset({"Jazz"})
    result = apply_selection_filter(example_df, state.genres)
    assert list(result["Fav genre"]) == ["Jazz"]


def test_on_resize_clears_selection():
    state = SelectionState(frozenset({"Rock", "Pop"}))
    assert not on_resize(state).is_filtered
    assert on_resize(SelectionState()) == SelectionState()


def test_store_roundtrip_drops_other():
    state = SelectionState.from_store(["Pop", OTHER_LABEL, " Rock ", None])
    assert state.to_store() == ["Pop", "Rock"]
    assert SelectionState.from_store(None) == SelectionState()


def test_summarize_selection(survey_df):
    assert summarize_selection(survey_df, SelectionState()) == "No genres selected"
    text = summarize_selection(survey_df, SelectionState(frozenset({"Rock", "Pop"})))
    # 6 of 17 respondents with a genre
    assert text == "Selected: Pop, Rock (35.3% of total)"


def test_view_models_unfiltered(survey_df):
    vm = build_view_models(survey_df, SelectionState(), top_n=8)
    assert vm.distribution.iloc[-1]["genre"] == OTHER_LABEL
    assert vm.flow_filter_label is None
    assert vm.status_text == "No genres selected"
    assert len(vm.genre_mental_health) == 11


def test_view_models_filtered_agree_on_population(survey_df):
    state = SelectionState(frozenset({"Metal", "Jazz"}))
    vm = build_view_models(survey_df, state, top_n=8)
    assert list(vm.distribution["genre"]) == ["Metal", "Jazz"]
    assert {g for g, _, _ in vm.flow.edges()} == {"Metal", "Jazz"}
    assert vm.flow.edges() == [
        ("Metal", DepressionBand.HIGH, 2),
        ("Jazz", DepressionBand.LOW, 1),
    ]
    assert vm.flow_filter_label == "Filtered by: Jazz, Metal"
    # The bar chart is never filtered
    assert len(vm.genre_mental_health) == 11


def test_view_models_no_flow_data(survey_factory):
    df = survey_factory([("Rock", None), ("Pop", 42)])
    vm = build_view_models(df, SelectionState())
    assert vm.flow.is_empty
    assert int(vm.distribution["count"].sum()) == 2


def test_view_models_are_idempotent(survey_df):
    state = SelectionState(frozenset({"Rock"}))
    first = build_view_models(survey_df, state)
    second = build_view_models(survey_df, state)
    assert first.distribution.equals(second.distribution)
    assert first.flow == second.flow


def test_view_models_on_genre_and_depression_only():
    df = pd.DataFrame({"Fav genre": ["Rock", "Rock", "Jazz", ""], "Depression": [2, 9, 5, 4]})
    vm = build_view_models(df, SelectionState())
    assert vm.flow.edges() == [
        ("Rock", DepressionBand.LOW, 1),
        ("Rock", DepressionBand.HIGH, 1),
        ("Jazz", DepressionBand.MEDIUM, 1),
    ]
    assert list(vm.distribution["count"]) == [2, 1]
    bars = vm.genre_mental_health.set_index("genre")
    assert bars.loc["Rock", "avg_depression"] == 5.5
    assert bars["avg_anxiety"].isna().all()
