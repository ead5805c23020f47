import pytest
from dash import Dash

from dashboard import conn
from dashboard.application import create_app


@pytest.fixture
def dash_app(survey_df):
    return create_app(survey_df)


def test_app_builds_with_dataframe(dash_app):
    assert isinstance(dash_app, Dash)
    layout_ids = str(dash_app.layout)
    for component_id in (
        "genre-bar-graph",
        "genre-donut-graph",
        "genre-sankey-graph",
        "selected-genres",
        "viewport-store",
    ):
        assert component_id in layout_ids


def test_app_registers_selection_callback(dash_app):
    outputs = " ".join(dash_app.callback_map.keys())
    assert "selected-genres.data" in outputs
    assert "genre-sankey-graph.figure" in outputs


def test_app_loads_configured_csv(monkeypatch, survey_csv):
    monkeypatch.setenv("MXMH_CSV", str(survey_csv))
    monkeypatch.setenv("MXMH_TOP_N", "5")
    assert conn.get_top_n() == 5
    assert isinstance(create_app(), Dash)


def test_missing_csv_raises(monkeypatch, tmp_path):
    monkeypatch.setenv("MXMH_CSV", str(tmp_path / "absent.csv"))
    with pytest.raises(OSError):
        create_app()


def test_bad_int_setting_falls_back(monkeypatch):
    monkeypatch.setenv("MXMH_BAR_LIMIT", "lots")
    assert conn.get_bar_limit() == 12
