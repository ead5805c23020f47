import pandas as pd
import pytest

from mxmh.io import GENRE_COLUMN, coerce_survey_frame, load_survey
from mxmh.preprocessing import (
    apply_selection_filter,
    filter_flow_records,
    filter_valid_genres,
)


def test_filter_valid_genres_drops_blank_labels(survey_df):
    result = filter_valid_genres(survey_df)
    assert len(result) == 17
    assert result[GENRE_COLUMN].notna().all()


def test_filter_flow_records_drops_bad_scores(survey_df):
    result = filter_flow_records(survey_df)
    assert len(result) == 15
    assert result["Depression"].between(0, 10).all()


def test_selection_filter_empty_is_identity(survey_df):
    assert apply_selection_filter(survey_df, set()) is survey_df
    assert apply_selection_filter(survey_df, None) is survey_df


def test_selection_filter_keeps_only_members(survey_df):
    selected = {"Rock", "Jazz"}
    result = apply_selection_filter(survey_df, selected)
    assert len(result) == 4
    assert set(result[GENRE_COLUMN]) <= selected


def test_selection_filter_example(example_df):
    result = apply_selection_filter(example_df, {"Jazz"})
    assert list(result[GENRE_COLUMN]) == ["Jazz"]
    assert list(result["Depression"]) == [5]


def test_coerce_survey_frame_handles_bad_numbers():
    raw = pd.DataFrame({"Fav genre": [" Rock ", ""], "Depression": ["x", "4"]})
    df = coerce_survey_frame(raw)
    assert df.loc[0, GENRE_COLUMN] == "Rock"
    assert pd.isna(df.loc[1, GENRE_COLUMN])
    assert pd.isna(df.loc[0, "Depression"])
    assert df.loc[1, "Depression"] == 4
    # Absent numeric columns are added as NaN
    assert df["OCD"].isna().all()


def test_coerce_survey_frame_requires_genre():
    with pytest.raises(ValueError):
        coerce_survey_frame(pd.DataFrame({"Depression": [1]}))


def test_load_survey_roundtrip(survey_csv):
    df = load_survey(survey_csv)
    assert len(df) == 19
    assert len(filter_valid_genres(df)) == 17
    assert pd.api.types.is_numeric_dtype(df["Depression"])


def test_load_survey_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_survey(tmp_path / "nope.csv")
