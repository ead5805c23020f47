import pandas as pd
import pytest

from mxmh.io import coerce_survey_frame

SURVEY_COLUMNS = [
    "Timestamp",
    "Age",
    "Primary streaming service",
    "Hours per day",
    "Fav genre",
    "BPM",
    "Anxiety",
    "Depression",
    "Insomnia",
    "OCD",
]


def make_survey(rows: list[tuple]) -> pd.DataFrame:
    """Build a coerced survey frame from (genre, depression[, anxiety, insomnia, ocd]) tuples."""
    records = []
    for i, row in enumerate(rows):
        genre, depression, *rest = row
        anxiety, insomnia, ocd = (rest + [None, None, None])[:3]
        records.append(
            {
                "Timestamp": f"8/27/2022 19:{i:02d}:00",
                "Age": str(18 + i),
                "Primary streaming service": "Spotify",
                "Hours per day": "3",
                "Fav genre": genre,
                "BPM": "120",
                "Anxiety": "" if anxiety is None else str(anxiety),
                "Depression": "" if depression is None else str(depression),
                "Insomnia": "" if insomnia is None else str(insomnia),
                "OCD": "" if ocd is None else str(ocd),
            }
        )
    return coerce_survey_frame(pd.DataFrame(records, columns=SURVEY_COLUMNS))


@pytest.fixture
def example_df():
    """The four-respondent example: two Rock, one Jazz, one without a genre."""
    return make_survey([("Rock", 2), ("Rock", 9), ("Jazz", 5), ("", 4)])


@pytest.fixture
def survey_df():
    rows = [
        ("Rock", 2, 6, 3, 1),
        ("Rock", 9, 8, 5, 2),
        ("Rock", 5, 7, 2, 0),
        ("Pop", 4, 5, 1, 0),
        ("Pop", 7, 6, 4, 3),
        ("Pop", "abc", 3, 0, 0),
        ("Metal", 8, 7, 6, 2),
        ("Metal", 10, 9, 7, 4),
        ("Jazz", 1, 2, 1, 0),
        ("Classical", 3, 4, 2, 1),
        ("Classical", 11, 5, 3, 1),
        ("Hip hop", 6, 6, 3, 2),
        ("EDM", 7, 5, 6, 1),
        ("Folk", 0, 2, 1, 0),
        ("Country", 4, 3, 2, 1),
        ("Lofi", 9, 8, 7, 5),
        ("K pop", 3, 4, 2, 0),
        ("", 6, 5, 4, 3),
        ("   ", 2, 1, 1, 1),
    ]
    return make_survey(rows)


@pytest.fixture
def survey_csv(tmp_path, survey_df):
    path = tmp_path / "mxmh_survey_results.csv"
    survey_df.to_csv(path, index=False)
    return path


@pytest.fixture
def survey_factory():
    return make_survey
