import contextlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import duckdb
import pandas as pd

from mxmh.io import DEPRESSION_COLUMN, GENRE_COLUMN
from mxmh.metrics.bands import DepressionBand, score_to_band
from mxmh.preprocessing import filter_flow_records, filter_valid_genres

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

OTHER_LABEL = "Other"
DEFAULT_TOP_N = 8
DEFAULT_BAR_LIMIT = 12

DISTRIBUTION_COLUMNS = ["genre", "count", "percentage"]
MENTAL_HEALTH_COLUMNS = [
    "genre",
    "avg_anxiety",
    "avg_depression",
    "avg_insomnia",
    "avg_ocd",
    "respondents",
]


@dataclass
class SankeyNode:
    """A genre (``band`` is None) or depression-band node."""

    id: int
    label: str
    band: DepressionBand | None = None


@dataclass
class SankeyLink:
    """Weighted edge between two node ids."""

    source: int
    target: int
    value: int


@dataclass
class SankeyData:
    """Nodes and weighted links for the genre to depression-band diagram."""

    nodes: list[SankeyNode] = field(default_factory=list)
    links: list[SankeyLink] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes or not self.links

    def edges(self) -> list[tuple[str, DepressionBand, int]]:
        """Return links as ``(genre, band, weight)`` triples in link order."""
        by_id = {n.id: n for n in self.nodes}
        out = []
        for link in self.links:
            target = by_id[link.target]
            out.append((by_id[link.source].label, target.band, link.value))
        return out


def _clean_genres(df: pd.DataFrame) -> pd.Series:
    return df[GENRE_COLUMN].astype("string").str.strip().astype(object)


def _score_values(df: pd.DataFrame, column: str):
    """Float scores for ``column``; an absent column reads as all-NaN."""
    if column not in df.columns:
        return pd.Series(float("nan"), index=df.index, dtype=float).to_numpy()
    return pd.to_numeric(df[column], errors="coerce").to_numpy(dtype=float)


def _count_genres(valid_df: pd.DataFrame) -> pd.Series:
    """Per-genre counts sorted descending, ties kept in first-seen order."""
    if valid_df.empty:
        return pd.Series(dtype="int64")
    genres = _clean_genres(valid_df)
    counts = genres.groupby(genres, sort=False).size()
    return counts.sort_values(ascending=False, kind="stable")


def compute_genre_distribution(df: pd.DataFrame, top_n: int = DEFAULT_TOP_N) -> pd.DataFrame:
    """Favourite-genre frequency for the donut chart.

    Rows without a genre are dropped. The ``top_n`` most frequent genres are
    kept in descending count order (ties in first-encounter order) and the
    remainder, if any, is summed into a trailing "Other" row.

    Args:
        df (pd.DataFrame): Survey rows, possibly already selection-filtered.
        top_n (int): Number of genres kept before bucketing into "Other".

    Returns:
        pd.DataFrame: Columns 'genre', 'count', 'percentage' (fraction of
            all valid rows). Counts sum to the number of valid rows.
    """
    valid = filter_valid_genres(df)
    counts = _count_genres(valid)
    if counts.empty:
        return pd.DataFrame(columns=DISTRIBUTION_COLUMNS)

    total = int(counts.sum())
    top = counts.iloc[: max(top_n, 0)]
    rows = [{"genre": str(g), "count": int(c)} for g, c in top.items()]
    remainder = total - int(top.sum())
    if remainder > 0:
        rows.append({"genre": OTHER_LABEL, "count": remainder})

    res = pd.DataFrame(rows, columns=["genre", "count"])
    res["percentage"] = res["count"] / total
    return res


def top_flow_genres(df: pd.DataFrame, top_n: int = DEFAULT_TOP_N) -> list[str]:
    """Top genres of the flow-eligible population, most frequent first.

    The list is derived from whatever population is passed in, so after a
    selection filter it can differ from the donut's categories.
    """
    counts = _count_genres(filter_flow_records(df))
    return [str(g) for g in counts.index[: max(top_n, 0)]]


def compute_genre_depression_flow(df: pd.DataFrame, top_genres: Iterable[str]) -> SankeyData:
    """Weighted genre to depression-band links for the Sankey diagram.

    Rows need a genre in ``top_genres`` and a numeric depression score in
    [0, 10]; everything else is silently excluded. Each (genre, band) pair
    becomes one link whose weight is the number of rows sharing it. Node ids
    are assigned in first-reference order, source before target.

    Args:
        df (pd.DataFrame): Survey rows.
        top_genres (Iterable[str]): Genres allowed as link sources.

    Returns:
        SankeyData: Nodes and links. Either list may be empty, in which case
            the caller should render a "no data" placeholder.
    """
    allowed = {str(g) for g in top_genres}
    records = filter_flow_records(df)
    if records.empty or not allowed:
        return SankeyData()

    genres = _clean_genres(records)
    records = records.loc[genres.isin(allowed)]
    if records.empty:
        return SankeyData()

    pairs = pd.DataFrame(
        {
            "genre": _clean_genres(records),
            "band": pd.to_numeric(records[DEPRESSION_COLUMN]).map(score_to_band),
        }
    )
    weights = pairs.groupby(["genre", "band"], sort=False).size()

    data = SankeyData()
    node_ids: dict[tuple[str, Any], int] = {}

    def _node_id(key: tuple[str, Any], label: str, band: DepressionBand | None) -> int:
        if key not in node_ids:
            node_ids[key] = len(node_ids)
            data.nodes.append(SankeyNode(id=node_ids[key], label=label, band=band))
        return node_ids[key]

    for (genre, band_value), weight in weights.items():
        band = DepressionBand(band_value)
        src = _node_id(("genre", genre), str(genre), None)
        dst = _node_id(("band", band), band.label, band)
        data.links.append(SankeyLink(source=src, target=dst, value=int(weight)))

    logger.debug("Built genre flow with %d nodes and %d links", len(data.nodes), len(data.links))
    return data


def compute_genre_mental_health(
    df: pd.DataFrame,
    *,
    limit: int | None = DEFAULT_BAR_LIMIT,
    con: Any | None = None,
) -> pd.DataFrame:
    """Mean anxiety, depression, insomnia and OCD scores per favourite genre.

    Uses DuckDB over a registered copy of the valid-genre rows. Missing
    scores are ignored by the averages. Genres are ordered by mean depression
    descending, ties in first-encounter order.

    Args:
        df (pd.DataFrame): Survey rows.
        limit (int | None): Maximum genres returned; None or <= 0 for all.
        con: Optional DuckDB connection; an in-memory one is used otherwise.

    Returns:
        pd.DataFrame: Columns 'genre', 'avg_anxiety', 'avg_depression',
            'avg_insomnia', 'avg_ocd', 'respondents'.
    """
    valid = filter_valid_genres(df)
    if valid.empty:
        return pd.DataFrame(columns=MENTAL_HEALTH_COLUMNS)

    scores = pd.DataFrame(
        {
            "genre": _clean_genres(valid).to_numpy(),
            "ord": range(len(valid)),
            "anxiety": _score_values(valid, "Anxiety"),
            "depression": _score_values(valid, DEPRESSION_COLUMN),
            "insomnia": _score_values(valid, "Insomnia"),
            "ocd": _score_values(valid, "OCD"),
        }
    )

    close_conn = False
    if con is None:
        con = duckdb.connect(":memory:")
        close_conn = True

    try:
        rel = "df_scores_in"
        with contextlib.suppress(Exception):
            con.unregister(rel)
        con.register(rel, scores)

        lim = f"LIMIT {int(limit)}" if (limit is not None and limit > 0) else ""
        sql = f"""
            WITH cleaned AS (
                SELECT
                    genre,
                    ord,
                    CASE WHEN isnan(anxiety) THEN NULL ELSE anxiety END AS anxiety,
                    CASE WHEN isnan(depression) THEN NULL ELSE depression END AS depression,
                    CASE WHEN isnan(insomnia) THEN NULL ELSE insomnia END AS insomnia,
                    CASE WHEN isnan(ocd) THEN NULL ELSE ocd END AS ocd
                FROM {rel}
            )
            SELECT
                genre,
                AVG(anxiety) AS avg_anxiety,
                AVG(depression) AS avg_depression,
                AVG(insomnia) AS avg_insomnia,
                AVG(ocd) AS avg_ocd,
                COUNT(*) AS respondents
            FROM cleaned
            GROUP BY genre
            ORDER BY avg_depression DESC NULLS LAST, MIN(ord)
            {lim}
        """
        res = con.execute(sql).df()
        res["respondents"] = res["respondents"].astype(int)
        return res[MENTAL_HEALTH_COLUMNS]
    finally:
        with contextlib.suppress(Exception):
            con.unregister("df_scores_in")
        if close_conn:
            con.close()
