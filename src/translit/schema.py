"""Column layout of substring mapping tables.

Every loader turns its file format into rows of this shape, so one validator
guards what ``SubstringMapper.from_dataframe`` consumes. An empty ``language``
marks a mapping that applies to every language.
"""
from typing import Optional

import pandas as pd

MAPPING_COLUMNS = [
    "source",
    "target",
    "score",
    "language",
    "comment",
]


def empty_dataframe() -> pd.DataFrame:
    """A mapping table with no rows."""
    return pd.DataFrame(columns=MAPPING_COLUMNS)


def make_row(
    source: str,
    target: str,
    score: float,
    language: str = "",
    comment: Optional[str] = None,
) -> dict:
    """One mapping of ``source`` to ``target``, optionally scoped to a language code."""
    return dict(zip(MAPPING_COLUMNS, (source, target, score, language, comment)))


def validate_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """Reject mapping tables a ``SubstringMapper`` could not be built from.

    Raises ValueError on missing columns, empty source patterns or scores
    that are not numbers. Returns ``df`` itself.
    """
    missing = [column for column in MAPPING_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {missing}")
    if df.empty:
        return df

    sources = df["source"].astype(str)
    if (sources == "").any():
        raise ValueError(f"Empty source patterns in {int((sources == '').sum())} rows")

    scores = pd.to_numeric(df["score"], errors="coerce")
    bad_scores = df.loc[scores.isna(), "score"]
    if len(bad_scores):
        raise ValueError(f"Invalid score values: {sorted(set(map(str, bad_scores)))}")
    return df
