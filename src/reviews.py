"""
Explode the comma-joined review lists into one row per review.

user_id, user_name, review_id and review_title are parallel lists packed into a
single source row. They are aligned by position only when all four have the same
length; otherwise the whole record is skipped (no truncation to the shortest list).
Output: staging.reviews_exploded(source_row, product_id, user_id, user_name, review_id, review_title)
"""

from __future__ import annotations
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple
import pandas as pd
from .config import CFG, Settings
from .io_utils import conn, write_df, count_rows

LIST_FIELDS = ("user_id", "user_name", "review_id", "review_title")
SEPARATOR = ","
REVIEW_COLS = ["source_row", "product_id", "user_id", "user_name", "review_id", "review_title"]
REVIEW_TYPES = {
    "source_row": "BIGINT",
    "product_id": "VARCHAR",
    "user_id": "VARCHAR",
    "user_name": "VARCHAR",
    "review_id": "VARCHAR",
    "review_title": "VARCHAR",
}


_WORD_RE = re.compile(r"\S+")


def initcap(name: str) -> str:
    """Capitalise each whitespace-separated word and lowercase the rest of it (O'brien, User2name)."""
    return _WORD_RE.sub(lambda m: m.group(0).capitalize(), name)


def _split(value: Optional[str]) -> List[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return str(value).split(SEPARATOR)


def explode_record(record: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """One dict per aligned review; [] when the four lists differ in length."""
    user_ids, user_names, review_ids, titles = (_split(record.get(f)) for f in LIST_FIELDS)
    if not len(user_ids) == len(user_names) == len(review_ids) == len(titles):
        return []
    return [
        {
            "source_row": record.get("source_row"),
            "product_id": record.get("product_id"),
            "user_id": uid,
            "user_name": initcap(name),
            "review_id": rid,
            "review_title": title,
        }
        for uid, name, rid, title in zip(user_ids, user_names, review_ids, titles)
    ]


def explode(df: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """Returns (exploded rows, number of source records dropped for misaligned lists)."""
    rows: List[Dict[str, Any]] = []
    dropped = 0
    for rec in df.to_dict(orient="records"):
        out = explode_record(rec)
        if not out and any(_split(rec.get(f)) for f in LIST_FIELDS):
            dropped += 1
        rows.extend(out)
    return pd.DataFrame(rows, columns=REVIEW_COLS), dropped


def run(con=None, cfg: Settings = CFG) -> Tuple[int, int]:
    con = con if con is not None else conn(cfg.duckdb_path)
    cols = ", ".join(["source_row", "product_id", *LIST_FIELDS])
    df = con.execute(f"SELECT {cols} FROM {cfg.categorized_table} ORDER BY source_row").df()

    out, dropped = explode(df)
    if dropped:
        print(f"[warn] dropped {dropped} records with mismatched review list lengths")
    write_df(con, cfg.exploded_table, out, types=REVIEW_TYPES)
    return count_rows(con, cfg.exploded_table), dropped
