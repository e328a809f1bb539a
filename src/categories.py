"""
Split the pipe-delimited category path into five fixed levels.
level1 is the most general; positions past the fifth are dropped.
Output: staging.products_categorized (filtered rows + category1..category5)
"""

from __future__ import annotations
from typing import NamedTuple, Optional
import pandas as pd
from .config import CFG, Settings
from .io_utils import conn, ensure_schema, count_rows

DEPTH = 5
DELIMITER = "|"
LEVEL_COLS = [f"category{i}" for i in range(1, DEPTH + 1)]


class CategoryLevels(NamedTuple):
    level1: Optional[str] = None
    level2: Optional[str] = None
    level3: Optional[str] = None
    level4: Optional[str] = None
    level5: Optional[str] = None


def split_category(value: Optional[str]) -> CategoryLevels:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return CategoryLevels()
    parts = [p.strip() for p in str(value).split(DELIMITER)[:DEPTH]]
    return CategoryLevels(*parts)


def add_levels(df: pd.DataFrame) -> pd.DataFrame:
    levels = pd.DataFrame(
        [split_category(v) for v in df["category"]],
        index=df.index,
        columns=LEVEL_COLS,
        dtype=object,
    )
    return pd.concat([df, levels], axis=1)


def run(con=None, cfg: Settings = CFG) -> int:
    con = con if con is not None else conn(cfg.duckdb_path)
    ensure_schema(con, cfg.categorized_table)

    # split only (source_row, category) in pandas; the typed columns stay in DuckDB
    levels = add_levels(con.execute(f"SELECT source_row, category FROM {cfg.filtered_table}").df())
    levels = levels[["source_row"] + LEVEL_COLS]
    cols = ", ".join(f"CAST(l.{c} AS VARCHAR) AS {c}" for c in LEVEL_COLS)

    con.register("_levels", levels)
    try:
        con.execute(
            f"""
            CREATE OR REPLACE TABLE {cfg.categorized_table} AS
            SELECT f.*, {cols}
            FROM {cfg.filtered_table} f
            LEFT JOIN _levels l ON l.source_row = f.source_row
            ORDER BY f.source_row;
            """
        )
    finally:
        con.unregister("_levels")
    return count_rows(con, cfg.categorized_table)
