"""
Load the raw Amazon product/review CSV into the staging layer.
- Header row skipped, double quotes as optional enclosure
- Every field kept as text; NULL/null/empty fields become real nulls
- Output: staging.raw_products (+ source_row, the 1-based file position)
"""

from __future__ import annotations
import csv
from pathlib import Path
from typing import Optional
import pandas as pd
from .config import CFG, Settings
from .io_utils import conn, write_df, count_rows

EXPECTED_COLS = [
    "product_id", "product_name", "category", "discounted_price", "actual_price",
    "discount_percentage", "rating", "rating_count", "about_product", "user_id",
    "user_name", "review_id", "review_title", "review_content", "img_link", "product_link",
]

NULL_TOKENS = ["NULL", "null", ""]

RAW_TYPES = {c: "VARCHAR" for c in EXPECTED_COLS}
RAW_TYPES["source_row"] = "BIGINT"


def _check_layout(path: Path):
    """Header must match EXPECTED_COLS and every record must carry exactly that many fields."""
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh, delimiter=",", quotechar='"')
        header = next(reader, [])
        if header != EXPECTED_COLS:
            missing = [c for c in EXPECTED_COLS if c not in header]
            extra = [c for c in header if c not in EXPECTED_COLS]
            raise ValueError(
                f"Unexpected header in {path.name}: missing={missing} extra={extra} "
                f"(columns must be {', '.join(EXPECTED_COLS)} in this order)"
            )
        for fields in reader:
            if fields and len(fields) != len(EXPECTED_COLS):
                raise ValueError(
                    f"{path.name} line {reader.line_num}: expected {len(EXPECTED_COLS)} fields, got {len(fields)}"
                )


def read_source(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Place {path.name} under {path.parent}/")

    _check_layout(path)
    df = pd.read_csv(
        path,
        sep=",",
        header=0,
        quotechar='"',
        dtype=str,
        keep_default_na=False,
        na_values=NULL_TOKENS,
        encoding="utf-8",
    )
    df = df.astype(object).where(df.notna(), None)
    df.insert(0, "source_row", range(1, len(df) + 1))
    return df


def run(con=None, cfg: Settings = CFG, csv_path: Optional[str] = None) -> int:
    con = con if con is not None else conn(cfg.duckdb_path)
    df = read_source(csv_path or cfg.source_csv)
    write_df(con, cfg.raw_table, df, types=RAW_TYPES)
    n = count_rows(con, cfg.raw_table)
    print(f"[info] loaded {n} raw rows into {cfg.raw_table}")
    return n
