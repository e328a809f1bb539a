"""
Strip currency/percent/thousands noise from the numeric text columns and cast them.
Adds *_clean columns next to the raw text:
- discounted_price_clean, actual_price_clean, discount_percentage_clean, rating_clean (DOUBLE)
- rating_count_clean (INTEGER)
Anything that does not parse after stripping becomes NULL.
"""

from __future__ import annotations
from .config import CFG, Settings
from .io_utils import conn, ensure_schema

# column -> (noise characters, target type)
NOISE = {
    "discounted_price": (("₹", ","), "DOUBLE"),
    "actual_price": (("₹", ","), "DOUBLE"),
    "discount_percentage": (("%",), "DOUBLE"),
    "rating_count": ((",",), "INTEGER"),
}


def _quote(s: str) -> str:
    return "'" + s.replace("'", "''") + "'"


def strip_expr(column: str, noise) -> str:
    expr = column
    for ch in noise:
        expr = f"replace({expr}, {_quote(ch)}, '')"
    return f"trim({expr})"


def clean_expr(column: str) -> str:
    noise, typ = NOISE[column]
    return f"TRY_CAST({strip_expr(column, noise)} AS {typ})"


def rating_expr(cfg: Settings = CFG) -> str:
    """Sentinel tokens map to the default rating; other non-numeric text maps to NULL."""
    parsed = "TRY_CAST(trim(rating) AS DOUBLE)"
    if not cfg.rating_sentinels:
        return parsed
    tokens = ", ".join(_quote(t) for t in cfg.rating_sentinels)
    return f"CASE WHEN trim(rating) IN ({tokens}) THEN {float(cfg.rating_default)} ELSE {parsed} END"


def run(con=None, cfg: Settings = CFG) -> int:
    con = con if con is not None else conn(cfg.duckdb_path)
    ensure_schema(con, cfg.normalized_table)
    con.execute(
        f"""
        CREATE OR REPLACE TABLE {cfg.normalized_table} AS
        SELECT *,
               {clean_expr("discounted_price")}    AS discounted_price_clean,
               {clean_expr("actual_price")}        AS actual_price_clean,
               {clean_expr("discount_percentage")} AS discount_percentage_clean,
               {rating_expr(cfg)}                  AS rating_clean,
               {clean_expr("rating_count")}        AS rating_count_clean
        FROM {cfg.raw_table};
        """
    )

    n, bad_ratings = con.execute(
        f"""
        SELECT COUNT(*),
               COUNT(*) FILTER (WHERE rating IS NOT NULL AND rating_clean IS NULL)
        FROM {cfg.normalized_table}
        """
    ).fetchone()
    if bad_ratings:
        print(f"[warn] {bad_ratings} non-numeric rating values set to NULL")
    return n
