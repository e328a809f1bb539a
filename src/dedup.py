"""
Collapse rows sharing a natural key to a single survivor.
- reviews: one row per review_id, lowest product_id wins
- products: one row per product_id, highest rating_count wins
source_row (file order) breaks any remaining ties so reruns pick the same row.
"""

from .config import CFG, Settings
from .io_utils import conn, ensure_schema, count_rows

REVIEW_KEY = "review_id"
REVIEW_ORDER = "product_id ASC, source_row ASC"

PRODUCT_KEY = "product_id"
PRODUCT_ORDER = "rating_count_clean DESC NULLS LAST, source_row ASC"


def dedup(con, source: str, target: str, partition_by: str, order_by: str) -> int:
    ensure_schema(con, target)
    con.execute(
        f"""
        CREATE OR REPLACE TABLE {target} AS
        SELECT * EXCLUDE (rn)
        FROM (
            SELECT *,
                   ROW_NUMBER() OVER (
                       PARTITION BY {partition_by}
                       ORDER BY {order_by}
                   ) AS rn
            FROM {source}
        )
        WHERE rn = 1
        ORDER BY source_row;
        """
    )
    before = count_rows(con, source)
    after = count_rows(con, target)
    if before != after:
        print(f"[info] {target}: collapsed {before - after} duplicate {partition_by} rows (kept {after})")
    return after


def run_reviews(con=None, cfg: Settings = CFG) -> int:
    con = con if con is not None else conn(cfg.duckdb_path)
    return dedup(con, cfg.exploded_table, cfg.review_dedup_table, REVIEW_KEY, REVIEW_ORDER)


def run_products(con=None, cfg: Settings = CFG) -> int:
    con = con if con is not None else conn(cfg.duckdb_path)
    return dedup(con, cfg.categorized_table, cfg.product_dedup_table, PRODUCT_KEY, PRODUCT_ORDER)
