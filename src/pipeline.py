"""
Run every stage once, in order, against one DuckDB database.

raw -> normalized -> filtered -> categorized -> exploded -> reviews_dedup
                                 categorized -> products_dedup
reviews_dedup + products_dedup -> dim_product, fact_review

A failing stage raises and stops the run; tables written by earlier stages stay
as they are and can be rebuilt by rerunning from that point.
"""

from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import Optional
from . import ingest, normalize, filter_rows, categories, reviews, dedup, model
from .config import CFG, Settings
from .io_utils import conn


@dataclass(frozen=True)
class PipelineStats:
    raw_rows: int
    filtered_rows: int
    exploded_reviews: int
    dropped_review_records: int
    products: int
    reviews: int


def run(csv_path: Optional[str] = None, con=None, cfg: Settings = CFG) -> PipelineStats:
    con = con if con is not None else conn(cfg.duckdb_path)

    raw = ingest.run(con, cfg, csv_path)
    normalize.run(con, cfg)
    filtered = filter_rows.run(con, cfg)
    print(f"[info] checkpoint post-filter: {filtered} of {raw} rows")

    categories.run(con, cfg)
    exploded, dropped = reviews.run(con, cfg)
    dedup.run_reviews(con, cfg)
    dedup.run_products(con, cfg)

    products, facts = model.run(con, cfg)
    print(f"[info] checkpoint post-dedup: {products} products in {cfg.dim_product}, "
          f"{facts} reviews in {cfg.fact_review}")

    return PipelineStats(
        raw_rows=raw,
        filtered_rows=filtered,
        exploded_reviews=exploded,
        dropped_review_records=dropped,
        products=products,
        reviews=facts,
    )


if __name__ == "__main__":
    run(sys.argv[1] if len(sys.argv) > 1 else None)
