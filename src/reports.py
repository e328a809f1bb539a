"""
Read-only reporting queries over the star schema.

top_reviewers sorts ascending by default, matching the legacy "Top 5 reviewers"
report; set REVIEWER_SORT=desc (or pass order="desc") to rank the most active
reviewers first.
"""

from __future__ import annotations
from typing import List, Optional
from .config import CFG, Settings
from .io_utils import conn
from .schemas import ProductReviewCount, ReviewerCount

_ORDERS = {"asc": "ASC", "desc": "DESC"}


def top_reviewed_products(con=None, cfg: Settings = CFG, n: Optional[int] = None) -> List[ProductReviewCount]:
    con = con if con is not None else conn(cfg.duckdb_path)
    rows = con.execute(
        f"""
        SELECT p.product_id, p.product_name, COUNT(r.review_id) AS review_count
        FROM {cfg.fact_review} r
        JOIN {cfg.dim_product} p ON p.product_id = r.product_id
        GROUP BY 1, 2
        ORDER BY review_count DESC, p.product_id
        LIMIT {int(n or cfg.top_n)}
        """
    ).fetchall()
    return [ProductReviewCount(product_id=a, product_name=b, review_count=c) for a, b, c in rows]


def top_reviewers(
    con=None, cfg: Settings = CFG, n: Optional[int] = None, order: Optional[str] = None
) -> List[ReviewerCount]:
    con = con if con is not None else conn(cfg.duckdb_path)
    order = (order or cfg.reviewer_sort).lower()
    if order not in _ORDERS:
        raise ValueError(f"reviewer sort must be one of {sorted(_ORDERS)}, got {order!r}")

    rows = con.execute(
        f"""
        SELECT user_id, user_name, COUNT(*) AS review_count
        FROM {cfg.fact_review}
        GROUP BY 1, 2
        ORDER BY review_count {_ORDERS[order]}, user_id
        LIMIT {int(n or cfg.top_n)}
        """
    ).fetchall()
    return [ReviewerCount(user_id=a, user_name=b, review_count=c) for a, b, c in rows]
