import dataclasses
import duckdb
import pandas as pd
import pytest

from src.config import Settings
from src.ingest import EXPECTED_COLS, RAW_TYPES
from src.io_utils import write_df


def raw_row(product_id, **fields):
    row = {c: None for c in EXPECTED_COLS}
    row.update(product_id=product_id, product_name=f"Product {product_id}", rating="4.1", rating_count="100")
    row.update(fields)
    return row


@pytest.fixture
def cfg(tmp_path):
    return dataclasses.replace(
        Settings(),
        duckdb_path=":memory:",
        rating_sentinels=("|",),
        rating_default=4.0,
        reviewer_sort="asc",
        top_n=5,
        export_dir=str(tmp_path / "enriched"),
        charts_dir=str(tmp_path / "charts"),
    )


@pytest.fixture
def con():
    c = duckdb.connect(":memory:")
    yield c
    c.close()


@pytest.fixture
def load_raw(con, cfg):
    """Write raw rows (dicts keyed by source column) straight into the raw staging table."""
    def _load(rows):
        df = pd.DataFrame(rows, columns=EXPECTED_COLS).astype(object)
        df = df.where(df.notna(), None)
        df.insert(0, "source_row", range(1, len(df) + 1))
        write_df(con, cfg.raw_table, df, types=RAW_TYPES)
    return _load


@pytest.fixture
def fixture_csv(tmp_path):
    """
    Five rows: P2 has no rating_count, P3's review lists are 3-vs-2,
    P4 appears twice (rating_count 10 and 50).
    """
    rows = [
        raw_row(
            "P1", category="Electronics|Headphones|In-Ear", discounted_price="₹1,099",
            actual_price="₹2,499", discount_percentage="56%", rating="4.2", rating_count="24,269",
            user_id="U1,U2", user_name="jane doe,john smith", review_id="R1,R2",
            review_title="Great sound,Okay",
        ),
        raw_row(
            "P2", category="Home|Kitchen", rating_count="NULL",
            user_id="U3", user_name="ann lee", review_id="R3", review_title="Meh",
        ),
        raw_row(
            "P3", category="Computers", rating="|", rating_count="7",
            user_id="U4,U5,U6", user_name="a b,c d", review_id="R4,R5,R6",
            review_title="x,y,z",
        ),
        raw_row(
            "P4", category="Toys", rating_count="10",
            user_id="U7", user_name="old row", review_id="R7", review_title="First",
        ),
        raw_row(
            "P4", category="Toys", rating_count="50",
            user_id="U8", user_name="new row", review_id="R8", review_title="Second",
        ),
    ]
    path = tmp_path / "amazon.csv"
    pd.DataFrame(rows, columns=EXPECTED_COLS).to_csv(path, index=False, na_rep="NULL", encoding="utf-8")
    return path
