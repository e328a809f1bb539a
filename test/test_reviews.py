import pandas as pd
import pytest

from src import reviews, categories, normalize, filter_rows
from src.reviews import explode_record, initcap
from conftest import raw_row


def test_three_aligned_reviews():
    rec = raw_row(
        "P1", source_row=1, user_id="U1,U2,U3", user_name="jane doe,JOHN SMITH,al",
        review_id="R1,R2,R3", review_title="Good,Bad,Ugly",
    )
    out = explode_record(rec)
    assert len(out) == 3
    assert [(r["user_id"], r["user_name"], r["review_id"], r["review_title"]) for r in out] == [
        ("U1", "Jane Doe", "R1", "Good"),
        ("U2", "John Smith", "R2", "Bad"),
        ("U3", "Al", "R3", "Ugly"),
    ]
    assert {r["product_id"] for r in out} == {"P1"}


def test_mismatched_lengths_yield_nothing():
    rec = raw_row("P1", user_id="U1,U2", user_name="a,b,c", review_id="R1,R2", review_title="x,y")
    assert explode_record(rec) == []


def test_missing_list_field_counts_as_empty():
    assert explode_record(raw_row("P1", user_id="U1", user_name="a", review_id="R1", review_title=None)) == []
    assert explode_record(raw_row("P1")) == []


def test_explode_counts_dropped_records():
    df = pd.DataFrame([
        raw_row("P1", source_row=1, user_id="U1", user_name="a", review_id="R1", review_title="t"),
        raw_row("P2", source_row=2, user_id="U2,U3", user_name="b", review_id="R2,R3", review_title="t,u"),
        raw_row("P3", source_row=3),
    ])
    out, dropped = reviews.explode(df)
    assert dropped == 1
    assert out["review_id"].tolist() == ["R1"]
    assert list(out.columns) == reviews.REVIEW_COLS


def test_run_with_no_reviews_creates_typed_table(con, cfg, load_raw):
    load_raw([raw_row("P1")])
    normalize.run(con, cfg)
    filter_rows.run(con, cfg)
    categories.run(con, cfg)
    assert reviews.run(con, cfg) == (0, 0)
    types = dict(con.execute(f"SELECT column_name, column_type FROM (DESCRIBE {cfg.exploded_table})").fetchall())
    assert types == reviews.REVIEW_TYPES


def test_run_logs_drop_count(con, cfg, load_raw, capsys):
    load_raw([
        raw_row("P1", user_id="U1,U2", user_name="a,b", review_id="R1,R2", review_title="x,y"),
        raw_row("P2", user_id="U3,U4,U5", user_name="c,d", review_id="R3,R4,R5", review_title="x,y,z"),
    ])
    normalize.run(con, cfg)
    filter_rows.run(con, cfg)
    categories.run(con, cfg)
    assert reviews.run(con, cfg) == (2, 1)
    assert "dropped 1 records" in capsys.readouterr().out


@pytest.mark.parametrize("raw,expected", [
    ("jane doe", "Jane Doe"),
    ("JOHN SMITH", "John Smith"),
    ("o'brien user2name", "O'brien User2name"),
    ("mary-jane  watson", "Mary-jane  Watson"),
    ("", ""),
])
def test_initcap_capitalises_whitespace_separated_words(raw, expected):
    assert initcap(raw) == expected


def test_exploded_user_names_use_initcap():
    rec = raw_row("P1", user_id="U1", user_name="o'brien user2name", review_id="R1", review_title="t")
    assert explode_record(rec)[0]["user_name"] == "O'brien User2name"
