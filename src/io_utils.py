from __future__ import annotations
from pathlib import Path
from typing import Mapping, Optional
import duckdb
import pandas as pd
from .config import CFG

_conns: dict[str, duckdb.DuckDBPyConnection] = {}


def conn(path: Optional[str] = None) -> duckdb.DuckDBPyConnection:
    """Shared connection per database file, opened on first use."""
    path = path or CFG.duckdb_path
    if path not in _conns:
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        _conns[path] = duckdb.connect(path)
    return _conns[path]


def ensure_schema(con: duckdb.DuckDBPyConnection, table: str):
    """Create the schema part of a qualified `schema.table` name if needed."""
    if "." in table:
        con.execute(f"CREATE SCHEMA IF NOT EXISTS {table.split('.', 1)[0]};")


def write_df(
    con: duckdb.DuckDBPyConnection,
    table: str,
    df: pd.DataFrame,
    types: Optional[Mapping[str, str]] = None,
):
    """
    CREATE OR REPLACE TABLE ... AS SELECT * FROM _df

    Columns listed in `types` are cast explicitly; the rest take the type
    DuckDB infers from the frame. Needed when a column can be entirely null
    (or the frame empty), where inference has nothing to go on.
    """
    ensure_schema(con, table)
    if types:
        select = ", ".join(
            f"CAST({c} AS {types[c]}) AS {c}" if c in types else c for c in df.columns
        )
    else:
        select = "*"
    con.register("_df", df)
    try:
        con.execute(f"CREATE OR REPLACE TABLE {table} AS SELECT {select} FROM _df;")
    finally:
        con.unregister("_df")


def count_rows(con: duckdb.DuckDBPyConnection, table: str) -> int:
    return con.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
