"""
Drop rows whose rating_count did not survive cleaning.
A null rating_count is used as the marker of a broken source row; this is a
heuristic, not a validation of the other fields.
"""

from .config import CFG, Settings
from .io_utils import conn, ensure_schema, count_rows


def run(con=None, cfg: Settings = CFG) -> int:
    con = con if con is not None else conn(cfg.duckdb_path)
    ensure_schema(con, cfg.filtered_table)
    con.execute(
        f"""
        CREATE OR REPLACE TABLE {cfg.filtered_table} AS
        SELECT *
        FROM {cfg.normalized_table}
        WHERE rating_count_clean IS NOT NULL;
        """
    )
    before = count_rows(con, cfg.normalized_table)
    after = count_rows(con, cfg.filtered_table)
    if before != after:
        print(f"[info] filtered out {before - after} rows with missing rating_count (kept {after})")
    return after
