# optional: export the star schema to parquet/csv for BI
from pathlib import Path
from typing import Dict, Optional
from .config import CFG, Settings
from .io_utils import conn


def export_analytics(con=None, cfg: Settings = CFG, out_dir: Optional[str] = None) -> Dict[str, Path]:
    con = con if con is not None else conn(cfg.duckdb_path)
    out = Path(out_dir or cfg.export_dir)
    out.mkdir(parents=True, exist_ok=True)

    written = {}
    for table in (cfg.dim_product, cfg.fact_review):
        name = table.split(".")[-1]
        df = con.execute(f"SELECT * FROM {table}").df()
        df.to_parquet(out / f"{name}.parquet", index=False)
        df.to_csv(out / f"{name}.csv", index=False)
        written[name] = out / f"{name}.parquet"
        print(f"[info] exported {len(df)} rows from {table} to {out}")
    return written
