from __future__ import annotations
import os
import pandas as pd
import matplotlib.pyplot as plt
from .config import CFG, Settings
from .reports import top_reviewed_products, top_reviewers

# --- utils ------------------------------------------------------------

def _ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)

def _bar(df: pd.DataFrame, labels: str, title: str, xlabel: str, out_path: str):
    x = range(len(df))
    plt.figure(figsize=(10, 6))
    plt.bar(x, df["review_count"])
    plt.xticks(list(x), df[labels].fillna("?"), rotation=45, ha="right")
    plt.title(title)
    plt.xlabel(xlabel)
    plt.ylabel("Reviews")

    for i, n in enumerate(df["review_count"]):
        plt.text(i, n, str(int(n)), ha="center", va="bottom")

    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[viz] saved {out_path}")

# --- 1) Which products collect the most reviews? ----------------------
def plot_top_products(con=None, cfg: Settings = CFG, out_dir: str | None = None, top_n: int | None = None):
    """Bar chart of review counts for the most reviewed products."""
    out_dir = out_dir or cfg.charts_dir
    _ensure_dir(out_dir)
    df = pd.DataFrame([r.model_dump() for r in top_reviewed_products(con, cfg, top_n)])
    if df.empty:
        print("[viz] No product rows to plot.")
        return None

    out_path = os.path.join(out_dir, "1_top_products.png")
    _bar(df, "product_id", f"Top {len(df)} Products by Review Count", "Product", out_path)
    return out_path

# --- 2) Reviewer ranking ------------------------------------------------
def plot_top_reviewers(con=None, cfg: Settings = CFG, out_dir: str | None = None, top_n: int | None = None):
    """
    Bar chart of review counts per reviewer, in the configured sort direction.
    With the default (asc) this shows the least active reviewers.
    """
    out_dir = out_dir or cfg.charts_dir
    _ensure_dir(out_dir)
    df = pd.DataFrame([r.model_dump() for r in top_reviewers(con, cfg, top_n)])
    if df.empty:
        print("[viz] No reviewer rows to plot.")
        return None

    out_path = os.path.join(out_dir, "2_reviewers.png")
    _bar(df, "user_name", f"Reviewers by Review Count ({cfg.reviewer_sort})", "Reviewer", out_path)
    return out_path

# --- entry ------------------------------------------------------------
def render_all(con=None, cfg: Settings = CFG, out_dir: str | None = None):
    return [p for p in (plot_top_products(con, cfg, out_dir), plot_top_reviewers(con, cfg, out_dir)) if p]

if __name__ == "__main__":
    render_all()
