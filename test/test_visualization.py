import os

from src import pipeline, visualization
from src.ingest import EXPECTED_COLS


def test_render_all(con, cfg, fixture_csv):
    pipeline.run(str(fixture_csv), con, cfg)
    paths = visualization.render_all(con, cfg)
    assert [os.path.basename(p) for p in paths] == ["1_top_products.png", "2_reviewers.png"]
    assert all(os.path.getsize(p) > 0 for p in paths)


def test_render_skips_empty_tables(con, cfg, tmp_path, capsys):
    csv = tmp_path / "empty.csv"
    csv.write_text(",".join(EXPECTED_COLS) + "\n", encoding="utf-8")
    stats = pipeline.run(str(csv), con, cfg)
    assert stats.products == stats.reviews == 0
    assert visualization.render_all(con, cfg) == []
    out = capsys.readouterr().out
    assert "No product rows to plot." in out
    assert "No reviewer rows to plot." in out
