"""Amazon sales star-schema pipeline on DuckDB."""
