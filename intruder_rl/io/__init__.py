"""I/O layer: Parquet schemas and output path conventions."""
