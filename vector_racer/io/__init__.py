"""I/O layer: output paths and Parquet schemas."""
