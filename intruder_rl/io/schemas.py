"""Parquet schema definitions for training-run artifacts.

The per-tick log is the only tabular artifact; the learned value table
itself is never persisted.
"""

from __future__ import annotations

import pyarrow as pa

SUMMARY_SCHEMA_VERSION = 1

TICK_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("action", pa.int64()),
        ("decision", pa.string()),
        ("outcome", pa.string()),
        ("reward", pa.float64()),
        ("state", pa.string()),
        ("next_state", pa.string()),
        ("table_size", pa.int64()),
    ]
)
