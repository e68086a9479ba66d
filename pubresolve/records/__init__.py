"""Publish record file — models and on-disk store."""

from pubresolve.records.models import PROJECT_SOURCE, PublishEntry, PublishRecord
from pubresolve.records.store import (
    DEFAULT_RECORD_FILE,
    RecordStore,
    parse_records,
)

__all__ = [
    "DEFAULT_RECORD_FILE",
    "PROJECT_SOURCE",
    "PublishEntry",
    "PublishRecord",
    "RecordStore",
    "parse_records",
]
