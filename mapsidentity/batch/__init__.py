"""Bounded-concurrency batch processing."""

from mapsidentity.batch.batchprocessor import (
    DEFAULT_CONCURRENCY_LIMIT,
    Ok,
    Err,
    BatchItem,
    process_batch,
    batch_summary,
)

__all__ = [
    "DEFAULT_CONCURRENCY_LIMIT",
    "Ok",
    "Err",
    "BatchItem",
    "process_batch",
    "batch_summary",
]
