"""
Transaction export package: backoff fetcher, normalizer, JSON file sink and
the pipeline that ties them together for one wallet.
"""

from backend_txexport.exporter.backoff import BackoffPolicy, fetch_with_backoff
from backend_txexport.exporter.normalizer import SimplifiedTransaction, Token, normalize
from backend_txexport.exporter.pipeline import ExportResult, TransactionExporter
from backend_txexport.exporter.sink import JsonFileSink

__all__ = [
    "BackoffPolicy",
    "ExportResult",
    "JsonFileSink",
    "SimplifiedTransaction",
    "Token",
    "TransactionExporter",
    "fetch_with_backoff",
    "normalize",
]
