"""
Structured logging for Backend TxExport.

JSON logs with timestamp, wallet_id, signature, event_type.
"""

from backend_txexport.txexport_logging.logger import bind_wallet, configure_logging, get_logger

__all__ = ["bind_wallet", "configure_logging", "get_logger"]
