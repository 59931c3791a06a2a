"""
Backend TxExport — Solana wallet transaction export service.

Serves GET /transactions/{wallet}: lists the wallet's recent signatures from a
Solana RPC node, fetches each transaction with bounded exponential backoff,
normalizes the results, and writes them to a JSON file on local disk.
"""

__version__ = "0.1.0"
