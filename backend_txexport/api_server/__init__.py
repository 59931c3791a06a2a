"""
API server package — HTTP interface for wallet transaction exports.
"""
