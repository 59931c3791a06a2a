"""Wallet validation utilities."""

from solders.pubkey import Pubkey


def is_valid_wallet(w: str) -> bool:
    """Return True if w is a valid Solana wallet (Pubkey) address, exactly as given."""
    if not w or w != w.strip():
        return False
    try:
        Pubkey.from_string(w)
        return True
    except ValueError:
        return False
