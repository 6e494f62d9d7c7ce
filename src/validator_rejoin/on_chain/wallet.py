from typing import Any, Dict, Tuple

from eth_account import Account
from eth_account.signers.local import LocalAccount

from validator_rejoin.errors import RejoinError


def load_wallet(private_key: str) -> LocalAccount:
    # the key itself never goes into the error message
    try:
        return Account.from_key(private_key.strip())
    except Exception as e:
        raise RejoinError(f"Invalid private key format: {type(e).__name__}") from None


def sign_transaction(account: LocalAccount, unsigned_tx: Dict[str, Any]) -> Tuple[str, str]:
    """Return (raw tx hex, tx hash hex) for a signed transaction."""
    signed = account.sign_transaction(unsigned_tx)
    raw_tx = getattr(signed, "raw_transaction", None)
    if raw_tx is None:
        raw_tx = getattr(signed, "rawTransaction", None)
    if raw_tx is None:
        raise RejoinError("Failed to extract signed raw transaction bytes.")
    return "0x" + bytes(raw_tx).hex(), "0x" + bytes(signed.hash).hex()
