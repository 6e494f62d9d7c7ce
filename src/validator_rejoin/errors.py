"""
Exceptions raised by the re-join pipeline. Library code raises these; the CLI
is the only place that turns them into console output.
"""
from typing import Any, Dict, Optional


class RejoinError(Exception):
    """Base class for every error this tool raises on purpose."""


class ConfigError(RejoinError):
    pass


class ArgsParseError(RejoinError):
    """The pasted args blob is neither a JSON array nor a tuple rendering."""


class ExtractionError(RejoinError):
    """The parsed arguments are missing fields or have the wrong shape."""


class EncodingError(RejoinError):
    """A value could not be coerced to its ABI type."""


class RpcError(RejoinError):
    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.code = code
        self.data = data

    @classmethod
    def from_response(cls, method: str, error: Dict[str, Any]) -> "RpcError":
        message = str(error.get("message", error))
        return cls(f"RPC error on {method}: {message}", code=error.get("code"), data=error.get("data"))


class TransactionFailedError(RejoinError):
    """The transaction was mined but reverted (receipt status 0)."""

    def __init__(self, tx_hash: str, receipt: Dict[str, Any]):
        super().__init__(f"Transaction {tx_hash} reverted in block {receipt.get('blockNumber')}")
        self.tx_hash = tx_hash
        self.receipt = receipt


class ReceiptTimeoutError(RejoinError):
    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(f"Timed out after {timeout:.0f}s waiting for receipt of {tx_hash}")
        self.tx_hash = tx_hash
