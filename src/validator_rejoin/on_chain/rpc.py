import time
import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from validator_rejoin.errors import RpcError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 6
MAX_BACKOFF = 8.0
RATE_LIMIT_MARKERS = ("rate limit", "too many", "capacity", "timeout")


# ---------- Utils ----------
def hex_to_int(h: Optional[str]) -> int:
    if h is None or h == "0x":
        return 0
    if isinstance(h, int):
        return h
    return int(h, 16)


# ---------- JSON-RPC ----------
class RpcClient:
    """JSON-RPC 2.0 over a keep-alive session, backing off on 429 and rate-limit errors."""

    def __init__(self, url: str, session: Optional[requests.Session] = None, timeout: float = 60.0):
        self.url = url
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=4, pool_maxsize=4)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session
        self._next_id = 1

    def call(self, method: str, params: list) -> Any:
        payload = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        self._next_id += 1
        backoff = 0.5
        last_error: Optional[Exception] = None
        for _ in range(MAX_ATTEMPTS):
            try:
                r = self.session.post(self.url, json=payload, timeout=self.timeout)
                if r.status_code == 429:
                    ra = r.headers.get("Retry-After")
                    delay = float(ra) if ra and ra.isdigit() else backoff
                    logger.info("%s rate limited, retrying in %.1fs", method, delay)
                    time.sleep(delay)
                    backoff = min(backoff * 2, MAX_BACKOFF)
                    continue
                r.raise_for_status()
                resp = r.json()
            except requests.exceptions.RequestException as e:
                logger.info("%s transport error: %s", method, e)
                last_error = e
                time.sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF)
                continue

            if resp.get("error"):
                err = resp["error"] if isinstance(resp["error"], dict) else {"message": str(resp["error"])}
                msg = str(err.get("message", "")).lower()
                if any(x in msg for x in RATE_LIMIT_MARKERS):
                    time.sleep(backoff)
                    backoff = min(backoff * 2, MAX_BACKOFF)
                    continue
                raise RpcError.from_response(method, err)
            return resp.get("result")
        raise RpcError(f"RPC request failed after retries: {method} ({last_error})")

    # thin wrappers for the calls the submission path makes
    def chain_id(self) -> int:
        return hex_to_int(self.call("eth_chainId", []))

    def get_nonce(self, address: str) -> int:
        return hex_to_int(self.call("eth_getTransactionCount", [address, "pending"]))

    def estimate_gas(self, tx: dict) -> int:
        result = self.call("eth_estimateGas", [tx])
        try:
            gas = hex_to_int(result) if result is not None else 0
        except (TypeError, ValueError) as e:
            raise RpcError(f"eth_estimateGas returned a malformed result: {result!r}") from e
        if gas <= 0:
            raise RpcError(f"eth_estimateGas returned no usable estimate: {result!r}")
        return gas

    def gas_price(self) -> int:
        return hex_to_int(self.call("eth_gasPrice", []))

    def max_priority_fee(self) -> int:
        return hex_to_int(self.call("eth_maxPriorityFeePerGas", []))

    def latest_block(self) -> dict:
        return self.call("eth_getBlockByNumber", ["latest", False]) or {}

    def send_raw_transaction(self, raw_tx_hex: str) -> str:
        return self.call("eth_sendRawTransaction", [raw_tx_hex])

    def get_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.call("eth_getTransactionReceipt", [tx_hash])
