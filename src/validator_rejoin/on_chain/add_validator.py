"""
Build, sign and submit the addValidator transaction.

Gas is estimated against the node first; if the estimate fails a fixed fallback
limit is used, and either way a 20% buffer is added. Fees follow EIP-1559 when
the chain reports a base fee, otherwise the legacy gas price is used.
"""
import time
import logging
from typing import Any, Dict, Optional

from eth_account.signers.local import LocalAccount

from validator_rejoin.errors import ReceiptTimeoutError, RejoinError, RpcError, TransactionFailedError
from validator_rejoin.on_chain.encoding import encode_add_validator
from validator_rejoin.on_chain.rpc import RpcClient, hex_to_int
from validator_rejoin.on_chain.wallet import sign_transaction
from validator_rejoin.types import TxResult, ValidatorData
from validator_rejoin.variables import (
    ADD_VALIDATOR_ABI,
    DEFAULT_PRIORITY_FEE_WEI,
    FALLBACK_GAS_LIMIT,
    GAS_BUFFER_PERCENT,
    RECEIPT_POLL_INTERVAL_SECONDS,
    RECEIPT_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


# ---------- Gas & fees ----------
def apply_gas_buffer(gas: int, percent: int = GAS_BUFFER_PERCENT) -> int:
    return gas * percent // 100


def estimate_gas_or_fallback(rpc: RpcClient, call: Dict[str, Any]) -> int:
    print("⛽ Estimating gas...")
    try:
        gas = rpc.estimate_gas(call)
        print(f"   Gas estimate: {gas}")
        return gas
    except (RejoinError, ValueError) as e:
        print(f"   ⚠️ Gas estimation failed: {e}. Using a fallback gas limit.")
        logger.warning("eth_estimateGas failed: %s", e)
        print(f"   Using fallback gas limit: {FALLBACK_GAS_LIMIT}")
        return FALLBACK_GAS_LIMIT


def resolve_fees(rpc: RpcClient) -> Dict[str, int]:
    """EIP-1559 fee fields when the latest block has a base fee, else a legacy gasPrice."""
    base_fee = rpc.latest_block().get("baseFeePerGas")
    if base_fee is None:
        return {"gasPrice": rpc.gas_price()}
    try:
        priority = rpc.max_priority_fee()
    except RpcError as e:
        logger.info("eth_maxPriorityFeePerGas unavailable (%s), using default tip", e)
        priority = DEFAULT_PRIORITY_FEE_WEI
    return {
        "maxFeePerGas": 2 * hex_to_int(base_fee) + priority,
        "maxPriorityFeePerGas": priority,
    }


def build_transaction(
    rpc: RpcClient, sender: str, to: str, data: str, gas_limit: int
) -> Dict[str, Any]:
    tx: Dict[str, Any] = {
        "chainId": rpc.chain_id(),
        "nonce": rpc.get_nonce(sender),
        "to": to,
        "value": 0,
        "data": data,
        "gas": gas_limit,
    }
    fees = resolve_fees(rpc)
    tx.update(fees)
    if "maxFeePerGas" in fees:
        tx["type"] = 2
    return tx


# ---------- Submission ----------
def submit(rpc: RpcClient, account: LocalAccount, tx: Dict[str, Any]) -> str:
    raw_tx, local_hash = sign_transaction(account, tx)
    try:
        tx_hash = rpc.send_raw_transaction(raw_tx)
    except RpcError as e:
        # a retried send after a dropped response comes back as a duplicate
        if "already known" not in str(e).lower():
            raise
        logger.info("Node already has %s", local_hash)
        tx_hash = local_hash
    return tx_hash or local_hash


def wait_for_receipt(
    rpc: RpcClient,
    tx_hash: str,
    timeout: float = RECEIPT_TIMEOUT_SECONDS,
    poll_interval: float = RECEIPT_POLL_INTERVAL_SECONDS,
) -> Dict[str, Any]:
    deadline = time.time() + timeout
    while True:
        receipt = rpc.get_receipt(tx_hash)
        if receipt and receipt.get("blockNumber"):
            if hex_to_int(receipt.get("status")) == 0:
                raise TransactionFailedError(tx_hash, receipt)
            return receipt
        if time.time() >= deadline:
            raise ReceiptTimeoutError(tx_hash, timeout)
        time.sleep(poll_interval)


def print_error_hint(error: Exception) -> None:
    msg = str(error).lower()
    if isinstance(error, TransactionFailedError) or "execution reverted" in msg:
        print(
            "   Hint: a revert means the contract rejected the call "
            "(e.g. already registered, invalid proof). Check contract logic or input data."
        )
    elif "insufficient funds" in msg:
        print("   Hint: Insufficient funds in the wallet to cover gas fees.")


def call_add_validator(
    account: LocalAccount,
    data: ValidatorData,
    *,
    rpc: RpcClient,
    contract_address: str,
    receipt_timeout: float = RECEIPT_TIMEOUT_SECONDS,
    dry_run: bool = False,
) -> Optional[TxResult]:
    print("🚀 Calling addValidator function on the contract...")

    try:
        call_data = encode_add_validator(data, ADD_VALIDATOR_ABI)

        print("📋 Transaction Parameters:")
        print(f"   Contract Address: {contract_address}")
        print(f"   Attester: {data['attester']}")
        print(f"   Merkle Proof: {len(data['merkle_proof'])} elements")
        print(f"   ZKPassport Params: Contains {len(data['params'])} fields")
        print("   BLS Keys/Signature: Provided")

        call = {"from": account.address, "to": contract_address, "data": call_data}
        gas_limit = apply_gas_buffer(estimate_gas_or_fallback(rpc, call))
        print(f"   Gas limit with buffer: {gas_limit}")

        if dry_run:
            print("🧪 Dry run: transaction not sent.")
            return None

        tx = build_transaction(rpc, account.address, contract_address, call_data, gas_limit)
        logger.debug("Unsigned tx: nonce=%s chainId=%s gas=%s", tx["nonce"], tx["chainId"], tx["gas"])

        print("📤 Sending transaction...")
        tx_hash = submit(rpc, account, tx)
        print(f"   Transaction sent. Hash: {tx_hash}")
        print("⏳ Waiting for transaction confirmation...")

        receipt = wait_for_receipt(rpc, tx_hash, timeout=receipt_timeout)
        block_number = hex_to_int(receipt.get("blockNumber"))
        gas_used = hex_to_int(receipt.get("gasUsed"))

        print("✅ Transaction confirmed!")
        print(f"   Block Number: {block_number}")
        print(f"   Gas Used: {gas_used}")

        return {
            "tx_hash": tx_hash,
            "block_number": block_number,
            "gas_used": gas_used,
            "gas_limit": gas_limit,
        }
    except Exception as e:
        print(f"❌ Error calling addValidator: {e}")
        print_error_hint(e)
        raise
