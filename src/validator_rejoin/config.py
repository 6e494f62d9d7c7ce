import os
import argparse
from dataclasses import dataclass
from typing import List, Optional

from eth_utils import is_address, to_checksum_address

from validator_rejoin.errors import ConfigError
from validator_rejoin.variables import CONTRACT_ADDRESS, RPC_URL, RECEIPT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    contract_address: str
    receipt_timeout: float
    log_level: str
    log_file: Optional[str] = None
    args_file: Optional[str] = None
    dry_run: bool = False
    assume_yes: bool = False


def build_parser() -> argparse.ArgumentParser:
    # environment supplies the defaults; command-line flags win
    parser = argparse.ArgumentParser(
        prog="rejoin-validator",
        description="Re-join the validator set by replaying addValidator with args copied from the browser console.",
    )
    parser.add_argument(
        "--rpc-url", default=os.getenv("REJOIN_RPC_URL", RPC_URL), help="JSON-RPC endpoint (env REJOIN_RPC_URL)"
    )
    parser.add_argument(
        "--contract-address",
        default=os.getenv("REJOIN_CONTRACT_ADDRESS", CONTRACT_ADDRESS),
        help="Staking contract address (env REJOIN_CONTRACT_ADDRESS)",
    )
    parser.add_argument(
        "--receipt-timeout",
        default=os.getenv("REJOIN_RECEIPT_TIMEOUT", str(RECEIPT_TIMEOUT_SECONDS)),
        help="Seconds to wait for the transaction receipt (env REJOIN_RECEIPT_TIMEOUT)",
    )
    parser.add_argument(
        "--log-level", default=os.getenv("REJOIN_LOG_LEVEL", "WARNING"), help="Diagnostic log level (env REJOIN_LOG_LEVEL)"
    )
    parser.add_argument(
        "--log-file", default=os.getenv("REJOIN_LOG_FILE"), help="Append diagnostics to this file (env REJOIN_LOG_FILE)"
    )
    parser.add_argument("--args-file", help="Read the pasted args blob from a file instead of stdin")
    parser.add_argument("--dry-run", action="store_true", help="Parse, encode and estimate gas without sending")
    parser.add_argument("--yes", action="store_true", help="Proceed on signer/attester address mismatch without asking")
    return parser


def load_settings(argv: Optional[List[str]] = None) -> Settings:
    args = build_parser().parse_args(argv)

    if not args.rpc_url:
        raise ConfigError("RPC URL must not be empty.")
    if not is_address(args.contract_address):
        raise ConfigError(f"Invalid contract address: {args.contract_address}")
    try:
        timeout = float(args.receipt_timeout)
    except ValueError as e:
        raise ConfigError(f"Invalid receipt timeout: {args.receipt_timeout}") from e
    if timeout <= 0:
        raise ConfigError("Receipt timeout must be positive.")

    return Settings(
        rpc_url=args.rpc_url,
        contract_address=to_checksum_address(args.contract_address),
        receipt_timeout=timeout,
        log_level=str(args.log_level).upper(),
        log_file=args.log_file or None,
        args_file=args.args_file,
        dry_run=args.dry_run,
        assume_yes=args.yes,
    )
