import sys
import logging
from typing import List, Optional

from validator_rejoin.config import Settings, load_settings
from validator_rejoin.off_chain.args_parser import parse_args_data
from validator_rejoin.off_chain.console import confirm, get_user_input, read_args_blob, read_args_file
from validator_rejoin.off_chain.extractor import extract_data_from_args
from validator_rejoin.on_chain.add_validator import call_add_validator
from validator_rejoin.on_chain.rpc import RpcClient
from validator_rejoin.on_chain.wallet import load_wallet
from validator_rejoin.variables import EXPLORER_TX_URL, INSTRUCTIONS, TROUBLESHOOTING_TIPS

logger = logging.getLogger("validator_rejoin")


def setup_logging(settings: Settings) -> None:
    kwargs = {}
    if settings.log_file:
        kwargs = {"filename": settings.log_file, "filemode": "a"}
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(message)s",
        **kwargs,
    )


def print_banner() -> None:
    print("\n🎯 Validator Re-join Script")
    print("=" * 60)
    print("\nThis script helps you rejoin the validator set using data from your ZKPassport.")
    print("\nInstructions:")
    for line in INSTRUCTIONS:
        print(line)
    print("")


def print_troubleshooting() -> None:
    print("\n💡 Troubleshooting tips:")
    for tip in TROUBLESHOOTING_TIPS:
        print(f"   - {tip}")


def run(settings: Settings) -> None:
    private_key = get_user_input("🔑 Enter your wallet private key: ", secret=True)
    if not private_key:
        print("❌ No private key provided. Exiting...")
        return

    wallet = load_wallet(private_key)
    print(f"✅ Wallet created successfully. Address: {wallet.address}")

    if settings.args_file:
        print(f'\n📋 Reading "args:" data from {settings.args_file}')
        args_input = read_args_file(settings.args_file)
    else:
        print('\n📋 Paste the "args:" data from your browser console:')
        print("   (Press Enter twice when done pasting)")
        args_input = read_args_blob()

    args = parse_args_data(args_input)
    data = extract_data_from_args(args)

    print("\n✅ Data successfully extracted and processed.")
    print(f"   Attester Address from logs: {data['attester']}")

    if wallet.address.lower() != data["attester"].lower():
        print("\n⚠️ WARNING: Wallet address mismatch!")
        print(f"   Your provided private key corresponds to: {wallet.address}")
        print(f"   The attester address from logs is:    {data['attester']}")
        print("   Ensure you are using the private key for the correct attester address.")
        if settings.assume_yes:
            logger.warning("Address mismatch accepted via --yes")
        elif not confirm("Do you want to proceed anyway? (y/N): "):
            print("❌ Operation cancelled by user.")
            return

    result = call_add_validator(
        wallet,
        data,
        rpc=RpcClient(settings.rpc_url),
        contract_address=settings.contract_address,
        receipt_timeout=settings.receipt_timeout,
        dry_run=settings.dry_run,
    )
    if result is None:
        return

    print("\n🎉 SUCCESS! Validator re-joined the set!")
    print(f"   View transaction on Sepolia Etherscan: {EXPLORER_TX_URL.format(tx_hash=result['tx_hash'])}")


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings(argv)
    setup_logging(settings)
    print_banner()

    try:
        run(settings)
    except Exception as e:
        logger.debug("Execution failed", exc_info=True)
        print("\n❌ Script execution failed.")
        print(f"   Error: {e}")
        print_troubleshooting()
    return 0


if __name__ == "__main__":
    sys.exit(main())
