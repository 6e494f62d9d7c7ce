import json
import logging
from typing import Any, List

from eth_utils import is_address

from validator_rejoin.errors import ExtractionError
from validator_rejoin.types import ValidatorData

logger = logging.getLogger(__name__)

REQUIRED_ARGS = 6


def extract_data_from_args(args: List[Any]) -> ValidatorData:
    """
    Pick the six addValidator arguments out of the parsed list, in ABI order:
    attester, merkle proof, proof-verification params, G1 key, G2 key, signature.
    """
    print("🔍 Extracting specific data from parsed arguments...")

    if not isinstance(args, list) or len(args) < REQUIRED_ARGS:
        received = len(args) if isinstance(args, (list, tuple)) else 0
        raise ExtractionError(
            f"Expected at least {REQUIRED_ARGS} arguments, but received {received}. "
            "Check the console log output format."
        )

    attester = args[0]
    if not isinstance(attester, str) or not is_address(attester):
        raise ExtractionError(f"Invalid attester address format: {attester}")
    print(f"   Attester Address: {attester}")

    merkle_proof = args[1] or []
    if not isinstance(merkle_proof, list):
        raise ExtractionError(f"Merkle proof is not an array: {merkle_proof}")
    print(f"   Merkle Proof: {len(merkle_proof)} elements found.")

    params = args[2]
    if isinstance(params, str):
        # the params object is sometimes logged as a JSON string
        try:
            params = json.loads(params)
            print("   ✅ Successfully parsed ZKPassport data from string.")
        except json.JSONDecodeError as e:
            print(f"   ⚠️ Could not parse ZKPassport data string: {e}.")
    if not params or not isinstance(params, (dict, list)):
        raise ExtractionError(
            f"ZKPassport data (_params) is not a valid object. Type received: {type(params).__name__}"
        )
    public_inputs = params.get("publicInputs") if isinstance(params, dict) else None
    print(f"   ZKPassport data (params) extracted. publicInputs count: {len(public_inputs or [])}")

    public_key_g1, public_key_g2, signature = args[3], args[4], args[5]
    if not public_key_g1 or not public_key_g2 or not signature:
        raise ExtractionError("Missing BLS public keys (G1, G2) or signature data.")
    print("   BLS Public Keys (G1, G2) and Signature data extracted.")

    if len(args) > REQUIRED_ARGS:
        logger.info("Ignoring %d trailing argument(s)", len(args) - REQUIRED_ARGS)

    return {
        "attester": attester,
        "merkle_proof": merkle_proof,
        "params": params,
        "public_key_g1": public_key_g1,
        "public_key_g2": public_key_g2,
        "signature": signature,
    }
