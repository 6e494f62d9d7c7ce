from typing import Any, Dict, List, Optional, TypedDict, Union

# Struct-like arguments arrive either keyed by component name or positionally.
StructArg = Union[Dict[str, Any], List[Any]]


class ValidatorData(TypedDict):
    attester: str
    merkle_proof: List[Any]
    params: StructArg
    public_key_g1: StructArg
    public_key_g2: StructArg
    signature: StructArg


class TxResult(TypedDict):
    tx_hash: str
    block_number: Optional[int]
    gas_used: Optional[int]
    gas_limit: int
