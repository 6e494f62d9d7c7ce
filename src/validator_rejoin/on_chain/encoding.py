"""
ABI-typed coercion and call-data encoding for addValidator.

Values come out of the console parser loosely typed (hex strings, decimal
strings, `123n` BigInt renderings, structs as objects or positional lists), so
every argument is walked against its ABI input and converted to what
eth_abi expects before encoding.
"""
import re
import json
import logging
from typing import Any, Dict, List

from eth_abi import encode as abi_encode
from eth_utils import is_address, keccak, to_checksum_address

from validator_rejoin.errors import EncodingError
from validator_rejoin.types import ValidatorData
from validator_rejoin.variables import ADD_VALIDATOR_ABI

logger = logging.getLogger(__name__)

ARRAY_RE = re.compile(r"^(.*)\[(\d*)\]$")
INT_RE = re.compile(r"^(u?)int(\d*)$")
BYTES_N_RE = re.compile(r"^bytes(\d+)$")

VALIDATOR_DATA_ORDER = ["attester", "merkle_proof", "params", "public_key_g1", "public_key_g2", "signature"]


# ---------- Type rendering ----------
def canonical_type(abi_input: Dict[str, Any]) -> str:
    t = abi_input["type"]
    if t.startswith("tuple"):
        inner = ",".join(canonical_type(c) for c in abi_input["components"])
        return f"({inner}){t[len('tuple'):]}"
    return t


def function_signature(abi: Dict[str, Any]) -> str:
    return f"{abi['name']}({','.join(canonical_type(i) for i in abi['inputs'])})"


def function_selector(abi: Dict[str, Any]) -> bytes:
    return keccak(text=function_signature(abi))[:4]


# ---------- Scalar coercion ----------
def _load_json_if_str(value: Any) -> Any:
    if isinstance(value, str) and value.strip()[:1] in ("{", "["):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def to_int(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise EncodingError(f"{path}: expected an integer, got a bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip().replace("_", "")
        if s.endswith("n"):
            s = s[:-1]
        try:
            if s.lower().startswith(("0x", "-0x")):
                return int(s, 16)
            return int(s, 10)
        except ValueError:
            pass
    raise EncodingError(f"{path}: cannot convert {value!r} to an integer")


def to_bytes(value: Any, path: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        s = value.strip()
        if s[:2].lower() == "0x":
            s = s[2:]
        try:
            return bytes.fromhex(s)
        except ValueError:
            pass
    raise EncodingError(f"{path}: cannot convert {value!r} to bytes")


def to_bool(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise EncodingError(f"{path}: expected a bool, got {value!r}")


def _coerce_scalar(t: str, value: Any, path: str) -> Any:
    if t == "address":
        if not isinstance(value, str) or not is_address(value):
            raise EncodingError(f"{path}: invalid address {value!r}")
        return to_checksum_address(value)

    if t == "bool":
        return to_bool(value, path)

    if t == "string":
        if not isinstance(value, str):
            raise EncodingError(f"{path}: expected a string, got {type(value).__name__}")
        return value

    if t == "bytes":
        return to_bytes(value, path)

    m = BYTES_N_RE.match(t)
    if m:
        size = int(m.group(1))
        b = to_bytes(value, path)
        if len(b) != size:
            raise EncodingError(f"{path}: expected {size} bytes, got {len(b)}")
        return b

    m = INT_RE.match(t)
    if m:
        unsigned, bits = m.group(1) == "u", int(m.group(2) or 256)
        n = to_int(value, path)
        lo, hi = (0, 2**bits) if unsigned else (-(2 ** (bits - 1)), 2 ** (bits - 1))
        if not lo <= n < hi:
            raise EncodingError(f"{path}: {n} out of range for {t}")
        return n

    raise EncodingError(f"{path}: unsupported ABI type {t}")


# ---------- Structured coercion ----------
def coerce_value(abi_input: Dict[str, Any], value: Any, path: str = "") -> Any:
    path = path or abi_input.get("name", "") or abi_input["type"]
    t = abi_input["type"]

    m = ARRAY_RE.match(t)
    if m:
        value = _load_json_if_str(value)
        if not isinstance(value, (list, tuple)):
            raise EncodingError(f"{path}: expected an array, got {type(value).__name__}")
        if m.group(2) and len(value) != int(m.group(2)):
            raise EncodingError(f"{path}: expected {m.group(2)} elements, got {len(value)}")
        inner = dict(abi_input, type=m.group(1))
        return [coerce_value(inner, v, f"{path}[{i}]") for i, v in enumerate(value)]

    if t == "tuple":
        components: List[Dict[str, Any]] = abi_input["components"]
        value = _load_json_if_str(value)
        if isinstance(value, dict):
            missing = [c["name"] for c in components if c["name"] not in value]
            if missing:
                raise EncodingError(f"{path}: missing field(s) {', '.join(missing)}")
            extra = set(value) - {c["name"] for c in components}
            if extra:
                logger.debug("%s: ignoring extra field(s) %s", path, sorted(extra))
            items = [value[c["name"]] for c in components]
        elif isinstance(value, (list, tuple)):
            if len(value) != len(components):
                raise EncodingError(f"{path}: expected {len(components)} fields, got {len(value)}")
            items = list(value)
        else:
            raise EncodingError(f"{path}: expected an object or array, got {type(value).__name__}")
        return tuple(coerce_value(c, v, f"{path}.{c['name']}") for c, v in zip(components, items))

    return _coerce_scalar(t, value, path)


def coerce_arguments(abi: Dict[str, Any], values: List[Any]) -> List[Any]:
    inputs = abi["inputs"]
    if len(values) != len(inputs):
        raise EncodingError(f"{abi['name']} takes {len(inputs)} arguments, got {len(values)}")
    return [coerce_value(i, v) for i, v in zip(inputs, values)]


def encode_call(abi: Dict[str, Any], values: List[Any]) -> str:
    args = coerce_arguments(abi, values)
    types = [canonical_type(i) for i in abi["inputs"]]
    return "0x" + (function_selector(abi) + abi_encode(types, args)).hex()


def encode_add_validator(data: ValidatorData, abi: Dict[str, Any] = ADD_VALIDATOR_ABI) -> str:
    return encode_call(abi, [data[k] for k in VALIDATOR_DATA_ORDER])
