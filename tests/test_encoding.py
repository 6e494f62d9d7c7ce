import pytest
from eth_abi import decode as abi_decode

from validator_rejoin.errors import EncodingError
from validator_rejoin.on_chain.encoding import (
    canonical_type,
    coerce_value,
    encode_add_validator,
    function_selector,
    function_signature,
    to_int,
)
from validator_rejoin.variables import ADD_VALIDATOR_ABI
from tests.constants import DEV_ADDRESS

PARAMS_INPUT = ADD_VALIDATOR_ABI["inputs"][2]
G1_INPUT = ADD_VALIDATOR_ABI["inputs"][3]

EXPECTED_SIGNATURE = (
    "addValidator(address,bytes32[],"
    "(bytes32,bytes,bytes32[],bytes,uint256[],uint256,string,string,bool),"
    "(uint256,uint256),(uint256,uint256,uint256,uint256),(uint256,uint256))"
)


class TestSignature:

    def test_function_signature(self):
        assert function_signature(ADD_VALIDATOR_ABI) == EXPECTED_SIGNATURE

    def test_tuple_array_suffix_kept(self):
        abi_input = {"type": "tuple[]", "components": [{"name": "a", "type": "uint8"}]}
        assert canonical_type(abi_input) == "(uint8)[]"


class TestScalarCoercion:

    @pytest.mark.parametrize(
        "value, expected",
        [(5, 5), ("42", 42), ("0x10", 16), ("123n", 123), (" 7 ", 7), ("1_000", 1000)],
    )
    def test_to_int(self, value, expected):
        assert to_int(value, "v") == expected

    @pytest.mark.parametrize("value", [True, "abc", None, 1.5])
    def test_to_int_rejects(self, value):
        with pytest.raises(EncodingError):
            to_int(value, "v")

    def test_uint_range_checked(self):
        with pytest.raises(EncodingError, match="out of range"):
            coerce_value({"name": "n", "type": "uint8"}, "256")
        with pytest.raises(EncodingError, match="out of range"):
            coerce_value({"name": "n", "type": "uint256"}, -1)

    def test_address_checksummed(self):
        assert coerce_value({"name": "a", "type": "address"}, DEV_ADDRESS.lower()) == DEV_ADDRESS

    def test_bytes32_length_enforced(self):
        with pytest.raises(EncodingError, match="expected 32 bytes"):
            coerce_value({"name": "h", "type": "bytes32"}, "0x1234")

    def test_dynamic_bytes_without_prefix(self):
        assert coerce_value({"name": "b", "type": "bytes"}, "deadbeef") == b"\xde\xad\xbe\xef"

    def test_bool_from_string(self):
        assert coerce_value({"name": "b", "type": "bool"}, "true") is True
        with pytest.raises(EncodingError):
            coerce_value({"name": "b", "type": "bool"}, "yes")


class TestStructCoercion:

    def test_named_and_positional_agree(self):
        assert coerce_value(G1_INPUT, {"x": "1", "y": "0x2"}) == (1, 2)
        assert coerce_value(G1_INPUT, ["1", "0x2"]) == (1, 2)

    def test_json_string_struct(self):
        assert coerce_value(G1_INPUT, '{"x": "1", "y": "2"}') == (1, 2)

    def test_extra_named_fields_ignored(self):
        assert coerce_value(G1_INPUT, {"x": 1, "y": 2, "0": 1}) == (1, 2)

    def test_missing_field(self, proof_params):
        del proof_params["scope"]
        with pytest.raises(EncodingError, match="missing field"):
            coerce_value(PARAMS_INPUT, proof_params)

    def test_wrong_positional_length(self):
        with pytest.raises(EncodingError, match="expected 2 fields"):
            coerce_value(G1_INPUT, [1, 2, 3])

    def test_error_path_names_nested_field(self, proof_params):
        proof_params["publicInputs"][1] = "0x12"
        with pytest.raises(EncodingError, match=r"_params\.publicInputs\[1\]"):
            coerce_value(PARAMS_INPUT, proof_params)


class TestEncodeAddValidator:

    def test_call_data_layout(self, validator_data):
        call_data = encode_add_validator(validator_data)

        assert call_data.startswith("0x" + function_selector(ADD_VALIDATOR_ABI).hex())
        types = [canonical_type(i) for i in ADD_VALIDATOR_ABI["inputs"]]
        attester, proof, params, g1, g2, sig = abi_decode(types, bytes.fromhex(call_data[10:]))

        assert attester.lower() == DEV_ADDRESS.lower()
        assert list(proof) == [b"\x11" * 32, b"\x22" * 32]
        assert params[1] == b"\xde\xad\xbe\xef"
        assert list(params[4]) == [1, 2]
        assert params[5] == 604800
        assert params[6:] == ("zkpassport.id", "validator", False)
        assert g1 == (1, 2)
        assert g2 == (3, 4, 5, 6)
        assert sig == (7, 8)

    def test_bad_value_surfaces_as_encoding_error(self, validator_data):
        validator_data["signature"] = {"x": "not-a-number", "y": "1"}
        with pytest.raises(EncodingError, match=r"_signature\.x"):
            encode_add_validator(validator_data)
