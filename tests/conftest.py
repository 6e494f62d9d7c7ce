import json

import pytest

from tests.constants import DEV_ADDRESS


@pytest.fixture
def proof_params():
    return {
        "vkeyHash": "0x" + "ab" * 32,
        "proof": "0xdeadbeef",
        "publicInputs": ["0x" + "01" * 32, "0x" + "02" * 32],
        "committedInputs": "0x0102",
        "committedInputCounts": ["1", "2"],
        "validityPeriodInSeconds": "604800",
        "domain": "zkpassport.id",
        "scope": "validator",
        "devMode": False,
    }


@pytest.fixture
def raw_args(proof_params):
    """Arguments as they come out of the console parser."""
    return [
        DEV_ADDRESS,
        ["0x" + "11" * 32, "0x" + "22" * 32],
        proof_params,
        {"x": "1", "y": "2"},
        {"x0": "3", "x1": "4", "y0": "5", "y1": "6"},
        {"x": "7", "y": "8"},
    ]


@pytest.fixture
def args_json(raw_args):
    return "args: " + json.dumps(raw_args)


@pytest.fixture
def validator_data(raw_args):
    return {
        "attester": raw_args[0],
        "merkle_proof": raw_args[1],
        "params": raw_args[2],
        "public_key_g1": raw_args[3],
        "public_key_g2": raw_args[4],
        "signature": raw_args[5],
    }
