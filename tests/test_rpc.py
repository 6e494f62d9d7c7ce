"""
Unit tests for the JSON-RPC client and its backoff behaviour.
"""
from unittest.mock import Mock, patch

import pytest
import requests

from validator_rejoin.errors import RpcError
from validator_rejoin.on_chain.rpc import MAX_ATTEMPTS, RpcClient, hex_to_int


def make_response(status_code=200, body=None, headers=None):
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    response.json.return_value = body or {}
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return RpcClient("http://node.invalid", session=session)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("validator_rejoin.on_chain.rpc.time.sleep") as sleep:
        yield sleep


class TestHexToInt:

    @pytest.mark.parametrize("value, expected", [("0x10", 16), ("0x", 0), (None, 0), (7, 7)])
    def test_values(self, value, expected):
        assert hex_to_int(value) == expected


class TestRpcClient:

    def test_returns_result(self, client, session):
        session.post.return_value = make_response(body={"jsonrpc": "2.0", "id": 1, "result": "0xaa36a7"})

        assert client.chain_id() == 11155111
        payload = session.post.call_args.kwargs["json"]
        assert payload["method"] == "eth_chainId"
        assert payload["params"] == []

    def test_request_ids_increment(self, client, session):
        session.post.return_value = make_response(body={"result": "0x1"})
        client.call("eth_blockNumber", [])
        client.call("eth_blockNumber", [])
        ids = [c.kwargs["json"]["id"] for c in session.post.call_args_list]
        assert ids == [1, 2]

    def test_error_object_raises(self, client, session):
        session.post.return_value = make_response(
            body={"error": {"code": 3, "message": "execution reverted", "data": "0x08c379a0"}}
        )

        with pytest.raises(RpcError, match="execution reverted") as exc_info:
            client.call("eth_estimateGas", [{}])
        assert exc_info.value.code == 3
        assert exc_info.value.data == "0x08c379a0"
        assert session.post.call_count == 1

    def test_http_429_retried_with_retry_after(self, client, session, no_sleep):
        session.post.side_effect = [
            make_response(status_code=429, headers={"Retry-After": "2"}),
            make_response(body={"result": "0x5"}),
        ]

        assert client.get_nonce("0x0") == 5
        no_sleep.assert_called_once_with(2.0)

    def test_rate_limit_error_retried(self, client, session):
        session.post.side_effect = [
            make_response(body={"error": {"code": -32005, "message": "Rate limit exceeded"}}),
            make_response(body={"result": "0x3b9aca00"}),
        ]
        assert client.gas_price() == 1_000_000_000

    def test_transport_errors_exhaust_attempts(self, client, session):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(RpcError, match="failed after retries"):
            client.call("eth_chainId", [])
        assert session.post.call_count == MAX_ATTEMPTS

    def test_null_result_passed_through(self, client, session):
        session.post.return_value = make_response(body={"result": None})
        assert client.get_receipt("0xabc") is None

    def test_gas_estimate_parsed(self, client, session):
        session.post.return_value = make_response(body={"result": "0x186a0"})
        assert client.estimate_gas({"to": "0x0"}) == 100_000

    @pytest.mark.parametrize("result", [None, "not-hex", "0x0", "0x"])
    def test_unusable_gas_estimate_raises(self, client, session, result):
        session.post.return_value = make_response(body={"result": result})
        with pytest.raises(RpcError, match="eth_estimateGas returned"):
            client.estimate_gas({"to": "0x0"})
