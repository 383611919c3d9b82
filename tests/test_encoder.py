"""
Tests for ABI loading, call data encoding and result decoding.
"""

import copy
import json

import pytest
from eth_abi import encode

from eth_smart_contract import CallEncoder, EncodingError, load_abi

from conftest import ERC20_ABI, RECIPIENT

STRUCT_ABI = [
    {
        "type": "function",
        "name": "getPosition",
        "inputs": [{"name": "id", "type": "uint256"}],
        "outputs": [
            {
                "name": "position",
                "type": "tuple",
                "components": [
                    {"name": "owner", "type": "address"},
                    {"name": "size", "type": "uint256"},
                ],
            },
            {"name": "active", "type": "bool"},
        ],
    },
    {
        "type": "function",
        "name": "open",
        "inputs": [
            {
                "name": "position",
                "type": "tuple",
                "components": [
                    {"name": "owner", "type": "address"},
                    {"name": "size", "type": "uint256"},
                ],
            }
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "safeTransfer",
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "safeTransfer",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "data", "type": "bytes"},
        ],
        "outputs": [],
    },
]


class TestLoadAbi:
    def test_from_json_text(self) -> None:
        assert load_abi(json.dumps(ERC20_ABI))[0]["name"] == "balanceOf"

    def test_from_artifact_mapping(self) -> None:
        assert len(load_abi({"contractName": "Token", "abi": ERC20_ABI})) == len(ERC20_ABI)

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "token.json"
        path.write_text(json.dumps({"abi": ERC20_ABI}))
        assert load_abi(path)[1]["name"] == "transfer"

    def test_invalid_json(self) -> None:
        with pytest.raises(EncodingError):
            load_abi("{not json")

    def test_not_a_list(self) -> None:
        with pytest.raises(EncodingError):
            load_abi(json.dumps({"name": "balanceOf"}))

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(EncodingError):
            load_abi(tmp_path / "missing.json")


class TestAbiIsolation:
    """The bound ABI cannot be changed from outside the encoder."""

    def test_file_loads_do_not_share_entries(self, tmp_path) -> None:
        path = tmp_path / "token.json"
        path.write_text(json.dumps(ERC20_ABI))
        first = CallEncoder(path)
        first.abi[0]["name"] = "hijacked"
        load_abi(path)[0]["name"] = "hijacked"

        second = CallEncoder(path)
        assert second.abi[0]["name"] == "balanceOf"
        assert second.encode_call("balanceOf", [RECIPIENT])[:4].hex() == "70a08231"

    def test_source_mutation_after_construction(self) -> None:
        abi = copy.deepcopy(ERC20_ABI)
        encoder = CallEncoder(abi)
        abi[0]["inputs"][0]["type"] = "uint256"
        abi[1]["name"] = "steal"

        assert encoder.find_function("balanceOf", [RECIPIENT])["inputs"][0]["type"] == "address"
        assert encoder.encode_call("transfer", [RECIPIENT, 1])[:4].hex() == "a9059cbb"
        with pytest.raises(EncodingError):
            encoder.encode_call("balanceOf", [1])

    def test_returned_entries_are_copies(self) -> None:
        encoder = CallEncoder(ERC20_ABI)
        encoder.abi[0]["inputs"].clear()
        encoder.find_function("transfer", [RECIPIENT, 1])["inputs"].clear()
        assert encoder.encode_call("transfer", [RECIPIENT, 1])[:4].hex() == "a9059cbb"
        assert len(encoder.abi[0]["inputs"]) == 1


class TestEncodeCall:
    def test_function_names_skip_events(self) -> None:
        assert CallEncoder(ERC20_ABI).function_names() == ["balanceOf", "name", "pause", "transfer"]

    def test_balance_of_selector_and_argument(self) -> None:
        data = CallEncoder(ERC20_ABI).encode_call("balanceOf", [RECIPIENT])
        assert data[:4].hex() == "70a08231"
        assert data[4:] == encode(["address"], [RECIPIENT])

    def test_transfer_selector(self) -> None:
        data = CallEncoder(ERC20_ABI).encode_call("transfer", [RECIPIENT, 10**30])
        assert data[:4].hex() == "a9059cbb"
        assert int.from_bytes(data[-32:], "big") == 10**30

    def test_no_arguments(self) -> None:
        assert CallEncoder(ERC20_ABI).encode_call("name").hex() == "06fdde03"

    def test_unknown_method(self) -> None:
        with pytest.raises(EncodingError, match="mint"):
            CallEncoder(ERC20_ABI).encode_call("mint", [RECIPIENT, 1])

    def test_wrong_argument_count(self) -> None:
        with pytest.raises(EncodingError, match="transfer"):
            CallEncoder(ERC20_ABI).encode_call("transfer", [RECIPIENT])

    def test_wrong_argument_type(self) -> None:
        with pytest.raises(EncodingError):
            CallEncoder(ERC20_ABI).encode_call("transfer", [RECIPIENT, "ten"])

    def test_negative_uint(self) -> None:
        with pytest.raises(EncodingError):
            CallEncoder(ERC20_ABI).encode_call("transfer", [RECIPIENT, -1])

    def test_struct_argument_as_mapping_or_tuple(self) -> None:
        encoder = CallEncoder(STRUCT_ABI)
        as_tuple = encoder.encode_call("open", [(RECIPIENT, 7)])
        as_dict = encoder.encode_call("open", [{"owner": RECIPIENT, "size": 7}])
        assert as_tuple == as_dict

    def test_struct_missing_member(self) -> None:
        with pytest.raises(EncodingError):
            CallEncoder(STRUCT_ABI).encode_call("open", [{"owner": RECIPIENT}])

    def test_overload_resolved_by_count(self) -> None:
        encoder = CallEncoder(STRUCT_ABI)
        two = encoder.encode_call("safeTransfer", [RECIPIENT, 1])
        three = encoder.encode_call("safeTransfer", [RECIPIENT, 1, b"\x01"])
        assert two[:4] != three[:4]

    def test_overload_by_signature(self) -> None:
        encoder = CallEncoder(STRUCT_ABI)
        assert encoder.encode_call("safeTransfer(address,uint256)", [RECIPIENT, 1]) == encoder.encode_call(
            "safeTransfer", [RECIPIENT, 1]
        )


class TestDecodeOutput:
    def test_uint256(self) -> None:
        raw = encode(["uint256"], [100])
        assert CallEncoder(ERC20_ABI).decode_output("balanceOf", raw, [RECIPIENT]) == [100]

    def test_hex_string_input(self) -> None:
        raw = "0x" + encode(["string"], ["Token"]).hex()
        assert CallEncoder(ERC20_ABI).decode_output("name", raw) == ["Token"]

    def test_struct_and_checksummed_address(self) -> None:
        owner = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
        raw = encode(["(address,uint256)", "bool"], [(owner, 5), True])
        position, active = CallEncoder(STRUCT_ABI).decode_output("getPosition", raw, [1])
        assert list(position) == ["0x2c7536E3605D9C16a7a3D7b1898e529396a65c23", 5]
        assert active is True

    def test_no_outputs(self) -> None:
        assert CallEncoder(ERC20_ABI).decode_output("pause", b"") == []

    def test_empty_result(self) -> None:
        with pytest.raises(EncodingError, match="Empty result"):
            CallEncoder(ERC20_ABI).decode_output("balanceOf", b"", [RECIPIENT])

    def test_truncated_result(self) -> None:
        with pytest.raises(EncodingError):
            CallEncoder(ERC20_ABI).decode_output("balanceOf", b"\x00" * 5, [RECIPIENT])
