# amm_indexer/contracts/abis.py
"""
Minimal ABIs for the read-only calls the engine makes.
"""

from typing import Any, Dict, List


def _view(name: str, inputs: List[Dict[str, str]], outputs: List[Dict[str, str]]) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": inputs,
        "outputs": outputs,
    }


def _arg(abi_type: str, name: str = "") -> Dict[str, str]:
    return {"type": abi_type, "name": name, "internalType": abi_type}


ERC20_ABI = [
    _view("name", [], [_arg("string")]),
    _view("symbol", [], [_arg("string")]),
    _view("decimals", [], [_arg("uint8")]),
]

BASE_POOL_ABI = ERC20_ABI + [
    _view("getPoolId", [], [_arg("bytes32")]),
    _view("getSwapFeePercentage", [], [_arg("uint256")]),
    _view("getOwner", [], [_arg("address")]),
]

WEIGHTED_POOL_ABI = BASE_POOL_ABI + [
    _view("getNormalizedWeights", [], [_arg("uint256[]")]),
]

STABLE_POOL_ABI = BASE_POOL_ABI + [
    _view(
        "getAmplificationParameter",
        [],
        [_arg("uint256", "value"), _arg("bool", "isUpdating"), _arg("uint256", "precision")],
    ),
]

VAULT_ABI = [
    _view(
        "getPoolTokens",
        [_arg("bytes32", "poolId")],
        [_arg("address[]", "tokens"), _arg("uint256[]", "balances"), _arg("uint256", "lastChangeBlock")],
    ),
    _view(
        "getPoolTokenInfo",
        [_arg("bytes32", "poolId"), _arg("address", "token")],
        [
            _arg("uint256", "cash"),
            _arg("uint256", "managed"),
            _arg("uint256", "lastChangeBlock"),
            _arg("address", "assetManager"),
        ],
    ),
]
