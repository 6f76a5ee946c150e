"""
Shared fixtures
"""

import json
import pytest
from loguru import logger

from blockchain.contract_factory import ContractFactory


DEPLOYER = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
DEPLOYER_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'
IMPLEMENTATION = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
PROXY = '0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512'
USDT = '0xdAC17F958D2ee523a2206206994597C13D831ec7'

SAVI_ABI = [
    {
        "inputs": [
            {"name": "_usdt", "type": "address"},
            {"name": "_treasury", "type": "address"},
            {"name": "_minPurchaseAmount", "type": "uint256"},
            {"name": "_maxPurchaseAmount", "type": "uint256"}
        ],
        "name": "initialize",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "proxiableUUID",
        "outputs": [{"name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "newImplementation", "type": "address"},
            {"name": "data", "type": "bytes"}
        ],
        "name": "upgradeToAndCall",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    }
]

SAVI_BYTECODE = '0x608060405234801561001057600080fd5b50'


@pytest.fixture
def log_messages():
    """Capture loguru messages"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record['message']), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def savi_factory():
    return ContractFactory("SAVI", SAVI_ABI, SAVI_BYTECODE)


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat-style artifacts tree with SAVI and ERC1967Proxy"""
    root = tmp_path / "artifacts"

    savi_dir = root / "contracts" / "SAVI.sol"
    savi_dir.mkdir(parents=True)
    (savi_dir / "SAVI.json").write_text(json.dumps({
        "contractName": "SAVI",
        "abi": SAVI_ABI,
        "bytecode": SAVI_BYTECODE
    }))
    (savi_dir / "SAVI.dbg.json").write_text(json.dumps({"buildInfo": "../build-info/x.json"}))

    proxy_dir = root / "@openzeppelin" / "contracts" / "proxy" / "ERC1967" / "ERC1967Proxy.sol"
    proxy_dir.mkdir(parents=True)
    (proxy_dir / "ERC1967Proxy.json").write_text(json.dumps({
        "contractName": "ERC1967Proxy",
        "abi": [{
            "inputs": [
                {"name": "implementation", "type": "address"},
                {"name": "_data", "type": "bytes"}
            ],
            "stateMutability": "payable",
            "type": "constructor"
        }],
        "bytecode": "0x60806040"
    }))

    return str(root)
