"""
Contract Factory
Loads compiled Hardhat artifacts (ABI + bytecode) by contract name
"""

import os
import json
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from utils.deploy_config import artifacts_dir as default_artifacts_dir


class ContractFactory:
    """
    Compiled contract ready for deployment
    """

    def __init__(self, name: str, abi: List[Dict], bytecode: str, artifact_path: Optional[str] = None):
        """
        Initialize Contract Factory

        Args:
            name: Contract name
            abi: Contract ABI
            bytecode: Creation bytecode (hex)
            artifact_path: Artifact the factory was loaded from
        """
        if not bytecode or bytecode == '0x':
            raise ValueError(f"{name} has no bytecode (abstract contract or interface?)")

        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.artifact_path = artifact_path

    @property
    def bytecode_hash(self) -> str:
        """Keccak hash of the creation bytecode"""
        return Web3.to_hex(Web3.keccak(hexstr=self.bytecode))

    def function_names(self) -> List[str]:
        return [
            item['name']
            for item in self.abi
            if item.get('type') == 'function'
        ]

    def has_function(self, name: str) -> bool:
        return name in self.function_names()

    def contract(self, w3: Web3):
        """Deployable web3 contract class for this factory"""
        return w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

    def __repr__(self):
        return f"ContractFactory({self.name})"


def find_artifact(name: str, artifacts_dir: Optional[str] = None) -> str:
    """
    Locate <name>.json under the artifacts directory

    Raises:
        FileNotFoundError: No artifact for the contract
    """
    artifacts_dir = artifacts_dir or default_artifacts_dir()
    filename = f"{name}.json"
    matches = []

    for root, _dirs, files in os.walk(artifacts_dir):
        if filename in files:
            matches.append(os.path.join(root, filename))

    if not matches:
        raise FileNotFoundError(
            f"Contract artifact not found: {name} in {artifacts_dir} "
            "(run 'npx hardhat compile' first)"
        )

    matches.sort()

    if len(matches) > 1:
        logger.warning(f"Multiple artifacts for {name}, using {matches[0]}")

    return matches[0]


def get_contract_factory(name: str, artifacts_dir: Optional[str] = None) -> ContractFactory:
    """
    Load a contract factory from Hardhat artifacts

    Args:
        name: Contract name, e.g. "SAVI"
        artifacts_dir: Artifacts root (ARTIFACTS_DIR when omitted)

    Returns:
        ContractFactory
    """
    path = find_artifact(name, artifacts_dir)

    with open(path, 'r') as f:
        contract_json = json.load(f)

    logger.debug(f"Loaded {name} artifact from {path}")

    return ContractFactory(
        name=contract_json.get('contractName', name),
        abi=contract_json['abi'],
        bytecode=contract_json['bytecode'],
        artifact_path=path
    )
