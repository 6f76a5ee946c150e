"""
Deployment Manifest
Per-chain record of deployed implementations and proxies
"""

import os
import json
from typing import Dict, Optional
from loguru import logger

from utils.deploy_config import deployments_dir


class DeploymentManifest:
    """
    JSON file at <deployments_dir>/<chain_id>.json

    Implementations are keyed by creation bytecode hash so an unchanged
    implementation can be reused by later proxy deployments.
    """

    def __init__(self, chain_id: int, directory: Optional[str] = None):
        self.chain_id = chain_id
        self.directory = directory or deployments_dir()
        self.path = os.path.join(self.directory, f"{chain_id}.json")
        self.data = self._load()

    def _load(self) -> Dict:
        if not os.path.exists(self.path):
            return {'chainId': self.chain_id, 'implementations': {}, 'proxies': []}

        with open(self.path, 'r') as f:
            data = json.load(f)

        data.setdefault('implementations', {})
        data.setdefault('proxies', [])
        return data

    def get_implementation(self, bytecode_hash: str) -> Optional[str]:
        """Address of a recorded implementation with this bytecode hash"""
        entry = self.data['implementations'].get(bytecode_hash)
        return entry['address'] if entry else None

    def record_implementation(self, bytecode_hash: str, address: str, contract_name: str, tx_hash: str):
        self.data['implementations'][bytecode_hash] = {
            'address': address,
            'contractName': contract_name,
            'txHash': tx_hash
        }
        self.save()

    def forget_implementation(self, bytecode_hash: str):
        """Drop a stale implementation entry (no code at the address anymore)"""
        if self.data['implementations'].pop(bytecode_hash, None):
            self.save()

    def record_proxy(self, address: str, implementation: str, kind: str, tx_hash: str):
        self.data['proxies'].append({
            'address': address,
            'implementation': implementation,
            'kind': kind,
            'txHash': tx_hash
        })
        self.save()

    def save(self):
        os.makedirs(self.directory, exist_ok=True)

        with open(self.path, 'w') as f:
            json.dump(self.data, f, indent=2)

        logger.debug(f"Deployment manifest updated: {self.path}")
