"""
Blockchain Interaction Package
Handles artifacts, signers, transaction building and proxy deployment
"""

from .contract_factory import ContractFactory, get_contract_factory
from .signer_manager import Signer, SignerManager
from .transaction_builder import TransactionBuilder
from .deployment_manifest import DeploymentManifest
from .proxy_deployer import (
    ProxyDeployer,
    ProxyContract,
    DeploymentTransaction,
    DeploymentError,
    UpgradeSafetyError
)

__all__ = [
    'ContractFactory',
    'get_contract_factory',
    'Signer',
    'SignerManager',
    'TransactionBuilder',
    'DeploymentManifest',
    'ProxyDeployer',
    'ProxyContract',
    'DeploymentTransaction',
    'DeploymentError',
    'UpgradeSafetyError'
]
