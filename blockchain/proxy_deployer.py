"""
Proxy Deployer
Deploys an implementation contract behind an ERC-1967 proxy and runs its initializer
"""

from typing import Callable, Dict, List, Optional
from web3 import Web3
from eth_abi import decode
from loguru import logger

from utils.deploy_config import receipt_timeout
from .contract_factory import ContractFactory, get_contract_factory
from .deployment_manifest import DeploymentManifest
from .transaction_builder import TransactionBuilder


# bytes32(uint256(keccak256("eip1967.proxy.implementation")) - 1)
IMPLEMENTATION_SLOT = '0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc'

PROXY_CONTRACTS = {
    'uups': 'ERC1967Proxy',
    'transparent': 'TransparentUpgradeableProxy'
}

UUPS_UPGRADE_FUNCTIONS = ('upgradeToAndCall', 'upgradeTo')


class DeploymentError(Exception):
    """Deployment did not produce a usable contract"""


class UpgradeSafetyError(DeploymentError):
    """Implementation cannot be used with the requested proxy kind"""


class DeploymentTransaction:
    """
    Handle to a sent contract-creation transaction
    """

    def __init__(
        self,
        w3: Web3,
        tx_hash: bytes,
        timeout: Optional[float] = None,
        on_confirmed: Optional[Callable[[Dict], None]] = None
    ):
        self.w3 = w3
        self.tx_hash = tx_hash
        self.timeout = timeout if timeout is not None else receipt_timeout()
        self._on_confirmed = on_confirmed
        self._receipt = None

    @property
    def hash(self) -> str:
        return Web3.to_hex(self.tx_hash)

    def wait(self):
        """
        Wait for the transaction to be mined

        Returns:
            Transaction receipt

        Raises:
            DeploymentError: Transaction reverted
        """
        if self._receipt is not None:
            return self._receipt

        logger.info(f"Waiting for confirmation of {self.hash}...")

        receipt = self.w3.eth.wait_for_transaction_receipt(self.tx_hash, timeout=self.timeout)

        if receipt is None:
            return None

        if receipt['status'] != 1:
            raise DeploymentError(f"Deployment transaction reverted: {self.hash}")

        self._receipt = receipt

        if self._on_confirmed:
            self._on_confirmed(receipt)

        return receipt


class ProxyContract:
    """
    Deployed (or deploying) proxy, exposing the implementation ABI
    """

    def __init__(
        self,
        w3: Web3,
        abi: List[Dict],
        address: Optional[str] = None,
        implementation: Optional[str] = None,
        kind: str = 'uups'
    ):
        self.w3 = w3
        self.abi = abi
        self.address = Web3.to_checksum_address(address) if address else None
        self.implementation = implementation
        self.kind = kind
        self._deployment_tx = None
        self._manifest = None

    def deployment_transaction(self) -> Optional[DeploymentTransaction]:
        return self._deployment_tx

    def _track(self, tx_hash: bytes, manifest: Optional[DeploymentManifest], timeout: Optional[float]):
        self._manifest = manifest
        self._deployment_tx = DeploymentTransaction(
            self.w3,
            tx_hash,
            timeout=timeout,
            on_confirmed=self._confirm
        )

    def _confirm(self, receipt):
        self.address = Web3.to_checksum_address(receipt['contractAddress'])

        if self._manifest:
            self._manifest.record_proxy(
                self.address,
                self.implementation,
                self.kind,
                self._deployment_tx.hash
            )

    def wait_for_deployment(self) -> 'ProxyContract':
        """
        Block until the proxy deployment is mined

        Raises:
            DeploymentError: Missing transaction or receipt, or reverted deployment
        """
        if self.address is not None:
            return self

        if self._deployment_tx is None:
            raise DeploymentError("Deployment transaction not found")

        receipt = self._deployment_tx.wait()

        if receipt is None:
            raise DeploymentError("Transaction receipt not found")

        return self

    def get_address(self) -> str:
        return self.wait_for_deployment().address

    def implementation_address(self) -> str:
        """Implementation address read from the proxy's ERC-1967 slot"""
        return get_implementation_address(self.w3, self.get_address())


def get_implementation_address(w3: Web3, proxy_address: str) -> str:
    """
    Read the implementation address stored in an ERC-1967 proxy

    Args:
        w3: Web3 instance
        proxy_address: Proxy address

    Returns:
        Checksummed implementation address
    """
    raw = w3.eth.get_storage_at(Web3.to_checksum_address(proxy_address), IMPLEMENTATION_SLOT)
    (implementation,) = decode(['address'], bytes(raw).rjust(32, b'\x00'))
    return Web3.to_checksum_address(implementation)


class ProxyDeployer:
    """
    Deploys upgradeable contracts behind proxies

    Flow: validate implementation -> deploy (or reuse) implementation ->
    encode initializer call -> send proxy creation transaction.
    """

    def __init__(
        self,
        w3: Web3,
        signer,
        manifest: Optional[DeploymentManifest] = None,
        tx_builder: Optional[TransactionBuilder] = None,
        artifacts_dir: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize Proxy Deployer

        Args:
            w3: Web3 instance
            signer: Signer paying for the deployment
            manifest: Deployment manifest (implementation reuse and bookkeeping)
            tx_builder: Transaction builder
            artifacts_dir: Artifacts root for the OpenZeppelin proxy contracts
            timeout: Receipt wait timeout in seconds
        """
        self.w3 = w3
        self.signer = signer
        self.manifest = manifest
        self.tx_builder = tx_builder or TransactionBuilder(w3)
        self.artifacts_dir = artifacts_dir
        self.timeout = timeout

    def deploy_proxy(
        self,
        factory: ContractFactory,
        args: Optional[List] = None,
        initializer: Optional[str] = 'initialize',
        kind: str = 'uups'
    ) -> ProxyContract:
        """
        Deploy factory behind a proxy, calling initializer(*args) through it

        Args:
            factory: Implementation contract factory
            args: Initializer arguments, passed positionally
            initializer: Initializer function name (None to skip)
            kind: 'uups' or 'transparent'

        Returns:
            ProxyContract whose deployment transaction has been sent
        """
        args = list(args or [])

        if kind not in PROXY_CONTRACTS:
            raise ValueError(f"Unsupported proxy kind: {kind}")

        if kind == 'uups':
            self.validate_uups(factory)

        init_data = self.encode_initializer(factory, initializer, args)
        implementation = self.deploy_implementation(factory)

        proxy_factory = get_contract_factory(PROXY_CONTRACTS[kind], self.artifacts_dir)

        if kind == 'uups':
            constructor_args = [implementation, init_data]
        else:
            constructor_args = [implementation, self.signer.address, init_data]

        logger.info(f"Deploying {PROXY_CONTRACTS[kind]} for {factory.name}...")

        tx = self.tx_builder.build_deployment_tx(proxy_factory, self.signer, constructor_args)
        tx_hash = self.signer.send_transaction(tx)

        logger.info(f"Proxy deployment sent: {Web3.to_hex(tx_hash)}")

        proxy = ProxyContract(self.w3, factory.abi, implementation=implementation, kind=kind)
        proxy._track(tx_hash, self.manifest, self.timeout)

        return proxy

    def validate_uups(self, factory: ContractFactory):
        """
        Raises:
            UpgradeSafetyError: Implementation lacks the UUPS upgrade interface
        """
        has_upgrade = any(factory.has_function(name) for name in UUPS_UPGRADE_FUNCTIONS)

        if not factory.has_function('proxiableUUID') or not has_upgrade:
            raise UpgradeSafetyError(
                f"{factory.name} is not UUPS upgradeable "
                "(missing proxiableUUID or upgradeToAndCall)"
            )

    def encode_initializer(self, factory: ContractFactory, initializer: Optional[str], args: List) -> bytes:
        """ABI-encoded initializer call (empty when there is no initializer)"""
        if not initializer:
            return b''

        if not factory.has_function(initializer):
            raise ValueError(f"{factory.name} has no function {initializer}")

        Contract = factory.contract(self.w3)
        return Web3.to_bytes(hexstr=Contract.encode_abi(initializer, args=args))

    def deploy_implementation(self, factory: ContractFactory) -> str:
        """
        Deploy the implementation, or reuse a recorded one with identical bytecode

        Returns:
            Implementation address
        """
        bytecode_hash = factory.bytecode_hash

        if self.manifest:
            existing = self.manifest.get_implementation(bytecode_hash)

            if existing:
                if self.w3.eth.get_code(existing):
                    logger.info(f"Reusing {factory.name} implementation at {existing}")
                    return existing

                logger.warning(f"No code at recorded implementation {existing}, redeploying")
                self.manifest.forget_implementation(bytecode_hash)

        logger.info(f"Deploying {factory.name} implementation...")

        tx = self.tx_builder.build_deployment_tx(factory, self.signer)
        tx_hash = self.signer.send_transaction(tx)
        receipt = DeploymentTransaction(self.w3, tx_hash, timeout=self.timeout).wait()

        if receipt is None:
            raise DeploymentError("Transaction receipt not found")

        address = Web3.to_checksum_address(receipt['contractAddress'])
        logger.success(f"{factory.name} implementation deployed to: {address}")

        if self.manifest:
            self.manifest.record_implementation(bytecode_hash, address, factory.name, Web3.to_hex(tx_hash))

        return address
