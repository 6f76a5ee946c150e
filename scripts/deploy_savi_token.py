"""
SAVI Token Deployment Script
Deploys the SAVI token behind a UUPS proxy and reports its address
"""

import sys
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain.contract_factory import get_contract_factory
from blockchain.deployment_manifest import DeploymentManifest
from blockchain.proxy_deployer import ProxyDeployer
from blockchain.signer_manager import SignerManager
from utils.deploy_config import (
    SAVI_CONTRACT_NAME,
    SAVI_INITIALIZER,
    SAVI_PROXY_KIND,
    deployment_params
)
from utils.log_config import setup_logging
from utils.rpc_manager import RPCManager

load_dotenv()


def deploy_savi_token(w3: Web3) -> str:
    """
    Deploy SAVI with the configured initializer parameters

    Args:
        w3: Connected Web3 instance

    Returns:
        Proxy address
    """
    deployer = SignerManager(w3).get_deployer()
    logger.info(f"Deploying contracts with the account: {deployer.address}")

    params = deployment_params()
    logger.debug(f"Initializer parameters: {params}")

    logger.info("Deploying SAVI token...")

    SaviToken = get_contract_factory(SAVI_CONTRACT_NAME)
    proxy_deployer = ProxyDeployer(w3, deployer, manifest=DeploymentManifest(w3.eth.chain_id))

    savi_token = proxy_deployer.deploy_proxy(
        SaviToken,
        params.as_initializer_args(),
        initializer=SAVI_INITIALIZER,
        kind=SAVI_PROXY_KIND
    )

    savi_token.wait_for_deployment()
    savi_token_address = savi_token.get_address()
    implementation_address = savi_token.implementation_address()

    logger.success(f"SAVI token deployed to: {savi_token_address}")
    logger.info(f"Implementation address: {implementation_address}")

    return savi_token_address


def main() -> int:
    """Run the deployment; returns the process exit code"""
    setup_logging()

    try:
        w3 = RPCManager().connect()
        deploy_savi_token(w3)
        return 0

    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
