"""
Deployment Gas Estimation Script
Deploys SAVI with example mainnet parameters and prices the proxy deployment
"""

import sys
from typing import Dict
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain.contract_factory import get_contract_factory
from blockchain.deployment_manifest import DeploymentManifest
from blockchain.proxy_deployer import DeploymentError, ProxyDeployer
from blockchain.signer_manager import SignerManager
from utils.deploy_config import (
    SAVI_CONTRACT_NAME,
    SAVI_INITIALIZER,
    SAVI_PROXY_KIND,
    estimation_params
)
from utils.gas_calculator import GasCalculator
from utils.log_config import setup_logging
from utils.rpc_manager import RPCManager

load_dotenv()


def estimate_deployment_gas(w3: Web3) -> Dict:
    """
    Deploy SAVI and compute the deployment cost at the current gas price

    Args:
        w3: Connected Web3 instance

    Returns:
        Dict with gas_used, gas_price_wei, estimated_cost_wei, estimated_cost_usd
    """
    deployer = SignerManager(w3).get_deployer()
    logger.info(f"Estimating gas with account: {deployer.address}")

    params = estimation_params(deployer.address)

    logger.info("Estimating gas for deployment...")

    SaviToken = get_contract_factory(SAVI_CONTRACT_NAME)
    proxy_deployer = ProxyDeployer(w3, deployer, manifest=DeploymentManifest(w3.eth.chain_id))

    savi_token = proxy_deployer.deploy_proxy(
        SaviToken,
        params.as_initializer_args(),
        initializer=SAVI_INITIALIZER,
        kind=SAVI_PROXY_KIND
    )

    deployment_tx = savi_token.deployment_transaction()
    if deployment_tx is None:
        raise DeploymentError("Deployment transaction not found")

    receipt = deployment_tx.wait()
    if receipt is None:
        raise DeploymentError("Transaction receipt not found")

    gas_calculator = GasCalculator(w3)
    fee_data = gas_calculator.get_fee_data()

    gas_used = receipt['gasUsed']
    estimated_cost, current_gas_price = gas_calculator.estimate_deployment_cost(gas_used, fee_data)
    estimated_cost_usd = gas_calculator.cost_in_usd(estimated_cost)

    logger.info("Gas Estimation Results:")
    logger.info("-" * 22)
    logger.info(f"Gas used: {gas_used}")
    logger.info(f"Current gas price: {Web3.from_wei(current_gas_price, 'gwei')} gwei")
    logger.info(f"Estimated cost: {Web3.from_wei(estimated_cost, 'ether')} ETH")
    logger.info(f"Estimated cost in USD: ${estimated_cost_usd:.2f} (at ${gas_calculator.eth_price_usd}/ETH)")

    return {
        'gas_used': gas_used,
        'gas_price_wei': current_gas_price,
        'estimated_cost_wei': estimated_cost,
        'estimated_cost_usd': estimated_cost_usd
    }


def main() -> int:
    """Run the estimation; returns the process exit code"""
    setup_logging()

    try:
        w3 = RPCManager().connect()
        estimate_deployment_gas(w3)
        return 0

    except Exception as e:
        logger.exception(f"Gas estimation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
