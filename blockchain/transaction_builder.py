"""
Transaction Builder
Constructs contract-creation transactions for the deployer
"""

from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from utils.gas_calculator import GasCalculator, FALLBACK_GAS_PRICE


class TransactionBuilder:
    """
    Builds deployment transactions with gas limit and fee fields filled in
    """

    GAS_BUFFER = 1.2  # 20% over estimate
    DEFAULT_DEPLOY_GAS = 3000000

    def __init__(self, w3: Web3, gas_calculator: Optional[GasCalculator] = None):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_calculator: Fee data source
        """
        self.w3 = w3
        self.gas_calculator = gas_calculator or GasCalculator(w3)

    def build_deployment_tx(self, factory, signer, args: Optional[List] = None) -> Dict:
        """
        Build a contract-creation transaction

        Args:
            factory: ContractFactory to deploy
            signer: Signer sending the transaction
            args: Constructor arguments

        Returns:
            Transaction dict
        """
        Contract = factory.contract(self.w3)
        constructor = Contract.constructor(*(args or []))

        try:
            gas_estimate = constructor.estimate_gas({'from': signer.address})
            gas_limit = int(gas_estimate * self.GAS_BUFFER)
        except Exception as e:
            logger.warning(f"Gas estimation failed for {factory.name}: {e}, using default")
            gas_limit = self.DEFAULT_DEPLOY_GAS

        tx_params = {
            'from': signer.address,
            'gas': gas_limit,
            **self._fee_params()
        }

        if signer.is_local:
            tx_params['nonce'] = self.w3.eth.get_transaction_count(signer.address, 'pending')
            tx_params['chainId'] = self.w3.eth.chain_id

        logger.debug(f"{factory.name} deployment gas limit: {gas_limit}")

        return constructor.build_transaction(tx_params)

    def _fee_params(self) -> Dict[str, int]:
        """EIP-1559 fee fields when the network has a base fee, legacy gasPrice otherwise"""
        fee_data = self.gas_calculator.get_fee_data()

        if fee_data.max_fee_per_gas is not None:
            return {
                'maxFeePerGas': fee_data.max_fee_per_gas,
                'maxPriorityFeePerGas': fee_data.max_priority_fee_per_gas
            }

        return {'gasPrice': fee_data.gas_price or FALLBACK_GAS_PRICE}
