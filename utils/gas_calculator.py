"""
Gas Calculator
Network fee lookup and deployment cost estimation
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Tuple
from web3 import Web3
from loguru import logger


# Used when the node does not report a gas price
FALLBACK_GAS_PRICE = Web3.to_wei(20, 'gwei')

# Used when eth_maxPriorityFeePerGas is unsupported
DEFAULT_PRIORITY_FEE = Web3.to_wei(1, 'gwei')

# Static conversion rate, not a live quote
ETH_PRICE_USD = Decimal('2000')


class FeeData(NamedTuple):
    """Current network fee data (wei); fields the node cannot supply are None"""
    gas_price: Optional[int]
    max_fee_per_gas: Optional[int]
    max_priority_fee_per_gas: Optional[int]


class GasCalculator:
    """
    Reads fee data from the network and prices deployment transactions
    """

    def __init__(self, w3: Web3, eth_price_usd: Decimal = ETH_PRICE_USD):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
            eth_price_usd: Native currency price used for USD estimates
        """
        self.w3 = w3
        self.eth_price_usd = Decimal(str(eth_price_usd))

    def get_fee_data(self) -> FeeData:
        """
        Get current fee data

        EIP-1559 fields are derived from the latest block's base fee
        (max fee = base fee * 2 + priority fee).

        Returns:
            FeeData in wei
        """
        try:
            gas_price = self.w3.eth.gas_price
        except Exception as e:
            logger.warning(f"Gas price unavailable: {e}")
            gas_price = None

        latest_block = self.w3.eth.get_block('latest')
        base_fee_wei = latest_block.get('baseFeePerGas')

        max_fee_wei = None
        priority_fee_wei = None

        if base_fee_wei is not None:
            try:
                priority_fee_wei = self.w3.eth.max_priority_fee
            except Exception as e:
                logger.debug(f"Priority fee unavailable, using default: {e}")
                priority_fee_wei = DEFAULT_PRIORITY_FEE

            max_fee_wei = (base_fee_wei * 2) + priority_fee_wei

        return FeeData(
            gas_price=gas_price,
            max_fee_per_gas=max_fee_wei,
            max_priority_fee_per_gas=priority_fee_wei
        )

    def estimate_deployment_cost(
        self,
        gas_used: int,
        fee_data: Optional[FeeData] = None
    ) -> Tuple[int, int]:
        """
        Price a mined deployment at the current gas price

        Args:
            gas_used: Gas used by the deployment receipt
            fee_data: Fee data (fetched when omitted)

        Returns:
            (cost in wei, gas price in wei)
        """
        if fee_data is None:
            fee_data = self.get_fee_data()

        gas_price_wei = fee_data.gas_price or FALLBACK_GAS_PRICE

        if not fee_data.gas_price:
            logger.debug(f"Using fallback gas price: {FALLBACK_GAS_PRICE} wei")

        return gas_used * gas_price_wei, gas_price_wei

    def cost_in_usd(self, cost_wei: int) -> Decimal:
        """Convert a wei cost to USD, rounded to cents"""
        cost_eth = Decimal(Web3.from_wei(cost_wei, 'ether'))
        return (cost_eth * self.eth_price_usd).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
