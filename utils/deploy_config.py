"""
Deployment Configuration
SAVI initializer parameter sets and environment settings
"""

import os
from typing import List
from web3 import Web3
from dotenv import load_dotenv

load_dotenv()


SAVI_CONTRACT_NAME = "SAVI"
SAVI_INITIALIZER = "initialize"
SAVI_PROXY_KIND = "uups"

# USDT amounts use 6 decimals (mwei)
MIN_PURCHASE_AMOUNT = Web3.to_wei(10, 'mwei')      # 10 USDT
MAX_PURCHASE_AMOUNT = Web3.to_wei(10000, 'mwei')   # 10,000 USDT

# Replace before a real deployment
PLACEHOLDER_ADDRESS = "0x..."

MAINNET_USDT_ADDRESS = "0xdAC17F958D2ee523a2206206994597C13D831ec7"

DEFAULT_RECEIPT_TIMEOUT = 300


class SaviInitParams:
    """
    Arguments for SAVI.initialize(usdt, treasury, minPurchase, maxPurchase)
    """

    def __init__(
        self,
        usdt_address: str,
        treasury_address: str,
        min_purchase_amount: int,
        max_purchase_amount: int
    ):
        self.usdt_address = usdt_address
        self.treasury_address = treasury_address
        self.min_purchase_amount = min_purchase_amount
        self.max_purchase_amount = max_purchase_amount

    def as_initializer_args(self) -> List:
        """Initializer arguments in call order"""
        return [
            self.usdt_address,
            self.treasury_address,
            self.min_purchase_amount,
            self.max_purchase_amount
        ]

    def __repr__(self):
        return (
            f"SaviInitParams(usdt={self.usdt_address}, treasury={self.treasury_address}, "
            f"min={self.min_purchase_amount}, max={self.max_purchase_amount})"
        )


def deployment_params() -> SaviInitParams:
    """Parameters for a real deployment (placeholders unless set in .env)"""
    return SaviInitParams(
        usdt_address=os.getenv('SAVI_USDT_ADDRESS') or PLACEHOLDER_ADDRESS,
        treasury_address=os.getenv('SAVI_TREASURY_ADDRESS') or PLACEHOLDER_ADDRESS,
        min_purchase_amount=MIN_PURCHASE_AMOUNT,
        max_purchase_amount=MAX_PURCHASE_AMOUNT
    )


def estimation_params(deployer_address: str) -> SaviInitParams:
    """Example mainnet-like parameters; the deployer doubles as treasury"""
    return SaviInitParams(
        usdt_address=MAINNET_USDT_ADDRESS,
        treasury_address=deployer_address,
        min_purchase_amount=MIN_PURCHASE_AMOUNT,
        max_purchase_amount=MAX_PURCHASE_AMOUNT
    )


def receipt_timeout() -> float:
    """Seconds to wait for a transaction receipt"""
    return float(os.getenv('RECEIPT_TIMEOUT') or DEFAULT_RECEIPT_TIMEOUT)


def artifacts_dir() -> str:
    return os.getenv('ARTIFACTS_DIR') or 'artifacts'


def deployments_dir() -> str:
    return os.getenv('DEPLOYMENTS_DIR') or 'deployments'
