"""
Signer Manager
Resolves the deployer account: local private keys or node-managed accounts
"""

import os
from typing import Dict, List, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

load_dotenv()


class Signer:
    """
    Account able to send transactions

    Local signers hold a private key and sign before sending raw transactions;
    node-managed signers rely on eth_sendTransaction (e.g. a Hardhat node).
    """

    def __init__(self, w3: Web3, address: str, account=None):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def send_transaction(self, transaction: Dict) -> bytes:
        """
        Sign (if local) and send a transaction

        Args:
            transaction: Transaction dict

        Returns:
            Transaction hash
        """
        if not self.is_local:
            return self.w3.eth.send_transaction(transaction)

        try:
            signed_tx = self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def __repr__(self):
        kind = 'local' if self.is_local else 'node'
        return f"Signer({self.address}, {kind})"


class SignerManager:
    """
    Builds signers from DEPLOYER_PRIVATE_KEY (comma separated) or, when unset,
    from the accounts the connected node manages
    """

    def __init__(self, w3: Web3, private_keys: Optional[List[str]] = None):
        """
        Initialize Signer Manager

        Args:
            w3: Web3 instance
            private_keys: Private keys (read from environment when omitted)
        """
        self.w3 = w3

        if private_keys is None:
            raw_keys = os.getenv('DEPLOYER_PRIVATE_KEY', '')
            private_keys = [key.strip() for key in raw_keys.split(',') if key.strip()]

        self.private_keys = private_keys

    def get_signers(self) -> List[Signer]:
        """Get all available signers, deployer first"""
        if self.private_keys:
            return [
                Signer(self.w3, account.address, account)
                for account in (Account.from_key(key) for key in self.private_keys)
            ]

        return [Signer(self.w3, address) for address in self.w3.eth.accounts]

    def get_deployer(self) -> Signer:
        """
        Get the deployer (first signer)

        Raises:
            ValueError: No signer available
        """
        signers = self.get_signers()

        if not signers:
            raise ValueError(
                "No deployer account: set DEPLOYER_PRIVATE_KEY in .env "
                "or connect to a node with unlocked accounts"
            )

        return signers[0]
