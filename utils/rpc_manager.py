"""
RPC Manager
Connects to the deployment network with a single fallback endpoint
"""

import os
from typing import List, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

load_dotenv()

DEFAULT_RPC_URL = 'http://127.0.0.1:8545'


class RPCManager:
    """
    Primary RPC (RPC_URL) with optional fallback (FALLBACK_RPC_URL)
    """

    def __init__(self, rpc_urls: Optional[List[str]] = None):
        """
        Initialize RPC Manager

        Args:
            rpc_urls: Endpoints in priority order (read from environment when omitted)
        """
        if rpc_urls is None:
            rpc_urls = [
                os.getenv('RPC_URL') or DEFAULT_RPC_URL,
                os.getenv('FALLBACK_RPC_URL')
            ]

        self.rpc_urls = [url for url in rpc_urls if url]
        self.w3 = None

    def connect(self) -> Web3:
        """
        Connect to the first reachable endpoint

        Returns:
            Connected Web3 instance

        Raises:
            ConnectionError: No endpoint is reachable
        """
        for url in self.rpc_urls:
            try:
                w3 = Web3(Web3.HTTPProvider(url))

                if w3.is_connected():
                    logger.success(f"Connected to {url} (chain id {w3.eth.chain_id})")
                    self.w3 = w3
                    return w3

                logger.warning(f"Failed to connect to {url}")

            except Exception as e:
                logger.warning(f"Error connecting to {url}: {e}")

        raise ConnectionError(f"No RPC endpoint reachable ({len(self.rpc_urls)} tried)")
