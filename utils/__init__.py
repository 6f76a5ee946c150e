"""
Utilities Package
Gas pricing, RPC connection, logging and configuration
"""

from .gas_calculator import GasCalculator, FeeData
from .rpc_manager import RPCManager
from .log_config import setup_logging

__all__ = [
    'GasCalculator',
    'FeeData',
    'RPCManager',
    'setup_logging'
]
