"""
zkSync demo package.

Deposit, transfer and withdrawal walkthroughs on top of the zkSync SDK.
"""

from .config import DemoConfig
from .errors import ConfigError, DemoError, InstanceError, OperationError
from .instance import Instance, build_instance
from .models import Operation, OperationResult, ReceiptSummary
from .operations import OperationRunner

__all__ = [
    "DemoConfig",
    "DemoError",
    "ConfigError",
    "InstanceError",
    "OperationError",
    "Instance",
    "build_instance",
    "Operation",
    "OperationResult",
    "ReceiptSummary",
    "OperationRunner",
]
__version__ = "0.1.0"
