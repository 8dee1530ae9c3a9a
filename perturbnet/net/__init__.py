"""Network representations.

Two variants of one contract (see `NetProtocol`): FixedNet binds its shape at
class level, DynamicNet takes layer widths at runtime.
"""

from .base import BaseNet
from .dynamic import DynamicNet
from .fixed import FixedNet, fixed_net
from .protocol import NetProtocol

__all__ = [
    "BaseNet",
    "DynamicNet",
    "FixedNet",
    "NetProtocol",
    "fixed_net",
]
