"""Network inspection modules for sockstun.

Provides the interface snapshot, gateway discovery, primary interface
selection and the egress check.
"""

from .external_ip import get_egress_info
from .gateways import get_default_gateways
from .interfaces import (
    InterfaceProvider,
    PsutilInterfaceProvider,
    classify_interface,
    probe_local_address,
)
from .selector import InterfaceSelector, fallback_interface_name

__all__ = [
    # Interfaces
    "InterfaceProvider",
    "PsutilInterfaceProvider",
    "classify_interface",
    "probe_local_address",
    # Gateways
    "get_default_gateways",
    # Selection
    "InterfaceSelector",
    "fallback_interface_name",
    # External IP
    "get_egress_info",
]
