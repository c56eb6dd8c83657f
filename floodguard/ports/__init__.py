"""
Port interfaces for FloodGuard hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the risk-and-routing core and external adapters.
"""

from .stores import (
    RiverLevelStorePort, RoadStorePort, RiskHistoryPort, AlertStorePort, FloodStorePort,
)
from .dispatch import AlertDispatchPort

__all__ = [
    "RiverLevelStorePort", "RoadStorePort", "RiskHistoryPort",
    "AlertStorePort", "FloodStorePort", "AlertDispatchPort",
]
