"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .network import NetworkRepositoryPort
from .rendering import RouteRendererPort
from .routing import RouteFinderPort
from .storage import RecentRoutesStorePort

__all__ = [
    # Dataset
    "NetworkRepositoryPort",
    # Routing
    "RouteFinderPort",
    # History
    "RecentRoutesStorePort",
    # Rendering
    "RouteRendererPort",
]
