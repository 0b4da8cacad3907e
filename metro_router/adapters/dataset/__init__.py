"""Dataset adapters - Implementations of NetworkRepositoryPort.

Available implementations:
- JSONNetworkRepository: Loads the network from the JSON dataset bundle
"""

from .json_repository import JSONNetworkRepository, build_graph_from_paths

__all__ = ["JSONNetworkRepository", "build_graph_from_paths"]
