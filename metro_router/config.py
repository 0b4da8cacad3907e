"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
dataset locations, route search bounds, the recent routes history and
logging.

Configuration can be overridden via environment variables:
- METRO_DATASET_DATA_DIR=/path/to/data
- METRO_ROUTING_STRATEGY=best_first
- METRO_ROUTING_MAX_TRANSFERS=3
- METRO_HISTORY_FILE=~/.metro-router/recent.json
- METRO_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class DatasetConfig(BaseSettings):
    """Static dataset configuration.

    Environment variables prefixed with METRO_DATASET_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_DATASET_")

    data_dir: Path = Field(default_factory=lambda: PACKAGE_DIR / "data")
    stations_file: str = "stations.json"
    lines_file: str = "lines.json"
    paths_file: str = "paths.json"
    graph_file: str = "graph.json"

    @property
    def stations_path(self) -> Path:
        """Full path to the stations file."""
        return self.data_dir / self.stations_file

    @property
    def lines_path(self) -> Path:
        """Full path to the lines file."""
        return self.data_dir / self.lines_file

    @property
    def paths_path(self) -> Path:
        """Full path to the line paths file."""
        return self.data_dir / self.paths_file

    @property
    def graph_path(self) -> Path:
        """Full path to the precomputed graph file (optional on disk)."""
        return self.data_dir / self.graph_file


class RoutingConfig(BaseSettings):
    """Route search configuration.

    The search bounds keep exhaustive path enumeration tractable on a
    metro-sized network.

    Environment variables prefixed with METRO_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_ROUTING_")

    strategy: Literal["depth_first", "best_first"] = "depth_first"
    max_routes: int = Field(default=5, ge=1)
    max_path_length: int = Field(default=30, ge=1)
    max_transfers: int = Field(default=4, ge=0)


class HistoryConfig(BaseSettings):
    """Recent routes history configuration.

    Environment variables prefixed with METRO_HISTORY_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_HISTORY_")

    file: Optional[Path] = None  # None keeps the history in memory
    capacity: int = Field(default=10, ge=1)


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with METRO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    This is the main entry point for configuration. Sub-configurations
    can be accessed via attributes:

        config = get_config()
        print(config.routing.max_transfers)
        print(config.dataset.stations_path)

    Environment variables prefixed with METRO_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_")

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    default_language: Literal["en", "fa"] = "fa"

    @property
    def package_root(self) -> Path:
        """Return the installed package directory (holds the bundled dataset)."""
        return PACKAGE_DIR


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
