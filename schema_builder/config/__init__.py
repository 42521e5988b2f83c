"""
Configuration management for the schema builder.
"""

from schema_builder.config.loader import (
    ConfigLoader,
    BuilderConfig,
    RulesConfig,
    DiscoveryConfig,
    OutputConfig,
    LoggingConfig,
)

__all__ = [
    "ConfigLoader",
    "BuilderConfig",
    "RulesConfig",
    "DiscoveryConfig",
    "OutputConfig",
    "LoggingConfig",
]
