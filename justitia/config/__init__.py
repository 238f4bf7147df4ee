"""
Justitia Node Configuration

Loads config/config.json once and builds the typed configuration block of
every node subsystem.
"""

from .settings import (
    MISSING,
    Lookup,
    LookupStatus,
    SettingsStore,
)
from .loader import (
    BlockChainConfig,
    Config,
    ConsensusConfig,
    NodeConfig,
    ParticipateConfig,
    RoleConfig,
    TxPoolConfig,
    assemble_node_config,
    load_config,
)

__all__ = [
    "MISSING",
    "Lookup",
    "LookupStatus",
    "SettingsStore",
    "BlockChainConfig",
    "Config",
    "ConsensusConfig",
    "NodeConfig",
    "ParticipateConfig",
    "RoleConfig",
    "TxPoolConfig",
    "assemble_node_config",
    "load_config",
]
