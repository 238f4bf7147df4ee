"""
Justitia Node Configuration Loader

Builds the typed configuration block of every node subsystem from the
settings file. Each block is a dataclass with a ``from_settings`` factory that
reads fixed dotted keys, coerces their type and fails fast: a missing or
mistyped required setting raises a ConfigurationError subclass. Only the node
id is reported rather than fatal, because it may be assigned later in startup.

Settings keys:
    node.id                  → NodeConfig.account
    txpool.globalSlots       → TxPoolConfig.global_slots
    participates.policy      → ParticipateConfig.policy_name
    role.policy              → RoleConfig.policy_name
    consensus.policy         → ConsensusConfig.policy_name
    blockchain.plugin        → BlockChainConfig.plugin_name
    blockchain.statePath     → BlockChainConfig.state_data_path
    blockchain.dataPath      → BlockChainConfig.block_data_path
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..constants import (
    BLOCK_CHAIN_DATA_PATH,
    BLOCK_CHAIN_PLUGIN,
    BLOCK_CHAIN_STATE_PATH,
    CONSENSUS_POLICY,
    NODE_ID,
    PARTICIPATES_POLICY,
    ROLE_POLICY,
    TXPOOL_SLOTS,
)
from ..exceptions import NodeIdNotAssignedError, SettingTypeError
from ..logger import get_logger
from ..types import NodeAddress
from .settings import SettingsStore

logger = get_logger(__name__)

_MAX_UINT64 = 2 ** 64 - 1


def _policy_name(store: SettingsStore, path: str) -> str:
    policy = store.lookup(path, str).require()
    if not policy.strip():
        raise SettingTypeError(path, "a non-empty policy name", policy)
    return policy


def _string(store: SettingsStore, path: str) -> str:
    return store.lookup(path, str).require()


def _unsigned(store: SettingsStore, path: str) -> int:
    """Parse a base-10 unsigned 64-bit integer stored as a string or number."""
    raw = store.lookup(path, (str, int)).require()
    if isinstance(raw, str):
        # digits only: no sign, whitespace or underscores
        if not (raw.isascii() and raw.isdigit()):
            raise SettingTypeError(path, "an unsigned integer", raw)
        value = int(raw)
    else:
        value = raw
    if value < 0 or value > _MAX_UINT64:
        raise SettingTypeError(path, "an unsigned 64-bit integer", raw)
    return value


# ---------------------------------------------------------------------------
# Subsystem dataclasses
# ---------------------------------------------------------------------------


@dataclass
class TxPoolConfig:
    """Transaction pool."""
    global_slots: int = 0

    @classmethod
    def from_settings(cls, store: SettingsStore) -> "TxPoolConfig":
        return cls(global_slots=_unsigned(store, TXPOOL_SLOTS))


@dataclass
class ParticipateConfig:
    """Participant set policy."""
    policy_name: str = ""

    @classmethod
    def from_settings(cls, store: SettingsStore) -> "ParticipateConfig":
        return cls(policy_name=_policy_name(store, PARTICIPATES_POLICY))


@dataclass
class RoleConfig:
    """Role assignment policy."""
    policy_name: str = ""

    @classmethod
    def from_settings(cls, store: SettingsStore) -> "RoleConfig":
        return cls(policy_name=_policy_name(store, ROLE_POLICY))


@dataclass
class ConsensusConfig:
    """Consensus policy."""
    policy_name: str = ""

    @classmethod
    def from_settings(cls, store: SettingsStore) -> "ConsensusConfig":
        return cls(policy_name=_policy_name(store, CONSENSUS_POLICY))


@dataclass
class BlockChainConfig:
    """Block chain storage plugin and its data locations."""
    plugin_name: str = ""
    state_data_path: str = ""
    block_data_path: str = ""

    @classmethod
    def from_settings(cls, store: SettingsStore) -> "BlockChainConfig":
        return cls(
            plugin_name=_policy_name(store, BLOCK_CHAIN_PLUGIN),
            state_data_path=_string(store, BLOCK_CHAIN_STATE_PATH),
            block_data_path=_string(store, BLOCK_CHAIN_DATA_PATH),
        )


# -----------------------------------------------------------------------
# Top-level node config
# -----------------------------------------------------------------------


@dataclass
class NodeConfig:
    """
    Aggregate configuration handed to the rest of the node at startup.

    Each subsystem receives only its own block.
    """
    account: Optional[NodeAddress] = None
    txpool: TxPoolConfig = field(default_factory=TxPoolConfig)
    participates: ParticipateConfig = field(default_factory=ParticipateConfig)
    role: RoleConfig = field(default_factory=RoleConfig)
    consensus: ConsensusConfig = field(default_factory=ConsensusConfig)
    blockchain: BlockChainConfig = field(default_factory=BlockChainConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (for diagnostics)."""
        return {
            "node": {"id": self.account},
            "txpool": {"globalSlots": self.txpool.global_slots},
            "participates": {"policy": self.participates.policy_name},
            "role": {"policy": self.role.policy_name},
            "consensus": {"policy": self.consensus.policy_name},
            "blockchain": {
                "plugin": self.blockchain.plugin_name,
                "statePath": self.blockchain.state_data_path,
                "dataPath": self.blockchain.block_data_path,
            },
        }


class Config:
    """Subsystem config builders over a single SettingsStore."""

    def __init__(self, store: Optional[SettingsStore] = None):
        self.store = store if store is not None else SettingsStore()

    def get_node_id(self) -> NodeAddress:
        """
        Resolve the node address.

        Raises:
            NodeIdNotAssignedError: node.id absent, empty, not a string, or
                its section is not an object
        """
        result = self.store.lookup(NODE_ID, str)
        if result.found and result.value:
            return NodeAddress(result.value)
        logger.error("Node id not assigned in config.")
        raise NodeIdNotAssignedError("node id not exists.")

    def new_txpool_conf(self) -> TxPoolConfig:
        return TxPoolConfig.from_settings(self.store)

    def new_participate_conf(self) -> ParticipateConfig:
        return ParticipateConfig.from_settings(self.store)

    def new_role_conf(self) -> RoleConfig:
        return RoleConfig.from_settings(self.store)

    def new_consensus_conf(self) -> ConsensusConfig:
        return ConsensusConfig.from_settings(self.store)

    def new_block_chain_conf(self) -> BlockChainConfig:
        return BlockChainConfig.from_settings(self.store)

    def new_node_config(self) -> NodeConfig:
        """
        Run every builder in a fixed order and collect the results.

        A missing node id leaves ``account`` unset; any other failure
        propagates and no NodeConfig is returned.
        """
        try:
            account: Optional[NodeAddress] = self.get_node_id()
        except NodeIdNotAssignedError:
            account = None

        txpool = self.new_txpool_conf()
        participates = self.new_participate_conf()
        role = self.new_role_conf()
        consensus = self.new_consensus_conf()
        blockchain = self.new_block_chain_conf()

        logger.debug(f"Node config assembled from {self.store.file_path}")
        return NodeConfig(
            account=account,
            txpool=txpool,
            participates=participates,
            role=role,
            consensus=consensus,
            blockchain=blockchain,
        )


# -----------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------

def assemble_node_config(store: Optional[SettingsStore] = None) -> NodeConfig:
    """Assemble the node config from ``store`` (default settings file if None)."""
    return Config(store).new_node_config()


def load_config(
    path: Optional[Union[str, Path]] = None,
    root: Optional[Union[str, Path]] = None,
) -> NodeConfig:
    """
    Load node configuration.

    Args:
        path: settings file, relative to ``root`` unless absolute
              (default: config/config.json)
        root: deployment root (default: the repository root)
    """
    return assemble_node_config(SettingsStore(path, root))
