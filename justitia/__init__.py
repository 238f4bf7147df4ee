"""
Justitia Node Package

Configuration resolution and node identity for a Justitia ledger node.
Core imports are lazily loaded; for direct access import from submodules:

    from justitia.config import load_config, SettingsStore
    from justitia.crypto import sum_bytes, block_identifier
    from justitia.exceptions import ConfigurationError
"""

# Lazy imports to avoid loading everything at package import
def __getattr__(name):
    """Lazy module loading."""
    if name == 'load_config':
        from .config import load_config
        return load_config
    elif name == 'NodeConfig':
        from .config import NodeConfig
        return NodeConfig
    elif name == 'ConfigurationError':
        from .exceptions import ConfigurationError
        return ConfigurationError
    raise AttributeError(f"module 'justitia' has no attribute {name!r}")

__all__ = ['load_config', 'NodeConfig', 'ConfigurationError']
