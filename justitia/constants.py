"""
Justitia Node Constants

This module consolidates the protocol constants, the dotted setting keys read
from the node settings file, and the logger defaults loaded from `.env`.
"""
from dotenv import dotenv_values

# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================
# Only the logger reads `.env`; node settings come from config/config.json.
_config = dotenv_values(".env")

LOGGER_DEFAULTS = {
    'LOG_LEVEL':                'INFO',
    'LOG_FORMAT':               '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    'LOG_DATE_FORMAT':          '%Y-%m-%dT%H:%M:%S',
    'LOG_CONSOLE_HIGHLIGHTING': 'True',
    'LOG_FILE_OUTPUT':          'True',
}


def _env(key):
    # an unset or blank .env entry falls back to the logger default
    return _config.get(key) or LOGGER_DEFAULTS[key]


def _env_flag(key):
    """Read a True/False logger flag; anything but "false" keeps it on."""
    return _env(key).strip().casefold() != 'false'


LOG_LEVEL = _env('LOG_LEVEL')
LOG_FORMAT = _env('LOG_FORMAT')
LOG_DATE_FORMAT = _env('LOG_DATE_FORMAT')
LOG_CONSOLE_HIGHLIGHTING = _env_flag('LOG_CONSOLE_HIGHLIGHTING')
LOG_FILE_OUTPUT = _env_flag('LOG_FILE_OUTPUT')

LOG_MAX_FILE_SIZE = 10 * 1024 * 1024 # 10MB
LOG_BACKUP_COUNT = 5


# ==================================================================================
# CORE PROTOCOL CONSTANTS
# ==================================================================================
HASH_LENGTH = 32
ADDRESS_LENGTH = 20
DEFAULT_HASH_ALGORITHM = 'SHA256'

# Key of the hash algorithm entry in the process-wide settings
HASH_ALG_NAME = 'HashAlgName'

INVALID_INT = 255
BLANK_STRING = ''
FBFT_ROUND_INTERVAL = 500  # milliseconds


# ==================================================================================
# SETTINGS FILE
# ==================================================================================
CONFIG_DIR = 'config/'
CONFIG_NAME = 'config.json'

# txpool
TXPOOL_SLOTS = 'txpool.globalSlots'
# consensus policies
CONSENSUS_POLICY = 'consensus.policy'
PARTICIPATES_POLICY = 'participates.policy'
ROLE_POLICY = 'role.policy'
# block store
DB_STORE_PLUGIN = 'block.plugin'
DB_STORE_PATH = 'block.path'
# node info
NODE_ID = 'node.id'
# node name in solo mode
SINGLE_NODE_NAME = 'singleNode'
# block chain
BLOCK_CHAIN_PLUGIN = 'blockchain.plugin'
BLOCK_CHAIN_STATE_PATH = 'blockchain.statePath'
BLOCK_CHAIN_DATA_PATH = 'blockchain.dataPath'

