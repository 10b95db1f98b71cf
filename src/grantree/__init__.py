from .config import GrantsConfig, LogLevel, load_config_from_env
from .exceptions import (
    ConfigurationError,
    GrantsError,
    InvalidPathError,
    TreeError,
)
from .grants import (
    EffectiveGrants,
    GrantKind,
    GrantResolver,
    GrantStore,
    GrantToken,
    Identity,
    bind,
    compose_grants,
    pad_grants,
    parse_grants,
    serialize_grants,
)
from .logging import (
    GrantsFormatter,
    GrantsLoggerAdapter,
    get_grants_logger,
    safe_preview,
    setup_logging,
)
from .tree import GrantTree, MemoryNode, MemoryTree, NodeView, TreePosition

__all__ = [
    'GrantsConfig',
    'LogLevel',
    'load_config_from_env',
    'ConfigurationError',
    'GrantsError',
    'InvalidPathError',
    'TreeError',
    'EffectiveGrants',
    'GrantKind',
    'GrantResolver',
    'GrantStore',
    'GrantToken',
    'Identity',
    'bind',
    'compose_grants',
    'pad_grants',
    'parse_grants',
    'serialize_grants',
    'GrantsFormatter',
    'GrantsLoggerAdapter',
    'get_grants_logger',
    'safe_preview',
    'setup_logging',
    'GrantTree',
    'MemoryNode',
    'MemoryTree',
    'NodeView',
    'TreePosition',
]
