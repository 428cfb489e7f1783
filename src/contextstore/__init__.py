from .config import LogLevel, StoreConfig, load_store_config_from_env
from .exceptions import InvalidPath, PermissionDenied, StoreError
from .fields import MISSING, StoreField, restrict
from .logging import (
    StoreFormatter,
    StoreLoggerAdapter,
    get_store_logger,
    redact_secrets,
    safe_log_value,
    safe_preview,
    setup_logging,
)
from .paths import PATH_DELIMITER, join_path, split_path
from .permissions import (
    Permission,
    PermissionTagRegistry,
    can_read,
    can_write,
    default_registry,
    resolve_permission,
)
from .producers import Producer, producer
from .store import Store

__all__ = [
    'Store',
    'Permission',
    'PermissionTagRegistry',
    'default_registry',
    'resolve_permission',
    'can_read',
    'can_write',
    'restrict',
    'StoreField',
    'MISSING',
    'Producer',
    'producer',
    'PATH_DELIMITER',
    'split_path',
    'join_path',
    'StoreError',
    'PermissionDenied',
    'InvalidPath',
    'StoreConfig',
    'LogLevel',
    'load_store_config_from_env',
    'safe_preview',
    'redact_secrets',
    'safe_log_value',
    'StoreFormatter',
    'StoreLoggerAdapter',
    'setup_logging',
    'get_store_logger',
]
