from .access import AccessControl
from .addresses import ZERO_ADDRESS, normalize_address
from .config import AccessConfig, LogLevel, StoreBackend, load_access_config_from_env
from .defaults import DefaultGroup, DefaultGroupRegistry
from .events import AccessEvent, EventBus, EventKind, GroupKind
from .exceptions import (
    ConfigurationError,
    InvalidAddressError,
    NotAManagerError,
    PermissionDeniedError,
    RegistryAccessError,
    StoreError,
    StoreUnavailableError,
    UnknownManagerError,
)
from .logging import (
    AccessLogFormatter,
    AccessLoggerAdapter,
    get_access_logger,
    safe_preview,
    setup_logging,
)
from .managers import ManagerRecord, ManagerRegistry
from .permissions import (
    DOMAIN_REGISTRANT_ROLE,
    TLD_MANAGER_ROLE,
    TLDS_MANAGER_ROLE,
    DomainAction,
    PermissionResolver,
    RequiredActions,
    Role,
    TLDPermissionOverride,
    can_administer_tld,
    can_override_owner,
    can_perform_domain_action,
    effective_role,
    role_id,
)

__all__ = [
    'AccessControl',
    'AccessConfig',
    'LogLevel',
    'StoreBackend',
    'load_access_config_from_env',
    'ZERO_ADDRESS',
    'normalize_address',
    'ManagerRecord',
    'ManagerRegistry',
    'DefaultGroup',
    'DefaultGroupRegistry',
    'AccessEvent',
    'EventBus',
    'EventKind',
    'GroupKind',
    'DOMAIN_REGISTRANT_ROLE',
    'TLD_MANAGER_ROLE',
    'TLDS_MANAGER_ROLE',
    'DomainAction',
    'PermissionResolver',
    'RequiredActions',
    'Role',
    'TLDPermissionOverride',
    'can_administer_tld',
    'can_override_owner',
    'can_perform_domain_action',
    'effective_role',
    'role_id',
    'RegistryAccessError',
    'ConfigurationError',
    'InvalidAddressError',
    'NotAManagerError',
    'PermissionDeniedError',
    'StoreError',
    'StoreUnavailableError',
    'UnknownManagerError',
    'AccessLogFormatter',
    'AccessLoggerAdapter',
    'get_access_logger',
    'safe_preview',
    'setup_logging',
]
