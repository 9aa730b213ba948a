# amm_indexer/types/__init__.py

from .constants import (
    ZERO_ADDRESS,
    SECONDS_PER_DAY,
    BPT_DECIMALS,
    FIXED_POINT_DECIMALS,
    DEFAULT_VAULT_ADDRESS,
)

from .new import (
    EvmAddress,
    EvmHash,
    PoolId,
    IntStr,
    EventId,
    ErrorId,
)

from .results import CallResult

from .errors import (
    IndexerError,
    ConfigurationError,
    DataIntegrityError,
    ProcessingError,
    create_not_found_error,
    create_call_error,
)

from .enums import JoinExitType, ManagementOperationType, BalanceDirection

from .pools import (
    PoolType,
    FeeModel,
    PoolCapabilities,
    capabilities,
    parse_pool_type,
)

from .configs import (
    DatabaseConfig,
    RpcConfig,
    LoggingConfig,
    FactoryConfig,
    PricingConfig,
)

from .events import (
    EventRecord,
    PoolCreated,
    Transfer,
    SwapFeePercentageChanged,
    AmpUpdateStarted,
    AmpUpdateStopped,
    PoolBalanceChanged,
    PoolBalanceManaged,
    InternalBalanceChanged,
    Swap,
    EventUnion,
    normalize_event,
)

__all__ = [
    # Constants
    "ZERO_ADDRESS",
    "SECONDS_PER_DAY",
    "BPT_DECIMALS",
    "FIXED_POINT_DECIMALS",
    "DEFAULT_VAULT_ADDRESS",

    # New Types
    "EvmAddress",
    "EvmHash",
    "PoolId",
    "IntStr",
    "EventId",
    "ErrorId",

    # Results and errors
    "CallResult",
    "IndexerError",
    "ConfigurationError",
    "DataIntegrityError",
    "ProcessingError",
    "create_not_found_error",
    "create_call_error",

    # Enums
    "JoinExitType",
    "ManagementOperationType",
    "BalanceDirection",

    # Pools
    "PoolType",
    "FeeModel",
    "PoolCapabilities",
    "capabilities",
    "parse_pool_type",

    # Configuration
    "DatabaseConfig",
    "RpcConfig",
    "LoggingConfig",
    "FactoryConfig",
    "PricingConfig",

    # Events
    "EventRecord",
    "PoolCreated",
    "Transfer",
    "SwapFeePercentageChanged",
    "AmpUpdateStarted",
    "AmpUpdateStopped",
    "PoolBalanceChanged",
    "PoolBalanceManaged",
    "InternalBalanceChanged",
    "Swap",
    "EventUnion",
    "normalize_event",
]
