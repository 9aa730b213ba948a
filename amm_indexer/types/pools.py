# amm_indexer/types/pools.py
"""
Pool kinds and their behavioral capabilities.

Every PoolType member must appear in the capability table below; a missing
entry fails at import time instead of silently falling through a string
comparison at runtime.
"""

import enum
from typing import Dict, NamedTuple


class PoolType(enum.Enum):
    WEIGHTED = "Weighted"
    LIQUIDITY_BOOTSTRAPPING = "LiquidityBootstrapping"
    INVESTMENT = "Investment"
    MANAGED = "Managed"
    STABLE = "Stable"
    META_STABLE = "MetaStable"
    STABLE_PHANTOM = "StablePhantom"
    COMPOSABLE_STABLE = "ComposableStable"
    HIGH_AMP_COMPOSABLE_STABLE = "HighAmpComposableStable"
    AAVE_LINEAR = "AaveLinear"
    ERC4626_LINEAR = "ERC4626Linear"
    EULER_LINEAR = "EulerLinear"
    GEARBOX_LINEAR = "GearboxLinear"
    ELEMENT = "Element"
    GYRO2 = "Gyro2"
    GYRO3 = "Gyro3"
    GYROE = "GyroE"
    FX = "FX"


class FeeModel(enum.Enum):
    FORMULA = "formula"          # value * swap fee
    NONE = "none"                # fee is not charged through the swap fee
    UNSUPPORTED = "unsupported"  # pool-specific model, recorded as zero


class PoolCapabilities(NamedTuple):
    weighted: bool = False
    variable_weight: bool = False
    stable_like: bool = False
    composable: bool = False
    phantom: bool = False
    linear: bool = False
    virtual_supply: bool = False
    fx: bool = False
    fee_model: FeeModel = FeeModel.FORMULA


_WEIGHTED = PoolCapabilities(weighted=True)
_VARIABLE_WEIGHTED = PoolCapabilities(weighted=True, variable_weight=True)
_STABLE = PoolCapabilities(stable_like=True)
_PHANTOM = PoolCapabilities(stable_like=True, phantom=True, virtual_supply=True)
_COMPOSABLE = PoolCapabilities(stable_like=True, composable=True, phantom=True, virtual_supply=True)
_LINEAR = PoolCapabilities(linear=True, virtual_supply=True, fee_model=FeeModel.NONE)
_PLAIN = PoolCapabilities()

CAPABILITIES: Dict[PoolType, PoolCapabilities] = {
    PoolType.WEIGHTED: _WEIGHTED,
    PoolType.LIQUIDITY_BOOTSTRAPPING: _VARIABLE_WEIGHTED,
    PoolType.INVESTMENT: _VARIABLE_WEIGHTED,
    PoolType.MANAGED: _VARIABLE_WEIGHTED,
    PoolType.STABLE: _STABLE,
    PoolType.META_STABLE: _STABLE,
    PoolType.STABLE_PHANTOM: _PHANTOM,
    PoolType.COMPOSABLE_STABLE: _COMPOSABLE,
    PoolType.HIGH_AMP_COMPOSABLE_STABLE: _COMPOSABLE,
    PoolType.AAVE_LINEAR: _LINEAR,
    PoolType.ERC4626_LINEAR: _LINEAR,
    PoolType.EULER_LINEAR: _LINEAR,
    PoolType.GEARBOX_LINEAR: _LINEAR,
    PoolType.ELEMENT: _PLAIN,
    PoolType.GYRO2: _PLAIN,
    PoolType.GYRO3: _PLAIN,
    PoolType.GYROE: _PLAIN,
    PoolType.FX: PoolCapabilities(fx=True, fee_model=FeeModel.UNSUPPORTED),
}

_missing = set(PoolType) - set(CAPABILITIES)
if _missing:
    raise RuntimeError(f"Pool types without capabilities: {sorted(t.value for t in _missing)}")


def capabilities(pool_type: PoolType) -> PoolCapabilities:
    return CAPABILITIES[pool_type]


def parse_pool_type(value: str) -> PoolType:
    """Accept either the member value ("ComposableStable") or name ("COMPOSABLE_STABLE")."""
    try:
        return PoolType(value)
    except ValueError:
        try:
            return PoolType[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown pool type: {value}") from None


def is_weighted_pool(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].weighted


def is_variable_weight_pool(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].variable_weight


def is_stable_like_pool(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].stable_like


def is_composable_stable_pool(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].composable


def is_phantom_pool(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].phantom


def is_linear_pool(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].linear


def has_virtual_supply(pool_type: PoolType) -> bool:
    return CAPABILITIES[pool_type].virtual_supply


def fee_model(pool_type: PoolType) -> FeeModel:
    return CAPABILITIES[pool_type].fee_model
