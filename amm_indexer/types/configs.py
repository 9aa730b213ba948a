# amm_indexer/types/configs.py

from decimal import Decimal
from typing import List, Optional

from msgspec import Struct, field

from .constants import DEFAULT_VAULT_ADDRESS
from .new import EvmAddress


class DatabaseConfig(Struct):
    url: str = "sqlite:///amm_indexer.db"
    pool_size: int = 5
    max_overflow: int = 10


class RpcConfig(Struct):
    endpoint_url: Optional[str] = None
    timeout: int = 10
    vault_address: EvmAddress = DEFAULT_VAULT_ADDRESS


class LoggingConfig(Struct):
    level: str = "INFO"
    log_dir: Optional[str] = None
    console: bool = True
    structured: bool = False


class FactoryConfig(Struct):
    pool_type: str
    version: int = 1


# Reference assets of the default network (BNB chain deployment)
DEFAULT_STABLE_ASSETS: List[str] = [
    "0xe9e7cea3dedca5984780bafc599bd69add087d56",  # BUSD
    "0x8ac76a51cc950d9822d68b83fe1ad97b32cd580d",  # USDC
    "0x1af3f329e8be154074d8769d1ffa4ee058b1dbc3",  # DAI
    "0x55d398326f99059ff775485246999027b3197955",  # USDT
]

DEFAULT_PRICING_ASSETS: List[str] = [
    "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c",  # WBNB
    "0x7130d2a12b9bcbfae4f2634d864a1ee1ce3ead9c",  # WBTC
    "0x0ddef12012ed645f12aeb1b845cb5ad61c7423f5",  # BAL
    "0x5c6ee304399dbdb9c8ef030ab642b10820db8f56",  # B-80BAL-20WETH
]


class PricingConfig(Struct):
    stable_assets: List[EvmAddress] = field(default_factory=lambda: list(DEFAULT_STABLE_ASSETS))
    pricing_assets: List[EvmAddress] = field(default_factory=lambda: list(DEFAULT_PRICING_ASSETS))
    min_pool_liquidity_usd: Decimal = Decimal(2000)
    min_swap_value_usd: Decimal = Decimal(1)

    @property
    def usd_stable_assets(self) -> List[EvmAddress]:
        return list(self.stable_assets)

    @property
    def all_pricing_assets(self) -> List[EvmAddress]:
        """Stable assets first, then the additional reference assets, in priority order."""
        assets = list(self.stable_assets)
        assets.extend(a for a in self.pricing_assets if a not in assets)
        return assets

