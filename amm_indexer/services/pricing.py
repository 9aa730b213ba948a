# amm_indexer/services/pricing.py
"""
USD valuation and spot-price discovery.

Prices are derived from observed trades against a fixed allow-list of
pricing assets. USD-stable assets are valued at exactly 1; every other
pricing asset is valued through its latest recorded price, recursively,
until a stable asset is reached.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Set

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import (
    Pool,
    PoolToken,
    Vault,
    TokenPrice,
    LatestPrice,
    PoolHistoricalLiquidity,
)
from ..types.configs import PricingConfig
from ..types.pools import has_virtual_supply
from ..utils import ids
from ..utils.amounts import safe_div
from .entities import EntityResolver
from .snapshots import SnapshotAggregator


ZERO = Decimal(0)


class PricingOracle(LoggingMixin):

    def __init__(self,
                 store: EntityStore,
                 resolver: EntityResolver,
                 snapshots: SnapshotAggregator,
                 vault: Vault,
                 config: PricingConfig):
        self.store = store
        self.resolver = resolver
        self.snapshots = snapshots
        self.vault = vault
        self.config = config

        self.stable_assets: List[str] = [a.lower() for a in config.usd_stable_assets]
        self.pricing_assets: List[str] = [a.lower() for a in config.all_pricing_assets]
        self._stable_set = set(self.stable_assets)
        self._pricing_set = set(self.pricing_assets)

    # === Classification ===

    def is_usd_stable(self, asset: str) -> bool:
        return asset.lower() in self._stable_set

    def is_pricing_asset(self, asset: str) -> bool:
        return asset.lower() in self._pricing_set

    def preferential_pricing_asset(self, assets: Iterable[str]) -> Optional[str]:
        """First of ``assets`` (in the given order) that is a pricing asset"""
        for asset in assets:
            if self.is_pricing_asset(asset):
                return asset.lower()
        return None

    # === Valuation ===

    def _latest_price(self, asset: str, pricing_asset: str) -> Optional[LatestPrice]:
        return self.store.load(LatestPrice, ids.latest_price_id(asset, pricing_asset))

    def value_in_usd(self, amount: Decimal, asset: str,
                     _visited: Optional[Set[str]] = None) -> Optional[Decimal]:
        """
        USD value of ``amount`` units of ``asset``.

        Returns None when no price route to a USD-stable asset exists, so an
        unpriced token is never mistaken for a worthless one.
        """
        asset = asset.lower()
        if asset in self._stable_set:
            return amount

        for stable in self.stable_assets:
            latest = self._latest_price(asset, stable)
            if latest is not None:
                return amount * latest.price

        visited = set(_visited or ())
        visited.add(asset)

        for pricing_asset in self.pricing_assets:
            if pricing_asset in visited or pricing_asset in self._stable_set:
                continue
            latest = self._latest_price(asset, pricing_asset)
            if latest is None:
                continue
            pricing_asset_usd = self.value_in_usd(latest.price, pricing_asset, visited)
            if pricing_asset_usd is not None:
                return amount * pricing_asset_usd

        return None

    def swap_value_in_usd(self,
                          token_in: str,
                          amount_in: Decimal,
                          token_out: str,
                          amount_out: Decimal) -> Decimal:
        if self.is_usd_stable(token_out):
            return amount_out
        if self.is_usd_stable(token_in):
            return amount_in

        value_in = self.value_in_usd(amount_in, token_in)
        value_out = self.value_in_usd(amount_out, token_out)

        in_is_pricing = self.is_pricing_asset(token_in)
        out_is_pricing = self.is_pricing_asset(token_out)
        if in_is_pricing and not out_is_pricing and value_in is not None:
            return value_in
        if out_is_pricing and not in_is_pricing and value_out is not None:
            return value_out

        known = [v for v in (value_in, value_out) if v is not None]
        if not known:
            return ZERO
        return sum(known, ZERO) / len(known)

    # === Spot prices ===

    def record_spot_prices(self,
                           pool: Pool,
                           pool_token_in: PoolToken,
                           amount_in: Decimal,
                           pool_token_out: PoolToken,
                           amount_out: Decimal,
                           swap_value_usd: Decimal,
                           block_number: int,
                           timestamp: int) -> int:
        """
        Record price samples for the non-pricing side of a swap.

        Expects pool token balances to already include this swap. Returns
        the number of samples recorded.
        """
        if pool.total_liquidity <= self.config.min_pool_liquidity_usd:
            self.log_debug("Pool liquidity below pricing threshold",
                           pool_id=pool.id,
                           liquidity=str(pool.total_liquidity))
            return 0
        if swap_value_usd <= self.config.min_swap_value_usd:
            self.log_debug("Swap value below pricing threshold",
                           pool_id=pool.id,
                           value_usd=str(swap_value_usd))
            return 0

        recorded = 0
        if self.is_pricing_asset(pool_token_in.address):
            if self._record_price(pool, asset=pool_token_out, pricing=pool_token_in,
                                   asset_amount=amount_out, pricing_amount=amount_in,
                                   block_number=block_number, timestamp=timestamp):
                recorded += 1
        if self.is_pricing_asset(pool_token_out.address):
            if self._record_price(pool, asset=pool_token_in, pricing=pool_token_out,
                                   asset_amount=amount_in, pricing_amount=amount_out,
                                   block_number=block_number, timestamp=timestamp):
                recorded += 1
        return recorded

    def _record_price(self,
                      pool: Pool,
                      asset: PoolToken,
                      pricing: PoolToken,
                      asset_amount: Decimal,
                      pricing_amount: Decimal,
                      block_number: int,
                      timestamp: int) -> bool:
        price = self._spot_price(asset, pricing, asset_amount, pricing_amount)
        if price is None:
            self.log_debug("Spot price unavailable", pool_id=pool.id, token=asset.address)
            return False

        price_id = ids.token_price_id(pool.id, asset.address, pricing.address, block_number)
        sample = self.store.load(TokenPrice, price_id)
        if sample is None:
            sample = TokenPrice(
                id=price_id,
                pool_id=pool.id,
                asset=asset.address,
                pricing_asset=pricing.address,
                block=block_number,
            )
        sample.amount = pricing_amount
        sample.price = price
        sample.timestamp = timestamp
        self.store.save(sample)

        self.update_latest_price(sample)
        return True

    @staticmethod
    def _spot_price(asset: PoolToken, pricing: PoolToken,
                    asset_amount: Decimal, pricing_amount: Decimal) -> Optional[Decimal]:
        if asset.weight and pricing.weight:
            if asset.balance == 0 or pricing.balance == 0:
                return None
            return (pricing.balance / pricing.weight) / (asset.balance / asset.weight)
        if asset_amount == 0:
            return None
        return pricing_amount / asset_amount

    def update_latest_price(self, sample: TokenPrice) -> LatestPrice:
        latest_id = ids.latest_price_id(sample.asset, sample.pricing_asset)
        latest = self.store.load(LatestPrice, latest_id)
        if latest is None:
            latest = LatestPrice(id=latest_id, asset=sample.asset, pricing_asset=sample.pricing_asset)

        latest.pool_id = sample.pool_id
        latest.price = sample.price
        latest.block = sample.block
        self.store.save(latest)

        token = self.resolver.token(sample.asset)
        token.latest_price_id = latest_id
        usd_price = self.value_in_usd(sample.price, sample.pricing_asset)
        if usd_price is not None:
            token.latest_usd_price = usd_price
        self.store.save(token)

        return latest

    # === Liquidity ===

    def _excluded_own_token(self, pool: Pool, token_address: str) -> bool:
        return pool.pool_type is not None and has_virtual_supply(pool.pool_type) and pool.is_own_token(token_address)

    def add_historical_liquidity_record(self, pool: Pool, pricing_asset: str, block_number: int) -> bool:
        """Value the pool in units of ``pricing_asset``; False when no complete valuation exists"""
        pricing_asset = pricing_asset.lower()
        tokens = pool.tokens_list or []

        if len(tokens) < 2:
            return False
        if pool.is_own_token(pricing_asset):
            return False

        pool_value = ZERO
        for token_address in tokens:
            if self._excluded_own_token(pool, token_address):
                continue
            pool_token = self.resolver.get_pool_token(pool, token_address)

            if token_address.lower() == pricing_asset:
                pool_value += pool_token.balance
                continue

            latest = self._latest_price(token_address, pricing_asset)
            if latest is not None:
                pool_value += pool_token.balance * latest.price

        if pool_value != 0 and self.value_in_usd(pool_value, pricing_asset) is None:
            return False

        record_id = ids.historical_liquidity_id(pool.id, pricing_asset, block_number)
        record = self.store.load(PoolHistoricalLiquidity, record_id)
        if record is None:
            record = PoolHistoricalLiquidity(id=record_id, pool_id=pool.id, pricing_asset=pricing_asset)

        record.pool_total_shares = pool.total_shares
        record.pool_liquidity = pool_value
        record.pool_share_value = safe_div(pool_value, pool.total_shares)
        record.block = block_number
        self.store.save(record)
        return True

    def capture_historical_liquidity(self, pool: Pool, candidates: Iterable[str], block_number: int) -> Optional[str]:
        """Record against the first candidate pricing asset that succeeds; returns that asset"""
        for asset in candidates:
            if not self.is_pricing_asset(asset):
                continue
            if self.add_historical_liquidity_record(pool, asset, block_number):
                return asset.lower()
        return None

    def update_pool_liquidity(self, pool: Pool, timestamp: int) -> bool:
        """
        Revalue the pool in USD and carry the change into the vault.

        Unpriced tokens are skipped. When the pool holds value but none of it
        can be priced, the previous valuation is kept and False is returned.
        """
        total = ZERO
        has_value = False
        resolved = False

        for token_address in pool.tokens_list or []:
            if self._excluded_own_token(pool, token_address):
                continue
            pool_token = self.resolver.get_pool_token(pool, token_address)
            if pool_token.balance == 0:
                continue

            has_value = True
            value = self.value_in_usd(pool_token.balance, token_address)
            if value is None:
                continue
            total += value
            resolved = True

        if has_value and not resolved:
            return False

        delta = total - pool.total_liquidity
        pool.total_liquidity = total
        self.store.save(pool)

        self.vault.total_liquidity = self.vault.total_liquidity + delta
        self.store.save(self.vault)
        self.snapshots.update_vault_snapshot(self.vault, timestamp)
        return True
