# amm_indexer/services/swaps.py

from decimal import Decimal
from typing import Optional

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import Pool, Swap, Vault
from ..types import events as ev
from ..types.constants import BPT_DECIMALS
from ..types.enums import BalanceDirection
from ..types.errors import ProcessingError, create_not_found_error
from ..types.pools import FeeModel
from ..utils.amounts import scale_down
from .entities import EntityResolver
from .pools import PoolRegistry
from .pricing import PricingOracle
from .snapshots import SnapshotAggregator
from .tokens import TokenAggregates


ZERO = Decimal(0)


class SwapProcessor(LoggingMixin):
    """
    Applies one vault swap to pool, token, trade pair and vault aggregates
    and feeds it to price discovery.
    """

    def __init__(self,
                 store: EntityStore,
                 resolver: EntityResolver,
                 pools: PoolRegistry,
                 pricing: PricingOracle,
                 snapshots: SnapshotAggregator,
                 token_aggregates: TokenAggregates,
                 vault: Vault):
        self.store = store
        self.resolver = resolver
        self.pools = pools
        self.pricing = pricing
        self.snapshots = snapshots
        self.token_aggregates = token_aggregates
        self.vault = vault

    def _refresh_parameters(self, pool: Pool) -> None:
        capabilities = pool.capabilities
        if capabilities.variable_weight:
            self.pools.update_weights(pool)
        if capabilities.stable_like:
            self.pools.update_amp(pool)

    def _apply_virtual_supply(self, pool: Pool, event: ev.Swap) -> None:
        if not pool.capabilities.virtual_supply:
            return
        if pool.is_own_token(event.token_in):
            pool.total_shares = pool.total_shares - scale_down(event.amount_in, BPT_DECIMALS)
        if pool.is_own_token(event.token_out):
            pool.total_shares = pool.total_shares + scale_down(event.amount_out, BPT_DECIMALS)

    def _swap_fee_usd(self, pool: Pool, value_usd: Decimal, event: ev.Swap) -> Decimal:
        model = pool.capabilities.fee_model
        if model is FeeModel.FORMULA:
            return value_usd * pool.swap_fee
        if model is FeeModel.UNSUPPORTED:
            self.log_warning("Swap fee model not supported for pool type, recording zero fee",
                             **self.log_event_context(event, pool_id=pool.id,
                                                      pool_type=pool.pool_type.value))
        return ZERO

    def handle_swap(self, event: ev.Swap) -> Optional[ProcessingError]:
        pool = self.resolver.load_pool(event.pool_id)
        if pool is None:
            return create_not_found_error(
                "pool_not_found",
                "Pool not found for swap",
                **self.log_event_context(event, pool_id=event.pool_id),
            )

        # both pool tokens are resolved before anything is mutated
        pool_token_in = self.resolver.load_pool_token(pool.id, event.token_in)
        pool_token_out = self.resolver.load_pool_token(pool.id, event.token_out)
        if pool_token_in is None or pool_token_out is None:
            missing = event.token_in if pool_token_in is None else event.token_out
            return create_not_found_error(
                "pool_token_not_found",
                "Pool token not found for swap",
                **self.log_event_context(event, pool_id=pool.id, token=missing),
            )

        if event.tx_from:
            self.resolver.user(event.tx_from)

        self._refresh_parameters(pool)
        self._apply_virtual_supply(pool, event)

        amount_in = scale_down(event.amount_in, pool_token_in.decimals)
        amount_out = scale_down(event.amount_out, pool_token_out.decimals)

        value_usd = ZERO
        fee_usd = ZERO
        if not pool.is_own_token(event.token_in) and not pool.is_own_token(event.token_out):
            value_usd = self.pricing.swap_value_in_usd(event.token_in, amount_in, event.token_out, amount_out)
            fee_usd = self._swap_fee_usd(pool, value_usd, event)

        token_in = self.resolver.token(event.token_in)
        token_out = self.resolver.token(event.token_out)
        self.store.save(Swap(
            id=event.event_id,
            pool_id=pool.id,
            caller=event.tx_from,
            user_address=event.tx_from,
            token_in=event.token_in,
            token_in_sym=token_in.symbol,
            token_amount_in=amount_in,
            token_out=event.token_out,
            token_out_sym=token_out.symbol,
            token_amount_out=amount_out,
            value_usd=value_usd,
            fee_usd=fee_usd,
            block_number=event.block_number,
            tx=event.tx_hash,
            timestamp=event.timestamp,
        ))

        pool.swaps_count = pool.swaps_count + 1
        pool.total_swap_volume = pool.total_swap_volume + value_usd
        pool.total_swap_fee = pool.total_swap_fee + fee_usd
        self.store.save(pool)

        self.vault.total_swap_volume = self.vault.total_swap_volume + value_usd
        self.vault.total_swap_fee = self.vault.total_swap_fee + fee_usd
        self.vault.total_swap_count = self.vault.total_swap_count + 1
        self.store.save(self.vault)
        self.snapshots.update_vault_snapshot(self.vault, event.timestamp)

        pool_token_in.balance = pool_token_in.balance + amount_in
        pool_token_in.cash_balance = pool_token_in.cash_balance + amount_in
        pool_token_out.balance = pool_token_out.balance - amount_out
        pool_token_out.cash_balance = pool_token_out.cash_balance - amount_out
        self.store.save(pool_token_in)
        self.store.save(pool_token_out)

        self.token_aggregates.uptick_swaps(event.token_in, event.timestamp)
        self.token_aggregates.uptick_swaps(event.token_out, event.timestamp)
        self.token_aggregates.update_balances(event.token_in, value_usd, amount_in,
                                              BalanceDirection.IN, event.timestamp)
        self.token_aggregates.update_balances(event.token_out, value_usd, amount_out,
                                              BalanceDirection.OUT, event.timestamp)

        trade_pair = self.resolver.trade_pair(event.token_in, event.token_out)
        trade_pair.total_swap_volume = trade_pair.total_swap_volume + value_usd
        trade_pair.total_swap_fee = trade_pair.total_swap_fee + fee_usd
        self.store.save(trade_pair)
        self.snapshots.update_trade_pair_snapshot(trade_pair, event.timestamp)

        if amount_in == 0 or amount_out == 0:
            self.snapshots.update_pool_snapshot(pool, event.timestamp)
            return None

        self.pricing.record_spot_prices(pool, pool_token_in, amount_in, pool_token_out, amount_out,
                                        value_usd, event.block_number, event.timestamp)

        preferential = self.pricing.preferential_pricing_asset([event.token_in, event.token_out])
        if preferential is not None:
            self.pricing.capture_historical_liquidity(pool, [preferential], event.block_number)

        self.pricing.update_pool_liquidity(pool, event.timestamp)
        self.snapshots.update_pool_snapshot(pool, event.timestamp)

        return None
