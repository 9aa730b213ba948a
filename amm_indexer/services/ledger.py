# amm_indexer/services/ledger.py
"""
Balance and share ledger.

Keeps pool share balances, total shares, holder counts and pool token
balances in step with liquidity token transfers, joins, exits, asset
management operations and vault internal balance moves.
"""

from decimal import Decimal
from typing import List, Optional

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import JoinExit, ManagementOperation, Pool, PoolToken
from ..types import events as ev
from ..types.constants import BPT_DECIMALS, ZERO_ADDRESS
from ..types.enums import BalanceDirection, JoinExitType, ManagementOperationType
from ..types.errors import (
    DataIntegrityError,
    ProcessingError,
    create_not_found_error,
)
from ..utils.amounts import amount_to_int, scale_down
from .entities import EntityResolver
from .pricing import PricingOracle
from .snapshots import SnapshotAggregator
from .tokens import TokenAggregates


ZERO = Decimal(0)


class BalanceLedger(LoggingMixin):

    def __init__(self,
                 store: EntityStore,
                 resolver: EntityResolver,
                 pricing: PricingOracle,
                 snapshots: SnapshotAggregator,
                 token_aggregates: TokenAggregates):
        self.store = store
        self.resolver = resolver
        self.pricing = pricing
        self.snapshots = snapshots
        self.token_aggregates = token_aggregates

    # === Share transfers ===

    def handle_transfer(self, event: ev.Transfer) -> Optional[ProcessingError]:
        is_mint = event.from_ == ZERO_ADDRESS
        is_burn = event.to == ZERO_ADDRESS
        if is_mint and is_burn:
            return None

        pool, error = self.resolver.pool_for_contract_event(event)
        if error:
            return error

        amount = scale_down(event.value, BPT_DECIMALS)

        share_from = None if is_mint else self.resolver.pool_share(pool, event.from_)
        share_to = None if is_burn else self.resolver.pool_share(pool, event.to)
        from_before = share_from.balance if share_from is not None else ZERO
        to_before = share_to.balance if share_to is not None else ZERO

        if is_mint:
            share_to.balance = share_to.balance + amount
            pool.total_shares = pool.total_shares + amount
        elif is_burn:
            share_from.balance = share_from.balance - amount
            pool.total_shares = pool.total_shares - amount
        else:
            share_from.balance = share_from.balance - amount
            share_to.balance = share_to.balance + amount

        if share_to is not None and share_to.balance != 0 and to_before == 0:
            pool.holders_count = pool.holders_count + 1
        if share_from is not None and share_from.balance == 0 and from_before != 0:
            pool.holders_count = pool.holders_count - 1

        for share in (share_from, share_to):
            if share is not None:
                self.store.save(share)
        self.store.save(pool)
        self.snapshots.update_pool_snapshot(pool, event.timestamp)

        return None

    # === Joins and exits ===

    def _aligned_pool_tokens(self, pool: Pool, deltas: List[int], fees: List[int],
                             event: ev.PoolBalanceChanged) -> List[PoolToken]:
        tokens = pool.tokens_list or []
        if len(deltas) != len(tokens) or len(fees) != len(deltas):
            raise DataIntegrityError(
                "Balance change amounts do not align with pool tokens",
                pool_id=pool.id,
                token_count=len(tokens),
                delta_count=len(deltas),
                fee_count=len(fees),
                tx_hash=event.tx_hash,
            )
        return [self.resolver.get_pool_token(pool, token) for token in tokens]

    def handle_pool_balance_changed(self, event: ev.PoolBalanceChanged) -> Optional[ProcessingError]:
        deltas = [amount_to_int(delta) for delta in event.deltas]
        if not deltas:
            return None

        pool = self.resolver.load_pool(event.pool_id)
        if pool is None:
            return create_not_found_error(
                "pool_not_found",
                "Pool not found for balance change",
                **self.log_event_context(event, pool_id=event.pool_id),
            )

        fees = [amount_to_int(fee) for fee in event.protocol_fee_amounts] or [0] * len(deltas)
        pool_tokens = self._aligned_pool_tokens(pool, deltas, fees, event)

        # a net-zero change falls through to Exit
        join_type = JoinExitType.JOIN if sum(deltas) > 0 else JoinExitType.EXIT
        is_join = join_type is JoinExitType.JOIN
        sign = 1 if is_join else -1
        direction = BalanceDirection.IN if is_join else BalanceDirection.OUT
        premints_supply = is_join and pool.capabilities.phantom

        self.resolver.user(event.liquidity_provider)

        amounts = []
        value_usd = ZERO
        for pool_token, delta, fee in zip(pool_tokens, deltas, fees):
            gross = scale_down(delta * sign, pool_token.decimals)
            amounts.append(str(gross))

            if premints_supply and pool.is_own_token(pool_token.address):
                pool.total_shares = pool.total_shares - scale_down(delta, BPT_DECIMALS)
                continue

            value_usd += self.pricing.value_in_usd(gross, pool_token.address) or ZERO

            net = scale_down(delta - fee, pool_token.decimals)
            pool_token.balance = pool_token.balance + net
            pool_token.cash_balance = pool_token.cash_balance + net
            self.store.save(pool_token)

            notional = net * sign
            notional_usd = self.pricing.value_in_usd(notional, pool_token.address) or ZERO
            self.token_aggregates.update_balances(pool_token.address, notional_usd, notional,
                                                  direction, event.timestamp)

        self.store.save(JoinExit(
            id=event.event_id,
            type=join_type,
            pool_id=pool.id,
            sender=event.liquidity_provider,
            user_address=event.liquidity_provider,
            amounts=amounts,
            value_usd=value_usd,
            tx=event.tx_hash,
            timestamp=event.timestamp,
        ))
        self.store.save(pool)

        self.pricing.capture_historical_liquidity(pool, pool.tokens_list, event.block_number)
        self.pricing.update_pool_liquidity(pool, event.timestamp)
        self.snapshots.update_pool_snapshot(pool, event.timestamp)

        self.log_debug("Balance change applied",
                       **self.log_event_context(event, pool_id=pool.id, join_type=join_type.value))
        return None

    # === Asset management ===

    def handle_pool_balance_managed(self, event: ev.PoolBalanceManaged) -> Optional[ProcessingError]:
        pool = self.resolver.load_pool(event.pool_id)
        if pool is None:
            return create_not_found_error(
                "pool_not_found",
                "Pool not found for managed balance",
                **self.log_event_context(event, pool_id=event.pool_id),
            )

        pool_token = self.resolver.get_pool_token(pool, event.token)

        raw_cash_delta = amount_to_int(event.cash_delta)
        cash_delta = scale_down(raw_cash_delta, pool_token.decimals)
        managed_delta = scale_down(event.managed_delta, pool_token.decimals)

        pool_token.cash_balance = pool_token.cash_balance + cash_delta
        pool_token.managed_balance = pool_token.managed_balance + managed_delta
        pool_token.balance = pool_token.balance + cash_delta + managed_delta
        self.store.save(pool_token)

        self.store.save(ManagementOperation(
            id=event.event_id,
            type=ManagementOperationType.from_cash_delta(raw_cash_delta),
            pool_token_id=pool_token.id,
            cash_delta=cash_delta,
            managed_delta=managed_delta,
            timestamp=event.timestamp,
        ))

        self.pricing.capture_historical_liquidity(pool, pool.tokens_list, event.block_number)
        self.pricing.update_pool_liquidity(pool, event.timestamp)
        self.snapshots.update_pool_snapshot(pool, event.timestamp)

        return None

    # === Internal balances ===

    def handle_internal_balance_changed(self, event: ev.InternalBalanceChanged) -> Optional[ProcessingError]:
        self.resolver.user(event.user)
        token = self.resolver.token(event.token)

        internal_balance = self.resolver.internal_balance(event.user, event.token)
        internal_balance.balance = internal_balance.balance + scale_down(event.delta, token.decimals)
        self.store.save(internal_balance)

        return None
