# amm_indexer/services/tokens.py

from decimal import Decimal

from ..core.logging import LoggingMixin
from ..types.enums import BalanceDirection
from .entities import EntityResolver
from .snapshots import SnapshotAggregator


class TokenAggregates(LoggingMixin):
    """Cross-pool balance, volume and swap-count totals per token"""

    def __init__(self, resolver: EntityResolver, snapshots: SnapshotAggregator):
        self.resolver = resolver
        self.snapshots = snapshots

    def update_balances(self,
                        token_address: str,
                        usd_amount: Decimal,
                        notional_amount: Decimal,
                        direction: BalanceDirection,
                        timestamp: int) -> None:
        token = self.resolver.token(token_address)

        if direction is BalanceDirection.IN:
            token.total_balance_notional = token.total_balance_notional + notional_amount
            token.total_balance_usd = token.total_balance_usd + usd_amount
        else:
            token.total_balance_notional = token.total_balance_notional - notional_amount
            token.total_balance_usd = token.total_balance_usd - usd_amount

        token.total_volume_notional = token.total_volume_notional + notional_amount
        token.total_volume_usd = token.total_volume_usd + usd_amount

        self.resolver.store.save(token)
        self.snapshots.update_token_snapshot(token, timestamp)

    def uptick_swaps(self, token_address: str, timestamp: int) -> None:
        token = self.resolver.token(token_address)
        token.total_swap_count = token.total_swap_count + 1

        self.resolver.store.save(token)
        self.snapshots.update_token_snapshot(token, timestamp)
