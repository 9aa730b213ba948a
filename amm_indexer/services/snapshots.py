# amm_indexer/services/snapshots.py

from typing import Callable, Optional, Type, TypeVar

from ..core.logging import LoggingMixin
from ..database.base import DBEntity
from ..database.store import EntityStore
from ..database.tables import (
    Vault,
    Pool,
    PoolToken,
    Token,
    TradePair,
    VaultSnapshot,
    PoolSnapshot,
    TokenSnapshot,
    TradePairSnapshot,
)
from ..utils import ids


S = TypeVar('S', bound=DBEntity)


class SnapshotAggregator(LoggingMixin):
    """
    Daily rollups of vault, pool, token and trade pair aggregates.

    A bucket is created from the owner's live values at creation time and
    every later update in the same day overwrites it with the live values
    again. Buckets of past days are never touched.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def _get_or_create(self,
                       model: Type[S],
                       owner_id: str,
                       timestamp: int,
                       copy_live: Callable[[S], None],
                       **owner_fields) -> S:
        snapshot_id = ids.snapshot_id(owner_id, timestamp)
        snapshot = self.store.load(model, snapshot_id)

        if snapshot is None:
            snapshot = model(id=snapshot_id, timestamp=ids.day_start(timestamp), **owner_fields)
            copy_live(snapshot)
            self.store.save(snapshot)
            self.log_debug("Snapshot created", snapshot_type=model.__name__, snapshot_id=snapshot_id)

        return snapshot

    def _update(self, model: Type[S], owner_id: str, timestamp: int,
                copy_live: Callable[[S], None], **owner_fields) -> S:
        snapshot = self._get_or_create(model, owner_id, timestamp, copy_live, **owner_fields)
        copy_live(snapshot)
        return self.store.save(snapshot)

    # === Vault ===

    def get_or_create_vault_snapshot(self, vault: Vault, timestamp: int) -> VaultSnapshot:
        return self._get_or_create(VaultSnapshot, vault.id, timestamp,
                                   lambda s: self._copy_vault(vault, s), vault_id=vault.id)

    def update_vault_snapshot(self, vault: Vault, timestamp: int) -> VaultSnapshot:
        return self._update(VaultSnapshot, vault.id, timestamp,
                            lambda s: self._copy_vault(vault, s), vault_id=vault.id)

    @staticmethod
    def _copy_vault(vault: Vault, snapshot: VaultSnapshot) -> None:
        snapshot.pool_count = vault.pool_count
        snapshot.total_liquidity = vault.total_liquidity
        snapshot.total_swap_volume = vault.total_swap_volume
        snapshot.total_swap_fee = vault.total_swap_fee
        snapshot.total_swap_count = vault.total_swap_count

    # === Pool ===

    def get_or_create_pool_snapshot(self, pool: Pool, timestamp: int) -> PoolSnapshot:
        return self._get_or_create(PoolSnapshot, pool.id, timestamp,
                                   lambda s: self._copy_pool(pool, s), pool_id=pool.id)

    def update_pool_snapshot(self, pool: Pool, timestamp: int) -> PoolSnapshot:
        return self._update(PoolSnapshot, pool.id, timestamp,
                            lambda s: self._copy_pool(pool, s), pool_id=pool.id)

    def _copy_pool(self, pool: Pool, snapshot: PoolSnapshot) -> None:
        amounts = []
        for token_address in pool.tokens_list or []:
            pool_token: Optional[PoolToken] = self.store.load(PoolToken, ids.pool_token_id(pool.id, token_address))
            amounts.append(str(pool_token.balance) if pool_token is not None else "0")

        # JSON columns only detect reassignment
        snapshot.amounts = amounts
        snapshot.total_shares = pool.total_shares
        snapshot.swap_volume = pool.total_swap_volume
        snapshot.swap_fees = pool.total_swap_fee
        snapshot.liquidity = pool.total_liquidity
        snapshot.swaps_count = pool.swaps_count
        snapshot.holders_count = pool.holders_count

    # === Token ===

    def get_or_create_token_snapshot(self, token: Token, timestamp: int) -> TokenSnapshot:
        return self._get_or_create(TokenSnapshot, token.id, timestamp,
                                   lambda s: self._copy_token(token, s), token_id=token.id)

    def update_token_snapshot(self, token: Token, timestamp: int) -> TokenSnapshot:
        return self._update(TokenSnapshot, token.id, timestamp,
                            lambda s: self._copy_token(token, s), token_id=token.id)

    @staticmethod
    def _copy_token(token: Token, snapshot: TokenSnapshot) -> None:
        snapshot.total_balance_notional = token.total_balance_notional
        snapshot.total_balance_usd = token.total_balance_usd
        snapshot.total_volume_notional = token.total_volume_notional
        snapshot.total_volume_usd = token.total_volume_usd
        snapshot.total_swap_count = token.total_swap_count

    # === Trade pair ===

    def get_or_create_trade_pair_snapshot(self, pair: TradePair, timestamp: int) -> TradePairSnapshot:
        return self._get_or_create(TradePairSnapshot, pair.id, timestamp,
                                   lambda s: self._copy_trade_pair(pair, s), pair_id=pair.id)

    def update_trade_pair_snapshot(self, pair: TradePair, timestamp: int) -> TradePairSnapshot:
        return self._update(TradePairSnapshot, pair.id, timestamp,
                            lambda s: self._copy_trade_pair(pair, s), pair_id=pair.id)

    @staticmethod
    def _copy_trade_pair(pair: TradePair, snapshot: TradePairSnapshot) -> None:
        snapshot.total_swap_volume = pair.total_swap_volume
        snapshot.total_swap_fee = pair.total_swap_fee
