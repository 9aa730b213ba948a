# amm_indexer/services/entities.py

from decimal import Decimal
from typing import Callable, Optional, Tuple, Type, TypeVar

from ..clients.interfaces import PoolContractReader, TokenMetadataReader
from ..core.logging import LoggingMixin
from ..database.base import DBEntity
from ..database.store import EntityStore
from ..database.tables import (
    Vault,
    Pool,
    PoolToken,
    Token,
    User,
    PoolShare,
    TradePair,
    UserInternalBalance,
)
from ..types.errors import (
    DataIntegrityError,
    ProcessingError,
    create_call_error,
    create_not_found_error,
)
from ..types.events import EventRecord
from ..utils import ids


E = TypeVar('E', bound=DBEntity)

ZERO = Decimal(0)


class EntityResolver(LoggingMixin):
    """
    Idempotent load-or-create access to every aggregate entity.

    Newly created entities are saved (flushed) before they are returned, so
    a second lookup within the same event finds the same row.
    """

    def __init__(self,
                 store: EntityStore,
                 pool_reader: PoolContractReader,
                 token_reader: TokenMetadataReader,
                 vault_id: str = "2"):
        self.store = store
        self.pool_reader = pool_reader
        self.token_reader = token_reader
        self.vault_id = vault_id

    def get_or_create(self, model: Type[E], entity_id: str, initializer: Callable[[str], E]) -> E:
        entity = self.store.load(model, entity_id)
        if entity is None:
            entity = self.store.save(initializer(entity_id))
        return entity

    # === Vault ===

    def vault(self) -> Vault:
        return self.get_or_create(Vault, self.vault_id, self._new_vault)

    @staticmethod
    def _new_vault(vault_id: str) -> Vault:
        return Vault(
            id=vault_id,
            pool_count=0,
            total_liquidity=ZERO,
            total_swap_volume=ZERO,
            total_swap_fee=ZERO,
            total_swap_count=0,
        )

    # === Pools ===

    def load_pool(self, pool_id: str) -> Optional[Pool]:
        return self.store.load(Pool, pool_id.lower())

    def pool_for_contract_event(self, event: EventRecord) -> Tuple[Optional[Pool], Optional[ProcessingError]]:
        """
        Resolve the pool behind the contract that emitted ``event``.

        Returns the pool, or None and the recoverable error describing why it
        could not be resolved.
        """
        pool_id = self.pool_reader.get_pool_id(event.address)
        if pool_id.reverted:
            return None, create_call_error(
                "pool_id_unavailable",
                "Pool id could not be read from pool contract",
                **self.log_event_context(event, pool_address=event.address),
            )

        pool = self.load_pool(pool_id.value)
        if pool is None:
            return None, create_not_found_error(
                "pool_not_found",
                "Pool not found for pool contract event",
                **self.log_event_context(event, pool_id=pool_id.value, pool_address=event.address),
            )
        return pool, None

    def load_pool_token(self, pool_id: str, token_address: str) -> Optional[PoolToken]:
        return self.store.load(PoolToken, ids.pool_token_id(pool_id, token_address))

    def get_pool_token(self, pool: Pool, token_address: str) -> PoolToken:
        """Pool token of a known pool; its absence means event data and state have desynchronized"""
        pool_token = self.load_pool_token(pool.id, token_address)
        if pool_token is None:
            raise DataIntegrityError(
                "Pool token not found for known pool",
                pool_id=pool.id,
                token=token_address,
            )
        return pool_token

    def create_pool_token(self, pool: Pool, token_address: str, asset_manager: Optional[str]) -> PoolToken:
        token = self.token(token_address)
        pool_token_id = ids.pool_token_id(pool.id, token_address)

        return self.get_or_create(PoolToken, pool_token_id, lambda entity_id: PoolToken(
            id=entity_id,
            pool_id=pool.id,
            address=token.address,
            token_id=token.id,
            asset_manager=asset_manager,
            symbol=token.symbol,
            name=token.name,
            decimals=token.decimals,
            balance=ZERO,
            cash_balance=ZERO,
            managed_balance=ZERO,
            weight=None,
            price_rate=Decimal(1),
        ))

    # === Tokens ===

    def token(self, token_address: str) -> Token:
        return self.get_or_create(Token, token_address.lower(), self._new_token)

    def _new_token(self, token_address: str) -> Token:
        name = self.token_reader.get_name(token_address)
        symbol = self.token_reader.get_symbol(token_address)
        decimals = self.token_reader.get_decimals(token_address)
        # a token that answers getPoolId is some pool's liquidity token
        pool_id = self.pool_reader.get_pool_id(token_address)

        if decimals.reverted:
            self.log_debug("Token decimals unavailable, defaulting to 0", token=token_address)

        return Token(
            id=token_address,
            address=token_address,
            name=name.unwrap_or(""),
            symbol=symbol.unwrap_or(""),
            decimals=decimals.unwrap_or(0),
            pool_id=pool_id.unwrap_or(None),
            total_balance_notional=ZERO,
            total_balance_usd=ZERO,
            total_volume_notional=ZERO,
            total_volume_usd=ZERO,
            total_swap_count=0,
            latest_price_id=None,
            latest_usd_price=None,
        )

    # === Holders ===

    def user(self, address: str) -> User:
        return self.get_or_create(User, address.lower(), lambda entity_id: User(id=entity_id))

    def pool_share(self, pool: Pool, holder_address: str) -> PoolShare:
        self.user(holder_address)
        share_id = ids.pool_share_id(pool.address, holder_address)
        return self.get_or_create(PoolShare, share_id, lambda entity_id: PoolShare(
            id=entity_id,
            pool_id=pool.id,
            user_address=holder_address.lower(),
            balance=ZERO,
        ))

    def internal_balance(self, user_address: str, token_address: str) -> UserInternalBalance:
        balance_id = ids.internal_balance_id(user_address, token_address)
        return self.get_or_create(UserInternalBalance, balance_id, lambda entity_id: UserInternalBalance(
            id=entity_id,
            user_address=user_address.lower(),
            token=token_address.lower(),
            balance=ZERO,
        ))

    # === Trade pairs ===

    def trade_pair(self, token_a: str, token_b: str) -> TradePair:
        token0, token1 = sorted((token_a.lower(), token_b.lower()))
        return self.get_or_create(TradePair, ids.trade_pair_id(token0, token1), lambda entity_id: TradePair(
            id=entity_id,
            token0=token0,
            token1=token1,
            total_swap_volume=ZERO,
            total_swap_fee=ZERO,
        ))
