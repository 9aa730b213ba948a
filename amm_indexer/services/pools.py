# amm_indexer/services/pools.py

from decimal import Decimal
from typing import Dict, Optional

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import AmpUpdate, Pool, SwapFeeUpdate, Vault
from ..types import events as ev
from ..types.configs import FactoryConfig
from ..types.constants import FIXED_POINT_DECIMALS
from ..types.errors import (
    ProcessingError,
    create_call_error,
)
from ..types.pools import parse_pool_type, is_weighted_pool, is_stable_like_pool
from ..utils import ids
from ..utils.amounts import amount_to_int, scale_down
from .entities import EntityResolver
from .snapshots import SnapshotAggregator


ZERO = Decimal(0)


class PoolRegistry(LoggingMixin):
    """
    Pool creation and the pool parameters that change outside of swaps:
    swap fee, weights and amplification.
    """

    def __init__(self,
                 store: EntityStore,
                 resolver: EntityResolver,
                 snapshots: SnapshotAggregator,
                 vault: Vault,
                 factories: Dict[str, FactoryConfig]):
        self.store = store
        self.resolver = resolver
        self.reader = resolver.pool_reader
        self.snapshots = snapshots
        self.vault = vault
        self.factories = {address.lower(): factory for address, factory in factories.items()}

    # === Creation ===

    def handle_pool_created(self, event: ev.PoolCreated) -> Optional[ProcessingError]:
        factory = self.factories.get(event.address.lower())
        if factory is None:
            return ProcessingError(
                stage="validation",
                error_type="unknown_factory",
                message="Pool created by an unconfigured factory",
                context=self.log_event_context(event, factory=event.address, pool_address=event.pool),
            )

        pool_address = event.pool
        pool_id_call = self.reader.get_pool_id(pool_address)
        if pool_id_call.reverted:
            return create_call_error(
                "pool_id_unavailable",
                "Pool id could not be read for new pool",
                **self.log_event_context(event, pool_address=pool_address),
            )
        pool_id = pool_id_call.value.lower()

        if self.resolver.load_pool(pool_id) is not None:
            self.log_debug("Pool already registered", pool_id=pool_id)
            return None

        pool_type = parse_pool_type(factory.pool_type)
        swap_fee = self.reader.get_swap_fee(pool_address)
        owner = self.reader.get_owner(pool_address)
        liquidity_token = self.resolver.token(pool_address)

        pool = self.store.save(Pool(
            id=pool_id,
            vault_id=self.vault.id,
            address=pool_address,
            pool_type=pool_type,
            pool_type_version=factory.version,
            factory=event.address,
            owner=owner.unwrap_or(None),
            name=liquidity_token.name,
            symbol=liquidity_token.symbol,
            specialization=ids.pool_specialization(pool_id),
            create_time=event.timestamp,
            tx=event.tx_hash,
            swap_enabled=True,
            swap_fee=scale_down(swap_fee.unwrap_or(0), FIXED_POINT_DECIMALS),
            amp=None,
            total_weight=ZERO,
            total_shares=ZERO,
            total_liquidity=ZERO,
            total_swap_volume=ZERO,
            total_swap_fee=ZERO,
            swaps_count=0,
            holders_count=0,
            tokens_list=[],
        ))

        self.vault.pool_count = self.vault.pool_count + 1
        self.store.save(self.vault)
        self.snapshots.update_vault_snapshot(self.vault, event.timestamp)

        self.log_info("Pool created",
                      **self.log_event_context(event, pool_id=pool_id, pool_type=pool_type.value))

        tokens = self.reader.get_pool_tokens(pool_id)
        if tokens.reverted:
            return create_call_error(
                "pool_tokens_unavailable",
                "Pool tokens could not be read from the vault",
                **self.log_event_context(event, pool_id=pool_id),
            )

        pool.tokens_list = [token.lower() for token in tokens.value]
        for token_address in pool.tokens_list:
            asset_manager = self.reader.get_asset_manager(pool_id, token_address)
            if asset_manager.reverted:
                continue
            self.resolver.create_pool_token(pool, token_address, asset_manager.value)
        self.store.save(pool)

        if is_weighted_pool(pool_type):
            self.update_weights(pool)
        if is_stable_like_pool(pool_type):
            self.update_amp(pool)

        self.snapshots.update_pool_snapshot(pool, event.timestamp)
        return None

    # === Dynamic parameters ===

    def update_weights(self, pool: Pool) -> bool:
        weights = self.reader.get_normalized_weights(pool.address)
        if weights.reverted:
            return False

        tokens = pool.tokens_list or []
        if len(weights.value) != len(tokens):
            self.log_warning("Weights do not align with pool tokens",
                             pool_id=pool.id,
                             weight_count=len(weights.value),
                             token_count=len(tokens))
            return False

        total_weight = ZERO
        for token_address, raw_weight in zip(tokens, weights.value):
            weight = scale_down(raw_weight, FIXED_POINT_DECIMALS)
            pool_token = self.resolver.load_pool_token(pool.id, token_address)
            if pool_token is not None:
                pool_token.weight = weight
                self.store.save(pool_token)
            total_weight += weight

        pool.total_weight = total_weight
        self.store.save(pool)
        return True

    def update_amp(self, pool: Pool) -> None:
        pool.amp = self.reader.get_amplification_parameter(pool.address).unwrap_or(0)
        self.store.save(pool)

    # === Pool contract events ===

    def handle_swap_fee_changed(self, event: ev.SwapFeePercentageChanged) -> Optional[ProcessingError]:
        pool, error = self.resolver.pool_for_contract_event(event)
        if error:
            return error

        swap_fee = scale_down(event.swap_fee_percentage, FIXED_POINT_DECIMALS)
        pool.swap_fee = swap_fee
        self.store.save(pool)

        self.store.save(SwapFeeUpdate(
            id=event.event_id,
            pool_id=pool.id,
            timestamp=event.timestamp,
            start_timestamp=event.timestamp,
            end_timestamp=event.timestamp,
            start_swap_fee_percentage=swap_fee,
            end_swap_fee_percentage=swap_fee,
        ))
        return None

    def handle_amp_update_started(self, event: ev.AmpUpdateStarted) -> Optional[ProcessingError]:
        pool, error = self.resolver.pool_for_contract_event(event)
        if error:
            return error

        self.store.save(AmpUpdate(
            id=event.event_id,
            pool_id=pool.id,
            timestamp=event.timestamp,
            start_timestamp=event.start_time,
            end_timestamp=event.end_time,
            start_amp=Decimal(amount_to_int(event.start_value)),
            end_amp=Decimal(amount_to_int(event.end_value)),
        ))
        return None

    def handle_amp_update_stopped(self, event: ev.AmpUpdateStopped) -> Optional[ProcessingError]:
        pool, error = self.resolver.pool_for_contract_event(event)
        if error:
            return error

        current = Decimal(amount_to_int(event.current_value))
        self.store.save(AmpUpdate(
            id=event.event_id,
            pool_id=pool.id,
            timestamp=event.timestamp,
            start_timestamp=event.timestamp,
            end_timestamp=event.timestamp,
            start_amp=current,
            end_amp=current,
        ))
        self.update_amp(pool)
        return None
