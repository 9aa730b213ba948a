# amm_indexer/__init__.py

from pathlib import Path

from sqlalchemy.orm import Session

from .clients.interfaces import PoolContractReader, TokenMetadataReader
from .core.config import IndexerConfig
from .core.logging import IndexerLogger, log_with_context, INFO
from .database.store import EntityStore
from .pipeline.processor import EventProcessor
from .services import (
    BalanceLedger,
    EntityResolver,
    PoolRegistry,
    PricingOracle,
    SnapshotAggregator,
    SwapProcessor,
    TokenAggregates,
)


def configure_logging(config: IndexerConfig) -> None:
    log_dir = Path(config.logging.log_dir) if config.logging.log_dir else None
    IndexerLogger.configure(
        log_dir=log_dir,
        log_level=config.logging.level,
        console_enabled=config.logging.console,
        file_enabled=log_dir is not None,
        structured_format=config.logging.structured,
    )


def create_indexer(config: IndexerConfig,
                   session: Session,
                   pool_reader: PoolContractReader,
                   token_reader: TokenMetadataReader) -> EventProcessor:
    """
    Wire the engine components over one session.

    The vault singleton is created (or loaded) and committed here, before
    any event is processed, and handed to every component that updates it.
    """
    logger = IndexerLogger.get_logger('core.init')

    store = EntityStore(session)
    resolver = EntityResolver(store, pool_reader, token_reader, vault_id=config.vault_id)
    vault = resolver.vault()
    store.commit()

    snapshots = SnapshotAggregator(store)
    token_aggregates = TokenAggregates(resolver, snapshots)
    pricing = PricingOracle(store, resolver, snapshots, vault, config.pricing)
    pools = PoolRegistry(store, resolver, snapshots, vault, config.factories)
    ledger = BalanceLedger(store, resolver, pricing, snapshots, token_aggregates)
    swaps = SwapProcessor(store, resolver, pools, pricing, snapshots, token_aggregates, vault)

    log_with_context(logger, INFO, "Indexer created",
                     network=config.network,
                     vault_id=vault.id,
                     factory_count=len(config.factories))

    return EventProcessor(store, ledger, pools, swaps)


__all__ = [
    'IndexerConfig',
    'EventProcessor',
    'configure_logging',
    'create_indexer',
]
