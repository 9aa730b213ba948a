# tests/conftest.py
"""
pytest configuration and fixtures for engine tests

Every test runs against a fresh in-memory SQLite database and an in-memory
chain, so no RPC endpoint or database server is needed.
"""

import pytest

from amm_indexer import create_indexer
from amm_indexer.core.config import IndexerConfig
from amm_indexer.core.logging import IndexerLogger
from amm_indexer.database.connection import DatabaseManager
from amm_indexer.database.store import EntityStore
from amm_indexer.types.configs import DatabaseConfig

from .factories import CONFIG_DATA, EventFactory, FakeChain


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers between tests so caplog sees every record"""
    IndexerLogger.reset()
    yield
    IndexerLogger.reset()


@pytest.fixture
def indexer_config():
    return IndexerConfig.from_dict(CONFIG_DATA, env_vars={})


@pytest.fixture
def db_manager():
    manager = DatabaseManager(DatabaseConfig(url="sqlite:///:memory:"))
    manager.initialize()
    manager.create_schema()
    yield manager
    manager.shutdown()


@pytest.fixture
def session(db_manager):
    with db_manager.get_session() as session:
        yield session


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def events():
    return EventFactory()


@pytest.fixture
def processor(indexer_config, session, chain):
    return create_indexer(indexer_config, session, chain, chain)


@pytest.fixture
def store(session):
    return EntityStore(session)


@pytest.fixture
def deploy(processor, chain, events):
    """Deploy a pool on the fake chain and index its creation event"""

    def _deploy(factory, tokens, **kwargs):
        pool_address, pool_id = chain.deploy_pool(tokens, **kwargs)
        error = processor.process(events.pool_created(factory, pool_address))
        assert error is None
        return pool_address, pool_id

    return _deploy
