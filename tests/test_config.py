# tests/test_config.py

from decimal import Decimal
from pathlib import Path

import pytest

from amm_indexer.core.config import IndexerConfig
from amm_indexer.types.configs import DEFAULT_STABLE_ASSETS
from amm_indexer.types.errors import ConfigurationError
from amm_indexer.types.pools import PoolType, parse_pool_type


EXAMPLE_CONFIG = Path(__file__).parent.parent / "config" / "example.yaml"

MIXED_CASE_FACTORY = "0x8E9aa87E45e92bad84D5F8DD1bff34Fb92637dE9"


def test_defaults():
    config = IndexerConfig.from_dict({}, env_vars={})

    assert config.network == "bsc"
    assert config.vault_id == "2"
    assert config.pricing.stable_assets == DEFAULT_STABLE_ASSETS
    assert config.pricing.min_pool_liquidity_usd == Decimal(2000)
    assert config.factories == {}


def test_example_file_loads():
    config = IndexerConfig.from_file(EXAMPLE_CONFIG, env_vars={})

    assert config.rpc.vault_address == "0xba12222222228d8ba445958a75a0704d566bf2c8"
    assert MIXED_CASE_FACTORY.lower() in config.factories
    factory = config.factories[MIXED_CASE_FACTORY.lower()]
    assert parse_pool_type(factory.pool_type) is PoolType.WEIGHTED
    assert all(a == a.lower() for a in config.pricing.all_pricing_assets)


def test_pricing_assets_put_stables_first():
    config = IndexerConfig.from_dict({
        'pricing': {
            'stable_assets': ["0x" + "01" * 20],
            'pricing_assets': ["0x" + "02" * 20, "0x" + "01" * 20],
        },
    }, env_vars={})

    assert config.pricing.all_pricing_assets == ["0x" + "01" * 20, "0x" + "02" * 20]


def test_environment_overrides():
    config = IndexerConfig.from_dict({}, env_vars={
        'INDEXER_DB_URL': 'postgresql+psycopg://indexer@db/amm',
        'INDEXER_RPC_URL': 'https://rpc.example',
        'INDEXER_LOG_LEVEL': 'debug',
        'INDEXER_LOG_DIR': '/tmp/amm-logs',
    })

    assert config.database.url == 'postgresql+psycopg://indexer@db/amm'
    assert config.rpc.endpoint_url == 'https://rpc.example'
    assert config.logging.level == 'DEBUG'
    assert config.logging.log_dir == '/tmp/amm-logs'


def test_unknown_pool_type():
    with pytest.raises(ConfigurationError, match="Unknown pool type"):
        IndexerConfig.from_dict({'factories': {"0x" + "f1" * 20: {'pool_type': 'Concentrated'}}}, env_vars={})


def test_malformed_address():
    with pytest.raises(ConfigurationError, match="Malformed address"):
        IndexerConfig.from_dict({'pricing': {'stable_assets': ["0x1234"]}}, env_vars={})


def test_stable_assets_required():
    with pytest.raises(ConfigurationError, match="USD-stable"):
        IndexerConfig.from_dict({'pricing': {'stable_assets': []}}, env_vars={})


def test_invalid_field_type():
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        IndexerConfig.from_dict({'database': {'pool_size': 'many'}}, env_vars={})


def test_unknown_log_level():
    with pytest.raises(ConfigurationError, match="log level"):
        IndexerConfig.from_dict({'logging': {'level': 'LOUD'}}, env_vars={})


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        IndexerConfig.from_file(tmp_path / "absent.yaml", env_vars={})


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("pricing: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        IndexerConfig.from_file(path, env_vars={})
