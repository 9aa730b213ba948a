# amm_indexer/core/config.py

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import msgspec
import yaml
from msgspec import Struct, field

from ..types.configs import (
    DatabaseConfig,
    FactoryConfig,
    LoggingConfig,
    PricingConfig,
    RpcConfig,
)
from ..types.errors import ConfigurationError
from ..types.pools import parse_pool_type
from .logging import IndexerLogger, log_with_context, INFO


ADDRESS_PATTERN = re.compile(r'^0x[0-9a-fA-F]{40}$')


class IndexerConfig(Struct):
    network: str = "bsc"
    vault_id: str = "2"
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    rpc: RpcConfig = field(default_factory=RpcConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    factories: Dict[str, FactoryConfig] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Union[str, Path], env_vars: Optional[Mapping[str, str]] = None) -> 'IndexerConfig':
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        return cls.from_dict(config_data, env_vars)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any], env_vars: Optional[Mapping[str, str]] = None) -> 'IndexerConfig':
        from dotenv import load_dotenv
        load_dotenv()
        env = os.environ if env_vars is None else env_vars

        try:
            config = msgspec.convert(config_data, type=cls, strict=False)
        except msgspec.ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        config = cls._apply_env_overrides(config, env)
        config = cls._normalize(config)
        config.validate()

        logger = IndexerLogger.get_logger('core.config')
        log_with_context(logger, INFO, "Configuration loaded",
                         network=config.network,
                         factory_count=len(config.factories),
                         pricing_asset_count=len(config.pricing.all_pricing_assets))
        return config

    @staticmethod
    def _apply_env_overrides(config: 'IndexerConfig', env: Mapping[str, str]) -> 'IndexerConfig':
        if env.get('INDEXER_DB_URL'):
            config.database = msgspec.structs.replace(config.database, url=env['INDEXER_DB_URL'])
        if env.get('INDEXER_RPC_URL'):
            config.rpc = msgspec.structs.replace(config.rpc, endpoint_url=env['INDEXER_RPC_URL'])
        if env.get('INDEXER_LOG_LEVEL'):
            config.logging = msgspec.structs.replace(config.logging, level=env['INDEXER_LOG_LEVEL'].upper())
        if env.get('INDEXER_LOG_DIR'):
            config.logging = msgspec.structs.replace(config.logging, log_dir=env['INDEXER_LOG_DIR'])
        return config

    @staticmethod
    def _normalize(config: 'IndexerConfig') -> 'IndexerConfig':
        config.pricing = msgspec.structs.replace(
            config.pricing,
            stable_assets=[a.lower() for a in config.pricing.stable_assets],
            pricing_assets=[a.lower() for a in config.pricing.pricing_assets],
        )
        config.rpc = msgspec.structs.replace(config.rpc, vault_address=config.rpc.vault_address.lower())
        config.factories = {address.lower(): factory for address, factory in config.factories.items()}
        return config

    def validate(self) -> None:
        addresses = [
            ('rpc.vault_address', self.rpc.vault_address),
            *(('pricing.stable_assets', a) for a in self.pricing.stable_assets),
            *(('pricing.pricing_assets', a) for a in self.pricing.pricing_assets),
            *(('factories', a) for a in self.factories),
        ]
        for section, address in addresses:
            if not ADDRESS_PATTERN.match(address):
                raise ConfigurationError(f"Malformed address in {section}: {address}")

        for address, factory in self.factories.items():
            try:
                parse_pool_type(factory.pool_type)
            except ValueError as e:
                raise ConfigurationError(f"Factory {address}: {e}") from e

        if not self.pricing.stable_assets:
            raise ConfigurationError("At least one USD-stable asset is required")

        if self.logging.level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError(f"Unknown log level: {self.logging.level}")
