# amm_indexer/cli.py

"""
AMM indexer command-line interface

Usage: amm-indexer [--config PATH] [command] [options]
"""

from typing import Optional, Tuple

import click

from . import configure_logging, create_indexer
from .clients.interfaces import PoolContractReader, TokenMetadataReader
from .clients.web3_reader import Web3ContractReader
from .core.config import IndexerConfig
from .database.connection import DatabaseManager
from .database.store import EntityStore
from .database.tables import Pool, PoolToken
from .pipeline.reader import read_events
from .types.errors import IndexerError
from .utils import ids


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), default=None,
              help='Path to the YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """AMM Indexer - event replay and aggregate inspection"""
    ctx.ensure_object(dict)

    try:
        config = IndexerConfig.from_file(config_path) if config_path else IndexerConfig.from_dict({})
    except IndexerError as e:
        raise click.ClickException(str(e))

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config)

    ctx.obj['config'] = config


def _database(ctx) -> DatabaseManager:
    db_manager = DatabaseManager(ctx.obj['config'].database)
    db_manager.initialize()
    return db_manager


def _readers(ctx) -> Tuple[PoolContractReader, TokenMetadataReader]:
    readers: Optional[Tuple[PoolContractReader, TokenMetadataReader]] = ctx.obj.get('readers')
    if readers is not None:
        return readers

    rpc = ctx.obj['config'].rpc
    if not rpc.endpoint_url:
        raise click.ClickException("No RPC endpoint configured (set rpc.endpoint_url or INDEXER_RPC_URL)")

    reader = Web3ContractReader.from_endpoint(rpc.endpoint_url, rpc.timeout, rpc.vault_address)
    return reader, reader


@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create all entity tables"""
    db_manager = _database(ctx)
    try:
        db_manager.create_schema()
        click.echo("✅ Database schema created")
    finally:
        db_manager.shutdown()


@cli.command('process')
@click.argument('events_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def process(ctx, events_file):
    """Replay a JSON-lines event file through the engine

    Examples:
        amm-indexer --config config/example.yaml process events.jsonl
    """
    config = ctx.obj['config']
    pool_reader, token_reader = _readers(ctx)
    db_manager = _database(ctx)

    try:
        db_manager.create_schema()
        with db_manager.get_session() as session:
            processor = create_indexer(config, session, pool_reader, token_reader)
            stats = processor.process_many(read_events(events_file))
    except IndexerError as e:
        raise click.ClickException(f"Processing stopped: {e}")
    finally:
        db_manager.shutdown()

    click.echo(f"Processed: {stats['processed']}")
    click.echo(f"Skipped:   {stats['skipped']}")


@cli.command('show-pool')
@click.argument('pool_id')
@click.pass_context
def show_pool(ctx, pool_id):
    """Print the live aggregates of one pool"""
    db_manager = _database(ctx)

    try:
        db_manager.create_schema()
        with db_manager.get_session() as session:
            store = EntityStore(session)
            pool = store.load(Pool, pool_id.lower())
            if pool is None:
                raise click.ClickException(f"Pool '{pool_id}' not found")

            click.echo(f"Pool: {pool.id}")
            for key, value in pool.to_dict().items():
                if key in ('id', 'created_at', 'updated_at', 'tokens_list'):
                    continue
                click.echo(f"   {key}: {value}")

            click.echo("   tokens:")
            for token_address in pool.tokens_list or []:
                pool_token = store.load(PoolToken, ids.pool_token_id(pool.id, token_address))
                if pool_token is None:
                    click.echo(f"     {token_address}: missing")
                    continue
                click.echo(f"     {pool_token.symbol or token_address}: "
                           f"balance={pool_token.balance} weight={pool_token.weight}")
    finally:
        db_manager.shutdown()


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
