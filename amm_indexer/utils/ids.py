# amm_indexer/utils/ids.py
"""
Composite entity identifiers.

Addresses and pool ids are lower-case, fixed-width hex, so joining them with
"-" cannot produce collisions.
"""

from ..types.constants import SECONDS_PER_DAY


def pool_address_from_id(pool_id: str) -> str:
    """A pool id is the pool address followed by a 2-byte specialization and a 10-byte nonce"""
    return pool_id[:42].lower()


def pool_specialization(pool_id: str) -> int:
    return int(pool_id[42:46], 16) if len(pool_id) >= 46 else 0


def pool_token_id(pool_id: str, token_address: str) -> str:
    return f"{pool_id.lower()}-{token_address.lower()}"


def pool_share_id(pool_address: str, holder_address: str) -> str:
    return f"{pool_address.lower()}-{holder_address.lower()}"


def internal_balance_id(user_address: str, token_address: str) -> str:
    return f"{user_address.lower()}{token_address.lower()}"


def trade_pair_id(token_a: str, token_b: str) -> str:
    token0, token1 = sorted((token_a.lower(), token_b.lower()))
    return f"{token0}-{token1}"


def latest_price_id(asset: str, pricing_asset: str) -> str:
    return f"{asset.lower()}-{pricing_asset.lower()}"


def token_price_id(pool_id: str, asset: str, pricing_asset: str, block_number: int) -> str:
    return f"{pool_id.lower()}-{asset.lower()}-{pricing_asset.lower()}-{block_number}"


def historical_liquidity_id(pool_id: str, pricing_asset: str, block_number: int) -> str:
    return f"{pool_id.lower()}-{pricing_asset.lower()}-{block_number}"


def day_id(timestamp: int) -> int:
    return timestamp // SECONDS_PER_DAY


def day_start(timestamp: int) -> int:
    return day_id(timestamp) * SECONDS_PER_DAY


def snapshot_id(owner_id: str, timestamp: int) -> str:
    return f"{owner_id}-{day_id(timestamp)}"
