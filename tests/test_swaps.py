# tests/test_swaps.py

import logging
from decimal import Decimal

import pytest

from amm_indexer.database.tables import (
    Pool,
    PoolToken,
    Swap,
    Token,
    TokenPrice,
    TradePair,
    Vault,
)
from amm_indexer.utils import ids

from .factories import (
    ALICE,
    BUSD,
    COMPOSABLE_FACTORY,
    FX_FACTORY,
    LBP_FACTORY,
    LINEAR_FACTORY,
    TKN,
    USDC,
    VAULT_ADDRESS,
    WBNB,
    WEIGHTED_FACTORY,
    raw,
)


@pytest.fixture
def funded_pool(deploy, processor, events):
    pool_address, pool_id = deploy(WEIGHTED_FACTORY, [BUSD, WBNB],
                                   weights=[Decimal("0.5"), Decimal("0.5")],
                                   swap_fee=Decimal("0.003"))
    processor.process(events.balance_changed(pool_id, [raw(10000), raw(50)]))
    events.advance()
    return pool_address, pool_id


def test_unknown_pool_is_skipped(processor, store, events, caplog):
    with caplog.at_level(logging.WARNING, logger="amm_indexer"):
        error = processor.process(events.swap("0x" + "ee" * 32, BUSD, WBNB, raw(1), raw(1)))

    assert error.error_type == "pool_not_found"
    assert store.count(Swap) == 0
    assert processor.skipped == 1
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].getMessage() == "Pool not found for swap"


def test_unknown_pool_token_is_skipped(processor, store, events, funded_pool):
    _, pool_id = funded_pool

    error = processor.process(events.swap(pool_id, BUSD, TKN, raw(1), raw(1)))

    assert error.error_type == "pool_token_not_found"
    assert error.context['token'] == TKN
    assert store.count(Swap) == 0
    assert store.load(Pool, pool_id).swaps_count == 0


def test_swap_updates_every_aggregate(processor, store, events, funded_pool):
    _, pool_id = funded_pool

    event = events.swap(pool_id, BUSD, WBNB, raw(100), raw("0.49"))
    assert processor.process(event) is None

    swap = store.load(Swap, event.event_id)
    assert swap.value_usd == 100
    assert swap.fee_usd == Decimal("0.3")
    assert swap.token_in_sym == "BUSD"
    assert swap.token_out_sym == "WBNB"
    assert swap.token_amount_out == Decimal("0.49")
    assert swap.user_address == ALICE

    pool = store.load(Pool, pool_id)
    assert pool.swaps_count == 1
    assert pool.total_swap_volume == 100
    assert pool.total_swap_fee == Decimal("0.3")

    vault = store.load(Vault, "2")
    assert vault.total_swap_count == 1
    assert vault.total_swap_volume == 100
    assert vault.total_swap_fee == Decimal("0.3")

    busd_in_pool = store.load(PoolToken, ids.pool_token_id(pool_id, BUSD))
    wbnb_in_pool = store.load(PoolToken, ids.pool_token_id(pool_id, WBNB))
    assert busd_in_pool.balance == 10100
    assert busd_in_pool.cash_balance == 10100
    assert wbnb_in_pool.balance == Decimal("49.51")

    busd = store.load(Token, BUSD)
    wbnb = store.load(Token, WBNB)
    assert busd.total_swap_count == 1
    assert wbnb.total_swap_count == 1
    assert busd.total_balance_notional == 10100
    assert wbnb.total_balance_notional == Decimal("49.51")


def test_trade_pair_is_order_independent(processor, store, events, funded_pool):
    _, pool_id = funded_pool

    processor.process(events.swap(pool_id, BUSD, WBNB, raw(100), raw("0.49")))
    processor.process(events.swap(pool_id, WBNB, BUSD, raw("0.5"), raw(100)))

    assert store.count(TradePair) == 1
    pair = store.load(TradePair, ids.trade_pair_id(BUSD, WBNB))
    assert (pair.token0, pair.token1) == (WBNB, BUSD)
    assert pair.total_swap_volume == 200
    assert pair.total_swap_fee == Decimal("0.6")


def test_zero_amount_records_swap_without_price(processor, store, events, funded_pool):
    _, pool_id = funded_pool

    event = events.swap(pool_id, BUSD, WBNB, raw(100), "0")
    processor.process(event)

    assert store.exists(Swap, event.event_id)
    assert store.load(Pool, pool_id).swaps_count == 1
    assert store.count(TokenPrice) == 0


def test_virtual_supply_follows_own_token_swaps(processor, store, events, deploy):
    pool_address, pool_id = deploy(COMPOSABLE_FACTORY, [BUSD, USDC], amp=500, include_own_token=True)

    processor.process(events.mint(pool_address, VAULT_ADDRESS, 1000000))
    processor.process(events.balance_changed(pool_id, [raw(1000), raw(1000, 6), raw(1000000)]))

    pool = store.load(Pool, pool_id)
    assert pool.total_shares == 0
    assert pool.total_liquidity == 2000
    assert pool.pool_type_version == 2
    # premint join leaves the pool's own token balance untouched
    assert store.load(PoolToken, ids.pool_token_id(pool_id, pool_address)).balance == 0

    event = events.swap(pool_id, BUSD, pool_address, raw(100), raw(99))
    processor.process(event)

    pool = store.load(Pool, pool_id)
    assert pool.total_shares == 99
    swap = store.load(Swap, event.event_id)
    assert swap.value_usd == 0
    assert swap.fee_usd == 0

    processor.process(events.swap(pool_id, pool_address, USDC, raw(9), raw(9, 6)))

    assert store.load(Pool, pool_id).total_shares == 90


def test_fx_pool_records_zero_fee_with_warning(processor, store, events, deploy, caplog):
    _, pool_id = deploy(FX_FACTORY, [USDC, BUSD])
    processor.process(events.balance_changed(pool_id, [raw(5000, 6), raw(5000)]))

    event = events.swap(pool_id, USDC, BUSD, raw(100, 6), raw("99.9"))
    with caplog.at_level(logging.WARNING, logger="amm_indexer"):
        processor.process(event)

    swap = store.load(Swap, event.event_id)
    assert swap.value_usd == Decimal("99.9")
    assert swap.fee_usd == 0
    assert any("fee model not supported" in r.getMessage() for r in caplog.records)


def test_linear_pool_charges_no_swap_fee(processor, store, events, deploy):
    _, pool_id = deploy(LINEAR_FACTORY, [BUSD, TKN], include_own_token=True)

    event = events.swap(pool_id, BUSD, TKN, raw(100), raw(100))
    processor.process(event)

    swap = store.load(Swap, event.event_id)
    assert swap.value_usd == 100
    assert swap.fee_usd == 0


def test_swap_refreshes_variable_weights(processor, store, events, deploy, chain):
    pool_address, pool_id = deploy(LBP_FACTORY, [TKN, BUSD], weights=[Decimal("0.8"), Decimal("0.2")])
    processor.process(events.balance_changed(pool_id, [raw(8000), raw(2000)]))
    assert store.load(PoolToken, ids.pool_token_id(pool_id, TKN)).weight == Decimal("0.8")

    chain.weights[pool_address] = [5 * 10 ** 17, 5 * 10 ** 17]
    processor.process(events.swap(pool_id, TKN, BUSD, raw(10), raw(2)))

    assert store.load(PoolToken, ids.pool_token_id(pool_id, TKN)).weight == Decimal("0.5")
    assert store.load(PoolToken, ids.pool_token_id(pool_id, BUSD)).weight == Decimal("0.5")
    assert store.load(Pool, pool_id).total_weight == 1


def test_fixed_weight_pool_does_not_reread_weights(processor, events, funded_pool, chain):
    pool_address, pool_id = funded_pool
    chain.calls.clear()

    processor.process(events.swap(pool_id, BUSD, WBNB, raw(100), raw("0.49")))

    assert ('get_normalized_weights', pool_address) not in chain.calls
