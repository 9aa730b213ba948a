# tests/test_processor.py

import logging
import typing

import pytest

from amm_indexer.database.tables import JoinExit, Pool, Swap, Vault
from amm_indexer.types import events as ev
from amm_indexer.types.errors import DataIntegrityError

from .factories import BUSD, TKN, WBNB, WEIGHTED_FACTORY, raw


def test_every_event_type_has_a_handler(processor):
    assert set(processor.handler_map) == set(typing.get_args(ev.EventUnion))


def test_counts_processed_and_skipped(processor, events, deploy):
    _, pool_id = deploy(WEIGHTED_FACTORY, [BUSD, WBNB])

    processor.process(events.balance_changed(pool_id, [raw(1), raw(1)]))
    processor.process(events.swap("0x" + "ee" * 32, BUSD, WBNB, raw(1), raw(1)))

    assert processor.stats() == {'processed': 2, 'skipped': 1}


def test_skip_warning_carries_event_context(processor, events, caplog):
    event = events.swap("0x" + "ee" * 32, BUSD, WBNB, raw(1), raw(1))

    with caplog.at_level(logging.WARNING, logger="amm_indexer"):
        processor.process(event)

    [record] = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert record.tx_hash == event.tx_hash
    assert record.event_type == "Swap"
    assert record.extra_context['error_type'] == "pool_not_found"


def test_processed_events_are_committed(processor, db_manager, events, deploy):
    _, pool_id = deploy(WEIGHTED_FACTORY, [BUSD, WBNB])
    event = events.balance_changed(pool_id, [raw(1), raw(1)])

    processor.process(event)

    with db_manager.get_session() as other:
        assert other.get(JoinExit, event.event_id) is not None


def test_fatal_error_rolls_back_the_whole_event(processor, store, events, deploy, caplog):
    # TKN is listed but was never registered as a pool token
    _, pool_id = deploy(WEIGHTED_FACTORY, [BUSD, WBNB, TKN], skip_asset_managers=(TKN,))
    event = events.swap(pool_id, BUSD, WBNB, raw(100), raw("0.49"))

    with caplog.at_level(logging.ERROR, logger="amm_indexer"):
        with pytest.raises(DataIntegrityError):
            processor.process(event)

    assert store.count(Swap) == 0
    assert store.load(Pool, pool_id).swaps_count == 0
    assert store.load(Vault, "2").total_swap_count == 0
    assert any(r.levelno == logging.ERROR for r in caplog.records)
    assert processor.stats() == {'processed': 1, 'skipped': 0}


def test_process_many_stops_at_fatal_error(processor, store, events, deploy):
    _, pool_id = deploy(WEIGHTED_FACTORY, [BUSD, WBNB])
    batch = [
        events.balance_changed(pool_id, [raw(1), raw(1)]),
        events.balance_changed(pool_id, [raw(1)]),
        events.balance_changed(pool_id, [raw(2), raw(2)]),
    ]

    with pytest.raises(DataIntegrityError):
        processor.process_many(batch)

    assert store.count(JoinExit) == 1
