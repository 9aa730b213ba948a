# tests/test_events.py

import msgspec
import pytest

from amm_indexer.pipeline.reader import decode_event, read_events
from amm_indexer.types import events as ev
from amm_indexer.types.errors import IndexerError

from .factories import ALICE, BOB, EventFactory


TRANSFER_JSON = (
    '{"event": "Transfer", "address": "0xAbCdEf0000000000000000000000000000000001",'
    ' "block_number": 12, "timestamp": 1650000000,'
    ' "tx_hash": "0xABCD", "log_index": 3,'
    ' "from": "0x1111111111111111111111111111111111111111",'
    ' "to": "0x2222222222222222222222222222222222222222", "value": "1000"}'
)


def test_decode_transfer_uses_from_key():
    event = decode_event(TRANSFER_JSON)

    assert isinstance(event, ev.Transfer)
    assert event.from_ == ALICE
    assert event.to == BOB
    assert event.value == "1000"


def test_decode_normalizes_addresses_and_hashes():
    event = decode_event(TRANSFER_JSON)

    assert event.address == "0xabcdef0000000000000000000000000000000001"
    assert event.tx_hash == "0xabcd"
    assert event.event_id == "0xabcd3"
    assert event.event_type == "Transfer"


def test_normalize_leaves_lists_and_ints_alone():
    event = ev.PoolBalanceChanged(
        address="0xBA12222222228d8Ba445958a75a0704d566BF2C8",
        block_number=1,
        timestamp=2,
        tx_hash="0xFF",
        log_index=0,
        pool_id="0xAA",
        liquidity_provider="0xBB",
        deltas=["10", "-5"],
    )

    normalized = ev.normalize_event(event)

    assert normalized.pool_id == "0xaa"
    assert normalized.liquidity_provider == "0xbb"
    assert normalized.deltas == ["10", "-5"]
    assert normalized.protocol_fee_amounts == []


def test_encoded_events_decode_to_equal_records():
    events = EventFactory()
    original = events.transfer("0x" + "01" * 20, ALICE, BOB, 5)

    encoded = msgspec.json.encode(original)

    assert b'"event":"Transfer"' in encoded
    assert b'"from":' in encoded
    assert decode_event(encoded) == original


def test_read_events_skips_blank_lines(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(TRANSFER_JSON + "\n\n   \n" + TRANSFER_JSON + "\n")

    records = list(read_events(path))

    assert len(records) == 2


def test_read_events_reports_malformed_line(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(TRANSFER_JSON + "\n\n{not json}\n")

    with pytest.raises(IndexerError, match="line 3"):
        list(read_events(path))


def test_read_events_rejects_unknown_event_type(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(TRANSFER_JSON.replace('"Transfer"', '"Sync"') + "\n")

    with pytest.raises(IndexerError, match="line 1"):
        list(read_events(path))
