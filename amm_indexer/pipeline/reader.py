# amm_indexer/pipeline/reader.py

from pathlib import Path
from typing import Iterator, Union

import msgspec

from ..types.errors import IndexerError
from ..types.events import EventRecord, EventUnion, normalize_event


_decoder = msgspec.json.Decoder(EventUnion)


def decode_event(data: Union[str, bytes]) -> EventRecord:
    return normalize_event(_decoder.decode(data))


def read_events(path: Union[str, Path]) -> Iterator[EventRecord]:
    """Stream event records from a newline-delimited JSON file, skipping blank lines"""
    with open(path, 'rb') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield decode_event(line)
            except msgspec.DecodeError as e:
                raise IndexerError(f"Malformed event record at line {line_number}: {e}") from e
