"""Event payload loading for YDF recordings.

Event payloads are JSON documents packed at the very end of the file. The
block is located from end-of-file using the declared payload lengths, and
each event's ``start_offset`` is relative to that block, not to the file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .data import event_block_size
from .header import read_at
from .types import YdfEvent, YdfHeader

logger = logging.getLogger(__name__)


def read_event_block(path: str | Path, header: YdfHeader) -> bytes:
    path = Path(path)
    total = event_block_size(header)
    if total <= 0:
        return b""
    with path.open("rb") as handle:
        file_size = handle.seek(0, 2)
        logger.debug("%s: reading %d event bytes at offset %d", path.name, total, file_size - total)
        return read_at(handle, file_size - total, total)


def parse_event_payload(block: bytes, event: YdfEvent) -> Any:
    """Parse the JSON slice owned by ``event``; NaN and Infinity literals are accepted."""

    chunk = block[event.start_offset : event.start_offset + event.file_length]
    return json.loads(chunk.decode("utf-8"))


def read_ydf_events(path: str | Path, header: YdfHeader) -> list[Any]:
    block = read_event_block(path, header)
    payloads = [parse_event_payload(block, event) for event in header.events]
    for event, payload in zip(header.events, payloads):
        event.payload = payload
    return payloads
