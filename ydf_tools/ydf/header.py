"""Header parsing utilities for YDF recordings."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import BinaryIO, TypeVar

from .layout import (
    EVENT_FIELDS,
    EVENT_HEADER_SIZE,
    HEADER_FIELDS,
    HEADER_SIZE,
    SIGNAL_FIELDS,
    SIGNAL_HEADER_SIZE,
    FieldSpec,
    decode_record,
    record_width,
)
from .types import HeaderRecord, YdfEvent, YdfHeader, YdfSignal

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


# ---------------------------------------------------------------------------
# Binary readers
# ---------------------------------------------------------------------------


def _read_exact(handle: BinaryIO, size: int) -> bytes:
    data = handle.read(size)
    if len(data) != size:
        raise EOFError(f"Unexpected end of file while reading {size} bytes")
    return data


def read_at(handle: BinaryIO, offset: int, size: int) -> bytes:
    handle.seek(offset, 0)
    return _read_exact(handle, size)


# ---------------------------------------------------------------------------
# Header regions
# ---------------------------------------------------------------------------


def read_main_header(handle: BinaryIO) -> HeaderRecord:
    block = read_at(handle, 0, HEADER_SIZE)
    return HeaderRecord(**decode_record(block, HEADER_FIELDS))


def read_record_array(
    handle: BinaryIO,
    fields: Sequence[FieldSpec],
    count: int,
    base_offset: int,
    factory: Callable[..., RecordT],
) -> list[RecordT]:
    """Decode ``count`` back-to-back records of ``fields`` starting at ``base_offset``.

    Each record occupies one contiguous ``record_width(fields)`` span; fields
    are never interleaved across records.
    """

    if count <= 0:
        return []
    width = record_width(fields)
    block = read_at(handle, base_offset, count * width)
    records: list[RecordT] = []
    for index in range(count):
        start = index * width
        records.append(factory(**decode_record(block[start : start + width], fields)))
    return records


def signal_headers_offset() -> int:
    return HEADER_SIZE


def event_headers_offset(ns: int) -> int:
    return HEADER_SIZE + max(ns, 0) * SIGNAL_HEADER_SIZE


def size_of_header(ns: int, ne: int) -> int:
    return event_headers_offset(ns) + max(ne, 0) * EVENT_HEADER_SIZE


def read_signal_headers(handle: BinaryIO, ns: int) -> list[YdfSignal]:
    return read_record_array(handle, SIGNAL_FIELDS, ns, signal_headers_offset(), YdfSignal)


def read_event_headers(handle: BinaryIO, ns: int, ne: int) -> list[YdfEvent]:
    return read_record_array(handle, EVENT_FIELDS, ne, event_headers_offset(ns), YdfEvent)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def read_ydf_header(path: str | Path) -> YdfHeader:
    filename = Path(path)
    with filename.open("rb") as handle:
        header = read_main_header(handle)
        ns = header.number_of_signals
        ne = header.number_of_event_lists
        logger.debug("%s: %d signals, %d event lists", filename.name, ns, ne)
        signals = read_signal_headers(handle, ns)
        events = read_event_headers(handle, ns, ne)

    return YdfHeader(filename=filename, header=header, signals=signals, events=events)
