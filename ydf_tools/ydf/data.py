from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from .header import read_at, size_of_header
from .layout import SIZE_OF_SAMPLE_IN_BYTES
from .types import YdfHeader

logger = logging.getLogger(__name__)


def header_size(header: YdfHeader) -> int:
    return size_of_header(header.ns, header.ne)


def data_record_size(header: YdfHeader) -> int:
    """Bytes occupied by one data record (all channels, one record)."""

    return sum(signal.samples_per_data_record for signal in header.signals) * SIZE_OF_SAMPLE_IN_BYTES


def event_block_size(header: YdfHeader) -> int:
    return sum(event.file_length for event in header.events)


def data_record_count(header: YdfHeader, file_size: int) -> int:
    """Number of complete data records between the headers and the event block."""

    record_size = data_record_size(header)
    if record_size <= 0:
        return 0
    available = file_size - event_block_size(header) - header_size(header)
    if available <= 0:
        return 0
    count, remainder = divmod(available, record_size)
    if remainder:
        logger.warning(
            "%s: ignoring %d trailing bytes after %d complete data records",
            header.filename.name,
            remainder,
            count,
        )
    return count


def demultiplex(
    samples: np.ndarray,
    samples_per_record: Sequence[int],
    records: int,
) -> list[np.ndarray]:
    """Split a flat run of interleaved data records into per-channel arrays.

    Within each data record, channel ``k`` owns ``samples_per_record[k]``
    contiguous values starting at the sum of the preceding channels' counts.
    The returned arrays keep data-record order.
    """

    counts = np.asarray(samples_per_record, dtype=np.int64)
    if counts.size == 0:
        return []
    total = int(counts.sum())
    if records <= 0 or total <= 0:
        return [np.empty(0, dtype=np.int16) for _ in range(counts.size)]
    needed = records * total
    if samples.size < needed:
        raise ValueError(f"Expected {needed} samples for {records} data records, got {samples.size}")
    frame = samples[:needed].reshape(records, total)
    bounds = np.concatenate(([0], np.cumsum(counts)))
    return [frame[:, bounds[idx] : bounds[idx + 1]].reshape(-1) for idx in range(counts.size)]


def _read_data_records(path: Path, header: YdfHeader, offset: int, records: int) -> list[np.ndarray]:
    length = records * data_record_size(header)
    with path.open("rb") as handle:
        raw = read_at(handle, offset, length)
    samples = np.frombuffer(raw, dtype="<i2")
    logger.debug("%s: read %d bytes at offset %d (%d data records)", path.name, length, offset, records)
    return demultiplex(samples, [signal.samples_per_data_record for signal in header.signals], records)


def _append(header: YdfHeader, channels: list[np.ndarray]) -> None:
    for signal, values in zip(header.signals, channels):
        signal.append_digital_values(values)


def read_ydf_signals(path: str | Path, header: YdfHeader) -> int:
    """Append every complete data record to the channels' digital values."""

    path = Path(path)
    records = data_record_count(header, path.stat().st_size)
    _append(header, _read_data_records(path, header, header_size(header), records))
    return records


def epoch_data_records(header: YdfHeader, epoch_size: float) -> int:
    try:
        return int(epoch_size / header.duration_of_a_data_record)
    except (TypeError, ZeroDivisionError):
        logger.warning(
            "%s: duration of a data record is %r; retrieving zero additional data records",
            header.filename.name,
            header.duration_of_a_data_record,
        )
        return 0


def read_ydf_epoch(path: str | Path, header: YdfHeader, epoch_number: int, epoch_size: float) -> int:
    """Append the data records of one epoch (zero-indexed, ``epoch_size`` in seconds)."""

    path = Path(path)
    records = epoch_data_records(header, epoch_size) + 1
    # TODO: offset treats epoch_size as a data-record count until the record duration is stored in the file.
    offset = header_size(header) + int(epoch_number * epoch_size) * data_record_size(header)
    _append(header, _read_data_records(path, header, offset, records))
    return records
