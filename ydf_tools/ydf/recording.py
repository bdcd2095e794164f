from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .data import (
    data_record_count,
    data_record_size,
    event_block_size,
    header_size,
    read_ydf_epoch,
    read_ydf_signals,
)
from .events import read_ydf_events
from .header import read_signal_headers, read_ydf_header
from .layout import EVENT_HEADER_SIZE, SIZE_OF_SAMPLE_IN_BYTES
from .types import HeaderRecord, YdfEvent, YdfHeader, YdfSignal

logger = logging.getLogger(__name__)


class YdfRecording:
    """A YDF file with its headers decoded; samples and events load on request."""

    def __init__(self, path: str | Path) -> None:
        self.filename = Path(path)
        self._ydf: YdfHeader = read_ydf_header(self.filename)

    @classmethod
    def open(cls, path: str | Path, callback: Callable[[YdfRecording], Any] | None = None) -> YdfRecording:
        recording = cls(path)
        if callback is not None:
            callback(recording)
        return recording

    # -- decoded records ---------------------------------------------------

    @property
    def header(self) -> HeaderRecord:
        return self._ydf.header

    @property
    def signals(self) -> list[YdfSignal]:
        return self._ydf.signals

    @property
    def events(self) -> list[YdfEvent]:
        return self._ydf.events

    @property
    def ns(self) -> int:
        return self._ydf.ns

    @property
    def ne(self) -> int:
        return self._ydf.ne

    @property
    def duration_of_a_data_record(self) -> float | None:
        return self._ydf.duration_of_a_data_record

    @duration_of_a_data_record.setter
    def duration_of_a_data_record(self, value: float | None) -> None:
        self._ydf.duration_of_a_data_record = value

    # -- loading -----------------------------------------------------------

    def load_signals(self) -> None:
        records = read_ydf_signals(self.filename, self._ydf)
        logger.info("%s: loaded %d data records for %d signals", self.filename.name, records, self.ns)
        self.calculate_physical_values()

    def load_events(self) -> None:
        read_ydf_events(self.filename, self._ydf)
        logger.info("%s: loaded %d event payloads", self.filename.name, self.ne)

    def load_epoch(self, epoch_number: int, epoch_size: float) -> None:
        """Load one epoch; ``epoch_number`` is zero-indexed and ``epoch_size`` is in seconds."""

        read_ydf_epoch(self.filename, self._ydf, epoch_number, epoch_size)
        self.calculate_physical_values()

    def reset_signals(self) -> None:
        with self.filename.open("rb") as handle:
            self._ydf.signals = read_signal_headers(handle, self.ns)

    def calculate_physical_values(self) -> None:
        for signal in self.signals:
            signal.calculate_physical_values()

    # -- sizes (bytes) -----------------------------------------------------

    @property
    def size_of_header(self) -> int:
        return header_size(self._ydf)

    @property
    def expected_size_of_header(self) -> int:
        return self.header.number_of_bytes_in_header

    @property
    def file_size(self) -> int:
        return self.filename.stat().st_size

    @property
    def data_size(self) -> int:
        return max(self.file_size - self.size_of_header, 0)

    @property
    def data_record_size(self) -> int:
        return data_record_size(self._ydf)

    @property
    def data_record_count(self) -> int:
        return data_record_count(self._ydf, self.file_size)

    @property
    def event_block_size(self) -> int:
        return event_block_size(self._ydf)

    @property
    def expected_signal_data_size(self) -> int:
        return self.data_record_size * self.ns

    @property
    def expected_event_data_size(self) -> int:
        return self.event_block_size * self.ne * EVENT_HEADER_SIZE

    @property
    def expected_data_size(self) -> int:
        return self.expected_signal_data_size + self.event_block_size * self.ne * SIZE_OF_SAMPLE_IN_BYTES

    @property
    def expected_file_size(self) -> int:
        return self.expected_data_size + self.size_of_header
