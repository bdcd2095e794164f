from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np

from .layout import DATACLASS_KWARGS


@dataclass(frozen=True, **DATACLASS_KWARGS)
class HeaderRecord:
    """Decoded 128-byte main header of a YDF recording."""

    version: str
    local_patient_identification: str
    start_date_of_recording: str
    start_time_of_recording: str
    reserved: str
    number_of_bytes_in_header: int
    study_duration: int
    number_of_signals: int
    eeg_channel_config: str
    number_of_event_lists: int
    error_code: str
    reserved_space: str

    @property
    def start_datetime(self) -> datetime | None:
        """Recording start from the ``dd.mm.yy`` and ``hh.mm.ss`` fields, if parseable."""

        stamp = f"{self.start_date_of_recording.strip()} {self.start_time_of_recording.strip()}"
        try:
            return datetime.strptime(stamp, "%d.%m.%y %H.%M.%S")
        except ValueError:
            return None


@dataclass(**DATACLASS_KWARGS)
class YdfSignal:
    """Channel sub-header plus the samples loaded for that channel."""

    label: str = ""
    transducer_type: str = ""
    physical_dimension: str = ""
    physical_minimum: float = 0.0
    physical_maximum: float = 0.0
    digital_minimum: int = 0
    digital_maximum: int = 0
    prefiltering: str = ""
    samples_per_data_record: int = 0
    digital_values: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int16))
    physical_values: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))

    def append_digital_values(self, values: np.ndarray) -> None:
        self.digital_values = np.concatenate((self.digital_values, values.astype(np.int16, copy=False)))

    # Physical value = (digital - DigiMin) * (PhysiMax - PhysiMin) / (DigiMax - DigiMin) + PhysiMin
    def calculate_physical_values(self) -> np.ndarray:
        digital = self.digital_values.astype(np.float64)
        digital_range = self.digital_maximum - self.digital_minimum
        if digital_range == 0:
            self.physical_values = np.full(digital.shape, np.nan)
        else:
            gain = (self.physical_maximum - self.physical_minimum) / digital_range
            self.physical_values = (digital - self.digital_minimum) * gain + self.physical_minimum
        return self.physical_values

    @property
    def samples(self) -> np.ndarray:
        return self.physical_values


@dataclass(**DATACLASS_KWARGS)
class YdfEvent:
    """Event-list sub-header; ``payload`` holds the parsed JSON once loaded."""

    label: str = ""
    read_only: int = 0
    start_offset: int = 0
    file_length: int = 0
    payload: Any = None


@dataclass(**DATACLASS_KWARGS)
class YdfHeader:
    """Everything decoded from the header regions of a YDF file."""

    filename: Path
    header: HeaderRecord
    signals: list[YdfSignal] = field(default_factory=list)
    events: list[YdfEvent] = field(default_factory=list)
    # Not stored in the file; epoch loading falls back to zero records while unset.
    duration_of_a_data_record: float | None = None

    @property
    def ns(self) -> int:
        return self.header.number_of_signals

    @property
    def ne(self) -> int:
        return self.header.number_of_event_lists
