"""Field tables and offset arithmetic for YDF headers.

Every header region of a YDF file is a run of fixed-width ASCII fields. The
tables below list those fields in on-disk order; a field's byte offset inside
its record is the sum of the widths declared before it, so offsets can be
computed before any I/O happens.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

DATACLASS_KWARGS = {"slots": True} if sys.version_info >= (3, 10) else {}

SIZE_OF_SAMPLE_IN_BYTES = 2

_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


# ---------------------------------------------------------------------------
# Field transforms
# ---------------------------------------------------------------------------


def raw(text: str) -> str:
    return text


def strip(text: str) -> str:
    return text.strip()


def to_int(text: str) -> int:
    """Parse the leading integer of ``text``; blank or non-numeric gives 0."""

    match = _INT_PREFIX.match(text.strip())
    return int(match.group()) if match else 0


def to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text.strip())
    return float(match.group()) if match else 0.0


@dataclass(frozen=True, **DATACLASS_KWARGS)
class FieldSpec:
    """One fixed-width ASCII field of a header record."""

    name: str
    size: int
    transform: Callable[[str], Any] = raw
    title: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# Field tables
# ---------------------------------------------------------------------------

HEADER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("version", 8, strip, "Version"),
    FieldSpec("local_patient_identification", 16, strip, "Local Patient Identification"),
    FieldSpec("start_date_of_recording", 8, raw, "Start Date of Recording", "(dd.mm.yy)"),
    FieldSpec("start_time_of_recording", 8, raw, "Start Time of Recording", "(hh.mm.ss)"),
    FieldSpec("reserved", 16, raw, "Reserved"),
    FieldSpec("number_of_bytes_in_header", 8, to_int, "Number of Bytes in Header"),
    FieldSpec("study_duration", 8, to_int, "Study Duration"),
    FieldSpec("number_of_signals", 4, to_int, "Number of Signals"),
    FieldSpec("eeg_channel_config", 4, strip, "EEG Channel Configuration"),
    FieldSpec("number_of_event_lists", 4, to_int, "Number of Event Lists"),
    FieldSpec("error_code", 4, strip, "Error Code"),
    FieldSpec("reserved_space", 40, raw, "Reserved Space"),
)

SIGNAL_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("label", 16, strip, "Label"),
    FieldSpec("transducer_type", 80, strip, "Transducer Type"),
    FieldSpec("physical_dimension", 8, strip, "Physical Dimension"),
    FieldSpec("physical_minimum", 8, to_float, "Physical Minimum"),
    FieldSpec("physical_maximum", 8, to_float, "Physical Maximum"),
    FieldSpec("digital_minimum", 8, to_int, "Digital Minimum"),
    FieldSpec("digital_maximum", 8, to_int, "Digital Maximum"),
    FieldSpec("prefiltering", 80, strip, "Prefiltering"),
    FieldSpec("samples_per_data_record", 8, to_int, "Samples Per Data Record"),
)

EVENT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("label", 32, strip, "Label"),
    FieldSpec("read_only", 1, to_int, "Read Only"),
    FieldSpec("start_offset", 16, to_int, "Start Offset"),
    FieldSpec("file_length", 16, to_int, "File Length"),
)


# ---------------------------------------------------------------------------
# Offset arithmetic
# ---------------------------------------------------------------------------


def record_width(fields: Sequence[FieldSpec]) -> int:
    return sum(spec.size for spec in fields)


def offset_of(fields: Sequence[FieldSpec], name: str) -> int:
    """Return the byte offset of ``name`` within one record of ``fields``."""

    offset = 0
    for spec in fields:
        if spec.name == name:
            return offset
        offset += spec.size
    raise KeyError(f"Unknown field {name!r}")


def field_offsets(fields: Sequence[FieldSpec]) -> dict[str, int]:
    offsets: dict[str, int] = {}
    offset = 0
    for spec in fields:
        offsets[spec.name] = offset
        offset += spec.size
    return offsets


def decode_field(data: bytes, spec: FieldSpec) -> Any:
    if len(data) != spec.size:
        raise ValueError(f"Field {spec.name!r} expects {spec.size} bytes, got {len(data)}")
    return spec.transform(data.decode("ascii", errors="ignore"))


def decode_record(block: bytes, fields: Sequence[FieldSpec]) -> dict[str, Any]:
    """Decode one contiguous record into a ``{field name: value}`` mapping."""

    values: dict[str, Any] = {}
    offset = 0
    for spec in fields:
        values[spec.name] = decode_field(block[offset : offset + spec.size], spec)
        offset += spec.size
    return values


HEADER_SIZE = record_width(HEADER_FIELDS)
SIGNAL_HEADER_SIZE = record_width(SIGNAL_FIELDS)
EVENT_HEADER_SIZE = record_width(EVENT_FIELDS)
