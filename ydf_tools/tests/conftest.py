from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np
import pytest


def _pad(value: object, length: int) -> bytes:
    data = str(value).encode("ascii")[:length]
    return data.ljust(length, b" ")


def main_header_bytes(ns: int, ne: int, *, header_bytes: int | None = None) -> bytes:
    declared = header_bytes if header_bytes is not None else 128 + ns * 224 + ne * 65
    return b"".join(
        [
            _pad("0", 8),
            _pad("PATIENT-7", 16),
            _pad("05.05.21", 8),
            _pad("08.30.00", 8),
            _pad("", 16),
            _pad(declared, 8),
            _pad(3600, 8),
            _pad(ns, 4),
            _pad("A1", 4),
            _pad(ne, 4),
            _pad("", 4),
            _pad("", 40),
        ]
    )


def signal_header_bytes(
    label: str,
    samples_per_data_record: int,
    *,
    physical: tuple[float, float] = (-100.0, 100.0),
    digital: tuple[int, int] = (-32768, 32767),
) -> bytes:
    return b"".join(
        [
            _pad(label, 16),
            _pad("AgAgCl electrode", 80),
            _pad("uV", 8),
            _pad(physical[0], 8),
            _pad(physical[1], 8),
            _pad(digital[0], 8),
            _pad(digital[1], 8),
            _pad("HP:0.1Hz", 80),
            _pad(samples_per_data_record, 8),
        ]
    )


def event_header_bytes(label: str, start_offset: int, length: int, read_only: int = 0) -> bytes:
    return _pad(label, 32) + _pad(read_only, 1) + _pad(start_offset, 16) + _pad(length, 16)


def build_ydf(
    path: Path,
    *,
    signals: Sequence[dict] = (),
    samples: Sequence[int] = (),
    events: Sequence[tuple[str, bytes]] = (),
    gap: bytes = b"",
) -> Path:
    """Write a synthetic YDF file: headers, int16 samples, ``gap``, then event payloads."""

    payload_block = b""
    event_headers = b""
    for label, payload in events:
        event_headers += event_header_bytes(label, len(payload_block), len(payload))
        payload_block += payload
    signal_headers = b"".join(signal_header_bytes(**signal) for signal in signals)
    data = np.asarray(samples, dtype="<i2").tobytes()
    path.write_bytes(
        main_header_bytes(len(signals), len(events)) + signal_headers + event_headers + data + gap + payload_block
    )
    return path


@pytest.fixture
def make_ydf(tmp_path: Path):
    def _make(name: str = "recording.ydf", **kwargs) -> Path:
        return build_ydf(tmp_path / name, **kwargs)

    return _make
