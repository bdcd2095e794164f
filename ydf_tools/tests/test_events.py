from __future__ import annotations

import json
import math

import pytest

from ydf_tools.ydf.events import read_event_block
from ydf_tools.ydf.header import read_ydf_header
from ydf_tools.ydf.recording import YdfRecording

EVENTS = [
    ("Apnea", b'{"onset": 12.5, "duration": 10}'),
    ("Scoring", b'[{"stage": "N2"}, {"stage": "REM"}]'),
]


def test_payloads_are_parsed_per_event(make_ydf) -> None:
    recording = YdfRecording(make_ydf(events=EVENTS))
    recording.load_events()

    apnea, scoring = recording.events
    assert apnea.payload == {"onset": 12.5, "duration": 10}
    assert scoring.payload == [{"stage": "N2"}, {"stage": "REM"}]


def test_non_finite_literals_are_accepted(make_ydf) -> None:
    recording = YdfRecording(make_ydf(events=[("SpO2", b'{"min": NaN, "max": Infinity}')]))
    recording.load_events()

    payload = recording.events[0].payload
    assert math.isnan(payload["min"])
    assert payload["max"] == math.inf


def test_event_block_is_anchored_at_end_of_file(make_ydf) -> None:
    plain = YdfRecording(make_ydf("plain.ydf", events=EVENTS))
    padded = YdfRecording(make_ydf("padded.ydf", events=EVENTS, gap=b"\x00unrelated bytes\xff" * 7))
    plain.load_events()
    padded.load_events()

    assert [event.payload for event in plain.events] == [event.payload for event in padded.events]


def test_event_block_follows_signal_data(make_ydf) -> None:
    path = make_ydf(
        signals=[{"label": "C3", "samples_per_data_record": 2}],
        samples=[10, 20, 30, 40],
        events=EVENTS,
    )
    header = read_ydf_header(path)

    block = read_event_block(path, header)
    assert block == b"".join(payload for _, payload in EVENTS)
    assert block == path.read_bytes()[-len(block) :]


def test_malformed_payload_is_fatal_and_leaves_events_untouched(make_ydf) -> None:
    recording = YdfRecording(make_ydf(events=[("Good", b'{"ok": true}'), ("Bad", b'{"broken": ')]))

    with pytest.raises(json.JSONDecodeError):
        recording.load_events()
    assert [event.payload for event in recording.events] == [None, None]


def test_no_events_reads_nothing(make_ydf) -> None:
    path = make_ydf(signals=[{"label": "C3", "samples_per_data_record": 1}], samples=[1])
    header = read_ydf_header(path)

    assert read_event_block(path, header) == b""
    recording = YdfRecording(path)
    recording.load_events()
    assert recording.events == []
