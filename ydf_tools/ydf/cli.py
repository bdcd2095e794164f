from __future__ import annotations

import argparse
import json
import logging
import math
from pathlib import Path
from typing import Any

from rich.console import Console

from .recording import YdfRecording
from .report import print_header

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ydf-inspect",
        description="Decode YDF recordings and print their header, channel and event information.",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="Input .ydf file(s)")
    parser.add_argument("--signals", action="store_true", help="Load every data record of every signal")
    parser.add_argument("--events", action="store_true", help="Load and parse the JSON event payloads")
    parser.add_argument("--epoch", type=int, default=None, help="Load a single zero-indexed epoch")
    parser.add_argument(
        "--epoch-size",
        type=float,
        default=30.0,
        help="Epoch length in seconds used with --epoch (default: %(default)s)",
    )
    parser.add_argument(
        "--json",
        dest="json_path",
        type=Path,
        help="Write a JSON summary to this file (one entry per input)",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print the header report")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value


def summarize(recording: YdfRecording) -> dict[str, Any]:
    header = recording.header
    start = header.start_datetime
    return {
        "file": recording.filename.name,
        "version": header.version,
        "patient_id": header.local_patient_identification,
        "start_time": start.isoformat() if start else None,
        "study_duration": header.study_duration,
        "size_of_header": recording.size_of_header,
        "expected_size_of_header": recording.expected_size_of_header,
        "file_size": recording.file_size,
        "signals": [
            {
                "label": signal.label,
                "physical_dimension": signal.physical_dimension,
                "samples_per_data_record": signal.samples_per_data_record,
                "sample_count": int(signal.digital_values.size),
            }
            for signal in recording.signals
        ],
        "events": [
            {
                "label": event.label,
                "read_only": bool(event.read_only),
                "length": event.file_length,
                "payload": _json_safe(event.payload),
            }
            for event in recording.events
        ],
    }


def inspect_file(
    path: Path,
    *,
    signals: bool = False,
    events: bool = False,
    epoch: int | None = None,
    epoch_size: float = 30.0,
    console: Console | None = None,
) -> YdfRecording:
    recording = YdfRecording(path)
    if signals:
        recording.load_signals()
    if epoch is not None:
        recording.load_epoch(epoch, epoch_size)
    if events:
        recording.load_events()
    if console is not None:
        print_header(recording, console)
    return recording


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    console = None if args.quiet else Console()
    summaries: list[dict[str, Any]] = []
    for path in args.paths:
        try:
            recording = inspect_file(
                path.expanduser(),
                signals=args.signals,
                events=args.events,
                epoch=args.epoch,
                epoch_size=args.epoch_size,
                console=console,
            )
        except Exception as exc:
            logger.error("Failed to decode %s: %s", path, exc)
            continue
        summaries.append(summarize(recording))

    if not summaries:
        return 1
    if args.json_path:
        args.json_path.write_text(json.dumps({"files": summaries}, indent=2))
        logger.info("Wrote summary for %d file(s) to %s", len(summaries), args.json_path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
