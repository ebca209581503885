"""
Synthetic CMRR physio log writers.

Produces files laid out like the EJA_1 logs written by the scanner:
a block of `Key = Value` assignments, a blank line, a column-label row,
then 4-column data rows.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

DEFAULT_UUID = "3fd1b0c6-53a4-4b37-9d0e-6f4c1a2b7e10"
DEFAULT_BASE_NAME = "Physio_20150101_120000_3fd1b0c6"

INFO_LABELS = "VOLUME   SLICE   ACQ_START_TICS  ACQ_FINISH_TICS"
SIGNAL_LABELS = "ACQ_TIME_TICS  CHANNEL  VALUE  SIGNAL"


def format_header(fields: dict[str, object]) -> list[str]:
    """Render header assignments padded the way the scanner writes them."""
    return [f"{key:<12}= {value}" for key, value in fields.items()]


def write_log(path: Path, lines: Iterable[str]) -> Path:
    path.write_text("\n".join(lines) + "\n")
    return path


def info_lines(
    rows: Sequence[tuple[int, int, int, int]],
    *,
    uuid: str = DEFAULT_UUID,
    num_slices: int = 2,
    num_volumes: int = 1,
    first_time: int = 100,
    last_time: int = 109,
    version: str = "EJA_1",
    data_type: str = "ACQUISITION_INFO",
    extra: dict[str, object] | None = None,
) -> list[str]:
    fields: dict[str, object] = {
        "UUID": uuid,
        "ScanDate": "20150101_120000",
        "LogVersion": version,
        "LogDataType": data_type,
        "NumSlices": num_slices,
        "NumVolumes": num_volumes,
        "FirstTime": first_time,
        "LastTime": last_time,
    }
    fields.update(extra or {})
    lines = format_header(fields)
    lines += ["", INFO_LABELS]
    lines += [f"{v:>6} {s:>7} {start:>15} {stop:>16}" for v, s, start, stop in rows]
    return lines


def signal_lines(
    data_type: str,
    rows: Sequence[tuple[int, str, int, str]],
    *,
    uuid: str = DEFAULT_UUID,
    sample_time: int = 1,
    version: str = "EJA_1",
    declared_type: str | None = None,
    extra: dict[str, object] | None = None,
) -> list[str]:
    fields: dict[str, object] = {
        "UUID": uuid,
        "ScanDate": "20150101_120000",
        "LogVersion": version,
        "LogDataType": declared_type or data_type,
        "SampleTime": sample_time,
    }
    fields.update(extra or {})
    lines = format_header(fields)
    lines += ["", SIGNAL_LABELS]
    lines += [f"{t:>13} {ch:>8} {value:>6} {trig:>7}" for t, ch, value, trig in rows]
    return lines


def write_info_log(
    path: Path, rows: Sequence[tuple[int, int, int, int]], **kwargs
) -> Path:
    return write_log(path, info_lines(rows, **kwargs))


def write_signal_log(
    path: Path, data_type: str, rows: Sequence[tuple[int, str, int, str]], **kwargs
) -> Path:
    return write_log(path, signal_lines(data_type, rows, **kwargs))


def write_session(
    directory: Path,
    *,
    name: str = DEFAULT_BASE_NAME,
    uuid: str = DEFAULT_UUID,
    info_rows: Sequence[tuple[int, int, int, int]] = (
        (0, 0, 100, 103),
        (0, 1, 105, 107),
    ),
    info_kwargs: dict[str, object] | None = None,
    ecg_rows: Sequence[tuple[int, str, int, str]] = (
        (100, "ECG1", 2048, "0"),
        (101, "ECG2", 1900, "0"),
        (102, "ECG1", 2050, "1"),
    ),
    resp_rows: Sequence[tuple[int, str, int, str]] = ((105, "RESP", 7, "0"),),
    puls_rows: Sequence[tuple[int, str, int, str]] = ((100, "PULS", 0, "0"),),
    ext_rows: Sequence[tuple[int, str, int, str]] = ((104, "EXT", 1, "0"),),
    sample_times: dict[str, int] | None = None,
    uuids: dict[str, str] | None = None,
) -> Path:
    """
    Write a consistent five-file log set and return its base path.

    `uuids` overrides the UUID of individual kinds ("ECG", "RESP", ...).
    """
    sample_times = {"ECG": 1, "RESP": 3, "PULS": 2, "EXT": 1, **(sample_times or {})}
    uuids = uuids or {}
    base = directory / name

    write_info_log(
        Path(f"{base}_Info.log"),
        info_rows,
        uuid=uuids.get("ACQUISITION_INFO", uuid),
        **(info_kwargs or {}),
    )
    for data_type, rows in (
        ("ECG", ecg_rows),
        ("RESP", resp_rows),
        ("PULS", puls_rows),
        ("EXT", ext_rows),
    ):
        write_signal_log(
            Path(f"{base}_{data_type}.log"),
            data_type,
            rows,
            uuid=uuids.get(data_type, uuid),
            sample_time=sample_times[data_type],
        )
    return base
