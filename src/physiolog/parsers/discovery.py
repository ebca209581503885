"""Discovery of physio log sets on disk."""

from pathlib import Path

from physiolog.constants import INFO_SUFFIX, LOG_FILE_SUFFIXES
from physiolog.parsers.types import LogDataType, SessionFiles

__all__ = ["SessionFiles", "base_from_path", "find_sessions", "session_files"]


def session_files(base: Path | str) -> SessionFiles:
    """
    Companion log paths for a base filename such as
    `Physio_20150101_120000_<uuid>`.
    """
    base = Path(base)
    paths = {
        LogDataType(data_type): base.with_name(base.name + suffix)
        for data_type, suffix in LOG_FILE_SUFFIXES.items()
    }
    return SessionFiles(base=base, paths=paths)


def find_sessions(directory: Path | str, recursive: bool = False) -> list[SessionFiles]:
    """
    Find every log set whose Info file lives under `directory`.

    Args:
        directory: Directory to search
        recursive: Also search subdirectories

    Returns:
        Log sets sorted by base path, complete or not
    """
    directory = Path(directory)
    pattern = f"*{INFO_SUFFIX}"
    matches = directory.rglob(pattern) if recursive else directory.glob(pattern)

    sessions = []
    for info_path in matches:
        prefix = info_path.name[: -len(INFO_SUFFIX)]
        if not prefix or not info_path.is_file():
            continue
        base = info_path.with_name(prefix)
        sessions.append(session_files(base))

    return sorted(sessions, key=lambda s: str(s.base))


def base_from_path(path: Path | str) -> Path:
    """
    Base filename for a path that may name one of the companion files.

    `Physio_X_ECG.log` and `Physio_X` both give `Physio_X`.
    """
    path = Path(path)
    for suffix in LOG_FILE_SUFFIXES.values():
        if path.name.endswith(suffix) and len(path.name) > len(suffix):
            return path.with_name(path.name[: -len(suffix)])
    return path
