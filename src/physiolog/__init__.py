"""
physiolog: reader for CMRR physiological log files

Decodes the _Info, _ECG, _RESP, _PULS and _EXT logs written by CMRR
multiband sequences into time-aligned per-tick arrays.
"""

from typing import Any

__all__ = ["SessionResult", "read_physio"]


def __getattr__(name: str) -> Any:
    """Lazy load the session API to keep `import physiolog` light."""
    if name in __all__:
        from physiolog import session

        return getattr(session, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
