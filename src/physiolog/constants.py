"""
Constants for CMRR physiological log files.

Based on the EJA_1 log format written by the CMRR multiband sequences
(>= R013, >= VD13A).
"""

from pathlib import Path

# ============================================================================
# Log Format
# ============================================================================

# Only log files declaring this version are accepted
EXPECTED_LOG_VERSION = "EJA_1"

# Clock resolution of every timestamp in the logs
TICK_DURATION_MS = 2.5

# Worst case: an EXT sample at the last timestamp runs past LastTime
SAMPLE_PADDING = 8

# ============================================================================
# Companion Files
# ============================================================================

INFO_SUFFIX = "_Info.log"
ECG_SUFFIX = "_ECG.log"
RESP_SUFFIX = "_RESP.log"
PULS_SUFFIX = "_PULS.log"
EXT_SUFFIX = "_EXT.log"

# Read order matters: the Info file supplies the time base for the others
LOG_FILE_SUFFIXES = {
    "ACQUISITION_INFO": INFO_SUFFIX,
    "ECG": ECG_SUFFIX,
    "RESP": RESP_SUFFIX,
    "PULS": PULS_SUFFIX,
    "EXT": EXT_SUFFIX,
}

# ============================================================================
# Header Keys
# ============================================================================

KEY_LOG_VERSION = "LogVersion"
KEY_LOG_DATA_TYPE = "LogDataType"
KEY_UUID = "UUID"
KEY_SAMPLE_TIME = "SampleTime"
KEY_NUM_SLICES = "NumSlices"
KEY_NUM_VOLUMES = "NumVolumes"
KEY_FIRST_TIME = "FirstTime"
KEY_LAST_TIME = "LastTime"

COMMON_HEADER_KEYS = (KEY_LOG_VERSION, KEY_LOG_DATA_TYPE, KEY_UUID)
ACQUISITION_HEADER_KEYS = (
    KEY_NUM_SLICES,
    KEY_NUM_VOLUMES,
    KEY_FIRST_TIME,
    KEY_LAST_TIME,
)
SIGNAL_HEADER_KEYS = (KEY_SAMPLE_TIME,)

# ============================================================================
# Channels
# ============================================================================

ECG_CHANNELS = ("ECG1", "ECG2", "ECG3", "ECG4")
RESP_CHANNELS = ("RESP",)
PULS_CHANNELS = ("PULS",)
EXT_CHANNELS = ("EXT", "EXT2")

# Order in which active channels appear in a session result
CHANNEL_ORDER = ECG_CHANNELS + RESP_CHANNELS + PULS_CHANNELS + EXT_CHANNELS

# Timing map edges (first axis of the slice map)
EDGE_START = 0
EDGE_STOP = 1

# ============================================================================
# Defaults
# ============================================================================

DEFAULT_CONFIG_DIR = Path.home() / ".physiolog"
DEFAULT_CONFIG_FILE = "config.toml"

DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / "logs"
DEFAULT_LOG_FILE = "physiolog.log"
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_LOG_BACKUP_COUNT = 5
