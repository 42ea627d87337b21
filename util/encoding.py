"""
Log file decoding.

Application logs are commonly written in SHIFT_JIS. The correlation engine
only ever sees decoded ``str``; this module does the byte-level work for the
command line viewer.
"""
from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

SUPPORTED_ENCODINGS = ("SHIFT_JIS", "UTF-8", "UTF-16", "EUC-JP")
DEFAULT_ENCODING = "SHIFT_JIS"


def resolve_codec(label: str) -> str:
    """Return the Python codec name for an encoding label, or 'utf-8' if unknown."""
    try:
        return codecs.lookup(label.strip()).name
    except (LookupError, AttributeError):
        logger.debug("Unknown encoding label %r, falling back to UTF-8", label)
        return "utf-8"


def decode_bytes(data: bytes, label: str = DEFAULT_ENCODING) -> str:
    """Decode bytes with the given encoding label; undecodable bytes are replaced."""
    codec = resolve_codec(label)
    if codec == "utf-8":
        # a leading BOM would hide the timestamp on the first line
        codec = "utf-8-sig"
    return data.decode(codec, errors="replace")


def read_log_text(path: Union[str, Path], label: str = DEFAULT_ENCODING) -> str:
    """
    Read a log file and decode it.

    Raises:
        OSError: if the file cannot be read
    """
    data = Path(path).read_bytes()
    return decode_bytes(data, label)
