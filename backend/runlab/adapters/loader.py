import os

from loguru import logger

from runlab.adapters.fit import parse_fit
from runlab.adapters.gpx import parse_gpx
from runlab.adapters.tcx import parse_tcx
from runlab.core.errors import UnsupportedFormat

READERS = {
    ".tcx": parse_tcx,
    ".gpx": parse_gpx,
    ".fit": parse_fit,
}


def load_records(data: bytes, filename: str) -> list[dict]:
    """Decode an activity file into raw sample records, picked by extension."""
    ext = os.path.splitext(filename or "")[1].lower()
    reader = READERS.get(ext)
    if reader is None:
        raise UnsupportedFormat(
            f"Unsupported file format. Expected .tcx, .gpx or .fit, got: {filename}"
        )
    records = reader(data)
    logger.debug(f"Read {len(records)} raw records from {filename}")
    return records


def trace_name(filename: str) -> str:
    base = os.path.basename(filename or "")
    return os.path.splitext(base)[0] or "Activity"
