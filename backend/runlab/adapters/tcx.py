"""Garmin TCX reader.

Element lookups ignore namespaces since exporters disagree on the default
TrainingCenterDatabase namespace version.
"""
from lxml import etree

from runlab.core.errors import TraceParseError


def _text(elem, path: str):
    found = elem.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip()


def parse_tcx(data: bytes) -> list[dict]:
    """Return one raw record per Trackpoint, values left as text."""
    try:
        root = etree.fromstring(data.lstrip())
    except (etree.XMLSyntaxError, ValueError) as e:
        raise TraceParseError(f"Failed to parse TCX file: {e}") from e

    records = []
    for tp in root.iter("{*}Trackpoint"):
        records.append({
            "time": _text(tp, "{*}Time"),
            "lat": _text(tp, ".//{*}LatitudeDegrees"),
            "lng": _text(tp, ".//{*}LongitudeDegrees"),
            "altitude": _text(tp, "{*}AltitudeMeters"),
            "distance": _text(tp, "{*}DistanceMeters"),
            "hr": _text(tp, "{*}HeartRateBpm/{*}Value"),
        })
    return records
