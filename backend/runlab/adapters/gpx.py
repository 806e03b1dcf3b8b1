import gpxpy
import gpxpy.gpx

from runlab.core.errors import TraceParseError
from runlab.core.math_utils import haversine


def _extension_hr(point):
    # Garmin TrackPointExtension: <gpxtpx:TrackPointExtension><gpxtpx:hr>
    for ext in point.extensions:
        for el in ext.iter():
            tag = el.tag.rsplit("}", 1)[-1] if isinstance(el.tag, str) else ""
            if tag == "hr" and el.text:
                return el.text.strip()
    return None


def parse_gpx(data: bytes) -> list[dict]:
    """Parse a GPX file into raw track records.

    GPX carries no cumulative distance, so it is accumulated point to point
    with the haversine formula across all tracks and segments.
    """
    try:
        gpx = gpxpy.parse(data.decode("utf-8"))
    except (gpxpy.gpx.GPXException, UnicodeDecodeError) as e:
        raise TraceParseError(f"Failed to parse GPX file: {e}") from e

    records = []
    total_m = 0.0
    last = None

    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                if last is not None:
                    total_m += haversine(last[0], last[1], p.latitude, p.longitude)
                last = (p.latitude, p.longitude)
                records.append({
                    "time": p.time.isoformat() if p.time else None,
                    "lat": p.latitude,
                    "lng": p.longitude,
                    "altitude": p.elevation,
                    "distance": total_m,
                    "hr": _extension_hr(p),
                })
    return records
