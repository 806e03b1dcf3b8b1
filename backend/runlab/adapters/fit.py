import io

from fitparse import FitFile, FitParseError

from runlab.core.errors import TraceParseError
from runlab.core.math_utils import semicircles_to_degrees


def parse_fit(data: bytes) -> list[dict]:
    """Read FIT `record` messages into raw track records."""
    records = []
    try:
        ff = FitFile(io.BytesIO(data))
        for record in ff.get_messages("record"):
            fields = {f.name: f.value for f in record}
            # Prefer enhanced fields when present
            ele = fields.get("enhanced_altitude")
            if ele is None:
                ele = fields.get("altitude")
            records.append({
                "time": fields.get("timestamp"),
                "lat": semicircles_to_degrees(fields.get("position_lat")),
                "lng": semicircles_to_degrees(fields.get("position_long")),
                "altitude": ele,
                "distance": fields.get("distance"),
                "hr": fields.get("heart_rate"),
            })
    except FitParseError as e:
        raise TraceParseError(f"Failed to parse FIT file: {e}") from e
    return records
