import os
from datetime import datetime, timedelta, timezone

import pytest

# Use in-memory sqlite for tests; must be set before runlab.core.config loads
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

START = datetime(2025, 1, 1, 7, 0, 0, tzinfo=timezone.utc)


def build_records(n, step=5, speed=2.0, hr=150, altitude=None, start=START):
    """Evenly spaced raw records. `hr` and `altitude` may be callables of
    the sample index."""
    records = []
    for i in range(n):
        records.append({
            "time": (start + timedelta(seconds=i * step)).isoformat(),
            "distance": i * step * speed,
            "hr": hr(i) if callable(hr) else hr,
            "altitude": altitude(i) if callable(altitude) else altitude,
        })
    return records


@pytest.fixture
def make_records():
    return build_records
