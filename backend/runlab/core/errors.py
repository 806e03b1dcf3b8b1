"""Errors raised by the analysis engine and the file adapters.

A derived metric whose preconditions are unmet is not an error; those
functions return ``None`` instead.
"""


class RunlabError(Exception):
    """Base class for all runlab errors."""


class NoValidSamples(RunlabError):
    """Ingestion found no usable track samples."""


class InvalidConfiguration(RunlabError, ValueError):
    """Athlete settings violate their invariants."""


class UnsupportedFormat(RunlabError, ValueError):
    """The activity file type is not one we can read."""


class TraceParseError(RunlabError, ValueError):
    """The activity file could not be decoded."""
