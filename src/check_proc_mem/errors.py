"""Exceptions raised by check_proc_mem.

Every fatal condition is a ProbeError; the command line turns it into an
``UNKNOWN ERROR:`` line and exit code 3.
"""


class ProbeError(Exception):
    """Base class for errors that abort a check run."""

    def __init__(self, message: str) -> None:
        """Keep the message for the UNKNOWN ERROR line."""
        super().__init__(message)
        self.message = message


class ConfigurationError(ProbeError):
    """Invalid command-line configuration (no process name, unknown unit)."""


class ProcTableError(ProbeError):
    """The process table or the page size could not be read."""


class ProbeTimeout(ProbeError):
    """The watchdog deadline expired before the run finished."""


class EmptyMeasurementError(ProbeError):
    """No resident pages were found for the target processes."""


class MalformedThresholdError(ProbeError):
    """A warning or critical threshold does not match the range grammar."""
