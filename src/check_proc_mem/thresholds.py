"""Threshold range evaluation (Nagios plugin range grammar, integer bounds)."""

import re

from check_proc_mem.deadline import Deadline
from check_proc_mem.errors import MalformedThresholdError
from check_proc_mem.models import Alert, Status

_UPPER = re.compile(r"([0-9]+)")
_LOWER = re.compile(r"([0-9]+):")
_UNBOUNDED_LOWER = re.compile(r"~:([0-9]+)")
_INSIDE = re.compile(r"([0-9]+):([0-9]+)")
_OUTSIDE = re.compile(r"@([0-9]+):([0-9]+)")


def evaluate(spec: str, value: float) -> Alert:
    """
    Classify value against a threshold spec.

    The first matching form decides:

        N       alert if value < 0 or value > N
        N:      alert if value < N
        ~:N     alert if value > N
        N:M     alert if value < N or value > M
        @N:M    alert if N <= value <= M

    Anything else is MALFORMED.
    """
    if match := _UPPER.fullmatch(spec):
        alert = value < 0 or value > int(match[1])
    elif match := _LOWER.fullmatch(spec):
        alert = value < int(match[1])
    elif match := _UNBOUNDED_LOWER.fullmatch(spec):
        alert = value > int(match[1])
    elif match := _INSIDE.fullmatch(spec):
        alert = value < int(match[1]) or value > int(match[2])
    elif match := _OUTSIDE.fullmatch(spec):
        alert = int(match[1]) <= value <= int(match[2])
    else:
        return Alert.MALFORMED
    return Alert.ALERT if alert else Alert.PASS


def check_thresholds(
    value: float,
    warning: str | None = None,
    critical: str | None = None,
    deadline: Deadline | None = None,
) -> Status:
    """
    Combine warning and critical outcomes into a status.

    A missing spec is never evaluated. A malformed spec at either level
    raises MalformedThresholdError regardless of the value.
    """
    if deadline is not None:
        deadline.check()

    warn_alert = evaluate(warning, value) if warning else None
    crit_alert = evaluate(critical, value) if critical else None

    if warn_alert is Alert.MALFORMED:
        raise MalformedThresholdError("malformed warning")
    if crit_alert is Alert.MALFORMED:
        raise MalformedThresholdError("malformed critical")

    if crit_alert is Alert.ALERT:
        return Status.CRITICAL
    if warn_alert is Alert.ALERT:
        return Status.WARNING
    return Status.OK
