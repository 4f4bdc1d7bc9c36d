"""Single-pass check pipeline: snapshot, aggregate, evaluate, render."""

import logging
from collections.abc import Sequence
from pathlib import Path

import psutil

from check_proc_mem.aggregate import aggregate
from check_proc_mem.deadline import Deadline
from check_proc_mem.errors import EmptyMeasurementError
from check_proc_mem.models import CheckResult, ProbeConfig, ProcessRecord
from check_proc_mem.report import render, render_verbose
from check_proc_mem.snapshot import take_snapshot
from check_proc_mem.thresholds import check_thresholds
from check_proc_mem.units import convert

logger = logging.getLogger(__name__)


def run_check(
    config: ProbeConfig,
    *,
    page_size: int,
    deadline: Deadline | None = None,
    records: Sequence[ProcessRecord] | None = None,
    proc_root: str | Path = psutil.PROCFS_PATH,
) -> CheckResult:
    """
    Run one check and return its result.

    Args:
        config: Validated configuration.
        page_size: Bytes per memory page.
        deadline: Watchdog shared by every phase.
        records: Pre-read snapshot; the process table is read when omitted.
        proc_root: procfs mount point for the procfs source.

    Raises:
        ProbeError: On any condition that must be reported as UNKNOWN.
    """
    if records is None:
        records = take_snapshot(config.source, page_size, deadline, proc_root)

    result = aggregate(records, config.proc_names, deadline)
    if not result.grand_total:
        raise EmptyMeasurementError(f"procs not found: {' '.join(config.proc_names)}")

    # Thresholds compare against the byte-scaled total, without the bit multiplier
    value = convert(result.grand_total, page_size, config.unit, bits=False)
    status = check_thresholds(value, config.warning, config.critical, deadline)
    logger.debug("total %s %s -> %s", value, config.unit, status.name)

    return CheckResult(
        status=status,
        line=render(
            result, page_size, config.unit, status, config.warning, config.critical
        ),
        details=render_verbose(result, page_size, config.unit) if config.verbose else [],
    )
