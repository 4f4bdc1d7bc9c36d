"""Process table snapshot for check_proc_mem."""

import logging
import os
import re
from pathlib import Path

import psutil

from check_proc_mem.deadline import Deadline
from check_proc_mem.errors import ProcTableError
from check_proc_mem.models import ProcessRecord, SnapshotSource

logger = logging.getLogger(__name__)

# Positions in /proc/<pid>/stat, counted from the state field that follows comm
_PPID = 1
_PGRP = 2
_VSIZE = 20
_RSS = 21

_NON_WORD = re.compile(r"\W+")


def get_page_size() -> int:
    """
    Return the memory page size in bytes.

    Raises ProcTableError if the system does not report a positive integer.
    """
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
    except (ValueError, OSError) as e:
        raise ProcTableError("unknown pagesize") from e
    if not isinstance(page_size, int) or page_size <= 0:
        raise ProcTableError("unknown pagesize")
    return page_size


def normalize_name(raw: str) -> str:
    """
    Strip all non-word characters from a command name.

    The kernel wraps comm in parentheses and may include spaces or
    punctuation; only letters, digits and underscores are kept, so
    "(kworker/0:1)" becomes "kworker01".
    """
    return _NON_WORD.sub("", raw)


def parse_stat_line(line: str, page_size: int) -> ProcessRecord:
    """
    Parse one /proc/<pid>/stat record.

    comm is taken between the first "(" and the last ")" so names with
    spaces keep the remaining fields at their positions. vsize is reported
    in bytes and converted to pages; rss is already in pages.

    Raises ValueError on a truncated or non-numeric record.
    """
    head, sep, tail = line.rpartition(")")
    pid_field, open_paren, comm = head.partition("(")
    if not sep or not open_paren:
        raise ValueError(f"malformed stat record: {line!r}")

    fields = tail.split()
    if len(fields) <= _RSS:
        raise ValueError(f"truncated stat record: {line!r}")

    return ProcessRecord(
        pid=int(pid_field),
        name=normalize_name(comm),
        parent_pid=int(fields[_PPID]),
        group_id=int(fields[_PGRP]),
        virtual_size_pages=int(fields[_VSIZE]) // page_size,
        resident_pages=max(int(fields[_RSS]), 0),
    )


def read_snapshot(
    proc_root: str | Path = psutil.PROCFS_PATH,
    page_size: int | None = None,
    deadline: Deadline | None = None,
) -> list[ProcessRecord]:
    """
    Read every process from a procfs tree.

    Handles processes that exit between listing and reading by skipping
    them. Failing to list proc_root itself is fatal.

    Args:
        proc_root: procfs mount point.
        page_size: Bytes per page; read from the system when omitted.
        deadline: Watchdog checked once per pid.
    """
    root = Path(proc_root)
    if page_size is None:
        page_size = get_page_size()

    try:
        entries = sorted(
            (entry.name for entry in os.scandir(root) if entry.name.isdecimal()),
            key=int,
        )
    except OSError as e:
        raise ProcTableError(f"unable to read {root}") from e

    records: list[ProcessRecord] = []
    for pid in entries:
        if deadline is not None:
            deadline.check()
        try:
            with open(root / pid / "stat", encoding="utf-8", errors="replace") as stat:
                line = stat.readline()
            records.append(parse_stat_line(line, page_size))
        except (OSError, ValueError) as e:
            # Process exited mid-scan or left a partial record
            logger.debug("skipping pid %s: %s", pid, e)
            continue

    logger.debug("read %d processes from %s", len(records), root)
    return records


def read_psutil_snapshot(
    page_size: int | None = None,
    deadline: Deadline | None = None,
) -> list[ProcessRecord]:
    """
    Read every process through psutil.

    Used where no procfs is mounted. Uses psutil.process_iter() with
    pre-fetched attributes; byte counts are converted to pages.
    Handles NoSuchProcess, AccessDenied and ZombieProcess by skipping.
    """
    if page_size is None:
        page_size = get_page_size()

    records: list[ProcessRecord] = []

    for proc in psutil.process_iter(attrs=["pid", "name", "ppid", "memory_info"]):
        if deadline is not None:
            deadline.check()
        try:
            info = proc.info
            if info["pid"] <= 0:
                continue
            mem_info = info.get("memory_info")
            records.append(
                ProcessRecord(
                    pid=info["pid"],
                    name=normalize_name(info.get("name") or ""),
                    parent_pid=info.get("ppid") or 0,
                    group_id=os.getpgid(info["pid"]),
                    virtual_size_pages=mem_info.vms // page_size if mem_info else 0,
                    resident_pages=mem_info.rss // page_size if mem_info else 0,
                )
            )
        except (
            psutil.NoSuchProcess,
            psutil.AccessDenied,
            psutil.ZombieProcess,
            ProcessLookupError,
            PermissionError,
        ) as e:
            logger.debug("skipping pid %s: %s", proc.pid, e)
            continue

    return records


def take_snapshot(
    source: SnapshotSource,
    page_size: int,
    deadline: Deadline | None = None,
    proc_root: str | Path = psutil.PROCFS_PATH,
) -> list[ProcessRecord]:
    """Read the process table from the configured source."""
    if source is SnapshotSource.PSUTIL:
        return read_psutil_snapshot(page_size, deadline)
    return read_snapshot(proc_root, page_size, deadline)
