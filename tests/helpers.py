"""Builders for synthetic process data used across tests."""

from check_proc_mem.models import ProcessRecord


def stat_line(
    pid: int,
    comm: str,
    ppid: int = 1,
    pgrp: int | None = None,
    vsize: int = 0,
    rss: int = 0,
) -> str:
    """Build a /proc/<pid>/stat record with the given fields."""
    pgrp = pid if pgrp is None else pgrp
    return (
        f"{pid} ({comm}) S {ppid} {pgrp} {pgrp} 0 -1 4194560 100 0 0 0 0 0 0 0 "
        f"20 0 1 0 12345 {vsize} {rss} 18446744073709551615 1 1 0 0 0 0 0 0 0 "
        "0 0 0 17 0 0 0 0 0 0\n"
    )


def make_record(
    pid: int,
    name: str,
    group_id: int,
    resident_pages: int,
    parent_pid: int = 1,
    virtual_size_pages: int = 0,
) -> ProcessRecord:
    """Build a ProcessRecord with sensible defaults."""
    return ProcessRecord(
        pid=pid,
        name=name,
        parent_pid=parent_pid,
        group_id=group_id,
        virtual_size_pages=virtual_size_pages,
        resident_pages=resident_pages,
    )
