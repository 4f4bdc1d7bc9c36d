"""Process-group aggregation of resident memory."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from check_proc_mem.deadline import Deadline
from check_proc_mem.models import AggregateResult, ProcessRecord
from check_proc_mem.snapshot import normalize_name

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GroupIndex:
    """Lookup tables over one snapshot, built once and read-only afterwards."""

    by_pid: dict[int, ProcessRecord]
    by_group: dict[int, set[int]]
    by_name: dict[str, set[int]]


def build_index(records: Iterable[ProcessRecord]) -> GroupIndex:
    """Index a snapshot by pid, process group id and name."""
    by_pid: dict[int, ProcessRecord] = {}
    by_group: defaultdict[int, set[int]] = defaultdict(set)
    by_name: defaultdict[str, set[int]] = defaultdict(set)

    for record in records:
        by_pid[record.pid] = record
        by_group[record.group_id].add(record.pid)
        by_name[record.name].add(record.pid)

    return GroupIndex(by_pid=by_pid, by_group=dict(by_group), by_name=dict(by_name))


def matching_groups(index: GroupIndex, target_names: Iterable[str]) -> set[int]:
    """
    Collect the group ids holding at least one process with a target name.

    Target names are normalized the same way as process names, so
    "php-fpm" matches "phpfpm". Group 0 (kernel threads, no session) is
    never a match.
    """
    groups: set[int] = set()
    for name in filter(None, map(normalize_name, target_names)):
        for pid in index.by_name.get(name, ()):
            group_id = index.by_pid[pid].group_id
            if group_id:
                groups.add(group_id)
    return groups


def aggregate(
    records: Iterable[ProcessRecord],
    target_names: Iterable[str],
    deadline: Deadline | None = None,
) -> AggregateResult:
    """
    Sum resident pages across every process in the matched groups.

    All members of a matched group count, whatever their own name, and
    each one is bucketed under its own name. Processes with no resident
    pages or an empty name are left out.
    """
    index = build_index(records)
    groups = matching_groups(index, target_names)

    grand_total = 0
    per_name_totals: defaultdict[str, int] = defaultdict(int)

    for group_id in sorted(groups):
        if deadline is not None:
            deadline.check()
        for pid in index.by_group[group_id]:
            record = index.by_pid[pid]
            if not record.resident_pages or not record.name:
                continue
            per_name_totals[record.name] += record.resident_pages
            grand_total += record.resident_pages

    logger.debug(
        "matched groups %s: %d pages over %d names",
        sorted(groups),
        grand_total,
        len(per_name_totals),
    )
    return AggregateResult(
        grand_total=grand_total,
        per_name_totals=dict(per_name_totals),
        matched_groups=frozenset(groups),
    )
