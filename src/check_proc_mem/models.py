"""Data models for check_proc_mem."""

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from check_proc_mem.errors import ConfigurationError
from check_proc_mem.units import validate_unit


class Status(IntEnum):
    """Plugin status; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class Alert(Enum):
    """Outcome of evaluating one threshold spec."""

    PASS = "pass"
    ALERT = "alert"
    MALFORMED = "malformed"


class SnapshotSource(str, Enum):
    """Where the process table is read from."""

    PROCFS = "procfs"
    PSUTIL = "psutil"


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable record of one live process."""

    pid: int
    name: str  # normalized, non-word characters stripped
    parent_pid: int
    group_id: int
    virtual_size_pages: int
    resident_pages: int


@dataclass(slots=True)
class AggregateResult:
    """Resident pages summed over the matched process groups."""

    grand_total: int
    per_name_totals: dict[str, int]
    matched_groups: frozenset[int] = field(default_factory=frozenset)

    def sorted_totals(self) -> list[tuple[str, int]]:
        """Per-name totals ordered by name."""
        return sorted(self.per_name_totals.items())


@dataclass(slots=True, frozen=True)
class ProbeConfig:
    """Validated configuration for a single check run."""

    proc_names: tuple[str, ...]
    warning: str | None = None
    critical: str | None = None
    timeout: int = 10
    unit: str = "KB"
    verbose: bool = False
    source: SnapshotSource = SnapshotSource.PROCFS

    @classmethod
    def from_options(
        cls,
        proc_names: list[str] | None,
        warning: str | None = None,
        critical: str | None = None,
        timeout: int = 10,
        unit: str = "KB",
        verbose: bool = False,
        source: SnapshotSource = SnapshotSource.PROCFS,
    ) -> "ProbeConfig":
        """
        Build a config from raw option values.

        Names may be repeated and/or comma-joined. Raises ConfigurationError
        when no name is left after splitting, the unit is unknown or the
        timeout is negative.
        """
        names = tuple(
            name
            for name in re.split(r"\s*,\s*", ",".join(proc_names or []))
            if name
        )
        if not names:
            raise ConfigurationError("proc-name required")
        validate_unit(unit)
        if timeout < 0:
            raise ConfigurationError(f"invalid timeout: {timeout}")

        return cls(
            proc_names=names,
            warning=warning,
            critical=critical,
            timeout=timeout,
            unit=unit,
            verbose=verbose,
            source=source,
        )


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Final outcome of a run: status, plugin line and verbose diagnostics."""

    status: Status
    line: str
    details: list[str] = field(default_factory=list)
