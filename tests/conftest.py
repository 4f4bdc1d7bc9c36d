"""Shared fixtures for check_proc_mem tests."""

from pathlib import Path

import pytest
from helpers import make_record, stat_line

from check_proc_mem.models import ProcessRecord


class FakeClock:
    """Manually advanced clock for Deadline tests."""

    def __init__(self, now: float = 0.0) -> None:
        """Start the clock at now."""
        self.now = now

    def __call__(self) -> float:
        """Return the current fake time."""
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at 0, advanced by setting .now."""
    return FakeClock()


@pytest.fixture
def httpd_records() -> list[ProcessRecord]:
    """Two httpd processes and a worker in group 100, plus an unrelated sshd."""
    return [
        make_record(101, "httpd", 100, 50),
        make_record(102, "httpd", 100, 30, parent_pid=101),
        make_record(103, "worker", 100, 20, parent_pid=101),
        make_record(200, "sshd", 200, 70),
    ]


@pytest.fixture
def fake_proc(tmp_path: Path):
    """Factory writing stat records into a temporary procfs tree."""
    root = tmp_path / "proc"
    root.mkdir()

    def add(pid: int, comm: str, **fields) -> Path:
        pid_dir = root / str(pid)
        pid_dir.mkdir()
        (pid_dir / "stat").write_text(stat_line(pid, comm, **fields))
        return pid_dir

    add.root = root
    return add
