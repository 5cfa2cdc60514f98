import os

import pytest

from unitvisor.cgroups import cgroup1
from unitvisor.cgroups.errors import CgroupIOError


@pytest.fixture
def group(tmp_path):
    (tmp_path / "cgroup.procs").write_text("")
    (tmp_path / "freezer.state").write_text("THAWED")
    return tmp_path


def test_move_pid_writes_pid(group):
    cgroup1.move_pid_to_cgroup(group, 4242)
    assert (group / "cgroup.procs").read_text() == "4242"


def test_move_self_writes_own_pid(group):
    cgroup1.move_self_to_cgroup(group)
    assert (group / "cgroup.procs").read_text() == str(os.getpid())


def test_move_pid_without_procs_file(tmp_path):
    with pytest.raises(CgroupIOError) as info:
        cgroup1.move_pid_to_cgroup(tmp_path, 1)
    assert info.value.path == str(tmp_path / "cgroup.procs")


def test_freeze_then_thaw(group):
    cgroup1.freeze(group)
    assert (group / "freezer.state").read_text() == "FROZEN"
    cgroup1.thaw(group)
    assert (group / "freezer.state").read_text() == "THAWED"


def test_freeze_without_state_file(tmp_path):
    with pytest.raises(CgroupIOError) as info:
        cgroup1.freeze(tmp_path)
    assert isinstance(info.value.error, FileNotFoundError)


def test_wait_frozen_returns_once_frozen(group):
    cgroup1.wait_frozen(group)
    assert (group / "freezer.state").read_text() == "FROZEN"


def test_wait_frozen_without_state_file(tmp_path):
    with pytest.raises(CgroupIOError):
        cgroup1.wait_frozen(tmp_path)