import os

import pytest

from unitvisor.cgroups import cgroup2
from unitvisor.cgroups.errors import CgroupIOError


@pytest.fixture
def group(tmp_path):
    (tmp_path / "cgroup.procs").write_text("")
    (tmp_path / "cgroup.freeze").write_text("0")
    (tmp_path / "cgroup.subtree_control").write_text("")
    (tmp_path / "cgroup.controllers").write_text("cpu\nmemory\n")
    return tmp_path


def test_move_pid_writes_pid(group):
    cgroup2.move_pid_to_cgroup(group, 77)
    assert (group / "cgroup.procs").read_text() == "77"


def test_move_self_writes_own_pid(group):
    cgroup2.move_self_to_cgroup(group)
    assert (group / "cgroup.procs").read_text() == str(os.getpid())


def test_available_controllers_split_on_lines(group):
    assert cgroup2.get_available_controllers(group) == ["cpu", "memory", ""]


def test_available_controllers_missing_file(tmp_path):
    with pytest.raises(CgroupIOError):
        cgroup2.get_available_controllers(tmp_path)


def test_enable_controllers(group):
    cgroup2.enable_controllers(group, ["cpu", "io"])
    assert (group / "cgroup.subtree_control").read_text() == " +cpu +io"


def test_disable_controllers(group):
    cgroup2.disable_controllers(group, ["cpu", "io"])
    assert (group / "cgroup.subtree_control").read_text() == " -cpu -io"


def test_controllers_without_subtree_file(tmp_path):
    with pytest.raises(CgroupIOError) as info:
        cgroup2.enable_controllers(tmp_path, ["cpu"])
    assert info.value.path == str(tmp_path / "cgroup.subtree_control")


def test_freeze_and_thaw(group):
    cgroup2.freeze(group)
    assert (group / "cgroup.freeze").read_text() == "1"
    cgroup2.thaw(group)
    assert (group / "cgroup.freeze").read_text() == "0"


def test_freeze_without_freeze_file(tmp_path):
    with pytest.raises(CgroupIOError) as info:
        cgroup2.freeze(tmp_path)
    assert isinstance(info.value.error, FileNotFoundError)


def test_wait_frozen(group):
    cgroup2.wait_frozen(group)
    assert (group / "cgroup.freeze").read_text() == "1"