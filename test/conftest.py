import shlex
import subprocess
from types import SimpleNamespace

import pytest

from ferramentas import config, runner
from ferramentas.errors import CommandError
from ferramentas.logger import attach_log_file, get_logger, setup_logging

SWAPS_HEADER = "Filename\t\t\t\tType\t\tSize\t\tUsed\t\tPriority\n"


class CommandRecorder:
    """Stands in for runner.run_command; records argv lists instead of running them."""

    def __init__(self):
        self.calls = []
        self.failures = {}
        self.side_effects = {}

    def __call__(self, cmd, check=True):
        self.calls.append(list(cmd))
        effect = self.side_effects.get(cmd[0])
        if effect:
            effect(cmd)
        returncode = self.failures.get(cmd[0], 0)
        if returncode and check:
            raise CommandError(shlex.join(cmd), returncode, "simulated failure")
        return subprocess.CompletedProcess(cmd, returncode, "", "")

    def commands(self):
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def commands(monkeypatch):
    recorder = CommandRecorder()
    monkeypatch.setattr(runner, "run_command", recorder)
    return recorder


@pytest.fixture
def system_paths(tmp_path, monkeypatch):
    """Redirects every file the tool touches into tmp_path."""
    etc = tmp_path / "etc"
    (etc / "default").mkdir(parents=True)
    (etc / "systemd" / "system").mkdir(parents=True)
    zram_sysfs = tmp_path / "sys" / "block" / "zram0"
    zram_sysfs.mkdir(parents=True)
    proc_vm = tmp_path / "proc" / "sys" / "vm"
    proc_vm.mkdir(parents=True)

    paths = SimpleNamespace(
        sysctl_conf=etc / "sysctl.conf",
        fstab=etc / "fstab",
        grub=etc / "default" / "grub",
        zram_service=etc / "systemd" / "system" / "zram.service",
        zram_device=tmp_path / "dev" / "zram0",
        zram_sysfs=zram_sysfs,
        zswap_parameters=tmp_path / "sys" / "module" / "zswap" / "parameters",
        proc_vm=proc_vm,
        proc_swaps=tmp_path / "proc" / "swaps",
        config_dir=etc / "swap-manager",
        log_file=tmp_path / "log" / "swap-manager.log",
    )
    paths.config_file = paths.config_dir / "config.conf"

    paths.sysctl_conf.write_text("# kernel settings\nnet.ipv4.ip_forward=1\n")
    paths.fstab.write_text("UUID=abcd / ext4 defaults 0 1\n")
    paths.grub.write_text('GRUB_DEFAULT=0\nGRUB_CMDLINE_LINUX_DEFAULT="quiet"\nGRUB_CMDLINE_LINUX="splash"\n')
    paths.proc_swaps.write_text(SWAPS_HEADER)
    for name, value in (("swappiness", "60"), ("vfs_cache_pressure", "100"),
                        ("dirty_ratio", "20"), ("dirty_background_ratio", "10")):
        (proc_vm / name).write_text(value + "\n")

    monkeypatch.setattr(config, "SYSCTL_CONF", str(paths.sysctl_conf))
    monkeypatch.setattr(config, "FSTAB", str(paths.fstab))
    monkeypatch.setattr(config, "GRUB_DEFAULT", str(paths.grub))
    monkeypatch.setattr(config, "ZRAM_SERVICE", str(paths.zram_service))
    monkeypatch.setattr(config, "ZRAM_DEVICE", str(paths.zram_device))
    monkeypatch.setattr(config, "ZRAM_SYSFS", str(paths.zram_sysfs))
    monkeypatch.setattr(config, "ZSWAP_PARAMETERS", str(paths.zswap_parameters))
    monkeypatch.setattr(config, "PROC_SYS_VM", str(paths.proc_vm))
    monkeypatch.setattr(config, "PROC_SWAPS", str(paths.proc_swaps))
    monkeypatch.setattr(config, "CONFIG_DIR", str(paths.config_dir))
    monkeypatch.setattr(config, "CONFIG_FILE", str(paths.config_file))
    monkeypatch.setattr(config, "LOG_FILE", str(paths.log_file))
    return paths


@pytest.fixture
def log_file(tmp_path):
    setup_logging(debug=True)
    path = tmp_path / "test.log"
    handler = attach_log_file(str(path))
    yield path
    get_logger().removeHandler(handler)
    handler.close()


@pytest.fixture
def active_swap(system_paths):
    """Adds a line to the fake /proc/swaps."""
    def add(name, kind="file", size=524284, used=0, priority=-2):
        with open(system_paths.proc_swaps, "a") as f:
            f.write(f"{name}\t{kind}\t{size}\t{used}\t{priority}\n")
    return add


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
