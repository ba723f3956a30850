import os

import pytest

import swap_manager
from ferramentas import zram


@pytest.fixture
def answers(monkeypatch):
    """Feeds input() from a list; running out behaves like a closed stdin."""
    queue = []

    def fake_input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return queue


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr(swap_manager.os, "geteuid", lambda: 0)


def test_invalid_option_redisplays_menu(answers, commands, system_paths, log_file, capsys):
    answers.extend(["9z", "6"])

    assert swap_manager.main_menu() == 0

    assert capsys.readouterr().out.count("SWAP MANAGEMENT SYSTEM") == 2
    log = log_file.read_text()
    assert "[ERROR] Invalid option" in log
    assert "[INFO] Exiting" in log
    assert commands.calls == []


def test_validation_error_returns_to_menu(answers, commands, system_paths, log_file, monkeypatch):
    monkeypatch.setattr(zram, "suggested_size", lambda: "1024M")
    answers.extend(["2a", "abc", "", "6"])

    assert swap_manager.main_menu() == 0

    assert "[ERROR] Invalid size format" in log_file.read_text()
    assert commands.calls == []


def test_preset_option_dispatches(answers, commands, system_paths, log_file):
    answers.extend(["1b", "6"])

    swap_manager.main_menu()

    assert ["sysctl", "-w", "vm.swappiness=60"] in commands.calls
    assert "System parameters configured with mode: moderate" in log_file.read_text()


def test_custom_settings_option(answers, commands, system_paths, log_file):
    answers.extend(["1d", "35", "120", "30", "15", "6"])

    swap_manager.main_menu()

    assert "vm.vfs_cache_pressure=120\n" in system_paths.sysctl_conf.read_text()
    assert "mode: custom" in log_file.read_text()


def test_custom_settings_reject_partial_input(answers, commands, system_paths, log_file):
    answers.extend(["1d", "35", "120", "x", "15", "6"])

    swap_manager.main_menu()

    assert commands.calls == []
    assert "Dirty ratio must be an integer" in log_file.read_text()


def test_disk_swap_options(answers, commands, system_paths, tmp_path, log_file):
    location = str(tmp_path / "swapfile")
    commands.side_effects["fallocate"] = lambda cmd: open(cmd[-1], "w").close()
    answers.extend(["4a", "file", location, "64M", "4b", location, "6"])

    swap_manager.main_menu()

    assert not os.path.exists(location)
    assert location not in system_paths.fstab.read_text()


def test_zswap_enable_uses_defaults_on_empty_answers(answers, commands, system_paths, log_file, monkeypatch):
    monkeypatch.setattr(swap_manager.menu_swap.zswap.shutil, "which", lambda name: "/usr/sbin/update-grub")
    answers.extend(["3a", "", "", "", "6"])

    swap_manager.main_menu()

    assert "zswap.compressor=lz4 zswap.max_pool_percent=50 zswap.zpool=z3fold" in system_paths.grub.read_text()


def test_status_option(answers, system_paths, log_file, capsys):
    answers.extend(["5", "6"])

    swap_manager.main_menu()

    assert "ZRAM: Disabled" in capsys.readouterr().out


def test_main_requires_root(monkeypatch, system_paths):
    monkeypatch.setattr(swap_manager.os, "geteuid", lambda: 1000)

    assert swap_manager.main() == 1
    assert not system_paths.log_file.exists()
    assert not system_paths.config_dir.exists()


def test_main_exits_with_command_status(as_root, answers, commands, system_paths):
    commands.failures["sysctl"] = 4
    answers.extend(["1a"])

    assert swap_manager.main() == 4

    log = system_paths.log_file.read_text()
    assert "[ERROR] Error (code: 4) occurred at sysctl_params.py:" in log
    assert "(apply_tunables)" in log
    assert system_paths.config_dir.is_dir()
    assert oct(os.stat(system_paths.log_file).st_mode & 0o777) == oct(0o640)


def test_main_normal_exit(as_root, answers, system_paths):
    answers.extend(["6"])
    assert swap_manager.main() == 0
    assert "[INFO] Exiting" in system_paths.log_file.read_text()


def test_main_end_of_input(as_root, answers, system_paths):
    assert swap_manager.main() == 0


def test_main_interrupted(as_root, system_paths, monkeypatch):
    def interrupt(prompt=""):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupt)
    assert swap_manager.main() == 130
    assert "Interrupted by user" in system_paths.log_file.read_text()
