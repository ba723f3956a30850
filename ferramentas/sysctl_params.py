#!/usr/bin/env python3
import os
from collections import namedtuple

from ferramentas import config, conf_files, runner
from ferramentas.errors import ValidationError
from ferramentas.logger import get_logger
from ferramentas.validators import validate_int

logger = get_logger()

TunableSet = namedtuple("TunableSet", ["swappiness", "cache_pressure", "dirty_ratio", "dirty_bg_ratio"])

# Field -> (sysctl key, label, min, max)
TUNABLES = {
    "swappiness": ("vm.swappiness", "Swappiness", 0, 100),
    "cache_pressure": ("vm.vfs_cache_pressure", "Cache pressure", 0, 200),
    "dirty_ratio": ("vm.dirty_ratio", "Dirty ratio", 0, 100),
    "dirty_bg_ratio": ("vm.dirty_background_ratio", "Dirty background ratio", 0, 100),
}

PRESETS = {
    "aggressive": TunableSet(swappiness=100, cache_pressure=200, dirty_ratio=5, dirty_bg_ratio=3),
    "moderate": TunableSet(swappiness=60, cache_pressure=100, dirty_ratio=20, dirty_bg_ratio=10),
    "conservative": TunableSet(swappiness=10, cache_pressure=50, dirty_ratio=40, dirty_bg_ratio=20),
}


def get_preset(name):
    """Returns the TunableSet of a named preset."""
    try:
        return PRESETS[name]
    except KeyError:
        raise ValidationError(f"Unknown preset '{name}'. Choose one of: {', '.join(PRESETS)}")


def build_tunables(swappiness, cache_pressure, dirty_ratio, dirty_bg_ratio):
    """Validates four user-supplied values and returns a TunableSet."""
    raw = TunableSet(swappiness, cache_pressure, dirty_ratio, dirty_bg_ratio)
    values = {}
    for field, value in raw._asdict().items():
        _, label, minimum, maximum = TUNABLES[field]
        values[field] = validate_int(value, label, minimum, maximum)
    tunables = TunableSet(**values)
    if tunables.dirty_bg_ratio >= tunables.dirty_ratio:
        logger.warning("Dirty background ratio (%d) is not below dirty ratio (%d)",
                       tunables.dirty_bg_ratio, tunables.dirty_ratio)
    return tunables


def to_sysctl(tunables):
    """Returns the ``key=value`` settings of a TunableSet, in a stable order."""
    return [f"{TUNABLES[field][0]}={value}" for field, value in tunables._asdict().items()]


def persist_tunables(tunables, path=None):
    """Leaves exactly one ``key=value`` line per tunable in sysctl.conf."""
    path = path or config.SYSCTL_CONF
    keys = {TUNABLES[field][0] for field in TunableSet._fields}
    conf_files.remove_lines(path, lambda line: conf_files.setting_key(line) in keys)
    for setting in to_sysctl(tunables):
        conf_files.append_line(path, setting)


def apply_tunables(tunables, mode):
    """
    Applies a TunableSet live and makes it persistent.

    All four values are set with ``sysctl -w`` first; a failure there
    aborts before sysctl.conf is touched. Then the file is rewritten and
    reloaded with ``sysctl -p``.
    """
    for setting in to_sysctl(tunables):
        runner.run_command(["sysctl", "-w", setting])

    persist_tunables(tunables)
    runner.run_command(["sysctl", "-p", config.SYSCTL_CONF])
    logger.info("System parameters configured with mode: %s", mode)


def apply_preset(name):
    apply_tunables(get_preset(name), name)


def read_live_tunables():
    """Reads the current values from /proc/sys/vm. Missing entries read as None."""
    live = {}
    for key, _, _, _ in TUNABLES.values():
        path = os.path.join(config.PROC_SYS_VM, key.split(".", 1)[1])
        live[key] = runner.read_sysfs(path)
    return live
