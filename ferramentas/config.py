#!/usr/bin/env python3
"""Paths and defaults used by the swap manager.

Every function in ``ferramentas`` looks these up at call time
(``config.SYSCTL_CONF`` and so on), so they can be redirected by
setting the module attributes.
"""
import os

CONFIG_DIR = os.environ.get("SWAP_MANAGER_CONFIG_DIR", "/etc/swap-manager")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.conf")
LOG_FILE = os.environ.get("SWAP_MANAGER_LOG", "/var/log/swap-manager.log")
LOG_FILE_MODE = 0o640

SYSCTL_CONF = "/etc/sysctl.conf"
FSTAB = "/etc/fstab"
GRUB_DEFAULT = "/etc/default/grub"
GRUB_BACKUP_SUFFIX = ".backup"

ZRAM_SERVICE_NAME = "zram.service"
ZRAM_SERVICE = f"/etc/systemd/system/{ZRAM_SERVICE_NAME}"
ZRAM_DEVICE = "/dev/zram0"
ZRAM_SYSFS = "/sys/block/zram0"

ZSWAP_PARAMETERS = "/sys/module/zswap/parameters"
PROC_SYS_VM = "/proc/sys/vm"
PROC_SWAPS = "/proc/swaps"

DEFAULT_ZSWAP_COMPRESSOR = "lz4"
DEFAULT_ZSWAP_MAX_POOL_PERCENT = 50
DEFAULT_ZSWAP_ZPOOL = "z3fold"

# Keys accepted in config.conf, with the type each value is parsed as
_CONFIG_KEYS = {
    "ZSWAP_COMPRESSOR": str,
    "ZSWAP_MAX_POOL_PERCENT": int,
    "ZSWAP_ZPOOL": str,
}


def ensure_config_dir():
    """Creates the configuration directory if it does not exist."""
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_defaults(path=None):
    """
    Reads optional overrides from config.conf.

    The file holds ``KEY=VALUE`` lines; blank lines, ``#`` comments,
    unknown keys and malformed values are ignored. Returns a dict with the
    zswap defaults, already merged with the built-in values.
    """
    defaults = {
        "ZSWAP_COMPRESSOR": DEFAULT_ZSWAP_COMPRESSOR,
        "ZSWAP_MAX_POOL_PERCENT": DEFAULT_ZSWAP_MAX_POOL_PERCENT,
        "ZSWAP_ZPOOL": DEFAULT_ZSWAP_ZPOOL,
    }
    path = path or CONFIG_FILE
    if not os.path.isfile(path):
        return defaults

    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = (part.strip() for part in line.split("=", 1))
            value = value.strip('"').strip("'")
            cast = _CONFIG_KEYS.get(key)
            if cast is None or not value:
                continue
            try:
                defaults[key] = cast(value)
            except ValueError:
                continue
    return defaults
