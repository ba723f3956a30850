#!/usr/bin/env python3
import os
import shlex

import psutil

from ferramentas import config, runner
from ferramentas.errors import OperationError, ValidationError
from ferramentas.logger import get_logger
from ferramentas.swap import is_swap_active
from ferramentas.validators import is_block_device, validate_size, validate_token

logger = get_logger()

SERVICE_TEMPLATE = """[Unit]
Description=ZRAM Setup
After=multi-user.target

[Service]
Type=oneshot
RemainAfterExit=yes
ExecStart=/bin/bash -c {start}
ExecStop=/bin/bash -c {stop}

[Install]
WantedBy=multi-user.target
"""


def suggested_size():
    """Half of the physical RAM, in MiB (e.g. '3951M'). Only used as a prompt hint."""
    total = psutil.virtual_memory().total
    return f"{max(1, total // 2 // (1024 * 1024))}M"


def enable_session(size, algorithm=None):
    """
    Sets up /dev/zram0 as swap until the next reboot.

    Parameters:
    - size: device size such as '2G' or '512M'.
    - algorithm: compression algorithm ('zstd', 'lz4', ...); the kernel default when None.
    """
    size = validate_size(size)
    if algorithm:
        algorithm = validate_token(algorithm, "compression algorithm")
    if is_swap_active(config.ZRAM_DEVICE):
        raise ValidationError(f"{config.ZRAM_DEVICE} is already in use as swap. Disable ZRAM first.")

    runner.run_command(["modprobe", "zram"])
    if algorithm:
        runner.write_sysfs(os.path.join(config.ZRAM_SYSFS, "comp_algorithm"), algorithm)
    runner.write_sysfs(os.path.join(config.ZRAM_SYSFS, "disksize"), size)
    runner.run_command(["mkswap", config.ZRAM_DEVICE])
    runner.run_command(["swapon", config.ZRAM_DEVICE])
    logger.info("ZRAM configured with size %s", size)
    return size


def service_unit(size, algorithm=None):
    """Renders the systemd unit that recreates the zram swap at boot."""
    steps = ["modprobe zram"]
    if algorithm:
        steps.append(f"echo {algorithm} > {config.ZRAM_SYSFS}/comp_algorithm")
    steps += [
        f"echo {size} > {config.ZRAM_SYSFS}/disksize",
        f"mkswap {config.ZRAM_DEVICE}",
        f"swapon {config.ZRAM_DEVICE}",
    ]
    start = " && ".join(steps)
    stop = f"swapoff {config.ZRAM_DEVICE} && rmmod zram"
    return SERVICE_TEMPLATE.format(start=shlex.quote(start), stop=shlex.quote(stop))


def create_service(size, algorithm=None):
    """Installs and enables the zram systemd service."""
    try:
        with open(config.ZRAM_SERVICE, "w") as f:
            f.write(service_unit(size, algorithm))
    except OSError as e:
        raise OperationError(f"Could not write {config.ZRAM_SERVICE}: {e}") from e

    runner.run_command(["systemctl", "daemon-reload"])
    runner.run_command(["systemctl", "enable", config.ZRAM_SERVICE_NAME])
    logger.info("ZRAM service created and enabled")


def enable_persistent(size, algorithm=None):
    size = enable_session(size, algorithm)
    create_service(size, algorithm)


def disable():
    """
    Tears down the zram swap and its service.

    Every step tolerates missing state, so this can be called when ZRAM
    was never enabled.
    """
    runner.run_best_effort(["swapoff", config.ZRAM_DEVICE])
    runner.run_best_effort(["rmmod", "zram"])
    runner.run_best_effort(["systemctl", "disable", config.ZRAM_SERVICE_NAME])
    if os.path.exists(config.ZRAM_SERVICE):
        os.remove(config.ZRAM_SERVICE)
        runner.run_best_effort(["systemctl", "daemon-reload"])
    logger.info("ZRAM disabled")


def read_zram_status():
    """Returns None when /dev/zram0 does not exist, else its size and algorithm."""
    if not is_block_device(config.ZRAM_DEVICE):
        return None
    algorithm = runner.read_sysfs(os.path.join(config.ZRAM_SYSFS, "comp_algorithm"), "")
    # The active algorithm is shown in brackets: "lzo [lz4] zstd"
    selected = [a.strip("[]") for a in algorithm.split() if a.startswith("[")]
    return {
        "disksize": runner.read_sysfs(os.path.join(config.ZRAM_SYSFS, "disksize"), "0"),
        "algorithm": selected[0] if selected else (algorithm or None),
    }
