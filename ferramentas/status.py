#!/usr/bin/env python3
import psutil

from ferramentas import sysctl_params, zram, zswap
from ferramentas.logger import get_logger
from ferramentas.swap import active_swaps

logger = get_logger()


def _human(num_bytes):
    value = float(num_bytes)
    if value < 1024:
        return f"{int(value)} B"
    for unit in ("KiB", "MiB"):
        value /= 1024
        if value < 1024:
            return f"{value:.1f} {unit}"
    return f"{value / 1024:.1f} GiB"


def zram_lines():
    status = zram.read_zram_status()
    if status is None:
        return ["ZRAM: Disabled"]
    lines = [f"ZRAM: Enabled ({status['disksize']} bytes)"]
    if status["algorithm"]:
        lines.append(f"ZRAM algorithm: {status['algorithm']}")
    return lines


def zswap_lines():
    status = zswap.read_zswap_status()
    if status is None:
        return ["ZSWAP: Not available"]
    return [
        f"ZSWAP: {status['enabled']}",
        f"Compressor: {status['compressor']}",
        f"Pool: {status['zpool']}",
        f"Max pool percent: {status['max_pool_percent']}",
    ]


def tunable_lines():
    return [f"{key} = {value if value is not None else 'unavailable'}"
            for key, value in sysctl_params.read_live_tunables().items()]


def swap_device_lines():
    swaps = active_swaps()
    if not swaps:
        return ["No swap devices configured"]
    lines = []
    for s in swaps:
        lines.append(f"{s['name']} ({s['type']}) size {_human(s['size'] * 1024)}, "
                     f"used {_human(s['used'] * 1024)}, prio {s['priority']}")
    return lines


def memory_lines():
    ram = psutil.virtual_memory()
    sw = psutil.swap_memory()
    return [
        f"RAM: {_human(ram.used)} / {_human(ram.total)} ({ram.percent:.1f}%)",
        f"Swap: {_human(sw.used)} / {_human(sw.total)} ({sw.percent:.1f}%)",
    ]


def collect_status():
    """
    Builds the status report as a list of lines.

    Read-only. Features that are missing on this machine are reported
    as status lines rather than errors.
    """
    logger.info("System Swap Status Report")
    lines = []
    lines += zram_lines()
    lines += zswap_lines()
    lines += ["", "System Parameters:"] + tunable_lines()
    lines += ["", "Swap Devices:"] + swap_device_lines()
    lines += ["", "Memory:"] + memory_lines()
    return lines
