#!/usr/bin/env python3
import os

from ferramentas import config, conf_files, runner
from ferramentas.errors import CommandError, ValidationError
from ferramentas.logger import get_logger
from ferramentas.validators import size_to_bytes, validate_device, validate_path, validate_size

logger = get_logger()

SWAP_KINDS = ("partition", "file")


def active_swaps():
    """
    Lists the active swap areas from /proc/swaps.

    Returns a list of dicts with the keys name, type, size, used and
    priority (sizes in KiB, as the kernel reports them).
    """
    swaps = []
    lines = conf_files.read_lines(config.PROC_SWAPS)
    for line in lines[1:]:  # Skip header
        fields = line.split()
        if len(fields) < 5:
            continue
        # Paths containing spaces are escaped as \040
        name = fields[0].replace("\\040", " ")
        swaps.append({
            "name": name,
            "type": fields[1],
            "size": int(fields[2]),
            "used": int(fields[3]),
            "priority": int(fields[4]),
        })
    return swaps


def is_swap_active(location):
    """Checks whether a swap file or device is currently in use."""
    target = os.path.realpath(location)
    return any(os.path.realpath(s["name"]) == target for s in active_swaps())


def fstab_entry(location):
    return f"{location} none swap sw 0 0"


def add_fstab_entry(location):
    """Adds the swap entry to /etc/fstab unless a line for the location already exists."""
    lines = conf_files.read_lines(config.FSTAB)
    if any(conf_files.first_field(line) == location for line in lines):
        logger.info("Swap entry for %s already present in %s", location, config.FSTAB)
        return False
    conf_files.append_line(config.FSTAB, fstab_entry(location))
    return True


def remove_fstab_entry(location):
    """Deletes the /etc/fstab lines whose first field is exactly ``location``."""
    return conf_files.remove_lines(config.FSTAB, lambda line: conf_files.first_field(line) == location)


def _allocate_file(location, size):
    try:
        runner.run_command(["fallocate", "-l", size, location])
    except CommandError as e:
        # Some filesystems cannot preallocate; write zeroes instead
        logger.warning("fallocate failed (%s), falling back to dd", e.message)
        if os.path.exists(location):
            os.remove(location)
        count = max(1, size_to_bytes(size) // (1024 * 1024))
        runner.run_command(["dd", "if=/dev/zero", f"of={location}", "bs=1M", f"count={count}"])


def add_swap(kind, location, size=None):
    """
    Creates and activates a swap partition or swap file, persisting it in /etc/fstab.

    Parameters:
    - kind: 'partition' or 'file'.
    - location: block device path, or the path of the new swap file.
    - size: size of the swap file (e.g. '2G'); ignored for partitions.
    """
    if kind not in SWAP_KINDS:
        raise ValidationError("Invalid swap type")
    if not location:
        raise ValidationError("No location given")
    location = os.path.abspath(location)

    if kind == "partition":
        validate_device(location)
    else:
        validate_path(location)
        size = validate_size(size)
        if os.path.exists(location):
            raise ValidationError(f"{location} already exists")

    if is_swap_active(location):
        raise ValidationError(f"{location} is already an active swap area")

    if kind == "file":
        _allocate_file(location, size)
        os.chmod(location, 0o600)

    runner.run_command(["mkswap", location])
    runner.run_command(["swapon", location])
    add_fstab_entry(location)
    logger.info("Disk swap configured: %s", location)


def remove_swap(location):
    """
    Deactivates a swap partition or file and forgets it.

    Deactivation is best-effort, so removing something that is not
    active still cleans /etc/fstab. Regular files are deleted.
    """
    if not location:
        raise ValidationError("No location given")
    location = os.path.abspath(location)

    runner.run_best_effort(["swapoff", location])
    remove_fstab_entry(location)
    if os.path.isfile(location):
        os.remove(location)
    logger.info("Disk swap disabled: %s", location)
