#!/usr/bin/env python3
import shlex
import subprocess

from ferramentas.errors import CommandError, OperationError
from ferramentas.logger import get_logger

logger = get_logger()


def _describe(cmd):
    return shlex.join(cmd)


def run_command(cmd, check=True):
    """
    Runs a command and returns the CompletedProcess.

    ``cmd`` is an argument list; it never goes through a shell.
    With ``check=True`` a non-zero status raises CommandError, which
    carries the command's own exit code. A missing executable is
    reported the same way, with status 127.
    """
    logger.debug("Running: %s", _describe(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise CommandError(_describe(cmd), 127, str(e)) from e

    if check and result.returncode != 0:
        raise CommandError(_describe(cmd), result.returncode, result.stderr)
    return result


def run_best_effort(cmd):
    """Runs a cleanup command, ignoring failures. Returns None when it failed."""
    try:
        return run_command(cmd)
    except CommandError as e:
        logger.debug("Ignored: %s", e.message)
        return None


def write_sysfs(path, value):
    """Writes a value to a kernel attribute file such as /sys/block/zram0/disksize."""
    logger.debug("Writing %s to %s", value, path)
    try:
        with open(path, "w") as f:
            f.write(str(value))
    except OSError as e:
        raise OperationError(f"Could not write '{value}' to {path}: {e.strerror or e}") from e


def read_sysfs(path, default=None):
    """Reads a kernel attribute file, returning ``default`` when it cannot be read."""
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except OSError:
        return default
