#!/usr/bin/env python3
"""
zswap is configured through kernel boot parameters in /etc/default/grub.

Changes take effect after the next reboot; this module never reboots.
"""
import os
import re
import shlex
import shutil

from ferramentas import config, conf_files, runner
from ferramentas.errors import OperationError
from ferramentas.logger import get_logger
from ferramentas.validators import validate_int, validate_token

logger = get_logger()

CMDLINE_VAR = "GRUB_CMDLINE_LINUX"
CMDLINE_RE = re.compile(r'^(\s*)' + CMDLINE_VAR + r'=(.*)$')

# Tried in order when regenerating the bootloader configuration
GRUB_UPDATE_COMMANDS = (
    ["update-grub"],
    ["grub-mkconfig", "-o", "/boot/grub/grub.cfg"],
    ["grub2-mkconfig", "-o", "/boot/grub2/grub.cfg"],
)


def build_zswap_params(compressor, pool_percent, pool_type):
    """Returns the zswap boot parameters, in the order they are written."""
    return {
        "zswap.enabled": "1",
        "zswap.compressor": validate_token(compressor, "compressor"),
        "zswap.max_pool_percent": str(validate_int(pool_percent, "Max pool percent", 1, 100)),
        "zswap.zpool": validate_token(pool_type, "pool type"),
    }


def _split_comment(value):
    """Splits a shell value into its code and a trailing ``# comment``."""
    quote = None
    for i, ch in enumerate(value):
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "#" and (i == 0 or value[i - 1].isspace()):
            return value[:i].rstrip(), value[i:].rstrip()
    return value.strip(), ""


def parse_cmdline_value(value):
    """
    Returns the kernel parameters of a GRUB_CMDLINE_LINUX value and its trailing comment.

    The value is read the way the shell reads it, so quotes and comments
    never end up among the parameters.
    """
    code, comment = _split_comment(value)
    try:
        words = shlex.split(code)
    except ValueError as e:
        raise OperationError(f"Cannot parse {CMDLINE_VAR}={value.strip()}: {e}") from e
    return " ".join(words).split(), comment


def update_cmdline(tokens, params):
    """
    Drops every zswap.* token and appends ``params``.

    Unrelated parameters keep their order.
    """
    kept = [t for t in tokens if not t.split("=", 1)[0].startswith("zswap.")]
    return kept + [f"{key}={value}" for key, value in params.items()]


def rewrite_grub_defaults(lines, params):
    """
    Returns ``lines`` with the zswap parameters upserted into GRUB_CMDLINE_LINUX.

    The file is sourced by the shell and the last assignment wins, so
    every uncommented assignment is edited. A trailing comment is kept.
    If there is no assignment, one is appended.
    """
    result = list(lines)
    edited = False
    for i, line in enumerate(result):
        match = CMDLINE_RE.match(line.rstrip("\n"))
        if not match:
            continue
        indent, value = match.groups()
        tokens, comment = parse_cmdline_value(value)
        tokens = update_cmdline(tokens, params)
        suffix = f" {comment}" if comment else ""
        result[i] = f'{indent}{CMDLINE_VAR}="{" ".join(tokens)}"{suffix}\n'
        edited = True
    if edited:
        return result

    if result and not result[-1].endswith("\n"):
        result[-1] += "\n"
    result.append(f'{CMDLINE_VAR}="{" ".join(update_cmdline([], params))}"\n')
    return result


def grub_update_command():
    """Picks the bootloader regeneration command available on this system."""
    for cmd in GRUB_UPDATE_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    raise OperationError("No bootloader update tool found (update-grub, grub-mkconfig or grub2-mkconfig)")


def _apply(params):
    if not os.path.isfile(config.GRUB_DEFAULT):
        raise OperationError(f"{config.GRUB_DEFAULT} not found")
    update_cmd = grub_update_command()

    backup_path = conf_files.backup(config.GRUB_DEFAULT, config.GRUB_BACKUP_SUFFIX)
    logger.info("Backed up %s to %s", config.GRUB_DEFAULT, backup_path)
    lines = conf_files.read_lines(config.GRUB_DEFAULT, missing_ok=False)
    conf_files.write_lines(config.GRUB_DEFAULT, rewrite_grub_defaults(lines, params))
    runner.run_command(update_cmd)
    logger.info("ZSWAP configuration updated. Reboot required.")


def enable(compressor=None, pool_percent=None, pool_type=None):
    """
    Enables zswap from the next boot on.

    Parameters left as None come from config.conf or the built-in
    defaults (lz4, 50%, z3fold).
    """
    defaults = config.load_defaults()
    params = build_zswap_params(
        compressor or defaults["ZSWAP_COMPRESSOR"],
        pool_percent if pool_percent not in (None, "") else defaults["ZSWAP_MAX_POOL_PERCENT"],
        pool_type or defaults["ZSWAP_ZPOOL"],
    )
    _apply(params)
    return params


def disable():
    """Removes the zswap parameters and disables zswap from the next boot on."""
    _apply({"zswap.enabled": "0"})


def read_zswap_status():
    """Returns None when the zswap module is not present."""
    enabled_path = os.path.join(config.ZSWAP_PARAMETERS, "enabled")
    if not os.path.isfile(enabled_path):
        return None

    def param(name):
        return runner.read_sysfs(os.path.join(config.ZSWAP_PARAMETERS, name), "unknown")

    return {
        "enabled": param("enabled"),
        "compressor": param("compressor"),
        "zpool": param("zpool"),
        "max_pool_percent": param("max_pool_percent"),
    }
