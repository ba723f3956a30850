#!/usr/bin/env python3
"""Input validation shared by the menu handlers and the tools."""
import os
import re
import stat

from ferramentas.errors import ValidationError

SIZE_PATTERN = re.compile(r'^[0-9]+[GMK]$', re.IGNORECASE)

_UNIT_BYTES = {'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3}


def validate_size(size):
    """
    Checks a size such as '512M', '2G' or '100k' and returns it upper-cased.

    A unit is mandatory; '10' and '' are rejected.
    """
    size = (size or '').strip()
    if not SIZE_PATTERN.match(size):
        raise ValidationError("Invalid size format. Use format like 1G, 2M, etc.")
    return size.upper()


def size_to_bytes(size):
    size = validate_size(size)
    return int(size[:-1]) * _UNIT_BYTES[size[-1]]


def validate_path(path):
    """The parent directory of ``path`` must exist."""
    if not path:
        raise ValidationError("No path given")
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(directory):
        raise ValidationError(f"Directory {directory} does not exist")
    return path


def is_block_device(path):
    try:
        return stat.S_ISBLK(os.stat(path).st_mode)
    except OSError:
        return False


def validate_device(path):
    if not path or not is_block_device(path):
        raise ValidationError(f"Device {path} is not a valid block device")
    return path


def validate_int(value, name, minimum, maximum):
    """Parses ``value`` as an integer within [minimum, maximum]."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer, got '{value}'")
    if not minimum <= number <= maximum:
        raise ValidationError(f"{name} must be between {minimum} and {maximum}, got {number}")
    return number


def validate_token(value, name):
    """A single kernel parameter value: non-empty, no whitespace or quotes."""
    value = (value or '').strip()
    if not value or re.search(r'[\s"\']', value):
        raise ValidationError(f"Invalid {name}: '{value}'")
    return value
