#!/usr/bin/env python3
"""Line-oriented editing of system configuration files."""
import shutil

from ferramentas.errors import OperationError


def read_lines(path, missing_ok=True):
    """Returns the lines of ``path`` (with newlines), or [] when it does not exist."""
    try:
        with open(path, 'r') as f:
            return f.readlines()
    except FileNotFoundError:
        if missing_ok:
            return []
        raise OperationError(f"{path} not found")
    except OSError as e:
        raise OperationError(f"Error reading {path}: {e}") from e


def write_lines(path, lines):
    try:
        with open(path, 'w') as f:
            f.writelines(lines)
    except OSError as e:
        raise OperationError(f"Error writing {path}: {e}") from e


def append_line(path, line):
    """Appends one line, adding the missing newline at the end of the file first."""
    lines = read_lines(path)
    prefix = "\n" if lines and not lines[-1].endswith("\n") else ""
    try:
        with open(path, 'a') as f:
            f.write(prefix + line.rstrip("\n") + "\n")
    except OSError as e:
        raise OperationError(f"Error writing {path}: {e}") from e


def remove_lines(path, predicate):
    """Deletes every line for which ``predicate(line)`` is true. Returns how many were removed."""
    lines = read_lines(path)
    kept = [line for line in lines if not predicate(line)]
    removed = len(lines) - len(kept)
    if removed:
        write_lines(path, kept)
    return removed


def first_field(line):
    """First whitespace-separated field of a non-comment line, or None."""
    stripped = line.strip()
    if not stripped or stripped.startswith('#'):
        return None
    return stripped.split()[0]


def setting_key(line):
    """Key of a ``key = value`` line, or None for comments and other lines."""
    stripped = line.strip()
    if not stripped or stripped.startswith(('#', ';')) or '=' not in stripped:
        return None
    return stripped.split('=', 1)[0].strip()


def backup(path, suffix):
    """Copies ``path`` to ``path + suffix``, overwriting any previous backup."""
    target = f"{path}{suffix}"
    try:
        shutil.copy2(path, target)
    except OSError as e:
        raise OperationError(f"Could not back up {path}: {e}") from e
    return target
