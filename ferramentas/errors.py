#!/usr/bin/env python3
"""Exceptions raised by the swap manager tools."""


class SwapManagerError(Exception):
    """Base class for every error the tool reports to the user."""

    exit_code = 1

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(SwapManagerError):
    """Invalid user input. Nothing was changed on the system."""


class PrivilegeError(SwapManagerError):
    """The process is not running as root."""


class OperationError(SwapManagerError):
    """A change to the system failed part way through."""

    def __init__(self, message, exit_code=1):
        super().__init__(message)
        self.exit_code = exit_code


class CommandError(OperationError):
    """An external command returned a non-zero status."""

    def __init__(self, cmd, returncode, stderr=""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"Command '{cmd}' failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        # Signals show up as negative return codes
        super().__init__(message, returncode if returncode > 0 else 1)
