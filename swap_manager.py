#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import sys
import traceback

# Allows running as "python3 swap_manager.py" from a checkout
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

from ferramentas import config  # noqa: E402
from ferramentas.errors import OperationError, PrivilegeError, ValidationError  # noqa: E402
from ferramentas.logger import attach_log_file, get_logger, setup_logging  # noqa: E402
from menus import menu_swap  # noqa: E402
from menus.menu_style_utils import (  # noqa: E402
    Colors, print_colored_box, print_menu_bottom, print_menu_option, print_section,
)

logger = get_logger()
COLORS = Colors()

EXIT_CHOICE = "6"

ACTIONS = {
    "1a": lambda: menu_swap.menu_preset("aggressive"),
    "1b": lambda: menu_swap.menu_preset("moderate"),
    "1c": lambda: menu_swap.menu_preset("conservative"),
    "1d": menu_swap.menu_custom_params,
    "2a": menu_swap.menu_zram_session,
    "2b": menu_swap.menu_zram_persistent,
    "2c": menu_swap.menu_zram_disable,
    "3a": menu_swap.menu_zswap_enable,
    "3b": menu_swap.menu_zswap_disable,
    "4a": menu_swap.menu_disk_add,
    "4b": menu_swap.menu_disk_remove,
    "5": menu_swap.menu_status,
}


def show_menu():
    print_colored_box("SWAP MANAGEMENT SYSTEM")
    print_section("1. Configure Swap Aggressiveness")
    print_menu_option("1a", "Set Aggressive", COLORS.GREEN)
    print_menu_option("1b", "Set Moderate", COLORS.GREEN)
    print_menu_option("1c", "Set Conservative", COLORS.GREEN)
    print_menu_option("1d", "Custom Settings", COLORS.GREEN)
    print_section("2. ZRAM Management")
    print_menu_option("2a", "Enable (this session)", COLORS.CYAN)
    print_menu_option("2b", "Enable (persistent)", COLORS.CYAN)
    print_menu_option("2c", "Disable", COLORS.CYAN)
    print_section("3. ZSWAP Management")
    print_menu_option("3a", "Enable", COLORS.BLUE)
    print_menu_option("3b", "Disable", COLORS.BLUE)
    print_section("4. Disk Swap Management")
    print_menu_option("4a", "Add swap", COLORS.YELLOW)
    print_menu_option("4b", "Remove swap", COLORS.YELLOW)
    print_menu_option("5", "Check Status", COLORS.WHITE)
    print_menu_option("6", "Exit", COLORS.RED)
    print_menu_bottom()


def main_menu():
    """
    Runs the menu loop until the user picks Exit. Returns the exit status.

    Invalid input only costs a log line; failed system commands
    propagate to main().
    """
    while True:
        show_menu()
        choice = input(f"\n{COLORS.BOLD}Choose option: {COLORS.END}").strip()

        if choice == EXIT_CHOICE:
            logger.info("Exiting")
            return 0

        action = ACTIONS.get(choice)
        if action is None:
            logger.error("Invalid option")
        else:
            try:
                action()
            except ValidationError as e:
                logger.error(e.message)
        print()


def check_root():
    if os.geteuid() != 0:
        raise PrivilegeError("Must run as root")


def error_location(exc):
    """File, line and function of the innermost tool frame, skipping the command runner."""
    tools_dir = os.path.dirname(os.path.abspath(config.__file__))
    frames = traceback.extract_tb(exc.__traceback__)
    for frame in reversed(frames):
        path = os.path.abspath(frame.filename)
        if os.path.dirname(path) == tools_dir and os.path.basename(path) != "runner.py":
            return f"{os.path.basename(path)}:{frame.lineno} ({frame.name})"
    if frames:
        return f"{os.path.basename(frames[-1].filename)}:{frames[-1].lineno} ({frames[-1].name})"
    return "unknown location"


def main():
    setup_logging()
    try:
        check_root()
        config.ensure_config_dir()
        attach_log_file(config.LOG_FILE, config.LOG_FILE_MODE)
        return main_menu()
    except PrivilegeError as e:
        logger.error(e.message)
        return e.exit_code
    except OperationError as e:
        logger.error("Error (code: %d) occurred at %s: %s", e.exit_code, error_location(e), e.message)
        return e.exit_code
    except OSError as e:
        logger.error("Error (code: 1) occurred at %s: %s", error_location(e), e)
        return 1
    except KeyboardInterrupt:
        print()
        logger.info("Interrupted by user")
        return 130
    except EOFError:
        print()
        logger.info("Exiting")
        return 0


if __name__ == "__main__":
    sys.exit(main())
