#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Prompt handlers behind each option of the main menu."""

from ferramentas import config, status, swap, sysctl_params, zram, zswap
from menus.menu_style_utils import Colors, print_colored_box

COLORS = Colors()


def ask(question, default=None):
    hint = f" [{default}]" if default not in (None, "") else ""
    answer = input(f"{COLORS.CYAN}{question}{hint}: {COLORS.END}").strip()
    return answer if answer else (str(default) if default is not None else "")


def menu_preset(name):
    sysctl_params.apply_preset(name)


def menu_custom_params():
    """Asks for the four tunables; nothing is applied unless all of them are valid."""
    tunables = sysctl_params.build_tunables(
        ask("Swappiness (0-100)"),
        ask("Cache pressure (0-200)"),
        ask("Dirty ratio (0-100)"),
        ask("Dirty background ratio (0-100)"),
    )
    sysctl_params.apply_tunables(tunables, "custom")


def _ask_zram():
    size = ask(f"ZRAM size (e.g. {zram.suggested_size()})")
    algorithm = ask("Compression algorithm (empty for kernel default)")
    return size, algorithm or None


def menu_zram_session():
    zram.enable_session(*_ask_zram())


def menu_zram_persistent():
    zram.enable_persistent(*_ask_zram())


def menu_zram_disable():
    zram.disable()


def menu_zswap_enable():
    defaults = config.load_defaults()
    zswap.enable(
        ask("Compressor", defaults["ZSWAP_COMPRESSOR"]),
        ask("Max pool percent (1-100)", defaults["ZSWAP_MAX_POOL_PERCENT"]),
        ask("Pool type", defaults["ZSWAP_ZPOOL"]),
    )
    print(f"{COLORS.YELLOW}Reboot to apply the new zswap settings.{COLORS.END}")


def menu_zswap_disable():
    zswap.disable()
    print(f"{COLORS.YELLOW}Reboot to apply the new zswap settings.{COLORS.END}")


def menu_disk_add():
    kind = ask("Type (partition/file)").lower()
    location = ask("Location")
    size = ask("Size") if kind == "file" else None
    swap.add_swap(kind, location, size)


def menu_disk_remove():
    swap.remove_swap(ask("Location"))


def menu_status():
    print_colored_box("SWAP STATUS", status.collect_status(), width=78)
