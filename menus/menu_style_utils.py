#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import re
import sys

MENU_WIDTH = 60


def _supports_color():
    try:
        is_a_tty = sys.stdout.isatty()
    except AttributeError:
        is_a_tty = False
    return is_a_tty and os.environ.get("TERM") != "dumb" and "NO_COLOR" not in os.environ


class Colors:
    _enabled = _supports_color()
    @classmethod
    def _get(cls, code): return code if cls._enabled else ''
    BLUE = property(lambda self: self._get('\033[94m'))
    CYAN = property(lambda self: self._get('\033[96m'))
    GREEN = property(lambda self: self._get('\033[92m'))
    YELLOW = property(lambda self: self._get('\033[93m'))
    RED = property(lambda self: self._get('\033[91m'))
    WHITE = property(lambda self: self._get('\033[97m'))
    BOLD = property(lambda self: self._get('\033[1m'))
    END = property(lambda self: self._get('\033[0m'))


class BoxChars:
    if _supports_color():
        TOP_LEFT='╔'; TOP_RIGHT='╗'; BOTTOM_LEFT='╚'; BOTTOM_RIGHT='╝'
        HORIZONTAL='═'; VERTICAL='║'; T_RIGHT='╠'; T_LEFT='╣'
    else:
        TOP_LEFT=TOP_RIGHT=BOTTOM_LEFT=BOTTOM_RIGHT='+'
        HORIZONTAL='-'; VERTICAL='|'; T_RIGHT=T_LEFT='+'


def visible_length(text):
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
    return len(ansi_escape.sub('', text))


def print_colored_box(title, content_lines=None, width=MENU_WIDTH, title_color=None):
    if content_lines is None: content_lines = []
    col = Colors()
    if title_color is None: title_color = col.CYAN
    print(f"{BoxChars.TOP_LEFT}{BoxChars.HORIZONTAL*(width-2)}{BoxChars.TOP_RIGHT}")
    title_text = f" {title_color}{col.BOLD}{title}{col.END} "
    pad = width - visible_length(title_text) - 2
    lpad = pad//2; rpad = pad-lpad
    print(f"{BoxChars.VERTICAL}{' '*lpad}{title_text}{' '*rpad}{BoxChars.VERTICAL}")
    if content_lines:
        print(f"{BoxChars.T_RIGHT}{BoxChars.HORIZONTAL*(width-2)}{BoxChars.T_LEFT}")
        for line in content_lines:
            maxw = width-4
            if visible_length(line) > maxw:
                line = line[:maxw-3] + "..."
            pad = width - visible_length(line) - 3
            print(f"{BoxChars.VERTICAL} {line}{' '*pad}{BoxChars.VERTICAL}")
    print(f"{BoxChars.BOTTOM_LEFT}{BoxChars.HORIZONTAL*(width-2)}{BoxChars.BOTTOM_RIGHT}")


def print_section(title, width=MENU_WIDTH):
    col = Colors()
    print(f"{BoxChars.VERTICAL} {col.BOLD}{col.YELLOW}{title}{col.END}"
          f"{' '*(width - len(title) - 3)}{BoxChars.VERTICAL}")


def print_menu_option(number, description, color=None, width=MENU_WIDTH):
    col = Colors()
    if color is None: color = col.WHITE
    number_text = f"{col.BOLD}{color}[{number}]{col.END}"
    option_text = f"   {number_text} {description}"
    padding = width - visible_length(option_text) - 2
    print(f"{BoxChars.VERTICAL}{option_text}{' '*padding}{BoxChars.VERTICAL}")


def print_menu_bottom(width=MENU_WIDTH):
    print(f"{BoxChars.BOTTOM_LEFT}{BoxChars.HORIZONTAL*(width-2)}{BoxChars.BOTTOM_RIGHT}")
