"""Simple logging helpers for the move-new CLI."""

import os
from dataclasses import dataclass


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'
    ITALIC = '\033[3m'
    DIM = '\033[2m'


@dataclass(frozen=True)
class TextStyle:
    """Style descriptor passed to :func:`style_text`."""
    color: str = ""
    bold: bool = False
    italic: bool = False
    dim: bool = False


BOLD = TextStyle(bold=True)
ITALIC = TextStyle(italic=True)
CYAN = TextStyle(color=Colors.CYAN)
WARNING = TextStyle(color=Colors.YELLOW)


def colors_enabled() -> bool:
    """Colors are on unless NO_COLOR is set (https://no-color.org)."""
    return "NO_COLOR" not in os.environ


def style_text(text: str, style: TextStyle, *, enabled: bool = True) -> str:
    """Wrap text in the ANSI codes described by style.

    Pure function: output depends only on the arguments.
    """
    if not enabled:
        return text
    prefix = style.color
    if style.bold:
        prefix += Colors.BOLD
    if style.italic:
        prefix += Colors.ITALIC
    if style.dim:
        prefix += Colors.DIM
    if not prefix:
        return text
    return f"{prefix}{text}{Colors.RESET}"


def fg_bold(text: str) -> str:
    return style_text(text, BOLD, enabled=colors_enabled())


def fg_italic(text: str) -> str:
    return style_text(text, ITALIC, enabled=colors_enabled())


def fg_cyan(text: str) -> str:
    return style_text(text, CYAN, enabled=colors_enabled())


def fg_warning(text: str) -> str:
    return style_text(text, WARNING, enabled=colors_enabled())


def print_header(msg: str) -> None:
    """Print a header message."""
    print(style_text(msg, TextStyle(color=Colors.HEADER, bold=True), enabled=colors_enabled()))


def print_info(msg: str) -> None:
    """Print an info message."""
    print(style_text(msg, CYAN, enabled=colors_enabled()))


def print_success(msg: str) -> None:
    """Print a success message."""
    print(style_text(f"✓ {msg}", TextStyle(color=Colors.GREEN), enabled=colors_enabled()))


def print_warning(msg: str) -> None:
    """Print a warning message."""
    print(style_text(f"⚠️  {msg}", WARNING, enabled=colors_enabled()))


def print_error(msg: str) -> None:
    """Print an error message."""
    print(style_text(f"❌ {msg}", TextStyle(color=Colors.RED), enabled=colors_enabled()))
