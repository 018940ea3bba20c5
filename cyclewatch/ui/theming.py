# cyclewatch/ui/theming.py
# Colour palette, phase colours, gradient text & pre-composed styled lines for CLI output

from __future__ import annotations

import json
from typing import Any

from rich.text import Text
from rich.theme import Theme, ThemeStackError

from ..core.types import Phase
from ..cw_io.console import console


# * Static colour constants; phase colours follow the training screen conventions
class CycleColors:
    ACCENT_PRIMARY = "#4a90e2"  # sky blue
    ACCENT_SECONDARY = "#2563eb"  # royal blue
    ACCENT_DEEP = "#1e40af"  # dark blue

    SUCCESS_BRIGHT = "#10b981"  # emerald green
    SUCCESS_MEDIUM = "#059669"
    SUCCESS_DIM = "#047857"

    WARNING = "#ffaa00"  # amber
    ERROR = "#ff4444"  # red
    INFO = "#4488ff"  # blue
    DIM = "#aaaaaa"
    DEBUG = "#00b5b5"  # dim cyan

    # phase colours
    BUFFER = "#ca8a04"  # yellow
    CYCLE = "#16a34a"  # green
    REST = "#2563eb"  # blue
    STOPPED = "#dc2626"  # red
    NEUTRAL = "white"

    CHECKMARK = SUCCESS_BRIGHT

    @classmethod
    def gradient(cls) -> list[str]:
        return [cls.ACCENT_PRIMARY, cls.ACCENT_SECONDARY, cls.ACCENT_DEEP]


_PHASE_COLORS = {
    Phase.BUFFER: CycleColors.BUFFER,
    Phase.CYCLE: CycleColors.CYCLE,
    Phase.RUNNING: CycleColors.CYCLE,
    Phase.REST: CycleColors.REST,
    Phase.STOPPED: CycleColors.STOPPED,
}


# * Colour for a phase; paused automatic runs show the stopped colour
def phase_color(phase: Phase, paused: bool = False) -> str:
    if paused and phase.active:
        return CycleColors.STOPPED
    return _PHASE_COLORS.get(phase, CycleColors.NEUTRAL)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    hex_color = hex_color.lstrip("#")
    return (int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16))


def _lerp_color(a_hex: str, b_hex: str, t: float) -> str:
    ar, ag, ab = _hex_to_rgb(a_hex)
    br, bg, bb = _hex_to_rgb(b_hex)
    mixed = (
        int(round(ar + (br - ar) * t)),
        int(round(ag + (bg - ag) * t)),
        int(round(ab + (bb - ab) * t)),
    )
    return "#{:02x}{:02x}{:02x}".format(*mixed)


# * Gradient text w/ per-character RGB interpolation across colour stops
def natural_gradient(text: str, colors: list[str] | None = None) -> Text:
    colors = colors or CycleColors.gradient()
    if not text or len(colors) < 2 or len(text) == 1:
        return Text(text, style=colors[0] if colors else "white")

    result = Text()
    last = len(text) - 1
    for i, char in enumerate(text):
        seg_pos = (i / last) * (len(colors) - 1)
        idx = int(seg_pos)
        if idx >= len(colors) - 1:
            color = colors[-1]
        else:
            color = _lerp_color(colors[idx], colors[idx + 1], seg_pos - idx)
        result.append(char, style=color)
    return result


def success_gradient(text: str) -> Text:
    return natural_gradient(
        text,
        [CycleColors.SUCCESS_BRIGHT, CycleColors.SUCCESS_MEDIUM, CycleColors.SUCCESS_DIM],
    )


def accent_gradient(text: str) -> Text:
    return natural_gradient(text, CycleColors.gradient())


# * Rich theme w/ semantic & cyclewatch-specific styles
def get_cyclewatch_theme() -> Theme:
    return Theme(
        {
            "success": CycleColors.SUCCESS_BRIGHT,
            "warning": CycleColors.WARNING,
            "error": CycleColors.ERROR,
            "info": CycleColors.INFO,
            "dim": CycleColors.DIM,
            "debug": CycleColors.DEBUG,
            "cw.accent": CycleColors.ACCENT_PRIMARY,
            "cw.accent2": CycleColors.ACCENT_SECONDARY,
            "cw.buffer": CycleColors.BUFFER,
            "cw.cycle": CycleColors.CYCLE,
            "cw.rest": CycleColors.REST,
            "cw.stopped": CycleColors.STOPPED,
        }
    )


# * Push the theme onto the shared console (replacing one pushed earlier)
def initialize_theme() -> None:
    try:
        console.pop_theme()
    except ThemeStackError:
        pass  # nothing pushed yet
    console.push_theme(get_cyclewatch_theme())


def styled_checkmark() -> Text:
    return Text("✓", style=CycleColors.CHECKMARK)


def styled_arrow() -> Text:
    return Text("->", style=CycleColors.ACCENT_SECONDARY)


def styled_bullet() -> Text:
    return Text("•", style=CycleColors.ACCENT_SECONDARY)


def styled_success_line(label: str, value: str | None = None) -> list:
    """Checkmark + gradient label [+ arrow + value], for console.print(*result)."""
    parts: list[Any] = [styled_checkmark(), success_gradient(label)]
    if value is not None:
        parts.extend([styled_arrow(), value])
    return parts


def styled_setting_line(key: str, value: str) -> list:
    """Bullet + key + arrow + value, for console.print(*result)."""
    return [styled_bullet(), f"[bold white]{key}[/]", "[cw.accent2]->", value]


def format_setting_value(value: Any) -> str:
    """Format a setting value with consistent styling."""
    if isinstance(value, str):
        return f'[cw.accent2]"{value}"[/]'
    elif isinstance(value, bool):
        return f"[cw.accent2]{str(value).lower()}[/]"
    elif isinstance(value, (int, float)):
        return f"[cw.accent2]{value}[/]"
    else:
        return f"[cw.accent2]{json.dumps(value)}[/]"
