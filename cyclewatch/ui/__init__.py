# cyclewatch/ui/__init__.py
# Rendering: theming, live training view & session reports

from .reporting import (
    format_clock,
    format_countdown,
    format_minutes,
    render_session,
    render_session_list,
)
from .training_view import render_training

__all__ = [
    "format_clock",
    "format_countdown",
    "format_minutes",
    "render_session",
    "render_session_list",
    "render_training",
]
