"""Seek label formatting for paragraph and highlight timestamps."""

from __future__ import annotations

import math


def format_timestamp(seconds: float) -> str:
    """Format seconds as ``M:SS``, or ``H:MM:SS`` once hours are non-zero.

    Floor-based: 65.9 renders as ``1:05``. Negative or non-finite input is
    a caller error and is not checked.
    """
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)

    if hours > 0:
        return "{}:{:02d}:{:02d}".format(hours, minutes, secs)
    return "{}:{:02d}".format(minutes, secs)
