"""On/off labels for boolean boot flags.

Usage in menu labels:
    from loader_menu.ui.toggle import format_toggle_label

    label = format_toggle_label("Safe Mode  :", boot.is_safe_mode())
    # Returns: "Safe Mode  : On" or "Safe Mode  : off"
"""

from __future__ import annotations

TOGGLE_ON_TEXT = "On"
TOGGLE_OFF_TEXT = "off"


def format_toggle_label(label: str, state: bool) -> str:
    """Format a label with its on/off state appended.

    Args:
        label: The base label text (e.g., "Verbose    :").
        state: True for On, False for off.
    """
    text = TOGGLE_ON_TEXT if state else TOGGLE_OFF_TEXT
    return f"{label} {text}"
