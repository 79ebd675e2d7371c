"""Best-effort copy to the system clipboard."""

import logging
import os
import shutil
import subprocess
import sys
from typing import Optional

logger = logging.getLogger(__name__)

# Each tool keeps the text available after it exits (xclip and wl-copy fork to serve the selection)
LINUX_COMMANDS = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


def clipboard_command() -> Optional[list[str]]:
    """
    Find a clipboard command for this platform.

    Returns:
        Command line to pipe text into, or None if no tool is installed
    """
    if sys.platform == "darwin":
        candidates: tuple[tuple[str, ...], ...] = (("pbcopy",),)
    elif sys.platform == "win32":
        candidates = (("clip",),)
    else:
        candidates = LINUX_COMMANDS
        if not os.environ.get("WAYLAND_DISPLAY"):
            candidates = tuple(c for c in candidates if c[0] != "wl-copy")

    for command in candidates:
        if shutil.which(command[0]):
            return list(command)
    return None


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Args:
        text: Text to copy

    Returns:
        True only if the clipboard tool accepted the text
    """
    command = clipboard_command()
    if command is None:
        logger.warning("No clipboard tool found (install xclip, xsel or wl-clipboard)")
        return False

    try:
        subprocess.run(command, input=text.encode("utf-8"), check=True, timeout=5)
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        logger.warning(f"Failed to copy to clipboard with {command[0]}: {e}")
        return False
    return True
