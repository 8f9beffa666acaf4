"""System clipboard access.

Copies share links and export output using the platform's clipboard
tool. Copying is best effort: failures are logged and reported as False.
"""

import shutil
import subprocess
import sys
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

# Linux tools in order of preference
_LINUX_COMMANDS = (
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
)


def clipboard_command(platform: Optional[str] = None) -> Optional[List[str]]:
    """Find the clipboard command for the current platform.

    Args:
        platform: Optional platform string (defaults to sys.platform)

    Returns:
        Command argument list, or None if no clipboard tool is available
    """
    platform = (platform or sys.platform).lower()

    if platform == "darwin":
        return ["pbcopy"]
    if platform.startswith("win"):
        return ["clip"]
    for command in _LINUX_COMMANDS:
        if shutil.which(command[0]):
            return list(command)
    return None


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    Args:
        text: Text to copy

    Returns:
        True if the clipboard tool accepted the text
    """
    command = clipboard_command()
    if command is None:
        logger.warning("No clipboard tool available")
        return False

    try:
        result = subprocess.run(command, input=text, text=True, capture_output=True, timeout=5)
    except subprocess.TimeoutExpired:
        logger.warning(f"Clipboard command {command[0]} timed out")
        return False
    except OSError as e:
        logger.warning(f"Clipboard command {command[0]} failed: {e}")
        return False

    if result.returncode != 0:
        logger.warning(f"Clipboard command {command[0]} returned {result.returncode}: {result.stderr.strip()}")
        return False
    return True
