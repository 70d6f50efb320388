"""Best-effort copy to the OS clipboard."""

from __future__ import annotations

import logging
import subprocess
import sys

logger = logging.getLogger(__name__)

CLIPBOARD_COMMANDS: dict[str, list[str]] = {
    "darwin": ["pbcopy"],
    "linux": ["xclip", "-selection", "clipboard"],
}


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard. Returns False instead of raising."""
    command = CLIPBOARD_COMMANDS.get(sys.platform)
    if command is None:
        logger.debug("No clipboard support on %s", sys.platform)
        return False
    try:
        subprocess.run(command, input=text.encode("utf-8"), check=True, capture_output=True)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Clipboard copy via %s failed: %s", command[0], e)
        return False
    return True
