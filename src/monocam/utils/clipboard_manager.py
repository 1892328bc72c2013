# -*- coding: utf-8 -*-
"""
src/monocam/utils/clipboard_manager.py

Copies recognized text to the system clipboard with 'pyperclip'.

The result window calls this from its "Copy to Clipboard" button. Clipboard
access can fail on headless or minimal Linux systems, so failures are
reported through the return value instead of an exception.
"""

import logging

import pyperclip

logger = logging.getLogger(__name__)

# Longest excerpt of the copied text to include in log messages.
LOG_PREVIEW_CHARS = 40


def copy_to_clipboard(text: str) -> bool:
    """
    Copies the given text to the system clipboard.

    Args:
        text (str): The string to be copied.

    Returns:
        bool: True if the text was copied successfully, False otherwise.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.error(f"Failed to copy text to clipboard: {e}")
        logger.warning(
            "Clipboard functionality may not be available on this system. "
            "If on Linux, please ensure 'xclip' or 'xsel' is installed."
        )
        return False

    preview = text if len(text) <= LOG_PREVIEW_CHARS else text[:LOG_PREVIEW_CHARS] + "..."
    logger.info(f"Copied {len(text)} characters to clipboard: {preview!r}")
    return True
