# -*- coding: utf-8 -*-
"""
src/monocam/utils/hotkey_manager.py

Optional system-wide capture hotkey using the 'pynput' library.

The in-window F4 shortcut covers the usual case. When ``global_hotkey`` is
enabled in the config, HotkeyManager also listens for the hotkey while the
window is not focused. pynput calls back on its own listener thread, so the
callback given here must only hand the event over to the GUI thread (the
application emits a Qt signal).
"""

import logging
from typing import Callable, Optional

from pynput import keyboard

logger = logging.getLogger(__name__)


class HotkeyManager:
    """
    Manages a global hotkey listener in a separate thread.

    Attributes:
        hotkey_str (str): The hotkey in pynput syntax (e.g. '<f4>').
        callback (Callable[[], None]): Called when the hotkey is pressed.
        listener (Optional[keyboard.GlobalHotKeys]): The pynput listener instance.
    """

    def __init__(self, hotkey_str: str, callback: Callable[[], None]):
        self.hotkey_str = hotkey_str
        self.callback = callback
        self.listener: Optional[keyboard.GlobalHotKeys] = None

    def _on_activate(self):
        logger.debug(f"Hotkey '{self.hotkey_str}' activated.")
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Error executing hotkey callback: {e}", exc_info=True)

    @property
    def is_running(self) -> bool:
        return self.listener is not None and self.listener.is_alive()

    def start(self) -> bool:
        """
        Starts the listener thread, replacing any running one.

        Returns:
            bool: False if pynput rejected the hotkey or could not start
                  (for example without a display server).
        """
        if self.is_running:
            self.stop()

        try:
            self.listener = keyboard.GlobalHotKeys({self.hotkey_str: self._on_activate})
            self.listener.start()
        except Exception as e:
            # pynput raises ValueError for a bad hotkey string and various
            # backend errors when no input device is reachable.
            logger.error(f"Failed to start hotkey listener for '{self.hotkey_str}': {e}", exc_info=True)
            self.listener = None
            return False

        logger.info(f"Global hotkey listener started for '{self.hotkey_str}'.")
        return True

    def stop(self):
        """Stops the listener thread if it is running."""
        if self.is_running:
            logger.info("Stopping global hotkey listener.")
            self.listener.stop()
        self.listener = None
