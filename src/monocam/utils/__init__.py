# -*- coding: utf-8 -*-
"""
The Utilities Package for MonoCam.

Small helpers used by the GUI shell:

- clipboard_manager: copy recognized text with pyperclip.
- hotkey_manager: optional global capture hotkey with pynput.
- qt_images: FrameBuffer to QImage conversion.

The modules are not imported here because each pulls in a GUI-side
dependency (pynput needs a display server on Linux).
"""
