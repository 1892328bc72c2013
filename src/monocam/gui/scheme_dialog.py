# -*- coding: utf-8 -*-
"""
src/monocam/gui/scheme_dialog.py

Modal dialog for choosing one of the built-in colour schemes.

Each option is drawn in its own colours so the user can preview the scheme
before picking it.
"""

from typing import Optional

from PyQt6.QtWidgets import (QButtonGroup, QDialog, QDialogButtonBox, QLabel, QRadioButton,
                             QVBoxLayout, QWidget)

from ..core.color_scheme import BUILTIN_SCHEMES, ColorScheme


def _hex(color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def _preview_style(scheme: ColorScheme) -> str:
    style = f"QRadioButton {{ color: {_hex(scheme.foreground)}; background-color: {_hex(scheme.background)}; padding: 5px;"
    if scheme.background == (255, 255, 255):
        # A white swatch needs a border to stand out from the dialog.
        style += " border: 1px solid black;"
    return style + " }"


class ColorSchemeDialog(QDialog):
    """Lets the user pick a scheme by index."""

    def __init__(self, current_index: int = 0, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Select Color Scheme")
        self.setModal(True)
        self.resize(300, 250)

        layout = QVBoxLayout(self)
        title = QLabel("Choose a color scheme for monochrome conversion:")
        title.setWordWrap(True)
        layout.addWidget(title)

        self.group = QButtonGroup(self)
        for index, scheme in enumerate(BUILTIN_SCHEMES):
            button = QRadioButton(scheme.name)
            button.setStyleSheet(_preview_style(scheme))
            self.group.addButton(button, index)
            layout.addWidget(button)

        checked = self.group.button(current_index) or self.group.button(0)
        checked.setChecked(True)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    @property
    def selected_index(self) -> int:
        return self.group.checkedId()
