# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Resource management utilities for the Only Albums application."""

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QIcon, QImage, QPainter, QPixmap


def get_project_root() -> Path:
    """Get the project root directory."""
    # Navigate up from src/onlyalbums/ui/resources.py to project root
    return Path(__file__).parent.parent.parent.parent


def get_icon_path() -> str:
    """Get the path to the application icon."""
    return str(get_project_root() / "images" / "icon.png")


def get_application_icon() -> QIcon:
    """Get the application icon as a QIcon object."""
    icon_path = get_icon_path()
    if Path(icon_path).exists():
        return QIcon(icon_path)
    return QIcon()


def create_placeholder_artwork(label: str, size: int = 300) -> QImage:
    """Create a placeholder cover showing the first letter of ``label``.

    Returns a QImage so it can be built off the GUI thread.
    """
    image = QImage(size, size, QImage.Format.Format_ARGB32)
    image.fill(QColor("#f0f0f0"))

    painter = QPainter(image)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    margin = size // 6
    painter.setBrush(QBrush(QColor("#2196F3")))
    painter.setPen(QColor("#1976D2"))
    painter.drawEllipse(margin, margin, size - 2 * margin, size - 2 * margin)

    painter.setPen(QColor("white"))
    font = QFont()
    font.setPointSize(max(8, size // 12))
    font.setBold(True)
    painter.setFont(font)

    letter = label.strip()[:1].upper() or "?"
    painter.drawText(
        margin,
        margin,
        size - 2 * margin,
        size - 2 * margin,
        Qt.AlignmentFlag.AlignCenter,
        letter,
    )
    painter.end()
    return image


def placeholder_pixmap(label: str, size: int) -> QPixmap:
    """Get a placeholder cover as a pixmap (GUI thread only)."""
    return QPixmap.fromImage(create_placeholder_artwork(label, size))
