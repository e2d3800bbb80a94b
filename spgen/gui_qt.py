"""
Tabbed Qt GUI for the secure password generator.

Tabs:
- Generator: constraints, generated password, strength meter, QR preview
- About: what the options mean
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFont, QGuiApplication, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QTabWidget,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from .cli import generate_password_with_meta
from .config import DEFAULT_CONFIG, MAX_LENGTH, GenerationConfig
from .entropy import strength_percent
from .errors import PasswordGenerationError
from .qr import make_qr_png

logger = logging.getLogger(__name__)

CLIPBOARD_CLEAR_MS = 15000


class GeneratorTab(QWidget):
    """
    Generator tab: controls + password display.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.config = DEFAULT_CONFIG

        # Secure clipboard auto-clear
        self._clipboard_token: str | None = None
        self._clipboard_timer = QTimer(self)
        self._clipboard_timer.setSingleShot(True)
        self._clipboard_timer.timeout.connect(self._on_clipboard_timeout)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        layout.addWidget(self._build_config_group())
        layout.addWidget(self._build_password_group())
        layout.addWidget(self._build_status_label())

    # -- groups --

    def _build_config_group(self) -> QGroupBox:
        group = QGroupBox("Configuration")
        layout = QVBoxLayout()
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        length_label = QLabel("Password length (characters)")
        self.length_spin = QSpinBox()
        self.length_spin.setRange(1, MAX_LENGTH)
        self.length_spin.setValue(self.config.length)

        self.lower_check = QCheckBox("Lowercase (a-z)")
        self.lower_check.setChecked(self.config.include_lowercase)
        self.upper_check = QCheckBox("Uppercase (A-Z)")
        self.upper_check.setChecked(self.config.include_uppercase)
        self.digits_check = QCheckBox("Digits (0-9)")
        self.digits_check.setChecked(self.config.include_digits)
        self.symbols_check = QCheckBox("Symbols (!@#...)")
        self.symbols_check.setChecked(self.config.include_symbols)

        self.ambiguous_check = QCheckBox("Exclude ambiguous characters (0 O 1 l I)")
        self.ambiguous_check.setChecked(self.config.exclude_ambiguous)
        self.repeats_check = QCheckBox("No identical neighbouring characters")
        self.repeats_check.setChecked(self.config.exclude_consecutive_repeats)

        self.autocopy_check = QCheckBox("Auto-copy after generation")
        self.autocopy_check.setChecked(True)

        layout.addWidget(length_label)
        layout.addWidget(self.length_spin)

        classes_row = QHBoxLayout()
        for check in (
            self.lower_check,
            self.upper_check,
            self.digits_check,
            self.symbols_check,
        ):
            classes_row.addWidget(check)
        layout.addLayout(classes_row)

        layout.addWidget(self.ambiguous_check)
        layout.addWidget(self.repeats_check)
        layout.addWidget(self.autocopy_check)
        layout.addStretch()

        group.setLayout(layout)
        return group

    def _build_password_group(self) -> QGroupBox:
        group = QGroupBox("Password")
        layout = QVBoxLayout()
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.generate_button = QPushButton("Generate")
        gen_font = self.generate_button.font()
        gen_font.setPointSize(13)
        gen_font.setBold(True)
        self.generate_button.setFont(gen_font)
        self.generate_button.setCursor(Qt.PointingHandCursor)
        self.generate_button.clicked.connect(self.on_generate_clicked)
        layout.addWidget(self.generate_button)

        # QTextEdit so long passwords scroll instead of being cut off
        self.password_field = QTextEdit()
        self.password_field.setReadOnly(True)
        pw_font = QFont("Consolas")
        pw_font.setPointSize(14)
        self.password_field.setFont(pw_font)
        self.password_field.setPlaceholderText(
            "Click Generate to create a password..."
        )
        self.password_field.setLineWrapMode(QTextEdit.NoWrap)
        self.password_field.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.password_field.setFixedHeight(48)

        buttons_row = QHBoxLayout()
        buttons_row.addStretch()
        self.copy_button = QPushButton("Copy to Clipboard")
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        self.qr_button = QPushButton("Show QR")
        self.qr_button.clicked.connect(self.on_show_qr_clicked)
        buttons_row.addWidget(self.copy_button)
        buttons_row.addWidget(self.qr_button)
        buttons_row.addStretch()

        self.strength_bar = QProgressBar()
        self.strength_bar.setRange(0, 100)
        self.strength_bar.setValue(0)
        self.strength_bar.setTextVisible(False)

        self.strength_label = QLabel("Password strength: –")
        self.strength_label.setAlignment(Qt.AlignCenter)

        self.qr_label = QLabel()
        self.qr_label.setAlignment(Qt.AlignCenter)

        layout.addWidget(self.password_field)
        layout.addLayout(buttons_row)
        layout.addWidget(self.strength_bar)
        layout.addWidget(self.strength_label)
        layout.addWidget(self.qr_label)

        group.setLayout(layout)
        return group

    def _build_status_label(self) -> QLabel:
        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        return self.status_label

    # -- actions --

    def _config_from_controls(self) -> GenerationConfig:
        return replace(
            self.config,
            length=self.length_spin.value(),
            include_lowercase=self.lower_check.isChecked(),
            include_uppercase=self.upper_check.isChecked(),
            include_digits=self.digits_check.isChecked(),
            include_symbols=self.symbols_check.isChecked(),
            exclude_ambiguous=self.ambiguous_check.isChecked(),
            exclude_consecutive_repeats=self.repeats_check.isChecked(),
        )

    def on_generate_clicked(self) -> None:
        try:
            self.config = self._config_from_controls()
            meta = generate_password_with_meta(self.config)
        except PasswordGenerationError as exc:
            self._show_error(f"Error while generating password:\n{exc}")
            return

        self.password_field.setPlainText(meta.password)
        self.qr_label.clear()

        self.status_label.setText(f"Generated {meta.length} characters.")
        self.strength_bar.setValue(strength_percent(meta.entropy_bits))
        self.strength_label.setText(
            f"Password strength: {meta.strength} (~{meta.entropy_bits:.1f} bits)"
        )

        if self.autocopy_check.isChecked():
            self.copy_to_clipboard(show_message=False)

    def on_show_qr_clicked(self) -> None:
        password = self.password_field.toPlainText()
        if not password:
            self._show_error("No password to encode. Generate one first.")
            return

        try:
            png = make_qr_png(password)
        except PasswordGenerationError as exc:
            self._show_error(f"Could not render QR code:\n{exc}")
            return

        pixmap = QPixmap()
        pixmap.loadFromData(png, "PNG")
        self.qr_label.setPixmap(pixmap)

    def _arm_secure_clipboard(self, owner_tag: str, timeout_ms: int = CLIPBOARD_CLEAR_MS) -> None:
        """
        Start a timer to clear the clipboard after a short interval.

        owner_tag is used so we only clear clipboard content we put there.
        """
        self._clipboard_token = owner_tag
        self._clipboard_timer.start(timeout_ms)

    def _on_clipboard_timeout(self) -> None:
        if not self._clipboard_token:
            return

        cb = QGuiApplication.clipboard()
        if cb.text():
            cb.clear()

        self._clipboard_token = None
        self.status_label.setText("Clipboard cleared for safety.")

    def copy_to_clipboard(self, show_message: bool = True) -> None:
        password = self.password_field.toPlainText()
        if not password:
            self._show_error("No password to copy. Generate one first.")
            return

        QGuiApplication.clipboard().setText(password)
        self._arm_secure_clipboard(owner_tag="generator")

        if show_message:
            self.status_label.setText(
                "Password copied to clipboard (auto-clear in a few seconds)."
            )

    def _show_error(self, message: str) -> None:
        logger.info("Generator error shown to user: %s", message)
        self.status_label.setText(message)
        msg = QMessageBox(self)
        msg.setWindowTitle("Error")
        msg.setIcon(QMessageBox.Critical)
        msg.setText(message)
        msg.exec()


class AboutTab(QWidget):
    """
    About tab: what each option does.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel("About – spgen")
        title_font = title.font()
        title_font.setPointSize(title_font.pointSize() + 2)
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        intro = QLabel(
            "Passwords are drawn from the operating system's secure random "
            "source. Nothing you generate is stored or logged."
        )
        intro.setWordWrap(True)
        layout.addWidget(intro)

        options_label = QLabel("<b>Options</b>")
        layout.addWidget(options_label)

        options_text = QLabel(
            "• Every selected character type appears at least once, so the "
            "length must be at least the number of selected types.\n"
            "• Excluding ambiguous characters keeps 0 O 1 l I out of the random "
            "fill; the one guaranteed character per type may still be one of them.\n"
            "• With identical neighbours disabled, no character is ever followed "
            "by itself.\n"
            "• Copied passwords are cleared from the clipboard after 15 seconds."
        )
        options_text.setWordWrap(True)
        layout.addWidget(options_text)

        strength_label = QLabel("<b>Strength</b>")
        layout.addWidget(strength_label)

        strength_text = QLabel(
            "Entropy is estimated from the character types present: "
            "log2(alphabet size) × length. Under 30 bits is Very Weak, "
            "30–50 Weak, 50–70 Fair, 70–90 Strong, 90 and above Very Strong."
        )
        strength_text.setWordWrap(True)
        layout.addWidget(strength_text)

        layout.addStretch(1)


class PasswordGeneratorWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()

        self.setWindowTitle("spgen – Secure Password Generator")
        self.setMinimumSize(600, 640)
        self.resize(600, 640)

        self._apply_base_style()

        self.tabs = QTabWidget()
        self.generator_tab = GeneratorTab()
        self.about_tab = AboutTab()

        self.tabs.addTab(self.generator_tab, "Generator")
        self.tabs.addTab(self.about_tab, "About")

        self.setCentralWidget(self.tabs)

    def _apply_base_style(self) -> None:
        self.setStyleSheet(
            """
            QMainWindow, QWidget {
                color: #e5e7eb;
                background-color: #05070c;
                font-family: Segoe UI, Arial, sans-serif;
            }
            QGroupBox {
                border: 1px solid #1f2933;
                border-radius: 10px;
                margin-top: 16px;
                background-color: #080b12;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                subcontrol-position: top left;
                padding: 2px 8px;
                color: #7dd3fc;
                font-weight: 600;
            }
            QPushButton {
                border-radius: 8px;
                padding: 6px 14px;
                background-color: #0b1120;
                border: 1px solid #38bdf8;
            }
            QPushButton:hover {
                background-color: #020617;
            }
            QSpinBox {
                border: 1px solid #1f2933;
                border-radius: 6px;
                padding: 4px 6px;
                background-color: #050810;
            }
            QProgressBar {
                border: 1px solid #1f2933;
                border-radius: 4px;
                height: 8px;
            }
            QProgressBar::chunk {
                background-color: #38bdf8;
            }
            """
        )


def main() -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    window = PasswordGeneratorWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
