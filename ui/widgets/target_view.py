# ui/widgets/target_view.py
import html

from PySide6.QtCore import Qt, Signal, QPropertyAnimation
from PySide6.QtWidgets import QLabel, QSizePolicy, QGraphicsOpacityEffect

from app.config import GameConfig
from app.state import SessionState
from services.highlight import CORRECT, WRONG, caret_index, classify_characters


class TargetView(QLabel):
    """
    Shows the phrase with each typed character coloured by correctness and
    a grey background on the next expected character.
    """
    clicked = Signal()

    def __init__(self, config: GameConfig, parent=None):
        super().__init__(parent)
        self.config = config
        self.setObjectName("lblTarget")
        self.setTextFormat(Qt.RichText)
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignCenter)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.setStyleSheet("font-size: 22px; font-weight: bold;")
        self.setCursor(Qt.IBeamCursor)

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(1.0)
        self.setGraphicsEffect(self._opacity)
        self._flash = QPropertyAnimation(self._opacity, b"opacity", self)
        self._flash.setDuration(200)
        self._flash.setStartValue(1.0)
        self._flash.setKeyValueAt(0.5, 0.3)
        self._flash.setEndValue(1.0)

    def mousePressEvent(self, ev):
        self.clicked.emit()
        super().mousePressEvent(ev)

    def flash(self):
        self._flash.stop()
        self._flash.start()

    def show_state(self, state: SessionState, position: int):
        cfg = self.config
        caret = caret_index(state, position)
        colors = {CORRECT: cfg.correct, WRONG: cfg.wrong}

        parts = []
        for i, (ch, mark) in enumerate(zip(state.target_text, classify_characters(state))):
            style = [f"color:{colors.get(mark, cfg.pending)}"]
            txt = html.escape(ch)
            if i == caret:
                style.append(f"background:{cfg.caret_bg}")
                if ch == " ":
                    txt = "&nbsp;"
            parts.append(f'<span style="{";".join(style)}">{txt}</span>')
        self.setText("".join(parts))
