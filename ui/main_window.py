# ui/main_window.py
from __future__ import annotations
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFrame,
    QLabel, QPushButton, QSizePolicy
)
from PySide6.QtCore import Qt
import pyqtgraph as pg

from app.config import GameConfig
from app.errors import DivisionGuard
from core.chrono import CountdownTimer
from services.highlight import last_typed_is_wrong
from services.session import (
    cancel_session, create_session, delete_character, on_restart,
    round_result, type_character,
)
from ui.widgets import TargetView
from utils.file_handler import load_phrases, pick_phrase
from utils.graph_helper import setup_progress_plot, update_curve

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config: GameConfig):
        super().__init__()
        self.config = config
        self.setWindowTitle("Rotaty")
        self.resize(900, 620)
        self.setStyleSheet("QMainWindow { background: white; }")
        self.phrases = load_phrases(config.phrases_file)

        root = QWidget(self)
        root_h = QHBoxLayout(root)
        root_h.setContentsMargins(32, 32, 32, 32)

        card = QFrame(root)
        card.setObjectName("Card")
        card.setStyleSheet("QFrame#Card { background: white; border-radius: 24px; border: 1px solid #ECECEC; }")
        v = QVBoxLayout(card)
        v.setContentsMargins(48, 48, 48, 48)
        v.setSpacing(16)

        self.target = TargetView(config, card)
        self.target.clicked.connect(self.setFocus)
        v.addWidget(self.target)

        self.lblTimer = QLabel("", card)
        self.lblTimer.setAlignment(Qt.AlignCenter)
        self.lblTimer.setStyleSheet(f"font-size: 28px; font-weight: bold; color: {config.text};")
        v.addWidget(self.lblTimer)

        self.lblStats = QLabel("", card)
        self.lblStats.setAlignment(Qt.AlignCenter)
        self.lblStats.setStyleSheet(f"font-size: 18px; color: {config.text};")
        self.lblStats.setVisible(False)
        v.addWidget(self.lblStats)

        self.plot = pg.PlotWidget(card)
        self.plot.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.plot.setMinimumHeight(160)
        self._curve = setup_progress_plot(self.plot, config.success)
        self.plot.setVisible(False)
        v.addWidget(self.plot)

        self.btnRestart = QPushButton("Рестарт", card)
        self.btnRestart.setFocusPolicy(Qt.NoFocus)
        self.btnRestart.setStyleSheet(
            "QPushButton { color: white; font-size: 16px; padding: 16px 48px; border-radius: 20px;"
            " background: qlineargradient(x1:0, y1:1, x2:1, y2:0, stop:0 #2980B9, stop:1 #3498DB); }"
        )
        self.btnRestart.clicked.connect(self._restart)
        v.addWidget(self.btnRestart, alignment=Qt.AlignHCenter)

        self.lblCongrats = QLabel("ПОЗДРАВЛЯЕМ!", card)
        self.lblCongrats.setAlignment(Qt.AlignCenter)
        self.lblCongrats.setStyleSheet(f"font-size: 32px; font-weight: 900; color: {config.success};")
        self.lblCongrats.setVisible(False)
        v.addWidget(self.lblCongrats)

        root_h.addWidget(card)
        self.setCentralWidget(root)
        self.setFocusPolicy(Qt.StrongFocus)

        self.session = create_session(
            pick_phrase(self.phrases),
            config.duration_seconds,
            timer_factory=self._start_timer,
        )
        self._result_pending = True
        self._render()
        self.setFocus()

    # ---------------- Timer ----------------
    def _start_timer(self, on_tick):
        timer = CountdownTimer.started(on_tick, parent=self)
        timer.ticked.connect(self._render)
        return timer

    # ---------------- Session ----------------
    def _restart(self):
        previous = self.session.state.target_text
        on_restart(self.session, pick_phrase(self.phrases, previous), self.config.duration_seconds)
        self.lblStats.setVisible(False)
        self.plot.setVisible(False)
        self.lblCongrats.setVisible(False)
        self._result_pending = True
        self._render()
        self.setFocus()

    def _render(self):
        state = self.session.state
        self.target.show_state(state, self.session.counters.current_position)
        self.lblTimer.setText(f"Осталось времени: {state.time_left} сек")
        if state.is_game_over and self._result_pending:
            # one attempt per round, even if the result can't be computed
            self._result_pending = False
            self._show_result()
        self.lblCongrats.setVisible(state.is_success)

    def _show_result(self):
        try:
            res = round_result(self.session)
        except DivisionGuard as e:
            log.warning("No result for this round: %s", e)
            return
        self.lblStats.setText(f"Скорость: {res.speed} {res.unit}\nТочность: {res.accuracy}%")
        self.lblStats.setVisible(True)
        update_curve(self._curve, self.session.progress)
        self.plot.setVisible(True)

    # ---------------- Keys ----------------
    def keyPressEvent(self, ev):
        nk = self._normalize_key(ev)
        if nk is None:
            return super().keyPressEvent(ev)
        if nk == "<BACKSPACE>":
            delete_character(self.session)
        else:
            state = type_character(self.session, nk)
            if last_typed_is_wrong(state) and not state.is_game_over:
                self.target.flash()
        self._render()

    def _normalize_key(self, ev) -> str | None:
        if ev.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        if ev.key() == Qt.Key_Backspace:
            return "<BACKSPACE>"
        t = ev.text()
        if t and t.isprintable():
            return t
        return None

    def closeEvent(self, ev):
        cancel_session(self.session)
        super().closeEvent(ev)
