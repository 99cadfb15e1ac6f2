# services/typing_engine.py
import logging
from dataclasses import replace
from typing import Callable, List

from app.errors import InvalidConfig
from app.state import SessionState

log = logging.getLogger(__name__)

Subscriber = Callable[[SessionState], None]


def _validate(target_text: str, duration_seconds: int) -> int:
    if not target_text:
        raise InvalidConfig("target text must not be empty")
    try:
        seconds = int(duration_seconds)
    except (TypeError, ValueError):
        raise InvalidConfig(f"duration is not a number: {duration_seconds!r}")
    # whole seconds only, so time_left lands on 0 exactly
    if seconds != duration_seconds or seconds <= 0:
        raise InvalidConfig(f"duration must be a positive whole number, got {duration_seconds!r}")
    return seconds


class SessionEngine:
    """
    Owns the state of one round. Every mutator swaps in a new immutable
    SessionState, pushes it to subscribers and returns it.
    """

    def __init__(self, target_text: str, duration_seconds: int):
        self._subscribers: List[Subscriber] = []
        self._state = self._fresh(target_text, duration_seconds)

    @staticmethod
    def _fresh(target_text: str, duration_seconds: int) -> SessionState:
        seconds = _validate(target_text, duration_seconds)
        return SessionState(target_text=target_text, time_left=seconds)

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self, state: SessionState) -> SessionState:
        self._state = state
        for callback in list(self._subscribers):
            callback(state)
        return state

    def on_text_input(self, new_input: str) -> SessionState:
        s = self._state
        if s.is_game_over:
            log.debug("input after game over ignored: %r", new_input)
            return self._emit(s)
        new_input = new_input or ""
        if new_input == s.target_text:
            return self._emit(replace(s, current_input=new_input, is_success=True, is_game_over=True))
        return self._emit(replace(s, current_input=new_input))

    def tick(self) -> SessionState:
        s = self._state
        left = max(0, s.time_left - 1)
        return self._emit(replace(s, time_left=left, is_game_over=s.is_game_over or left == 0))

    def start_new_game(self, target_text: str, duration_seconds: int) -> SessionState:
        return self._emit(self._fresh(target_text, duration_seconds))
