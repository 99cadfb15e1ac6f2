# services/session.py
"""
Driver-facing wrapper around SessionEngine.

A SessionHandle bundles the engine of the current round with the counters
folded from its snapshots and the countdown that feeds it ticks. The UI only
talks to the functions in this module.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

from app.calculation import calculate_accuracy, calculate_typing_speed, speed_unit
from app.state import SessionState, TypingCounters, reduce_counters
from services.typing_engine import SessionEngine

log = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


# called with the tick callback, returns the running timer
TimerFactory = Callable[[Callable[[], None]], Cancellable]


@dataclass
class RoundResult:
    speed: int
    unit: str
    accuracy: int
    elapsed_seconds: float
    is_success: bool


@dataclass
class SessionHandle:
    engine: SessionEngine
    duration_seconds: int
    clock: Callable[[], float] = time.time
    timer_factory: Optional[TimerFactory] = None
    timer: Optional[Cancellable] = None
    counters: TypingCounters = field(default_factory=TypingCounters)
    started_at: float = 0.0
    ended_at: float = 0.0
    # (seconds into the round, correct characters so far), one per tick plus the finish
    progress: List[Tuple[float, int]] = field(default_factory=list)
    _unsubscribe: Optional[Callable[[], None]] = None

    @property
    def state(self) -> SessionState:
        return self.engine.state


def _sample(handle: SessionHandle, elapsed: float):
    """Record the correct count at `elapsed`; a sample that does not move time forward overwrites the last one."""
    correct = handle.counters.correct_characters
    if handle.progress and handle.progress[-1][0] >= elapsed:
        handle.progress[-1] = (handle.progress[-1][0], correct)
    else:
        handle.progress.append((elapsed, correct))


def _on_snapshot(handle: SessionHandle, engine: SessionEngine, state: SessionState):
    if handle.engine is not engine:
        return
    handle.counters = reduce_counters(handle.counters, state)
    if state.is_game_over and not handle.ended_at:
        handle.ended_at = handle.clock()
        ticked = handle.duration_seconds - state.time_left
        _sample(handle, max(ticked, handle.ended_at - handle.started_at))
        cancel_session(handle)
        log.info(
            "round over: success=%s time_left=%d correct=%d typed=%d",
            state.is_success, state.time_left,
            handle.counters.correct_characters, handle.counters.total_characters,
        )


def _tick_if_current(handle: SessionHandle, engine: SessionEngine) -> Optional[SessionState]:
    if handle.engine is not engine:
        log.debug("tick for a replaced session dropped")
        return None
    return on_tick(handle)


def _bind(handle: SessionHandle, engine: SessionEngine):
    """Make `engine` the live engine of `handle` and start its countdown."""
    handle.engine = engine
    handle.duration_seconds = engine.state.time_left
    handle.counters = reduce_counters(TypingCounters(), engine.state)
    handle.started_at = handle.clock()
    handle.ended_at = 0.0
    handle.progress = [(0, 0)]
    handle._unsubscribe = engine.subscribe(lambda s: _on_snapshot(handle, engine, s))
    if handle.timer_factory is not None:
        handle.timer = handle.timer_factory(lambda: _tick_if_current(handle, engine))


def create_session(
    target_text: str,
    duration_seconds: int,
    timer_factory: Optional[TimerFactory] = None,
    clock: Callable[[], float] = time.time,
) -> SessionHandle:
    engine = SessionEngine(target_text, duration_seconds)
    handle = SessionHandle(
        engine=engine,
        duration_seconds=duration_seconds,
        clock=clock,
        timer_factory=timer_factory,
    )
    _bind(handle, engine)
    log.info("session created: %d chars, %d s", len(target_text), duration_seconds)
    return handle


def on_input(handle: SessionHandle, new_input: str) -> SessionState:
    return handle.engine.on_text_input(new_input)


def on_tick(handle: SessionHandle) -> SessionState:
    state = handle.engine.tick()
    _sample(handle, handle.duration_seconds - state.time_left)
    return state


def on_restart(handle: SessionHandle, target_text: str, duration_seconds: int) -> SessionState:
    """
    Replace the round held by `handle`. The new engine is built first so a
    bad config leaves the running round untouched; after that the old timer
    is cancelled and the old engine detached before the new timer starts.
    """
    engine = SessionEngine(target_text, duration_seconds)
    cancel_session(handle)
    if handle._unsubscribe is not None:
        handle._unsubscribe()
        handle._unsubscribe = None
    _bind(handle, engine)
    log.info("session restarted: %d chars, %d s", len(target_text), duration_seconds)
    return handle.state


def cancel_session(handle: SessionHandle):
    timer, handle.timer = handle.timer, None
    if timer is not None:
        timer.cancel()


# ---------------- keystrokes ----------------

def type_character(handle: SessionHandle, ch: str) -> SessionState:
    """Insert `ch` at the cursor and move the cursor past it."""
    s, c = handle.state, handle.counters
    if not ch or s.is_game_over:
        return s
    pos = c.current_position
    if pos >= len(s.target_text):
        return s
    typed = s.current_input
    if pos >= len(typed):
        new_input = typed + ch
    else:
        new_input = typed[:pos] + ch + typed[pos:]
    handle.counters = c.move_to(pos + 1)
    return on_input(handle, new_input)


def delete_character(handle: SessionHandle) -> SessionState:
    """Step the cursor back one and drop everything from it onwards."""
    s, c = handle.state, handle.counters
    if s.is_game_over or c.current_position <= 0:
        return s
    pos = c.current_position - 1
    handle.counters = c.move_to(pos)
    return on_input(handle, s.current_input[:pos])


# ---------------- results ----------------

def round_result(handle: SessionHandle) -> RoundResult:
    """
    Raises DivisionGuard if no time has passed since the round started.
    """
    s, c = handle.state, handle.counters
    end = handle.ended_at or handle.clock()
    elapsed = max(0.0, end - handle.started_at)
    speed = calculate_typing_speed(c.correct_characters, elapsed / 60.0, c.is_russian)
    accuracy = calculate_accuracy(c.correct_characters, c.total_characters, len(s.target_text))
    return RoundResult(
        speed=speed,
        unit=speed_unit(c.is_russian),
        accuracy=accuracy,
        elapsed_seconds=elapsed,
        is_success=s.is_success,
    )
