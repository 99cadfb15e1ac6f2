# services/highlight.py
from typing import Optional, Tuple

from app.state import SessionState

CORRECT = "correct"
WRONG = "wrong"
PENDING = "pending"


def classify_characters(state: SessionState) -> Tuple[str, ...]:
    """One mark per target character: typed-and-matching, typed-and-wrong, or not yet typed."""
    target, typed = state.target_text, state.current_input
    marks = []
    for i, expected in enumerate(target):
        if i >= len(typed):
            marks.append(PENDING)
        elif typed[i] == expected:
            marks.append(CORRECT)
        else:
            marks.append(WRONG)
    return tuple(marks)


def caret_index(state: SessionState, position: int) -> Optional[int]:
    if state.is_success or position < 0 or position >= len(state.target_text):
        return None
    return position


def last_typed_is_wrong(state: SessionState) -> bool:
    typed, target = state.current_input, state.target_text
    i = len(typed) - 1
    return 0 <= i < len(target) and typed[i] != target[i]
