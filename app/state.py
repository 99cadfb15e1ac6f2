from dataclasses import dataclass, field, replace
from typing import FrozenSet
import re

_CYRILLIC = re.compile("[а-яА-ЯёЁ]")


def is_russian_text(text: str) -> bool:
    return bool(_CYRILLIC.search(text or ""))


@dataclass(frozen=True)
class SessionState:
    target_text: str
    current_input: str = ""
    time_left: int = 0
    is_success: bool = False
    is_game_over: bool = False


@dataclass(frozen=True)
class TypingCounters:
    correct_indices: FrozenSet[int] = field(default_factory=frozenset)
    total_characters: int = 0
    current_position: int = 0
    is_russian: bool = True

    @property
    def correct_characters(self) -> int:
        return len(self.correct_indices)

    def move_to(self, position: int) -> "TypingCounters":
        return replace(self, current_position=max(0, position))


def reduce_counters(counters: TypingCounters, state: SessionState) -> TypingCounters:
    """
    Fold one snapshot into the running counters.
    - script flag is re-read from the target only while nothing is typed
    - an index stays counted once it has matched, even if edited later
    - the cursor is left alone; the input driver owns it
    """
    target, typed = state.target_text, state.current_input

    is_russian = counters.is_russian
    if not typed:
        is_russian = is_russian_text(target)

    hits = {
        i for i in range(min(len(typed), len(target)))
        if typed[i] == target[i]
    }
    correct = counters.correct_indices
    if not hits <= correct:
        correct = correct | hits

    return replace(
        counters,
        correct_indices=correct,
        total_characters=len(typed),
        is_russian=is_russian,
    )
