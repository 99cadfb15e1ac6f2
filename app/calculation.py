from app.errors import DivisionGuard

CHARS_PER_WORD = 5.0

UNIT_CPM = "зн/мин"
UNIT_WPM = "сл/мин"


def calculate_typing_speed(characters_typed: int, time_spent_minutes: float, is_russian: bool) -> int:
    """
    Russian text is scored in characters per minute, everything else in
    words per minute using the 5-characters-per-word convention.
    """
    if time_spent_minutes <= 0:
        raise DivisionGuard(time_spent_minutes)
    if is_russian:
        return int(characters_typed / time_spent_minutes)
    return int((characters_typed / CHARS_PER_WORD) / time_spent_minutes)


def calculate_accuracy(correct_chars: int, total_typed_chars: int, target_length: int) -> int:
    """
    Errors are measured against the target length, not the typed length:
    accuracy = 100 - (typed - correct) / target * 100, clamped to [0, 100].
    """
    if total_typed_chars == 0:
        return 0
    errors = total_typed_chars - correct_chars
    error_pct = errors * 100.0 / max(1, target_length)
    return int(max(0.0, min(100.0, 100 - error_pct)))


def speed_unit(is_russian: bool) -> str:
    return UNIT_CPM if is_russian else UNIT_WPM
