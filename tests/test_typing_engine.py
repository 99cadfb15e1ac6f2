"""Tests for services.typing_engine – the round state machine."""

import pytest

from app.errors import InvalidConfig
from app.state import SessionState
from services.typing_engine import SessionEngine


# ---------------------------------------------------------------------------
# creation
# ---------------------------------------------------------------------------

class TestCreate:
    def test_fresh_state(self):
        e = SessionEngine("hello", 30)
        assert e.state == SessionState(
            target_text="hello", current_input="", time_left=30,
            is_success=False, is_game_over=False,
        )

    def test_empty_target_rejected(self):
        with pytest.raises(InvalidConfig):
            SessionEngine("", 30)

    @pytest.mark.parametrize("duration", [0, -5])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(InvalidConfig):
            SessionEngine("hello", duration)

    @pytest.mark.parametrize("duration", [0.5, 2.5, "30", None])
    def test_fractional_or_non_numeric_duration_rejected(self, duration):
        with pytest.raises(InvalidConfig):
            SessionEngine("hi", duration)

    def test_whole_float_duration_accepted(self):
        s = SessionEngine("hi", 3.0).state
        assert s.time_left == 3
        assert isinstance(s.time_left, int)

    def test_restart_rejects_fractional_duration(self):
        e = SessionEngine("hi", 5)
        with pytest.raises(InvalidConfig):
            e.start_new_game("hi", 0.5)
        assert e.state.time_left == 5

    def test_invalid_config_is_a_value_error(self):
        with pytest.raises(ValueError):
            SessionEngine("", 1)


# ---------------------------------------------------------------------------
# input
# ---------------------------------------------------------------------------

class TestTextInput:
    def test_partial_input(self):
        e = SessionEngine("hello", 30)
        s = e.on_text_input("hel")
        assert s.current_input == "hel"
        assert not s.is_success
        assert not s.is_game_over

    def test_exact_match_wins(self):
        e = SessionEngine("hello", 30)
        s = e.on_text_input("hello")
        assert s.is_success and s.is_game_over

    def test_wrong_full_length_input_does_not_win(self):
        e = SessionEngine("hello", 30)
        s = e.on_text_input("hellp")
        assert not s.is_success and not s.is_game_over

    def test_input_after_success_ignored(self):
        e = SessionEngine("hi", 30)
        e.on_text_input("hi")
        s = e.on_text_input("h")
        assert s.current_input == "hi"
        assert s.is_success

    def test_input_after_timeout_ignored(self):
        e = SessionEngine("hi", 1)
        e.on_text_input("h")
        e.tick()
        s = e.on_text_input("hi")
        assert s.current_input == "h"
        assert s.is_game_over and not s.is_success

    def test_snapshots_are_immutable(self):
        e = SessionEngine("hi", 30)
        before = e.state
        e.on_text_input("h")
        assert before.current_input == ""
        with pytest.raises(AttributeError):
            e.state.current_input = "x"


# ---------------------------------------------------------------------------
# tick
# ---------------------------------------------------------------------------

class TestTick:
    def test_decrements(self):
        e = SessionEngine("hi", 3)
        assert e.tick().time_left == 2
        assert not e.state.is_game_over

    def test_reaching_zero_ends_without_success(self):
        e = SessionEngine("hi", 2)
        e.tick()
        s = e.tick()
        assert s.time_left == 0
        assert s.is_game_over and not s.is_success

    def test_never_below_zero(self):
        e = SessionEngine("hi", 1)
        for _ in range(5):
            s = e.tick()
        assert s.time_left == 0

    def test_time_left_non_increasing(self):
        e = SessionEngine("hi", 4)
        seen = [e.state.time_left]
        for _ in range(6):
            seen.append(e.tick().time_left)
        assert seen == sorted(seen, reverse=True)

    def test_success_survives_timeout(self):
        e = SessionEngine("hi", 1)
        e.on_text_input("hi")
        s = e.tick()
        assert s.is_success and s.is_game_over


# ---------------------------------------------------------------------------
# restart
# ---------------------------------------------------------------------------

class TestStartNewGame:
    @pytest.mark.parametrize("finish", ["success", "timeout", "running"])
    def test_full_reset_from_any_state(self, finish):
        e = SessionEngine("hi", 1)
        if finish == "success":
            e.on_text_input("hi")
        elif finish == "timeout":
            e.tick()
        else:
            e.on_text_input("h")
        s = e.start_new_game("привет", 45)
        assert s == SessionState(target_text="привет", time_left=45)

    def test_rejects_bad_config(self):
        e = SessionEngine("hi", 5)
        with pytest.raises(InvalidConfig):
            e.start_new_game("", 5)
        assert e.state.target_text == "hi"


# ---------------------------------------------------------------------------
# subscription
# ---------------------------------------------------------------------------

class TestSubscribe:
    def test_one_snapshot_per_mutation(self):
        e = SessionEngine("hi", 5)
        got = []
        e.subscribe(got.append)
        returned = [e.on_text_input("h"), e.tick(), e.start_new_game("yo", 3)]
        assert got == returned

    def test_ignored_input_still_reports_state(self):
        e = SessionEngine("hi", 5)
        e.on_text_input("hi")
        got = []
        e.subscribe(got.append)
        e.on_text_input("x")
        assert len(got) == 1 and got[0].current_input == "hi"

    def test_unsubscribe(self):
        e = SessionEngine("hi", 5)
        got = []
        unsubscribe = e.subscribe(got.append)
        e.tick()
        unsubscribe()
        unsubscribe()
        e.tick()
        assert len(got) == 1
