"""
Tests for the life-cycle state machine.

Verifies that:
1. Only IDLE may advance a year
2. Every AWAITING state leaves only through its own trigger (or death)
3. Invalid triggers raise and leave the state untouched
4. Transitions are recorded in history and in the RunLog
"""

import pytest

from src.game_state.state_machine import (
    VALID_TRANSITIONS,
    InvalidTransitionError,
    LifeState,
    StateMachine,
)
from src.observability.run_log import get_run_log


class TestTransitions:

    def test_starts_idle(self, state_machine):
        assert state_machine.current_state == LifeState.IDLE
        assert state_machine.can_advance

    @pytest.mark.parametrize("trigger,target", [
        ("event_presented", LifeState.AWAITING_CHOICE),
        ("birth_announced", LifeState.AWAITING_BIRTH_ACK),
        ("character_died", LifeState.AWAITING_DEATH_ACK),
    ])
    def test_idle_exits(self, state_machine, trigger, target):
        assert state_machine.transition(trigger) == target
        assert not state_machine.can_advance

    def test_choice_round_trip(self, state_machine):
        state_machine.transition("event_presented")
        state_machine.transition("choice_resolved")
        assert state_machine.current_state == LifeState.IDLE
        assert state_machine.previous_state == LifeState.AWAITING_CHOICE

    def test_birth_then_event(self, state_machine):
        state_machine.transition("birth_announced")
        state_machine.transition("birth_acknowledged")
        state_machine.transition("event_presented")
        assert state_machine.current_state == LifeState.AWAITING_CHOICE

    def test_death_only_leaves_by_acknowledgement(self, state_machine):
        state_machine.transition("character_died")
        assert state_machine.get_valid_triggers() == ["death_acknowledged"]
        with pytest.raises(InvalidTransitionError):
            state_machine.transition("event_presented")
        state_machine.transition("death_acknowledged")
        assert state_machine.current_state == LifeState.IDLE

    def test_invalid_trigger_leaves_state(self, state_machine):
        state_machine.transition("event_presented")
        with pytest.raises(InvalidTransitionError, match="Cannot trigger 'event_presented'"):
            state_machine.transition("event_presented")
        assert state_machine.current_state == LifeState.AWAITING_CHOICE

    def test_cannot_acknowledge_from_idle(self, state_machine):
        assert not state_machine.can_transition("birth_acknowledged")
        assert not state_machine.can_transition("death_acknowledged")

    def test_every_awaiting_state_can_die(self):
        dying = {t.from_state for t in VALID_TRANSITIONS if t.trigger == "character_died"}
        assert dying == {LifeState.IDLE, LifeState.AWAITING_CHOICE, LifeState.AWAITING_BIRTH_ACK}


class TestHistory:

    def test_history_records_transitions(self, state_machine):
        state_machine.transition("event_presented", {"event": "village_fair"})
        history = state_machine.state_history
        assert history[0].trigger == "initialization"
        assert history[-1].trigger == "event_presented"
        assert history[-1].context == {"event": "village_fair"}

    def test_history_is_a_copy(self, state_machine):
        state_machine.state_history.clear()
        assert len(state_machine.state_history) == 1

    def test_transitions_reach_run_log(self, state_machine):
        state_machine.transition("birth_announced")
        transitions = get_run_log().get_transitions()
        assert transitions[-1].from_state == "idle"
        assert transitions[-1].to_state == "awaiting_birth_ack"

    def test_reset_forces_idle(self, state_machine):
        state_machine.transition("character_died")
        state_machine.reset("new life")
        assert state_machine.current_state == LifeState.IDLE
        assert state_machine.state_history[-1].trigger == "RESET: new life"

    def test_state_info(self, state_machine):
        info = state_machine.get_state_info()
        assert info["current_state"] == "idle"
        assert info["previous_state"] is None
        assert info["transition_count"] == 1
