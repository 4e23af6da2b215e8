"""
Run Log system for life-simulation event tracking.

Captures every random draw, lifecycle transition, resolved turn, applied
choice and interaction so a life can be inspected after the fact.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Callable
import json
import logging

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Types of events that can be logged."""

    ROLL = "roll"  # Random draw
    TRANSITION = "transition"  # Lifecycle state machine transition
    TURN = "turn"  # One resolved age-up
    CHOICE = "choice"  # Event choice applied
    INTERACTION = "interaction"  # Family/coworker/classmate/activity action
    CUSTOM = "custom"  # Custom event


@dataclass
class LogEvent:
    """Base class for all logged events."""

    # event_type has a default so subclass fields can have defaults;
    # subclasses set the real value in __post_init__
    event_type: EventType = EventType.CUSTOM
    timestamp: datetime = field(default_factory=datetime.now)
    sequence_number: int = 0
    game_time: Optional[str] = None  # In-game year/age as string
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "sequence_number": self.sequence_number,
            "game_time": self.game_time,
            "context": self.context,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEvent":
        """Create from dictionary."""
        return cls(
            event_type=EventType(data["event_type"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            game_time=data.get("game_time"),
            context=data.get("context", {}),
        )


@dataclass
class RollEvent(LogEvent):
    """A random draw."""

    notation: str = ""  # e.g., "1d20", "5..15", "p<0.20"
    rolls: list[int] = field(default_factory=list)
    modifier: int = 0
    total: int = 0
    reason: str = ""

    def __post_init__(self):
        self.event_type = EventType.ROLL

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "notation": self.notation,
                "rolls": self.rolls,
                "modifier": self.modifier,
                "total": self.total,
                "reason": self.reason,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RollEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            game_time=data.get("game_time"),
            context=data.get("context", {}),
            notation=data.get("notation", ""),
            rolls=data.get("rolls", []),
            modifier=data.get("modifier", 0),
            total=data.get("total", 0),
            reason=data.get("reason", ""),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] ROLL {self.notation}: {self.rolls} = {self.total} ({self.reason})"


@dataclass
class TransitionEvent(LogEvent):
    """A lifecycle state machine transition."""

    from_state: str = ""
    to_state: str = ""
    trigger: str = ""

    def __post_init__(self):
        self.event_type = EventType.TRANSITION

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "from_state": self.from_state,
                "to_state": self.to_state,
                "trigger": self.trigger,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransitionEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            game_time=data.get("game_time"),
            context=data.get("context", {}),
            from_state=data.get("from_state", ""),
            to_state=data.get("to_state", ""),
            trigger=data.get("trigger", ""),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] TRANSITION {self.from_state} -> {self.to_state} (trigger: {self.trigger})"


@dataclass
class TurnEvent(LogEvent):
    """One resolved age-up."""

    age: int = 0
    year: int = 0
    outcome: str = ""  # How the turn ended (event, coworker event, birth, death)
    event_id: str = ""

    def __post_init__(self):
        self.event_type = EventType.TURN

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "age": self.age,
                "year": self.year,
                "outcome": self.outcome,
                "event_id": self.event_id,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TurnEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            game_time=data.get("game_time"),
            context=data.get("context", {}),
            age=data.get("age", 0),
            year=data.get("year", 0),
            outcome=data.get("outcome", ""),
            event_id=data.get("event_id", ""),
        )

    def __str__(self) -> str:
        suffix = f" [{self.event_id}]" if self.event_id else ""
        return f"[{self.sequence_number}] TURN age {self.age}, year {self.year}: {self.outcome}{suffix}"


@dataclass
class ChoiceEvent(LogEvent):
    """A choice applied to the character."""

    event_id: str = ""
    event_kind: str = ""
    choice_id: str = ""
    deltas: dict[str, int] = field(default_factory=dict)
    died: bool = False

    def __post_init__(self):
        self.event_type = EventType.CHOICE

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "event_id": self.event_id,
                "event_kind": self.event_kind,
                "choice_id": self.choice_id,
                "deltas": self.deltas,
                "died": self.died,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChoiceEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            game_time=data.get("game_time"),
            context=data.get("context", {}),
            event_id=data.get("event_id", ""),
            event_kind=data.get("event_kind", ""),
            choice_id=data.get("choice_id", ""),
            deltas=data.get("deltas", {}),
            died=data.get("died", False),
        )

    def __str__(self) -> str:
        death = " (fatal)" if self.died else ""
        return f"[{self.sequence_number}] CHOICE {self.event_kind}:{self.event_id} -> {self.choice_id} {self.deltas}{death}"


@dataclass
class InteractionEvent(LogEvent):
    """A social or activity action outside the turn cycle."""

    target_id: str = ""
    action: str = ""
    log_type: str = ""
    message: str = ""

    def __post_init__(self):
        self.event_type = EventType.INTERACTION

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "target_id": self.target_id,
                "action": self.action,
                "log_type": self.log_type,
                "message": self.message,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InteractionEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            game_time=data.get("game_time"),
            context=data.get("context", {}),
            target_id=data.get("target_id", ""),
            action=data.get("action", ""),
            log_type=data.get("log_type", ""),
            message=data.get("message", ""),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] INTERACTION {self.action} -> {self.target_id} ({self.log_type}): {self.message}"


_EVENT_CLASSES: dict[EventType, type] = {
    EventType.ROLL: RollEvent,
    EventType.TRANSITION: TransitionEvent,
    EventType.TURN: TurnEvent,
    EventType.CHOICE: ChoiceEvent,
    EventType.INTERACTION: InteractionEvent,
}


class RunLog:
    """
    Central run log for all game events.

    Singleton pattern - use get_run_log() to access.
    """

    _instance: Optional["RunLog"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self._events: list[LogEvent] = []
        self._sequence: int = 0
        self._seed: Optional[int] = None
        self._session_start: datetime = datetime.now()
        self._game_time_provider: Optional[Callable[[], str]] = None
        self._subscribers: list[Callable[[LogEvent], None]] = []
        self._paused: bool = False

    def reset(self) -> None:
        """Reset the log for a new session."""
        self._events = []
        self._sequence = 0
        self._session_start = datetime.now()
        logger.info("RunLog reset")

    def set_seed(self, seed: int) -> None:
        """Record the RNG seed used for this session."""
        self._seed = seed
        logger.info(f"RunLog seed set: {seed}")

    def get_seed(self) -> Optional[int]:
        return self._seed

    def set_game_time_provider(self, provider: Optional[Callable[[], str]]) -> None:
        """
        Set a callback to get the current in-game time.

        The provider should return a string like "1512 (age 12)".
        """
        self._game_time_provider = provider

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def is_paused(self) -> bool:
        return self._paused

    def subscribe(self, callback: Callable[[LogEvent], None]) -> None:
        """Subscribe to receive events as they are logged."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[LogEvent], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _get_game_time(self) -> Optional[str]:
        if self._game_time_provider:
            try:
                return self._game_time_provider()
            except Exception as e:
                logger.debug(f"Game time provider failed: {e}")
                return None
        return None

    def _log_event(self, event: LogEvent) -> None:
        if self._paused:
            return

        self._sequence += 1
        event.sequence_number = self._sequence
        event.game_time = self._get_game_time()
        self._events.append(event)

        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception as e:
                logger.warning(f"Subscriber error: {e}")

    def log_roll(
        self,
        notation: str,
        rolls: list[int],
        modifier: int,
        total: int,
        reason: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> RollEvent:
        event = RollEvent(
            notation=notation,
            rolls=rolls,
            modifier=modifier,
            total=total,
            reason=reason,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_transition(
        self,
        from_state: str,
        to_state: str,
        trigger: str,
        context: Optional[dict[str, Any]] = None,
    ) -> TransitionEvent:
        event = TransitionEvent(
            from_state=from_state,
            to_state=to_state,
            trigger=trigger,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_turn(
        self,
        age: int,
        year: int,
        outcome: str,
        event_id: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> TurnEvent:
        event = TurnEvent(
            age=age,
            year=year,
            outcome=outcome,
            event_id=event_id,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_choice(
        self,
        event_id: str,
        event_kind: str,
        choice_id: str,
        deltas: dict[str, int],
        died: bool = False,
    ) -> ChoiceEvent:
        event = ChoiceEvent(
            event_id=event_id,
            event_kind=event_kind,
            choice_id=choice_id,
            deltas=dict(deltas),
            died=died,
        )
        self._log_event(event)
        return event

    def log_interaction(
        self,
        target_id: str,
        action: str,
        log_type: str,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> InteractionEvent:
        event = InteractionEvent(
            target_id=target_id,
            action=action,
            log_type=log_type,
            message=message,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_custom(
        self,
        event_name: str,
        details: dict[str, Any],
    ) -> LogEvent:
        event = LogEvent(
            event_type=EventType.CUSTOM,
            context={"event_name": event_name, **details},
        )
        self._log_event(event)
        return event

    def get_events(
        self,
        event_type: Optional[EventType] = None,
        since_sequence: int = 0,
    ) -> list[LogEvent]:
        """
        Get logged events.

        Args:
            event_type: Filter by event type (None = all)
            since_sequence: Only events after this sequence number
        """
        events = [e for e in self._events if e.sequence_number > since_sequence]
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        return events

    def get_rolls(self) -> list[RollEvent]:
        return [e for e in self._events if isinstance(e, RollEvent)]

    def get_transitions(self) -> list[TransitionEvent]:
        return [e for e in self._events if isinstance(e, TransitionEvent)]

    def get_turns(self) -> list[TurnEvent]:
        return [e for e in self._events if isinstance(e, TurnEvent)]

    def get_choices(self) -> list[ChoiceEvent]:
        return [e for e in self._events if isinstance(e, ChoiceEvent)]

    def get_interactions(self) -> list[InteractionEvent]:
        return [e for e in self._events if isinstance(e, InteractionEvent)]

    def get_event_count(self) -> int:
        return len(self._events)

    def get_summary(self) -> dict[str, Any]:
        return {
            "session_start": self._session_start.isoformat(),
            "seed": self._seed,
            "total_events": len(self._events),
            "rolls": len(self.get_rolls()),
            "transitions": len(self.get_transitions()),
            "turns": len(self.get_turns()),
            "choices": len(self.get_choices()),
            "interactions": len(self.get_interactions()),
            "last_sequence": self._sequence,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_start": self._session_start.isoformat(),
            "seed": self._seed,
            "sequence": self._sequence,
            "events": [e.to_dict() for e in self._events],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def save(self, filepath: str) -> None:
        """Save the log to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info(f"RunLog saved to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "RunLog":
        """Load a log from a file into the global instance."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        log = get_run_log()
        log.reset()
        log._session_start = datetime.fromisoformat(data["session_start"])
        log._seed = data.get("seed")
        log._sequence = data.get("sequence", 0)

        for event_data in data.get("events", []):
            event_class = _EVENT_CLASSES.get(EventType(event_data["event_type"]), LogEvent)
            log._events.append(event_class.from_dict(event_data))

        logger.info(f"RunLog loaded from {filepath}: {len(log._events)} events")
        return log

    def format_log(
        self,
        event_types: Optional[list[EventType]] = None,
        max_events: Optional[int] = None,
    ) -> str:
        """Format the log as a human-readable string."""
        lines = [
            "=== Run Log ===",
            f"Session: {self._session_start.isoformat()}",
            f"Seed: {self._seed if self._seed is not None else 'not set'}",
            f"Total Events: {len(self._events)}",
            "",
        ]

        events = self._events
        if event_types:
            events = [e for e in events if e.event_type in event_types]
        if max_events:
            events = events[-max_events:]

        for event in events:
            lines.append(str(event))

        return "\n".join(lines)


# Singleton access
_run_log: Optional[RunLog] = None


def get_run_log() -> RunLog:
    """Get the global RunLog instance."""
    global _run_log
    if _run_log is None:
        _run_log = RunLog()
    return _run_log


def reset_run_log() -> RunLog:
    """Reset and return the global RunLog instance."""
    log = get_run_log()
    log.reset()
    return log
