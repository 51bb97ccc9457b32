from __future__ import annotations

from enum import Enum


class ScanState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    ASSEMBLING = "assembling"
    ANALYZING = "analyzing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ScanEvent(str, Enum):
    START_REPOSITORY = "start_repository"
    START_PASTED = "start_pasted"
    FETCHED = "fetched"
    ASSEMBLED = "assembled"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


ACTIVE_STATES = frozenset({ScanState.FETCHING, ScanState.ASSEMBLING, ScanState.ANALYZING})
RESTING_STATES = frozenset({ScanState.IDLE, ScanState.SUCCEEDED, ScanState.FAILED})

_TRANSITIONS: dict[tuple[ScanState, ScanEvent], ScanState] = {}
for _state in RESTING_STATES:
    _TRANSITIONS[(_state, ScanEvent.START_REPOSITORY)] = ScanState.FETCHING
    _TRANSITIONS[(_state, ScanEvent.START_PASTED)] = ScanState.ANALYZING
    # a request rejected before it starts still ends the previous result
    _TRANSITIONS[(_state, ScanEvent.FAILED)] = ScanState.FAILED
for _state in ACTIVE_STATES:
    _TRANSITIONS[(_state, ScanEvent.FAILED)] = ScanState.FAILED
_TRANSITIONS[(ScanState.FETCHING, ScanEvent.FETCHED)] = ScanState.ASSEMBLING
_TRANSITIONS[(ScanState.ASSEMBLING, ScanEvent.ASSEMBLED)] = ScanState.ANALYZING
_TRANSITIONS[(ScanState.ANALYZING, ScanEvent.SUCCEEDED)] = ScanState.SUCCEEDED


class InvalidTransitionError(RuntimeError):
    """Raised on an event the current state does not accept."""

    def __init__(self, state: ScanState, event: ScanEvent) -> None:
        self.state = state
        self.event = event
        super().__init__(f"Event {event.value!r} not allowed in state {state.value!r}")


class ScanStateMachine:
    """Lifecycle of a single scan slot.

    idle -> fetching -> assembling -> analyzing -> succeeded | failed
    Pasted code skips straight from a resting state to analyzing.
    """

    def __init__(self) -> None:
        self._state = ScanState.IDLE

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state in ACTIVE_STATES

    def can_fire(self, event: ScanEvent) -> bool:
        return (self._state, event) in _TRANSITIONS

    def fire(self, event: ScanEvent) -> ScanState:
        try:
            self._state = _TRANSITIONS[(self._state, event)]
        except KeyError:
            raise InvalidTransitionError(self._state, event) from None
        return self._state
