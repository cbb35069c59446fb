"""Owns the authoritative snapshot and runs the reducer for every action."""
from __future__ import annotations

from typing import Any

from esper import World

from blockfall.components.actions import Action, ActionType
from blockfall.components.game_session import GameSession
from blockfall.components.game_state import GameState
from blockfall.events.bus import (
    EVENT_ACTION_APPLIED,
    EVENT_ACTION_REQUEST,
    EVENT_SESSION_RESET,
    EVENT_STATE_CHANGED,
    EventBus,
)
from blockfall.systems.game_reducer import is_valid_action, reduce
from blockfall.utils.state_diff import collect_state_events


def get_session(world: World) -> GameSession:
    for _, session in world.get_component(GameSession):
        return session
    raise RuntimeError("GameSession not found")


def current_state(world: World) -> GameState:
    return get_session(world).state


class GameSessionSystem:
    """Single entry point that applies actions and notifies observers.

    Dispatch is synchronous: the reducer runs to completion and all observer
    events are emitted before ``dispatch`` returns. Observers that dispatch from
    inside a handler therefore see the already-updated snapshot.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_ACTION_REQUEST, self._on_action_request)

    @property
    def state(self) -> GameState:
        return current_state(self.world)

    def can_dispatch(self, action: Action) -> bool:
        return is_valid_action(self.state, action)

    def dispatch(self, action: Action, *, source: str = "direct") -> bool:
        """Apply ``action``; returns False when it was not valid for the current state."""
        session = get_session(self.world)
        previous = session.state
        if not is_valid_action(previous, action):
            return False
        new_state = reduce(previous, action)
        session.state = new_state
        changed = new_state is not previous
        self.event_bus.emit(EVENT_ACTION_APPLIED, action=action, changed=changed, source=source)
        if not changed:
            return True
        if action.type is ActionType.RESTART_GAME:
            self.event_bus.emit(EVENT_SESSION_RESET, state=new_state)
        for name, payload in collect_state_events(previous, new_state):
            self.event_bus.emit(name, **payload)
        self.event_bus.emit(EVENT_STATE_CHANGED, previous=previous, state=new_state, action=action)
        return True

    def _on_action_request(self, sender: Any, **payload: Any) -> None:
        action = payload.get("action")
        if not isinstance(action, Action):
            return
        self.dispatch(action, source=str(payload.get("source", "input")))
