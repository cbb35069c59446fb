from __future__ import annotations

from typing import Any, Dict, Mapping

from esper import World

from blockfall.components.actions import Action, ActionType, rotate_action
from blockfall.components.game_state import GameStatus
from blockfall.events.bus import (
    EVENT_ACTION_REQUEST,
    EVENT_KEY_PRESS,
    EVENT_KEY_RELEASE,
    EVENT_SESSION_RESET,
    EVENT_TICK,
    EventBus,
)
from blockfall.systems.game_reducer import is_valid_action
from blockfall.systems.game_session_system import current_state
from blockfall.utils.key_repeat import KeyRepeat

# Binding names understood besides plain ActionType values.
ROTATE_CCW = "ROTATE_CCW"

REPEATING_ACTIONS = frozenset({ActionType.MOVE_LEFT, ActionType.MOVE_RIGHT, ActionType.MOVE_DOWN})


def default_key_bindings() -> Dict[int, Any]:
    """Arcade key symbols mapped to actions."""
    # Local import keeps tests free of a window/display dependency.
    from arcade import key

    return {
        key.LEFT: ActionType.MOVE_LEFT,
        key.A: ActionType.MOVE_LEFT,
        key.RIGHT: ActionType.MOVE_RIGHT,
        key.D: ActionType.MOVE_RIGHT,
        key.DOWN: ActionType.MOVE_DOWN,
        key.S: ActionType.MOVE_DOWN,
        key.UP: ActionType.ROTATE,
        key.W: ActionType.ROTATE,
        key.Z: ROTATE_CCW,
        key.SPACE: ActionType.HARD_DROP,
        key.X: ActionType.HARD_DROP,
        key.C: ActionType.HOLD_PIECE,
        key.LSHIFT: ActionType.HOLD_PIECE,
        key.RSHIFT: ActionType.HOLD_PIECE,
        key.P: ActionType.PAUSE_GAME,
        key.ESCAPE: ActionType.PAUSE_GAME,
        key.R: ActionType.RESTART_GAME,
        key.ENTER: ActionType.START_GAME,
        key.RETURN: ActionType.START_GAME,
    }


class InputSystem:
    """Translates raw key events into abstract actions on the bus.

    Only actions that are currently valid are requested; unknown keys are ignored.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        bindings: Mapping[int, Any] | None = None,
        key_repeat: KeyRepeat | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._bindings: Dict[int, Any] = dict(bindings) if bindings is not None else default_key_bindings()
        self._repeat = key_repeat or KeyRepeat()
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_KEY_RELEASE, self.on_key_release)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_SESSION_RESET, self._on_session_reset)

    @property
    def key_repeat(self) -> KeyRepeat:
        return self._repeat

    def action_for_key(self, symbol: int) -> Action | None:
        binding = self._bindings.get(symbol)
        if binding is None:
            return None
        if binding == ROTATE_CCW:
            return rotate_action(clockwise=False)
        if not isinstance(binding, ActionType):
            return None
        status = current_state(self.world).status
        if binding is ActionType.PAUSE_GAME and status is GameStatus.PAUSED:
            return Action.of(ActionType.RESUME_GAME)
        if binding is ActionType.ROTATE:
            return rotate_action(clockwise=True)
        return Action.of(binding)

    def on_key_press(self, sender: Any, **kwargs: Any) -> None:
        symbol = kwargs.get("symbol")
        if symbol is None:
            return
        action = self.action_for_key(symbol)
        if action is None:
            return
        if action.type in REPEATING_ACTIONS:
            self._repeat.press(symbol)
        self._request(action)

    def on_key_release(self, sender: Any, **kwargs: Any) -> None:
        symbol = kwargs.get("symbol")
        if symbol is None:
            return
        self._repeat.release(symbol)

    def on_tick(self, sender: Any, **kwargs: Any) -> None:
        for symbol in self._repeat.due():
            action = self.action_for_key(symbol)
            if action is not None:
                self._request(action)

    def _request(self, action: Action) -> None:
        if not is_valid_action(current_state(self.world), action):
            return
        self.event_bus.emit(EVENT_ACTION_REQUEST, action=action, source="keyboard")

    def _on_session_reset(self, sender: Any, **payload: Any) -> None:
        self._repeat.reset()
