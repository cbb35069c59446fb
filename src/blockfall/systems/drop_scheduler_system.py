"""Gravity: turns elapsed frame time into automatic drop actions."""
from __future__ import annotations

from typing import Any

from esper import World

from blockfall.components.actions import Action, ActionType, clear_lines_action
from blockfall.components.game_state import GameState, GameStatus
from blockfall.events.bus import EVENT_SESSION_RESET, EVENT_STATUS_CHANGED, EVENT_TICK, EventBus
from blockfall.systems.game_reducer import lines_pending
from blockfall.systems.game_session_system import GameSessionSystem
from blockfall.systems.movement import should_lock
from blockfall.systems.scoring import drop_interval_for


def next_scheduled_action(state: GameState) -> Action | None:
    """Action the scheduler injects once the drop interval has elapsed."""
    if state.status is not GameStatus.PLAYING:
        return None
    if state.active is not None:
        if should_lock(state.board, state.active):
            return Action.of(ActionType.LOCK_PIECE)
        return Action.of(ActionType.MOVE_DOWN)
    pending = lines_pending(state)
    if pending:
        return clear_lines_action(pending)
    return Action.of(ActionType.SPAWN_PIECE)


class DropSchedulerSystem:
    """Accumulates ``dt`` from tick events and drops the piece every interval.

    Runs only while the session is ``playing``. Each tick callback re-checks the
    running flag and the generation counter before acting, so a tick already
    queued when ``stop`` was called never dispatches anything.
    """

    def __init__(self, world: World, event_bus: EventBus, session: GameSessionSystem) -> None:
        self.world = world
        self.event_bus = event_bus
        self.session = session
        self._running = False
        self._accumulator_ms = 0.0
        self._generation = 0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_STATUS_CHANGED, self._on_status_changed)
        self.event_bus.subscribe(EVENT_SESSION_RESET, self._on_session_reset)
        if self.session.state.status is GameStatus.PLAYING:
            self.start()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def accumulator_ms(self) -> float:
        return self._accumulator_ms

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._accumulator_ms = 0.0
        self._generation += 1

    def stop(self) -> None:
        self._running = False
        self._accumulator_ms = 0.0
        self._generation += 1

    def on_tick(self, sender: Any, **kwargs: Any) -> None:
        if not self._running:
            return
        state = self.session.state
        if state.status is not GameStatus.PLAYING:
            self.stop()
            return
        try:
            dt = float(kwargs.get("dt", 1 / 60))
        except (TypeError, ValueError):
            return
        if dt <= 0.0:
            return
        generation = self._generation
        self._accumulator_ms += dt * 1000.0
        if self._accumulator_ms >= drop_interval_for(state.level):
            self._accumulator_ms = 0.0
            action = next_scheduled_action(state)
            if action is not None and self.session.can_dispatch(action):
                self.session.dispatch(action, source="scheduler")
        if not self._running or generation != self._generation:
            return
        tick = Action.of(ActionType.GAME_TICK)
        if self.session.can_dispatch(tick):
            self.session.dispatch(tick, source="scheduler")

    def _on_status_changed(self, sender: Any, **payload: Any) -> None:
        if payload.get("new_status") is GameStatus.PLAYING:
            self.start()
        else:
            self.stop()

    def _on_session_reset(self, sender: Any, **payload: Any) -> None:
        self.stop()
