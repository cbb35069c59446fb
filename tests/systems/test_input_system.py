from blockfall.components.actions import ActionType
from blockfall.components.game_state import GameStatus
from blockfall.events.bus import (
    EVENT_ACTION_REQUEST,
    EVENT_KEY_PRESS,
    EVENT_KEY_RELEASE,
    EVENT_TICK,
    EventBus,
)
from blockfall.systems.game_session_system import GameSessionSystem
from blockfall.systems.input import ROTATE_CCW, InputSystem
from blockfall.utils.key_repeat import KeyRepeat
from blockfall.world import create_world
from tests.helpers import SEED

LEFT, CCW, PAUSE, ENTER, RESTART, HOLD = 1, 2, 3, 4, 5, 6

BINDINGS = {
    LEFT: ActionType.MOVE_LEFT,
    CCW: ROTATE_CCW,
    PAUSE: ActionType.PAUSE_GAME,
    ENTER: ActionType.START_GAME,
    RESTART: ActionType.RESTART_GAME,
    HOLD: ActionType.HOLD_PIECE,
}


class _FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


def _setup():
    bus = EventBus()
    world = create_world(bus, seed=SEED)
    session = GameSessionSystem(world, bus)
    clock = _FakeClock()
    input_system = InputSystem(
        world, bus, bindings=BINDINGS, key_repeat=KeyRepeat(delay=0.15, interval=0.05, clock=clock)
    )
    requests = []
    bus.subscribe(EVENT_ACTION_REQUEST, lambda sender, **payload: requests.append(payload))
    return bus, session, input_system, clock, requests


def _press(bus, symbol):
    bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=0)


def test_invalid_actions_are_not_requested():
    bus, session, input_system, clock, requests = _setup()
    _press(bus, LEFT)
    _press(bus, 99)
    assert requests == []
    _press(bus, ENTER)
    assert session.state.status is GameStatus.PLAYING
    assert requests[0]["source"] == "keyboard"


def test_pause_key_toggles_resume():
    bus, session, input_system, clock, requests = _setup()
    _press(bus, ENTER)
    _press(bus, PAUSE)
    assert session.state.status is GameStatus.PAUSED
    _press(bus, PAUSE)
    assert session.state.status is GameStatus.PLAYING


def test_counter_clockwise_binding():
    bus, session, input_system, clock, requests = _setup()
    _press(bus, ENTER)
    action = input_system.action_for_key(CCW)
    assert action.type is ActionType.ROTATE
    assert not action.clockwise


def test_held_movement_key_repeats():
    bus, session, input_system, clock, requests = _setup()
    _press(bus, ENTER)
    x = session.state.active.x
    _press(bus, LEFT)
    assert session.state.active.x == x - 1

    clock.advance(0.1)
    bus.emit(EVENT_TICK, dt=0.1)
    assert session.state.active.x == x - 1

    clock.advance(0.06)
    bus.emit(EVENT_TICK, dt=0.06)
    assert session.state.active.x == x - 2

    clock.advance(0.02)
    bus.emit(EVENT_TICK, dt=0.02)
    assert session.state.active.x == x - 2

    clock.advance(0.04)
    bus.emit(EVENT_TICK, dt=0.04)
    assert session.state.active.x == x - 3

    bus.emit(EVENT_KEY_RELEASE, symbol=LEFT, modifiers=0)
    clock.advance(1.0)
    bus.emit(EVENT_TICK, dt=1.0)
    assert session.state.active.x == x - 3


def test_non_movement_keys_do_not_repeat():
    bus, session, input_system, clock, requests = _setup()
    _press(bus, ENTER)
    _press(bus, HOLD)
    assert not input_system.key_repeat.is_held(HOLD)


def test_restart_clears_held_keys():
    bus, session, input_system, clock, requests = _setup()
    _press(bus, ENTER)
    _press(bus, LEFT)
    assert input_system.key_repeat.is_held(LEFT)
    _press(bus, RESTART)
    assert not input_system.key_repeat.is_held(LEFT)
    assert session.state.status is GameStatus.READY
