import sys, os
ROOT=os.path.dirname(__file__); SRC=os.path.join(ROOT,'src');
if SRC not in sys.path: sys.path.insert(0,SRC)
from blockfall.events.bus import EventBus, EVENT_ACTION_REQUEST
from blockfall.world import create_world
from blockfall.components.actions import Action, ActionType
from blockfall.systems.game_session_system import GameSessionSystem
from blockfall.systems.drop_scheduler_system import DropSchedulerSystem
from blockfall.utils import state_diff

bus=EventBus(); world=create_world(bus, seed=1234)
session=GameSessionSystem(world,bus)
print('Signals after GameSessionSystem init', bus._signals.keys(), 'receivers', bus._signals[EVENT_ACTION_REQUEST].receivers)
DropSchedulerSystem(world,bus,session)
print('Signals after DropSchedulerSystem init', bus._signals.keys())

def log_event(name):
    def handler(sender, **payload):
        print(f'[{name}]', payload)
    return handler

for name in [v for k, v in vars(state_diff).items() if k.startswith('EVENT_')]:
    bus.subscribe(name, log_event(name))

session.dispatch(Action.of(ActionType.START_GAME))
for _ in range(4):
    session.dispatch(Action.of(ActionType.MOVE_LEFT))
session.dispatch(Action.of(ActionType.HARD_DROP))
session.dispatch(Action.of(ActionType.SPAWN_PIECE))
session.dispatch(Action.of(ActionType.HOLD_PIECE))
session.dispatch(Action.of(ActionType.PAUSE_GAME))
print('Final state', session.state.status, 'score', session.state.score, 'placed', session.state.pieces_placed)
