import random

from esper import World
from .events.bus import EventBus
from blockfall.components.game_session import GameSession
from blockfall.components.game_state import create_initial_state
from blockfall.constants import BOARD_COLS, BOARD_ROWS


def create_world(
    event_bus: EventBus,
    *,
    rows: int = BOARD_ROWS,
    cols: int = BOARD_COLS,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one game session in the ``ready`` status.

    ``seed`` fixes the piece sequence; otherwise one is drawn from ``rng``
    (or the system RNG when neither is given).
    """
    world = World()
    if seed is None and rng is not None:
        seed = rng.getrandbits(64)

    # Single session entity; systems look it up through the GameSession component.
    world.create_entity(GameSession(state=create_initial_state(seed=seed, rows=rows, cols=cols)))
    return world
