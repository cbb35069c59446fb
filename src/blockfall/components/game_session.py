from dataclasses import dataclass

from blockfall.components.game_state import GameState


@dataclass(slots=True)
class GameSession:
    """Singleton component holding the current snapshot.

    ``state`` is only ever replaced wholesale by the session system.
    """
    state: GameState
