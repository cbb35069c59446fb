"""Entry point for the Blockfall falling-block game.

Sets up ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color, color
from blockfall.world import create_world
from blockfall.constants import BOARD_ROWS, BOARD_COLS, WINDOW_WIDTH, WINDOW_HEIGHT
from blockfall.events.bus import EVENT_TICK, EVENT_KEY_PRESS, EVENT_KEY_RELEASE, EventBus
from blockfall.systems.game_session_system import GameSessionSystem
from blockfall.systems.drop_scheduler_system import DropSchedulerSystem
from blockfall.systems.input import InputSystem
from blockfall.systems.render import RenderSystem

class BlockfallWindow(Window):
    def __init__(self, seed: int | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Blockfall", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, rows=BOARD_ROWS, cols=BOARD_COLS, seed=seed)

        # Session owns the snapshot; everything else talks to it through the bus.
        self.session_system = GameSessionSystem(self.world, self.event_bus)
        self.drop_scheduler_system = DropSchedulerSystem(self.world, self.event_bus, self.session_system)

        # Interface systems
        self.input_system = InputSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def on_key_release(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_RELEASE, symbol=symbol, modifiers=modifiers)

def main():
    window = BlockfallWindow()
    run()

if __name__ == "__main__":
    main()
