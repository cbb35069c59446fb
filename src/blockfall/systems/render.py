from typing import Any

from esper import World

from blockfall.components.game_state import GameStatus
from blockfall.components.tetromino import PieceType
from blockfall.constants import (
    CAUTION_COLOR,
    FRAME_COLOR,
    GHOST_ALPHA,
    GRID_COLOR,
    PIECE_COLORS,
    PREVIEW_CELL_SIZE,
)
from blockfall.events.bus import EVENT_LINES_MARKED, EVENT_TICK, EventBus
from blockfall.rendering.context import RenderContext, build_render_context, preview_cells
from blockfall.systems.game_session_system import current_state

PADDING = 1
STATUS_TEXT = {
    GameStatus.READY: "Press Enter to start",
    GameStatus.PAUSED: "Paused",
    GameStatus.GAME_OVER: "Game over - press R",
}


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_LINES_MARKED, self.on_lines_marked)
        self._time = 0.0
        self._flash_started = 0.0
        self._render_ctx: RenderContext | None = None

    @property
    def last_context(self) -> RenderContext | None:
        return self._render_ctx

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            self._time += float(dt)
        except (TypeError, ValueError):
            self._time += 1/60

    def on_lines_marked(self, sender, **kwargs):
        self._flash_started = self._time

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except RuntimeError:
            headless = True
        ctx = build_render_context(current_state(self.world), self.window.width, self.window.height)
        self._render_ctx = ctx
        if headless:
            return
        self._draw_board(arcade, ctx)
        self._draw_panel(arcade, ctx)
        status_text = STATUS_TEXT.get(ctx.status)
        if status_text:
            self._draw_banner(arcade, ctx, status_text)

    def _draw_cell(self, arcade, ctx: RenderContext, col: int, row: int, color: Any):
        x, y = ctx.cell_origin(col, row)
        size = ctx.cell_size
        arcade.draw_lrbt_rectangle_filled(x + PADDING, x + size - PADDING, y + PADDING, y + size - PADDING, color)

    def _draw_board(self, arcade, ctx: RenderContext):
        left = ctx.board_left
        bottom = ctx.board_bottom
        right = left + ctx.cols * ctx.cell_size
        top = bottom + ctx.rows * ctx.cell_size
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, (12, 12, 16))
        for col in range(1, ctx.cols):
            x = left + col * ctx.cell_size
            arcade.draw_line(x, bottom, x, top, GRID_COLOR, 1)
        for row in range(1, ctx.rows):
            y = bottom + row * ctx.cell_size
            arcade.draw_line(left, y, right, y, GRID_COLOR, 1)

        # Rows awaiting compaction blink between white and their piece colours.
        flash_on = int((self._time - self._flash_started) * 10) % 2 == 0
        clearing = set(ctx.clearing_rows)
        for col, row, piece_type in ctx.locked:
            color = PIECE_COLORS[piece_type.value]
            if row in clearing and flash_on:
                color = (240, 240, 240)
            self._draw_cell(arcade, ctx, col, row, color)
        for col, row, piece_type in ctx.ghost:
            r, g, b = PIECE_COLORS[piece_type.value]
            self._draw_cell(arcade, ctx, col, row, (r, g, b, GHOST_ALPHA))
        for col, row, piece_type in ctx.active:
            self._draw_cell(arcade, ctx, col, row, PIECE_COLORS[piece_type.value])

        frame = CAUTION_COLOR if ctx.caution else FRAME_COLOR
        arcade.draw_lrbt_rectangle_outline(left - 2, right + 2, bottom - 2, top + 2, frame, 3 if ctx.caution else 2)

    def _draw_preview(self, arcade, label: str, piece_type: PieceType | None, left: float, top: float, dimmed: bool = False):
        arcade.draw_text(label, left, top - 16, arcade.color.WHITE, 12)
        box_top = top - 24
        box_bottom = box_top - PREVIEW_CELL_SIZE * 4 - 8
        arcade.draw_lrbt_rectangle_outline(left, left + PREVIEW_CELL_SIZE * 4 + 8, box_bottom, box_top, FRAME_COLOR, 1)
        if piece_type is None:
            return box_bottom
        color = PIECE_COLORS[piece_type.value]
        if dimmed:
            color = (color[0], color[1], color[2], 110)
        for col, row in preview_cells(piece_type):
            x = left + 4 + col * PREVIEW_CELL_SIZE
            y = box_top - 4 - (row + 1) * PREVIEW_CELL_SIZE
            arcade.draw_lrbt_rectangle_filled(x + 1, x + PREVIEW_CELL_SIZE - 1, y + 1, y + PREVIEW_CELL_SIZE - 1, color)
        return box_bottom

    def _draw_panel(self, arcade, ctx: RenderContext):
        left = ctx.panel_left
        top = ctx.board_bottom + ctx.rows * ctx.cell_size
        bottom = self._draw_preview(arcade, "Next", ctx.next_piece, left, top)
        bottom = self._draw_preview(arcade, "Hold", ctx.held_piece, left, bottom - 12, dimmed=not ctx.can_hold)
        y = bottom - 36
        for line in (
            f"Score  {ctx.score}",
            f"Level  {ctx.level}",
            f"Lines  {ctx.lines_cleared}",
            f"Speed  {ctx.drop_interval_ms} ms",
        ):
            arcade.draw_text(line, left, y, arcade.color.WHITE, 14)
            y -= 24

    def _draw_banner(self, arcade, ctx: RenderContext, text: str):
        left = ctx.board_left
        right = left + ctx.cols * ctx.cell_size
        middle = ctx.board_bottom + ctx.rows * ctx.cell_size / 2
        arcade.draw_lrbt_rectangle_filled(left, right, middle - 24, middle + 24, (0, 0, 0, 190))
        arcade.draw_text(
            text,
            (left + right) / 2,
            middle,
            arcade.color.WHITE,
            14,
            anchor_x="center",
            anchor_y="center",
        )
