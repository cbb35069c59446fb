from __future__ import annotations

from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Dict, List, Tuple

from blockfall.constants import KEY_REPEAT_DELAY, KEY_REPEAT_INTERVAL


@dataclass(slots=True)
class KeyRepeat:
	"""Auto-repeat timeline for held keys.

	A key fires once on press (handled by the caller), then again after
	``delay`` seconds and every ``interval`` seconds while it stays held.
	"""

	delay: float = KEY_REPEAT_DELAY
	interval: float = KEY_REPEAT_INTERVAL
	clock: Callable[[], float] | None = field(default=None, repr=False)

	_clock: Callable[[], float] = field(init=False, repr=False)
	# symbol -> (pressed_at, last_fired_at)
	_held: Dict[int, Tuple[float, float]] = field(init=False, repr=False)

	def __post_init__(self) -> None:
		self._clock = self.clock or monotonic
		self._held = {}
		self.delay = max(0.0, float(self.delay))
		self.interval = max(0.0, float(self.interval))

	def press(self, symbol: int) -> None:
		now = self._clock()
		self._held[symbol] = (now, now)

	def release(self, symbol: int) -> None:
		self._held.pop(symbol, None)

	def is_held(self, symbol: int) -> bool:
		return symbol in self._held

	def due(self) -> List[int]:
		"""Symbols whose repeat should fire now; advances their timers."""
		now = self._clock()
		fired: List[int] = []
		for symbol, (pressed_at, last_fired) in list(self._held.items()):
			if (now - pressed_at) < self.delay:
				continue
			if last_fired > pressed_at and (now - last_fired) < self.interval:
				continue
			self._held[symbol] = (pressed_at, now)
			fired.append(symbol)
		return fired

	def reset(self) -> None:
		self._held.clear()
