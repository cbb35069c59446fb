"""Upcoming piece sequence built from shuffled bags of all seven types.

The queue is an immutable value so the reducer stays pure: each bag is shuffled
with an RNG seeded from ``(seed, bag_index)``, which makes the whole unbounded
sequence a deterministic function of the seed.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Tuple

from blockfall.components.tetromino import ALL_PIECE_TYPES, PieceType
from blockfall.constants import QUEUE_PREVIEW_COUNT


def shuffled_bag(seed: int, bag_index: int) -> Tuple[PieceType, ...]:
    bag = list(ALL_PIECE_TYPES)
    random.Random(f"{seed}:{bag_index}").shuffle(bag)
    return tuple(bag)


def new_seed() -> int:
    return random.SystemRandom().getrandbits(64)


@dataclass(frozen=True, slots=True)
class PieceQueue:
    seed: int
    upcoming: Tuple[PieceType, ...] = ()
    bags_drawn: int = 0

    @classmethod
    def create(cls, seed: int | None = None, preview: int = QUEUE_PREVIEW_COUNT) -> "PieceQueue":
        queue = cls(seed=new_seed() if seed is None else seed)
        return queue.primed(preview)

    def primed(self, preview: int = QUEUE_PREVIEW_COUNT) -> "PieceQueue":
        """Extend with whole bags until at least ``preview`` pieces are visible."""
        upcoming = self.upcoming
        bags = self.bags_drawn
        while len(upcoming) < max(1, preview):
            upcoming = upcoming + shuffled_bag(self.seed, bags)
            bags += 1
        if bags == self.bags_drawn:
            return self
        return PieceQueue(seed=self.seed, upcoming=upcoming, bags_drawn=bags)

    def peek(self) -> PieceType:
        return self.primed().upcoming[0]

    def preview(self, count: int) -> Tuple[PieceType, ...]:
        return self.primed(count).upcoming[:count]

    def draw(self) -> Tuple[PieceType, "PieceQueue"]:
        """Return the head piece and the queue that follows it."""
        primed = self.primed()
        head = primed.upcoming[0]
        rest = PieceQueue(seed=primed.seed, upcoming=primed.upcoming[1:], bags_drawn=primed.bags_drawn)
        return head, rest.primed()
