"""Material tally used for insufficient-material detection."""

from __future__ import annotations

from chesslogic.core.enums import Player, PieceType

_PIECE_TYPE_COUNT = 6
_PLAYER_COUNT = 2


class Counting:
    """Per-player, per-type piece counts. Built from a full board scan."""

    __slots__ = ("_counts", "_total")

    def __init__(self) -> None:
        # [player][piece_type-1] -> count
        self._counts: list[list[int]] = [
            [0] * _PIECE_TYPE_COUNT for _ in range(_PLAYER_COUNT)
        ]
        self._total = 0

    def increment(self, player: Player, piece_type: PieceType) -> None:
        self._counts[int(player)][int(piece_type) - 1] += 1
        self._total += 1

    def count(self, player: Player, piece_type: PieceType) -> int:
        return self._counts[int(player)][int(piece_type) - 1]

    def red(self, piece_type: PieceType) -> int:
        return self.count(Player.RED, piece_type)

    def black(self, piece_type: PieceType) -> int:
        return self.count(Player.BLACK, piece_type)

    @property
    def total_count(self) -> int:
        return self._total

    def __repr__(self) -> str:
        parts = [
            f"{player}:{pt.name.lower()}={self.count(player, pt)}"
            for player in Player
            for pt in PieceType
            if self.count(player, pt)
        ]
        return f"Counting(total={self._total}, {', '.join(parts)})"
