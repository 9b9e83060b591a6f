"""Game state machine: tracks phase transitions and move history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chesslock.core.enums import Color, GameResult
from chesslock.core.move_generator import MoveGenerator
from chesslock.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesslock.core.position import Position
from chesslock.core.rules import Rules
from chesslock.errors import NothingToUndo
from chesslock.game.interfaces import GamePhase

if TYPE_CHECKING:
    from chesslock.core.move import Move


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    gives_check: bool = False
    result: GameResult = GameResult.IN_PROGRESS


@dataclass
class GameState:
    """Owns the position, phase, result and move history.

    This is a pure data/logic class without locking or listeners.
    """

    position: Position = field(default_factory=Position, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    _legal_cache: list[Move] | None = field(default=None, init=False, repr=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game.

        Parsing happens first, so a malformed *fen* leaves the state as it was.
        """
        start_fen = STARTING_FEN if fen is None else fen
        position = position_from_fen(start_fen)
        self.start_fen = start_fen
        self.position = position
        self.move_history.clear()
        self._legal_cache = None
        self.result = Rules.game_result(position, self.legal_moves())
        self.phase = GamePhase.ENDED if self.result.is_terminal else GamePhase.IN_PROGRESS

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        self.position.make_move(move)
        self._legal_cache = None

        gen = MoveGenerator(self.position)
        gives_check = gen.is_in_check(self.position.side_to_move)
        self.result = Rules.game_result(self.position, self.legal_moves())
        self.phase = GamePhase.ENDED if self.result.is_terminal else GamePhase.IN_PROGRESS

        record = MoveRecord(
            move=move,
            fen_after=position_to_fen(self.position),
            gives_check=gives_check,
            result=self.result,
        )
        self.move_history.append(record)
        return record

    def undo_last_move(self) -> Move:
        """Undo the last move and return it."""
        if not self.move_history:
            raise NothingToUndo("No move to undo")

        record = self.move_history.pop()
        self.position.unmake_move()
        self._legal_cache = None

        # A position that was not terminal before the move cannot be now.
        self.result = GameResult.IN_PROGRESS
        self.phase = GamePhase.IN_PROGRESS
        return record.move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.ENDED

    @property
    def ply_count(self) -> int:
        """Number of half-moves played since setup."""
        return len(self.move_history)

    @property
    def fen(self) -> str:
        return position_to_fen(self.position)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position (cached until the next change)."""
        if self._legal_cache is None:
            gen = MoveGenerator(self.position)
            self._legal_cache = gen.generate_legal_moves()
        return list(self._legal_cache)

    def is_in_check(self) -> bool:
        gen = MoveGenerator(self.position)
        return gen.is_in_check(self.position.side_to_move)
