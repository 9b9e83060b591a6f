"""Built-in catalog of classic mating puzzles."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from chesslock.core.enums import Color
from chesslock.core.notation import position_from_fen

if TYPE_CHECKING:
    from chesslock.core.position import Position
    from chesslock.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class Difficulty(IntEnum):
    EASY = 1
    MEDIUM = 2
    HARD = 3


@dataclass(frozen=True, slots=True)
class Puzzle:
    """A named starting position with its intended line.

    ``solution`` is display text for hints; it is never parsed.
    ``mate_in`` is 0 for purely tactical puzzles.
    """

    id: int
    name: str
    theme: str
    difficulty: Difficulty
    fen: str
    description: str
    solution: tuple[str, ...] = ()
    mate_in: int = 0

    @property
    def side_to_move(self) -> Color:
        return self.position().side_to_move

    def position(self) -> Position:
        """Fresh :class:`Position` for this puzzle."""
        return position_from_fen(self.fen)


PUZZLES: tuple[Puzzle, ...] = (
    Puzzle(
        id=1,
        name="Back Rank Mate",
        theme="King trapped behind its own pawns",
        difficulty=Difficulty.EASY,
        fen="6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1",
        description="White to move. Checkmate on the back rank.",
        solution=("Ra8#",),
        mate_in=1,
    ),
    Puzzle(
        id=2,
        name="Smothered Mate",
        theme="Knight mates a king boxed in by its own pieces",
        difficulty=Difficulty.MEDIUM,
        fen="5rk1/5ppp/8/8/8/8/5PPP/4RNK1 w - - 0 1",
        description="Give up the rook, then mate with the knight.",
        solution=("Re8+", "Rxe8", "Nf7#"),
        mate_in=2,
    ),
    Puzzle(
        id=3,
        name="Opera Mate",
        theme="Rook and bishop work together",
        difficulty=Difficulty.MEDIUM,
        fen="r4rk1/ppp2ppp/2n5/3q4/3P4/2NB4/PPP2PPP/R2Q1RK1 w - - 0 1",
        description="Find the forced mate from Morphy's famous game.",
        solution=("Qxd5+", "Nxd5", "Re8#"),
        mate_in=2,
    ),
    Puzzle(
        id=4,
        name="Legal's Mate",
        theme="Queen sacrifice ending in mate",
        difficulty=Difficulty.EASY,
        fen="r1bqkb1r/pppp1ppp/2n2n2/4p2Q/2B1P3/8/PPPP1PPP/RNB1K1NR w KQkq - 0 1",
        description="Sacrifice the queen and mate with the minor pieces.",
        solution=("Qxf7+", "Kxf7", "Bc4+"),
        mate_in=2,
    ),
    Puzzle(
        id=5,
        name="Arabian Mate",
        theme="Knight and rook mate in the corner",
        difficulty=Difficulty.MEDIUM,
        fen="5rkN/8/6R1/8/8/8/8/6K1 w - - 0 1",
        description="The knight covers the escape squares, the rook mates.",
        solution=("Rg8#",),
        mate_in=1,
    ),
    Puzzle(
        id=6,
        name="Anastasia's Mate",
        theme="Knight and rook trap the king on the edge",
        difficulty=Difficulty.MEDIUM,
        fen="2kr4/ppp5/8/3N4/8/8/PPP5/1K1R4 w - - 0 1",
        description="Cut off the king with the knight and mate with the rook.",
        solution=("Rd8#",),
        mate_in=1,
    ),
    Puzzle(
        id=7,
        name="Boden's Mate",
        theme="Criss-crossing bishops",
        difficulty=Difficulty.HARD,
        fen="r1b1kb1r/pppp1ppp/5n2/4p3/2B1P3/2N5/PPPP1qPP/R1BQ1RK1 b kq - 0 1",
        description="Black to move. Mate with both bishops.",
        solution=("Qxc2", "Bxf7+", "Kh8", "Bg6#"),
        mate_in=3,
    ),
    Puzzle(
        id=8,
        name="Greek Gift",
        theme="Bishop sacrifice on h7",
        difficulty=Difficulty.MEDIUM,
        fen="r1bq1rk1/ppp2ppp/2n2n2/3p4/2BP4/2N2N2/PPP2PPP/R1BQ1RK1 w - - 0 1",
        description="Sacrifice the bishop on h7, then bring queen and knight.",
        solution=("Bxh7+", "Kxh7", "Ng5+", "Kg8", "Qh5"),
        mate_in=3,
    ),
    Puzzle(
        id=9,
        name="Zugzwang",
        theme="Every reply loses",
        difficulty=Difficulty.HARD,
        fen="8/8/8/8/4k3/8/3K4/4Q3 w - - 0 1",
        description="Force Black into zugzwang.",
        solution=("Qe2+", "Kf5", "Qf3+"),
        mate_in=2,
    ),
    Puzzle(
        id=10,
        name="Damiano's Mate",
        theme="Queen sacrifice ending in a pawn mate",
        difficulty=Difficulty.EASY,
        fen="6k1/5p1p/6p1/8/8/6Q1/8/6K1 w - - 0 1",
        description="Sacrifice the queen for a pawn checkmate.",
        solution=("Qg7+", "fxg7", "h7#"),
        mate_in=2,
    ),
)

_BY_ID: dict[int, Puzzle] = {p.id: p for p in PUZZLES}


def puzzle_by_id(puzzle_id: int) -> Puzzle | None:
    return _BY_ID.get(puzzle_id)


def puzzles_for(difficulty: Difficulty | None = None) -> list[Puzzle]:
    if difficulty is None:
        return list(PUZZLES)
    return [p for p in PUZZLES if p.difficulty == difficulty]


def random_puzzle(
    difficulty: Difficulty | None = None, rng: random.Random | None = None
) -> Puzzle:
    """Pick a puzzle uniformly, optionally restricted to one *difficulty*."""
    candidates = puzzles_for(difficulty)
    if not candidates:
        raise LookupError(f"No puzzles with difficulty {difficulty!r}")
    return (rng or random.Random()).choice(candidates)


def load_puzzle(controller: GameController, puzzle: Puzzle) -> None:
    """Reset *controller* to the puzzle's starting position."""
    _LOGGER.info("Loading puzzle %d (%s)", puzzle.id, puzzle.name)
    controller.load_position(puzzle.fen)
