"""A single maze run: the agent, its moves, undo history and scoring."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..domain.dead_ends import DeadEndTracker
from ..domain.neighbors import is_unit_step
from ..domain.search import SearchRequest
from ..domain.types import (
    Coord, DifficultyProfile, GameConfig, Grid, Snapshot, get_difficulty
)
from ..utils.grid_factory import generate_maze_grid
from ..utils.highscore import HighScoreStore
from ..utils.rng import SeededRNG
from .fsm import TraversalState, TraversalStateMachine

logger = logging.getLogger(__name__)


@dataclass
class UndoRecord:
    """What a single move changed, so it can be reverted."""
    previous_position: Coord
    filled_cell: Optional[Coord] = None
    claimed_cell: Optional[Coord] = None


@dataclass
class CompletionResult:
    """Outcome of reaching the end of a maze."""
    score: int
    finish_bonus: int
    elapsed_seconds: int
    high_score: int
    new_high_score: bool
    next_cols: int
    next_rows: int


class MazeSession:
    """
    Owns the grid, the agent and the undo stack of one maze.

    All mutation goes through attempt_move(), undo() and reset(); each call
    is fully applied before it returns. Searches only ever see snapshot().
    """

    def __init__(self, grid: Grid, start: Coord, end: Coord,
                 difficulty: Optional[DifficultyProfile] = None,
                 config: Optional[GameConfig] = None,
                 high_scores: Optional[HighScoreStore] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.grid = grid
        self.start = start
        self.end = end
        self.config = config or GameConfig()
        self.difficulty = difficulty or get_difficulty(self.config.difficulty)
        self.high_scores = high_scores
        self.clock = clock
        self.reverse_mode = False

        self.tracker = DeadEndTracker(grid, start, end)
        self.state_machine = TraversalStateMachine()
        self._begin_run()

    @classmethod
    def generate(cls, cols: int, rows: int, difficulty: Optional[DifficultyProfile] = None,
                 rng: Optional[SeededRNG] = None, **kwargs) -> "MazeSession":
        """Generate a fresh maze and wrap it in a session."""
        grid, start, end = generate_maze_grid(cols, rows, difficulty, rng)
        return cls(grid, start, end, difficulty=difficulty, **kwargs)

    def _begin_run(self):
        """(Re)initialize everything a run tracks, keeping the layout."""
        self.tracker.reset_claims()
        self.tracker.recompute_all()
        self.position: Coord = self.start
        self.visited_count = 1
        self.undo_stack: List[UndoRecord] = []
        self.score = 0
        self.started_at = self.clock()
        self.completion: Optional[CompletionResult] = None
        self.state_machine.reset()

    # Properties

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def state(self) -> TraversalState:
        return self.state_machine.current_state

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack) and self.state_machine.accepts_moves()

    @property
    def path_count(self) -> int:
        return self.tracker.path_count

    # Moves

    def attempt_move(self, dx: int, dy: int) -> bool:
        """
        Step the agent by one cell. Invalid moves change nothing.
        Returns True if the move was applied.
        """
        if not self.state_machine.accepts_moves() or not is_unit_step(dx, dy):
            return False

        prev = self.position
        dest = (prev[0] + dx, prev[1] + dy)
        if not self.grid.is_walkable(dest):
            return False

        record = UndoRecord(previous_position=prev)
        if not self.reverse_mode and self.grid.is_walkable(prev):
            record.filled_cell = prev
        self.undo_stack.append(record)

        self.position = dest
        self.visited_count += 1
        self.score += 1

        if self.tracker.claim(dest):
            record.claimed_cell = dest
            self.score += self.difficulty.dead_end_bonus
            logger.debug("Dead end bonus at %s: +%d", dest, self.difficulty.dead_end_bonus)

        if record.filled_cell is not None:
            self.grid.get_cell(record.filled_cell).filled = True
            self.tracker.recompute_near(record.filled_cell)

        if self.state_machine.is_idle():
            self.state_machine.begin()
        self.check_completion()
        return True

    def undo(self) -> bool:
        """Revert the last move. Score and bonuses are kept."""
        if not self.can_undo:
            return False

        record = self.undo_stack.pop()
        if record.filled_cell is not None:
            self.grid.get_cell(record.filled_cell).filled = False
            self.tracker.recompute_near(record.filled_cell)
        if record.claimed_cell is not None:
            self.tracker.release(record.claimed_cell)

        self.position = record.previous_position
        return True

    def check_completion(self) -> Optional[CompletionResult]:
        """Finish the run if the agent stands on the end cell."""
        if self.position != self.end:
            return None
        if self.completion is not None:
            return self.completion
        if not self.state_machine.complete():
            return None

        elapsed = self.elapsed_seconds()
        finish_bonus = max(0, self.config.finish_bonus_base - elapsed)
        self.score += finish_bonus

        new_high = False
        high_score = self.score
        if self.high_scores is not None:
            new_high = self.high_scores.propose(self.score)
            high_score = max(self.score, self.high_scores.load())

        self.completion = CompletionResult(
            score=self.score,
            finish_bonus=finish_bonus,
            elapsed_seconds=elapsed,
            high_score=high_score,
            new_high_score=new_high,
            next_cols=self.config.grown_size(self.cols),
            next_rows=self.config.grown_size(self.rows),
        )
        logger.info("Maze complete in %ds, score %d (finish bonus %d)",
                    elapsed, self.score, finish_bonus)
        return self.completion

    def reset(self):
        """Restart the same layout from scratch."""
        for row in self.grid.cells:
            for cell in row:
                cell.clear_flags()
        self._begin_run()

    # Read-only views

    def elapsed_seconds(self) -> int:
        return max(0, int(self.clock() - self.started_at))

    def progress_percent(self) -> int:
        """Share of the original path cells that have been filled."""
        total = self.tracker.path_count
        filled = max(0, total - self.grid.walkable_cells())
        percent = int(filled * 100 / (total or 1) + 0.5)
        return min(100, max(0, percent))

    def snapshot(self) -> Snapshot:
        return self.grid.snapshot()

    def hint_request(self) -> SearchRequest:
        """Shortest path from the agent to the end."""
        return SearchRequest(snapshot=self.snapshot(), start=self.position, goal=self.end)

    def dead_end_request(self) -> Optional[SearchRequest]:
        """Nearest dead end other than the agent's own cell, None if there is none."""
        targets = self.tracker.dead_ends(exclude=[self.position])
        if not targets:
            return None
        return SearchRequest(snapshot=self.snapshot(), start=self.position, targets=targets)
