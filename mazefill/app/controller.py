"""Main application controller connecting input, rendering and the maze session."""

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from PySide6.QtCore import QObject, QThread, QTimer, Signal

from ..domain.search import SearchRequest
from ..domain.types import Coord, GameConfig, Grid, SearchResult, get_difficulty
from ..utils.highscore import HighScoreStore
from ..utils.rng import SeededRNG
from .fsm import TraversalState
from .session import CompletionResult, MazeSession
from .workers import SearchWorker

logger = logging.getLogger(__name__)

HINT = "hint"
DEAD_END_HINT = "dead_end"


class MazeController(QObject):
    """
    Controller that owns the current MazeSession and runs the search services.

    Signals:
        state_changed: Emitted when the run state changes
        grid_updated: Emitted when the grid or agent needs to be redrawn
        score_changed: Emitted when the score changes
        high_score_changed: Emitted when a new high score is stored
        hint_changed: Emitted with the hint path to draw, or None to clear it
        search_busy_changed: Emitted when a search kind starts or stops running
        maze_completed: Emitted with the CompletionResult before regenerating
        error_occurred: Emitted when an error occurs
    """

    # Qt Signals
    state_changed = Signal(object)  # TraversalState
    grid_updated = Signal()
    score_changed = Signal(int)
    high_score_changed = Signal(int)
    hint_changed = Signal(object)  # Optional[List[Coord]]
    search_busy_changed = Signal(str, bool)  # search kind, busy
    maze_completed = Signal(object)  # CompletionResult
    error_occurred = Signal(str)  # Error message

    def __init__(self, config: Optional[GameConfig] = None,
                 high_scores: Optional[HighScoreStore] = None,
                 seed: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic,
                 cols: Optional[int] = None, rows: Optional[int] = None):
        super().__init__()

        self._config = config or GameConfig()
        self._high_scores = high_scores or HighScoreStore(self._config.highscore_path)
        self._high_score = self._high_scores.load()
        self._clock = clock
        self._rng = SeededRNG(seed)

        self._session: Optional[MazeSession] = None
        self._difficulty_name = self._config.difficulty
        self._reverse_mode = False

        # Bumped on every regeneration/reset; older search results are dropped
        self._generation = 0
        self._pending: Dict[str, Tuple[Optional[QThread], SearchWorker]] = {}
        self._stuck_threads: List[Tuple[QThread, SearchWorker]] = []
        self._hint_path: Optional[List[Coord]] = None

        self._hint_timer = QTimer()
        self._hint_timer.setSingleShot(True)
        self._hint_timer.setInterval(self._config.hint_duration_ms)
        self._hint_timer.timeout.connect(self.clear_hint)

        # Missing sizes fall back to the configured default
        self.generate_maze(cols, rows)

    # Properties

    @property
    def session(self) -> Optional[MazeSession]:
        return self._session

    @property
    def grid(self) -> Optional[Grid]:
        return self._session.grid if self._session else None

    @property
    def position(self) -> Optional[Coord]:
        return self._session.position if self._session else None

    @property
    def score(self) -> int:
        return self._session.score if self._session else 0

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def hint_path(self) -> Optional[List[Coord]]:
        return self._hint_path

    @property
    def current_state(self) -> Optional[TraversalState]:
        return self._session.state if self._session else None

    @property
    def difficulty_name(self) -> str:
        return self._difficulty_name

    @property
    def reverse_mode(self) -> bool:
        return self._reverse_mode

    def is_search_pending(self, kind: str) -> bool:
        return kind in self._pending

    # Maze Management

    def generate_maze(self, cols: Optional[int], rows: Optional[int],
                      seed: Optional[int] = None) -> bool:
        """Generate a new maze, replacing the current session."""
        try:
            if seed is not None:
                self._rng.set_seed(seed)
            self._session = MazeSession.generate(
                self._config.clamp_size(cols),
                self._config.clamp_size(rows),
                difficulty=get_difficulty(self._difficulty_name),
                rng=self._rng,
                config=self._config,
                high_scores=self._high_scores,
                clock=self._clock,
            )
            self._session.reverse_mode = self._reverse_mode
            self._invalidate_searches()
            self.state_changed.emit(self._session.state)
            self.score_changed.emit(self._session.score)
            self.grid_updated.emit()
            return True
        except Exception as e:
            logger.exception("Maze generation failed")
            self.error_occurred.emit(f"Failed to generate maze: {str(e)}")
            return False

    def reset_maze(self) -> bool:
        """Restart the current layout."""
        if not self._session:
            return False
        self._session.reset()
        self._invalidate_searches()
        self.state_changed.emit(self._session.state)
        self.score_changed.emit(self._session.score)
        self.grid_updated.emit()
        return True

    def set_difficulty(self, name: str):
        """
        Select a difficulty profile by name. The extra connections apply to
        the next maze, the dead-end bonus applies immediately.
        """
        profile = get_difficulty(name)
        self._difficulty_name = profile.name
        if self._session:
            self._session.difficulty = profile

    def set_reverse_mode(self, enabled: bool):
        """While enabled, moves leave the departed cell unfilled."""
        self._reverse_mode = bool(enabled)
        if self._session:
            self._session.reverse_mode = self._reverse_mode

    # Input

    def move(self, dx: int, dy: int) -> bool:
        """Apply a move from the input collaborator."""
        if not self._session:
            return False

        old_state = self._session.state
        if not self._session.attempt_move(dx, dy):
            return False

        self.score_changed.emit(self._session.score)
        self.grid_updated.emit()
        if self._session.state != old_state:
            self.state_changed.emit(self._session.state)
        if self._session.completion is not None:
            self._on_maze_completed(self._session.completion)
        return True

    def undo(self) -> bool:
        """Revert the last move."""
        if not self._session or not self._session.undo():
            return False
        self.grid_updated.emit()
        return True

    def _on_maze_completed(self, result: CompletionResult):
        if result.high_score > self._high_score:
            self._high_score = result.high_score
            self.high_score_changed.emit(self._high_score)
        self.maze_completed.emit(result)
        self.generate_maze(result.next_cols, result.next_rows)

    # Search services

    def request_hint(self) -> bool:
        """Ask for the shortest path from the agent to the end."""
        if not self._session or self.is_search_pending(HINT):
            return False
        return self._dispatch(HINT, self._session.hint_request())

    def request_dead_end_hint(self) -> bool:
        """Ask for the path to the nearest dead end."""
        if not self._session or self.is_search_pending(DEAD_END_HINT):
            return False
        request = self._session.dead_end_request()
        if request is None:
            logger.info("No reachable dead-ends from this state")
            return False
        return self._dispatch(DEAD_END_HINT, request)

    def clear_hint(self):
        """Drop the current hint path."""
        self._hint_timer.stop()
        if self._hint_path is not None:
            self._hint_path = None
            self.hint_changed.emit(None)

    def _dispatch(self, kind: str, request: SearchRequest) -> bool:
        """Run a search in its own thread, or inline when threading is off."""
        worker = SearchWorker(kind, self._generation, request)
        worker.finished.connect(self._on_search_finished)
        worker.error_occurred.connect(self.error_occurred)

        if not self._config.threaded_search:
            self._pending[kind] = (None, worker)
            self.search_busy_changed.emit(kind, True)
            worker.run()
            return True

        try:
            thread = QThread()
            thread.setObjectName(f"Search-{kind}")
            worker.moveToThread(thread)
            thread.started.connect(worker.run)
            self._pending[kind] = (thread, worker)
            self.search_busy_changed.emit(kind, True)
            thread.start()
            return True
        except Exception as e:
            self._pending.pop(kind, None)
            self.search_busy_changed.emit(kind, False)
            self.error_occurred.emit(f"Failed to start {kind} search: {str(e)}")
            return False

    def _on_search_finished(self, kind: str, generation: int, result: SearchResult):
        thread, _worker = self._pending.pop(kind, (None, None))
        if thread is not None:
            thread.quit()
            thread.wait()
        self.search_busy_changed.emit(kind, False)

        if generation != self._generation:
            logger.debug("Discarding %s result from an older maze", kind)
            return

        if not result.is_meaningful:
            logger.info("%s search returned no usable path", kind)
            self.clear_hint()
            return

        self._hint_path = result.path
        self._hint_timer.start()
        self.hint_changed.emit(self._hint_path)

    def _invalidate_searches(self):
        self._generation += 1
        self.clear_hint()

    def shutdown(self):
        """Wait for running search threads before the application exits."""
        for kind, (thread, worker) in list(self._pending.items()):
            worker.blockSignals(True)
            if thread is not None:
                thread.quit()
                if not thread.wait(1000):
                    logger.warning("Force terminating %s search thread", kind)
                    thread.terminate()
                    thread.wait(500)
                if thread.isRunning():
                    # Dropping a running QThread aborts the process
                    logger.error("Search thread %s failed to terminate", kind)
                    self._stuck_threads.append((thread, worker))
            del self._pending[kind]
        self._hint_timer.stop()
