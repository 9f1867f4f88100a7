"""Worker objects that run one search request off the main thread."""

import logging

from PySide6.QtCore import QObject, Signal

from ..domain.search import SearchRequest, run_search
from ..domain.types import SearchResult

logger = logging.getLogger(__name__)


class SearchWorker(QObject):
    """
    Runs a single search over a snapshot and reports exactly once.

    The worker never touches the live grid, so it can run in its own
    QThread while the session keeps accepting moves.
    """

    finished = Signal(str, int, object)  # kind, generation, SearchResult
    error_occurred = Signal(str)

    def __init__(self, kind: str, generation: int, request: SearchRequest):
        super().__init__()
        self.kind = kind
        self.generation = generation
        self.request = request

    def run(self):
        """Run the search and emit the result."""
        try:
            result = run_search(self.request)
        except Exception as e:
            logger.exception("%s search failed", self.kind)
            self.error_occurred.emit(f"{self.kind} search failed: {str(e)}")
            result = SearchResult(path=None)
        self.finished.emit(self.kind, self.generation, result)
