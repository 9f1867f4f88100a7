"""
High score persistence.
Stores a single integer per key in a small JSON file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

HIGHSCORE_KEY = "MazeHighscore"
HIGHSCORE_FILENAME = "highscore.json"


def get_data_directory() -> str:
    """Directory for saved state, $MAZEFILL_HOME or ~/.mazefill."""
    override = os.environ.get("MAZEFILL_HOME")
    if override:
        return override
    return str(Path.home() / ".mazefill")


class HighScoreStore:
    """Reads and writes one integer high score keyed by a fixed name."""

    def __init__(self, filepath: Optional[str] = None, key: str = HIGHSCORE_KEY):
        if filepath is None:
            filepath = os.path.join(get_data_directory(), HIGHSCORE_FILENAME)
        self.filepath = filepath
        self.key = key

    def load(self) -> int:
        """Return the stored score, 0 when missing or unreadable."""
        if not os.path.exists(self.filepath):
            return 0
        try:
            with open(self.filepath, 'r') as f:
                data = json.load(f)
            return int(data.get(self.key, 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Error loading high score from %s: %s", self.filepath, e)
            return 0

    def save(self, score: int) -> bool:
        """Write the score, keeping any other keys in the file."""
        data = {}
        if os.path.exists(self.filepath):
            try:
                with open(self.filepath, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    data = {}
            except (OSError, ValueError) as e:
                logger.warning("Overwriting unreadable high score file %s: %s", self.filepath, e)
                data = {}

        data[self.key] = int(score)
        try:
            directory = os.path.dirname(self.filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.filepath, 'w') as f:
                json.dump(data, f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving high score to %s: %s", self.filepath, e)
            return False

    def propose(self, score: int) -> bool:
        """Persist score if it beats the stored one. Returns True if it did."""
        if score <= self.load():
            return False
        saved = self.save(score)
        if saved:
            logger.info("New high score %d", score)
        return saved


class MemoryHighScoreStore(HighScoreStore):
    """In-process store for sessions that should not touch the disk."""

    def __init__(self, initial: int = 0, key: str = HIGHSCORE_KEY):
        # An empty path never resolves to the data directory
        super().__init__(filepath="", key=key)
        self._value = initial

    def load(self) -> int:
        return self._value

    def save(self, score: int) -> bool:
        self._value = int(score)
        return True
