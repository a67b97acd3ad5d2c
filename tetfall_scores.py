
"""High-score list storage"""
import json
import logging
import os
from typing import List, Optional, Sequence

from tetfall_config import CONFIG

log = logging.getLogger(__name__)

SCORES_KEY = "highScores"


def default_scores(score: float = 0, count: Optional[int] = None) -> List[float]:
    count = CONFIG["HIGH_SCORE_COUNT"] if count is None else count
    return [score] + [0] * (count - 1)


def insert_score(scores: Sequence[float], score: float) -> List[float]:
    """Place ``score`` before the first smaller entry; the list keeps its length."""
    out = list(scores)
    size = len(out)
    for i, s in enumerate(out):
        if score > s:
            out.insert(i, score)
            break
    if len(out) > size:
        out.pop()
    return out


class ScoreStore:
    """Key-value style store for one ordered list of scores, highest first."""

    def get_scores(self) -> List[float]:
        raise NotImplementedError

    def set_scores(self, scores: Sequence[float]) -> None:
        raise NotImplementedError


class MemoryScoreStore(ScoreStore):
    def __init__(self, scores: Optional[Sequence[float]] = None):
        self.scores = list(scores) if scores is not None else None

    def get_scores(self) -> List[float]:
        if self.scores is None:
            self.scores = default_scores()
        return list(self.scores)

    def set_scores(self, scores: Sequence[float]) -> None:
        self.scores = list(scores)


class JsonScoreStore(ScoreStore):
    """Scores kept as ``{"highScores": [...]}`` in a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or CONFIG["HIGH_SCORE_PATH"]

    def get_scores(self) -> List[float]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            scores = data[SCORES_KEY]
            if not isinstance(scores, list):
                raise ValueError(f"{SCORES_KEY} is not a list")
            return [float(s) for s in scores]
        except FileNotFoundError:
            scores = default_scores()
            self.set_scores(scores)
            return scores
        except (ValueError, KeyError, TypeError) as e:
            log.warning("ignoring unreadable high scores in %s: %s", self.path, e)
            return default_scores()

    def set_scores(self, scores: Sequence[float]) -> None:
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({SCORES_KEY: list(scores)}, f)
