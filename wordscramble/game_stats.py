import csv
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, TextIO

logger = logging.getLogger(__name__)

CSV_HEADER = ["RANK", "NAME", "SCORE", "GAMES", "ATTEMPTS", "AVG_TIME", "ACCURACY", "AVG_GUESS_TIME", "DIFFICULTY"]


class Difficulty(IntEnum):
    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def label(self) -> str:
        return DIFFICULTY_SETTINGS[self]["label"]

    @property
    def multiplier(self) -> float:
        return DIFFICULTY_SETTINGS[self]["multiplier"]

    @classmethod
    def from_code(cls, code: int) -> "Difficulty":
        """Map a persisted difficulty code, falling back to Easy."""
        try:
            return cls(code)
        except ValueError:
            return cls.EASY

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        """Accept either a label ("Hard") or a code ("3")."""
        text = str(value or '').strip()
        if text.isascii() and text.isdigit():
            return cls.from_code(int(text))
        for level in cls:
            if level.label.lower() == text.lower():
                return level
        logger.warning(f"Unknown difficulty '{value}', using Easy")
        return cls.EASY


DIFFICULTY_SETTINGS: Dict[Difficulty, Dict] = {
    Difficulty.EASY: {"label": "Easy", "multiplier": 1.0},
    Difficulty.MEDIUM: {"label": "Medium", "multiplier": 1.5},
    Difficulty.HARD: {"label": "Hard", "multiplier": 2.0},
}


@dataclass
class LeaderboardEntry:
    rank: int = 0
    name: str = ""
    score: int = 0
    games: int = 0
    attempts: int = 0
    average_time: float = 0.0
    accuracy: float = 0.0
    average_guess_time: float = 0.0
    difficulty: Difficulty = Difficulty.EASY

    def to_row(self) -> List[str]:
        return [
            str(self.rank),
            self.name,
            str(self.score),
            str(self.games),
            str(self.attempts),
            f"{self.average_time:.2f}",
            f"{self.accuracy:.2f}",
            f"{self.average_guess_time:.2f}",
            str(int(self.difficulty)),
        ]

    @classmethod
    def from_row(cls, row: List[str]) -> "LeaderboardEntry":
        """Build an entry from a CSV row; raises ValueError when malformed."""
        if len(row) != len(CSV_HEADER):
            raise ValueError(f"expected {len(CSV_HEADER)} fields, got {len(row)}")
        return cls(
            rank=int(row[0]),
            name=row[1],
            score=int(row[2]),
            games=int(row[3]),
            attempts=int(row[4]),
            average_time=float(row[5]),
            accuracy=float(row[6]),
            average_guess_time=float(row[7]),
            difficulty=Difficulty.from_code(int(row[8])),
        )


class Leaderboard:
    def __init__(self, entries: Optional[Iterable[LeaderboardEntry]] = None):
        self._entries: List[LeaderboardEntry] = list(entries or [])
        self._rerank()

    def _rerank(self) -> None:
        self._entries.sort(key=lambda e: (e.score, e.accuracy), reverse=True)
        for position, entry in enumerate(self._entries, start=1):
            entry.rank = position

    def add(self, entry: LeaderboardEntry) -> None:
        self._entries.append(entry)
        self._rerank()

    def replace(self, entries: Iterable[LeaderboardEntry]) -> None:
        self._entries = list(entries)
        self._rerank()

    @property
    def entries(self) -> List[LeaderboardEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def write_csv(self, handle: TextIO) -> None:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for entry in self._entries:
            writer.writerow(entry.to_row())

    @staticmethod
    def read_csv(handle: TextIO) -> List[LeaderboardEntry]:
        """
        Parse leaderboard rows from an open CSV file.

        Each physical line is parsed on its own, so a broken row never
        swallows the rows after it. A leading header line is skipped, as are
        blank lines, rows with the wrong field count and rows whose numbers
        do not parse.
        """
        loaded: List[LeaderboardEntry] = []
        for line_no, line in enumerate(handle, start=1):
            line = line.rstrip("\r\n")
            if line_no == 1 and "RANK" in line:
                continue
            if not line.strip():
                continue
            try:
                row = next(csv.reader([line]))
                loaded.append(LeaderboardEntry.from_row(row))
            except (ValueError, csv.Error) as e:
                logger.debug(f"Skipping leaderboard row {line_no}: {e}")
        return loaded

    def format_table(self) -> str:
        if not self._entries:
            return "No leaderboard data available."
        lines = [
            f"{'Rank':<5}{'Name':<15}{'Score':<10}{'Games':<10}{'Attempts':<12}"
            f"{'Avg Time':<12}{'Accuracy':<12}{'Avg Guess':<15}{'Difficulty':<12}"
        ]
        for e in self._entries:
            lines.append(
                f"{e.rank:<5}{e.name:<15}{e.score:<10}{e.games:<10}{e.attempts:<12}"
                f"{e.average_time:<12.1f}{e.accuracy:<12.1f}%{e.average_guess_time:<15.2f}"
                f"{e.difficulty.label:<12}"
            )
        return "\n".join(lines)
