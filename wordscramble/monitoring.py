"""
Monitoring module for Word Scramble.
Handles logging setup, session counters and the metrics report.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from wordscramble import config

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Rough per-object costs used by the memory estimate
STRING_OVERHEAD = 32
ENTRY_OVERHEAD = 112


def configure_logging(level_name: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    """Configure the root logger with a file handler and, optionally, stderr."""
    level_name = (level_name or config.LOG_LEVEL).strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    logs_dir = Path(log_dir or config.LOG_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)
    handlers = [logging.FileHandler(logs_dir / 'game.log')]
    if config.LOG_TO_CONSOLE:
        handlers.append(logging.StreamHandler())
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger('wordscramble').setLevel(level)


@dataclass
class GameMetrics:
    """Cumulative counters for one game session."""
    total_guess_time: float = 0.0
    guess_count: int = 0
    file_operations: int = 0
    total_file_io_time: float = 0.0
    total_memory_allocated: int = 0
    peak_memory_usage: int = 0
    scramble_count: int = 0

    def record_guess_time(self, elapsed_ms: float) -> None:
        self.total_guess_time += elapsed_ms
        self.guess_count += 1

    def record_file_operation(self, elapsed_ms: float) -> None:
        self.file_operations += 1
        self.total_file_io_time += elapsed_ms

    def record_scramble(self) -> None:
        self.scramble_count += 1

    def record_memory(self, total: int) -> None:
        self.total_memory_allocated = total
        self.peak_memory_usage = max(self.peak_memory_usage, total)

    @property
    def average_guess_time(self) -> float:
        if self.guess_count == 0:
            return 0.0
        return self.total_guess_time / self.guess_count


def estimate_memory(words: Iterable[str], word_keys: Iterable[str],
                    entry_names: Iterable[str], player_name: str) -> int:
    """
    Best-effort estimate of the bytes held by a session.

    Args:
        words: Accepted words in the bank
        word_keys: Lower-cased forms used for duplicate checks
        entry_names: Player names of the leaderboard entries
        player_name: Current player name

    Returns:
        Estimated size in bytes
    """
    total = 0
    for word in words:
        total += STRING_OVERHEAD + len(word)
    for _ in word_keys:
        total += STRING_OVERHEAD
    for name in entry_names:
        total += ENTRY_OVERHEAD + len(name)
    total += len(player_name)
    return total


def format_metrics_report(player: str, score: int, accuracy: float, guesses: int,
                          correct: int, metrics: GameMetrics) -> str:
    lines = [
        f"Player: {player}",
        f"Score: {score}",
        f"Accuracy: {accuracy:.1f}%",
        f"Guesses: {guesses}",
        f"Correct: {correct}",
        f"Total Guess Time: {metrics.total_guess_time:.2f} ms",
        f"File I/O Operations: {metrics.file_operations}",
        f"Total File I/O Time: {metrics.total_file_io_time:.2f} ms",
        f"Scrambles: {metrics.scramble_count}",
        f"Total Memory: {metrics.total_memory_allocated} bytes",
        f"Peak Memory: {metrics.peak_memory_usage} bytes",
    ]
    return "\n".join(lines) + "\n"
