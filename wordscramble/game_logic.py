import copy
import math
import random
import time
import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .word_bank import WordBank, DEFAULT_WORDS
from .game_stats import Difficulty, Leaderboard, LeaderboardEntry
from .monitoring import GameMetrics, estimate_memory, format_metrics_report

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Player"
NO_WORD_SELECTED = "No word selected."
NO_MORE_HINTS = "No more hints available."


class GameSession:
    def __init__(self, player_name: str = "", difficulty: Difficulty = Difficulty.EASY,
                 initial_words: Iterable[str] = DEFAULT_WORDS,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        # Seeded once per session; sequences are not meant to be reproducible
        self._rng = rng if rng is not None else random.Random(time.perf_counter_ns())
        self.word_bank = WordBank(initial_words)
        self.stats = Leaderboard()
        self._metrics = GameMetrics()
        self._custom_scores: Dict[int, int] = {}
        self._player_name = player_name
        self._difficulty = difficulty
        self.current_word = ""
        self.revealed: Set[int] = set()
        self.last_guess_correct = False
        self.total_guesses = 0
        self.correct_guesses = 0
        self.attempts = 0
        self.score = 0
        self.games_played = 0
        self._guess_started_at: Optional[float] = None
        self._update_memory_usage()

    # --- helpers ---

    def _elapsed_ms(self, started_at: float) -> float:
        return (self._clock() - started_at) * 1000.0

    def _update_memory_usage(self) -> None:
        total = estimate_memory(
            self.word_bank.words,
            self.word_bank.keys,
            (entry.name for entry in self.stats.entries),
            self._player_name,
        )
        self._metrics.record_memory(total)

    # --- settings ---

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, level: Difficulty) -> None:
        self._difficulty = Difficulty(level)
        logger.info(f"Difficulty set to {self._difficulty.label}")

    @property
    def player_name(self) -> str:
        return self._player_name

    @player_name.setter
    def player_name(self, name: str) -> None:
        self._player_name = name or ""
        self._update_memory_usage()

    @property
    def display_name(self) -> str:
        return self._player_name or DEFAULT_PLAYER_NAME

    def customize_scoring(self, word_length: int, reward: int) -> None:
        """Override the reward for words of a given length."""
        if word_length <= 0 or reward <= 0:
            return
        self._custom_scores[word_length] = reward

    @property
    def custom_scores(self) -> Dict[int, int]:
        return dict(self._custom_scores)

    # --- word management ---

    def add_word(self, word: str) -> bool:
        added = self.word_bank.add(word)
        if added:
            self._update_memory_usage()
        return added

    @property
    def words(self) -> List[str]:
        return self.word_bank.words

    def load_words_from_file(self, path: str) -> bool:
        """
        Load candidate words from a text file, one per line.

        Invalid and duplicate lines are skipped silently.
        Returns False only if the file cannot be opened.
        """
        start = self._clock()
        try:
            handle = open(path, 'r', encoding='utf-8', errors='replace')
        except OSError as e:
            logger.warning(f"Could not open word list '{path}': {e}")
            return False
        added = 0
        with handle:
            for line in handle:
                trimmed = line.strip()
                if not trimmed:
                    continue
                if self.word_bank.add(trimmed):
                    added += 1
        self._metrics.record_file_operation(self._elapsed_ms(start))
        self._update_memory_usage()
        logger.info(f"Loaded {added} new words from '{path}' ({len(self.word_bank)} total)")
        return True

    # --- round flow ---

    def select_random_word(self) -> str:
        words = self.word_bank.words
        if not words:
            return ""
        self.current_word = self._rng.choice(words)
        self.revealed.clear()
        self._guess_started_at = self._clock()
        return self.current_word

    def scramble_word(self, word: str) -> str:
        letters = list(word)
        if len(letters) > 1:
            self._rng.shuffle(letters)
        self._metrics.record_scramble()
        return "".join(letters)

    def check_guess(self, guess: str) -> bool:
        """Compare a guess with the current word, ignoring case."""
        now = self._clock()
        if self._guess_started_at is not None:
            delta = int((now - self._guess_started_at) * 1000.0)
            if delta <= 0:
                delta = 1
        else:
            delta = 1
        self._metrics.record_guess_time(float(delta))
        self._guess_started_at = self._clock()

        self.total_guesses += 1
        self.attempts += 1
        correct = (guess or "").lower() == self.current_word.lower()
        if correct:
            self.correct_guesses += 1
        self.last_guess_correct = correct
        return correct

    def reward_for(self, word: str) -> int:
        base = self._custom_scores.get(len(word), len(word) * 10)
        # Round half away from zero
        return int(math.floor(base * self._difficulty.multiplier + 0.5))

    def update_score(self) -> None:
        if not self.current_word or not self.last_guess_correct:
            return
        self.score += self.reward_for(self.current_word)
        self._update_memory_usage()

    def reset_attempts(self) -> None:
        self.attempts = 0

    @property
    def accuracy(self) -> float:
        if self.total_guesses == 0:
            return 0.0
        return self.correct_guesses / self.total_guesses * 100.0

    # --- hints ---

    @property
    def revealed_positions(self) -> FrozenSet[int]:
        return frozenset(self.revealed)

    def _next_unrevealed_position(self) -> Optional[int]:
        for position in range(len(self.current_word)):
            if position not in self.revealed:
                return position
        return None

    def get_hint(self, level: int) -> Tuple[bool, str]:
        """
        Reveal part of the current word.

        Level 1 shows the first letter, level 2 the first and last letters,
        any other level the next hidden letter from the left.
        Returns: (revealed, message)
        """
        word = self.current_word
        if not word:
            return False, NO_WORD_SELECTED
        if len(self.revealed) >= len(word):
            return False, NO_MORE_HINTS
        if level == 1:
            self.revealed.add(0)
            return True, f"Starts with: {word[0]}"
        if level == 2:
            self.revealed.update((0, len(word) - 1))
            return True, f"Starts with {word[0]} ... ends with {word[-1]}"
        position = self._next_unrevealed_position()
        if position is None:
            return False, NO_MORE_HINTS
        self.revealed.add(position)
        return True, f"Letter at position {position + 1} is '{word[position]}'"

    def masked_word(self, mask: str = "_") -> str:
        return " ".join(
            ch if i in self.revealed else mask
            for i, ch in enumerate(self.current_word)
        )

    # --- leaderboard ---

    @property
    def leaderboard(self) -> List[LeaderboardEntry]:
        return self.stats.entries

    def update_leaderboard(self, average_round_time: float) -> None:
        self.games_played += 1
        entry = LeaderboardEntry(
            name=self.display_name,
            score=self.score,
            games=self.games_played,
            attempts=self.attempts if self.attempts > 0 else self.total_guesses,
            average_time=average_round_time,
            accuracy=self.accuracy,
            average_guess_time=self._metrics.average_guess_time,
            difficulty=self._difficulty,
        )
        self.stats.add(entry)
        self._update_memory_usage()
        logger.info(f"Leaderboard updated for {entry.name}: score={entry.score} rank={entry.rank}")

    def save_leaderboard_to_file(self, path: str) -> bool:
        start = self._clock()
        try:
            handle = open(path, 'w', encoding='utf-8', newline='')
        except OSError as e:
            logger.warning(f"Could not open leaderboard file '{path}' for writing: {e}")
            return False
        try:
            with handle:
                self.stats.write_csv(handle)
        except OSError as e:
            logger.warning(f"Could not write leaderboard file '{path}': {e}")
            return False
        self._metrics.record_file_operation(self._elapsed_ms(start))
        logger.info(f"Saved {len(self.stats)} leaderboard entries to '{path}'")
        return True

    def load_leaderboard_from_file(self, path: str) -> bool:
        start = self._clock()
        try:
            handle = open(path, 'r', encoding='utf-8', errors='replace', newline='')
        except OSError as e:
            logger.warning(f"Could not open leaderboard file '{path}': {e}")
            return False
        with handle:
            loaded = Leaderboard.read_csv(handle)
        self.stats.replace(loaded)
        self._metrics.record_file_operation(self._elapsed_ms(start))
        self._update_memory_usage()
        logger.info(f"Loaded {len(loaded)} leaderboard entries from '{path}'")
        return True

    # --- metrics ---

    @property
    def metrics(self) -> GameMetrics:
        return copy.copy(self._metrics)

    def save_metrics_to_file(self, path: str) -> bool:
        start = self._clock()
        report = format_metrics_report(
            self.display_name,
            self.score,
            self.accuracy,
            self.total_guesses,
            self.correct_guesses,
            self._metrics,
        )
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(report)
        except OSError as e:
            logger.warning(f"Could not write metrics to '{path}': {e}")
            return False
        self._metrics.record_file_operation(self._elapsed_ms(start))
        logger.info(f"Saved session metrics to '{path}'")
        return True
