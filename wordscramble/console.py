"""
Console front end for Word Scramble.
Runs an interactive menu on top of a GameSession.
"""

import os
import time
import logging
from typing import Callable, List

from wordscramble import config
from wordscramble.game_logic import GameSession
from wordscramble.game_stats import Difficulty
from wordscramble.monitoring import configure_logging

logger = logging.getLogger(__name__)

MENU = """
=== Word Scramble ===
1. Play a round
2. Add a word
3. Load words from file
4. Change difficulty
5. Set player name
6. Show leaderboard
7. Save leaderboard
8. Save metrics
9. Quit
"""

QUIT_WORDS = ('quit', 'exit')


def build_session() -> GameSession:
    """Create a session from the environment settings."""
    session = GameSession(
        player_name=config.PLAYER_NAME,
        difficulty=Difficulty.parse(config.DIFFICULTY),
    )
    for length, reward in config.parse_custom_scores(config.CUSTOM_SCORES).items():
        session.customize_scoring(length, reward)
    if os.path.exists(config.WORDS_FILE):
        session.load_words_from_file(config.WORDS_FILE)
    if os.path.exists(config.LEADERBOARD_FILE):
        session.load_leaderboard_from_file(config.LEADERBOARD_FILE)
    return session


class ConsoleGame:
    def __init__(self, session: GameSession, input_fn: Callable[[str], str] = input,
                 output: Callable[[str], None] = print, clock: Callable[[], float] = time.monotonic):
        self.session = session
        self._input = input_fn
        self._output = output
        self._clock = clock
        self.round_times: List[float] = []

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    @property
    def average_round_time(self) -> float:
        if not self.round_times:
            return 0.0
        return sum(self.round_times) / len(self.round_times)

    def play_round(self) -> bool:
        """
        Play one word. Typing 'hint' reveals letters, 'quit' gives up.

        Returns: True if the word was solved
        """
        session = self.session
        word = session.select_random_word()
        if not word:
            self._output("No words available. Add some words first.")
            return False
        session.reset_attempts()
        scrambled = session.scramble_word(word)
        self._output(f"Unscramble this word: {scrambled}")
        started = self._clock()
        hint_level = 1
        solved = False
        while True:
            guess = self._ask("Your guess ('hint' or 'quit'): ")
            lowered = guess.lower()
            if lowered in QUIT_WORDS:
                self._output(f"The word was: {word}")
                break
            if lowered == 'hint':
                revealed, message = session.get_hint(hint_level)
                self._output(message)
                if revealed:
                    self._output(session.masked_word())
                    hint_level += 1
                continue
            if not guess:
                continue
            if session.check_guess(guess):
                session.update_score()
                self._output(f"Correct! Score: {session.score}")
                solved = True
                break
            self._output("Wrong! Try again.")
        self.round_times.append(self._clock() - started)
        session.update_leaderboard(self.average_round_time)
        return solved

    def add_word(self) -> None:
        word = self._ask("Word to add: ")
        if self.session.add_word(word):
            self._output(f"Added '{word}'.")
        else:
            self._output(f"'{word}' was rejected (letters only, 2-20 long, no duplicates).")

    def load_words(self) -> None:
        path = self._ask(f"Word list file [{config.WORDS_FILE}]: ") or config.WORDS_FILE
        if self.session.load_words_from_file(path):
            self._output(f"Word bank now holds {len(self.session.words)} words.")
        else:
            self._output(f"Could not open '{path}'.")

    def change_difficulty(self) -> None:
        choice = self._ask("Difficulty (1=Easy, 2=Medium, 3=Hard): ")
        self.session.difficulty = Difficulty.parse(choice)
        self._output(f"Difficulty is now {self.session.difficulty.label}.")

    def set_player_name(self) -> None:
        self.session.player_name = self._ask("Player name: ")
        self._output(f"Playing as {self.session.display_name}.")

    def show_leaderboard(self) -> None:
        self._output(self.session.stats.format_table())

    def save_leaderboard(self) -> None:
        if self.session.save_leaderboard_to_file(config.LEADERBOARD_FILE):
            self._output(f"Leaderboard saved to {config.LEADERBOARD_FILE}.")
        else:
            self._output(f"Could not write {config.LEADERBOARD_FILE}.")

    def save_metrics(self) -> None:
        if self.session.save_metrics_to_file(config.METRICS_FILE):
            self._output(f"Metrics saved to {config.METRICS_FILE}.")
        else:
            self._output(f"Could not write {config.METRICS_FILE}.")

    def run(self) -> None:
        actions = {
            '1': self.play_round,
            '2': self.add_word,
            '3': self.load_words,
            '4': self.change_difficulty,
            '5': self.set_player_name,
            '6': self.show_leaderboard,
            '7': self.save_leaderboard,
            '8': self.save_metrics,
        }
        while True:
            self._output(MENU)
            try:
                choice = self._ask("Choose an option: ")
            except EOFError:
                break
            if choice == '9' or choice.lower() in QUIT_WORDS:
                break
            action = actions.get(choice)
            if action is None:
                self._output("Please choose a number from 1 to 9.")
                continue
            try:
                action()
            except EOFError:
                break
        self._output("Goodbye!")


def main() -> None:
    configure_logging()
    logger.info("Starting Word Scramble console")
    ConsoleGame(build_session()).run()


if __name__ == "__main__":
    main()
