import os
import logging
from typing import Dict
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from the working directory the game is started in
load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"))

WORDS_FILE = os.getenv('WORDS_FILE', 'words.txt')
LEADERBOARD_FILE = os.getenv('LEADERBOARD_FILE', 'leaderboard.csv')
METRICS_FILE = os.getenv('METRICS_FILE', 'metrics.txt')
DIFFICULTY = os.getenv('DIFFICULTY', 'Easy').strip()
PLAYER_NAME = os.getenv('PLAYER_NAME', '').strip()
CUSTOM_SCORES = os.getenv('CUSTOM_SCORES', '')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
LOG_DIR = os.getenv('LOG_DIR', 'logs')
LOG_TO_CONSOLE = os.getenv('LOG_TO_CONSOLE', 'false').strip().lower() in ('1', 'true', 'yes', 'on')


def parse_custom_scores(raw: str) -> Dict[int, int]:
    """
    Parse a ``length:reward`` list such as ``"5:75, 6:90"``.

    Pairs that are malformed or not strictly positive are skipped.
    """
    scores: Dict[int, int] = {}
    for chunk in (raw or '').split(','):
        chunk = chunk.strip()
        if not chunk:
            continue
        length_text, sep, reward_text = chunk.partition(':')
        if not sep:
            logger.warning(f"Ignoring custom score '{chunk}': expected length:reward")
            continue
        try:
            length = int(length_text)
            reward = int(reward_text)
        except ValueError:
            logger.warning(f"Ignoring custom score '{chunk}': not a number")
            continue
        if length <= 0 or reward <= 0:
            logger.warning(f"Ignoring custom score '{chunk}': values must be positive")
            continue
        scores[length] = reward
    return scores
