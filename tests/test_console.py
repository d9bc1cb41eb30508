from unittest.mock import patch

import pytest
from wordscramble.console import ConsoleGame, build_session
from wordscramble.game_logic import GameSession
from wordscramble.game_stats import Difficulty


def _scripted(answers):
    answers = iter(answers)

    def fake_input(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError
    return fake_input


@pytest.fixture
def output():
    return []


def _console(session, answers, output, clock):
    return ConsoleGame(session, input_fn=_scripted(answers), output=output.append, clock=clock)


@pytest.mark.integration
def test_play_round_with_hints(puzzle_session, output, clock):
    game = _console(puzzle_session, ["hint", "hint", "", "wrong", "PUZZLE"], output, clock)

    assert game.play_round() is True

    assert output[0].startswith("Unscramble this word: ")
    assert sorted(output[0].split(": ")[1]) == sorted("puzzle")
    assert output[1:] == [
        "Starts with: p",
        "p _ _ _ _ _",
        "Starts with p ... ends with e",
        "p _ _ _ _ e",
        "Wrong! Try again.",
        "Correct! Score: 60",
    ]
    [entry] = puzzle_session.leaderboard
    assert entry.attempts == 2
    assert entry.score == 60


@pytest.mark.integration
def test_play_round_give_up(puzzle_session, output, clock):
    game = _console(puzzle_session, ["quit"], output, clock)
    assert game.play_round() is False
    assert output[-1] == "The word was: puzzle"
    assert puzzle_session.score == 0
    assert len(puzzle_session.leaderboard) == 1


@pytest.mark.integration
def test_round_times_feed_leaderboard(puzzle_session, output, clock):
    answers = iter(["puzzle", "puzzle"])

    def slow_input(prompt):
        clock.advance(4.0)
        return next(answers)

    game = ConsoleGame(puzzle_session, input_fn=slow_input, output=output.append, clock=clock)
    game.play_round()
    game.play_round()
    assert game.round_times == [4.0, 4.0]
    assert all(e.average_time == 4.0 for e in puzzle_session.leaderboard)


@pytest.mark.integration
def test_play_round_with_empty_bank(clock, output):
    game = _console(GameSession(initial_words=[], clock=clock), [], output, clock)
    assert game.play_round() is False
    assert output == ["No words available. Add some words first."]


@pytest.mark.integration
def test_menu_flow(puzzle_session, output, clock):
    answers = ["7x", "4", "hard", "5", "Ann", "2", "planet", "2", "PLANET", "6", "9"]
    game = _console(puzzle_session, answers, output, clock)

    game.run()

    assert "Please choose a number from 1 to 9." in output
    assert "Difficulty is now Hard." in output
    assert "Playing as Ann." in output
    assert "Added 'planet'." in output
    assert any("was rejected" in line for line in output)
    assert "No leaderboard data available." in output
    assert output[-1] == "Goodbye!"
    assert puzzle_session.difficulty == Difficulty.HARD
    assert puzzle_session.words == ["puzzle", "planet"]


@pytest.mark.integration
def test_run_stops_on_eof(session, output, clock):
    _console(session, [], output, clock).run()
    assert output[-1] == "Goodbye!"


@pytest.mark.integration
def test_save_commands(puzzle_session, output, clock, tmp_path):
    leaderboard_file = tmp_path / "board.csv"
    metrics_file = tmp_path / "metrics.txt"
    with patch('wordscramble.console.config.LEADERBOARD_FILE', str(leaderboard_file)), \
            patch('wordscramble.console.config.METRICS_FILE', str(metrics_file)):
        _console(puzzle_session, ["1", "puzzle", "7", "8", "9"], output, clock).run()

    assert f"Leaderboard saved to {leaderboard_file}." in output
    assert f"Metrics saved to {metrics_file}." in output
    assert leaderboard_file.read_text().startswith("RANK,NAME")
    assert "Score: 60" in metrics_file.read_text()


@pytest.mark.integration
def test_build_session_from_config(tmp_path):
    words_file = tmp_path / "words.txt"
    words_file.write_text("planet\nrhythm\n")
    board_file = tmp_path / "board.csv"
    board_file.write_text("RANK,NAME,SCORE,GAMES,ATTEMPTS,AVG_TIME,ACCURACY,AVG_GUESS_TIME,DIFFICULTY\n"
                          "1,Ann,90,1,1,2.00,100.00,3.00,2\n")

    with patch.multiple('wordscramble.console.config',
                        WORDS_FILE=str(words_file),
                        LEADERBOARD_FILE=str(board_file),
                        DIFFICULTY="Medium",
                        PLAYER_NAME="Bo",
                        CUSTOM_SCORES="6:100"):
        session = build_session()

    assert session.difficulty == Difficulty.MEDIUM
    assert session.player_name == "Bo"
    assert session.custom_scores == {6: 100}
    assert session.words[-2:] == ["planet", "rhythm"]
    assert [e.name for e in session.leaderboard] == ["Ann"]


@pytest.mark.integration
def test_change_difficulty_with_odd_digit_keeps_running(puzzle_session, output, clock):
    _console(puzzle_session, ["4", "²", "9"], output, clock).run()

    assert "Difficulty is now Easy." in output
    assert output[-1] == "Goodbye!"
