from unittest.mock import MagicMock

import pygame

from gridsnake import audio
from gridsnake.audio import SAMPLE_RATE, SoundBoard, create_tone
from gridsnake.game import GameEvent, SnakeGame


def test_create_tone_length_and_range():
    pcm = create_tone(440, 100, volume=0.5)
    assert len(pcm) == SAMPLE_RATE // 10
    assert max(abs(s) for s in pcm) <= 32767 // 2 + 1
    assert pcm[0] == 0


def test_create_tone_never_empty():
    assert len(create_tone(440, 0)) == 1


def test_events_map_to_cues():
    eat = MagicMock()
    over = MagicMock()
    board = SoundBoard({"eat": eat, "game_over": over})
    board(GameEvent.ATE, None)
    board(GameEvent.MOVED, None)
    board(GameEvent.GAME_OVER, None)
    eat.play.assert_called_once()
    over.play.assert_called_once()


def test_play_failure_is_swallowed_and_logged(caplog):
    broken = MagicMock()
    broken.play.side_effect = pygame.error("device lost")
    board = SoundBoard({"eat": broken})
    board.play("eat")
    assert "device lost" in caplog.text


def test_failing_sound_does_not_disturb_the_game():
    broken = MagicMock()
    broken.play.side_effect = pygame.error("device lost")
    game = SnakeGame(rng=0)
    game.add_listener(SoundBoard({"eat": broken, "start": broken}))
    game.start()
    snap = game.tick()
    assert snap.score == 1
    assert broken.play.call_count == 2


def test_disabled_board_plays_nothing():
    sound = MagicMock()
    board = SoundBoard({"eat": sound}, enabled=False)
    board.play("eat")
    sound.play.assert_not_called()
    assert SoundBoard.from_mixer(enabled=False).enabled is False


def test_missing_mixer_disables_audio(monkeypatch):
    monkeypatch.setattr(audio.pygame.mixer, "get_init", lambda: None)

    def fail(**kwargs):
        raise pygame.error("no audio device")

    monkeypatch.setattr(audio.pygame.mixer, "init", fail)
    board = SoundBoard.from_mixer()
    assert board.enabled is False
    board.play("eat")
