import logging
import math
from array import array

import pygame

from .game import GameEvent

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def create_tone(
    frequency_hz,
    duration_ms,
    volume=0.35,
    end_frequency_hz=None,
    attack_ms=8,
    release_ms=60,
):
    """Generate mono 16-bit PCM samples for a tone/chirp with a soft envelope."""
    sample_count = max(1, int(SAMPLE_RATE * (duration_ms / 1000.0)))

    amplitude = int(32767 * max(0.0, min(volume, 1.0)))
    attack_samples = int(SAMPLE_RATE * (attack_ms / 1000.0))
    release_samples = int(SAMPLE_RATE * (release_ms / 1000.0))
    release_start = max(0, sample_count - release_samples)
    end_frequency_hz = frequency_hz if end_frequency_hz is None else end_frequency_hz

    pcm = array("h")
    phase = 0.0
    for i in range(sample_count):
        progress = i / max(1, sample_count - 1)
        current_freq = frequency_hz + (end_frequency_hz - frequency_hz) * progress
        phase += (2.0 * math.pi * current_freq) / SAMPLE_RATE

        env = 1.0
        if attack_samples > 0 and i < attack_samples:
            env = i / attack_samples
        if release_samples > 0 and i >= release_start:
            env *= max(0.0, (sample_count - i) / release_samples)

        pcm.append(int(amplitude * env * math.sin(phase)))

    return pcm


# name -> create_tone arguments
CUES = {
    # Soft pop/chomp: short rounded down-chirp.
    "eat": dict(frequency_hz=720, duration_ms=95, volume=0.26, end_frequency_hz=520, attack_ms=6, release_ms=70),
    # Gentle descending whoosh.
    "game_over": dict(frequency_hz=420, duration_ms=420, volume=0.2, end_frequency_hz=110, attack_ms=16, release_ms=220),
    # Subtle UI click.
    "pause_toggle": dict(frequency_hz=560, duration_ms=38, volume=0.16, end_frequency_hz=500, attack_ms=4, release_ms=24),
    "start": dict(frequency_hz=660, duration_ms=120, volume=0.22, end_frequency_hz=880, attack_ms=6, release_ms=60),
}

EVENT_CUES = {
    GameEvent.STARTED: "start",
    GameEvent.ATE: "eat",
    GameEvent.GAME_OVER: "game_over",
    GameEvent.PAUSED: "pause_toggle",
    GameEvent.RESUMED: "pause_toggle",
}


class SoundBoard:
    """
    Plays a cue for each game event. Audio failures stay here: a missing
    mixer disables the board, and a cue that fails to play is logged and
    skipped.
    """

    def __init__(self, sounds=None, enabled=True):
        self.sounds = dict(sounds or {})
        self.enabled = enabled and bool(self.sounds)

    @classmethod
    def from_mixer(cls, enabled=True):
        """Initialize the mixer and synth tones; disable gracefully if unavailable."""
        if not enabled:
            return cls(enabled=False)
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            sounds = {
                name: pygame.mixer.Sound(buffer=create_tone(**params).tobytes())
                for name, params in CUES.items()
            }
        except pygame.error as e:
            logger.warning("Audio disabled, mixer unavailable: %s", e)
            return cls(enabled=False)
        return cls(sounds)

    def play(self, name):
        """Play a named sound if audio is available."""
        if not self.enabled or name not in self.sounds:
            return
        try:
            self.sounds[name].play()
        except pygame.error as e:
            logger.warning("Could not play %r: %s", name, e)

    def __call__(self, event, snapshot):
        cue = EVENT_CUES.get(event)
        if cue is not None:
            self.play(cue)
