"""
Audio Manager
=============

Procedurally synthesised sound effects and background music.
Waveforms are built with numpy and handed to pygame.mixer.
If the mixer cannot start, every method is a no-op.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import numpy as np

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from balloon_catcher.core.config_loader import GameConfig, get_config


# Two-voice melody, one note per music_note_seconds
MELODY_LOW = (262, 294, 330, 349, 392, 440, 494, 523)   # C4 to C5
MELODY_HIGH = (330, 349, 392, 415, 440, 494, 523, 587)  # E4 to D5

# Base gains before volume scaling
CATCH_GAIN = 0.3
BONUS_GAIN = 0.4
POP_GAIN = 0.2
GAME_OVER_GAIN = 0.4
MUSIC_GAIN = 0.15


def frequency_curve(
    points: Sequence[Tuple[float, float]],
    duration: float,
    sample_rate: int
) -> np.ndarray:
    """
    Per-sample frequency following exponential ramps between breakpoints.

    Args:
        points: (time, frequency) pairs, first at t=0, sorted by time.
        duration: Total length in seconds.
        sample_rate: Samples per second.

    Returns:
        Array of frequencies, one per sample.
    """
    n = int(sample_rate * duration)
    t = np.arange(n) / sample_rate
    times = np.array([p[0] for p in points], dtype=np.float64)
    log_freqs = np.log(np.array([p[1] for p in points], dtype=np.float64))
    # Interpolating in log space gives an exponential ramp; holds after the last point
    return np.exp(np.interp(t, times, log_freqs))


def oscillator(freqs: np.ndarray, sample_rate: int, wave: str = "sine") -> np.ndarray:
    """Render a waveform in [-1, 1] from a per-sample frequency array."""
    phase = 2 * np.pi * np.cumsum(freqs) / sample_rate
    if wave == "sine":
        return np.sin(phase)
    if wave == "square":
        return np.sign(np.sin(phase))
    if wave == "triangle":
        return 2 / np.pi * np.arcsin(np.sin(phase))
    if wave == "sawtooth":
        cycles = phase / (2 * np.pi)
        return 2 * (cycles - np.floor(cycles + 0.5))
    raise ValueError(f"Unknown wave shape: {wave}")


def decay_envelope(n: int, start: float = 1.0, end: float = 0.01) -> np.ndarray:
    """Exponential fade from start to end over n samples."""
    if n <= 0:
        return np.zeros(0)
    return start * (end / start) ** (np.arange(n) / n)


def lowpass(signal: np.ndarray, cutoffs: np.ndarray, sample_rate: int) -> np.ndarray:
    """One-pole low-pass filter with a per-sample cutoff frequency."""
    alphas = 1 - np.exp(-2 * np.pi * cutoffs / sample_rate)
    out = np.empty_like(signal)
    y = 0.0
    for i in range(len(signal)):
        y += alphas[i] * (signal[i] - y)
        out[i] = y
    return out


def synth_catch(sample_rate: int) -> np.ndarray:
    """Bouncy rising chord: C5-E5-G5 over E5-G5-C6."""
    duration = 0.3
    low = frequency_curve([(0.0, 523), (0.1, 659), (0.2, 784)], duration, sample_rate)
    high = frequency_curve([(0.0, 659), (0.1, 784), (0.2, 1047)], duration, sample_rate)
    mix = oscillator(low, sample_rate, "sine") + oscillator(high, sample_rate, "triangle")
    return 0.5 * mix * decay_envelope(len(mix)) * CATCH_GAIN


def synth_bonus(sample_rate: int) -> np.ndarray:
    """Sparkly major chord sweeping up an octave."""
    duration = 0.5
    voices = [
        ((523, 1047), "sine"),
        ((659, 1319), "sine"),
        ((784, 1568), "triangle"),
    ]
    mix = sum(
        oscillator(frequency_curve([(0.0, f0), (0.4, f1)], duration, sample_rate), sample_rate, wave)
        for (f0, f1), wave in voices
    )
    return mix / len(voices) * decay_envelope(len(mix)) * BONUS_GAIN


def synth_pop(sample_rate: int) -> np.ndarray:
    """Short square-wave drop for a balloon hitting the ground."""
    freqs = frequency_curve([(0.0, 200), (0.1, 50)], 0.1, sample_rate)
    wave = oscillator(freqs, sample_rate, "square")
    return wave * decay_envelope(len(wave)) * POP_GAIN


def synth_game_over(sample_rate: int) -> np.ndarray:
    """Descending sawtooth A4-A3-A2 through a closing low-pass."""
    duration = 1.0
    freqs = frequency_curve([(0.0, 440), (0.5, 220), (1.0, 110)], duration, sample_rate)
    cutoffs = frequency_curve([(0.0, 1000), (1.0, 200)], duration, sample_rate)
    wave = lowpass(oscillator(freqs, sample_rate, "sawtooth"), cutoffs, sample_rate)
    return wave * decay_envelope(len(wave)) * GAME_OVER_GAIN


def synth_music(sample_rate: int, note_seconds: float) -> np.ndarray:
    """One loop of the background melody, both voices stepping together."""
    low = np.concatenate([np.full(int(sample_rate * note_seconds), f, dtype=np.float64) for f in MELODY_LOW])
    high = np.concatenate([np.full(int(sample_rate * note_seconds), f, dtype=np.float64) for f in MELODY_HIGH])
    mix = 0.5 * (oscillator(low, sample_rate, "sine") + oscillator(high, sample_rate, "triangle"))
    cutoffs = np.full(len(mix), 1200.0)
    return lowpass(mix, cutoffs, sample_rate) * MUSIC_GAIN


def to_pcm(wave: np.ndarray, channels: int) -> np.ndarray:
    """Convert [-1, 1] floats to int16 PCM with the mixer's channel layout."""
    pcm = (np.clip(wave, -1.0, 1.0) * 32767).astype(np.int16)
    if channels == 1:
        return np.ascontiguousarray(pcm)
    return np.ascontiguousarray(np.column_stack([pcm] * channels))


class AudioManager:
    """
    EventSink that plays sounds for game events.

    Volumes:
    - master: scales everything (dropped while the window is unfocused)
    - sfx: catch, bonus, pop and game over effects
    - music: background loop
    """

    def __init__(self, config: Optional[GameConfig] = None, enabled: bool = True, debug: bool = False):
        """
        Initialize audio manager.

        Args:
            config: Game configuration. Uses default if None.
            enabled: If False, never touches the mixer.
            debug: If True, prints [DEBUG] lines when audio setup fails.
        """
        if config is None:
            config = get_config()

        self._config = config.audio
        self._debug = debug
        self.master_volume = self._config.master_volume
        self.sfx_volume = self._config.sfx_volume
        self.music_volume = self._config.music_volume
        self.muted = False

        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._music_channel = None
        self._enabled = False

        if enabled and PYGAME_AVAILABLE:
            self._enabled = self._init_mixer()

    @property
    def enabled(self) -> bool:
        """True if the mixer started and sounds were built."""
        return self._enabled

    @property
    def music_playing(self) -> bool:
        return self._music_channel is not None

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=self._config.sample_rate, size=-16, channels=2)
            sample_rate, _, channels = pygame.mixer.get_init()
            self._build_sounds(sample_rate, channels)
        except Exception as e:
            # No audio device, or mixer refused the format: run silent
            if self._debug:
                print(f"[DEBUG] Audio disabled: {e}")
            self._sounds.clear()
            return False
        return True

    def _build_sounds(self, sample_rate: int, channels: int) -> None:
        waves = {
            "catch": synth_catch(sample_rate),
            "bonus": synth_bonus(sample_rate),
            "pop": synth_pop(sample_rate),
            "game_over": synth_game_over(sample_rate),
            "music": synth_music(sample_rate, self._config.music_note_seconds),
        }
        for name, wave in waves.items():
            self._sounds[name] = pygame.sndarray.make_sound(to_pcm(wave, channels))

    def _play(self, name: str) -> None:
        if not self._enabled or self.muted:
            return
        sound = self._sounds.get(name)
        if sound is None:
            return
        sound.set_volume(self.sfx_volume * self.master_volume)
        sound.play()

    # EventSink

    def on_catch(self, is_bonus: bool) -> None:
        self._play("bonus" if is_bonus else "catch")

    def on_floor_miss(self) -> None:
        self._play("pop")

    def on_game_over(self) -> None:
        self.stop_background_music()
        self._play("game_over")

    def on_game_start(self) -> None:
        self.start_background_music()

    def on_game_quit(self) -> None:
        self.stop_background_music()

    # Music

    def start_background_music(self) -> None:
        if not self._enabled or self.muted or self._music_channel is not None:
            return
        self._music_channel = self._sounds["music"].play(loops=-1)
        self._apply_music_volume()

    def stop_background_music(self) -> None:
        if self._music_channel is not None:
            self._music_channel.stop()
            self._music_channel = None

    def _apply_music_volume(self) -> None:
        if self._music_channel is not None:
            self._music_channel.set_volume(self.music_volume * self.master_volume)

    # Controls

    def toggle_mute(self) -> bool:
        """Flip mute; muting also stops the music. Returns the new state."""
        self.muted = not self.muted
        if self.muted:
            self.stop_background_music()
        else:
            self.start_background_music()
        return self.muted

    def set_master_volume(self, volume: float) -> None:
        self.master_volume = max(0.0, min(1.0, volume))
        self._apply_music_volume()

    def set_sfx_volume(self, volume: float) -> None:
        self.sfx_volume = max(0.0, min(1.0, volume))

    def set_music_volume(self, volume: float) -> None:
        self.music_volume = max(0.0, min(1.0, volume))
        self._apply_music_volume()

    def on_focus_change(self, focused: bool) -> None:
        """Quiet the game while its window is in the background."""
        if focused:
            self.set_master_volume(self._config.master_volume)
        else:
            self.set_master_volume(self._config.background_volume)

    def close(self) -> None:
        self.stop_background_music()
        self._sounds.clear()
        self._enabled = False
