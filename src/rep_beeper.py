# Rep beeps.
# Uses simpleaudio (the "audio" extra) if available; otherwise falls back to '\a' (terminal bell).

import logging
import threading

import numpy as np

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def tone(freq=880, ms=120, volume=0.2):
    t = np.linspace(0, ms / 1000.0, int(SAMPLE_RATE * ms / 1000.0), False)
    wave = volume * np.sin(2 * np.pi * freq * t)
    return (wave * 32767).astype("int16")


def _play(freq, ms):
    try:
        import simpleaudio as sa
        play_obj = sa.play_buffer(tone(freq, ms), 1, 2, SAMPLE_RATE)
        play_obj.wait_done()
    except Exception as e:  # not installed, no audio device, busy backend
        logger.debug("Beep playback failed: %s", e)
        print("\a", end="", flush=True)


def beep(freq=880, ms=120, async_play=True):
    if async_play:
        threading.Thread(target=_play, args=(freq, ms), daemon=True).start()
    else:
        _play(freq, ms)
