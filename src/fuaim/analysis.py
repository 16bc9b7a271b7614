"""Checks on decoded audio.

All functions operate on numpy arrays (float64, normalized to [-1, 1]).
WAV reading uses scipy.io.wavfile so no extra ffmpeg call is needed.
"""

from pathlib import Path

import numpy as np
import scipy.io.wavfile as wavfile

# Peak below this is treated as no signal at all (about -90 dBFS)
SILENCE_PEAK = 3e-5


def read_wav(path: str | Path) -> tuple[np.ndarray, int]:
    """Read a WAV file and return (samples, sample_rate).

    - Normalizes int16/int32 to float64 in [-1, 1]
    - Passes through float WAVs as float64
    - Takes the first channel if stereo

    Raises:
        FileNotFoundError: if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sr, data = wavfile.read(str(path))

    if data.ndim > 1:
        data = data[:, 0]

    if np.issubdtype(data.dtype, np.integer):
        info = np.iinfo(data.dtype)
        samples = data.astype(np.float64) / max(abs(info.min), abs(info.max))
    else:
        samples = data.astype(np.float64)

    return samples, sr


def is_silent(samples: np.ndarray) -> bool:
    """True if samples is empty or never rises above SILENCE_PEAK."""
    if len(samples) == 0:
        return True
    return float(np.max(np.abs(samples))) < SILENCE_PEAK
