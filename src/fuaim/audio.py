"""Fetching and decoding pronunciation audio via requests and ffmpeg."""

import logging
import subprocess
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 10


def download_audio(
    url: str,
    dest: Path,
    session: requests.Session | None = None,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> Path:
    """Download url to dest.

    Raises:
        requests.RequestException: on transport failure, a non-2xx status,
            or an empty/malformed URL.
    """
    http = session or requests
    response = http.get(url, timeout=timeout)
    response.raise_for_status()
    if not response.content:
        raise requests.RequestException(f"Empty response body from {url}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(response.content)
    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return dest


def decode_to_wav(input_path: Path, output_path: Path) -> Path:
    """Decode any ffmpeg-readable file to 16kHz mono WAV."""
    if not input_path.exists():
        raise FileNotFoundError(f"File not found: {input_path}")
    cmd = [
        "ffmpeg", "-y", "-i", str(input_path),
        "-vn", "-ar", "16000", "-ac", "1", "-f", "wav",
        str(output_path),
    ]
    subprocess.run(
        cmd, capture_output=True, text=True, timeout=60,
    ).check_returncode()
    return output_path
