"""One-shot audio player: fetch, decode and play a single recording.

A player is built for exactly one URL and reports its progress through the
four callbacks given at construction time. Everything after ``play()`` runs
on a daemon worker thread, so callbacks arrive on that thread.
"""

import logging
import subprocess
import tempfile
import threading
from pathlib import Path
from typing import Callable

import requests

from fuaim.analysis import is_silent, read_wav
from fuaim.audio import decode_to_wav, download_audio

logger = logging.getLogger(__name__)

# Anything the load stage can raise for a bad or unreachable recording
LOAD_ERRORS = (
    requests.RequestException,
    subprocess.CalledProcessError,
    subprocess.TimeoutExpired,
    OSError,
    ValueError,
)


class FfplayPlayer:
    """Play one remote recording through ffplay.

    Callbacks:
        on_play(): audible output has started.
        on_end(): playback finished normally.
        on_load_error(exc): download or decode failed.
        on_play_error(exc): the recording loaded but ffplay could not play it.

    After ``stop()`` no further callbacks fire.
    """

    def __init__(
        self,
        locator: str,
        *,
        on_play: Callable[[], None],
        on_end: Callable[[], None],
        on_load_error: Callable[[Exception], None],
        on_play_error: Callable[[Exception], None],
        session: requests.Session | None = None,
        ffplay: str = "ffplay",
    ):
        self.locator = locator
        self.on_play = on_play
        self.on_end = on_end
        self.on_load_error = on_load_error
        self.on_play_error = on_play_error
        self.session = session
        self.ffplay = ffplay
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._process: subprocess.Popen | None = None
        self._thread: threading.Thread | None = None

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def play(self) -> None:
        """Start loading and playing in the background."""
        if self._thread is not None:
            raise RuntimeError("player already started")
        self._thread = threading.Thread(
            target=self._run, name=f"fuaim-player:{self.locator}", daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Silence this player immediately without waiting for the worker."""
        self._stopped.set()
        with self._lock:
            process = self._process
        if process is not None and process.poll() is None:
            process.terminate()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _emit(self, callback: Callable, *args) -> None:
        if self._stopped.is_set():
            return
        callback(*args)

    def _load(self, workdir: Path) -> Path:
        """Download and decode the recording, returning the WAV path."""
        source = download_audio(self.locator, workdir / "source.mp3", session=self.session)
        wav = decode_to_wav(source, workdir / "decoded.wav")
        samples, _ = read_wav(wav)
        if is_silent(samples):
            raise ValueError(f"No audio decoded from {self.locator}")
        return wav

    def _run(self) -> None:
        with tempfile.TemporaryDirectory(prefix="fuaim-") as tmpdir:
            try:
                wav = self._load(Path(tmpdir))
            except LOAD_ERRORS as exc:
                logger.debug(f"Load failed for {self.locator!r}: {exc}")
                self._emit(self.on_load_error, exc)
                return

            cmd = [self.ffplay, "-nodisp", "-autoexit", "-loglevel", "error", str(wav)]
            try:
                with self._lock:
                    if self._stopped.is_set():
                        return
                    self._process = subprocess.Popen(
                        cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, text=True,
                    )
            except OSError as exc:
                logger.debug(f"Could not start {self.ffplay}: {exc}")
                self._emit(self.on_play_error, exc)
                return

            self._emit(self.on_play)
            _, stderr = self._process.communicate()

            if self._stopped.is_set():
                return
            if self._process.returncode != 0:
                self._emit(
                    self.on_play_error,
                    subprocess.CalledProcessError(self._process.returncode, cmd, stderr=stderr),
                )
            else:
                self._emit(self.on_end)
