"""Single-session pronunciation playback.

The controller owns at most one live player. Starting a new session stops
the previous one first, and every player callback is bound to the token of
the session that created it so a superseded session can never change the
current state.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable

from fuaim.notify import Notifier
from fuaim.player import FfplayPlayer
from fuaim.regions import resolve_audio_url
from fuaim.types import PlaybackState

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = 'Failed to load audio for region "{region}".'
PLAY_ERROR_MESSAGE = 'Failed to play audio for region "{region}".'


@dataclass
class Session:
    """One playback attempt, from play() to end, failure or supersession."""
    token: int
    word: str
    region: str
    locator: str
    player: Any = None
    failed: bool = False
    error: Exception | None = field(default=None, repr=False)


class PlaybackController:
    """Plays pronunciations one at a time and reports failures.

    Args:
        notifier: Receives the user-facing error message of a failed session.
        player_factory: Called as ``player_factory(locator, on_play=...,
            on_end=..., on_load_error=..., on_play_error=...)`` and must
            return an object with ``play()`` and ``stop()``.
    """

    def __init__(self, notifier: Notifier, player_factory: Callable[..., Any] = FfplayPlayer):
        self.notifier = notifier
        self.player_factory = player_factory
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()
        self._session: Session | None = None
        self._state = PlaybackState.IDLE
        self._listeners: list[Callable[[PlaybackState], None]] = []

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def session(self) -> Session | None:
        return self._session

    def add_listener(self, callback: Callable[[PlaybackState], None]) -> None:
        """Call callback with the new state on every transition."""
        self._listeners.append(callback)

    def play(self, word: str, region: str) -> None:
        """Start playing word in region, replacing any current session.

        Returns immediately; progress shows up in ``state``/``is_playing``
        and failures go to the notifier.
        """
        locator = resolve_audio_url(word, region)
        if not locator:
            logger.warning(f"No recording for region {region!r}; letting the load fail")

        with self._lock:
            previous = self._session
            token = next(self._tokens)
            session = Session(token=token, word=word, region=region, locator=locator)
            self._session = session
            self._state = PlaybackState.LOADING

        if previous is not None and previous.player is not None:
            logger.debug(f"Stopping session {previous.token} for session {token}")
            previous.player.stop()

        self._notify_listeners(PlaybackState.LOADING)
        logger.info(f"Playing {word!r} ({region}) from {locator or '<none>'}")
        try:
            session.player = self.player_factory(
                locator,
                on_play=lambda: self._on_play(token),
                on_end=lambda: self._on_end(token),
                on_load_error=lambda exc=None: self._on_error(token, LOAD_ERROR_MESSAGE, exc),
                on_play_error=lambda exc=None: self._on_error(token, PLAY_ERROR_MESSAGE, exc),
            )
            session.player.play()
        except Exception as exc:
            self._on_error(token, LOAD_ERROR_MESSAGE, exc)

    def _current(self, token: int) -> Session | None:
        session = self._session
        if session is None or session.token != token:
            logger.debug(f"Ignoring callback from superseded session {token}")
            return None
        return session

    def _notify_listeners(self, *states: PlaybackState) -> None:
        for state in states:
            for listener in self._listeners:
                listener(state)

    def _transition(self, token: int, state: PlaybackState) -> None:
        """Move to state if token is still the live, unfailed session."""
        with self._lock:
            session = self._current(token)
            if session is None or session.failed:
                return
            self._state = state
        self._notify_listeners(state)

    def _on_play(self, token: int) -> None:
        self._transition(token, PlaybackState.PLAYING)

    def _on_end(self, token: int) -> None:
        self._transition(token, PlaybackState.IDLE)

    def _on_error(self, token: int, template: str, exc: Exception | None) -> None:
        with self._lock:
            session = self._current(token)
            if session is None or session.failed:
                return
            session.failed = True
            session.error = exc
            self._state = PlaybackState.IDLE
            region = session.region

        logger.error(f"Session {token} failed for {session.locator or '<none>'}: {exc}")
        self.notifier.error(template.format(region=region))
        self._notify_listeners(PlaybackState.FAILED, PlaybackState.IDLE)
