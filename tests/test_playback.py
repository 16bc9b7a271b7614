"""Tests for the single-session playback controller."""

import pytest

from fuaim.notify import LoggingNotifier
from fuaim.playback import PlaybackController
from fuaim.types import PlaybackState


class FakePlayer:
    """Records calls; tests fire the callbacks by hand."""

    def __init__(self, locator, *, on_play, on_end, on_load_error, on_play_error):
        self.locator = locator
        self.on_play = on_play
        self.on_end = on_end
        self.on_load_error = on_load_error
        self.on_play_error = on_play_error
        self.played = False
        self.stopped = False

    def play(self):
        self.played = True

    def stop(self):
        self.stopped = True


@pytest.fixture
def players():
    return []


@pytest.fixture
def notifier():
    return LoggingNotifier()


@pytest.fixture
def controller(players, notifier):
    def factory(locator, **callbacks):
        player = FakePlayer(locator, **callbacks)
        players.append(player)
        return player

    return PlaybackController(notifier, player_factory=factory)


def test_initially_idle(controller):
    assert controller.state is PlaybackState.IDLE
    assert controller.is_playing is False
    assert controller.session is None


def test_play_builds_player_for_resolved_url(controller, players):
    controller.play("  Madra ", "Munster")
    assert len(players) == 1
    assert players[0].locator == "https://www.teanglann.ie/CanM/madra.mp3"
    assert players[0].played
    assert controller.state is PlaybackState.LOADING
    assert controller.is_playing is False


def test_full_lifecycle(controller, players):
    seen = []
    controller.add_listener(seen.append)

    controller.play("madra", "Ulster")
    players[0].on_play()
    assert controller.is_playing is True
    players[0].on_end()
    assert controller.is_playing is False

    assert seen == [PlaybackState.LOADING, PlaybackState.PLAYING, PlaybackState.IDLE]


def test_second_play_stops_first(controller, players):
    controller.play("madra", "Ulster")
    players[0].on_play()

    controller.play("cat", "Connacht")
    assert players[0].stopped
    assert not players[1].stopped
    assert len(players) == 2


def test_first_stopped_before_second_built(players, notifier):
    events = []

    def factory(locator, **callbacks):
        if players:
            events.append(("stopped_before_build", players[-1].stopped))
        player = FakePlayer(locator, **callbacks)
        players.append(player)
        return player

    controller = PlaybackController(notifier, player_factory=factory)
    controller.play("madra", "Ulster")
    controller.play("cat", "Ulster")
    assert events == [("stopped_before_build", True)]


def test_stale_end_ignored(controller, players):
    controller.play("madra", "Ulster")
    players[0].on_play()
    controller.play("cat", "Ulster")
    players[1].on_play()

    players[0].on_end()

    assert controller.is_playing is True
    assert controller.state is PlaybackState.PLAYING


def test_stale_error_ignored(controller, players, notifier):
    controller.play("madra", "Ulster")
    controller.play("cat", "Munster")

    players[0].on_load_error(OSError("gone"))

    assert notifier.messages == []
    assert controller.state is PlaybackState.LOADING


def test_load_failure(controller, players, notifier):
    seen = []
    controller.add_listener(seen.append)
    controller.play("madra", "Connacht")

    players[0].on_load_error(OSError("404"))

    assert controller.is_playing is False
    assert controller.state is PlaybackState.IDLE
    assert notifier.messages == ['Failed to load audio for region "Connacht".']
    assert seen[-2:] == [PlaybackState.FAILED, PlaybackState.IDLE]
    assert controller.session.failed


def test_play_failure(controller, players, notifier):
    controller.play("madra", "Munster")
    players[0].on_play_error(RuntimeError("device busy"))

    assert controller.is_playing is False
    assert notifier.messages == ['Failed to play audio for region "Munster".']


def test_failure_after_playing_resets_signal(controller, players, notifier):
    controller.play("madra", "Munster")
    players[0].on_play()
    players[0].on_play_error(RuntimeError("stream died"))

    assert controller.is_playing is False
    assert len(notifier.messages) == 1


def test_failure_notified_once(controller, players, notifier):
    controller.play("madra", "Ulster")
    players[0].on_load_error(OSError("a"))
    players[0].on_play_error(OSError("b"))
    players[0].on_load_error(OSError("c"))

    assert notifier.messages == ['Failed to load audio for region "Ulster".']


def test_no_transitions_after_failure(controller, players):
    controller.play("madra", "Ulster")
    players[0].on_load_error(OSError("a"))
    players[0].on_play()
    assert controller.is_playing is False


def test_unknown_region_passes_through(controller, players, notifier):
    controller.play("madra", "Leinster")

    assert players[0].locator == ""
    assert players[0].played
    players[0].on_load_error(ValueError("no url"))
    assert notifier.messages == ['Failed to load audio for region "Leinster".']


def test_new_session_after_failure(controller, players, notifier):
    controller.play("madra", "Ulster")
    players[0].on_load_error(OSError("a"))

    controller.play("madra", "Munster")
    players[1].on_play()
    assert controller.is_playing is True
    assert len(notifier.messages) == 1


def test_session_tokens_increase(controller):
    controller.play("madra", "Ulster")
    first = controller.session.token
    controller.play("madra", "Ulster")
    assert controller.session.token > first


def test_player_factory_raising_is_reported(notifier):
    def factory(locator, **callbacks):
        raise RuntimeError("can't start new thread")

    controller = PlaybackController(notifier, player_factory=factory)
    controller.play("madra", "Munster")

    assert controller.state is PlaybackState.IDLE
    assert controller.is_playing is False
    assert notifier.messages == ['Failed to load audio for region "Munster".']
    assert controller.session.player is None

    # A following play() must not trip over the missing player
    controller.play("madra", "Ulster")
    assert len(notifier.messages) == 2


def test_player_start_raising_is_reported(players, notifier):
    class BrokenPlayer(FakePlayer):
        def play(self):
            raise RuntimeError("can't start new thread")

    def factory(locator, **callbacks):
        player = BrokenPlayer(locator, **callbacks)
        players.append(player)
        return player

    controller = PlaybackController(notifier, player_factory=factory)
    controller.play("madra", "Connacht")

    assert controller.is_playing is False
    assert notifier.messages == ['Failed to load audio for region "Connacht".']

    controller.play("cat", "Connacht")
    assert players[0].stopped
