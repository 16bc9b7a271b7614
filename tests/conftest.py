"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def default_audio_host(monkeypatch):
    """Pin the recording host so FUAIM_AUDIO_HOST in the environment has no effect."""
    monkeypatch.setattr("fuaim.regions.AUDIO_HOST", "www.teanglann.ie")
