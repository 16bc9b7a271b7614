"""Map a word and dialect region to its pronunciation recording URL."""

import os

from fuaim.types import REGION_CODES

AUDIO_HOST = os.environ.get("FUAIM_AUDIO_HOST", "www.teanglann.ie")


def is_supported_region(region: str) -> bool:
    """Return True if region is one of Connacht, Munster or Ulster."""
    return region in REGION_CODES


def resolve_audio_url(word: str, region: str, host: str | None = None) -> str:
    """Return the MP3 URL for word as spoken in region.

    The word is trimmed and lower-cased, so ``"  Madra "`` and ``"madra"``
    resolve to the same recording. An unrecognized region gives ``""``,
    which callers must treat as "nothing to play".
    """
    code = REGION_CODES.get(region)
    if code is None:
        return ""
    formatted = word.strip().lower()
    return f"https://{host or AUDIO_HOST}/{code}/{formatted}.mp3"
