"""Core data types for fuaim."""

from dataclasses import dataclass, field
from enum import Enum

# Dialect regions, each with its own recording on teanglann.ie
REGIONS = ("Connacht", "Munster", "Ulster")

REGION_CODES = {
    "Connacht": "CanC",
    "Munster": "CanM",
    "Ulster": "CanU",
}


class PlaybackState(Enum):
    """Lifecycle of one playback session."""
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    FAILED = "failed"


@dataclass
class Cluster:
    """A group of Irish-English word pairs."""
    id: int | str
    cluster: dict[str, str] = field(default_factory=dict)   # irish -> english

    @classmethod
    def from_dict(cls, data: dict) -> "Cluster":
        return cls(id=data["id"], cluster=dict(data.get("cluster") or {}))


@dataclass
class Word:
    """A word row from the backend, or one derived from a cluster.

    Derived words carry a positional ``id`` that is only valid for the
    list it was built in.
    """
    id: int
    irish: str
    english: str | None = None
    cluster_id: int | str | None = None
    audio: dict = field(default_factory=dict)   # region -> bool (derived) or url

    @classmethod
    def from_dict(cls, data: dict) -> "Word":
        return cls(
            id=data["id"],
            irish=data["irish"],
            english=data.get("english"),
            cluster_id=data.get("cluster_id"),
            audio=dict(data.get("audio") or {}),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "irish": self.irish,
            "english": self.english,
            "cluster_id": self.cluster_id,
            "audio": dict(self.audio),
        }
