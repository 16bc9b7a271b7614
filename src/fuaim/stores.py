"""In-memory word and cluster lists with loading/error flags."""

import logging

from fuaim.api import ApiClient, ApiError
from fuaim.clusters import words_in_cluster
from fuaim.types import Cluster, Word

logger = logging.getLogger(__name__)


class ClusterStore:
    """Clusters fetched from the backend."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.clusters: list[Cluster] = []
        self.is_loading = False
        self.error_message = ""

    def load_clusters(self) -> None:
        """Replace ``clusters`` with the backend's list; failures set error_message."""
        self.is_loading = True
        self.error_message = ""
        try:
            self.clusters = [Cluster.from_dict(c) for c in self.client.fetch_clusters()]
            logger.info(f"Loaded {len(self.clusters)} clusters")
        except (ApiError, KeyError, TypeError) as exc:
            logger.error(f"Error fetching clusters: {exc}")
            self.error_message = "Failed to load clusters."
        finally:
            self.is_loading = False

    def add_cluster(self, cluster_data: dict) -> Cluster:
        """Create a cluster, append it, and return it. Failures are re-raised."""
        self.is_loading = True
        self.error_message = ""
        try:
            cluster = Cluster.from_dict(self.client.create_cluster(cluster_data))
            self.clusters.append(cluster)
            return cluster
        except (ApiError, KeyError, TypeError) as exc:
            logger.error(f"Error adding cluster: {exc}")
            self.error_message = "Failed to add cluster."
            raise
        finally:
            self.is_loading = False

    def words_in_cluster(self, cluster_id: int | str | None) -> list[Word]:
        return words_in_cluster(self.clusters, cluster_id)


class WordStore:
    """Backend words, sorted by Irish term."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.words: list[Word] = []
        self.is_loading = False
        self.error_message = ""

    def load_words(self) -> None:
        self.is_loading = True
        self.error_message = ""
        try:
            words = [Word.from_dict(w) for w in self.client.fetch_words()]
            self.words = sorted(words, key=lambda w: w.irish.casefold())
            logger.info(f"Loaded {len(self.words)} words")
        except (ApiError, KeyError, TypeError) as exc:
            logger.error(f"Error fetching words: {exc}")
            self.error_message = "Failed to load words"
        finally:
            self.is_loading = False
