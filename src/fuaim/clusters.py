"""Expand a cluster's word mapping into word records.

Derived words get positional ids (1, 2, ...) that are rebuilt on every call.
They are good as list keys for one listing and nothing more: reorder the
mapping and the ids move with it.
"""

from typing import Iterable

from fuaim.types import REGIONS, Cluster, Word


def same_id(a: int | str, b: int | str) -> bool:
    """Compare identifiers loosely, so ``"3"`` matches ``3``."""
    return str(a) == str(b)


def find_cluster(clusters: Iterable[Cluster], cluster_id: int | str) -> Cluster | None:
    """Return the first cluster whose id matches cluster_id, or None."""
    for cluster in clusters:
        if same_id(cluster.id, cluster_id):
            return cluster
    return None


def derive_words(cluster: Cluster, cluster_id: int | str) -> list[Word]:
    """Build one Word per entry of cluster.cluster, in mapping order.

    ``cluster_id`` is copied onto every word as given, so a caller that asked
    with ``"7"`` gets ``"7"`` back even if the cluster stores ``7``. Every
    region is marked available; nothing checks the recordings exist.
    """
    return [
        Word(
            id=index,
            irish=irish,
            english=english,
            cluster_id=cluster_id,
            audio={region: True for region in REGIONS},
        )
        for index, (irish, english) in enumerate(cluster.cluster.items(), start=1)
    ]


def words_in_cluster(clusters: Iterable[Cluster], cluster_id: int | str | None) -> list[Word]:
    """Words of the cluster identified by cluster_id.

    An empty id (``None``, ``""``, ``0``) or an unknown one gives ``[]``.
    """
    if not cluster_id:
        return []
    cluster = find_cluster(clusters, cluster_id)
    if cluster is None:
        return []
    return derive_words(cluster, cluster_id)
