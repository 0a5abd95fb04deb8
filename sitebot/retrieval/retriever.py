"""In-memory retriever over a persisted site index.

Handles:
- Loading and hot-reloading the JSON index
- Cosine similarity scoring of every stored vector (brute-force scan)
- Stable top-k selection
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from sitebot.models.chunk import VectorRecord
from sitebot.models.index import SiteIndex
from sitebot.vectorstore.json_store import load_index

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 6
EPSILON = 1e-8


@dataclass(frozen=True)
class RetrievedChunk:
    """A stored vector record with its similarity to the query."""

    record: VectorRecord
    score: float

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def url(self) -> str:
        return self.record.url

    @property
    def title(self) -> str:
        return self.record.title

    @property
    def content(self) -> str:
        return self.record.content


@dataclass(frozen=True)
class _Snapshot:
    """An index plus its pre-computed matrix; never mutated once built."""

    index: SiteIndex
    matrix: np.ndarray
    norms: np.ndarray


def _build_snapshot(index: SiteIndex) -> _Snapshot:
    if index.vectors:
        matrix = np.array([v.embedding for v in index.vectors], dtype=np.float64)
    else:
        matrix = np.zeros((0, 0), dtype=np.float64)
    norms = np.linalg.norm(matrix, axis=1) if matrix.size else np.zeros(len(index.vectors))
    matrix.setflags(write=False)
    norms.setflags(write=False)
    return _Snapshot(index=index, matrix=matrix, norms=norms)


def cosine_similarity(a, b) -> float:
    """Cosine similarity with EPSILON added to the denominator.

    A zero vector scores 0 against anything instead of dividing by zero.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"vector dimensions differ: {a.shape[0]} vs {b.shape[0]}")
    return float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b) + EPSILON))


class Retriever:
    """Owns the in-memory index and answers top-k similarity queries.

    The current index lives in a single snapshot reference. Reloading
    builds a complete new snapshot before assigning it, so concurrent
    readers see either the old index or the new one, never a mix.
    """

    def __init__(
        self,
        index_path: str | Path | None = None,
        expected_model: str | None = None,
        index: SiteIndex | None = None,
    ):
        """Initialize the retriever.

        Args:
            index_path: JSON index file read by load()/reload()
            expected_model: Embedding model queries are embedded with; an
                index built with a different model is rejected
            index: Optional index to serve before the first load
        """
        self._index_path = Path(index_path) if index_path is not None else None
        self._expected_model = expected_model
        self._snapshot: _Snapshot | None = _build_snapshot(index) if index is not None else None

    @property
    def index(self) -> SiteIndex | None:
        snapshot = self._snapshot
        return snapshot.index if snapshot else None

    @property
    def vector_count(self) -> int:
        snapshot = self._snapshot
        return len(snapshot.index) if snapshot else 0

    @property
    def model(self) -> str | None:
        snapshot = self._snapshot
        return snapshot.index.model if snapshot else None

    def reload(self) -> int:
        """Re-read the index file and swap it in.

        If the file is missing, unreadable or built with a different
        embedding model, the error is logged and the current index keeps
        serving.

        Returns:
            Number of vectors now being served
        """
        if self._index_path is None:
            logger.warning("Retriever has no index path configured, nothing to reload")
            return self.vector_count

        try:
            index = load_index(self._index_path)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load index %s: %s", self._index_path, e)
            return self.vector_count

        if index is None:
            logger.warning(
                "No index found at %s. Run `sitebot ingest` to build a knowledge index.",
                self._index_path,
            )
            return self.vector_count

        if self._expected_model and index.model and index.model != self._expected_model:
            logger.error(
                "Index %s was built with embedding model %s but queries use %s; keeping current index",
                self._index_path,
                index.model,
                self._expected_model,
            )
            return self.vector_count

        snapshot = _build_snapshot(index)
        self._snapshot = snapshot

        logger.info(
            "Index loaded: %d vectors, model=%s, site=%s",
            len(index),
            index.model,
            index.site,
        )
        return len(index)

    load = reload

    def select_top_k(self, query_embedding, k: int = DEFAULT_TOP_K) -> list[RetrievedChunk]:
        """Return the ``k`` stored vectors most similar to the query.

        Scores every vector (O(n·d)) and sorts descending with a stable
        sort, so equal scores keep index order. Returns an empty list when
        no index is loaded, the index is empty, or k <= 0.

        Raises:
            ValueError: If the query dimension differs from the index's
        """
        snapshot = self._snapshot
        if snapshot is None or not snapshot.index.vectors or k <= 0:
            return []

        query = np.asarray(query_embedding, dtype=np.float64)
        if query.ndim != 1 or query.shape[0] != snapshot.matrix.shape[1]:
            raise ValueError(
                f"query embedding has dimension {query.shape[-1] if query.ndim else 0}, "
                f"index has {snapshot.matrix.shape[1]}"
            )

        scores = snapshot.matrix @ query / (snapshot.norms * np.linalg.norm(query) + EPSILON)
        order = np.argsort(-scores, kind="stable")[:k]

        results = [
            RetrievedChunk(record=snapshot.index.vectors[i], score=float(scores[i]))
            for i in order
        ]

        logger.debug(
            "Selected %d of %d vectors, top score %s",
            len(results),
            len(snapshot.index),
            results[0].score if results else None,
        )
        return results


# Process-wide retriever used by the serving layer
_retriever_instance: Retriever | None = None
_retriever_lock = threading.Lock()


def get_retriever() -> Retriever:
    """Get or create the process-wide retriever, loading the index on first use."""
    global _retriever_instance
    with _retriever_lock:
        if _retriever_instance is None:
            from config.settings import get_settings

            settings = get_settings()
            expected = settings.sitebot_embedding_model if settings.sitebot_validate_model else None
            retriever = Retriever(index_path=settings.index_path, expected_model=expected)
            retriever.load()
            _retriever_instance = retriever
        return _retriever_instance
