"""Site index data model, the persisted collection of vector records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from sitebot.models.chunk import VectorRecord


@dataclass(frozen=True)
class SiteIndex:
    """All vector records built from one crawl of a site.

    Immutable: a rebuilt index replaces the old one wholesale.
    """

    site: str
    model: str
    vectors: tuple[VectorRecord, ...] = field(default_factory=tuple)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not isinstance(self.vectors, tuple):
            object.__setattr__(self, "vectors", tuple(self.vectors))
        dimensions = {len(v.embedding) for v in self.vectors}
        if len(dimensions) > 1:
            raise ValueError(f"all embeddings must share one dimension, got {sorted(dimensions)}")

    @property
    def dimension(self) -> int | None:
        """Embedding dimension, or None for an empty index."""
        if not self.vectors:
            return None
        return len(self.vectors[0].embedding)

    def __len__(self) -> int:
        return len(self.vectors)

    def to_dict(self) -> dict:
        return {
            "site": self.site,
            "generatedAt": self.generated_at.isoformat(),
            "model": self.model,
            "vectors": [v.to_dict() for v in self.vectors],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SiteIndex":
        generated_at = data.get("generatedAt")
        if generated_at is not None and not isinstance(generated_at, str):
            raise TypeError("generatedAt must be an ISO-8601 string")
        for name in ("site", "model"):
            if not isinstance(data.get(name, ""), str):
                raise TypeError(f"{name} must be a string")
        vectors = data.get("vectors") or []
        if not isinstance(vectors, list):
            raise TypeError("vectors must be a list")

        if generated_at:
            # Python < 3.11 fromisoformat() rejects a trailing "Z"
            generated_at = datetime.fromisoformat(generated_at.replace("Z", "+00:00"))
        else:
            generated_at = datetime.now(timezone.utc)
        return cls(
            site=data.get("site", ""),
            model=data.get("model", ""),
            vectors=tuple(VectorRecord.from_dict(v) for v in vectors),
            generated_at=generated_at,
        )
