"""Vector record data model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VectorRecord:
    """A chunk of page text with its embedding, the atomic retrieval unit."""

    id: str
    url: str
    title: str
    content: str
    embedding: tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for name in ("id", "url", "title", "content"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a string, got {type(getattr(self, name)).__name__}")
        if not self.content.strip():
            raise ValueError("content must not be empty")
        if not self.url:
            raise ValueError("url must not be empty")
        if not isinstance(self.embedding, tuple):
            object.__setattr__(self, "embedding", tuple(float(x) for x in self.embedding))

    @classmethod
    def from_chunk(
        cls,
        url: str,
        title: str,
        chunk_index: int,
        content: str,
        embedding: list[float],
    ) -> "VectorRecord":
        """Build a record whose id is ``<url>#<chunk_index>``."""
        if chunk_index < 0:
            raise ValueError("chunk_index must be >= 0")
        return cls(
            id=f"{url}#{chunk_index}",
            url=url,
            title=title,
            content=content,
            embedding=tuple(float(x) for x in embedding),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "embedding": list(self.embedding),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VectorRecord":
        if not isinstance(data, dict):
            raise TypeError(f"vector record must be an object, got {type(data).__name__}")
        return cls(
            id=data["id"],
            url=data["url"],
            title=data.get("title") or "",
            content=data["content"],
            embedding=tuple(float(x) for x in data["embedding"]),
        )
