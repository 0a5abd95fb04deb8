"""Answer and source citation data models."""

from dataclasses import dataclass, field


@dataclass
class Source:
    """A page cited alongside a generated reply."""

    title: str
    url: str

    def to_dict(self) -> dict:
        return {"title": self.title, "url": self.url}


@dataclass
class Answer:
    """A generated reply plus the sources it was grounded on."""

    reply: str
    sources: list[Source] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"reply": self.reply, "sources": [s.to_dict() for s in self.sources]}
