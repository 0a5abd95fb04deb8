"""Ingestion pipeline orchestrator.

Wires together: scraper → cleaner → chunker → embedding → json_store.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from sitebot.embedding.provider import EmbeddingProvider
from sitebot.ingestion.chunker import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    chunk_text,
    validate_chunk_params,
)
from sitebot.ingestion.cleaner import extract_page
from sitebot.ingestion.scraper import (
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    build_headers,
    discover_urls,
    fetch_page,
)
from sitebot.models.chunk import VectorRecord
from sitebot.models.index import SiteIndex
from sitebot.vectorstore.json_store import save_index

logger = logging.getLogger(__name__)

# Pages with less extracted text are navigation or boilerplate only
MIN_PAGE_CHARS = 200


@dataclass
class IngestionResult:
    """The built index plus per-run counters."""

    index: SiteIndex
    urls_discovered: int = 0
    pages_ingested: int = 0
    pages_skipped: int = 0
    pages_failed: int = 0
    index_path: Path | None = None
    failed_urls: list[str] = field(default_factory=list)

    @property
    def chunks_stored(self) -> int:
        return len(self.index)

    def summary(self) -> dict:
        return {
            "urls_discovered": self.urls_discovered,
            "pages_ingested": self.pages_ingested,
            "pages_skipped": self.pages_skipped,
            "pages_failed": self.pages_failed,
            "chunks_stored": self.chunks_stored,
        }


def embed_page_chunks(
    url: str,
    title: str,
    chunks: list[str],
    embedding_provider: EmbeddingProvider,
) -> list[VectorRecord]:
    """Embed all chunks of one page in a single call and build their records."""
    embeddings = embedding_provider.embed(chunks)
    if len(embeddings) != len(chunks):
        raise ValueError(f"expected {len(chunks)} embeddings, got {len(embeddings)}")
    return [
        VectorRecord.from_chunk(url, title, i, content, embedding)
        for i, (content, embedding) in enumerate(zip(chunks, embeddings))
    ]


def build_index(
    site: str,
    limit: int = DEFAULT_LIMIT,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    embedding_provider: EmbeddingProvider,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    min_page_chars: int = MIN_PAGE_CHARS,
    user_agent: str = DEFAULT_USER_AGENT,
    progress_callback=None,
) -> IngestionResult:
    """Crawl a site and build its vector index in memory.

    Steps, per discovered URL and strictly sequential:
    1. Fetch the page HTML
    2. Extract title and text; skip pages shorter than min_page_chars
    3. Chunk the text
    4. Embed all chunks of the page in one call
    5. Append one VectorRecord per chunk

    A failed fetch or embedding call skips that page only. Invalid chunk
    settings raise ValueError before anything is fetched.
    """
    validate_chunk_params(chunk_size, chunk_overlap)

    urls = discover_urls(site, limit=limit, timeout_ms=timeout_ms, user_agent=user_agent)
    logger.info("Discovered %d URLs to ingest from %s", len(urls), site)

    headers = build_headers(user_agent)
    records: list[VectorRecord] = []
    pages_ingested = 0
    pages_skipped = 0
    failed_urls = []

    for position, url in enumerate(urls, 1):
        if progress_callback:
            progress_callback(position, len(urls), url)

        html = fetch_page(url, timeout_ms=timeout_ms, headers=headers)
        if html is None:
            failed_urls.append(url)
            continue

        page = extract_page(url, html)
        if len(page.text) < min_page_chars:
            logger.info("Skipping %s: only %d characters of text", url, len(page.text))
            pages_skipped += 1
            continue

        try:
            chunks = chunk_text(page.text, chunk_size=chunk_size, overlap=chunk_overlap)
            page_records = embed_page_chunks(url, page.title, chunks, embedding_provider)
        except MemoryError:
            raise
        except Exception as e:
            logger.warning("Failed to ingest %s: %s", url, e)
            failed_urls.append(url)
            continue

        records.extend(page_records)
        pages_ingested += 1
        logger.info("Ingested %s (%d chunks)", url, len(page_records))

    index = SiteIndex(
        site=site,
        model=embedding_provider.model_name,
        vectors=tuple(records),
        generated_at=datetime.now(timezone.utc),
    )

    return IngestionResult(
        index=index,
        urls_discovered=len(urls),
        pages_ingested=pages_ingested,
        pages_skipped=pages_skipped,
        pages_failed=len(failed_urls),
        failed_urls=failed_urls,
    )


def run_ingestion_pipeline(
    site: str | None = None,
    limit: int | None = None,
    timeout_ms: int | None = None,
    index_path: str | Path | None = None,
    embedding_provider: EmbeddingProvider | None = None,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
    progress_callback=None,
) -> IngestionResult:
    """Run the full ingestion pipeline and persist the index.

    Unset arguments fall back to settings. The index file at index_path is
    replaced wholesale; a failure to write it propagates.
    """
    from config.settings import get_settings, require_credentials

    settings = get_settings()
    require_credentials(settings)

    if embedding_provider is None:
        from sitebot.embedding.factory import get_embedding_provider

        embedding_provider = get_embedding_provider(settings)

    result = build_index(
        site or settings.sitebot_site,
        limit=limit if limit is not None else settings.sitebot_crawl_limit,
        timeout_ms=timeout_ms if timeout_ms is not None else settings.sitebot_crawl_timeout_ms,
        embedding_provider=embedding_provider,
        chunk_size=chunk_size if chunk_size is not None else settings.sitebot_chunk_size,
        chunk_overlap=chunk_overlap if chunk_overlap is not None else settings.sitebot_chunk_overlap,
        min_page_chars=settings.sitebot_min_page_chars,
        user_agent=settings.sitebot_user_agent,
        progress_callback=progress_callback,
    )

    result.index_path = save_index(result.index, index_path or settings.index_path)
    logger.info(
        "Saved index with %d chunks from %d pages to %s",
        result.chunks_stored,
        result.pages_ingested,
        result.index_path,
    )
    return result
