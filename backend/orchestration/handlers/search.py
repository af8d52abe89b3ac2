"""
Search Handler - Web search via SearXNG with an LLM-written answer.

Flow: SearXNG JSON results → read the top search_fetch_pages result pages →
provider answers from the page text. When no page could be read the answer
is written from the SearXNG snippets, and if synthesis fails it is the list
of result titles.
Transport and status errors from SearXNG raise ExternalServiceError; the
executor turns that into this tool's error slot. A page that cannot be read
is logged and skipped.
"""

import logging
import re
from html import unescape
from typing import Any, Dict, List, Mapping, Optional

import httpx

from errors import ExternalServiceError, log_error

from .base import ToolHandler, ToolKind

logger = logging.getLogger(__name__)

SNIPPET_LIMIT = 300
PAGE_USER_AGENT = "Mozilla/5.0 (compatible; Switchboard/0.1)"

_NOISE_RE = re.compile(r"<script[^>]*>.*?</script>|<style[^>]*>.*?</style>|<!--.*?-->", re.DOTALL | re.IGNORECASE)

# First match wins; the whole document is used when none match
_MAIN_CONTENT_PATTERNS = [
    re.compile(p, re.DOTALL | re.IGNORECASE)
    for p in (
        r"<main[^>]*>(.*?)</main>",
        r"<article[^>]*>(.*?)</article>",
        r"<div[^>]*class=\"[^\"]*content[^\"]*\"[^>]*>(.*?)</div>",
        r"<div[^>]*id=\"[^\"]*content[^\"]*\"[^>]*>(.*?)</div>",
        r"<body[^>]*>(.*?)</body>",
    )
]

SYNTHESIS_SYSTEM_PROMPT = "You are a helpful assistant that answers questions based on provided sources."

SOURCES_PROMPT = """Question: {query}

I have searched the internet and found the following information:

{sources}

Please provide a comprehensive, accurate, and well-structured answer to the question based on the sources above.

Guidelines:
1. Synthesize information from multiple sources when relevant
2. Be concise but thorough
3. If sources contradict each other, mention both perspectives
4. If sources don't fully answer the question, acknowledge what is covered and what isn't
5. Do not make up information not present in the sources
6. You may reference sources by their title or number (e.g., "According to Source 1...")

Answer:"""

SNIPPETS_PROMPT = """Question: {query}

Here are the top search result snippets:

{snippets}

Please provide a helpful answer based on these snippets. Be concise and acknowledge that this is based on limited information from search results.

Answer:"""


def _normalize_categories(categories: str) -> str:
    parts = [p.strip() for p in (categories or "").split(",") if p.strip()]
    return ",".join(parts) if parts else "general"


def _strip_html(value: str) -> str:
    cleaned = re.sub(r"<[^>]+>", " ", value or "")
    cleaned = unescape(cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


def extract_page_text(html: str) -> str:
    """Readable text of an HTML page, preferring its main content area."""
    html = _NOISE_RE.sub("", html or "")
    for pattern in _MAIN_CONTENT_PATTERNS:
        match = pattern.search(html)
        if match:
            html = match.group(1)
            break
    return _strip_html(html)


def _parse_json_results(data: Dict[str, Any], limit: int) -> List[Dict[str, str]]:
    results: List[Dict[str, str]] = []
    for item in data.get("results", []):
        url = (item.get("url") or "").strip()
        if not url:
            continue
        results.append(
            {
                "title": _strip_html(item.get("title") or "") or url,
                "url": url,
                "content": _strip_html(item.get("content") or "")[:SNIPPET_LIMIT],
            }
        )
        if len(results) >= limit:
            break
    return results


def _format_snippets(results: List[Dict[str, str]]) -> str:
    lines = []
    for i, result in enumerate(results, 1):
        if not result.get("content"):
            continue
        lines.append(f"{i}. {result['title']}\n   {result['content']}\n   Source: {result['url']}")
    return "\n\n".join(lines)


def _format_sources(pages: List[Dict[str, str]]) -> str:
    parts = [
        f"Source {i}: {page['title']}\nURL: {page['url']}\nContent: {page['content']}\n"
        for i, page in enumerate(pages, 1)
    ]
    return "\n---\n\n".join(parts)


def _titles_answer(query: str, results: List[Dict[str, str]]) -> str:
    titles = "\n".join(f"- {r['title']} ({r['url']})" for r in results)
    return f"Here are the top results for '{query}':\n{titles}"


class SearchHandler(ToolHandler):
    """Answers search requests from SearXNG results and the pages they link to."""

    kind = ToolKind.SEARCH

    def __init__(self, client, config, http_client: Optional[httpx.Client] = None):
        """
        Args:
            client: CompletionProvider used to synthesize the answer
            config: RouterConfig (searxng_*, search_fetch_pages, page_* settings)
            http_client: Injected httpx.Client (tests); otherwise one per request
        """
        self.client = client
        self.config = config
        self._http = http_client

    def get_description(self) -> str:
        return "Search the internet and provide AI-synthesized answers with source citations"

    def _get(self, url: str, timeout: float, **kwargs) -> httpx.Response:
        if self._http is not None:
            response = self._http.get(url, timeout=timeout, **kwargs)
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as client:
                response = client.get(url, **kwargs)
        response.raise_for_status()
        return response

    def fetch_results(self, query: str) -> List[Dict[str, str]]:
        """Query SearXNG and return up to searxng_max_results results."""
        searxng_url = (self.config.searxng_url or "http://localhost:8080").rstrip("/")
        timeout_s = float(self.config.searxng_timeout_s or 10.0)
        limit = max(1, int(self.config.searxng_max_results or 5))
        params = {
            "q": query,
            "format": "json",
            "categories": _normalize_categories(self.config.searxng_categories),
        }

        try:
            data = self._get(f"{searxng_url}/search", timeout_s, params=params).json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise ExternalServiceError(
                "Search service error",
                details=f"SearXNG returned status {status_code}",
                service="searxng",
                status_code=status_code,
            ) from exc
        except httpx.TimeoutException as exc:
            raise ExternalServiceError(
                "Search service timed out",
                details="The search request took too long. Try again.",
                service="searxng",
            ) from exc
        except httpx.RequestError as exc:
            raise ExternalServiceError(
                "Search service unavailable",
                details="Could not connect to the search service",
                service="searxng",
            ) from exc
        except ValueError as exc:
            raise ExternalServiceError(
                "Search service returned invalid JSON",
                details=str(exc),
                service="searxng",
            ) from exc

        return _parse_json_results(data, limit)

    def fetch_page(self, url: str) -> str:
        """
        Download one result page and return its readable text (page_max_chars at most).

        Raises:
            ExternalServiceError: the page could not be downloaded
        """
        try:
            response = self._get(
                url,
                float(self.config.page_fetch_timeout_s or 30.0),
                headers={"User-Agent": PAGE_USER_AGENT},
            )
        except httpx.HTTPError as exc:
            raise ExternalServiceError("Page fetch failed", details=str(exc), service="web", url=url) from exc

        text = extract_page_text(response.text)
        limit = int(self.config.page_max_chars or 10000)
        return text[:limit] + "..." if len(text) > limit else text

    def fetch_top_pages(self, results: List[Dict[str, str]]) -> List[Dict[str, str]]:
        """Read result pages in order until search_fetch_pages of them had content."""
        wanted = int(self.config.search_fetch_pages or 0)
        pages: List[Dict[str, str]] = []
        for result in results:
            if len(pages) >= wanted:
                break
            try:
                content = self.fetch_page(result["url"])
            except ExternalServiceError as e:
                log_error(logger, e, context="search", include_traceback=False, level=logging.WARNING)
                continue
            if content:
                pages.append({"title": result["title"], "url": result["url"], "content": content})
        return pages

    def _complete(self, prompt: str) -> str:
        try:
            return self.client.complete(SYNTHESIS_SYSTEM_PROMPT, prompt).strip()
        except Exception as e:
            log_error(logger, e, context="search", include_traceback=False, level=logging.WARNING)
            return ""

    def synthesize(self, query: str, results: List[Dict[str, str]], pages: Optional[List[Dict[str, str]]] = None) -> str:
        """Answer from fetched pages, else from snippets, else list the titles."""
        if pages:
            answer = self._complete(SOURCES_PROMPT.format(query=query, sources=_format_sources(pages)))
            if answer:
                return answer

        snippets = _format_snippets(results)
        if snippets:
            answer = self._complete(SNIPPETS_PROMPT.format(query=query, snippets=snippets))
            if answer:
                return answer

        return _titles_answer(query, results)

    def execute(self, message: str, context: Mapping[str, Any]) -> Dict[str, Any]:
        query = message.strip()
        logger.info(f"Search: starting query '{query[:80]}'")

        results = self.fetch_results(query)

        if not results:
            return {
                "type": "answer",
                "query": query,
                "answer": f"I couldn't find any information about '{query}'. Please try rephrasing your question.",
                "sources": [],
                "message": f"I couldn't find any information about '{query}'.",
            }

        pages = self.fetch_top_pages(results)
        if not pages and self.config.search_fetch_pages:
            logger.warning("Search: no page content fetched, using snippets only")

        answer = self.synthesize(query, results, pages)
        return {
            "type": "answer",
            "query": query,
            "answer": answer,
            "sources": results,
            "source_count": len(pages),
            "message": answer,
        }
