"""Base HTTP client: request building and response mapping."""

from typing import TypeVar
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from ddclient.errors import DecodeError, TransportError, error_from_response
from ddclient.rate import Rate
from ddclient.result import Err, Ok, Result
from ddclient.settings import API_BASE_URL, API_TIMEOUT, CONTENT_TYPE, USER_AGENT

M = TypeVar("M", bound=BaseModel)


def encode_segment(value: str) -> str:
    """Percent-encode a single path segment."""
    return quote(value, safe="")


def _normalize_url(api_url: str) -> str:
    try:
        url = httpx.URL(api_url)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid API URL: {api_url!r}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Invalid API URL: {api_url!r}")
    return api_url if api_url.endswith("/") else f"{api_url}/"


class BaseClient:
    """Base async HTTP client. One attempt per call, errors returned as values.

    A caller-supplied ``http_client`` is shared and left open on ``aclose``;
    otherwise the client creates and owns its own transport.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = API_TIMEOUT,
    ):
        if not api_key:
            raise ValueError("API key is required")
        self._api_key = api_key
        self._api_url = _normalize_url(api_url)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        logger.debug("{}: api_url={}", self.__class__.__name__, self._api_url)

    @property
    def api_url(self) -> str:
        return self._api_url

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_):
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_client:
            await self._client.aclose()

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": CONTENT_TYPE,
            "User-Agent": USER_AGENT,
        }
        if with_body:
            headers["Content-Type"] = CONTENT_TYPE
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        schema: type[M],
        body: BaseModel | None = None,
        allow_empty: bool = False,
    ) -> Result[M]:
        """Send one request and map the response to Ok or Err.

        With ``allow_empty`` a 204 or empty 2xx body is a success with no value.
        """
        url = f"{self._api_url}{path}"
        content = body.model_dump_json() if body is not None else None

        if self._client.is_closed:
            return Err(TransportError("HTTP client is closed"))

        logger.debug("{} {}", method, url)
        try:
            resp = await self._client.request(
                method,
                url,
                headers=self._headers(content is not None),
                content=content,
            )
        except httpx.RequestError as e:
            logger.warning("{} {} failed: {!r}", method, url, e)
            return Err(TransportError(str(e) or e.__class__.__name__))

        rate = Rate.from_headers(resp.headers)
        logger.debug("{} {} -> {}", method, url, resp.status_code)

        if not resp.is_success:
            return Err(error_from_response(resp.status_code, resp.text), rate)

        if allow_empty and (resp.status_code == httpx.codes.NO_CONTENT or not resp.content):
            return Ok(None, rate)

        try:
            return Ok(schema.model_validate_json(resp.content), rate)
        except ValidationError as e:
            logger.warning("{} {}: cannot decode {}: {}", method, url, schema.__name__, e)
            return Err(DecodeError(f"Cannot decode {schema.__name__}: {e.error_count()} error(s)"), rate)
