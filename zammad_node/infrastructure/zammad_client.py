from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple
import requests
from requests import HTTPError, RequestException
from zammad_node.application.ports.node_context_port import NodeContext
from zammad_node.config import (
    BasicAuthCredentials,
    TokenAuthCredentials,
    ZammadClientConfig,
    ZammadCredentials,
)
from zammad_node.domain.models import Node
from zammad_node.infrastructure.config_loader import credentials_from_mapping
from zammad_node.shared.errors import NodeApiError


logger = logging.getLogger(__name__)

CREDENTIALS_NAME = "zammadApi"
PAGE_SIZE = 20

# Zammad error messages that are shown to the user in a friendlier form
_ERROR_REWRITES = {
    "Object already exists!": "An entity with this name already exists.",
}


@dataclass(frozen=True)
class RequestOptions:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    auth: Optional[Tuple[str, str]] = None
    body: Optional[Dict[str, Any]] = None
    qs: Optional[Dict[str, Any]] = None
    verify: bool = True


def tolerate_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url

def build_request_options(
    method: str,
    endpoint: str,
    credentials: ZammadCredentials,
    body: Mapping[str, Any] | None = None,
    qs: Mapping[str, Any] | None = None,
) -> RequestOptions:
    """Turn credentials and call arguments into a request descriptor.

        Basic credentials become transport-level basic auth, token credentials
        become an ``Authorization: Token token=...`` header. Empty body and
        query mappings are left out of the request entirely.
        """

    base_url = tolerate_trailing_slash(credentials.base_url)
    headers: Dict[str, str] = {}
    auth: Optional[Tuple[str, str]] = None

    if isinstance(credentials, BasicAuthCredentials):
        auth = (credentials.username, credentials.password)
    elif isinstance(credentials, TokenAuthCredentials):
        headers["Authorization"] = f"Token token={credentials.access_token}"
    else:
        raise TypeError(f"Unsupported credentials type: {type(credentials).__name__}")

    return RequestOptions(
        method=method.upper(),
        url=f"{base_url}/api/v1{endpoint}",
        headers=headers,
        auth=auth,
        body=dict(body) if body else None,
        qs=dict(qs) if qs else None,
        verify=not credentials.allow_unauthorized_certs,
    )

def rewrite_error_message(message: str) -> str:
    return _ERROR_REWRITES.get(message, message)


class ZammadClient:
    """HTTP client for the Zammad REST API on behalf of a workflow node.
        Builds each request from the configured credentials, executes it on a
        requests session and wraps every failure into NodeApiError carrying
        the node identity.
        """

    def __init__(
        self,
        credentials: ZammadCredentials,
        node: Node,
        config: ZammadClientConfig | None = None,
    ) -> None:
        self._credentials = credentials
        self._node = node
        self._config = config or ZammadClientConfig()
        self._session = requests.Session()

    @classmethod
    def from_context(
        cls,
        context: NodeContext,
        config: ZammadClientConfig | None = None,
    ) -> "ZammadClient":
        credentials = credentials_from_mapping(context.get_credentials(CREDENTIALS_NAME))
        return cls(credentials, context.get_node(), config)

    @property
    def node(self) -> Node:
        return self._node

    def request(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
        qs: Mapping[str, Any] | None = None,
    ) -> Any:
        """Call the Zammad API and return the parsed JSON body.
            Raises NodeApiError if the HTTP request fails or if the response
            body is not valid JSON.
            """

        options = build_request_options(method, endpoint, self._credentials, body, qs)
        logger.debug("Zammad API %s %s qs=%s", options.method, options.url, options.qs)

        try:
            response = self._session.request(
                options.method,
                options.url,
                headers=options.headers or None,
                auth=options.auth,
                json=options.body,
                params=options.qs,
                verify=options.verify,
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
        except (HTTPError, RequestException) as exc:
            raise self._api_error(exc) from exc

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            msg = "Failed to parse Zammad API response as JSON"
            logger.error("%s: %s %s", msg, options.method, options.url)
            raise NodeApiError(self._node, msg, http_code=response.status_code) from exc

    def iter_pages(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
        qs: Mapping[str, Any] | None = None,
    ) -> Iterator[List[Any]]:
        """Yield pages of a list endpoint until Zammad runs out of data.
            An empty page ends the iteration, and so does a page shorter than
            PAGE_SIZE since nothing can follow it.
            """

        # https://docs.zammad.org/en/latest/api/intro.html#pagination
        page = 1
        while True:
            page_qs = {**(qs or {}), "per_page": PAGE_SIZE, "page": page}
            data = self.request(method, endpoint, body, page_qs)

            if not isinstance(data, list):
                msg = (
                    f"Unexpected response shape from Zammad API for {endpoint}: "
                    f"expected a list, got {type(data).__name__}"
                )
                logger.error(msg)
                raise NodeApiError(self._node, msg)

            logger.debug("Fetched page %d of %s with %d items", page, endpoint, len(data))
            if not data:
                return
            yield data

            if len(data) < PAGE_SIZE:
                return
            page += 1

    def request_all_items(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
        qs: Mapping[str, Any] | None = None,
        limit: int = 0,
    ) -> List[Any]:
        """Fetch every page of a list endpoint and concatenate the items.
            With a positive limit, stops as soon as more than `limit` items
            were collected and returns exactly `limit` of them.
            """

        items: List[Any] = []
        for page in self.iter_pages(method, endpoint, body, qs):
            items.extend(page)

            if limit and len(items) > limit:
                logger.info("Fetched %d items from %s (limit reached)", limit, endpoint)
                return items[:limit]

        logger.info("Fetched %d items from %s", len(items), endpoint)
        return items

    def _api_error(self, exc: RequestException) -> NodeApiError:
        response = exc.response
        http_code: int | None = None
        description: Any = None
        message = str(exc)

        if response is not None:
            http_code = response.status_code
            try:
                description = response.json()
            except ValueError:
                description = response.text

            if isinstance(description, dict) and isinstance(description.get("error"), str):
                message = description["error"]

        rewritten = rewrite_error_message(message)
        if rewritten != message:
            message = rewritten
            if isinstance(description, dict):
                description = {**description, "error": message}

        logger.error(
            "Zammad API call failed for %s node %r (status=%s): %s",
            self._node.type,
            self._node.name,
            http_code,
            message,
        )
        return NodeApiError(self._node, message, http_code=http_code, description=description)
