# psref/transport/request_executor.py

"""Rate-limited, retrying GET + JSON decode for every API call."""

import json
import logging
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar
from urllib.parse import urlencode

from psref.config.client_config import ClientConfig
from psref.config.logging_config import request_context
from psref.config.settings import Settings
from psref.errors import (
    Cancelled,
    DecodeError,
    DeadlineExceeded,
    NotFoundError,
    RequestError,
    StatusError,
    TransportError,
)
from psref.transport.cancellation import CancelToken

T = TypeVar("T")

Decoder = Callable[[Any], T]


class RequestExecutor:
    """Send GET requests with rate limiting, retries and decoding.

    An attempt waits for the rate limiter, sends the request and decodes
    a 200 response.  404 raises NotFoundError and is never retried; any
    other status, transport failure or decode failure is retried until
    ``config.retries`` attempts were made, then the last error is raised.
    Cancellation is never retried.

    When the caller passes a :class:`CancelToken` the transport call runs
    on a worker thread so the caller can give up on it the moment the
    token fires; without one it runs inline.
    """

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self.session = config.session
        self.logger = logging.getLogger("psref.executor")
        self._workers = ThreadPoolExecutor(thread_name_prefix="psref-http")

    def build_url(
        self, path: str, params: Mapping[str, str] | None = None
    ) -> str:
        """Full request URL with the API version parameter added."""
        query = dict(params or {})
        query["api_v"] = Settings.API_VERSION
        return "".join(
            [self.config.base_url, path, "?", urlencode(sorted(query.items()))]
        )

    def get(
        self,
        path: str,
        decode: Decoder[T],
        params: Mapping[str, str] | None = None,
        cancel: CancelToken | None = None,
    ) -> T:
        """GET *path* and return ``decode(json_payload)``.

        Raises:
            NotFoundError: the service answered 404.
            RequestError: every allowed attempt failed; the last failure.
            Cancelled: *cancel* fired or its deadline passed.
        """
        retries = self.config.retries
        budget = max(retries, 1) if retries >= 0 else None

        last: RequestError | None = None
        attempt = 0
        while budget is None or attempt < budget:
            attempt += 1
            context = request_context.set(f"{path} #{attempt}")
            try:
                return self._get_once(path, decode, params, cancel)
            except RequestError as exc:
                self.logger.warning(
                    "[%s] Request failed on attempt %d: %s",
                    path,
                    attempt,
                    exc,
                )
                last = exc
            finally:
                request_context.reset(context)
        if last is None:
            raise RequestError(f"{path}: no attempt made")
        raise last

    def _timeout(self, cancel: CancelToken | None) -> float:
        if cancel is None:
            return self.config.request_timeout
        remaining = cancel.remaining()
        if remaining is None:
            return self.config.request_timeout
        if remaining <= 0:
            raise DeadlineExceeded("deadline exceeded")
        return min(self.config.request_timeout, remaining)

    def _get_once(
        self,
        path: str,
        decode: Decoder[T],
        params: Mapping[str, str] | None,
        cancel: CancelToken | None,
    ) -> T:
        """Single attempt; use :meth:`get` for the retrying version."""
        if cancel is not None:
            cancel.raise_if_cancelled()
        if self.config.rate_limiter is not None:
            self.config.rate_limiter.wait(cancel)

        url = self.build_url(path, params)
        timeout = self._timeout(cancel)
        self.logger.debug("GET %s", url)
        try:
            resp = self._send(url, timeout, cancel)
        except Cancelled:
            self.logger.debug("Abandoned in-flight GET %s", url)
            raise
        except Exception as exc:
            if cancel is not None and (cancel.cancelled or cancel.expired):
                raise cancel.error() from exc
            raise TransportError(f"{path}: {exc}") from exc
        if cancel is not None:
            cancel.raise_if_cancelled()

        if resp.status_code == 404:
            raise NotFoundError(f"{path}: not found")
        if resp.status_code != 200:
            raise StatusError(path, resp.status_code, resp.reason or "")

        body: bytes = resp.content
        self._mirror(url, body)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise DecodeError(f"{path}: invalid JSON: {exc}") from exc
        return decode(payload)

    def _send(
        self, url: str, timeout: float, cancel: CancelToken | None
    ) -> Any:
        if cancel is None:
            return self.session.get(
                url, headers=Settings.DEFAULT_HEADERS, timeout=timeout
            )
        future = self._workers.submit(
            self.session.get,
            url,
            headers=Settings.DEFAULT_HEADERS,
            timeout=timeout,
        )
        return cancel.wait_for(future)

    def _mirror(self, url: str, body: bytes) -> None:
        """Copy the raw response to the debug sink, if one is set."""
        sink = self.config.debug
        if sink is None:
            return
        try:
            text = json.dumps(json.loads(body), indent="\t", ensure_ascii=False)
        except ValueError:
            text = body.decode("utf-8", errors="replace")
        try:
            sink.write(f"GET {url}\n{text}\n")
        except (OSError, ValueError) as exc:
            self.logger.warning("Debug sink write failed: %s", exc)
