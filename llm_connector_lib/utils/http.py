"""
Thin wrapper around ``requests`` that adds logging,
retries and unified error handling.

The :class:`HttpRequester` class is used to talk to the OpenAI compatible
gateway outside the chat model client itself (e.g. the models listing).  It
centralises:

* construction of absolute URLs from a base URL,
* automatic inclusion of a bearer token and extra headers,
* a configurable retry policy via ``urllib3.Retry``,
* conversion of HTTP error codes into the library‑specific exception hierarchy
  (:class:`AuthenticationError`, :class:`RateLimitError`, :class:`GatewayError`).
"""

import logging
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from llm_connector_lib.exceptions import (
    AuthenticationError,
    GatewayError,
    RateLimitError,
)


class HttpRequester:
    """
    Helper for making HTTP calls with built‑in retries and error translation.

    Parameters
    ----------
    base_url : str
        Base URL of the remote service (e.g. ``"http://litellm:4000/v1"``).
        A trailing slash is stripped automatically.
    token : str
        Bearer token used for ``Authorization`` header; if empty, no header is added.
    timeout : int, default ``10``
        Per‑request timeout in seconds.
    retries : int, default ``2``
        Number of retry attempts for transient failures (status codes in
        ``status_forcelist``).  The back‑off factor is ``0.5`` seconds.
    headers : Optional[Dict[str, str]]
        Additional headers sent with every request.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: int = 10,
        retries: int = 2,
        headers: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})
        if headers:
            self.session.headers.update(headers)

        self.logger = logger or logging.getLogger(__name__)

        # retry‑policy
        retry_strategy = Retry(
            total=retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def _full_url(self, path: str) -> str:
        """
        Build the absolute URL for a request, exactly one ``/`` separates the
        base and the path.
        """
        return f"{self.base_url}{path if path.startswith('/') else '/' + path}"

    @staticmethod
    def _handle_response(resp: requests.Response) -> requests.Response:
        """
        Translate HTTP error codes into library‑specific exceptions.

        Raises
        ------
        AuthenticationError
            When the server returns ``401`` or ``403``.
        RateLimitError
            When the server returns ``429``.
        GatewayError
            For any other client or server error (status code 4xx/5xx).
        """
        if resp.status_code in (401, 403):
            raise AuthenticationError("Invalid or missing API key")
        if resp.status_code == 429:
            raise RateLimitError("Rate limit exceeded")
        if 400 <= resp.status_code < 600:
            raise GatewayError(f"HTTP {resp.status_code}: {resp.text}")
        return resp

    def get(self, path: str, **kwargs) -> requests.Response:
        """
        Perform a ``GET`` request.

        Parameters
        ----------
        path : str
            Relative URL path (e.g. ``"/models"``).
        **kwargs
            Additional arguments forwarded to ``requests.Session.get``.

        Returns
        -------
        requests.Response
            The validated response object.
        """
        url = self._full_url(path)
        self.logger.debug("GET %s", url)
        resp = self.session.get(url, timeout=self.timeout, **kwargs)
        return self._handle_response(resp)

    def close(self) -> None:
        self.session.close()
