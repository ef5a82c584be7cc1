"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` used by every datasource.
The dataset is fetched exactly once per build, so the mounted retry
strategy makes a single attempt: a failed request surfaces immediately
instead of being retried.

Usage::

    from temperature_heatmap.services.http import session

    resp = session.get("https://example.com/data.json")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from temperature_heatmap import __version__
from temperature_heatmap.config import get_settings

#: Single attempt, no retries on connection errors or status codes.
DEFAULT_RETRY = Retry(
    total=0,
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

USER_AGENT = f"temperature-heatmap/{__version__}"


def create_session(
    retry: Retry | None = None,
    timeout: float | None = None,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request. When None the
            ``http_timeout`` setting is read at send time.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = get_settings().http_timeout if timeout is None else timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
