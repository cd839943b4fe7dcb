# PURPOSE: Single outbound HTTP call used by every Omnicast function.
# CONTEXT: Keeps the requests dependency in one place so tests can replace it.

import requests
from typing import Any, Dict, Optional


def send(
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> requests.Response:
    """
    Perform one HTTP request and return the response without raising on status.

    parameters:
    - method: str – HTTP verb, passed through verbatim.
    - url: str – full URL to request.
    - headers: dict (optional) – outbound headers.
    - timeout: float (optional) – seconds to wait; None leaves requests' default (no timeout).
    - kwargs – body arguments understood by requests (data=, json=, files=).

    returns:
    - requests.Response – callers inspect status_code / text themselves.

    raises:
    - requests.exceptions.RequestException – on connection-level failures.
    """
    return requests.request(method, url, headers=headers or {}, timeout=timeout, **kwargs)
