"""Outbound push transport.

Sends the tip commit to ``<remote>/push`` as a single JSON POST. No retries
happen here; callers decide whether to try again.
"""

from typing import Any, Dict

import requests

from rootvcs.constants import DEFAULT_PUSH_TIMEOUT, PUSH_ENDPOINT
from rootvcs.errors import TransportError
from rootvcs.models import Commit


def build_push_payload(commit_hash: str, commit: Commit) -> Dict[str, Any]:
    return {"commitHash": commit_hash, "commitData": commit.to_record()}


def push_url(remote: str) -> str:
    return f"{remote.rstrip('/')}/{PUSH_ENDPOINT}"


def send_push(
    remote: str,
    payload: Dict[str, Any],
    timeout: float = DEFAULT_PUSH_TIMEOUT,
) -> int:
    """POST ``payload`` to the remote and return the HTTP status code.

    Raises:
        TransportError: On connection errors, timeouts or non-2xx responses
    """
    url = push_url(remote)
    try:
        resp = requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"Push to {url} failed: {e}", url=url) from e

    if not 200 <= resp.status_code < 300:
        raise TransportError(
            f"Push to {url} rejected with HTTP {resp.status_code}",
            status_code=resp.status_code,
            url=url,
        )

    return resp.status_code
