# PURPOSE: Read API keys from AWS Secrets Manager when they are not injected
#          directly into the function environment.
# CONTEXT: Used by omnicast.config when a <NAME>_SECRET_ARN variable is set.

from __future__ import annotations
import base64
import json
import os
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

_REGION = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "eu-west-2"

_client: Any = None
_SECRET_CACHE: Dict[str, str] = {}


def _get_client() -> Any:
    global _client
    if _client is None:
        _client = boto3.client("secretsmanager", region_name=_REGION)
    return _client


def get_secret_string(secret_arn: str, field: Optional[str] = "api_key") -> str:
    """
    Fetch one secret value, caching it for the lifetime of the process.

    parameters:
    - secret_arn: str – ARN or name of the secret.
    - field: str (optional) – key to read when the secret is a JSON object.

    returns:
    - str – the secret value. Plain-text secrets are returned as-is.

    raises:
    - RuntimeError – if Secrets Manager fails or the secret is empty.
    """
    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    try:
        resp = _get_client().get_secret_value(SecretId=secret_arn)
    except ClientError as e:
        raise RuntimeError(f"Secrets Manager get_secret_value failed: {e.response['Error']['Message']}") from e

    raw = resp.get("SecretString")
    if not raw and resp.get("SecretBinary"):
        raw = base64.b64decode(resp["SecretBinary"]).decode("utf-8")
    if not raw:
        raise RuntimeError("Secret value is empty")

    value = raw
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict) and field:
        value = parsed.get(field) or ""
        if not value:
            raise RuntimeError(f"Secret has no '{field}' field")

    _SECRET_CACHE[secret_arn] = value
    return value


def clear_secret_cache() -> None:
    """Forget cached secrets and the client (used by tests)."""
    global _client
    _SECRET_CACHE.clear()
    _client = None
