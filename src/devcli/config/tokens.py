"""API token lookup."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from devcli.config.store import ConfigStore
from devcli.errors import ConfigNotFound, MissingTokenError

logger = logging.getLogger(__name__)


def _token_value(data: Any) -> str:
    if isinstance(data, dict):
        data = data.get("token")
    return data.strip() if isinstance(data, str) else ""


def _read_token_file(path: Path) -> str:
    """Token stored as raw text, a JSON string or a ``{"token": ...}`` object."""
    text = path.read_text(encoding="utf-8").strip()
    try:
        data = json.loads(text)
    except ValueError:
        return text
    return _token_value(data) if isinstance(data, (str, dict)) else text


def load_token(
    store: ConfigStore,
    *,
    env_var: str,
    config_name: str,
    raw_paths: Sequence[Path] = (),
) -> str:
    """Return a token from the environment, a private config document or a token file.

    The document may hold a bare JSON string or an object with a ``token`` key.
    ``raw_paths`` are tried last, in order; missing or empty files are skipped.
    """
    token = os.getenv(env_var, "").strip()
    if token:
        return token

    document_path = store.private_dir / f"{config_name}_config.json"
    try:
        data = store.get_private_config(config_name)
    except ConfigNotFound:
        data = None
    else:
        token = _token_value(data)
        if token:
            return token

    for path in raw_paths:
        if not path.is_file():
            continue
        token = _read_token_file(path)
        if token:
            logger.debug("token read from %s", path)
            return token

    if data is not None:
        raise MissingTokenError(f"Token document {config_name} holds no token")
    locations = ", ".join(str(p) for p in (document_path, *raw_paths))
    raise MissingTokenError(f"Set {env_var} or write the token to one of: {locations}")
