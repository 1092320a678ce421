"""Local BYOK credential cache for the command-line prioritizer.

Mirrors the browser client's local storage: the API key and provider live in
a JSON file owned by the user and are never sent to an app-controlled server.
"""

import json
import os
from pathlib import Path

from app.core.logging import get_logger

logger = get_logger(__name__)

API_KEY_FIELD = "ai_app_api_key"
PROVIDER_FIELD = "ai_app_provider"
DEFAULT_PROVIDER = "google"


class CredentialStore:
    """Read and write the cached key/provider pair."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable credential file {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> tuple[str, str]:
        """Return (api_key, provider); the key is "" when nothing is stored."""
        data = self._read()
        return data.get(API_KEY_FIELD, ""), data.get(PROVIDER_FIELD) or DEFAULT_PROVIDER

    def save(self, api_key: str, provider: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = self._read()
        data[API_KEY_FIELD] = api_key
        data[PROVIDER_FIELD] = provider
        # Owner-only from creation; fchmod also tightens a pre-existing file
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2))

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
