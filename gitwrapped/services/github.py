import logging
from typing import Any, Dict, Optional

import requests
from fastapi import Depends, HTTPException

from gitwrapped.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    Cliente REST + GraphQL de GitHub.
    Se construye por request (ver `get_client`), el token viaja en el objeto y no en un global.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        h = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "git-wrapped",
        }
        if self.settings.GITHUB_TOKEN:
            h["Authorization"] = f"token {self.settings.GITHUB_TOKEN}"
        return h

    def _require_token(self):
        if not self.settings.GITHUB_TOKEN:
            raise HTTPException(500, "Missing GITHUB_TOKEN")

    def _raise_for_status(self, r: requests.Response, path: str):
        if r.status_code < 400:
            return
        logger.warning("GitHub error %s on %s", r.status_code, path)
        if r.status_code == 404: raise HTTPException(404, "Not found on GitHub")
        if r.status_code == 401: raise HTTPException(401, "Invalid token or missing permissions")
        if r.status_code == 403: raise HTTPException(403, "GitHub rate limit reached")
        raise HTTPException(r.status_code, r.text[:600])

    def _json(self, r: requests.Response, path: str) -> Any:
        try:
            return r.json()
        except ValueError:
            logger.warning("GitHub sent a non-JSON body on %s", path)
            raise HTTPException(502, "Invalid response from GitHub")

    def get(self, path: str, params: dict | None = None) -> Any:
        self._require_token()
        url = f"{self.settings.GITHUB_API}{path}"
        try:
            r = self.session.get(url, headers=self._headers(), params=params or {}, timeout=self.settings.REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            logger.warning("GitHub request failed on %s: %s", path, exc)
            raise HTTPException(502, "GitHub request failed")
        self._raise_for_status(r, path)
        return self._json(r, path)

    def get_paginated(self, path: str, base_params: dict | None = None, max_pages: int = 10) -> list:
        items, params = [], dict(base_params or {})
        params.setdefault("per_page", 100)
        for page in range(1, max_pages + 1):
            params["page"] = page
            chunk = self.get(path, params)
            if not isinstance(chunk, list) or not chunk: break
            items.extend(chunk)
            if len(chunk) < params["per_page"]: break
        return items

    def graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        self._require_token()
        payload = {"query": query, "variables": variables}
        try:
            r = self.session.post(
                self.settings.GITHUB_GRAPHQL,
                headers=self._headers(),
                json=payload,
                timeout=self.settings.REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            logger.warning("GitHub GraphQL request failed: %s", exc)
            raise HTTPException(502, "GitHub request failed")
        self._raise_for_status(r, "graphql")
        data = self._json(r, "graphql")
        errors = data.get("errors") or []
        if errors:
            logger.warning("GitHub GraphQL errors: %s", errors[:3])
            # user(login:) inexistente -> NOT_FOUND
            if any(e.get("type") == "NOT_FOUND" for e in errors if isinstance(e, dict)):
                raise HTTPException(404, "Not found on GitHub")
            raise HTTPException(502, f"GitHub GraphQL errors: {errors[:3]}")
        return data.get("data") or {}


def get_client(settings: Settings = Depends(get_settings)) -> GitHubClient:
    return GitHubClient(settings)
