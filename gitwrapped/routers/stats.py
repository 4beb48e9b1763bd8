# gitwrapped/routers/stats.py
"""
/api/stats: endpoint único con `loadType`, compatible con el frontend original.

  initial       -> /api/summary
  contributions -> /api/contributions
  network       -> /api/network       (usa `page`)
  repositories  -> /api/repositories  (usa `page` y `language`)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gitwrapped.core.config import Settings, get_settings
from gitwrapped.routers.contributions import user_contributions
from gitwrapped.routers.network import network_rankings
from gitwrapped.routers.repositories import list_repositories
from gitwrapped.routers.summary import user_summary
from gitwrapped.services.github import GitHubClient, get_client
from gitwrapped.utils.validation import clean_username

router = APIRouter()

LOAD_TYPES = ("initial", "contributions", "network", "repositories")

@router.get("/api/stats")
def stats(
    username: Optional[str] = None,
    load_type: str = Query("initial", alias="loadType"),
    page: int = Query(1, ge=1),
    language: Optional[str] = None,
    client: GitHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    username = clean_username(username)
    if load_type not in LOAD_TYPES:
        raise HTTPException(400, "Invalid load type")

    if load_type == "initial":
        return user_summary(username=username, client=client, settings=settings)
    if load_type == "contributions":
        return user_contributions(username=username, client=client)
    if load_type == "network":
        return network_rankings(username=username, page=page, client=client, settings=settings)
    return list_repositories(
        username=username,
        page=page,
        language=language,
        include_forks=True,
        include_archived=True,
        client=client,
        settings=settings,
    )
