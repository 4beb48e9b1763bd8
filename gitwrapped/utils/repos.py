# gitwrapped/utils/repos.py
from typing import List, Optional, Tuple

from gitwrapped.services.github import GitHubClient
from gitwrapped.services.profiles import fetch_owned_repositories


def select_repos_for(
    client: GitHubClient,
    username: str,
    include_forks: bool = True,
    include_archived: bool = True,
    max_pages: int = 3,
) -> List[dict]:
    """Repos propios del usuario, más recientes primero (sort=updated)."""
    repos = fetch_owned_repositories(client, username, max_pages=max_pages)
    selected: List[dict] = []
    for r in repos:
        if not include_forks and r.get("fork"):
            continue
        if not include_archived and r.get("archived"):
            continue
        selected.append(r)
    return selected

def page_slice(items: list, page: int, per_page: int) -> Tuple[list, bool, Optional[int]]:
    """Devuelve (items de la página, has_more, next_page). `page` es 1-based."""
    page = max(1, page)
    start = (page - 1) * per_page
    end = start + per_page
    has_more = end < len(items)
    return items[start:end], has_more, (page + 1 if has_more else None)
