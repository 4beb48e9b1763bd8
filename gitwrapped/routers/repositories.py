# gitwrapped/routers/repositories.py
"""
Repository browser

Lista los repos propios del usuario (más recientes primero) en páginas de REPOS_PER_PAGE.
Para cada repo de la página se piden sus lenguajes (/repos/{owner}/{repo}/languages) en paralelo.
`language` filtra por cualquiera de los lenguajes del repo (no solo el principal) antes de paginar;
con filtro se piden los lenguajes de todos los repos seleccionados, sin filtro solo los de la página.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from gitwrapped.core.config import Settings, get_settings
from gitwrapped.models.stats import RepositorySummary
from gitwrapped.services.github import GitHubClient, get_client
from gitwrapped.services.profiles import fetch_repository_languages
from gitwrapped.utils.repos import page_slice, select_repos_for
from gitwrapped.utils.validation import clean_username

router = APIRouter()

def _summary(r: dict, languages: List[str]) -> RepositorySummary:
    return RepositorySummary(
        name=r.get("name") or "",
        stars=int(r.get("stargazers_count") or 0),
        languages=languages,
        is_private=bool(r.get("private")),
        description=r.get("description") or "",
        url=r.get("html_url") or "",
        updated_at=r.get("updated_at"),
    )

def _languages_for(client: GitHubClient, r: dict) -> List[str]:
    langs = fetch_repository_languages(client, r["owner"]["login"], r["name"])
    # repos vacíos: /languages devuelve {}, usamos el lenguaje principal si existe
    if not langs and r.get("language"):
        return [r["language"]]
    return langs

@router.get("/api/repositories")
def list_repositories(
    username: str = Query(...),
    page: int = Query(1, ge=1),
    language: Optional[str] = Query(None),
    include_forks: bool = True,
    include_archived: bool = True,
    client: GitHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    username = clean_username(username)
    repos = select_repos_for(client, username, include_forks, include_archived)

    with ThreadPoolExecutor(max_workers=settings.MAX_WORKERS) as executor:
        if language:
            wanted = language.lower()
            all_languages = list(executor.map(lambda r: _languages_for(client, r), repos))
            matches = [
                (r, langs) for r, langs in zip(repos, all_languages)
                if wanted in (lang.lower() for lang in langs)
            ]
            page_matches, has_more, next_page = page_slice(matches, page, settings.REPOS_PER_PAGE)
            page_repos = [r for r, _ in page_matches]
            languages = [langs for _, langs in page_matches]
        else:
            page_repos, has_more, next_page = page_slice(repos, page, settings.REPOS_PER_PAGE)
            languages = list(executor.map(lambda r: _languages_for(client, r), page_repos))

    out = [_summary(r, langs) for r, langs in zip(page_repos, languages)]
    return {
        "username": username,
        "repositories": out,
        "languages": sorted({lang for langs in languages for lang in langs}),
        "hasMore": has_more,
        "nextPage": next_page,
        "params": {
            "page": page,
            "language": language,
            "include_forks": include_forks,
            "include_archived": include_archived,
        },
    }
