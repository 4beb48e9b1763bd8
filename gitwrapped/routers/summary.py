# gitwrapped/routers/summary.py
from concurrent.futures import ThreadPoolExecutor

from fastapi import APIRouter, Depends, Query

from gitwrapped.core.config import Settings, get_settings
from gitwrapped.services.github import GitHubClient, get_client
from gitwrapped.services.profiles import fetch_contribution_calendar, fetch_owned_repositories
from gitwrapped.services.stats import aggregate_repository_stats, compute_commit_rank, compute_longest_streak
from gitwrapped.utils.validation import clean_username

router = APIRouter()

@router.get("/api/summary")
def user_summary(
    username: str = Query(...),
    client: GitHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    """
    Carga inicial del dashboard: perfil + totales.
    Perfil, repos y calendario se piden en paralelo.
    """
    username = clean_username(username)
    with ThreadPoolExecutor(max_workers=3) as executor:
        f_user = executor.submit(client.get, f"/users/{username}")
        f_repos = executor.submit(fetch_owned_repositories, client, username)
        f_calendar = executor.submit(fetch_contribution_calendar, client, username)
        user, repos, (total, days) = f_user.result(), f_repos.result(), f_calendar.result()

    repo_stats = aggregate_repository_stats(repos, top_n=settings.TOP_LANGUAGES)
    login = user.get("login") or username
    return {
        "username": login,
        "avatarUrl": user.get("avatar_url") or "",
        "name": user.get("name") or login,
        "followers": int(user.get("followers") or 0),
        "following": int(user.get("following") or 0),
        "totalCommits": total,
        "longestStreak": compute_longest_streak(days),
        "starsEarned": repo_stats.total_stars,
        "commitRank": compute_commit_rank(total),
        "topLanguages": repo_stats.top_languages,
    }
