# gitwrapped/routers/network.py
"""
Network rankings (followers + following)

1) followers y following del usuario (paginado, en paralelo)
2) red = [username, *followers, *following] sin duplicados
3) página de USERS_PER_PAGE usuarios -> stats de cada uno en paralelo
4) orden: tipo de conexión (mutual > follower > following > none), luego commits
5) promedios de la página + leaderboards por commits / racha / stars

Los miembros cuyo fetch falla se omiten (ver fetch_user_stats).
"""

import logging

from fastapi import APIRouter, Depends, Query

from gitwrapped.core.config import Settings, get_settings
from gitwrapped.services.github import GitHubClient, get_client
from gitwrapped.services.profiles import fetch_many_user_stats, fetch_network_logins, fetch_user_stats
from gitwrapped.services.stats import (
    aggregate_repository_stats,
    build_leaderboard,
    compute_commit_rank,
    compute_network_averages,
    compute_user_rank,
    rank_network_members,
)
from gitwrapped.utils.repos import page_slice, select_repos_for
from gitwrapped.utils.validation import clean_username

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/api/network")
def network_rankings(
    username: str = Query(...),
    page: int = Query(1, ge=1),
    client: GitHubClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    username = clean_username(username)
    per_page = settings.USERS_PER_PAGE

    followers, following, network = fetch_network_logins(client, username, max_pages=settings.NETWORK_MAX_PAGES)
    own_repos = select_repos_for(client, username)

    page_users, has_more, _ = page_slice(network, page, per_page)
    rank_offset = (page - 1) * per_page
    logger.info("Network page %s for %s: %s of %s users", page, username, len(page_users), len(network))

    stats = fetch_many_user_stats(
        client, page_users, max_workers=settings.MAX_WORKERS, known_repos={username: own_repos},
    )
    ranked = rank_network_members(stats, set(followers), set(following), rank_offset=rank_offset)
    averages = compute_network_averages(ranked, total_users=len(network))
    repo_stats = aggregate_repository_stats(own_repos, top_n=settings.TOP_LANGUAGES)

    # el usuario consultado está en la página 1 (posición 0 de la red): se reusa su snapshot
    current_stats = next((s for s in stats if s.username.lower() == username.lower()), None)
    if current_stats is None:
        current_stats = fetch_user_stats(client, username, repos=own_repos)
    if current_stats is not None:
        current_user = {
            "login": current_stats.username,
            "avatar_url": current_stats.avatar_url,
            "followers": current_stats.followers,
            "following": current_stats.following,
        }
    else:
        current_user = client.get(f"/users/{username}")

    own_commits = current_stats.total_commits if current_stats else 0
    login = current_user.get("login") or username
    return {
        "networkUsers": ranked,
        "networkStats": {
            "username": login,
            "avatarUrl": current_user.get("avatar_url") or "",
            "totalCommits": own_commits,
            "longestStreak": current_stats.longest_streak if current_stats else 0,
            "starsEarned": current_stats.stars_earned if current_stats else 0,
            "rank": compute_user_rank(own_commits, ranked),
            "followers": int(current_user.get("followers") or 0),
            "following": int(current_user.get("following") or 0),
            "commitRank": compute_commit_rank(current_stats.total_commits if current_stats else None),
        },
        "leaderboards": {
            "commits": build_leaderboard(ranked, lambda u: u.total_commits, rank_offset=rank_offset),
            "streak": build_leaderboard(ranked, lambda u: u.longest_streak, rank_offset=rank_offset),
            "stars": build_leaderboard(ranked, lambda u: u.stars_earned, rank_offset=rank_offset),
        },
        **averages.model_dump(by_alias=True),
        "topLanguages": repo_stats.top_languages,
        "hasMore": has_more,
        "currentPage": page,
    }
