# gitwrapped/services/profiles.py
"""
Frontera de datos: GitHub (REST + GraphQL) -> modelos tipados.

Los campos opcionales/nulos de la API se normalizan aquí una sola vez
(avatar_url -> "", followers -> 0, ...); la agregación ya recibe datos limpios.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Tuple

import requests
from fastapi import HTTPException

from gitwrapped.models.stats import ContributionDay, UserStatsSnapshot
from gitwrapped.services.github import GitHubClient
from gitwrapped.services.stats import aggregate_repository_stats, compute_longest_streak
from gitwrapped.utils.time import parse_date

logger = logging.getLogger(__name__)

CALENDAR_QUERY = """
query($username: String!) {
  user(login: $username) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
            weekday
          }
        }
      }
    }
  }
}
"""

# ------------------------- Calendario de contribuciones -------------------------

def parse_contribution_calendar(data: dict) -> Tuple[int, List[ContributionDay]]:
    """
    Aplana weeks[].contributionDays[] y ordena por fecha.
    `data` es el bloque `data` de la respuesta GraphQL.
    """
    user = (data or {}).get("user")
    if not user:
        raise HTTPException(404, "Not found on GitHub")
    calendar = ((user.get("contributionsCollection") or {}).get("contributionCalendar")) or {}

    days: List[ContributionDay] = []
    for week in calendar.get("weeks") or []:
        for d in week.get("contributionDays") or []:
            if not d.get("date"):
                continue
            days.append(ContributionDay(
                date=parse_date(d["date"]),
                contribution_count=max(0, int(d.get("contributionCount") or 0)),
                weekday=d.get("weekday"),
            ))
    days.sort(key=lambda day: day.date)
    return int(calendar.get("totalContributions") or 0), days

def fetch_contribution_calendar(client: GitHubClient, username: str) -> Tuple[int, List[ContributionDay]]:
    data = client.graphql(CALENDAR_QUERY, {"username": username})
    return parse_contribution_calendar(data)

# ------------------------- Repos / lenguajes -------------------------

def fetch_owned_repositories(client: GitHubClient, username: str, max_pages: int = 3) -> List[dict]:
    return client.get_paginated(
        f"/users/{username}/repos",
        {"type": "owner", "sort": "updated", "direction": "desc"},
        max_pages=max_pages,
    )

def fetch_repository_languages(client: GitHubClient, owner: str, name: str) -> List[str]:
    """Nombres de lenguajes del repo, por bytes desc (GET /repos/{owner}/{repo}/languages)."""
    langs = client.get(f"/repos/{owner}/{name}/languages") or {}
    ranked = sorted(langs.items(), key=lambda kv: int(kv[1] or 0), reverse=True)
    return [lang for lang, _ in ranked]

# ------------------------- Usuarios -------------------------

def fetch_user_stats(client: GitHubClient, username: str, repos: Optional[List[dict]] = None) -> Optional[UserStatsSnapshot]:
    """
    Perfil + calendario + repos -> UserStatsSnapshot.
    `repos` permite reusar repos ya pedidos por el caller.
    Si algo falla (HTTP, red, JSON inválido) devuelve None y se loguea,
    para no romper una página entera de la red.
    """
    try:
        user = client.get(f"/users/{username}")
        total, days = fetch_contribution_calendar(client, username)
        if repos is None:
            repos = fetch_owned_repositories(client, username, max_pages=1)
    except HTTPException as exc:
        logger.warning("Skipping %s: GitHub returned %s (%s)", username, exc.status_code, exc.detail)
        return None
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Skipping %s: %s", username, exc)
        return None

    return UserStatsSnapshot(
        username=user.get("login") or username,
        avatar_url=user.get("avatar_url") or "",
        total_commits=total,
        longest_streak=compute_longest_streak(days),
        stars_earned=aggregate_repository_stats(repos).total_stars,
        followers=int(user.get("followers") or 0),
        following=int(user.get("following") or 0),
    )

def fetch_many_user_stats(
    client: GitHubClient,
    usernames: Iterable[str],
    max_workers: int = 8,
    known_repos: Optional[Dict[str, List[dict]]] = None,
) -> List[UserStatsSnapshot]:
    """
    Lanza fetch_user_stats en paralelo; conserva el orden de entrada y descarta los None.
    `known_repos` (login -> repos) evita volver a pedir repos que el caller ya tiene.
    """
    known_repos = known_repos or {}
    names = list(usernames)
    if not names:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(names)))) as executor:
        results = list(executor.map(lambda name: fetch_user_stats(client, name, repos=known_repos.get(name)), names))
    return [r for r in results if r is not None]

def fetch_network_logins(
    client: GitHubClient,
    username: str,
    max_pages: int = 50,
) -> Tuple[List[str], List[str], List[str]]:
    """
    Devuelve (followers, following, network).
    network = [username, *followers, *following] sin duplicados, en orden de aparición.
    `max_pages` páginas de 100 por lista (NETWORK_MAX_PAGES).
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        f_followers = executor.submit(client.get_paginated, f"/users/{username}/followers", None, max_pages)
        f_following = executor.submit(client.get_paginated, f"/users/{username}/following", None, max_pages)
        followers = [u["login"] for u in f_followers.result() if u.get("login")]
        following = [u["login"] for u in f_following.result() if u.get("login")]

    network = list(dict.fromkeys([username, *followers, *following]))
    return followers, following, network
