# gitwrapped/services/stats.py
"""
Contribution stats (agregación pura, sin I/O)

Entrada: días de contribución (ContributionDay) y repos crudos de la API REST.
Salida:
  - streaks (más larga, actual, fechas de inicio/fin)
  - día de la semana y mes más activos
  - tier de commits (Diamond .. Bronze)
  - stars totales + top lenguajes
  - leaderboards por métrica y ranking de la red (followers/following)
  - promedios de la red

Ninguna función lanza errores de dominio: con entrada vacía devuelven 0, [] o None.
"""

import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from gitwrapped.models.stats import (
    ContributionDay,
    LeaderboardEntry,
    MostActive,
    NetworkAggregate,
    NetworkMember,
    RepositoryStats,
    StreakInfo,
    UserStatsSnapshot,
)

# ---------------------- Constantes ----------------------

# Tiers de commits, de mayor a menor umbral
COMMIT_TIERS: Tuple[Tuple[int, str], ...] = (
    (10000, "Diamond"),
    (5000, "Platinum"),
    (1000, "Gold"),
    (500, "Silver"),
)
BOTTOM_TIER = "Bronze"
UNKNOWN_TIER = "N/A"

CONNECTION_NONE = 0
CONNECTION_FOLLOWING = 1
CONNECTION_FOLLOWER = 2
CONNECTION_MUTUAL = 3

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Cortes del heat-map: 0 | 1-3 | 4-6 | 7-9 | 10+
HEATMAP_THRESHOLDS = (3, 6, 9)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _chronological(days: Iterable[ContributionDay]) -> List[ContributionDay]:
    return sorted(days, key=lambda d: d.date)

# ------------------------------ Streaks ------------------------------

def compute_longest_streak(days: Iterable[ContributionDay]) -> int:
    current = longest = 0
    for day in _chronological(days):
        if day.contribution_count > 0:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest

def compute_current_streak(days: Iterable[ContributionDay]) -> int:
    """Racha que termina en el último día del calendario (0 si ese día no tiene contribuciones)."""
    streak = 0
    for day in reversed(_chronological(days)):
        if day.contribution_count <= 0:
            break
        streak += 1
    return streak

def compute_streak_info(days: Iterable[ContributionDay]) -> StreakInfo:
    """
    Fechas de la racha actual y de la más larga.
    Con empate en la más larga gana la primera.
    """
    ordered = _chronological(days)

    current_start = None
    for day in reversed(ordered):
        if day.contribution_count <= 0:
            break
        current_start = day.date

    best_len, best_start, best_end = 0, None, None
    run_len, run_start = 0, None
    for day in ordered:
        if day.contribution_count > 0:
            if run_len == 0:
                run_start = day.date
            run_len += 1
            if run_len > best_len:
                best_len, best_start, best_end = run_len, run_start, day.date
        else:
            run_len = 0

    return StreakInfo(
        current_streak_start=current_start,
        longest_streak_start=best_start,
        longest_streak_end=best_end,
    )

# ------------------------------ Más activo ------------------------------

def _top_bucket(totals: Dict[int, int]) -> Optional[Tuple[int, int]]:
    # empate -> índice de bucket más bajo
    if not totals:
        return None
    return min(totals.items(), key=lambda kv: (-kv[1], kv[0]))

def compute_most_active(days: Sequence[ContributionDay]) -> Tuple[Optional[MostActive], Optional[MostActive]]:
    """
    Devuelve (día de la semana, mes) con más contribuciones sumadas.
    El día se reporta como promedio: total del bucket / (nº de días / 7).
    """
    if not days:
        return None, None

    by_weekday: Dict[int, int] = {}
    by_month: Dict[int, int] = {}
    for day in days:
        by_weekday[day.weekday] = by_weekday.get(day.weekday, 0) + day.contribution_count
        by_month[day.date.month] = by_month.get(day.date.month, 0) + day.contribution_count

    wd_index, wd_total = _top_bucket(by_weekday)
    month_index, month_total = _top_bucket(by_month)

    weeks = len(days) / 7
    most_active_day = MostActive(name=WEEKDAY_NAMES[wd_index], commits=_round_half_up(wd_total / weeks))
    most_active_month = MostActive(name=MONTH_NAMES[month_index - 1], commits=month_total)
    return most_active_day, most_active_month

# ------------------------------ Tiers / heat-map ------------------------------

def compute_commit_rank(total_commits: Optional[int]) -> str:
    if total_commits is None:
        return UNKNOWN_TIER
    for threshold, label in COMMIT_TIERS:
        if total_commits >= threshold:
            return label
    return BOTTOM_TIER

def contribution_level(count: int) -> int:
    if count <= 0:
        return 0
    for level, upper in enumerate(HEATMAP_THRESHOLDS, start=1):
        if count <= upper:
            return level
    return len(HEATMAP_THRESHOLDS) + 1

# ------------------------------ Repos ------------------------------

def aggregate_repository_stats(repos: Iterable[dict], top_n: int = 5) -> RepositoryStats:
    """
    Suma stargazers_count y cuenta el lenguaje principal de cada repo.
    Top lenguajes por frecuencia desc; a igualdad, orden de aparición.
    """
    total_stars = 0
    counts: Dict[str, int] = {}
    for r in repos:
        total_stars += int(r.get("stargazers_count") or 0)
        lang = r.get("language")
        if lang:
            counts[lang] = counts.get(lang, 0) + 1

    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return RepositoryStats(
        total_stars=total_stars,
        language_counts=counts,
        top_languages=[name for name, _ in ranked[:max(0, top_n)]],
    )

# ------------------------------ Leaderboards / red ------------------------------

def build_leaderboard(
    users: Iterable[UserStatsSnapshot],
    metric_selector: Callable[[UserStatsSnapshot], int],
    rank_offset: int = 0,
) -> List[LeaderboardEntry]:
    # sorted es estable también con reverse=True: empates mantienen el orden de entrada
    rows = [(u, metric_selector(u)) for u in users]
    rows.sort(key=lambda row: row[1], reverse=True)
    return [
        LeaderboardEntry(
            username=u.username,
            value=value,
            rank=rank_offset + i + 1,
            avatar_url=u.avatar_url,
            connection_type=getattr(u, "connection_type", CONNECTION_NONE),
        )
        for i, (u, value) in enumerate(rows)
    ]

def classify_connection(username: str, followers: Set[str], following: Set[str]) -> int:
    in_followers = username in followers
    in_following = username in following
    if in_followers and in_following:
        return CONNECTION_MUTUAL
    if in_followers:
        return CONNECTION_FOLLOWER
    if in_following:
        return CONNECTION_FOLLOWING
    return CONNECTION_NONE

def rank_network_members(
    users: Iterable[UserStatsSnapshot],
    followers: Set[str],
    following: Set[str],
    rank_offset: int = 0,
) -> List[NetworkMember]:
    """Ordena por (tipo de conexión desc, commits desc) y asigna rank + tier."""
    rows = [(u, classify_connection(u.username, followers, following)) for u in users]
    rows.sort(key=lambda row: (row[1], row[0].total_commits), reverse=True)
    return [
        NetworkMember(
            **u.model_dump(include=set(UserStatsSnapshot.model_fields)),
            rank=rank_offset + i + 1,
            commit_rank=compute_commit_rank(u.total_commits),
            connection_type=conn,
        )
        for i, (u, conn) in enumerate(rows)
    ]

def compute_user_rank(total_commits: int, ranked: Sequence[UserStatsSnapshot]) -> int:
    """Posición (1-based) del primer miembro con commits <= total_commits; si no hay, va al final."""
    for i, member in enumerate(ranked):
        if member.total_commits <= total_commits:
            return i + 1
    return len(ranked) + 1

def compute_network_averages(users: Sequence[UserStatsSnapshot], total_users: Optional[int] = None) -> NetworkAggregate:
    n = len(users)
    total = n if total_users is None else total_users
    if n == 0:
        return NetworkAggregate(total_users=total)
    return NetworkAggregate(
        total_users=total,
        average_commits=_round_half_up(sum(u.total_commits for u in users) / n),
        average_streak=_round_half_up(sum(u.longest_streak for u in users) / n),
        average_stars=_round_half_up(sum(u.stars_earned for u in users) / n),
    )
