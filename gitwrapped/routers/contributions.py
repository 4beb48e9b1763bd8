# gitwrapped/routers/contributions.py
"""
Contributions endpoint (heat-map + rachas)

Fuente: GraphQL contributionsCollection.contributionCalendar (último año).

Devuelve:
- calendarData: un item por día {date, contributionCount, weekday, level 0..4}
- stats:
    * totalCommits, currentStreak, longestStreak
    * streakInfo: inicio de la racha actual, inicio/fin de la más larga
    * mostActiveDay: promedio por semana del día más activo
    * mostActiveMonth: total del mes más activo
"""

from fastapi import APIRouter, Depends, Query

from gitwrapped.models.stats import HeatmapDay
from gitwrapped.services.github import GitHubClient, get_client
from gitwrapped.services.profiles import fetch_contribution_calendar
from gitwrapped.services.stats import (
    compute_current_streak,
    compute_longest_streak,
    compute_most_active,
    compute_streak_info,
    contribution_level,
)
from gitwrapped.utils.validation import clean_username

router = APIRouter()

@router.get("/api/contributions")
def user_contributions(username: str = Query(...), client: GitHubClient = Depends(get_client)):
    username = clean_username(username)
    total, days = fetch_contribution_calendar(client, username)

    most_active_day, most_active_month = compute_most_active(days)
    calendar = [
        HeatmapDay(**d.model_dump(), level=contribution_level(d.contribution_count))
        for d in days
    ]

    return {
        "username": username,
        "calendarData": calendar,
        "stats": {
            "totalCommits": total,
            "currentStreak": compute_current_streak(days),
            "longestStreak": compute_longest_streak(days),
            "streakInfo": compute_streak_info(days),
            "mostActiveDay": most_active_day,
            "mostActiveMonth": most_active_month,
        },
    }
