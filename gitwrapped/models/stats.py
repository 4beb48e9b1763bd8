"""Modelos Pydantic (request-scoped) para las estadísticas de Git Wrapped.

En JSON los campos salen en camelCase (avatarUrl, totalCommits, ...).
"""

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ContributionDay(CamelModel):
    date: dt.date
    contribution_count: int = Field(0, ge=0)
    weekday: int = Field(0, ge=0, le=6)  # 0=Sunday, 6=Saturday (como GitHub)

    @model_validator(mode="before")
    @classmethod
    def fill_weekday(cls, data):
        # GitHub manda weekday; si falta lo sacamos de la fecha
        if isinstance(data, dict) and data.get("weekday") is None and data.get("date"):
            day = data["date"]
            if isinstance(day, str):
                day = dt.date.fromisoformat(day[:10])
            data = {**data, "weekday": day.isoweekday() % 7}
        return data


class HeatmapDay(ContributionDay):
    level: int = Field(0, ge=0, le=4)


class UserStatsSnapshot(CamelModel):
    username: str
    avatar_url: str = ""
    total_commits: int = 0
    longest_streak: int = 0
    stars_earned: int = 0
    followers: int = 0
    following: int = 0


class LeaderboardEntry(CamelModel):
    username: str
    value: int
    rank: int
    avatar_url: str = ""
    connection_type: int = 0


class NetworkMember(UserStatsSnapshot):
    rank: int
    commit_rank: str
    connection_type: int = 0


class NetworkAggregate(CamelModel):
    total_users: int = 0
    average_commits: int = 0
    average_streak: int = 0
    average_stars: int = 0


class StreakInfo(CamelModel):
    current_streak_start: Optional[dt.date] = None
    longest_streak_start: Optional[dt.date] = None
    longest_streak_end: Optional[dt.date] = None


class MostActive(CamelModel):
    name: str
    commits: int


class RepositoryStats(CamelModel):
    total_stars: int = 0
    language_counts: Dict[str, int] = Field(default_factory=dict)
    top_languages: List[str] = Field(default_factory=list)


class RepositorySummary(CamelModel):
    name: str
    stars: int = 0
    languages: List[str] = Field(default_factory=list)
    is_private: bool = False
    description: str = ""
    url: str = ""
    updated_at: Optional[str] = None
