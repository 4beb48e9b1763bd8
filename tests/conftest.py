"""Test fixtures: a fake GitHub client with deterministic users, calendars and repos.

Network used by most endpoint tests (queried user: alice):
- followers: bob, carol
- following: bob, dave, eve
- bob is mutual (3), carol follower (2), dave following (1), alice none (0)
- eve has no contribution calendar, so her stats lookup fails
"""

import datetime as dt

import pytest
import requests
from fastapi import HTTPException
from fastapi.testclient import TestClient

from gitwrapped.core.config import Settings, get_settings
from gitwrapped.services.github import get_client
from main import app

# 2024-01-07 is a Sunday
CALENDAR_START = dt.date(2024, 1, 7)


def make_calendar(counts, start=CALENDAR_START):
    """GraphQL `data` payload for a contribution calendar with one day per count."""
    days = []
    for i, count in enumerate(counts):
        day = start + dt.timedelta(days=i)
        days.append({"contributionCount": count, "date": day.isoformat(), "weekday": day.isoweekday() % 7})
    weeks = [{"contributionDays": days[i:i + 7]} for i in range(0, len(days), 7)]
    return {
        "user": {
            "contributionsCollection": {
                "contributionCalendar": {"totalContributions": sum(counts), "weeks": weeks}
            }
        }
    }


def make_repo(owner, name, stars, language, updated_at="2024-06-01T00:00:00Z", **extra):
    repo = {
        "name": name,
        "owner": {"login": owner},
        "stargazers_count": stars,
        "language": language,
        "private": False,
        "description": f"{name} description",
        "html_url": f"https://github.com/{owner}/{name}",
        "updated_at": updated_at,
        "fork": False,
        "archived": False,
    }
    repo.update(extra)
    return repo


class FakeGitHubClient:
    """Serves canned REST/GraphQL payloads through the GitHubClient interface."""

    def __init__(self, users, calendars, repos=None, followers=None, following=None, languages=None, broken=(),
                 timeouts=()):
        self.users = users
        self.calendars = calendars
        self.repos = repos or {}
        self.followers = followers or {}
        self.following = following or {}
        self.languages = languages or {}
        self.broken = set(broken)
        self.timeouts = set(timeouts)
        self.paths = []
        self.graphql_logins = []
        self.page_caps = {}

    def _not_found(self):
        raise HTTPException(404, "Not found on GitHub")

    def get(self, path, params=None):
        self.paths.append(path)
        parts = path.strip("/").split("/")
        if parts[0] == "users":
            login = parts[1]
            if login in self.timeouts:
                raise requests.exceptions.ReadTimeout(f"read timed out: {path}")
            if login in self.broken or login not in self.users:
                self._not_found()
            if len(parts) == 2:
                return self.users[login]
            if parts[2] == "repos":
                return list(self.repos.get(login, []))
            if parts[2] == "followers":
                return [{"login": name} for name in self.followers.get(login, [])]
            if parts[2] == "following":
                return [{"login": name} for name in self.following.get(login, [])]
        if parts[0] == "repos" and len(parts) == 4 and parts[3] == "languages":
            return dict(self.languages.get(f"{parts[1]}/{parts[2]}", {}))
        self._not_found()

    def get_paginated(self, path, base_params=None, max_pages=10):
        self.page_caps[path] = max_pages
        data = self.get(path, base_params)
        return data if isinstance(data, list) else []

    def graphql(self, query, variables):
        login = variables["username"]
        self.graphql_logins.append(login)
        if login in self.timeouts:
            raise requests.exceptions.ReadTimeout("read timed out: graphql")
        if login in self.broken or login not in self.calendars:
            self._not_found()
        return make_calendar(self.calendars[login])


def _user(login, followers=0, following=0):
    return {
        "login": login,
        "name": login.title(),
        "avatar_url": f"https://avatars.example/{login}",
        "followers": followers,
        "following": following,
    }


@pytest.fixture
def fake_github():
    return FakeGitHubClient(
        users={
            "alice": _user("alice", followers=2, following=3),
            "bob": _user("bob", followers=1, following=1),
            "carol": {"login": "carol", "avatar_url": None, "followers": None, "following": None},
            "dave": _user("dave"),
            "eve": _user("eve"),
        },
        calendars={
            "alice": [300, 300, 0, 5],
            "bob": [10, 0, 10],
            "carol": [1, 1, 1, 1],
            "dave": [1000, 0],
        },
        repos={
            "alice": [
                make_repo("alice", "a1", 5, "Python", updated_at="2024-06-04T00:00:00Z"),
                make_repo("alice", "a2", 3, "Go", updated_at="2024-06-03T00:00:00Z"),
                make_repo("alice", "a3", 0, "Python", updated_at="2024-06-02T00:00:00Z"),
                make_repo("alice", "a4", None, None, updated_at="2024-06-01T00:00:00Z"),
            ],
            "bob": [make_repo("bob", "b1", 1, "C")],
            "dave": [make_repo("dave", "d1", 10, "Rust")],
        },
        followers={"alice": ["bob", "carol"]},
        following={"alice": ["bob", "dave", "eve"]},
        languages={
            "alice/a1": {"Python": 900, "Shell": 100},
            "alice/a2": {"Go": 500},
            "alice/a3": {"Jupyter Notebook": 10, "Python": 2000},
        },
    )


@pytest.fixture
def test_settings():
    s = Settings()
    s.GITHUB_TOKEN = "test-token"
    s.USERS_PER_PAGE = 10
    s.REPOS_PER_PAGE = 12
    s.TOP_LANGUAGES = 5
    s.MAX_WORKERS = 4
    return s


@pytest.fixture
def client(fake_github, test_settings):
    app.dependency_overrides[get_client] = lambda: fake_github
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
