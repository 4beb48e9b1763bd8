import re

from fastapi import HTTPException

# GitHub: alfanumérico + guiones simples (no al final ni dobles), máx 39 caracteres
USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")


def clean_username(username: str | None) -> str:
    username = (username or "").strip().lstrip("@")
    if not username:
        raise HTTPException(400, "Username is required")
    if not USERNAME_RE.match(username):
        raise HTTPException(400, "Invalid GitHub username")
    return username
