from datetime import date, datetime


def parse_iso_dt(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))

def parse_date(s: str) -> date:
    # "2024-03-01" o "2024-03-01T00:00:00Z"
    if len(s) == 10:
        return date.fromisoformat(s)
    return parse_iso_dt(s).date()
