import datetime as dt

MONTH_KEY_FORMAT = "%Y-%m"


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def current_month_key(today: dt.date | None = None) -> str:
    today = today or dt.date.today()
    return month_key(today.year, today.month)


def parse_month_key(key: str) -> tuple[int, int]:
    try:
        parsed = dt.datetime.strptime(key, MONTH_KEY_FORMAT)
    except (TypeError, ValueError) as exc:
        raise ValueError("Month must be in YYYY-MM format") from exc
    # strptime accepts "2024-6"; keys must stay zero-padded to sort chronologically
    if month_key(parsed.year, parsed.month) != key:
        raise ValueError("Month must be in YYYY-MM format")
    return parsed.year, parsed.month


def next_month_key(key: str) -> str:
    year, month = parse_month_key(key)
    if month == 12:
        return month_key(year + 1, 1)
    return month_key(year, month + 1)


def previous_month_key(key: str) -> str:
    year, month = parse_month_key(key)
    if month == 1:
        return month_key(year - 1, 12)
    return month_key(year, month - 1)


def month_keys_from(start: str, count: int) -> list[str]:
    keys: list[str] = []
    key = start
    for _ in range(count):
        keys.append(key)
        key = next_month_key(key)
    return keys


def is_future_month(key: str, today: dt.date | None = None) -> bool:
    return key > current_month_key(today)


def is_past_month(key: str, today: dt.date | None = None) -> bool:
    return key < current_month_key(today)


def is_current_month(key: str, today: dt.date | None = None) -> bool:
    return key == current_month_key(today)


def resolve_month_window(month: str | None) -> tuple[dt.date, dt.date, str]:
    if month:
        year, month_value = parse_month_key(month)
    else:
        now = dt.date.today()
        year = now.year
        month_value = now.month

    start = dt.date(year, month_value, 1)
    if month_value == 12:
        end = dt.date(year + 1, 1, 1)
    else:
        end = dt.date(year, month_value + 1, 1)

    return start, end, month_key(year, month_value)
