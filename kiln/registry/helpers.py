"""Built-in helper functions exposed to name and content templates."""

from __future__ import annotations

import base64
import calendar
import getpass
import os
import secrets
import string
from datetime import datetime, timedelta
from typing import Any, Callable

# Backslash and double quote are left out so generated values can be embedded
# in quoted strings.
CUSTOM_SYMBOLS = "~!@#$%^&*()_+`-={}|[]:<>?,./"

_SIZE_UNITS = ["bytes", "KB", "MB", "GB", "TB", "PB"]


def _add_months(moment: datetime, count: int) -> datetime:
    month_index = moment.month - 1 + count
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _add_years(moment: datetime, count: int) -> datetime:
    return _add_months(moment, 12 * count)


def _add_days(moment: datetime, count: int) -> datetime:
    return moment + timedelta(days=count)


def current_time(fmt: str) -> str:
    """Return the current local time formatted with ``strftime``."""
    return datetime.now().strftime(fmt)


def username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "Unknown"


def to_binary(value: str) -> str:
    try:
        return format(int(value), "b")
    except (TypeError, ValueError):
        return value


def format_filesize(value: Any) -> str:
    """Format a byte count for humans, e.g. ``1536`` -> ``1.5 KB``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""

    size = float(value)
    index = 0
    while size >= 1024 and index < len(_SIZE_UNITS) - 1:
        size /= 1024
        index += 1
    return f"{size:.1f} {_SIZE_UNITS[index]}".replace(".0", "")


def password(
    length: int,
    num_digits: int,
    num_symbols: int,
    no_upper: bool = False,
    allow_repeat: bool = False,
) -> str:
    """Generate a random password with an exact digit and symbol count."""
    letters = string.ascii_lowercase if no_upper else string.ascii_letters
    num_letters = length - num_digits - num_symbols
    if num_letters < 0:
        return "failed to generate password: digits and symbols exceed length"

    chosen: list[str] = []

    def _draw(pool: str, count: int) -> None:
        for _ in range(count):
            candidates = pool if allow_repeat else [c for c in pool if c not in chosen]
            if not candidates:
                raise ValueError("not enough unique characters")
            chosen.append(secrets.choice(candidates))

    try:
        _draw(letters, num_letters)
        _draw(string.digits, num_digits)
        _draw(CUSTOM_SYMBOLS, num_symbols)
    except ValueError as exc:
        return f"failed to generate password: {exc}"

    secrets.SystemRandom().shuffle(chosen)
    return "".join(chosen)


def random_base64(length: int) -> str:
    """Base64 encoding of ``length`` random bytes."""
    return base64.b64encode(secrets.token_bytes(length)).decode("ascii")


def _replace(value: str, old: str, new: str, count: int) -> str:
    # A negative count replaces every occurrence.
    return value.replace(old, new, count if count >= 0 else -1)


def _trim_prefix(value: str, prefix: str) -> str:
    return value[len(prefix):] if prefix and value.startswith(prefix) else value


def _trim_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if suffix and value.endswith(suffix) else value


HELPERS: dict[str, Callable[..., Any]] = {
    "env": lambda name: os.environ.get(name, ""),
    "time": current_time,
    "now": datetime.now,
    "addYear": lambda t: _add_years(t, 1),
    "addMonth": lambda t: _add_months(t, 1),
    "addDay": lambda t: _add_days(t, 1),
    "modifyYear": lambda count, t: _add_years(t, count),
    "modifyMonth": lambda count, t: _add_months(t, count),
    "modifyDay": lambda count, t: _add_days(t, count),
    "timeToRfc3339": lambda t: t.astimezone().isoformat(timespec="seconds"),
    "timeToDay": lambda t: str(t.day),
    "timeToHour": lambda t: str(t.hour),
    "timeToMinute": lambda t: str(t.minute),
    "timeToMonth": lambda t: str(t.month),
    "timeToSecond": lambda t: str(t.second),
    "timeToYear": lambda t: str(t.year),
    "hostname": lambda: os.environ.get("HOSTNAME", ""),
    "username": username,
    "toBinary": to_binary,
    "formatFilesize": format_filesize,
    "password": password,
    "randomBase64": random_base64,
    # String utilities
    "toLower": str.lower,
    "toUpper": str.upper,
    "toTitle": str.upper,
    "title": str.title,
    "trimSpace": str.strip,
    "trimPrefix": _trim_prefix,
    "trimSuffix": _trim_suffix,
    "repeat": lambda value, count: value * count,
    "replace": _replace,
    "replaceAll": lambda value, old, new: value.replace(old, new),
    "kebabCase": lambda value: value.replace("_", "-"),
    "snakeCase": lambda value: value.replace("-", "_"),
}
