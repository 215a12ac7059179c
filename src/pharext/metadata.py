from __future__ import annotations

from datetime import datetime
from datetime import timezone


def version() -> str:
    return "@dev-master"


def header() -> str:
    return f"pharext v{version()} (c) Michael Wallner <mike@php.net>"


def date() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def all() -> dict[str, str]:
    return {
        "version": version(),
        "header": header(),
        "date": date(),
    }
