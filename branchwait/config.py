from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict

from .errors import ConfigError

DEFAULT_API_URL = "https://api.supabase.com"
DEFAULT_TIMEOUT = 300.0
DEFAULT_POLL_INTERVAL = 2.9


class BranchStatus(str, Enum):
    CREATING_PROJECT = "CREATING_PROJECT"
    RUNNING_MIGRATIONS = "RUNNING_MIGRATIONS"
    MIGRATIONS_PASSED = "MIGRATIONS_PASSED"
    MIGRATIONS_FAILED = "MIGRATIONS_FAILED"
    FUNCTIONS_DEPLOYED = "FUNCTIONS_DEPLOYED"
    FUNCTIONS_FAILED = "FUNCTIONS_FAILED"


READY_STATUSES = frozenset({BranchStatus.MIGRATIONS_PASSED.value, BranchStatus.FUNCTIONS_DEPLOYED.value})


@dataclass
class ApiConfig:
    base_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout: float = 30.0  # per request, seconds
    default_headers: Optional[Dict[str, str]] = None


@dataclass
class WaitConfig:
    project_ref: str
    wait_for_migrations: bool = False
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL


def parse_timeout(raw: Optional[str], default: float = DEFAULT_TIMEOUT) -> float:
    """Parse a timeout input (seconds) into a non-negative float.

    An empty value falls back to ``default``.
    """
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError("Timeout is not a valid number") from exc
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise ConfigError("Timeout is not a valid number")
    return value
