"""Wait for a Supabase preview branch and export its connection details.

Intended to run as a GitHub action step, but the pieces are usable on their
own, e.g.:

    from branchwait.api import SupabaseClient
    from branchwait.config import ApiConfig, WaitConfig
    from branchwait.wait import wait_for_branch

Shared config, record and error types are re-exported from the package root.
"""

__version__ = "0.1.0"

from . import api, actions, context, wait  # noqa: F401,E402
from .config import (  # noqa: E402  re-export for convenience
    ApiConfig,
    WaitConfig,
    BranchStatus,
    READY_STATUSES,
)
from .models import BranchSummary, BranchDetail, ApiKey  # noqa: E402
from .errors import (  # noqa: E402
    BranchWaitError,
    ConfigError,
    ApiError,
    FetchError,
    WaitTimeoutError,
)

__all__ = [
    # Submodules
    "api",
    "actions",
    "context",
    "wait",
    # Config / records
    "ApiConfig",
    "WaitConfig",
    "BranchStatus",
    "READY_STATUSES",
    "BranchSummary",
    "BranchDetail",
    "ApiKey",
    # Errors
    "BranchWaitError",
    "ConfigError",
    "ApiError",
    "FetchError",
    "WaitTimeoutError",
]
