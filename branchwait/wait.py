from __future__ import annotations

"""Poll the management API until a preview branch is ready, then publish it.

One tick lists the project's branches, picks the one named after the Git
branch and, once it counts as ready, fetches its connection details and API
keys and writes everything as step outputs. Rate limiting and server errors
only skip the current tick; any other API failure ends the wait.
"""

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from .config import READY_STATUSES, WaitConfig
from .errors import ApiError, FetchError, WaitTimeoutError
from .models import DETAIL_OUTPUT_FIELDS, SUMMARY_OUTPUT_FIELDS, ApiKey, BranchDetail, BranchSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")


def find_branch(branches: Iterable[BranchSummary], name: str) -> Optional[BranchSummary]:
    for branch in branches:
        if branch.name == name:
            return branch
    return None


def is_ready(branch: Optional[BranchSummary], wait_for_migrations: bool) -> bool:
    if branch is None:
        return False
    if not wait_for_migrations:
        return True
    return branch.status in READY_STATUSES


def call_remote(runtime, description: str, fn: Callable[..., T], *args: Any) -> Optional[T]:
    """Run one API call, returning None on a transient failure.

    Non-transient failures are raised as FetchError with the ApiError as cause.
    """
    try:
        return fn(*args)
    except ApiError as err:
        if err.is_transient:
            runtime.warning(f"{description}: {err}")
            return None
        raise FetchError(description, cause=err) from err


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def publish_branch(runtime, branch: BranchSummary, detail: BranchDetail, api_keys: List[ApiKey]) -> None:
    for key in api_keys:
        runtime.set_secret(key.api_key)
        runtime.set_output(f"{key.name}_key", key.api_key)

    for field in SUMMARY_OUTPUT_FIELDS:
        value = getattr(branch, field)
        if not value:
            continue
        output_name = field
        # NOTE: compares the value rather than the field name, so status is
        # never actually renamed. Downstream workflows rely on `status`.
        if value == "status":
            output_name += "branch_status"
        text = _stringify(value)
        runtime.set_secret(text)
        runtime.set_output(output_name, text)

    for field in DETAIL_OUTPUT_FIELDS:
        value = getattr(detail, field)
        if not value:
            continue
        text = _stringify(value)
        runtime.set_secret(text)
        runtime.set_output(field, text)

    runtime.set_output("api_url", detail.api_url)
    runtime.set_output("graphql_url", detail.graphql_url)


def _fetch_and_publish(client, runtime, branch: BranchSummary) -> bool:
    detail = call_remote(runtime, "Error fetching branch details", client.get_branch_details, branch.id)
    if not detail:
        runtime.warning("Branch details not found")
        return False

    # keys belong to the preview branch's own project, not the parent
    api_keys = call_remote(runtime, "Error fetching api keys", client.get_api_keys, branch.project_ref)
    if api_keys is None:
        runtime.warning("Api keys not found")
        return False

    publish_branch(runtime, branch, detail, api_keys)
    return True


def wait_for_branch(
    client,
    runtime,
    config: WaitConfig,
    branch_name: str,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> BranchSummary:
    """Block until ``branch_name`` is ready and its outputs are published.

    Raises WaitTimeoutError once ``config.timeout`` seconds have elapsed
    without success, and FetchError on a non-transient API failure.
    """
    start = clock()
    ticks = 0
    while clock() - start < config.timeout:
        ticks += 1
        branches = call_remote(runtime, "Failed fetching branches", client.list_branches, config.project_ref)
        branch = find_branch(branches or [], branch_name)

        if is_ready(branch, config.wait_for_migrations):
            runtime.info(f"Branch {branch_name} found, status: {branch.status}")
            if _fetch_and_publish(client, runtime, branch):
                runtime.info("success")
                logger.debug("branch %s ready after %d tick(s)", branch_name, ticks)
                return branch

        status = branch.status if branch is not None else None
        runtime.info(f"Waiting for branch {branch_name} to be created. Status={status}")
        sleep(config.poll_interval)

    raise WaitTimeoutError(branch_name)
