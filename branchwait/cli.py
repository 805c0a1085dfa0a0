"""Command-line entry point, run as the body of the GitHub action.

Every option falls back to the matching action input (``INPUT_*``
environment variable) so the same command works locally and on a runner.
"""

import logging
from typing import Optional

import click

from .actions import ActionsRuntime, configure_logging
from .api import SupabaseClient
from .config import DEFAULT_API_URL, DEFAULT_POLL_INTERVAL, ApiConfig, WaitConfig, parse_timeout
from .context import resolve_branch_name
from .errors import BranchWaitError, ConfigError
from .wait import wait_for_branch

logger = logging.getLogger(__name__)


def run(
    runtime: ActionsRuntime,
    token: Optional[str] = None,
    project_ref: Optional[str] = None,
    wait_for_migrations: Optional[bool] = None,
    timeout: Optional[str] = None,
    api_url: Optional[str] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    client: Optional[SupabaseClient] = None,
) -> None:
    token = token or runtime.get_input("supabase-access-token", required=True)
    project_ref = project_ref or runtime.get_input("supabase-project-id", required=True)
    if wait_for_migrations is None:
        wait_for_migrations = runtime.get_boolean_input("wait-for-migrations")
    if timeout is None:
        timeout = runtime.get_input("timeout")

    # users may have these set up as plain env vars
    runtime.set_secret(token)
    runtime.set_secret(project_ref)

    config = WaitConfig(
        project_ref=project_ref,
        wait_for_migrations=wait_for_migrations,
        timeout=parse_timeout(timeout),
        poll_interval=poll_interval,
    )

    branch_name = resolve_branch_name(runtime.environ)
    if not branch_name:
        raise ConfigError("Git branch not found")
    runtime.info(f"Current Git branch: {branch_name}")

    if client is None:
        base_url = api_url or runtime.get_input("supabase-api-url") or DEFAULT_API_URL
        client = SupabaseClient(ApiConfig(base_url=base_url, token=token))

    wait_for_branch(client, runtime, config, branch_name)


@click.command()
@click.option("--supabase-access-token", "token", default=None, help="Management API access token")
@click.option("--supabase-project-id", "project_ref", default=None, help="Parent project reference")
@click.option(
    "--wait-for-migrations",
    type=click.BOOL,
    default=None,
    help="Only accept branches whose migrations have passed",
)
@click.option("--timeout", default=None, help="Seconds to wait before giving up")
@click.option("--supabase-api-url", "api_url", default=None, help="Management API base URL")
@click.option("--poll-interval", type=click.FloatRange(min=0), default=DEFAULT_POLL_INTERVAL, show_default=True)
@click.option("--debug", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx, token, project_ref, wait_for_migrations, timeout, api_url, poll_interval, debug):
    """Wait for the Supabase preview branch of this Git branch and export its credentials."""
    redactor = configure_logging(debug=debug)
    runtime = ActionsRuntime(redactor=redactor)
    try:
        run(
            runtime,
            token=token,
            project_ref=project_ref,
            wait_for_migrations=wait_for_migrations,
            timeout=timeout,
            api_url=api_url,
            poll_interval=poll_interval,
        )
    except BranchWaitError as err:
        runtime.set_failed(str(err))
    except Exception as err:
        logger.exception("Unexpected error")
        runtime.set_failed(f"Unhandled error: {err}")
    ctx.exit(runtime.exit_code)
