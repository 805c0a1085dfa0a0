from __future__ import annotations

"""Test doubles and record builders shared by the unit tests."""

import io
from typing import Any

from branchwait.actions import ActionsRuntime
from branchwait.models import ApiKey, BranchDetail, BranchSummary


class RecordingRuntime(ActionsRuntime):
    """ActionsRuntime that also keeps the messages it was asked to log."""

    def __init__(self, environ=None):
        super().__init__(environ=environ or {}, stdout=io.StringIO())
        self.infos: list[str] = []
        self.warnings: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)
        super().info(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)
        super().warning(message)


class FakeClient:
    """Scripted SupabaseClient stand-in.

    Each ``*_results`` list is consumed one item per call; an exception item
    is raised instead of returned. The last item repeats once exhausted.
    """

    def __init__(self, branches_results=None, detail_results=None, keys_results=None):
        self.branches_results = list(branches_results or [[]])
        self.detail_results = list(detail_results or [])
        self.keys_results = list(keys_results or [])
        self.calls: list[tuple[str, Any]] = []

    @staticmethod
    def _next(results: list) -> Any:
        item = results.pop(0) if len(results) > 1 else results[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def list_branches(self, project_ref):
        self.calls.append(("list_branches", project_ref))
        return self._next(self.branches_results)

    def get_branch_details(self, branch_id):
        self.calls.append(("get_branch_details", branch_id))
        return self._next(self.detail_results)

    def get_api_keys(self, project_ref):
        self.calls.append(("get_api_keys", project_ref))
        return self._next(self.keys_results)

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_branch(**overrides) -> BranchSummary:
    fields = dict(
        id="br-1",
        name="feat-x",
        project_ref="childref",
        parent_project_ref="parentref",
        git_branch="feat-x",
        pr_number=42,
        reset_on_push=True,
        status="MIGRATIONS_PASSED",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-02T00:00:00Z",
    )
    fields.update(overrides)
    return BranchSummary(**fields)


def make_detail(**overrides) -> BranchDetail:
    fields = dict(
        ref="childref",
        db_host="db.childref.supabase.co",
        db_port=5432,
        db_user="postgres",
        db_pass="hunter2",
        jwt_secret="jwt-signing-secret",
    )
    fields.update(overrides)
    return BranchDetail(**fields)


def make_keys() -> list[ApiKey]:
    return [ApiKey(name="anon", api_key="anon-value"), ApiKey(name="service_role", api_key="service-value")]
