from __future__ import annotations

"""Records returned by the Supabase management API.

Only the fields this package publishes are kept; anything else in the
payloads is ignored.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ApiError

PROVIDER_DOMAIN = "supabase.co"

# publication order of job outputs
SUMMARY_OUTPUT_FIELDS = (
    "id",
    "name",
    "project_ref",
    "parent_project_ref",
    "git_branch",
    "pr_number",
    "reset_on_push",
    "status",
    "created_at",
    "updated_at",
)
DETAIL_OUTPUT_FIELDS = ("db_host", "db_port", "db_user", "db_pass", "jwt_secret")


def _require_mapping(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ApiError(f"Unexpected {what} payload: expected an object, got {type(payload).__name__}")
    return payload


def _require(payload: Dict[str, Any], key: str, what: str) -> Any:
    value = payload.get(key)
    if value is None or value == "":
        raise ApiError(f"Unexpected {what} payload: missing '{key}'")
    return value


@dataclass
class BranchSummary:
    id: str
    name: str
    project_ref: str
    parent_project_ref: Optional[str] = None
    git_branch: Optional[str] = None
    pr_number: Optional[int] = None
    reset_on_push: bool = False
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "BranchSummary":
        data = _require_mapping(payload, "branch")
        return cls(
            id=_require(data, "id", "branch"),
            name=_require(data, "name", "branch"),
            project_ref=_require(data, "project_ref", "branch"),
            parent_project_ref=data.get("parent_project_ref"),
            git_branch=data.get("git_branch"),
            pr_number=data.get("pr_number"),
            reset_on_push=bool(data.get("reset_on_push", False)),
            status=data.get("status"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class BranchDetail:
    ref: str
    db_host: Optional[str] = None
    db_port: Optional[int] = None
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    jwt_secret: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "BranchDetail":
        data = _require_mapping(payload, "branch detail")
        return cls(
            ref=_require(data, "ref", "branch detail"),
            db_host=data.get("db_host"),
            db_port=data.get("db_port"),
            db_user=data.get("db_user"),
            db_pass=data.get("db_pass"),
            jwt_secret=data.get("jwt_secret"),
        )

    @property
    def api_url(self) -> str:
        return f"https://{self.ref}.{PROVIDER_DOMAIN}/rest/v1"

    @property
    def graphql_url(self) -> str:
        return f"https://{self.ref}.{PROVIDER_DOMAIN}/graphql/v1"


@dataclass
class ApiKey:
    name: str
    api_key: str

    @classmethod
    def from_dict(cls, payload: Any) -> "ApiKey":
        data = _require_mapping(payload, "api key")
        return cls(name=_require(data, "name", "api key"), api_key=data.get("api_key") or "")
