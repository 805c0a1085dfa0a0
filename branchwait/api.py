from __future__ import annotations

"""HTTP client for the Supabase management API.

``ApiClient`` is a thin requests wrapper with bearer authentication.
``SupabaseClient`` exposes the three calls the wait loop needs and turns
every failure into an ``ApiError`` carrying the HTTP status, so the caller
can decide what is transient.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from . import __version__
from .config import ApiConfig
from .errors import ApiError
from .models import ApiKey, BranchDetail, BranchSummary

USER_AGENT = f"branchwait/{__version__}"


@dataclass
class ApiClient:
    config: ApiConfig

    def _get_session(self) -> requests.Session:
        sess = requests.Session()
        sess.headers.update({"Accept": "application/json", "User-Agent": USER_AGENT})
        if self.config.default_headers:
            sess.headers.update(self.config.default_headers)
        return sess

    def _apply_auth(self, sess: requests.Session) -> None:
        if self.config.token:
            sess.headers["Authorization"] = f"Bearer {self.config.token}"

    def request(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None, **kwargs: Any) -> requests.Response:
        url = self.config.base_url.rstrip("/") + "/" + path.lstrip("/")
        sess = self._get_session()
        self._apply_auth(sess)
        kwargs.setdefault("timeout", self.config.timeout)
        try:
            return sess.request(method.upper(), url, params=params, **kwargs)
        finally:
            sess.close()

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", path, **kwargs)


def _body_excerpt(resp: requests.Response, limit: int = 200) -> str:
    text = (resp.text or "").strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class SupabaseClient:
    """Read-only access to preview branches and project API keys."""

    def __init__(self, config: ApiConfig, api: Optional[ApiClient] = None):
        self.api = api or ApiClient(config)

    def _get_json(self, path: str, **kwargs: Any) -> Any:
        try:
            resp = self.api.get(path, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"GET {path} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            reason = _body_excerpt(resp) or resp.reason or "request failed"
            raise ApiError(f"GET {path}: {reason}", status=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(f"GET {path} returned a non-JSON body") from exc

    def _get_list(self, path: str) -> List[Any]:
        payload = self._get_json(path)
        if not isinstance(payload, list):
            raise ApiError(f"GET {path} returned {type(payload).__name__}, expected a list")
        return payload

    def list_branches(self, project_ref: str) -> List[BranchSummary]:
        if not project_ref:
            raise ValueError("project_ref must be a non-empty string")
        return [BranchSummary.from_dict(item) for item in self._get_list(f"/v1/projects/{project_ref}/branches")]

    def get_branch_details(self, branch_id: str) -> BranchDetail:
        if not branch_id:
            raise ValueError("branch_id must be a non-empty string")
        return BranchDetail.from_dict(self._get_json(f"/v1/branches/{branch_id}"))

    def get_api_keys(self, project_ref: str) -> List[ApiKey]:
        if not project_ref:
            raise ValueError("project_ref must be a non-empty string")
        return [ApiKey.from_dict(item) for item in self._get_list(f"/v1/projects/{project_ref}/api-keys")]

# ---------------------------------------------------------------------------
# Usage example
#
# from branchwait.api import SupabaseClient
# from branchwait.config import ApiConfig
#
# client = SupabaseClient(ApiConfig(token="sbp_..."))
# for branch in client.list_branches("abcdefghijklmnop"):
#     print(branch.name, branch.status)
