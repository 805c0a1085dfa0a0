from branchwait.context import resolve_branch_name


def test_prefers_head_ref():
    env = {"GITHUB_HEAD_REF": "feat-x", "GITHUB_REF": "refs/pull/12/merge"}
    assert resolve_branch_name(env) == "feat-x"


def test_falls_back_to_ref_heads():
    assert resolve_branch_name({"GITHUB_HEAD_REF": "", "GITHUB_REF": "refs/heads/feature/login"}) == "feature/login"


def test_tag_ref_is_not_a_branch():
    assert resolve_branch_name({"GITHUB_REF": "refs/tags/v1.0.0"}) is None


def test_missing_everything():
    assert resolve_branch_name({}) is None
    assert resolve_branch_name({"GITHUB_REF": "refs/heads/"}) is None


def test_reads_process_environment(monkeypatch):
    monkeypatch.delenv("GITHUB_HEAD_REF", raising=False)
    monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
    assert resolve_branch_name() == "main"
