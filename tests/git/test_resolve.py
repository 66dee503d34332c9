"""Tests for revision resolution against fetched remotes."""

from unittest.mock import Mock

import pytest

from gitsource.git import (
    DiagnosticLog,
    GitProcessError,
    GitRepo,
    ResolutionError,
    default_revision,
    find_remote_revision,
    resolve_remote_revision,
)
from gitsource.git.diagnostics import LogLevel
from gitsource.git.invoker import GitInvoker

from ..factories import make_commit

FULL_ID = "0123456789abcdef0123456789abcdef01234567"


@pytest.mark.short
class TestFullObjectIds:
    def test_full_id_short_circuits(self, tmp_path):
        invoker = Mock(spec=GitInvoker)
        repo = GitRepo(tmp_path, invoker=invoker)

        assert resolve_remote_revision(repo, FULL_ID) == FULL_ID
        invoker.run.assert_not_called()

    def test_full_id_is_returned_even_if_unknown(self, tmp_path):
        # existence is checked at checkout, not here
        repo = GitRepo(tmp_path / "missing", invoker=Mock(spec=GitInvoker))
        assert resolve_remote_revision(repo, "f" * 40) == "f" * 40

    def test_abbreviated_id_is_resolved(self, tmp_path):
        invoker = Mock(spec=GitInvoker)
        invoker.run.return_value = Mock(output=FULL_ID)
        repo = GitRepo(tmp_path, invoker=invoker)

        assert resolve_remote_revision(repo, FULL_ID[:7], "origin") == FULL_ID
        command = invoker.run.call_args[0][0]
        assert command.args[-1] == f"origin/{FULL_ID[:7]}"


@pytest.mark.integration
class TestResolveRemoteRevision:
    def test_branch_under_remote(self, clone, upstream):
        first = upstream.commits["first"]
        assert resolve_remote_revision(clone, "dev", "origin") == first

    def test_remote_ref_is_preferred(self, clone, upstream):
        # a local branch named like the remote one but pointing elsewhere
        clone.checkout_branch("dev", upstream.commits["second"])
        first = upstream.commits["first"]
        assert resolve_remote_revision(clone, "dev", "origin") == first

    def test_falls_back_to_plain_revision(self, clone, upstream):
        first = upstream.commits["first"]
        assert resolve_remote_revision(clone, "v1.0", "origin") == first
        assert resolve_remote_revision(clone, "refs/tags/v1.0", "origin") == first

    def test_default_remote(self, clone, upstream):
        assert resolve_remote_revision(clone, "dev") == upstream.commits["first"]

    def test_not_found(self, clone, upstream):
        log = DiagnosticLog().info("cloned")

        with pytest.raises(ResolutionError) as excinfo:
            resolve_remote_revision(clone, "nope", "origin", upstream.url, log)

        err = excinfo.value
        assert len(err.log) == 2
        assert err.index == 1
        assert err.entry.level is LogLevel.ERROR
        assert err.entry.message == f"{upstream.url}: revision not found 'nope'"

    def test_not_found_names_remote_without_url(self, clone):
        with pytest.raises(ResolutionError) as excinfo:
            resolve_remote_revision(clone, "nope", "origin")
        assert str(excinfo.value) == "origin: revision not found 'nope'"


@pytest.mark.integration
class TestFindRemoteRevision:
    def test_defaults_to_upstream_branch(self, clone, upstream):
        third = make_commit(upstream.path, "more.txt", "more\n", "third commit")

        assert find_remote_revision(clone) == third

    def test_tag(self, clone, upstream):
        assert find_remote_revision(clone, revision="v1.0") == upstream.commits["first"]

    def test_fetch_from_url(self, clone, upstream):
        rev = find_remote_revision(clone, upstream.url, "dev", "origin")
        assert rev == upstream.commits["first"]

    def test_fetch_failure_carries_given_log(self, clone, tmp_path):
        log = DiagnosticLog().info("step one").warning("step two")
        missing = str(tmp_path / "missing")

        with pytest.raises(GitProcessError) as excinfo:
            find_remote_revision(clone, missing, "dev", "origin", log)

        assert excinfo.value.log == log
        assert excinfo.value.status not in (None, 0)

    def test_unknown_revision_after_fetch(self, clone, upstream):
        with pytest.raises(ResolutionError) as excinfo:
            find_remote_revision(clone, "origin", "does-not-exist", "origin")

        assert "revision not found 'does-not-exist'" in excinfo.value.entry.message
        assert excinfo.value.entry.message.startswith("origin:")


@pytest.mark.integration
class TestDefaultRevision:
    def test_follows_remote_head(self, clone, upstream, isolated_config):
        isolated_config.set("git", "upstream_branch", "not-the-default")
        assert default_revision(clone, "origin") == upstream.default_branch

    def test_falls_back_to_upstream_branch(self, tmp_path, isolated_config):
        isolated_config.set("git", "upstream_branch", "trunk")
        repo = GitRepo(tmp_path / "fresh")
        repo.quiet_init()

        assert default_revision(repo) == "trunk"
