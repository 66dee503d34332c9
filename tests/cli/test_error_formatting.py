"""Tests for CLI error formatting functionality."""

import pytest

from gitsource.cli.error_formatting import pretty_print_git_error
from gitsource.git import (
    DiagnosticLog,
    GitProcessError,
    MaterializeError,
    ResolutionError,
)


@pytest.mark.short
class TestPrettyPrintGitError:
    def test_process_error_without_log(self):
        error = GitProcessError(["git", "fetch", "origin"], 128, stderr="fatal: nope")
        assert pretty_print_git_error(error) == (
            "`git fetch origin` exited with code 128: fatal: nope"
        )

    def test_resolution_error_marks_failing_entry(self):
        log = DiagnosticLog().info("cloning").error("u: revision not found 'v2'")
        error = ResolutionError(log, 1)

        lines = pretty_print_git_error(error).splitlines()

        assert lines[0] == "u: revision not found 'v2'"
        assert lines[1] == "  info: cloning"
        assert lines[2] == "> error: u: revision not found 'v2'"

    def test_materialize_error_uses_cause_index(self):
        log = DiagnosticLog().info("foo: cloning u").error("u: revision not found 'v2'")
        cause = ResolutionError(log, 1)
        try:
            raise MaterializeError("foo", str(cause), log) from cause
        except MaterializeError as e:
            error = e

        result = pretty_print_git_error(error)

        assert result.splitlines()[0] == "foo: u: revision not found 'v2'"
        assert "> error: u: revision not found 'v2'" in result
        assert "  info: foo: cloning u" in result
