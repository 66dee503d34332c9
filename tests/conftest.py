import io
import logging

import pytest

from gitsource.config import ConfigAccessor, default_cfg, env_var_name
from gitsource.git import GitRepo

from .factories import make_upstream


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("gitsource")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's configuration file out of every test."""
    for section, keys in default_cfg.items():
        for key in keys:
            monkeypatch.delenv(env_var_name(section, key), raising=False)
    config = ConfigAccessor(tmp_path / "gitsource_test.cfg")
    monkeypatch.setattr("gitsource.config.config", config)
    return config


# git fixtures


@pytest.fixture
def upstream(tmp_path, isolated_config):
    """Upstream repository; the default branch is the configured upstream branch."""
    repo = make_upstream(tmp_path.resolve() / "upstream")
    isolated_config.set("git", "upstream_branch", repo.default_branch)
    return repo


@pytest.fixture
def clone(tmp_path, upstream):
    """A fresh clone of the upstream repository."""
    repo = GitRepo(tmp_path.resolve() / "clone")
    repo.clone(upstream.url)
    return repo
