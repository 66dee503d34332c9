"""Configuration for git defaults and the dependency directory

Values are looked up in this order:
    1. environment variables named GITSOURCE_<SECTION>_<KEY>
       (e.g. GITSOURCE_GIT_UPSTREAM_BRANCH)
    2. the user configuration file (gitsource.cfg in the config directory)
    3. the built-in defaults below
"""

import configparser
import logging
import os
import platform
from typing import Optional, Any

from pathlib import Path

APP_NAME = "gitsource"
ENV_PREFIX = "GITSOURCE"

DEFAULT_REMOTE = "origin"
UPSTREAM_BRANCH = "master"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")


default_cfg = {
    "git": {"default_remote": DEFAULT_REMOTE, "upstream_branch": UPSTREAM_BRANCH},
    "dirs": {
        "dependencies": f".{APP_NAME}/deps",
        "remotes": f".{APP_NAME}/remotes",
    },
}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/gitsource").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


def init_dirs():
    """Create the configuration directory.

    A read-only filesystem only costs persistence, so failure is a warning.
    """
    try:
        os.makedirs(config_dir, exist_ok=True)
    except OSError as e:
        logger.warning(
            f"Could not create config directory {config_dir}: {e}. "
            "Using in-memory configuration only."
        )


def env_var_name(section: str, key: str) -> str:
    return f"{ENV_PREFIX}_{section}_{key}".upper()


class ConfigAccessor:
    """
    Layered access to gitsource settings.

    Environment variables override the configuration file; missing sections
    or keys fall back to the caller's default.

    Usage:
        config = ConfigAccessor()
        remote = config.get('git', 'default_remote', default='origin')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Configuration file to read. If None, the file in the
                user config directory is used (and the directory created).
        """
        if config_path is None:
            self.config_path = get_config_file()
            init_dirs()
        else:
            self.config_path = Path(config_path)

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Look up a setting.

        Args:
            section: The configuration section
            key: The configuration key
            default: Value to return if neither environment nor file define it

        Returns:
            The environment value, else the file value, else default
        """
        value = os.environ.get(env_var_name(section, key))
        if value:
            return value
        return self.config.get(section, key, fallback=default)

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, value)

    def save(self) -> None:
        """
        Write the file-backed settings to `config_path`.

        Environment overrides are never written.
        """
        try:
            with open(self.config_path, "w") as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.warning(
                f"Could not save configuration to {self.config_path}: {e}. "
                "Configuration changes will not persist."
            )

    def sections(self) -> list:
        return self.config.sections()

    def options(self, section: str) -> list:
        if not self.config.has_section(section):
            return []
        return self.config.options(section)


# Create a global config accessor instance
config = ConfigAccessor()


def get_default_remote() -> str:
    """Name of the remote that fetched refs are stored under (e.g. origin)."""
    return config.get("git", "default_remote", default_cfg["git"]["default_remote"])


def get_upstream_branch() -> str:
    """Fallback branch when no revision is named and the remote HEAD is unknown."""
    return config.get("git", "upstream_branch", default_cfg["git"]["upstream_branch"])


def get_deps_dir() -> Path:
    """
    Get the configured directory where dependencies are checked out.

    Returns:
        Path to the dependency directory (defaults to .gitsource/deps)
    """
    deps_dir_str = config.get(
        "dirs", "dependencies", default_cfg["dirs"]["dependencies"]
    )
    return Path(deps_dir_str).expanduser()


def get_remotes_dir() -> Path:
    """Directory of the clones `gitsource resolve` keeps per remote URL.

    Kept apart from the dependency directory so that neither is mistaken for
    an entry of the other.
    """
    remotes_dir_str = config.get("dirs", "remotes", default_cfg["dirs"]["remotes"])
    return Path(remotes_dir_str).expanduser()
