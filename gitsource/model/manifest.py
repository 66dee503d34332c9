"""
Dependency manifest and lock file models.

A manifest declares what to fetch (url + input revision); the lock file
records what it resolved to (full commit ids), so that later runs check out
exactly the same sources until the user asks for an update.
"""

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from gitsource.git.objects import is_full_object_name


def _non_empty(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("must be a non-empty string")
    return v.strip()


class Dependency(BaseModel):
    """A git dependency declaration."""

    name: str = Field(..., description="Dependency name, also its directory name")
    url: str = Field(..., description="Remote URL or local path")
    rev: Optional[str] = Field(
        None, description="Commit, branch or tag (defaults to the upstream branch)"
    )
    branch: Optional[str] = Field(
        None, description="Local branch to check out instead of a detached HEAD"
    )

    @field_validator("name", "url")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        return _non_empty(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"Dependency name '{v}' is not a valid directory name")
        return v


class Manifest(BaseModel):
    """List of dependencies to materialize."""

    dependencies: List[Dependency] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "Manifest":
        seen = set()
        duplicates = []
        for dep in self.dependencies:
            if dep.name in seen:
                duplicates.append(dep.name)
            seen.add(dep.name)
        if duplicates:
            raise ValueError(
                f"Found duplicate dependency names: {', '.join(duplicates)}"
            )
        return self

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "Manifest":
        """Alternative constructor that loads from YAML string"""
        data = yaml.safe_load(yaml_str) or {}
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Manifest":
        return cls.from_yaml(Path(path).read_text())


class LockedDependency(BaseModel):
    """A dependency pinned to the commit it resolved to."""

    name: str
    url: str
    input_rev: Optional[str] = None
    rev: str

    @field_validator("rev")
    @classmethod
    def validate_rev(cls, v: str) -> str:
        if not is_full_object_name(v):
            raise ValueError(f"Locked revision '{v}' is not a full commit id")
        return v

    def matches(self, dep: Dependency) -> bool:
        """Check whether this entry still pins the given declaration."""
        return self.url == dep.url and self.input_rev == dep.rev


class LockFile(BaseModel):
    """Resolved commits of every materialized dependency."""

    dependencies: List[LockedDependency] = Field(default_factory=list)

    def get(self, name: str) -> Optional[LockedDependency]:
        for dep in self.dependencies:
            if dep.name == name:
                return dep
        return None

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.model_dump(mode="json"), sort_keys=False, default_flow_style=False
        )

    def save(self, path: Union[str, Path]) -> None:
        Path(path).write_text(self.to_yaml())

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LockFile":
        """Load a lock file; a missing file is an empty lock."""
        path = Path(path)
        if not path.exists():
            return cls()
        data = yaml.safe_load(path.read_text()) or {}
        return cls(**data)
