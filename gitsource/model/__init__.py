from .manifest import Dependency, LockedDependency, LockFile, Manifest

__all__ = ["Dependency", "LockedDependency", "LockFile", "Manifest"]
