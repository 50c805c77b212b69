"""
dafile version.

Resolution order:
  1. DAFILE_VERSION environment variable (release builds, CI)
  2. installed distribution metadata for "dafile"
  3. the base version below (source checkouts)
"""

from __future__ import annotations

import os
from importlib import metadata

# Bump this when making a release.
_BASE_SEMVER = "0.1.0"


def _resolve() -> str:
    env_v = os.environ.get("DAFILE_VERSION")
    if env_v:
        return env_v
    try:
        return metadata.version("dafile")
    except metadata.PackageNotFoundError:
        return _BASE_SEMVER


__version__ = _resolve()


def get_version() -> str:
    """Return the package version string."""
    return __version__


__all__ = ["__version__", "get_version"]
