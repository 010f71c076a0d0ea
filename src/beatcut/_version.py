"""Version information for the beatcut package.

The actual version is determined at runtime from GIT_COMMIT env var.
This file provides a fallback for pip/setuptools.
"""

import os

# Base version for PEP 440 compliance (used by pip/setuptools)
BASE_VERSION = "0.4.0"


def get_git_commit() -> str:
    """Get git commit hash for display purposes."""
    git_commit = os.environ.get("GIT_COMMIT", "").strip()
    if git_commit and git_commit != "dev":
        return git_commit[:8]
    return "dev"


def get_version() -> str:
    """Get PEP 440 compliant version string."""
    commit = get_git_commit()
    if commit != "dev":
        # Format: 0.4.0+c6eea1c5 (local version identifier)
        return f"{BASE_VERSION}+{commit}"
    return BASE_VERSION


# For setuptools/pip
__version__ = BASE_VERSION

# For runtime display (includes git commit)
VERSION = get_version()
