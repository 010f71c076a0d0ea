"""
Beatcut Exception Hierarchy

Structured exception types for the I/O and validation layers.
All exceptions inherit from BeatcutError for easy catching.

The cut placement engine itself never raises for soft failures: a region
too short for the requested cuts, or fewer than two plans, yields an
empty cut list.

Usage:
    from beatcut.exceptions import BeatFileError

    try:
        beats = load_beat_markers(path)
    except BeatFileError as e:
        logger.error(f"Could not read beats: {e}")
"""


class BeatcutError(Exception):
    """Base exception for all Beatcut errors."""
    pass


# =============================================================================
# Beat Data Errors
# =============================================================================

class BeatDataError(BeatcutError):
    """Error in the beat list handed to the engine."""
    pass


class MalformedBeatDataError(BeatDataError):
    """Beat list contains non-finite, negative or out-of-order entries."""

    def __init__(self, message: str, index: int = None):
        super().__init__(message)
        self.index = index


class BeatFileError(BeatDataError):
    """Beat file missing, unreadable or not matching the expected schema."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(BeatcutError):
    """Invalid configuration or missing required settings."""
    pass


class InvalidRegionError(ConfigurationError):
    """Active region bounds are unusable (start not before end)."""
    pass
