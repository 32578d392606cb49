from __future__ import annotations


class GridNodeError(Exception):
    """
    Base class for all expected operational errors in gridnode.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, startup logs, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Node config file errors
# ---------------------------------------------------------------------------

class ConfigNotFoundError(GridNodeError):
    """
    Node config file does not exist at load time.
    """
    code = "config_not_found"


class ConfigReadError(GridNodeError):
    """
    Node config file exists but could not be read.

    Examples:
      - permission denied
      - path is a directory
      - file is not valid UTF-8
    """
    code = "config_read_error"


class ConfigWriteError(GridNodeError):
    """
    Node config could not be serialized or written.

    Examples:
      - permission denied
      - parent directory missing
      - disk full
    """
    code = "config_write_error"


class MalformedConfigError(GridNodeError):
    """
    Node config document is not usable for the selected schema variant.

    Examples:
      - invalid JSON
      - top level is not an object
      - legacy document without a 'configuration' object
      - modern document without hubPort / hubHost / port
      - a numeric field that is neither a number nor a numeric string
    """
    code = "malformed_config"


# ---------------------------------------------------------------------------
# Capability catalog errors
# ---------------------------------------------------------------------------

class CapabilityConfigError(GridNodeError):
    """
    Browser catalog or capability registry is invalid or inconsistent.

    Examples:
      - browsers.yml missing or malformed
      - catalog entry names a driver that is not registered
      - capability class rejects its fields
    """
    code = "capability_config_error"
