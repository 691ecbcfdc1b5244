"""Error kinds raised by the tool layer and the agent around it."""

from __future__ import annotations


class MovieToolError(Exception):
    """Base exception for failures a tool call can report back to the agent."""


class ValidationError(MovieToolError, ValueError):
    """Raised when a caller-supplied argument is malformed or unparsable."""


class ServiceError(MovieToolError):
    """Raised when TMDb is unreachable, rejects the request or returns an unexpected shape."""


class NotFoundError(ServiceError):
    """Raised when a single-entity lookup (e.g. movie by id) finds nothing."""


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing."""


class AgentError(RuntimeError):
    """Raised when the chat model itself fails to produce an answer."""
