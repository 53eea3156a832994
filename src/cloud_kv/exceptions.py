"""Custom exception hierarchy for cloud-kv.

All exceptions that cross layer boundaries must inherit from
:class:`CloudKvError`.  Raw third-party exceptions (e.g. from requests)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
CloudKvError
├── ConfigurationError
├── NotFoundError
│   └── NotFoundByLabelError
├── AmbiguousTargetError
├── AlreadyExistsError
├── RemoteError
└── EnvironmentError
"""

from __future__ import annotations


class CloudKvError(Exception):
    """Base exception for all cloud-kv errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Local validation ------------------------------------------------------

class ConfigurationError(CloudKvError):
    """Raised for malformed requests that never reach the remote client.

    Covers invalid selector combinations, incompatible output options
    and missing connection settings.
    """


# --- Target resolution -----------------------------------------------------

class NotFoundError(CloudKvError):
    """Raised when a selector resolves to no resource."""


class NotFoundByLabelError(NotFoundError):
    """Raised when no resource is linked to an app under a given label."""


class AmbiguousTargetError(CloudKvError):
    """Raised when a label selector matches more than one resource.

    Attributes
    ----------
    candidates:
        Names of every matching resource, in listing order.
    """

    def __init__(
        self,
        message: str,
        candidates: tuple[str, ...],
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.candidates: tuple[str, ...] = candidates


class AlreadyExistsError(CloudKvError):
    """Raised when creating a resource whose name is already taken."""


# --- Remote API ------------------------------------------------------------

class RemoteError(CloudKvError):
    """Raised when a call to the remote cloud API fails."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(CloudKvError):
    """Raised when a required runtime dependency is not available."""
