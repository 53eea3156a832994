"""Infrastructure layer — external system integration.

This layer wraps all interaction with the remote cloud API.  Every raw
third-party exception must be caught here and re-raised as a
:class:`~cloud_kv.exceptions.CloudKvError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from cloud_kv.infra.cloud_client import HttpCloudClient

__all__: list[str] = [
    "HttpCloudClient",
]
