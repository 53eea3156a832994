"""cloud-kv — manage key value stores hosted on a remote cloud platform.

Built around a small layered core: target resolution and grouped listing
are pure, the HTTP client and terminal UI are adapters at the edges.
"""

from cloud_kv.version import __version__

__all__: list[str] = ["__version__"]
