"""Run the key value store CLI with ``python -m cloud_kv``.

Same commands and exit codes as the ``cloud-kv`` script.
"""

from __future__ import annotations

from cloud_kv.cli.app import cli

if __name__ == "__main__":
    cli()
