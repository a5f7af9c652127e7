"""Entrypoint for `python -m ddscubemap`.

Usage:
  python -m ddscubemap PX.dds NX.dds PY.dds NY.dds PZ.dds NZ.dds -o result.dds
"""
import logging

logger = logging.getLogger("ddscubemap")


def _run_cli():
    from .cli import main as cli_main
    logger.debug("Dispatching to CLI entrypoint.")
    cli_main()


if __name__ == "__main__":
    _run_cli()
