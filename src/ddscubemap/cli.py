"""Command-line interface for assembling DDS cube maps."""

import argparse
import logging
import os
import sys

from . import FACE_LABELS, __version__
from .config import CubemapConfig
from .core import CubemapError, setup_logging

logger = logging.getLogger("ddscubemap")

_DEFAULT_CONFIG_PATH = "ddscubemap.yaml"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Syntax error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ddscubemap",
        usage="ddscubemap PX.dds NX.dds PY.dds NY.dds PZ.dds NZ.dds -o result.dds [options]",
        description="Generate a DDS cube map from six DDS cube face images.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Faces are taken in the order +X, -X, +Y, -Y, +Z, -Z.

Examples:
  ddscubemap px.dds nx.dds py.dds ny.dds pz.dds nz.dds -o sky.dds
  ddscubemap px.dds nx.dds py.dds ny.dds pz.dds nz.dds -o sky.dds --log-level DEBUG
  ddscubemap --generate-config -c ddscubemap.yaml
        """,
        add_help=False,
    )
    parser.add_argument("-h", "-help", "--help", action="help",
                        help="Show this help message and exit")
    parser.add_argument("faces", nargs="*", metavar="FACE",
                        help="Six face files: " + " ".join(f"{label}.dds" for label in FACE_LABELS))
    parser.add_argument("--output", "-o", help="Result cube map DDS file")
    parser.add_argument("--config", "-c", help="Path to config YAML")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar while faces are processed")
    parser.add_argument("--generate-config", action="store_true",
                        help="Generate default config YAML and exit")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    """Parse CLI arguments, assemble the cube map and exit with its status."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    if args.generate_config:
        dest = args.config or _DEFAULT_CONFIG_PATH
        if os.path.isdir(dest):
            dest = os.path.join(dest, _DEFAULT_CONFIG_PATH)
        CubemapConfig().to_yaml(dest)
        logger.info("Generated default %s", dest)
        print(f"Generated default {dest}")
        return

    if len(args.faces) != len(FACE_LABELS) or not args.output:
        print("Syntax error: wrong number of arguments", file=sys.stderr)
        parser.print_usage(sys.stderr)
        sys.exit(1)

    if args.config:
        if not os.path.exists(args.config):
            logger.error("Config file not found: %s", args.config)
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        try:
            config = CubemapConfig.from_yaml(args.config)
        except ValueError as e:
            logger.error("Invalid config file '%s': %s", args.config, e)
            print(f"Error: Invalid config: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        config = CubemapConfig()

    # CLI overrides
    if args.log_level:
        config.log_level = args.log_level
    if args.log_file:
        config.log_file = args.log_file
    if args.progress:
        config.show_progress = True

    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.log_level, config.log_file or None)

    from .assembler import CubemapAssembler
    assembler = CubemapAssembler(config)
    try:
        result = assembler.run(args.faces, args.output)
    except CubemapError as exc:
        logger.error("Cube map assembly failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    logger.debug("Assembly summary: %s", result.to_dict())


if __name__ == "__main__":
    main()
