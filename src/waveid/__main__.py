"""waveid CLI entry point.

This module is invoked when running `python -m waveid` or the `waveid`
console script. It converts audio files to identifiers and back.
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from .audio.context import OfflineAudioContext
from .audio.wavfile import read_audio, write_wav
from .codec import format_identifier, parse_identifier
from .config import WaveIdConfig
from .errors import InvalidIdentifierError, WaveIdError
from .pipeline import audio_to_identifier, identifier_to_audio, random_identifier
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="waveid",
        description="waveid - map a short audio clip to one integer and back",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to waveid configuration YAML file (default: built-in defaults)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from config",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="Compute the identifier of an audio file")
    encode.add_argument("audio", type=Path, help="Input audio file (WAV, FLAC, OGG, ...)")
    encode.add_argument(
        "-o", "--output", type=Path, help="Write the identifier here instead of stdout"
    )

    decode = subparsers.add_parser("decode", help="Reconstruct a WAV file from an identifier")
    source = decode.add_mutually_exclusive_group(required=True)
    source.add_argument("--id", dest="identifier", type=str, help="Identifier digits")
    source.add_argument("--id-file", type=Path, help="File containing the identifier digits")
    decode.add_argument("-o", "--output", type=Path, required=True, help="Output WAV file")

    rand = subparsers.add_parser("random", help="Generate a uniformly random identifier")
    rand.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    rand.add_argument(
        "-o", "--output", type=Path, help="Write the identifier here instead of stdout"
    )

    return parser


def _emit_identifier(identifier: int, output: Path | None) -> None:
    text = format_identifier(identifier)
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Identifier written to {output} ({len(text)} digits)")


def _read_identifier_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidIdentifierError(
            f"Identifier file {path} is not UTF-8 text (byte {e.start})"
        ) from e


def run(args: argparse.Namespace, config: WaveIdConfig) -> None:
    """Execute one CLI command.

    Raises:
        WaveIdError: On any codec failure
        OSError: If an identifier file cannot be read or written
    """
    with OfflineAudioContext() as context:
        if args.command == "encode":
            buffer = read_audio(args.audio)
            _emit_identifier(audio_to_identifier(buffer, context, config), args.output)

        elif args.command == "decode":
            if args.id_file is not None:
                text = _read_identifier_file(args.id_file)
            else:
                text = args.identifier
            buffer = identifier_to_audio(parse_identifier(text), context, config)
            write_wav(args.output, buffer)
            logger.info(f"Waveform written to {args.output}")

        elif args.command == "random":
            rng = np.random.default_rng(args.seed)
            _emit_identifier(random_identifier(rng, config), args.output)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the waveid CLI.

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    args = build_parser().parse_args(argv)

    try:
        if args.config is not None:
            config = WaveIdConfig.from_yaml(args.config)
        else:
            config = WaveIdConfig.from_yaml_with_defaults()
    except (ValidationError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: Failed to load configuration: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        config.logging.level = args.log_level

    setup_logging(level=config.logging.level, format_type=config.logging.format)

    try:
        run(args, config)
    except (WaveIdError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
