"""Command-line entry point: ``streamput --username U --password P FILE URL``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import aiohttp

from streamput import __version__
from streamput.application.use_cases.upload_file import UploadFileUseCase
from streamput.core.config import Settings, settings as default_settings
from streamput.core.exceptions import StreamPutError
from streamput.core.pyd_schemas import Credentials, UploadResult
from streamput.infrastructure.adapters import AListAuthenticator, StreamUploader

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass(frozen=True)
class CliArgs:
    username: str
    password: str
    local_file: str
    destination_url: str
    verbose: bool = False
    quiet: bool = False
    chunk_size: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"CliArgs(username={self.username!r}, password='**********', "
            f"local_file={self.local_file!r}, destination_url={self.destination_url!r})"
        )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamput",
        description="Log into an AList-compatible file service and stream a local file to it",
    )
    parser.add_argument("--username", required=True, help="Account user name")
    parser.add_argument("--password", required=True, help="Account password")
    parser.add_argument("local_file", help="Path of the local file to upload")
    parser.add_argument(
        "destination_url",
        help="Full remote URL, e.g. http://host:5244/dav/docs/report.pdf",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=None,
        help="Bytes read from disk per body chunk (default: STREAMPUT_CHUNK_SIZE or 8192)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if not ns.username.strip():
        parser.error("--username must not be empty")
    return CliArgs(
        username=ns.username,
        password=ns.password,
        local_file=ns.local_file,
        destination_url=ns.destination_url,
        verbose=ns.verbose,
        quiet=ns.quiet,
        chunk_size=ns.chunk_size,
    )


def configure_logging(config: Settings, verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, config.log_level.upper(), logging.WARNING)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        handlers.append(
            RotatingFileHandler(
                config.log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
            )
        )
    logging.basicConfig(
        level=level,
        format=config.log_format,
        datefmt=config.log_date_format,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


async def run(args: CliArgs, config: Settings) -> UploadResult:
    credentials = Credentials(username=args.username, password=args.password)
    timeout = (
        aiohttp.ClientTimeout(total=config.request_timeout)
        if config.request_timeout is not None
        else None
    )
    session_kwargs = {"timeout": timeout} if timeout is not None else {}

    async with aiohttp.ClientSession(**session_kwargs) as session:
        use_case = UploadFileUseCase(
            AListAuthenticator(session, config),
            StreamUploader(session, config),
        )
        return await use_case.execute(credentials, args.local_file, args.destination_url)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    config = default_settings
    if args.chunk_size is not None:
        config = config.model_copy(update={"chunk_size": args.chunk_size})
    configure_logging(config, verbose=args.verbose, quiet=args.quiet)
    logger.debug("Parsed arguments: %r", args)

    try:
        result = asyncio.run(run(args, config))
    except StreamPutError as e:
        print(f"Error [{e.error_code}]: {e.message}", file=sys.stderr)
        return EXIT_FAILURE

    print(result.response_text)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
