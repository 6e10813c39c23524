"""
Publish generated API documentation to Confluence wiki.

Reads the HTML files produced by a REST API documentation generator, and invokes Confluence API endpoints to create
or update a parent page and one child page per document.

Copyright 2022-2026, Levente Hunyadi
"""

import argparse
import logging
import os.path
import sys
import typing
from io import StringIO
from pathlib import Path
from typing import Any, Sequence

from . import __version__
from .environment import ArgumentError, ConfluenceError, ConnectionProperties, DocumentError, PageError, SynchronizationError
from .extra import override


class Arguments(argparse.Namespace):
    command: str
    loglevel: str

    # report
    docs_dir: Path
    index_file: str
    children_dir: str
    root_page: str
    space: str | None
    api_url: str | None
    scheme: str | None
    domain: str | None
    port: int | None
    path: str | None
    username: str | None
    api_key: str | None
    headers: dict[str, str] | None

    # clean
    directory: Path


class KwargsAppendAction(argparse.Action):
    """Append key-value pairs to a dictionary."""

    @override
    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: None | str | Sequence[Any],
        option_string: str | None = None,
    ) -> None:
        try:
            d = dict(map(lambda x: x.split("=", 1), typing.cast(Sequence[str], values)))
        except ValueError:
            raise argparse.ArgumentError(
                self,
                f'Could not parse argument "{values}". It should follow the format: k1=v1 k2=v2 ...',
            ) from None
        setattr(namespace, self.dest, d)


def _add_report_parser(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    parser = subparsers.add_parser("report", help="Publish generated documentation to Confluence.")
    parser.add_argument("docs_dir", type=Path, help="Directory with generated documentation.")
    parser.add_argument(
        "--index-file",
        dest="index_file",
        default="index.html",
        help="Name of the parent document in the documentation directory (default: 'index.html').",
    )
    parser.add_argument(
        "--children-dir",
        dest="children_dir",
        default="children",
        help="Name of the sub-directory that holds child documents (default: 'children').",
    )
    parser.add_argument(
        "-r",
        "--root-page",
        dest="root_page",
        required=True,
        help="Confluence page ID under which the parent page is placed.",
    )
    parser.add_argument("-s", "--space", help="Confluence space key for pages to be published.")
    parser.add_argument(
        "--api-url",
        dest="api_url",
        help="Confluence REST API URL, e.g. 'https://wiki.example.com/rest/api/'. Takes precedence over scheme, domain, port and path.",
    )
    parser.add_argument("--scheme", choices=["http", "https"], help="URL scheme of the Confluence server (default: 'http').")
    parser.add_argument("-d", "--domain", help="Host name of the Confluence server.")
    parser.add_argument("--port", type=int, help="Port of the Confluence server (default: 8080).")
    parser.add_argument("-p", "--path", help="Base path for Confluence (default: '/').")
    parser.add_argument("-u", "--username", help="Confluence user name.")
    parser.add_argument(
        "-a",
        "--api-key",
        dest="api_key",
        help="Confluence password or API token.",
    )
    parser.add_argument(
        "--headers",
        nargs="+",
        required=False,
        action=KwargsAppendAction,
        metavar="KEY=VALUE",
        help="Apply custom headers to all Confluence API requests.",
    )


def _add_clean_parser(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    parser = subparsers.add_parser("clean", help="Remove a directory with all its contents.")
    parser.add_argument("directory", type=Path, help="Directory to remove, e.g. 'target/confluence'.")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO).lower(),
        help="Use this option to set the log verbosity.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_report_parser(subparsers)
    _add_clean_parser(subparsers)
    return parser


def get_help() -> str:
    parser = get_parser()
    with StringIO() as buf:
        parser.print_help(file=buf)
        return buf.getvalue()


def report(parser: argparse.ArgumentParser, args: Arguments) -> None:
    from .api import ConfluenceAPI
    from .publisher import Publisher

    try:
        properties = ConnectionProperties(
            api_url=args.api_url,
            scheme=args.scheme,
            domain=args.domain,
            port=args.port,
            base_path=args.path,
            user_name=args.username,
            api_key=args.api_key,
            space_key=args.space,
            headers=args.headers,
        )
    except ArgumentError as e:
        parser.error(str(e))
    if not properties.space_key:
        parser.error("Confluence space key not specified")

    with ConfluenceAPI(properties) as api:
        Publisher(api, properties.space_key).process(
            args.docs_dir,
            ancestor_id=args.root_page,
            index_file=args.index_file,
            children_dir=args.children_dir,
        )


def clean(args: Arguments) -> None:
    from .scanner import clean as clean_directory

    clean_directory(args.directory)


def main(argv: Sequence[str] | None = None) -> None:
    parser = get_parser()
    args = Arguments()
    parser.parse_args(argv, namespace=args)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    try:
        match args.command:
            case "report":
                report(parser, args)
            case "clean":
                clean(args)
            case _:
                raise NotImplementedError(f"unrecognized command: {args.command}")
    except SynchronizationError as err:
        logging.error(err)
        for title, error in err.failures.items():
            logging.debug("Failure details for page %r", title, exc_info=error)
        sys.exit(1)
    except (ConfluenceError, PageError, DocumentError) as err:
        logging.error(err)
        sys.exit(1)


if __name__ == "__main__":
    main()
