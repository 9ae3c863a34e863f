from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import requests

from .config import load_config
from .configuration import ConfigurationError, create_configuration
from .logging import configure_logging
from .mediawiki import MediaWikiClient, MediaWikiError
from .render import render_configuration


log = logging.getLogger("mwconf.fetch_configuration")


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = _ArgumentParser(
        add_help=False,
        description="Fetch a MediaWiki site's siteinfo and emit a parser configuration.",
    )
    parser.add_argument("host_name", nargs="*", help="Wiki host name, e.g. en.wikipedia.org")
    parser.add_argument("-o", "--output", help="Write the generated code to this file")
    args = parser.parse_args(argv)
    if len(args.host_name) != 1:
        raise UsageError("expected exactly one host name")
    args.host_name = args.host_name[0]
    return args


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    try:
        args = _parse_args(argv)
    except UsageError as exc:
        log.debug("usage error: %s", exc)
        return _fail("Invalid use.")

    try:
        cfg = load_config()
    except RuntimeError as exc:
        return _fail(str(exc))
    configure_logging(cfg.log_level)

    with requests.Session() as session:
        client = MediaWikiClient(args.host_name, cfg.user_agent, session, api_path=cfg.api_path)
        try:
            metadata = client.fetch_siteinfo()
        except MediaWikiError as exc:
            return _fail(str(exc))

    try:
        configuration = create_configuration(metadata)
    except ConfigurationError as exc:
        return _fail(str(exc))

    code = render_configuration(configuration)
    if args.output:
        path = Path(args.output)
        path.write_text(code, encoding="utf-8")
        log.info("wrote %s", path)
    else:
        sys.stdout.write(code)
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
