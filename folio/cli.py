"""Command line entry point: ``folio build``, ``folio check``, ``folio serve``."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from folio import consts
from folio.config import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE, ConfigError, load_config
from folio.log import setup_logging
from folio.services.builder import BuildError, build_site
from folio.services.integrity import check_site, load_collections
from folio.services.linkcheck import check_links, external_links

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="folio", description="Build and preview the personal site.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="path to the YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="render the site into the output directory")
    build.add_argument("--out", help="override the configured output directory")

    check = sub.add_parser("check", help="run the content and configuration checks")
    check.add_argument("--online", action="store_true", help="also probe external links")

    serve = sub.add_parser("serve", help="run the preview server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=4321)
    return parser


def _build(config, args) -> int:
    if args.out:
        config = config.model_copy(update={"out_dir": Path(args.out).resolve()})
    try:
        report = build_site(config)
    except BuildError as exc:
        for issue in exc.issues:
            print(f"error [{issue.code}] {issue.source or '-'}: {issue.message}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for issue in report.warnings:
        print(f"warning [{issue.code}] {issue.source or '-'}: {issue.message}", file=sys.stderr)
    print(f"Built {len(report.pages)} pages ({report.files} files) into {report.out_dir}")
    print(f"digest {report.digest}")
    return 0


def _check(config, args) -> int:
    collections, load_issues = load_collections(config)
    issues = load_issues + check_site(config, consts, collections).issues
    failed = False
    for issue in issues:
        print(f"{issue.level} [{issue.code}] {issue.source or '-'}: {issue.message}")
        failed = failed or issue.level == "error"

    if args.online:
        urls = external_links(consts.SOCIALS, collections.get("projects", []))
        for result in asyncio.run(check_links(urls)):
            state = "ok" if result.ok else "broken"
            detail = result.status if result.status is not None else result.error
            print(f"{state} {result.url} ({detail})")
            failed = failed or not result.ok

    if not failed:
        print("All checks passed.")
    return 1 if failed else 0


def _serve(args) -> int:
    import uvicorn

    os.environ[CONFIG_ENV_VAR] = str(Path(args.config).resolve())
    uvicorn.run("folio.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    if args.command == "serve":
        return _serve(args)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.command == "build":
        return _build(config, args)
    return _check(config, args)


if __name__ == "__main__":
    sys.exit(main())
