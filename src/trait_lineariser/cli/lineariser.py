from __future__ import annotations
import argparse, sys

from tqdm.contrib.logging import logging_redirect_tqdm

from trait_lineariser.config import load_settings
from trait_lineariser.domain.errors import LineariserError
from trait_lineariser.logging_config import setup_logging
from trait_lineariser.pipeline.adapters.combiners import COMBINERS
from trait_lineariser.pipeline.adapters.filesystem import (
    FileSystemLister,
    FileSystemReader,
    FileSystemWriter,
)
from trait_lineariser.pipeline.adapters.reporters import ConsoleReporter
from trait_lineariser.pipeline.run import run_lineariser

DESCRIPTION = (
    "Linearise the personalities and backgrounds that generals and admirals can have. "
    "Output consists of a `traits.txt` file containing linearised traits, and a "
    "`traits.csv` file containing localisation keys."
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="trait-lineariser", description=DESCRIPTION)
    p.add_argument("mod_path", nargs="?", default=None, metavar="PATH/TO/MOD",
                help="Base path of the mod of interest. The traits file is expected at "
                     "`common/traits.txt` and localisation files in the `localisation` "
                     "subdirectory. Defaults to the current working directory.")
    p.add_argument("-x", "--extra-localisation", action="append", default=[],
                   dest="extra_paths", metavar="another/base/path",
                help="Extra base path used only to collate localisation, e.g. the game "
                     "installation. May be repeated; earlier paths take precedence.")
    p.add_argument("-o", "--output-dir", default=None,
                help="Where to write traits.txt and traits.csv (default: current directory)")
    p.add_argument("--name-template", default=None,
                help="Display name of a composite, with {personality} and {background} placeholders")
    p.add_argument("--separator", default=None,
                help="Joins personality and background keys into the composite key")
    p.add_argument("--combine", choices=sorted(COMBINERS), default=None,
                help="sum: add numeric modifiers found on both sides; override: background wins")
    p.add_argument("--encoding", default=None, help="Encoding of game and mod files (default cp1252)")
    p.add_argument("--workers", type=int, default=None, help="Threads used to read localisation")
    p.add_argument("--no-progress", action="store_true", help="Do not draw progress bars")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    reporter = ConsoleReporter()

    try:
        settings = load_settings(
            mod_path=args.mod_path,
            extra_paths=tuple(args.extra_paths) or None,
            output_dir=args.output_dir,
            name_template=args.name_template,
            separator=args.separator,
            combine=args.combine,
            encoding=args.encoding,
            max_workers=args.workers,
            progress=False if args.no_progress else None,
        )
    except ValueError as e:
        print(f"[fatal] {e}", file=sys.stderr)
        return 2

    with logging_redirect_tqdm():
        try:
            run_lineariser(
                settings,
                reader=FileSystemReader(encoding=settings.encoding, reporter=reporter),
                lister=FileSystemLister(),
                writer=FileSystemWriter(encoding=settings.encoding),
                reporter=reporter,
            )
        except LineariserError as e:
            reporter.abort(str(e))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
