# src/trait_lineariser/pipeline/aggregate.py
"""Collect localisation from several base paths into one table.

Precedence is first occurrence wins, over base paths in the order given and,
within a base path, over `.csv` files in lexical filename order. Files are read
and parsed concurrently, but results are only folded together afterwards, in
that fixed order, so completion timing never decides which value is kept.
"""
from __future__ import annotations
import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..domain.localisation import LocalisationTable
from ..parsing.errors import ParseError
from ..parsing.localisation import parse_localisation
from .ports import FileLister, Reporter, TextReader

_LOG = logging.getLogger(__name__)

LOCALISATION_DIR = "localisation"
LOCALISATION_EXT = ".csv"


def localisation_dir(base: str) -> str:
    return os.path.join(base, LOCALISATION_DIR)


def localisation_files(base: str, *, lister: FileLister, reporter: Reporter) -> List[str]:
    """Sorted `.csv` filenames of one base path; a missing directory yields none."""
    directory = localisation_dir(base)
    try:
        names = lister.list_files(directory)
    except OSError as e:
        reporter.warn(f"Could not list localisation directory ‘{directory}’, skipping it: {e}")
        return []
    files = sorted(n for n in names if os.path.splitext(n)[1].lower() == LOCALISATION_EXT)
    reporter.report(
        f"Adding localisation from base path ‘{base}’… found {len(files)} localisation files."
    )
    return files


def parse_localisation_file(path: str, *, reader: TextReader, reporter: Reporter) -> LocalisationTable:
    """Parse one file; any failure is reported and yields an empty table."""
    try:
        text = reader.read_text(path)
    except OSError as e:
        reporter.warn(f"Reading of one localisation file failed, skipping it:\n    ‘{path}’: {e}")
        return {}
    try:
        return parse_localisation(text, source=path)
    except ParseError as e:
        reporter.warn(f"Parsing of one localisation file failed, skipping it:\n{e}")
        return {}


def merge_localisation(tables: Iterable[LocalisationTable]) -> LocalisationTable:
    merged: LocalisationTable = {}
    for table in tables:
        for key, text in table.items():
            merged.setdefault(key, text)
    return merged


def aggregate_localisation(
    base_paths: Sequence[str],
    *,
    reader: TextReader,
    lister: FileLister,
    reporter: Reporter,
    max_workers: Optional[int] = None,
    progress: bool = True,
) -> LocalisationTable:
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="localisation") as ex:
        listings: List[Tuple[str, List[str]]] = list(zip(
            base_paths,
            ex.map(lambda base: localisation_files(base, lister=lister, reporter=reporter), base_paths),
        ))

        bars = [
            tqdm(total=len(files), desc=base, unit="file", position=i, leave=True, disable=not progress)
            for i, (base, files) in enumerate(listings)
        ]
        try:
            pending: List[List[Future]] = []
            for bar, (base, files) in zip(bars, listings):
                row: List[Future] = []
                for name in files:
                    fut = ex.submit(
                        parse_localisation_file,
                        os.path.join(localisation_dir(base), name),
                        reader=reader,
                        reporter=reporter,
                    )
                    fut.add_done_callback(lambda _f, bar=bar: bar.update(1))
                    row.append(fut)
                pending.append(row)

            tables = [fut.result() for row in pending for fut in row]
        finally:
            for bar in bars:
                bar.close()

    merged = merge_localisation(tables)
    _LOG.debug("Merged %d localisation files into %d entries", len(tables), len(merged))
    reporter.report(f"Found {len(merged)} localisation entries.")
    return merged
