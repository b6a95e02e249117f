# src/trait_lineariser/pipeline/run.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import Settings
from ..domain.errors import TraitsFileError
from ..parsing.script import parse_traits
from ..services.formatters import format_localisation, format_traits
from .adapters.combiners import COMBINERS
from .aggregate import aggregate_localisation
from .linearise import linearise_localisation, linearise_traits, traits_localisation_keys
from .ports import FileLister, PairCombiner, Reporter, TextReader, TextWriter

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunSummary:
    personalities: int
    backgrounds: int
    composites: int
    localisation_entries: int
    orphans: Tuple[str, ...]


def build_combiner(settings: Settings) -> PairCombiner:
    return COMBINERS[settings.combine](separator=settings.separator, template=settings.name_template)


def run_lineariser(
    settings: Settings,
    *,
    reader: TextReader,
    lister: FileLister,
    writer: TextWriter,
    reporter: Reporter,
    combiner: Optional[PairCombiner] = None,
) -> RunSummary:
    """Linearise the mod's traits and write `traits.txt` and `traits.csv`.

    Raises LineariserError for the fatal conditions; nothing is written then.
    Localisation problems are reported and the run continues.
    """
    combiner = combiner or build_combiner(settings)
    traits_path = settings.traits_path

    try:
        traits_text = reader.read_text(traits_path)
    except OSError as e:
        raise TraitsFileError(traits_path, e.strerror or str(e)) from e

    doc = parse_traits(traits_text, source=traits_path)
    n_p, n_b = len(doc.personalities), len(doc.backgrounds)
    reporter.report(
        f"Found {n_p} personalities and {n_b} backgrounds, "
        f"linearising to {n_p * n_b} composite traits."
    )

    personality_keys, background_keys = traits_localisation_keys(doc)
    table = aggregate_localisation(
        settings.base_paths,
        reader=reader,
        lister=lister,
        reporter=reporter,
        max_workers=settings.max_workers,
        progress=settings.progress,
    )

    localisation = linearise_localisation(table, personality_keys, background_keys, combiner)
    if localisation.orphans:
        reporter.warn(
            "The following could not be translated:\n    " + ", ".join(localisation.orphans)
        )

    composites = linearise_traits(doc, combiner)
    writer.write_all({
        settings.output_traits_path: format_traits(composites),
        settings.output_localisation_path: format_localisation(localisation.entries),
    })
    _LOG.debug("Linearised %d composites into %s", len(composites), settings.output_dir)

    return RunSummary(
        personalities=n_p,
        backgrounds=n_b,
        composites=len(composites),
        localisation_entries=len(table),
        orphans=localisation.orphans,
    )
