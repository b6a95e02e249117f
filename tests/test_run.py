"""End-to-end runs against an in-memory and an on-disk mod."""

import os

import pytest

from conftest import LOCALISATION_TEXT, TRAITS_TEXT, MemoryLister, MemoryReader, MemoryWriter, loc_dir, loc_path
from trait_lineariser.config import Settings
from trait_lineariser.domain.errors import (
    AlreadyLinearisedError,
    NothingToLineariseError,
    OutputEncodingError,
    TraitsFileError,
)
from trait_lineariser.parsing import GENERATION_MARKER, ParseError, parse_localisation, parse_traits_structure
from trait_lineariser.pipeline.adapters.filesystem import (
    FileSystemLister,
    FileSystemReader,
    FileSystemWriter,
)
from trait_lineariser.pipeline.adapters.combiners import SummingCombiner
from trait_lineariser.pipeline.run import run_lineariser

TRAITS = os.path.join("mod", "common", "traits.txt")


def _memory_run(traits, reporter, settings=None, extra_files=None, extra_dirs=None):
    files = {TRAITS: traits, loc_path("mod", "00_traits.csv"): LOCALISATION_TEXT}
    files.update(extra_files or {})
    dirs = {loc_dir("mod"): ["00_traits.csv"]}
    dirs.update(extra_dirs or {})
    writer = MemoryWriter()
    summary = run_lineariser(
        settings or Settings(mod_path="mod", output_dir="out", progress=False),
        reader=MemoryReader(files),
        lister=MemoryLister(dirs),
        writer=writer,
        reporter=reporter,
    )
    return summary, writer


class TestRun:
    def test_writes_both_outputs(self, reporter):
        summary, writer = _memory_run(TRAITS_TEXT, reporter)

        assert set(writer.written) == {
            os.path.join("out", "traits.txt"),
            os.path.join("out", "traits.csv"),
        }
        assert (summary.personalities, summary.backgrounds, summary.composites) == (3, 2, 6)
        assert summary.localisation_entries == 4
        assert summary.orphans == ("cautious",)

    def test_outputs_agree_on_composite_keys(self, reporter):
        _, writer = _memory_run(TRAITS_TEXT, reporter)

        traits = parse_traits_structure(writer.written[os.path.join("out", "traits.txt")])
        table = parse_localisation(writer.written[os.path.join("out", "traits.csv")])

        assert [t.name for t in traits.personalities] == list(table)

    def test_reports_counts_and_orphans(self, reporter):
        _memory_run(TRAITS_TEXT, reporter)

        assert reporter.infos[0] == (
            "Found 3 personalities and 2 backgrounds, linearising to 6 composite traits."
        )
        assert reporter.warnings == ["The following could not be translated:\n    cautious"]

    def test_extra_paths_fill_in_missing_translations(self, reporter):
        settings = Settings(mod_path="mod", extra_paths=("game",), output_dir="out", progress=False)

        summary, writer = _memory_run(
            TRAITS_TEXT,
            reporter,
            settings=settings,
            extra_files={loc_path("game", "text.csv"): "cautious;Cautious\nreckless;Rash\n"},
            extra_dirs={loc_dir("game"): ["text.csv"]},
        )

        table = parse_localisation(writer.written[os.path.join("out", "traits.csv")])
        assert summary.orphans == ()
        assert table["cautious_academy"] == "Cautious Academy Graduate"
        # the mod's own translation takes precedence
        assert table["reckless_academy"] == "Reckless Academy Graduate"


class TestFatal:
    def test_already_linearised(self, reporter):
        with pytest.raises(AlreadyLinearisedError):
            _memory_run(GENERATION_MARKER + "\n" + TRAITS_TEXT, reporter)

    def test_nothing_to_linearise(self, reporter):
        with pytest.raises(NothingToLineariseError):
            _memory_run("personality = { a = {} } background = { b = {} c = {} }", reporter)

    def test_malformed_traits(self, reporter):
        with pytest.raises(ParseError) as exc:
            _memory_run("personality = { a = ", reporter)

        assert exc.value.source == TRAITS

    def test_missing_traits_file(self, reporter):
        with pytest.raises(TraitsFileError):
            run_lineariser(
                Settings(mod_path="elsewhere", progress=False),
                reader=MemoryReader({}),
                lister=MemoryLister({}),
                writer=MemoryWriter(),
                reporter=reporter,
            )


def test_on_disk(make_mod, tmp_path, reporter):
    mod = make_mod(localisation={"00_traits.csv": LOCALISATION_TEXT, "zz_broken.csv": "oops\n"})
    out = tmp_path / "out"

    summary = run_lineariser(
        Settings(mod_path=str(mod), output_dir=str(out), progress=False),
        reader=FileSystemReader(reporter=reporter),
        lister=FileSystemLister(),
        writer=FileSystemWriter(),
        reporter=reporter,
    )

    assert summary.composites == 6
    csv_text = (out / "traits.csv").read_bytes().decode("cp1252")
    assert csv_text.startswith(GENERATION_MARKER + "\n")
    assert "no_personality_academy;No Personality Academy Graduate;" in csv_text
    assert (out / "traits.txt").read_bytes().decode("cp1252").count(" = {") == 1 + 6 + 1
    assert any("zz_broken.csv" in w for w in reporter.warnings)


def test_unencodable_output_writes_nothing(make_mod, tmp_path, reporter):
    mod = make_mod(localisation={"00_traits.csv": LOCALISATION_TEXT})
    out = tmp_path / "out"

    with pytest.raises(OutputEncodingError) as exc:
        run_lineariser(
            Settings(mod_path=str(mod), output_dir=str(out), progress=False),
            reader=FileSystemReader(reporter=reporter),
            lister=FileSystemLister(),
            writer=FileSystemWriter(),
            reporter=reporter,
            # only the localisation text carries the arrow
            combiner=SummingCombiner(template="{personality} → {background}"),
        )

    assert exc.value.path == str(out / "traits.csv")
    assert not (out / "traits.txt").exists()
    assert not (out / "traits.csv").exists()
