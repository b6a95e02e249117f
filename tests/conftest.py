"""Shared pytest fixtures for the lineariser tests."""

import os
import sys
import time
from pathlib import Path

import pytest

# Ensure the package is importable without an install
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from trait_lineariser.pipeline.adapters.reporters import RecordingReporter  # noqa: E402

TRAITS_TEXT = """\
# Leader traits
personality = {
\tno_personality = {
\t}
\treckless = {
\t\tattack = 1
\t\tmorale = -0.1
\t}
\tcautious = {
\t\tdefence = 1
\t\treliability = 0.05
\t}
}
background = {
\tno_background = {
\t}
\tacademy = {
\t\torganisation = 0.1
\t\tattack = 1
\t}
}
"""

LOCALISATION_TEXT = """\
#CODE;ENGLISH;FRENCH;GERMAN;;SPANISH;;;;;;;;;x
no_personality;No Personality;Sans personnalité;;;;;;;;;;;;x
reckless;Reckless;Téméraire;;;;;;;;;;;;x
no_background;No Background;;;;;;;;;;;;;x
academy;Academy Graduate;;;;;;;;;;;;;x
"""


class MemoryReader:
    """In-memory TextReader. `delays` slows chosen paths down to shuffle completion order."""

    def __init__(self, files, delays=None):
        self.files = dict(files)
        self.delays = dict(delays or {})

    def read_text(self, path):
        time.sleep(self.delays.get(path, 0))
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", path)


class MemoryLister:
    def __init__(self, directories):
        self.directories = {k: list(v) for k, v in directories.items()}

    def list_files(self, directory):
        try:
            return list(self.directories[directory])
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", directory)


class MemoryWriter:
    def __init__(self):
        self.written = {}

    def write_text(self, path, text):
        self.written[path] = text

    def write_all(self, files):
        self.written.update(files)


def loc_path(base, name):
    return os.path.join(base, "localisation", name)


def loc_dir(base):
    return os.path.join(base, "localisation")


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def traits_text():
    return TRAITS_TEXT


@pytest.fixture
def localisation_text():
    return LOCALISATION_TEXT


@pytest.fixture
def make_mod(tmp_path):
    """Write a mod tree on disk: common/traits.txt plus localisation files, in cp1252."""

    def _make(name="mod", traits=TRAITS_TEXT, localisation=None):
        base = tmp_path / name
        (base / "localisation").mkdir(parents=True)
        if traits is not None:
            (base / "common").mkdir()
            (base / "common" / "traits.txt").write_bytes(traits.encode("cp1252"))
        for filename, content in (localisation or {}).items():
            data = content if isinstance(content, bytes) else content.encode("cp1252")
            (base / "localisation" / filename).write_bytes(data)
        return base

    return _make
