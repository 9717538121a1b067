"""Shared fixtures and fake collaborators."""

import threading
import time

import pytest

from addref.fixes import AddImportFixProvider, AssemblyFix, DeferredFix
from addref.models import (
    Document,
    ExternalBindingCandidate,
    MetadataReference,
    Project,
    SearchResult,
    Solution,
)

PROGRAM_TEXT = "namespace App\n{\n    class Program { Bar bar; }\n}\n"


class CountingResolver:
    """Resolver returning fixed paths and counting its calls.

    With ``delay`` the call blocks, waking early if cancelled.
    """

    def __init__(self, paths=None, delay: float = 0.0):
        self.paths = paths or {}
        self.delay = delay
        self.calls = 0
        self.started = threading.Event()
        self._lock = threading.Lock()

    def resolve(self, project_id, container_name, fqn, cancellation=None):
        with self._lock:
            self.calls += 1
        self.started.set()
        if self.delay:
            if cancellation is not None:
                if cancellation.wait(self.delay):
                    cancellation.raise_if_cancelled()
            else:
                time.sleep(self.delay)
        return self.paths.get(container_name)


class FakeSearch:
    """Search service returning a preset list of results."""

    def __init__(self, results):
        self.results = results
        self.calls = 0

    def search(self, name, cancellation=None, limit=50):
        self.calls += 1
        return [
            (result, candidate) for result, candidate in self.results
            if result.symbol_name == name
        ][:limit]


def make_solution(**overrides) -> Solution:
    """Two projects: App (with Program.cs) and Lib."""
    app_project = Project(
        id="app",
        name="App",
        document_ids=("app/Program.cs",),
        declared_symbols=("App.Program",),
    )
    lib_project = Project(
        id="lib",
        name="Lib",
        document_ids=("lib/Helper.cs",),
        declared_symbols=("Lib.Utils.Helper",),
    )
    projects = overrides.get("projects", (app_project, lib_project))
    documents = overrides.get("documents", (
        Document(id="app/Program.cs", project_id="app", path="Program.cs", text=PROGRAM_TEXT),
        Document(id="lib/Helper.cs", project_id="lib", path="Helper.cs", text="namespace Lib.Utils\n{\n}\n"),
    ))
    return Solution(projects=projects, documents=documents)


def make_assembly_fix(provider, container="ContosoLib", name_parts=("Foo", "Bar"), source="assembly"):
    return DeferredFix(
        provider,
        SearchResult(name_parts=name_parts, source=source),
        ExternalBindingCandidate(container, name_parts[:-1], name_parts[-1]),
        AssemblyFix(),
        document_id="app/Program.cs",
        project_id="app",
    )


@pytest.fixture
def solution():
    return make_solution()


@pytest.fixture
def resolver():
    return CountingResolver({"ContosoLib": "/refs/ContosoLib.dll"})


@pytest.fixture
def provider(resolver):
    return AddImportFixProvider(resolver=resolver)


@pytest.fixture
def contoso_reference():
    return MetadataReference(path="/refs/ContosoLib.dll")
