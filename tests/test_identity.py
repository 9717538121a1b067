"""Tests for candidate identity and fix deduplication."""

from addref.fixes import AddImportFixProvider, DeferredFix, NamespaceFix, ProjectFix, dedupe_fixes
from addref.models import ExternalBindingCandidate, SearchResult
from conftest import make_assembly_fix


class TestSearchResult:
    def test_equal_on_name_parts_and_source(self):
        a = SearchResult(name_parts=("Foo", "Bar"), source="assembly", weight=1.0)
        b = SearchResult(name_parts=("Foo", "Bar"), source="assembly", weight=0.5)
        assert a == b
        assert hash(a) == hash(b)

    def test_source_is_part_of_identity(self):
        a = SearchResult(name_parts=("Foo", "Bar"), source="assembly")
        b = SearchResult(name_parts=("Foo", "Bar"), source="package")
        assert a != b

    def test_derived_names(self):
        result = SearchResult(name_parts=("Foo", "Baz", "Bar"), source="assembly")
        assert result.symbol_name == "Bar"
        assert result.namespace_parts == ("Foo", "Baz")
        assert result.fqn == "Foo.Baz.Bar"


class TestExternalBindingCandidate:
    def test_equal_on_container_and_fqn(self):
        a = ExternalBindingCandidate("ContosoLib", ("Foo",), "Bar")
        b = ExternalBindingCandidate("ContosoLib", ("Foo",), "Bar")
        assert a == b
        assert hash(a) == hash(b)

    def test_container_name_is_case_sensitive(self):
        a = ExternalBindingCandidate("ContosoLib", ("Foo",), "Bar")
        b = ExternalBindingCandidate("contosolib", ("Foo",), "Bar")
        assert a != b

    def test_different_symbol_path(self):
        a = ExternalBindingCandidate("ContosoLib", ("Foo",), "Bar")
        b = ExternalBindingCandidate("ContosoLib", ("Foo", "Inner"), "Bar")
        assert a != b
        assert b.fqn == "Foo.Inner.Bar"


class TestDeferredFixIdentity:
    def test_same_symbol_same_container_is_equal(self, provider):
        a = make_assembly_fix(provider)
        b = make_assembly_fix(provider)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_same_symbol_different_container_is_distinct(self, provider):
        a = make_assembly_fix(provider, container="ContosoLib")
        b = make_assembly_fix(provider, container="FabrikamLib")
        assert a != b
        assert len({a, b}) == 2

    def test_different_source_is_distinct(self, provider):
        a = make_assembly_fix(provider, source="assembly")
        b = make_assembly_fix(provider, source="package")
        assert a != b

    def test_different_kinds_are_distinct(self, provider):
        result = SearchResult(name_parts=("Lib", "Helper"), source="project")
        candidate = ExternalBindingCandidate("lib", ("Lib",), "Helper")
        project_fix = DeferredFix(
            provider, result, candidate, ProjectFix("lib", "Lib"), "app/Program.cs", "app",
        )
        namespace_fix = DeferredFix(
            provider, result, candidate, NamespaceFix(), "app/Program.cs", "app",
        )
        assert project_fix != namespace_fix

    def test_not_equal_to_other_types(self, provider):
        assert make_assembly_fix(provider) != "using Foo;"

    def test_fixes_from_separate_providers_collapse(self):
        # Identity does not depend on which provider instance built the fix
        a = make_assembly_fix(AddImportFixProvider())
        b = make_assembly_fix(AddImportFixProvider())
        assert a == b


class TestDedupeFixes:
    def test_keeps_first_occurrence_in_order(self, provider):
        first = make_assembly_fix(provider, container="ContosoLib")
        other = make_assembly_fix(provider, container="FabrikamLib")
        duplicate = make_assembly_fix(provider, container="ContosoLib")

        unique = dedupe_fixes([first, other, duplicate])

        assert unique == [first, other]
        assert unique[0] is first
