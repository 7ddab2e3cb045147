from __future__ import annotations

import pytest

from pbxref.exceptions import ObjectLookupError
from pbxref.graph import ObjectGraph
from pbxref.objects import (
    PBXBuildFile,
    PBXFileReference,
    PBXGroup,
    PBXNativeTarget,
    PBXProject,
)
from pbxref.reference import Reference

from _graph_factory import build_app_project


def test_add_and_resolve() -> None:
    graph = ObjectGraph()
    source = PBXFileReference(path="main.swift")
    reference = graph.add(source)
    assert reference is source.reference
    assert graph.resolve(reference) is source
    assert graph.resolve(reference, PBXFileReference) is source
    assert graph.resolve(reference, PBXGroup) is None
    assert graph.resolve(None) is None
    assert source in graph
    assert reference in graph
    assert len(graph) == 1


def test_resolution_survives_fix() -> None:
    graph = ObjectGraph()
    source = PBXFileReference(path="main.swift")
    reference = graph.add(source)
    reference.fix("PERMANENT")
    assert graph.resolve(reference) is source
    assert graph.references() == {"PERMANENT": source}


def test_remove() -> None:
    graph = ObjectGraph()
    source = PBXFileReference(path="main.swift")
    reference = graph.add(source)
    assert graph.remove(reference) is source
    assert graph.resolve(reference) is None
    assert graph.remove(reference) is None


def test_resolve_all_skips_dangling_handles() -> None:
    graph = ObjectGraph()
    first = PBXFileReference(path="a.swift")
    second = PBXFileReference(path="b.swift")
    graph.add_all([first, second])
    resolved = graph.resolve_all([first.reference, Reference.new(), second.reference])
    assert resolved == [first, second]


def test_root_object_absent() -> None:
    graph = ObjectGraph()
    graph.add(PBXGroup())
    assert graph.root_object() is None


def test_root_object_dangling_raises() -> None:
    graph = ObjectGraph(root_object_reference=Reference.new())
    with pytest.raises(ObjectLookupError) as excinfo:
        graph.root_object()
    assert excinfo.value.reference_value == graph.root_object_reference.value


def test_root_object_of_wrong_kind_raises() -> None:
    graph = ObjectGraph()
    group = PBXGroup()
    graph.root_object_reference = graph.add(group)
    with pytest.raises(ObjectLookupError):
        graph.root_object()


def test_structural_accessors() -> None:
    sample = build_app_project()
    graph, project = sample.graph, sample.project

    assert graph.root_object() is project
    assert [t.name for t in graph.targets(project)] == ["App", "Kit"]
    assert graph.main_group(project) is sample["main_group"]
    assert graph.products_group(project) is sample["products"]
    assert graph.configuration_list(project) is not None
    assert graph.children(sample["sources"]) == [sample["main_swift"], sample["util_swift"]]

    app_target = sample["app_target"]
    assert [p.discriminator() for p in graph.build_phases(app_target)] == ["Sources", "Frameworks"]
    assert graph.build_rules(app_target) == []
    [dependency] = graph.dependencies(app_target)
    assert graph.dependency_target(dependency) is sample["kit_target"]
    assert graph.target_proxy(dependency) is sample["proxy"]

    build_file = graph.build_file(sample["main_build_file"].reference)
    assert isinstance(build_file, PBXBuildFile)
    assert graph.wrapped_file(build_file) is sample["main_swift"]

    configurations = graph.build_configurations(graph.configuration_list(app_target))
    assert [c.name for c in configurations] == ["Debug", "Release"]


def test_project_reference_targets_flattens_entries() -> None:
    graph = ObjectGraph()
    group = PBXGroup(name="Products")
    remote = PBXFileReference(path="Other.xcodeproj")
    project = PBXProject(
        name="App",
        project_references=[{"ProductGroup": graph.add(group), "ProjectRef": graph.add(remote)}],
    )
    graph.set_root(project)
    assert graph.project_reference_targets(project) == [group.reference, remote.reference]


def test_temporary_references() -> None:
    graph = ObjectGraph()
    target = PBXNativeTarget(name="App")
    fixed = PBXNativeTarget(name="Fixed", reference=Reference("FIXED"))
    graph.add_all([target, fixed])
    assert graph.temporary_references() == [target.reference]


def test_resolve_all_reports_missing_handles() -> None:
    graph = ObjectGraph()
    present = PBXFileReference(path="a.swift")
    graph.add(present)
    dangling = Reference.new()
    wrong_kind = PBXGroup()
    graph.add(wrong_kind)
    missing = []

    resolved = graph.resolve_all(
        [dangling, present.reference, wrong_kind.reference], PBXFileReference, missing.append
    )

    assert resolved == [present]
    assert missing == [dangling, wrong_kind.reference]


def test_structural_accessor_forwards_on_missing() -> None:
    sample = build_app_project()
    dangling = Reference.new()
    sample["app_target"].build_phase_references.append(dangling)
    missing = []
    phases = sample.graph.build_phases(sample["app_target"], missing.append)
    assert len(phases) == 2
    assert missing == [dangling]
