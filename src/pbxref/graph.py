"""In-memory object graph consumed by the reference generator."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Type, TypeVar

from .exceptions import ObjectLookupError
from .objects import (
    PBXBuildFile,
    PBXBuildPhase,
    PBXBuildRule,
    PBXContainerItemProxy,
    PBXFileElement,
    PBXGroup,
    PBXObject,
    PBXProject,
    PBXTarget,
    PBXTargetDependency,
    XCBuildConfiguration,
    XCConfigurationList,
)
from .reference import Reference

T = TypeVar("T", bound=PBXObject)
OnMissing = Optional[Callable[[Reference], None]]


class ObjectGraph:
    """Owns every object of a project and resolves references to them.

    Objects are keyed by their :class:`Reference` instance, so fixing a
    reference never requires re-keying the storage.
    """

    def __init__(
        self,
        root_object_reference: Reference | None = None,
        *,
        archive_version: str = "1",
        object_version: str = "46",
    ) -> None:
        self._objects: Dict[Reference, PBXObject] = {}
        self.root_object_reference = root_object_reference
        self.archive_version = archive_version
        self.object_version = object_version

    # -- storage -----------------------------------------------------

    def add(self, obj: PBXObject) -> Reference:
        self._objects[obj.reference] = obj
        return obj.reference

    def add_all(self, objects: Iterable[PBXObject]) -> List[Reference]:
        return [self.add(obj) for obj in objects]

    def remove(self, reference: Reference) -> Optional[PBXObject]:
        return self._objects.pop(reference, None)

    def set_root(self, project: PBXProject) -> Reference:
        """Add ``project`` and declare it as the root object."""

        self.root_object_reference = self.add(project)
        return self.root_object_reference

    def __contains__(self, item: object) -> bool:
        if isinstance(item, PBXObject):
            return self._objects.get(item.reference) is item
        return item in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[PBXObject]:
        return iter(tuple(self._objects.values()))

    # -- lookup ------------------------------------------------------

    def resolve(self, reference: Reference | None, kind: Type[T] | None = None) -> Optional[T]:
        """Return the object behind ``reference``, or ``None``.

        ``None`` is also returned when the object is not an instance of ``kind``.
        """

        if reference is None:
            return None
        obj = self._objects.get(reference)
        if obj is None:
            return None
        if kind is not None and not isinstance(obj, kind):
            return None
        return obj  # type: ignore[return-value]

    def resolve_all(
        self,
        references: Iterable[Reference],
        kind: Type[T] | None = None,
        on_missing: OnMissing = None,
    ) -> List[T]:
        """Resolve ``references`` in order, skipping handles that do not resolve.

        ``on_missing`` is called with every skipped handle.
        """

        resolved: List[T] = []
        for reference in references:
            obj = self.resolve(reference, kind)
            if obj is not None:
                resolved.append(obj)
            elif on_missing is not None:
                on_missing(reference)
        return resolved

    def object_or_raise(self, reference: Reference, kind: Type[T] | None = None) -> T:
        obj = self.resolve(reference, kind)
        if obj is None:
            raise ObjectLookupError(reference.value)
        return obj

    def root_object(self) -> Optional[PBXProject]:
        """Return the root project.

        ``None`` when no root is declared. Raises :class:`ObjectLookupError`
        when the declared root does not resolve to a project.
        """

        if self.root_object_reference is None:
            return None
        return self.object_or_raise(self.root_object_reference, PBXProject)

    def references(self) -> Dict[str, PBXObject]:
        """Objects keyed by their current reference value."""

        return {reference.value: obj for reference, obj in self._objects.items()}

    def temporary_references(self) -> List[Reference]:
        return [reference for reference in self._objects if reference.temporary]

    # -- structural accessors ----------------------------------------

    def targets(self, project: PBXProject, on_missing: OnMissing = None) -> List[PBXTarget]:
        return self.resolve_all(project.target_references, PBXTarget, on_missing)

    def main_group(self, project: PBXProject) -> Optional[PBXGroup]:
        return self.resolve(project.main_group_reference, PBXGroup)

    def products_group(self, project: PBXProject) -> Optional[PBXGroup]:
        return self.resolve(project.products_group_reference, PBXGroup)

    def configuration_list(self, owner: PBXProject | PBXTarget) -> Optional[XCConfigurationList]:
        return self.resolve(owner.build_configuration_list_reference, XCConfigurationList)

    def project_reference_targets(self, project: PBXProject) -> List[Reference]:
        """Every reference held by the project's external project entries, in order."""

        return [
            reference
            for entry in project.project_references
            for reference in entry.values()
        ]

    def children(self, group: PBXGroup, on_missing: OnMissing = None) -> List[PBXFileElement]:
        return self.resolve_all(group.children_references, PBXFileElement, on_missing)

    def build_configurations(
        self, configuration_list: XCConfigurationList, on_missing: OnMissing = None
    ) -> List[XCBuildConfiguration]:
        return self.resolve_all(
            configuration_list.build_configuration_references, XCBuildConfiguration, on_missing
        )

    def build_phases(self, target: PBXTarget, on_missing: OnMissing = None) -> List[PBXBuildPhase]:
        return self.resolve_all(target.build_phase_references, PBXBuildPhase, on_missing)

    def build_rules(self, target: PBXTarget, on_missing: OnMissing = None) -> List[PBXBuildRule]:
        return self.resolve_all(target.build_rule_references, PBXBuildRule, on_missing)

    def dependencies(
        self, target: PBXTarget, on_missing: OnMissing = None
    ) -> List[PBXTargetDependency]:
        return self.resolve_all(target.dependency_references, PBXTargetDependency, on_missing)

    def build_file(self, reference: Reference) -> Optional[PBXBuildFile]:
        return self.resolve(reference, PBXBuildFile)

    def wrapped_file(self, build_file: PBXBuildFile) -> Optional[PBXObject]:
        return self.resolve(build_file.file_reference)

    def dependency_target(self, dependency: PBXTargetDependency) -> Optional[PBXTarget]:
        return self.resolve(dependency.target_reference, PBXTarget)

    def target_proxy(self, dependency: PBXTargetDependency) -> Optional[PBXContainerItemProxy]:
        return self.resolve(dependency.target_proxy_reference, PBXContainerItemProxy)


__all__ = ["ObjectGraph"]
