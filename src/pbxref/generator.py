"""Deterministic reference generation for project object graphs.

New objects carry a temporary reference so that other objects can point at
them right away. Before the graph is persisted every temporary reference is
replaced by a digest of the object's type, its name and the names of its
ancestors, so that regenerating an unchanged project yields identical
references.

Projects, targets, groups and file references are fixed first. Build files,
proxies and dependencies borrow the permanent references of the objects they
point at, so they are visited afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import singledispatchmethod
from typing import Callable, Dict, List, Sequence, Set, Tuple

from .config import DEFAULT_SETTINGS, GeneratorSettings
from .exceptions import TemporaryReferenceError
from .graph import ObjectGraph
from .logging import get_logger, log_event
from .objects import (
    PBXBuildPhase,
    PBXBuildRule,
    PBXFileElement,
    PBXFileReference,
    PBXGroup,
    PBXObject,
    PBXProject,
    PBXTarget,
    PBXTargetDependency,
    XCConfigurationList,
)
from .reference import Reference
from .telemetry import MetricsCollector

LOGGER = get_logger("generator")

Identifiers = List[str]


@dataclass(slots=True)
class GenerationResult:
    """Outcome of one generation pass."""

    fixed: int = 0
    skipped: int = 0
    fixed_by_isa: Dict[str, int] = field(default_factory=dict)
    duration: float = 0.0

    @property
    def changed(self) -> bool:
        return self.fixed > 0


@dataclass(slots=True)
class _Pass:
    """State of a single generation pass, threaded through every visit."""

    graph: ObjectGraph
    settings: GeneratorSettings
    telemetry: MetricsCollector = field(default_factory=MetricsCollector)
    reported: Set[Tuple[str, Reference | None]] = field(default_factory=set)

    def fix(self, obj: PBXObject, identifiers: Sequence[str]) -> None:
        if obj.fix_reference(identifiers, self.settings):
            self.telemetry.increment("fixed")
            self.telemetry.increment(f"fixed.{obj.isa}")
            LOGGER.debug("fixed %s %s", obj.isa, obj.reference.value)

    def skip(self, branch: str, reference: Reference | None, reason: str) -> None:
        # Groups and targets can be walked twice, report each miss once.
        if (branch, reference) in self.reported:
            return
        self.reported.add((branch, reference))
        self.telemetry.increment("skipped")
        log_event(
            LOGGER,
            "reference_skipped",
            {
                "branch": branch,
                "reference": reference,
                "reason": reason,
            },
            level=logging.WARNING,
        )

    def borrowed_value(self, branch: str, obj: PBXObject) -> str:
        """Reference value of ``obj`` used in another object's seed chain."""

        if obj.reference.temporary:
            log_event(
                LOGGER,
                "temporary_reference_borrowed",
                {"branch": branch, "isa": obj.isa, "reference": obj.reference},
                level=logging.WARNING,
            )
        return obj.reference.value

    def missing(self, branch: str) -> Callable[[Reference], None]:
        """Callback reporting handles of ``branch`` that do not resolve."""

        return lambda reference: self.skip(branch, reference, "unresolved")

    def result(self) -> GenerationResult:
        return GenerationResult(
            fixed=self.telemetry.count("fixed"),
            skipped=self.telemetry.count("skipped"),
            fixed_by_isa=self.telemetry.prefixed("fixed."),
            duration=self.telemetry.timings.get("generate", 0.0),
        )


class ReferenceGenerator:
    """Gives permanent references to the objects of a project graph.

    The generator keeps no state between or during calls. Every pass gets
    its own context, so one instance can be reused freely on independent
    graphs.
    """

    def __init__(self, settings: GeneratorSettings | None = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS

    def generate(self, graph: ObjectGraph, *, strict: bool | None = None) -> GenerationResult:
        """Generate the references of the objects of ``graph``.

        A graph without a root object is left untouched. A root reference
        that does not resolve raises :class:`~pbxref.exceptions.ObjectLookupError`
        before anything is changed.
        """

        project = graph.root_object()
        if project is None:
            LOGGER.debug("graph declares no root object, nothing to generate")
            return GenerationResult()

        context = _Pass(graph=graph, settings=self.settings)
        with context.telemetry.time("generate"):
            self._generate_project(project, context)
        result = context.result()
        log_event(
            LOGGER,
            "references_generated",
            {"project": project.name, "fixed": result.fixed, "skipped": result.skipped},
        )

        strict = self.settings.strict if strict is None else strict
        if strict:
            leftovers = graph.temporary_references()
            if leftovers:
                raise TemporaryReferenceError(reference.value for reference in leftovers)
        return result

    def _generate_project(self, project: PBXProject, context: _Pass) -> None:
        graph = context.graph
        identifiers = [project.name]

        self._generate_project_and_targets(project, identifiers, context)

        main_group = graph.main_group(project)
        if main_group is None:
            context.skip("main_group", project.main_group_reference, "unresolved")
        else:
            self._generate_file_element(main_group, identifiers, context)
        products_group = graph.products_group(project)
        if products_group is not None:
            self._generate_file_element(products_group, identifiers, context)
        elif project.products_group_reference is not None:
            context.skip("products_group", project.products_group_reference, "unresolved")

        for reference in graph.project_reference_targets(project):
            file_reference = graph.resolve(reference, PBXFileReference)
            if file_reference is None:
                context.skip("project_reference", reference, "not a file reference")
                continue
            self._generate_file_element(file_reference, identifiers, context)

        for target in graph.targets(project, context.missing("target")):
            self._generate_target_references(target, identifiers, context)

        self._generate_owned_configuration_list(project, identifiers, context)

    def _generate_project_and_targets(
        self, project: PBXProject, identifiers: Identifiers, context: _Pass
    ) -> None:
        context.fix(project, identifiers)
        for target in context.graph.targets(project, context.missing("target")):
            context.fix(target, [*identifiers, target.name])

    # -- file elements -----------------------------------------------

    @singledispatchmethod
    def _generate_file_element(
        self, element: PBXFileElement, identifiers: Identifiers, context: _Pass
    ) -> None:
        LOGGER.debug("skipping file element of kind %s", element.isa)

    @_generate_file_element.register
    def _(self, group: PBXGroup, identifiers: Identifiers, context: _Pass) -> None:
        name = group.file_name()
        if name:
            identifiers = [*identifiers, name]
        context.fix(group, identifiers)
        for child in context.graph.children(group, context.missing("group.child")):
            self._generate_file_element(child, identifiers, context)

    @_generate_file_element.register
    def _(self, file_reference: PBXFileReference, identifiers: Identifiers, context: _Pass) -> None:
        name = file_reference.file_name()
        if name:
            identifiers = [*identifiers, name]
        context.fix(file_reference, identifiers)

    # -- configurations ----------------------------------------------

    def _generate_owned_configuration_list(
        self, owner: PBXProject | PBXTarget, identifiers: Identifiers, context: _Pass
    ) -> None:
        configuration_list = context.graph.configuration_list(owner)
        if configuration_list is not None:
            self._generate_configuration_list(configuration_list, identifiers, context)
        elif owner.build_configuration_list_reference is not None:
            context.skip(
                "configuration_list", owner.build_configuration_list_reference, "unresolved"
            )

    def _generate_configuration_list(
        self, configuration_list: XCConfigurationList, identifiers: Identifiers, context: _Pass
    ) -> None:
        context.fix(configuration_list, identifiers)
        for configuration in context.graph.build_configurations(
            configuration_list, context.missing("build_configuration")
        ):
            if not configuration.reference.temporary:
                continue
            context.fix(configuration, [*identifiers, configuration.name])

    # -- targets -----------------------------------------------------

    def _generate_target_references(
        self, target: PBXTarget, identifiers: Identifiers, context: _Pass
    ) -> None:
        graph = context.graph
        identifiers = [*identifiers, target.name]

        self._generate_owned_configuration_list(target, identifiers, context)

        for build_phase in graph.build_phases(target, context.missing("build_phase")):
            self._generate_build_phase(build_phase, identifiers, context)

        for build_rule in graph.build_rules(target, context.missing("build_rule")):
            self._generate_build_rule(build_rule, identifiers, context)

        for dependency in graph.dependencies(target, context.missing("target_dependency")):
            self._generate_target_dependency(dependency, identifiers, context)

    def _generate_build_phase(
        self, build_phase: PBXBuildPhase, identifiers: Identifiers, context: _Pass
    ) -> None:
        graph = context.graph
        name = build_phase.discriminator()
        if name:
            identifiers = [*identifiers, name]
        context.fix(build_phase, identifiers)

        for reference in build_phase.file_references:
            if not reference.temporary:
                continue
            build_file = graph.build_file(reference)
            if build_file is None:
                context.skip("build_file", reference, "unresolved")
                continue

            build_file_identifiers = list(identifiers)
            wrapped = graph.wrapped_file(build_file)
            if wrapped is not None:
                build_file_identifiers.append(context.borrowed_value("build_file", wrapped))
            elif build_file.file_reference is not None:
                context.skip("build_file.file", build_file.file_reference, "unresolved")
            context.fix(build_file, build_file_identifiers)

    def _generate_build_rule(
        self, build_rule: PBXBuildRule, identifiers: Identifiers, context: _Pass
    ) -> None:
        if build_rule.name:
            identifiers = [*identifiers, build_rule.name]
        context.fix(build_rule, identifiers)

    def _generate_target_dependency(
        self, dependency: PBXTargetDependency, identifiers: Identifiers, context: _Pass
    ) -> None:
        graph = context.graph
        target_proxy = graph.target_proxy(dependency)
        if dependency.target_proxy_reference is not None and target_proxy is None:
            context.skip("target_dependency.proxy", dependency.target_proxy_reference, "unresolved")

        # The remote global id is used verbatim, never resolved.
        if (
            target_proxy is not None
            and target_proxy.reference.temporary
            and target_proxy.remote_global_id is not None
        ):
            context.fix(target_proxy, [*identifiers, target_proxy.remote_global_id.value])

        if not dependency.reference.temporary:
            return
        dependency_identifiers = list(identifiers)
        target = graph.dependency_target(dependency)
        if target is not None:
            dependency_identifiers.append(context.borrowed_value("target_dependency.target", target))
        elif dependency.target_reference is not None:
            context.skip("target_dependency.target", dependency.target_reference, "unresolved")
        if target_proxy is not None:
            dependency_identifiers.append(
                context.borrowed_value("target_dependency.proxy", target_proxy)
            )
        context.fix(dependency, dependency_identifiers)


def generate_references(
    graph: ObjectGraph, settings: GeneratorSettings | None = None, *, strict: bool | None = None
) -> GenerationResult:
    """Convenience wrapper around :meth:`ReferenceGenerator.generate`."""

    return ReferenceGenerator(settings).generate(graph, strict=strict)


__all__ = ["GenerationResult", "ReferenceGenerator", "generate_references"]
