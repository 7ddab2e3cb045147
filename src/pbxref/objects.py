"""Object kinds of a project description graph.

Objects never hold each other directly. Every relation is a
:class:`~pbxref.reference.Reference` handle resolved through
:class:`~pbxref.graph.ObjectGraph`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from .config import GeneratorSettings
from .identifiers import compose
from .reference import Reference


@dataclass(slots=True, eq=False)
class PBXObject:
    """Base class for all graph objects."""

    reference: Reference = field(default_factory=Reference.new)

    @property
    def isa(self) -> str:
        """Type name, always the first element of the seed chain."""

        return type(self).__name__

    def fix_reference(
        self, identifiers: Sequence[str], settings: GeneratorSettings | None = None
    ) -> bool:
        """Give the object a permanent reference derived from ``identifiers``.

        Does nothing when the reference is already permanent. Returns whether
        the reference changed.
        """

        if not self.reference.temporary:
            return False
        value = compose([self.isa, *identifiers], settings)
        return self.reference.fix(value)


# ------------------------------------------------------------------
# File elements
# ------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class PBXFileElement(PBXObject):
    name: Optional[str] = None
    path: Optional[str] = None
    source_tree: str = "<group>"

    def file_name(self) -> Optional[str]:
        """Name of the element, falling back to the last component of its path."""

        if self.name:
            return self.name
        if self.path:
            return PurePosixPath(self.path).name or None
        return None


@dataclass(slots=True, eq=False)
class PBXFileReference(PBXFileElement):
    last_known_file_type: Optional[str] = None
    explicit_file_type: Optional[str] = None
    include_in_index: Optional[bool] = None


@dataclass(slots=True, eq=False)
class PBXGroup(PBXFileElement):
    children_references: List[Reference] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class PBXVariantGroup(PBXGroup):
    """Localized variants of a single resource."""


@dataclass(slots=True, eq=False)
class XCVersionGroup(PBXGroup):
    """Versioned resource such as a Core Data model."""

    current_version_reference: Optional[Reference] = None
    version_group_type: Optional[str] = None


# ------------------------------------------------------------------
# Configurations
# ------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class XCBuildConfiguration(PBXObject):
    name: str = ""
    build_settings: Dict[str, Any] = field(default_factory=dict)
    base_configuration_reference: Optional[Reference] = None


@dataclass(slots=True, eq=False)
class XCConfigurationList(PBXObject):
    build_configuration_references: List[Reference] = field(default_factory=list)
    default_configuration_name: Optional[str] = None
    default_configuration_is_visible: bool = False


# ------------------------------------------------------------------
# Build phases
# ------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class PBXBuildFile(PBXObject):
    file_reference: Optional[Reference] = None
    settings: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, eq=False)
class PBXBuildPhase(PBXObject):
    file_references: List[Reference] = field(default_factory=list)
    build_action_mask: int = 2147483647
    run_only_for_deployment_postprocessing: bool = False

    default_name: ClassVar[Optional[str]] = None

    def discriminator(self) -> Optional[str]:
        return self.default_name


@dataclass(slots=True, eq=False)
class PBXSourcesBuildPhase(PBXBuildPhase):
    default_name: ClassVar[Optional[str]] = "Sources"


@dataclass(slots=True, eq=False)
class PBXFrameworksBuildPhase(PBXBuildPhase):
    default_name: ClassVar[Optional[str]] = "Frameworks"


@dataclass(slots=True, eq=False)
class PBXResourcesBuildPhase(PBXBuildPhase):
    default_name: ClassVar[Optional[str]] = "Resources"


@dataclass(slots=True, eq=False)
class PBXHeadersBuildPhase(PBXBuildPhase):
    default_name: ClassVar[Optional[str]] = "Headers"


@dataclass(slots=True, eq=False)
class PBXRezBuildPhase(PBXBuildPhase):
    default_name: ClassVar[Optional[str]] = "Rez"


@dataclass(slots=True, eq=False)
class PBXCopyFilesBuildPhase(PBXBuildPhase):
    name: Optional[str] = None
    dst_path: str = ""
    dst_subfolder_spec: int = 16

    default_name: ClassVar[Optional[str]] = "CopyFiles"

    def discriminator(self) -> Optional[str]:
        return self.name or self.default_name


@dataclass(slots=True, eq=False)
class PBXShellScriptBuildPhase(PBXBuildPhase):
    name: Optional[str] = None
    shell_path: str = "/bin/sh"
    shell_script: str = ""
    input_paths: List[str] = field(default_factory=list)
    output_paths: List[str] = field(default_factory=list)

    default_name: ClassVar[Optional[str]] = "ShellScript"

    def discriminator(self) -> Optional[str]:
        return self.name or self.default_name


@dataclass(slots=True, eq=False)
class PBXBuildRule(PBXObject):
    name: Optional[str] = None
    compiler_spec: str = ""
    file_type: str = ""
    file_patterns: Optional[str] = None
    is_editable: bool = True
    script: Optional[str] = None


# ------------------------------------------------------------------
# Dependencies
# ------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class PBXContainerItemProxy(PBXObject):
    """Proxy to an object that may live in another project."""

    container_portal: Optional[Reference] = None
    proxy_type: int = 1
    remote_global_id: Optional[Reference] = None
    remote_info: Optional[str] = None


@dataclass(slots=True, eq=False)
class PBXTargetDependency(PBXObject):
    name: Optional[str] = None
    target_reference: Optional[Reference] = None
    target_proxy_reference: Optional[Reference] = None


# ------------------------------------------------------------------
# Targets and project
# ------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class PBXTarget(PBXObject):
    name: str = ""
    build_configuration_list_reference: Optional[Reference] = None
    build_phase_references: List[Reference] = field(default_factory=list)
    build_rule_references: List[Reference] = field(default_factory=list)
    dependency_references: List[Reference] = field(default_factory=list)
    product_name: Optional[str] = None
    product_reference: Optional[Reference] = None


@dataclass(slots=True, eq=False)
class PBXNativeTarget(PBXTarget):
    product_type: Optional[str] = None


@dataclass(slots=True, eq=False)
class PBXAggregateTarget(PBXTarget):
    pass


@dataclass(slots=True, eq=False)
class PBXLegacyTarget(PBXTarget):
    build_tool_path: str = "/usr/bin/make"
    build_arguments_string: str = "$(ACTION)"


@dataclass(slots=True, eq=False)
class PBXProject(PBXObject):
    name: str = ""
    main_group_reference: Optional[Reference] = None
    products_group_reference: Optional[Reference] = None
    build_configuration_list_reference: Optional[Reference] = None
    target_references: List[Reference] = field(default_factory=list)
    project_references: List[Dict[str, Reference]] = field(default_factory=list)
    compatibility_version: str = "Xcode 3.2"
    development_region: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "PBXAggregateTarget",
    "PBXBuildFile",
    "PBXBuildPhase",
    "PBXBuildRule",
    "PBXContainerItemProxy",
    "PBXCopyFilesBuildPhase",
    "PBXFileElement",
    "PBXFileReference",
    "PBXFrameworksBuildPhase",
    "PBXGroup",
    "PBXHeadersBuildPhase",
    "PBXLegacyTarget",
    "PBXNativeTarget",
    "PBXObject",
    "PBXProject",
    "PBXResourcesBuildPhase",
    "PBXRezBuildPhase",
    "PBXShellScriptBuildPhase",
    "PBXSourcesBuildPhase",
    "PBXTarget",
    "PBXTargetDependency",
    "PBXVariantGroup",
    "XCBuildConfiguration",
    "XCConfigurationList",
    "XCVersionGroup",
]
