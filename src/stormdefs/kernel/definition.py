"""Definition records and the normalizer that builds them from element trees."""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from .tree_path import lookup, unwrap_single
from .xml_tree import Node, StormdefsError

DEFINITION_ROOT_TAG = "definition"
TAG_DELIMITER = ","


class UnexpectedRootError(StormdefsError, ValueError):
    """Raised when a document's root element is not <definition>."""
    def __init__(self, root_tag: str, source: Optional[str] = None):
        self.root_tag = root_tag
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(
            f"Expected <{DEFINITION_ROOT_TAG}> root element{where}, found <{root_tag}>"
        )


class MinimalDefinition(BaseModel):
    """Identity, tooltip and tag metadata of one definition.

    Scalars stay as the source strings; None marks a missing source field.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = Field(default=None, alias="shortDescription")
    type: Optional[str] = None
    mass: Optional[str] = None
    value: Optional[str] = None
    flags: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class ExtendedDefinition(MinimalDefinition):
    """Minimal fields plus the geometry blocks, passed through untyped."""
    surfaces: Optional[List[Any]] = None
    buoyancy_surfaces: Optional[List[Any]] = Field(default=None, alias="buoyancySurfaces")
    voxels: Optional[List[Any]] = None
    voxel_min: Optional[Any] = Field(default=None, alias="voxelMin")
    voxel_max: Optional[Any] = Field(default=None, alias="voxelMax")
    voxel_phys_min: Optional[Any] = Field(default=None, alias="voxelPhysMin")
    voxel_phys_max: Optional[Any] = Field(default=None, alias="voxelPhysMax")
    bb_phys_min: Optional[Any] = Field(default=None, alias="bbPhysMin")
    bb_phys_max: Optional[Any] = Field(default=None, alias="bbPhysMax")
    compartment_sample_pos: Optional[Any] = Field(default=None, alias="compartmentSamplePos")
    constraint_pos_parent: Optional[Any] = Field(default=None, alias="constraintPosParent")
    constraint_pos_child: Optional[Any] = Field(default=None, alias="constraintPosChild")


FieldKind = Literal["scalar", "tags", "sequence", "single"]


@dataclass(frozen=True)
class FieldRule:
    """How one output field is read from the element tree."""
    alias: str  # JSON key of the output field
    path: str  # Dotted path below the <definition> element
    kind: FieldKind = "scalar"


@dataclass(frozen=True)
class DefinitionSchema:
    """A named record shape: the model to build and the rules that fill it."""
    name: str
    model: Type[MinimalDefinition]
    rules: Tuple[FieldRule, ...]

    @property
    def aliases(self) -> List[str]:
        return [rule.alias for rule in self.rules]


MINIMAL_RULES: Tuple[FieldRule, ...] = (
    FieldRule("name", "@name"),
    FieldRule("description", "tooltip_properties.@description"),
    FieldRule("shortDescription", "tooltip_properties.@short_description"),
    FieldRule("type", "@type"),
    FieldRule("mass", "@mass"),
    FieldRule("value", "@value"),
    FieldRule("flags", "@flags"),
    FieldRule("tags", "@tags", "tags"),
)

GEOMETRY_RULES: Tuple[FieldRule, ...] = (
    FieldRule("surfaces", "surfaces.surface", "sequence"),
    FieldRule("buoyancySurfaces", "buoyancy_surfaces.surface", "sequence"),
    FieldRule("voxels", "voxels.voxel", "sequence"),
    FieldRule("voxelMin", "voxel_min", "single"),
    FieldRule("voxelMax", "voxel_max", "single"),
    FieldRule("voxelPhysMin", "voxel_physics_min", "single"),
    FieldRule("voxelPhysMax", "voxel_physics_max", "single"),
    FieldRule("bbPhysMin", "bb_physics_min", "single"),
    FieldRule("bbPhysMax", "bb_physics_max", "single"),
    FieldRule("compartmentSamplePos", "compartment_sample_pos", "single"),
    FieldRule("constraintPosParent", "constraint_pos_parent", "single"),
    FieldRule("constraintPosChild", "constraint_pos_child", "single"),
)

MINIMAL_SCHEMA = DefinitionSchema("minimal", MinimalDefinition, MINIMAL_RULES)
EXTENDED_SCHEMA = DefinitionSchema("extended", ExtendedDefinition, MINIMAL_RULES + GEOMETRY_RULES)

# Schema applied to every file of a run unless another is chosen.
DEFAULT_SCHEMA = EXTENDED_SCHEMA

SCHEMAS: Dict[str, DefinitionSchema] = {
    MINIMAL_SCHEMA.name: MINIMAL_SCHEMA,
    EXTENDED_SCHEMA.name: EXTENDED_SCHEMA,
}


def split_tags(raw: Node) -> List[str]:
    """Split a delimited tag string literally.

    No trimming and no dropping of empty segments: "a,,b" -> ["a", "", "b"].
    A missing, empty or non-string source yields [].
    """
    if not isinstance(raw, str) or raw == "":
        return []
    return raw.split(TAG_DELIMITER)


def _scalar(node: Node) -> Optional[str]:
    node = unwrap_single(node)
    return node if isinstance(node, str) else None


def _sequence(node: Node) -> Optional[List[Any]]:
    if node is None:
        return None
    return node if isinstance(node, list) else [node]


def extract_field(tree: Node, rule: FieldRule) -> Any:
    """Read one field from the tree according to its rule. Never raises."""
    node = lookup(tree, rule.path)
    if rule.kind == "tags":
        return split_tags(unwrap_single(node))
    if rule.kind == "sequence":
        return _sequence(node)
    if rule.kind == "single":
        return unwrap_single(node)
    return _scalar(node)


def normalize_definition(
    tree: Dict[str, Any],
    schema: DefinitionSchema = DEFAULT_SCHEMA
) -> MinimalDefinition:
    """Build a definition record from the element tree of one <definition>.

    Missing paths degrade to None (or [] for tags); nothing here raises on
    absent data.
    """
    values = {rule.alias: extract_field(tree, rule) for rule in schema.rules}
    return schema.model.model_validate(values)
