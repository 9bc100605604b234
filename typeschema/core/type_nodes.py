from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Optional, Tuple


class NodeKind(str, Enum):
    PRIMITIVE = "primitive"
    LITERAL = "literal"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"
    FUNCTION = "function"
    COMPONENT = "component"
    OPAQUE = "opaque"


@dataclass(frozen=True, kw_only=True)
class TypeNode:
    """Base of the parsed type variants.

    ``text`` is the trimmed type text the node was parsed from. ``nullable`` is
    set when a union with ``null``/``undefined`` was collapsed onto this node.
    """

    kind: ClassVar[NodeKind]
    text: str
    nullable: bool = False

    def as_nullable(self) -> "TypeNode":
        return replace(self, nullable=True)


@dataclass(frozen=True, kw_only=True)
class Primitive(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.PRIMITIVE
    name: str


@dataclass(frozen=True, kw_only=True)
class Literal(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.LITERAL
    raw: str


@dataclass(frozen=True, kw_only=True)
class ArrayOf(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.ARRAY
    element: TypeNode


@dataclass(frozen=True)
class Property:
    name: str
    type: TypeNode
    optional: bool = False


@dataclass(frozen=True, kw_only=True)
class ObjectShape(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.OBJECT
    properties: Tuple[Property, ...] = ()
    # value type of an index signature such as [key: string]: T
    additional: Optional[TypeNode] = None


@dataclass(frozen=True, kw_only=True)
class Union(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.UNION
    members: Tuple[TypeNode, ...]

    def __post_init__(self):
        if len(self.members) < 2:
            raise ValueError("a union needs at least two members")


@dataclass(frozen=True)
class Param:
    name: str
    type: TypeNode


@dataclass(frozen=True, kw_only=True)
class Function(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION
    params: Tuple[Param, ...] = ()
    returns: TypeNode


@dataclass(frozen=True, kw_only=True)
class ComponentRef(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.COMPONENT
    props: TypeNode


@dataclass(frozen=True, kw_only=True)
class Opaque(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.OPAQUE
    raw: str
