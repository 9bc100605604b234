from dataclasses import replace
from typing import Dict, Iterable, Optional

from typeschema.base.type_oracle import DeclKind, Declaration
from typeschema.core.parser import TypeParser, is_bare_name
from typeschema.core.type_nodes import (
    ArrayOf,
    ComponentRef,
    Function,
    NodeKind,
    ObjectShape,
    Opaque,
    Param,
    Property,
    TypeNode,
    Union,
)


class PropsExpander:
    """Inlines the props type of component-shaped types from local declarations.

    Only interfaces and type aliases declared in the module itself are
    consulted. Names that cannot be resolved are left as they are, and a name
    that is met again while it is still being expanded becomes an Opaque
    placeholder so that self-referential props terminate.
    """

    def __init__(self, declarations: Iterable[Declaration], parser: Optional[TypeParser] = None):
        self.parser = parser or TypeParser()
        self.local_types: Dict[str, Declaration] = {}
        for decl in declarations:
            if decl.kind in (DeclKind.INTERFACE, DeclKind.TYPE_ALIAS) and decl.names:
                self.local_types.setdefault(decl.names[0], decl)
        self._expanding = set()

    def expand(self, text: str) -> TypeNode:
        return self._expand_components(self.parser.parse(text))

    def resolve(self, name: str) -> Optional[TypeNode]:
        decl = self.local_types.get(name)
        if decl is None:
            return None
        if name in self._expanding:
            return Opaque(text=name, raw=name)
        self._expanding.add(name)
        try:
            if decl.kind == DeclKind.INTERFACE:
                return self._interface_shape(decl)
            return self._resolve_nested(self.parser.parse(decl.value_text or "unknown"))
        finally:
            self._expanding.discard(name)

    def _interface_shape(self, decl: Declaration) -> ObjectShape:
        properties: Dict[str, Property] = {}
        additional = None
        for parent in decl.extends:
            inherited = self.resolve(parent)
            if isinstance(inherited, ObjectShape):
                for prop in inherited.properties:
                    properties[prop.name] = prop
                additional = inherited.additional or additional
        for member in decl.members:
            node = self._resolve_nested(self.parser.parse(member.type_text))
            properties[member.name] = Property(name=member.name, type=node, optional=member.optional)
        text = "{ " + "; ".join(
            f"{m.name}{'?' if m.optional else ''}: {m.type_text}" for m in decl.members
        ) + " }"
        return ObjectShape(text=text, properties=tuple(properties.values()), additional=additional)

    def _expand_components(self, node: TypeNode) -> TypeNode:
        if node.kind == NodeKind.COMPONENT:
            props = node.props
            if props.kind == NodeKind.OPAQUE and is_bare_name(props.raw):
                resolved = self.resolve(props.raw.strip())
                if resolved is None:
                    return node
                return replace(node, props=resolved)
            return replace(node, props=self._resolve_nested(props))
        return self._map_children(node, self._expand_components)

    def _resolve_nested(self, node: TypeNode) -> TypeNode:
        if node.kind == NodeKind.OPAQUE and is_bare_name(node.raw):
            resolved = self.resolve(node.raw.strip())
            if resolved is None:
                return node
            return resolved.as_nullable() if node.nullable else resolved
        if node.kind == NodeKind.COMPONENT:
            return self._expand_components(node)
        return self._map_children(node, self._resolve_nested)

    @staticmethod
    def _map_children(node: TypeNode, fn) -> TypeNode:
        if isinstance(node, ArrayOf):
            return replace(node, element=fn(node.element))
        if isinstance(node, ObjectShape):
            return replace(
                node,
                properties=tuple(replace(p, type=fn(p.type)) for p in node.properties),
                additional=fn(node.additional) if node.additional is not None else None,
            )
        if isinstance(node, Union):
            return replace(node, members=tuple(fn(m) for m in node.members))
        if isinstance(node, Function):
            return replace(
                node,
                params=tuple(Param(name=p.name, type=fn(p.type)) for p in node.params),
                returns=fn(node.returns),
            )
        return node
