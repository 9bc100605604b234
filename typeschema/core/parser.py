import re
from typing import List, Optional

from typeschema.core.lexer import (
    find_top_level,
    has_top_level,
    matching_close,
    split_at_depth_zero,
    split_top_level,
)
from typeschema.core.type_nodes import (
    ArrayOf,
    ComponentRef,
    Function,
    Literal,
    ObjectShape,
    Opaque,
    Param,
    Primitive,
    Property,
    TypeNode,
    Union,
)

PRIMITIVES = {
    "string", "number", "boolean", "null", "undefined",
    "any", "unknown", "void", "never", "object", "bigint",
}
NULLISH = {"null", "undefined"}

COMPONENT_BASES = {"FC", "VFC", "FunctionComponent", "ComponentType"}
ARRAY_BASES = {"Array", "ReadonlyArray"}

_STRING_LITERAL = re.compile(r'^(?:"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\')$', re.S)
_NUMBER_LITERAL = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_GENERIC_HEAD = re.compile(r"^([A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)\s*<")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
ACCESSOR = re.compile(r"^(get|set)\s+(\S.*)$")


def is_bare_name(text: str) -> bool:
    return bool(_IDENTIFIER.match(text.strip()))


def _strip_wrapping(text: str) -> str:
    """Drop parentheses that wrap the whole text, e.g. ``(A | B)``."""
    while text.startswith("(") and matching_close(text, 0) == len(text) - 1:
        text = text[1:-1].strip()
    return text


def _generic(text: str):
    """Split ``Base<args>`` into (base, [args]) when the generic closes the text."""
    match = _GENERIC_HEAD.match(text)
    if not match:
        return None
    open_at = match.end() - 1
    close_at = matching_close(text, open_at)
    if close_at != len(text) - 1:
        return None
    args = [a.strip() for a in split_at_depth_zero(text[open_at + 1:close_at], ",")]
    return match.group(1), [a for a in args if a]


class TypeParser:
    """Turns printed TypeScript type text into a TypeNode tree."""

    def parse(self, text: str) -> TypeNode:
        text = text.strip()
        if text.startswith("readonly "):
            text = text[len("readonly "):].strip()
        inner = _strip_wrapping(text)
        if inner != text:
            return self.parse(inner)

        for step in (
            self._parse_primitive,
            self._parse_array,
            self._parse_component,
            self._parse_object,
            self._parse_union,
            self._parse_function,
        ):
            node = step(text)
            if node is not None:
                return node
        return Opaque(text=text, raw=text)

    def _parse_primitive(self, text: str) -> Optional[TypeNode]:
        if text in PRIMITIVES:
            return Primitive(text=text, name=text)
        if text in ("true", "false") or _STRING_LITERAL.match(text) or _NUMBER_LITERAL.match(text):
            return Literal(text=text, raw=text)
        return None

    def _parse_array(self, text: str) -> Optional[TypeNode]:
        if text.endswith("[]"):
            element = text[:-2].strip()
            if not element or has_top_level(element, "|") or find_top_level(element, "=>") >= 0:
                return None
            return ArrayOf(text=text, element=self.parse(element))
        generic = _generic(text)
        if generic and generic[0] in ARRAY_BASES and len(generic[1]) == 1:
            return ArrayOf(text=text, element=self.parse(generic[1][0]))
        return None

    def _parse_component(self, text: str) -> Optional[TypeNode]:
        generic = _generic(text)
        if not generic:
            return None
        base, args = generic
        if base.startswith("React."):
            base = base[len("React."):]
        if base not in COMPONENT_BASES or len(args) != 1:
            return None
        return ComponentRef(text=text, props=self.parse(args[0]))

    def _parse_object(self, text: str) -> Optional[TypeNode]:
        if not text.startswith("{") or matching_close(text, 0) != len(text) - 1:
            return None
        properties: List[Property] = []
        additional = None
        for member in split_top_level(text, ";,\n"):
            member = member.strip()
            if not member:
                continue
            parts = split_at_depth_zero(member, ":", maxsplit=1)
            if len(parts) != 2:
                continue
            name, type_text = parts[0].strip(), parts[1].strip()
            if name.startswith("readonly "):
                name = name[len("readonly "):].strip()
            if name.startswith("["):
                # index signature
                additional = self.parse(type_text)
                continue
            if name.startswith(("(", "<", "new ")):
                # call and construct signatures describe the object itself
                continue
            paren = name.find("(")
            if paren > 0:
                prop = self._parse_method(name, paren, type_text)
                if prop is not None:
                    properties.append(prop)
                continue
            optional = name.endswith("?")
            name = _unquote(name.rstrip("?").strip())
            properties.append(Property(name=name, type=self.parse(type_text), optional=optional))
        return ObjectShape(text=text, properties=tuple(properties), additional=additional)

    def _parse_method(self, name: str, paren: int, return_text: str) -> Optional[Property]:
        head = name[:paren].strip()
        signature = name[paren:].strip()
        lt = head.find("<")
        if lt > 0:
            head = head[:lt].strip()
        optional = head.endswith("?")
        head = _unquote(head.rstrip("?").strip())
        if matching_close(signature, 0) != len(signature) - 1:
            return None
        accessor = ACCESSOR.match(head)
        if accessor:
            # get x(): T is a property of type T
            if accessor.group(1) == "set":
                return None
            return Property(name=_unquote(accessor.group(2).strip()), type=self.parse(return_text), optional=optional)
        fn_text = f"{signature} => {return_text}"
        return Property(
            name=head,
            type=Function(text=fn_text, params=self._parse_params(signature[1:-1]), returns=self.parse(return_text)),
            optional=optional,
        )

    def _parse_union(self, text: str) -> Optional[TypeNode]:
        # a top-level arrow owns everything after it: () => A | null
        if not has_top_level(text, "|") or find_top_level(text, "=>") >= 0:
            return None
        members = [m.strip() for m in split_at_depth_zero(text, "|")]
        members = [m for m in members if m]
        if len(members) == 1:
            return self.parse(members[0])
        concrete = [m for m in members if m not in NULLISH]
        nullable = len(concrete) < len(members)
        if not concrete:
            # null | undefined
            return Primitive(text=text, name="null")
        if len(concrete) == 1:
            node = self.parse(concrete[0])
            return node.as_nullable() if nullable else node
        return Union(text=text, members=tuple(self.parse(m) for m in concrete), nullable=nullable)

    def _parse_function(self, text: str) -> Optional[TypeNode]:
        signature = text
        if signature.startswith("<"):
            close_at = matching_close(signature, 0)
            if close_at < 0:
                return None
            signature = signature[close_at + 1:].lstrip()
        if not signature.startswith("("):
            return None
        close_at = matching_close(signature, 0)
        arrow = find_top_level(signature, "=>")
        if close_at < 0 or arrow < 0 or signature[close_at + 1:arrow].strip():
            return None
        return Function(
            text=text,
            params=self._parse_params(signature[1:close_at]),
            returns=self.parse(signature[arrow + 2:]),
        )

    def _parse_params(self, params_text: str) -> tuple:
        params = []
        for raw in split_at_depth_zero(params_text, ","):
            raw = raw.strip()
            if not raw:
                continue
            parts = split_at_depth_zero(raw, ":", maxsplit=1)
            name = parts[0].strip()
            type_text = parts[1].strip() if len(parts) == 2 else "any"
            # parameter defaults are not part of the type
            name = split_at_depth_zero(name, "=", maxsplit=1)[0].strip()
            if name.startswith("..."):
                name = name[3:]
            name = name.rstrip("?").strip()
            params.append(Param(name=name, type=self.parse(type_text)))
        return tuple(params)


def _unquote(name: str) -> str:
    if len(name) >= 2 and name[0] == name[-1] and name[0] in "\"'":
        return name[1:-1]
    return name


def parse(text: str) -> TypeNode:
    return TypeParser().parse(text)
