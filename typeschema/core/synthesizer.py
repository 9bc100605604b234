import json
import math
from typing import Any, Dict

from typeschema.core.type_nodes import NodeKind, ObjectShape, TypeNode

PRIMITIVE_SCHEMAS = {
    "string": {"type": "string"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
    "null": {"type": "null"},
    "undefined": {"type": "null"},
    "void": {"type": "null"},
    "any": {},
    "unknown": {},
    "object": {"type": "object"},
    "bigint": {"type": "integer"},
    "never": {"not": {}},
}


def literal_value(raw: str):
    if raw in ("true", "false"):
        return raw == "true"
    if raw[:1] == '"':
        try:
            return json.loads(raw)
        except ValueError:
            return raw[1:-1]
    if raw[:1] == "'":
        return raw[1:-1].replace("\\'", "'")
    number = float(raw)
    return int(number) if number.is_integer() and "." not in raw and "e" not in raw.lower() else number


class SchemaSynthesizer:
    """Structural TypeNode -> JSON Schema fragment translation."""

    def __init__(self):
        self.handlers = {
            NodeKind.PRIMITIVE: self._primitive,
            NodeKind.LITERAL: self._literal,
            NodeKind.ARRAY: self._array,
            NodeKind.OBJECT: self._object,
            NodeKind.UNION: self._union,
            NodeKind.FUNCTION: self._function,
            NodeKind.COMPONENT: self._component,
            NodeKind.OPAQUE: self._opaque,
        }

    def synthesize(self, node: TypeNode) -> Dict[str, Any]:
        fragment = self.handlers[node.kind](node)
        if node.nullable:
            fragment["nullable"] = True
        return fragment

    def _primitive(self, node):
        return dict(PRIMITIVE_SCHEMAS[node.name])

    def _literal(self, node):
        value = literal_value(node.raw)
        if isinstance(value, bool):
            json_type = "boolean"
        elif isinstance(value, str):
            json_type = "string"
        else:
            json_type = "number"
            if not math.isfinite(value):
                # out of double range, no JSON representation
                return {"type": json_type}
        return {"type": json_type, "const": value}

    def _array(self, node):
        return {"type": "array", "items": self.synthesize(node.element)}

    def _object(self, node):
        fragment = {
            "type": "object",
            "properties": {p.name: self.synthesize(p.type) for p in node.properties},
        }
        required = [p.name for p in node.properties if not p.optional]
        if required:
            fragment["required"] = required
        if node.additional is not None:
            fragment["additionalProperties"] = self.synthesize(node.additional)
        return fragment

    def _union(self, node):
        return {"oneOf": [self.synthesize(m) for m in node.members]}

    def _function(self, node):
        return {
            "type": "object",
            "description": f"Function: {node.text}",
            "parameters": [{"name": p.name, "schema": self.synthesize(p.type)} for p in node.params],
            "returns": self.synthesize(node.returns),
        }

    def _component(self, node):
        if isinstance(node.props, ObjectShape):
            return {
                "type": "object",
                "description": f"Component: {node.text}",
                "properties": self._object(node.props)["properties"],
            }
        return {"type": "object", "tsType": node.text}

    def _opaque(self, node):
        return {"type": "string", "description": f"type: {node.raw}"}


def synthesize(node: TypeNode) -> Dict[str, Any]:
    return SchemaSynthesizer().synthesize(node)
