import pytest

from typeschema.core.parser import parse
from typeschema.core.type_nodes import (
    ArrayOf,
    ComponentRef,
    Function,
    Literal,
    NodeKind,
    ObjectShape,
    Opaque,
    Primitive,
    Union,
)


@pytest.mark.parametrize("name", ["string", "number", "boolean", "null", "undefined", "any", "unknown"])
def test_primitives(name):
    node = parse(f"  {name} ")
    assert isinstance(node, Primitive)
    assert node.name == name
    assert not node.nullable


def test_array_of_primitive():
    node = parse("string[]")
    assert isinstance(node, ArrayOf)
    assert node.element == Primitive(text="string", name="string")


def test_array_of_parenthesized_union():
    node = parse("(string | number)[]")
    assert isinstance(node, ArrayOf)
    assert isinstance(node.element, Union)
    assert [m.name for m in node.element.members] == ["string", "number"]


def test_union_with_array_member_is_not_an_array():
    node = parse("string | number[]")
    assert isinstance(node, Union)
    assert node.members[0].kind == NodeKind.PRIMITIVE
    assert node.members[1].kind == NodeKind.ARRAY


def test_generic_and_readonly_arrays():
    assert isinstance(parse("Array<number>"), ArrayOf)
    assert isinstance(parse("readonly string[]"), ArrayOf)


def test_object_shape_with_optional_member():
    node = parse("{ a: string; b?: number }")
    assert isinstance(node, ObjectShape)
    assert [(p.name, p.optional) for p in node.properties] == [("a", False), ("b", True)]
    assert node.properties[1].type.name == "number"


def test_multiline_object_shape():
    node = parse("{\n    a: string;\n    b?: number;\n    c: { d: boolean };\n}")
    assert [p.name for p in node.properties] == ["a", "b", "c"]
    assert isinstance(node.properties[2].type, ObjectShape)


def test_object_members_keep_nested_separators():
    node = parse("{ a: Map<string, number>, cb: (x: number, y: string) => void }")
    assert [p.name for p in node.properties] == ["a", "cb"]
    assert isinstance(node.properties[1].type, Function)


def test_object_method_signature_and_quoted_key():
    node = parse('{ onClick?(event: MouseEvent): void; "data-id": string; readonly size: number }')
    names = [p.name for p in node.properties]
    assert names == ["onClick", "data-id", "size"]
    on_click = node.properties[0]
    assert on_click.optional
    assert isinstance(on_click.type, Function)
    assert on_click.type.params[0].name == "event"


def test_accessor_members():
    node = parse("{ get size(): number; set size(value: number): void; get(): string }")
    assert [p.name for p in node.properties] == ["size", "get"]
    assert node.properties[0].type == Primitive(text="number", name="number")
    assert isinstance(node.properties[1].type, Function)


def test_index_signature():
    node = parse("{ [key: string]: number }")
    assert node.properties == ()
    assert node.additional.name == "number"


def test_union_of_objects_is_not_an_object():
    node = parse("{ a: string } | { b: number }")
    assert isinstance(node, Union)
    assert all(isinstance(m, ObjectShape) for m in node.members)


def test_component_with_inline_props():
    node = parse("React.FC<{ label: string }>")
    assert isinstance(node, ComponentRef)
    assert isinstance(node.props, ObjectShape)


def test_component_with_multiline_props():
    text = "React.FC<{\n  onClick: (e: MouseEvent) => void;\n  label: string;\n}>"
    node = parse(text)
    assert isinstance(node, ComponentRef)
    assert [p.name for p in node.props.properties] == ["onClick", "label"]


def test_component_with_named_props():
    node = parse("FunctionComponent<ButtonProps>")
    assert isinstance(node, ComponentRef)
    assert node.props == Opaque(text="ButtonProps", raw="ButtonProps")


def test_component_needs_exactly_one_argument():
    assert isinstance(parse("React.FC<A, B>"), Opaque)
    assert isinstance(parse("Foo<Props>"), Opaque)


def test_nullable_collapse():
    node = parse("string | null")
    assert node == Primitive(text="string", name="string", nullable=True)
    assert parse("undefined | number").nullable


def test_union_keeps_nullable_flag():
    node = parse("string | number | undefined")
    assert isinstance(node, Union)
    assert len(node.members) == 2
    assert node.nullable


def test_only_nullish_members():
    assert parse("null | undefined").name == "null"


def test_leading_bar():
    node = parse('| "a"\n| "b"')
    assert isinstance(node, Union)
    assert all(isinstance(m, Literal) for m in node.members)


def test_function():
    node = parse("(x: number, y: string) => boolean")
    assert isinstance(node, Function)
    assert [p.name for p in node.params] == ["x", "y"]
    assert [p.type.name for p in node.params] == ["number", "string"]
    assert node.returns.name == "boolean"


def test_function_return_union_belongs_to_function():
    node = parse("() => string | null")
    assert isinstance(node, Function)
    assert node.params == ()
    assert node.returns.nullable


def test_generic_function_and_rest_params():
    node = parse("<T>(value: T, ...rest: string[]) => T")
    assert isinstance(node, Function)
    assert [p.name for p in node.params] == ["value", "rest"]
    assert isinstance(node.params[1].type, ArrayOf)


def test_function_parameter_with_nested_arrow():
    node = parse("(cb: (err: Error) => void, opts?: { retry: boolean }) => void")
    assert [p.name for p in node.params] == ["cb", "opts"]
    assert isinstance(node.params[0].type, Function)


def test_nullable_function():
    node = parse("((x: number) => void) | null")
    assert isinstance(node, Function)
    assert node.nullable


@pytest.mark.parametrize("text", ['"on"', "'off'", "42", "-1.5", "true", "false"])
def test_literals(text):
    assert isinstance(parse(text), Literal)


@pytest.mark.parametrize("text", ["Promise<string>", "typeof Store", "A & B", "", "new () => Foo"])
def test_fallback_is_opaque(text):
    node = parse(text)
    assert isinstance(node, Opaque)
    assert node.raw == text


def test_inline_props_with_comma_separators():
    node = parse("FC<{ label: string, count: number }>")
    assert isinstance(node, ComponentRef)
    assert [p.name for p in node.props.properties] == ["label", "count"]


def test_destructured_parameter_keeps_its_pattern():
    node = parse("({ a, b }: Props) => void")
    assert [p.name for p in node.params] == ["{ a, b }"]
