from typeschema.base.type_oracle import DeclKind, Declaration, Member
from typeschema.core.props import PropsExpander
from typeschema.core.synthesizer import synthesize
from typeschema.core.type_nodes import ArrayOf, ComponentRef, Function, ObjectShape, Opaque


def interface(name, *members, extends=()):
    return Declaration(kind=DeclKind.INTERFACE, names=(name,), members=tuple(members), extends=tuple(extends))


def alias(name, value):
    return Declaration(kind=DeclKind.TYPE_ALIAS, names=(name,), value_text=value)


BUTTON_PROPS = interface(
    "ButtonProps",
    Member("label", "string"),
    Member("disabled", "boolean", optional=True),
    Member("onClick", "(event: MouseEvent) => void"),
)


def test_interface_props_are_inlined():
    node = PropsExpander([BUTTON_PROPS]).expand("React.FC<ButtonProps>")
    assert isinstance(node, ComponentRef)
    assert isinstance(node.props, ObjectShape)
    assert [(p.name, p.optional) for p in node.props.properties] == [
        ("label", False),
        ("disabled", True),
        ("onClick", False),
    ]
    assert isinstance(node.props.properties[2].type, Function)


def test_inlined_props_schema():
    fragment = synthesize(PropsExpander([BUTTON_PROPS]).expand("React.FC<ButtonProps>"))
    assert fragment["type"] == "object"
    assert fragment["description"] == "Component: React.FC<ButtonProps>"
    assert fragment["properties"]["label"] == {"type": "string"}
    assert fragment["properties"]["disabled"] == {"type": "boolean"}
    assert fragment["properties"]["onClick"]["returns"] == {"type": "null"}


def test_type_alias_props_are_reparsed():
    node = PropsExpander([alias("CardProps", "{\n  title: string;\n  count?: number;\n}")]).expand("FC<CardProps>")
    assert [p.name for p in node.props.properties] == ["title", "count"]


def test_unknown_props_stay_unresolved():
    node = PropsExpander([BUTTON_PROPS]).expand("React.FC<MissingProps>")
    assert node.props == Opaque(text="MissingProps", raw="MissingProps")
    assert synthesize(node) == {"type": "object", "tsType": "React.FC<MissingProps>"}


def test_only_component_props_are_expanded():
    node = PropsExpander([BUTTON_PROPS]).expand("ButtonProps")
    assert isinstance(node, Opaque)


def test_component_nested_in_union():
    node = PropsExpander([BUTTON_PROPS]).expand("React.FC<ButtonProps> | null")
    assert isinstance(node, ComponentRef)
    assert node.nullable
    assert isinstance(node.props, ObjectShape)


def test_nested_local_types_are_resolved():
    user = interface("User", Member("name", "string"))
    props = interface("ProfileProps", Member("user", "User"), Member("friends", "User[]", optional=True))
    node = PropsExpander([user, props]).expand("React.FC<ProfileProps>")
    user_prop, friends_prop = node.props.properties
    assert isinstance(user_prop.type, ObjectShape)
    assert isinstance(friends_prop.type, ArrayOf)
    assert isinstance(friends_prop.type.element, ObjectShape)


def test_self_reference_terminates():
    tree = interface("TreeProps", Member("label", "string"), Member("children", "TreeProps[]"))
    node = PropsExpander([tree]).expand("React.FC<TreeProps>")
    children = node.props.properties[1].type
    assert isinstance(children, ArrayOf)
    assert children.element == Opaque(text="TreeProps", raw="TreeProps")


def test_alias_cycle_terminates():
    node = PropsExpander([alias("A", "B"), alias("B", "A")]).expand("React.FC<A>")
    assert isinstance(node, ComponentRef)
    assert isinstance(node.props, Opaque)


def test_extended_interfaces_are_merged():
    base = interface("BaseProps", Member("id", "string"), Member("className", "string", optional=True))
    props = interface("LinkProps", Member("href", "string"), extends=["BaseProps"])
    node = PropsExpander([base, props]).expand("React.FC<LinkProps>")
    assert [p.name for p in node.props.properties] == ["id", "className", "href"]


def test_expander_is_reusable():
    expander = PropsExpander([BUTTON_PROPS])
    first = expander.expand("React.FC<ButtonProps>")
    second = expander.expand("React.FC<ButtonProps>")
    assert first == second
