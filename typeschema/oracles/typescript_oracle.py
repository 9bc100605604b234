import tree_sitter_typescript
from tree_sitter import Language, Parser
from typing import Dict, List, Optional, Tuple

from typeschema.base.type_oracle import DeclKind, Declaration, ExportSpecifier, Member, TypeOracle

TSX_EXTS = (".tsx", ".jsx", ".js", ".mjs", ".cjs")

FUNCTION_NODES = {"function_declaration", "generator_function_declaration", "function_signature"}
CLASS_NODES = {"class_declaration", "abstract_class_declaration"}
VARIABLE_NODES = {"lexical_declaration", "variable_declaration"}
FUNCTION_EXPRESSIONS = {"arrow_function", "function_expression", "function", "generator_function"}


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        return text[1:-1]
    return text


def _wrap(type_text: str) -> str:
    if "|" in type_text or "=>" in type_text:
        return f"({type_text})"
    return type_text


class TypeScriptOracle(TypeOracle):
    """Declaration list and printed types for one TypeScript/JavaScript module.

    Types come from annotations where the source has them and are otherwise
    inferred from initializers and widened (``1`` prints as ``number``).
    Anything that cannot be inferred without a full checker prints as ``any``.
    """

    def __init__(self, file_name: str, content: str):
        self.file_name = file_name
        grammar = (
            tree_sitter_typescript.language_tsx()
            if file_name.endswith(TSX_EXTS)
            else tree_sitter_typescript.language_typescript()
        )
        self.language = Language(grammar)
        self.parser = Parser(self.language)
        self.code = content.encode("utf-8")
        self.tree = self.parser.parse(self.code)
        self.symbols: Dict[str, Tuple[str, object]] = {}
        self._declarations: List[Declaration] = []
        self._resolving = set()
        for node in self.tree.root_node.children:
            self._visit_top_level(node)

    def get_text(self, node) -> str:
        return self.code[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def declarations(self) -> List[Declaration]:
        return list(self._declarations)

    def type_of(self, symbol: str) -> Optional[str]:
        entry = self.symbols.get(symbol)
        if entry is None:
            return None
        if symbol in self._resolving:
            return "any"
        self._resolving.add(symbol)
        try:
            kind, node = entry
            return self._print_symbol(kind, node)
        finally:
            self._resolving.discard(symbol)

    # ------------- declarations -------------

    def _visit_top_level(self, node):
        if node.type == "export_statement":
            decl = self._export_statement(node)
        else:
            decl = self._declaration(node, exported=False, default=False)
        if decl is not None:
            self._declarations.append(decl)

    def _register(self, name: str, kind: str, node):
        self.symbols.setdefault(name, (kind, node))

    def _declaration(self, node, exported: bool, default: bool) -> Optional[Declaration]:
        if node.type == "ambient_declaration":
            for child in node.named_children:
                decl = self._declaration(child, exported, default)
                if decl is not None:
                    return decl
            return None

        if node.type in VARIABLE_NODES:
            names = []
            for child in node.named_children:
                if child.type != "variable_declarator":
                    continue
                name_node = child.child_by_field_name("name")
                if name_node is not None and name_node.type == "identifier":
                    name = self.get_text(name_node)
                    names.append(name)
                    self._register(name, DeclKind.VARIABLE, child)
            return Declaration(kind=DeclKind.VARIABLE, names=tuple(names), exported=exported)

        kind = None
        if node.type in FUNCTION_NODES:
            kind = DeclKind.FUNCTION
        elif node.type in CLASS_NODES:
            kind = DeclKind.CLASS
        elif node.type == "interface_declaration":
            kind = DeclKind.INTERFACE
        elif node.type == "type_alias_declaration":
            kind = DeclKind.TYPE_ALIAS
        elif node.type == "enum_declaration":
            kind = DeclKind.ENUM
        if kind is None:
            return None

        name_node = node.child_by_field_name("name")
        names = (self.get_text(name_node),) if name_node is not None else ()
        if names:
            self._register(names[0], kind, node)

        if kind == DeclKind.INTERFACE:
            return Declaration(
                kind=kind,
                names=names,
                exported=exported,
                members=tuple(self._interface_members(node)),
                extends=tuple(self._interface_extends(node)),
            )
        if kind == DeclKind.TYPE_ALIAS:
            value = node.child_by_field_name("value")
            return Declaration(
                kind=kind,
                names=names,
                exported=exported,
                value_text=self.get_text(value) if value is not None else None,
            )
        return Declaration(kind=kind, names=names, exported=exported, default=default)

    def _export_statement(self, node) -> Optional[Declaration]:
        child_types = [c.type for c in node.children]
        if "=" in child_types:
            # export = x
            return None
        is_default = "default" in child_types

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return self._declaration(declaration, exported=True, default=is_default)

        value = node.child_by_field_name("value")
        if value is not None and is_default:
            if value.type == "identifier":
                return Declaration(kind=DeclKind.EXPORT_DEFAULT, names=(self.get_text(value),))
            self._register("default", "expression", value)
            return Declaration(kind=DeclKind.EXPORT_DEFAULT)

        source_node = node.child_by_field_name("source")
        source = _strip_quotes(self.get_text(source_node)) if source_node is not None else None
        specifiers = []
        for child in node.named_children:
            if child.type == "export_clause":
                for spec in child.named_children:
                    if spec.type != "export_specifier":
                        continue
                    name_node = spec.child_by_field_name("name")
                    alias_node = spec.child_by_field_name("alias")
                    local = _strip_quotes(self.get_text(name_node))
                    exported = _strip_quotes(self.get_text(alias_node)) if alias_node is not None else local
                    type_only = any(c.type == "type" for c in spec.children)
                    specifiers.append(ExportSpecifier(local=local, exported=exported, type_only=type_only))
            elif child.type == "namespace_export":
                for ident in child.named_children:
                    name = _strip_quotes(self.get_text(ident))
                    specifiers.append(ExportSpecifier(local=name, exported=name))
        if not specifiers:
            # export * from "..."
            return None
        return Declaration(
            kind=DeclKind.EXPORT_CLAUSE,
            specifiers=tuple(specifiers),
            type_only="type" in child_types,
            source=source,
        )

    def _interface_members(self, node) -> List[Member]:
        members = []
        body = node.child_by_field_name("body")
        if body is None:
            return members
        for member in body.named_children:
            name_node = member.child_by_field_name("name")
            if name_node is None:
                continue
            name = _strip_quotes(self.get_text(name_node))
            optional = any(c.type == "?" for c in member.children)
            if member.type == "property_signature":
                members.append(Member(name=name, type_text=self._annotation(member.child_by_field_name("type")), optional=optional))
            elif member.type == "method_signature":
                members.append(Member(name=name, type_text=self._signature(member), optional=optional))
        return members

    def _interface_extends(self, node) -> List[str]:
        parents = []
        for child in node.children:
            if child.type == "extends_type_clause":
                for parent in child.named_children:
                    parents.append(self.get_text(parent).split("<", 1)[0].strip())
        return parents

    # ------------- printing -------------

    def _print_symbol(self, kind: str, node) -> str:
        if kind == DeclKind.VARIABLE:
            annotation = node.child_by_field_name("type")
            if annotation is not None:
                return self._annotation(annotation)
            value = node.child_by_field_name("value")
            return self._infer(value) if value is not None else "any"
        if kind == DeclKind.FUNCTION:
            return self._signature(node)
        if kind == DeclKind.CLASS:
            return f"typeof {self.get_text(node.child_by_field_name('name'))}"
        if kind == DeclKind.INTERFACE:
            return self._interface_text(node)
        if kind == DeclKind.TYPE_ALIAS:
            value = node.child_by_field_name("value")
            return self.get_text(value) if value is not None else "unknown"
        if kind == DeclKind.ENUM:
            return self._enum_text(node)
        return self._infer(node)

    def _annotation(self, annotation) -> str:
        if annotation is None:
            return "any"
        if annotation.type in ("type_predicate_annotation", "asserts_annotation"):
            return "boolean"
        text = self.get_text(annotation).strip()
        if annotation.type == "type_annotation" and text.startswith(":"):
            text = text[1:].strip()
        return text or "any"

    def _interface_text(self, node) -> str:
        parts = []
        for member in self._merged_members(node, set()).values():
            parts.append(f"{member.name}{'?' if member.optional else ''}: {member.type_text}")
        return "{ " + "; ".join(parts) + " }" if parts else "{}"

    def _merged_members(self, node, seen) -> Dict[str, Member]:
        """Members of an interface with those of its local parents folded in first."""
        members: Dict[str, Member] = {}
        for parent in self._interface_extends(node):
            entry = self.symbols.get(parent)
            if entry is None or entry[0] != DeclKind.INTERFACE or parent in seen:
                continue
            seen.add(parent)
            members.update(self._merged_members(entry[1], seen))
        for member in self._interface_members(node):
            members[member.name] = member
        return members

    def _enum_text(self, node) -> str:
        body = node.child_by_field_name("body")
        values = []
        counter = 0
        for member in body.named_children if body is not None else []:
            if member.type == "enum_assignment":
                value = member.child_by_field_name("value")
                value_text = self.get_text(value) if value is not None else str(counter)
                if value is not None and value.type == "number":
                    try:
                        counter = int(value_text) + 1
                    except ValueError:
                        counter += 1
                values.append(value_text if value is not None and value.type in ("string", "number") else "number")
            elif member.type in ("property_identifier", "identifier"):
                values.append(str(counter))
                counter += 1
        if not values:
            return "never"
        unique = list(dict.fromkeys(values))
        return " | ".join(unique)

    def _params(self, node) -> str:
        single = node.child_by_field_name("parameter")
        if single is not None:
            return f"{self.get_text(single)}: any"
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return ""
        params = []
        for param in params_node.named_children:
            if param.type not in ("required_parameter", "optional_parameter"):
                continue
            pattern = param.child_by_field_name("pattern")
            name = self.get_text(pattern) if pattern is not None else "arg"
            annotation = param.child_by_field_name("type")
            default = param.child_by_field_name("value")
            if annotation is not None:
                type_text = self._annotation(annotation)
            elif default is not None:
                type_text = self._infer(default)
            else:
                type_text = "any"
            optional = param.type == "optional_parameter" or default is not None
            params.append(f"{name}{'?' if optional else ''}: {type_text}")
        return ", ".join(params)

    def _signature(self, node) -> str:
        type_params = node.child_by_field_name("type_parameters")
        prefix = self.get_text(type_params) if type_params is not None else ""
        return_type = node.child_by_field_name("return_type")
        if return_type is not None:
            returns = self._annotation(return_type)
        else:
            returns = self._infer_return(node)
            if any(c.type == "async" for c in node.children):
                returns = f"Promise<{returns}>"
        return f"{prefix}({self._params(node)}) => {returns}"

    def _infer_return(self, node) -> str:
        body = node.child_by_field_name("body")
        if body is None:
            return "any"
        if body.type != "statement_block":
            return self._infer(body)
        returned = self._first_return(body)
        return self._infer(returned) if returned is not None else "void"

    def _first_return(self, node):
        for child in node.named_children:
            if child.type == "return_statement":
                values = [c for c in child.named_children if c.type != "comment"]
                if values:
                    return values[0]
            elif child.type in FUNCTION_EXPRESSIONS or child.type in FUNCTION_NODES or child.type in CLASS_NODES:
                continue
            else:
                found = self._first_return(child)
                if found is not None:
                    return found
        return None

    def _infer(self, node) -> str:
        t = node.type
        if t == "number":
            return "number"
        if t in ("string", "template_string"):
            return "string"
        if t in ("true", "false"):
            return "boolean"
        if t == "null":
            return "null"
        if t == "undefined":
            return "undefined"
        if t == "identifier":
            name = self.get_text(node)
            if name == "undefined":
                return "undefined"
            return self.type_of(name) or "any"
        if t == "array":
            return self._infer_array(node)
        if t == "object":
            return self._infer_object(node)
        if t in FUNCTION_EXPRESSIONS:
            return self._signature(node)
        if t == "as_expression":
            target = node.children[-1]
            if target.type == "const":
                return self._infer(node.named_children[0])
            return self.get_text(target)
        if t in ("satisfies_expression", "non_null_expression", "parenthesized_expression"):
            return self._infer(node.named_children[0]) if node.named_children else "any"
        if t == "new_expression":
            constructor = node.child_by_field_name("constructor")
            return self.get_text(constructor) if constructor is not None else "any"
        if t == "unary_expression":
            operator = node.child_by_field_name("operator")
            op = self.get_text(operator) if operator is not None else ""
            if op == "!":
                return "boolean"
            if op in ("-", "+", "~"):
                return "number"
            if op == "typeof":
                return "string"
            if op == "void":
                return "undefined"
        if t in ("jsx_element", "jsx_self_closing_element", "jsx_fragment"):
            return "JSX.Element"
        return "any"

    def _infer_array(self, node) -> str:
        element_types = []
        for element in node.named_children:
            if element.type == "comment":
                continue
            element_type = "any" if element.type == "spread_element" else self._infer(element)
            if element_type not in element_types:
                element_types.append(element_type)
        if not element_types:
            return "any[]"
        if len(element_types) == 1:
            return f"{_wrap(element_types[0])}[]"
        return f"({' | '.join(element_types)})[]"

    def _infer_object(self, node) -> str:
        parts = []
        for prop in node.named_children:
            if prop.type == "pair":
                key = prop.child_by_field_name("key")
                if key is None or key.type == "computed_property_name":
                    continue
                parts.append(f"{_strip_quotes(self.get_text(key))}: {self._infer(prop.child_by_field_name('value'))}")
            elif prop.type == "shorthand_property_identifier":
                name = self.get_text(prop)
                parts.append(f"{name}: {self.type_of(name) or 'any'}")
            elif prop.type == "method_definition":
                key = prop.child_by_field_name("name")
                if key is not None:
                    parts.append(f"{_strip_quotes(self.get_text(key))}: {self._signature(prop)}")
        return "{ " + "; ".join(parts) + " }" if parts else "{}"
