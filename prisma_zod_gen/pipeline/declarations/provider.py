"""
TypeScript declaration provider.

Uses tree-sitter and tree-sitter-typescript to parse a `.d.ts` module and
exposes it as a graph of DeclaredType nodes: namespace lookup by name,
enumeration of top-level exported declarations, and per-declaration type
and property introspection.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from .types import (
    DeclarationKind,
    DeclaredProperty,
    DeclaredType,
    EnumDeclaration,
    ExportedDeclaration,
    TypeAliasDeclaration,
    TypeKind,
)

logger = logging.getLogger(__name__)

_ESCAPE_PATTERN = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "0": "\0"}

# Statement wrappers that carry a declaration one level down
_WRAPPER_TYPES = {"export_statement", "ambient_declaration", "expression_statement"}

_NAMESPACE_TYPES = {"internal_module", "module"}

_PREDEFINED_KINDS = {
    "string": TypeKind.STRING,
    "number": TypeKind.NUMBER,
    "boolean": TypeKind.BOOLEAN,
    "bigint": TypeKind.BIGINT,
    "undefined": TypeKind.UNDEFINED,
    "null": TypeKind.NULL,
}

# Global names that are never declared in the source module itself
_GLOBAL_KINDS = {
    "Date": TypeKind.DATE,
    "bigint": TypeKind.BIGINT,
    "undefined": TypeKind.UNDEFINED,
}

_ARRAY_GENERICS = {"Array", "ReadonlyArray"}

# Model declarations: `type User = $Result.DefaultSelection<Prisma.$UserPayload>`,
# with `scalars: $Extensions.GetPayloadResult<{...}, ...>` in the payload
_DEFAULT_SELECTION = "DefaultSelection"
_PAYLOAD_RESULT = "GetPayloadResult"
_PAYLOAD_SCALARS = "scalars"

# Primitive aliases print as the primitive, not as the alias name
_UNALIASED_KINDS = {
    TypeKind.STRING,
    TypeKind.NUMBER,
    TypeKind.BOOLEAN,
    TypeKind.BIGINT,
    TypeKind.DATE,
    TypeKind.NULL,
    TypeKind.UNDEFINED,
}


class DeclarationSourceError(Exception):
    """Raised when the declaration source cannot be located or parsed."""

    pass


@dataclass
class _Scope:
    """Names declared in one block (the module or a namespace body)."""

    name: str = ""
    parent: _Scope | None = None
    types: dict[str, Node] = field(default_factory=dict)
    values: dict[str, Node] = field(default_factory=dict)
    namespaces: dict[str, _Scope] = field(default_factory=dict)
    bodies: list[Node] = field(default_factory=list)


def _text(node: Node | None) -> str:
    if node is None:
        return ""
    return node.text.decode("utf8")


def _normalized_text(node: Node | None) -> str:
    """Node text with runs of whitespace collapsed."""
    return " ".join(_text(node).split())


def _key(node: Node) -> tuple[int, int, str]:
    return (node.start_byte, node.end_byte, node.type)


def _string_value(node: Node) -> str:
    """Decode a TypeScript string literal node."""
    raw = _text(node)
    if len(raw) >= 2 and raw[0] in "'\"`" and raw[-1] == raw[0]:
        raw = raw[1:-1]
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), raw)


def _unwrap(node: Node) -> Node | None:
    """Strip export/declare/expression wrappers off a statement."""
    while node is not None and node.type in _WRAPPER_TYPES:
        if node.type == "export_statement":
            node = node.child_by_field_name("declaration")
        else:
            inner = [child for child in node.named_children if child.type != "statement_block"]
            node = inner[0] if inner else None
    return node


def _declaration_name(node: Node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return ""
    if name_node.type == "string":
        return _string_value(name_node)
    return _text(name_node).strip("'\"")


def _descendants(node: Node, node_type: str) -> Iterator[Node]:
    """Yield descendants of the given type in document order."""
    for child in node.named_children:
        if child.type == node_type:
            yield child
        yield from _descendants(child, node_type)


class DeclarationProvider:
    """Parses a TypeScript declaration module and resolves its types."""

    def __init__(self, source: str, path: str = "<string>"):
        """
        Parse the declaration source.

        Args:
            source: TypeScript declaration source text
            path: Path used in error messages

        Raises:
            DeclarationSourceError: If the source cannot be parsed
        """
        self.path = path
        self._parser = Parser(Language(ts_typescript.language_typescript()))
        tree = self._parser.parse(bytes(source, "utf8"))

        if tree.root_node.has_error:
            error = self._find_first_error(tree.root_node)
            line = error.start_point[0] + 1 if error is not None else 1
            raise DeclarationSourceError(f"Failed to parse {path} at line {line}")

        self._root = tree.root_node
        self._scope_of: dict[tuple[int, int, str], _Scope] = {}
        self._namespaces_by_name: dict[str, list[_Scope]] = {}
        self._resolved: dict[tuple[int, int, str], DeclaredType] = {}
        self._own_properties: dict[tuple[int, int, str], list[DeclaredProperty]] = {}

        self._module_scope = _Scope(bodies=[self._root])
        self._index_block(self._root, self._module_scope)

    @classmethod
    def from_path(cls, path: str | Path) -> DeclarationProvider:
        """Read and parse a declaration file.

        Raises:
            DeclarationSourceError: If the file is missing, unreadable or unparseable
        """
        path = Path(path)
        if not path.is_file():
            raise DeclarationSourceError(f"Declaration file not found: {path}")
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DeclarationSourceError(f"Cannot read declaration file {path}: {e}") from e
        return cls(source, str(path))

    def _find_first_error(self, node: Node) -> Node | None:
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                found = self._find_first_error(child)
                if found is not None:
                    return found
        return None

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def _index_block(self, block: Node, scope: _Scope) -> None:
        for statement in block.named_children:
            decl = _unwrap(statement)
            if decl is None:
                continue
            self._index_declaration(decl, scope)

    def _index_declaration(self, decl: Node, scope: _Scope) -> None:
        self._scope_of[_key(decl)] = scope

        if decl.type in ("interface_declaration", "type_alias_declaration"):
            scope.types.setdefault(_declaration_name(decl), decl)
        elif decl.type == "enum_declaration":
            name = _declaration_name(decl)
            scope.types.setdefault(name, decl)
            scope.values.setdefault(name, decl)
        elif decl.type in ("lexical_declaration", "variable_declaration"):
            for declarator in decl.named_children:
                if declarator.type == "variable_declarator":
                    self._scope_of[_key(declarator)] = scope
                    scope.values.setdefault(_declaration_name(declarator), declarator)
        elif decl.type in _NAMESPACE_TYPES:
            self._index_namespace(decl, scope)

    def _index_namespace(self, decl: Node, scope: _Scope) -> None:
        body = decl.child_by_field_name("body")
        parts = _declaration_name(decl).split(".")

        # `namespace A.B {}` declares B inside A
        target = scope
        for part in parts:
            child = target.namespaces.get(part)
            if child is None:
                child = _Scope(name=part, parent=target)
                target.namespaces[part] = child
                self._namespaces_by_name.setdefault(part, []).append(child)
            target = child

        if body is not None:
            target.bodies.append(body)
            self._index_block(body, target)

    # ------------------------------------------------------------------
    # Public introspection
    # ------------------------------------------------------------------

    def has_namespace(self, name: str) -> bool:
        return name in self._namespaces_by_name

    def enum_declarations(self, namespace: str) -> list[EnumDeclaration]:
        """Classic enum declarations anywhere inside the named namespace."""
        result = []
        for decl in self._namespace_descendants(namespace, "enum_declaration"):
            result.append(EnumDeclaration(name=_declaration_name(decl), values=self._enum_values(decl)))
        return result

    def type_aliases(self, namespace: str) -> list[TypeAliasDeclaration]:
        """Type alias declarations anywhere inside the named namespace."""
        result = []
        for decl in self._namespace_descendants(namespace, "type_alias_declaration"):
            result.append(TypeAliasDeclaration(name=_declaration_name(decl), type=self._resolve_alias(decl)))
        return result

    def exported_declarations(self) -> list[ExportedDeclaration]:
        """Top-level exported declarations, in source order."""
        result = []
        for statement in self._root.named_children:
            if statement.type != "export_statement":
                continue
            decl = _unwrap(statement)
            if decl is None:
                continue
            result.extend(self._exported(decl))
        return result

    def _exported(self, decl: Node) -> list[ExportedDeclaration]:
        if decl.type == "interface_declaration":
            declared = self._resolve_interface(decl)
            return [
                ExportedDeclaration(
                    name=_declaration_name(decl),
                    kind=DeclarationKind.INTERFACE,
                    type=declared,
                    properties=list(self._own_properties[_key(decl)]),
                )
            ]
        if decl.type == "type_alias_declaration":
            return [
                ExportedDeclaration(
                    name=_declaration_name(decl),
                    kind=DeclarationKind.TYPE_ALIAS,
                    type=self._resolve_alias(decl),
                )
            ]
        if decl.type == "enum_declaration":
            return [ExportedDeclaration(name=_declaration_name(decl), kind=DeclarationKind.ENUM)]
        if decl.type in ("lexical_declaration", "variable_declaration"):
            return [
                ExportedDeclaration(name=_declaration_name(declarator), kind=DeclarationKind.VARIABLE)
                for declarator in decl.named_children
                if declarator.type == "variable_declarator"
            ]
        name = _declaration_name(decl)
        if not name:
            return []
        return [ExportedDeclaration(name=name, kind=DeclarationKind.OTHER)]

    def _namespace_descendants(self, namespace: str, node_type: str) -> Iterator[Node]:
        for scope in self._namespaces_by_name.get(namespace, []):
            for body in scope.bodies:
                yield from _descendants(body, node_type)

    def _enum_values(self, decl: Node) -> list[str]:
        body = decl.child_by_field_name("body")
        values = []
        if body is None:
            return values
        for member in body.named_children:
            if member.type == "enum_assignment":
                name_node = member.child_by_field_name("name") or member.named_children[0]
                value_node = member.child_by_field_name("value")
                if value_node is None and len(member.named_children) > 1:
                    value_node = member.named_children[-1]
                if value_node is not None and value_node.type == "string":
                    values.append(_string_value(value_node))
                else:
                    values.append(_string_value(name_node) if name_node.type == "string" else _text(name_node))
            elif member.type == "string":
                values.append(_string_value(member))
            elif member.type in ("property_identifier", "identifier"):
                values.append(_text(member))
        return values

    # ------------------------------------------------------------------
    # Name lookup
    # ------------------------------------------------------------------

    def _lookup(self, path: list[str], scope: _Scope, table: str) -> tuple[Node, _Scope] | None:
        """Resolve a dotted name through the scope chain."""
        *namespaces, name = path
        current: _Scope | None = scope
        while current is not None:
            target: _Scope | None = current
            for part in namespaces:
                target = target.namespaces.get(part) if target is not None else None
            if target is not None:
                found = getattr(target, table).get(name)
                if found is not None:
                    return found, self._scope_of.get(_key(found), target)
            current = current.parent
        return None

    # ------------------------------------------------------------------
    # Type resolution
    # ------------------------------------------------------------------

    def _resolve_declaration(self, decl: Node) -> DeclaredType:
        if decl.type == "interface_declaration":
            return self._resolve_interface(decl)
        if decl.type == "type_alias_declaration":
            return self._resolve_alias(decl)
        if decl.type == "enum_declaration":
            return self._resolve_enum(decl)
        return DeclaredType(kind=TypeKind.OTHER, text=_declaration_name(decl))

    def _resolve_interface(self, decl: Node) -> DeclaredType:
        key = _key(decl)
        if key in self._resolved:
            return self._resolved[key]

        name = _declaration_name(decl)
        scope = self._scope_of.get(key, self._module_scope)
        declared = DeclaredType(kind=TypeKind.OBJECT, text=name, symbol_name=name)
        self._resolved[key] = declared

        own = self._resolve_members(decl.child_by_field_name("body"), scope)
        self._own_properties[key] = own

        properties = list(own)
        seen_names = {prop.name for prop in own}
        for clause in decl.named_children:
            if clause.type != "extends_type_clause":
                continue
            for base_node in clause.named_children:
                base = self._resolve_type(base_node, scope)
                for prop in base.properties if base.kind == TypeKind.OBJECT else []:
                    if prop.name not in seen_names:
                        seen_names.add(prop.name)
                        properties.append(prop)
        declared.properties = properties
        return declared

    def _resolve_alias(self, decl: Node) -> DeclaredType:
        key = _key(decl)
        if key in self._resolved:
            return self._resolved[key]

        name = _declaration_name(decl)
        scope = self._scope_of.get(key, self._module_scope)

        # Registered before resolving the value so self references land here
        placeholder = DeclaredType(kind=TypeKind.OTHER, text=name)
        self._resolved[key] = placeholder

        value = decl.child_by_field_name("value")
        resolved = self._resolve_type(value, scope)
        if resolved is not placeholder:
            vars(placeholder).update(vars(resolved))

        is_named_target = resolved.alias_name is not None or resolved.symbol_name is not None
        # Unresolved references keep their own text for enum matching
        if resolved.kind == TypeKind.REFERENCE or is_named_target:
            return placeholder
        if resolved.kind not in _UNALIASED_KINDS and not self._is_named_reference(value):
            placeholder.alias_name = name
            placeholder.text = name
        return placeholder

    def _resolve_enum(self, decl: Node) -> DeclaredType:
        key = _key(decl)
        if key not in self._resolved:
            name = _declaration_name(decl)
            members = [
                DeclaredType(kind=TypeKind.LITERAL, text=f'"{value}"', literal_value=value)
                for value in self._enum_values(decl)
            ]
            self._resolved[key] = DeclaredType(kind=TypeKind.UNION, text=name, members=members, symbol_name=name)
        return self._resolved[key]

    def _resolve_value(self, path: list[str], scope: _Scope, text: str) -> DeclaredType:
        """Resolve the type of a value for `typeof` queries."""
        found = self._lookup(path, scope, "values")
        if found is None:
            return DeclaredType(kind=TypeKind.OTHER, text=text)
        node, value_scope = found
        if node.type == "enum_declaration":
            return self._resolve_enum(node)

        key = _key(node)
        if key not in self._resolved:
            annotation = node.child_by_field_name("type")
            if annotation is None:
                self._resolved[key] = DeclaredType(kind=TypeKind.OTHER, text=text)
            else:
                self._resolved[key] = self._resolve_type(annotation, value_scope)
        return self._resolved[key]

    def _is_named_reference(self, node: Node | None) -> bool:
        while node is not None and node.type == "parenthesized_type":
            node = node.named_children[0] if node.named_children else None
        return node is not None and node.type in ("type_identifier", "nested_type_identifier")

    def _resolve_members(self, body: Node | None, scope: _Scope) -> list[DeclaredProperty]:
        """Properties of an object type or interface body, in source order."""
        properties = []
        if body is None:
            return properties
        for member in body.named_children:
            if member.type not in ("property_signature", "method_signature"):
                continue
            name_node = member.child_by_field_name("name")
            if name_node is None:
                continue
            if name_node.type == "string":
                name = _string_value(name_node)
            elif name_node.type == "computed_property_name":
                # Symbol-keyed members, e.g. [Symbol.iterator]
                name = "__@" + _text(name_node).strip("[]").split(".")[-1]
            else:
                name = _text(name_node)

            optional = any(child.type == "?" for child in member.children)
            if member.type == "method_signature":
                prop_type = DeclaredType(kind=TypeKind.OTHER, text=_normalized_text(member))
            else:
                prop_type = self._resolve_type(member.child_by_field_name("type"), scope)
            properties.append(DeclaredProperty(name=name, type=prop_type, optional=optional))
        return properties

    def _resolve_type(self, node: Node | None, scope: _Scope) -> DeclaredType:
        """Resolve a type node to a DeclaredType."""
        if node is None:
            return DeclaredType(kind=TypeKind.OTHER)

        node_type = node.type
        text = _normalized_text(node)

        if node_type in ("type_annotation", "parenthesized_type"):
            inner = node.named_children
            return self._resolve_type(inner[0] if inner else None, scope)

        if node_type == "predefined_type":
            return DeclaredType(kind=_PREDEFINED_KINDS.get(text, TypeKind.OTHER), text=text)

        if node_type in ("literal_type", "string", "number", "true", "false", "null", "undefined"):
            return self._resolve_literal(node)

        if node_type == "union_type":
            members = [self._resolve_type(member, scope) for member in self._flatten_union(node)]
            return DeclaredType(kind=TypeKind.UNION, text=text, members=members)

        if node_type == "array_type":
            element = self._resolve_type(node.named_children[0], scope)
            return DeclaredType(kind=TypeKind.ARRAY, text=text, element=element)

        if node_type == "readonly_type":
            return self._resolve_type(node.named_children[0], scope)

        if node_type == "object_type":
            return DeclaredType(kind=TypeKind.OBJECT, text=text, properties=self._resolve_members(node, scope))

        if node_type in ("type_identifier", "nested_type_identifier"):
            return self._resolve_reference(text, scope)

        if node_type == "generic_type":
            return self._resolve_generic(node, scope, text)

        if node_type == "type_query":
            inner = node.named_children
            path = _text(inner[0]).split(".") if inner else []
            return self._resolve_value(path, scope, text) if path else DeclaredType(kind=TypeKind.OTHER, text=text)

        if node_type == "lookup_type":
            return self._resolve_lookup(node, scope, text)

        return DeclaredType(kind=TypeKind.OTHER, text=text)

    def _resolve_literal(self, node: Node) -> DeclaredType:
        text = _normalized_text(node)
        inner = node.named_children[0] if node.type == "literal_type" and node.named_children else node

        if inner.type == "null":
            return DeclaredType(kind=TypeKind.NULL, text="null")
        if inner.type == "undefined":
            return DeclaredType(kind=TypeKind.UNDEFINED, text="undefined")
        if inner.type == "string":
            return DeclaredType(kind=TypeKind.LITERAL, text=text, literal_value=_string_value(inner))
        if inner.type in ("true", "false"):
            return DeclaredType(kind=TypeKind.LITERAL, text=text, literal_value=inner.type == "true")
        try:
            value = float(text) if "." in text or "e" in text.lower() else int(text, 0)
        except ValueError:
            return DeclaredType(kind=TypeKind.OTHER, text=text)
        return DeclaredType(kind=TypeKind.LITERAL, text=text, literal_value=value)

    def _flatten_union(self, node: Node) -> list[Node]:
        """Members of a (possibly nested) union type node, in source order."""
        members = []
        for child in node.named_children:
            unwrapped = child
            while unwrapped.type == "parenthesized_type" and unwrapped.named_children:
                unwrapped = unwrapped.named_children[0]
            if unwrapped.type == "union_type":
                members.extend(self._flatten_union(unwrapped))
            else:
                members.append(child)
        return members

    def _resolve_reference(self, text: str, scope: _Scope) -> DeclaredType:
        found = self._lookup(text.split("."), scope, "types")
        if found is not None:
            return self._resolve_declaration(found[0])
        if text in _GLOBAL_KINDS:
            return DeclaredType(kind=_GLOBAL_KINDS[text], text=text)
        logger.debug("Unresolved type reference %s", text)
        return DeclaredType(kind=TypeKind.REFERENCE, text=text)

    def _resolve_generic(self, node: Node, scope: _Scope, text: str) -> DeclaredType:
        name = _text(node.child_by_field_name("name"))
        arguments_node = node.child_by_field_name("type_arguments")
        arguments = arguments_node.named_children if arguments_node is not None else []

        if name in _ARRAY_GENERICS and len(arguments) == 1:
            return DeclaredType(kind=TypeKind.ARRAY, text=text, element=self._resolve_type(arguments[0], scope))

        # Type arguments are not substituted: parameters stay unresolved references
        found = self._lookup(name.split("."), scope, "types")
        if found is not None:
            return self._resolve_declaration(found[0])

        # Client runtime wrappers, imported from the runtime and never declared here
        wrapper = name.split(".")[-1]
        if wrapper == _DEFAULT_SELECTION and arguments:
            return self._resolve_default_selection(self._resolve_type(arguments[0], scope), text)
        if wrapper == _PAYLOAD_RESULT and arguments:
            return self._resolve_type(arguments[0], scope)
        return DeclaredType(kind=TypeKind.REFERENCE, text=text)

    def _resolve_default_selection(self, payload: DeclaredType, text: str) -> DeclaredType:
        """`DefaultSelection<$UserPayload>`: the scalar fields of a model payload."""
        scalars = next((prop.type for prop in payload.properties if prop.name == _PAYLOAD_SCALARS), None)
        if payload.kind != TypeKind.OBJECT or scalars is None or scalars.kind != TypeKind.OBJECT:
            logger.debug("Cannot select scalars of %s", payload.text)
            return DeclaredType(kind=TypeKind.REFERENCE, text=text)
        return DeclaredType(kind=TypeKind.OBJECT, text=text, properties=list(scalars.properties))

    def _resolve_lookup(self, node: Node, scope: _Scope, text: str) -> DeclaredType:
        """Indexed access types: `T["key"]` and `T[keyof T]`."""
        children = node.named_children
        if len(children) < 2:
            return DeclaredType(kind=TypeKind.OTHER, text=text)
        target = self._resolve_type(children[0], scope)
        index = children[1]
        if target.kind != TypeKind.OBJECT:
            return DeclaredType(kind=TypeKind.OTHER, text=text)

        if index.type == "index_type_query":
            selected = [prop.type for prop in target.properties]
        else:
            index_type = self._resolve_type(index, scope)
            if not index_type.is_string_literal:
                return DeclaredType(kind=TypeKind.OTHER, text=text)
            selected = [prop.type for prop in target.properties if prop.name == index_type.literal_value]

        if not selected:
            return DeclaredType(kind=TypeKind.OTHER, text=text)
        if len(selected) == 1:
            return selected[0]
        return DeclaredType(kind=TypeKind.UNION, text=text, members=selected)
