from pathlib import Path

import pytest

from prisma_zod_gen.pipeline.declarations import (
    DeclarationKind,
    DeclarationProvider,
    DeclarationSourceError,
    TypeKind,
)

TEST_DATA = Path(__file__).parent / "test_data"


def exported(source):
    return {decl.name: decl for decl in DeclarationProvider(source).exported_declarations()}


class TestLoading:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DeclarationSourceError, match="not found"):
            DeclarationProvider.from_path(tmp_path / "index.d.ts")

    def test_syntax_error(self):
        with pytest.raises(DeclarationSourceError, match=r"broken\.d\.ts at line \d+"):
            DeclarationProvider("export type A = string\nexport interface {{\n", "broken.d.ts")

    def test_from_path(self):
        provider = DeclarationProvider.from_path(TEST_DATA / "client.d.ts")
        assert provider.path.endswith("client.d.ts")
        assert provider.has_namespace("$Enums")
        assert provider.has_namespace("Prisma")
        assert not provider.has_namespace("Enums")


class TestExportedDeclarations:
    def test_source_order_and_kinds(self):
        source = """
export type A = { id: number }
export interface B { id: number }
export const C: string
export enum D { X = 'X' }
type Hidden = { id: number }
"""
        decls = DeclarationProvider(source).exported_declarations()
        assert [(decl.name, decl.kind) for decl in decls] == [
            ("A", DeclarationKind.TYPE_ALIAS),
            ("B", DeclarationKind.INTERFACE),
            ("C", DeclarationKind.VARIABLE),
            ("D", DeclarationKind.ENUM),
        ]

    def test_properties(self):
        decls = exported(
            """
export type User = {
  id: number
  name?: string | null
  tags: string[]
  createdAt: Date
}
"""
        )
        declared = decls["User"].type
        assert declared.kind == TypeKind.OBJECT
        assert [prop.name for prop in declared.properties] == ["id", "name", "tags", "createdAt"]

        id_prop, name_prop, tags_prop, created_prop = declared.properties
        assert id_prop.type.kind == TypeKind.NUMBER
        assert name_prop.optional
        assert [member.kind for member in name_prop.type.members] == [TypeKind.STRING, TypeKind.NULL]
        assert tags_prop.type.kind == TypeKind.ARRAY
        assert tags_prop.type.element.kind == TypeKind.STRING
        assert created_prop.type.kind == TypeKind.DATE

    def test_generic_array(self):
        decls = exported("export type Tags = { values: Array<string> }")
        values = decls["Tags"].type.properties[0].type
        assert values.kind == TypeKind.ARRAY
        assert values.element.kind == TypeKind.STRING

    def test_interface_own_and_inherited_properties(self):
        decls = exported(
            """
export interface Base { id: number }
export interface Child extends Base { name: string }
"""
        )
        child = decls["Child"]
        assert [prop.name for prop in child.properties] == ["name"]
        assert [prop.name for prop in child.type.properties] == ["name", "id"]

    def test_named_types_are_shared(self):
        decls = exported(
            """
export type User = { id: number }
export type Post = { author: User, editor: User }
"""
        )
        author, editor = decls["Post"].type.properties
        assert author.type is decls["User"].type
        assert editor.type is decls["User"].type
        assert author.type.alias_name == "User"

    def test_self_reference_resolves_to_declaration(self):
        decls = exported("export type Node = { parent: Node | null }")
        node = decls["Node"].type
        parent = node.properties[0].type
        assert parent.members[0] is node

    def test_computed_and_method_members(self):
        decls = exported(
            """
export interface Items {
  [Symbol.iterator](): Iterator<string>
  count(): number
  size: number
}
"""
        )
        names = [prop.name for prop in decls["Items"].properties]
        assert names == ["__@iterator", "count", "size"]
        assert decls["Items"].properties[1].type.kind == TypeKind.OTHER

    def test_unresolved_reference(self):
        decls = exported("export type Box = { value: Missing }")
        value = decls["Box"].type.properties[0].type
        assert value.kind == TypeKind.REFERENCE
        assert value.text == "Missing"


class TestEnumNamespace:
    @pytest.fixture
    def provider(self):
        return DeclarationProvider.from_path(TEST_DATA / "client.d.ts")

    def test_enum_declarations(self, provider):
        enums = provider.enum_declarations("$Enums")
        assert [(enum.name, enum.values) for enum in enums] == [("Status", ["ACTIVE", "BANNED"])]

    def test_const_object_enum_alias(self, provider):
        aliases = {alias.name: alias for alias in provider.type_aliases("$Enums")}
        role = aliases["Role"].type
        assert role.kind == TypeKind.UNION
        assert [member.literal_value for member in role.members] == ["USER", "ADMIN"]
        assert role.alias_name == "Role"

    def test_enum_member_without_initializer(self):
        provider = DeclarationProvider("export namespace $Enums { export enum Color { RED, GREEN = 'green' } }")
        enums = provider.enum_declarations("$Enums")
        assert enums[0].values == ["RED", "green"]

    def test_top_level_alias_keeps_enum_name(self, provider):
        decls = {decl.name: decl for decl in provider.exported_declarations() if decl.kind == DeclarationKind.TYPE_ALIAS}
        assert decls["Role"].type.alias_name == "Role"
        assert decls["Status"].type.symbol_name == "Status"

    def test_unknown_namespace(self, provider):
        assert provider.enum_declarations("Enums") == []
        assert provider.type_aliases("Enums") == []


class TestModelSelection:
    """Models declared through the client runtime's payload types"""

    SOURCE = """
import * as runtime from './runtime/library.js';
import $Extensions = runtime.Types.Extensions
import $Result = runtime.Types.Result

export type User = $Result.DefaultSelection<Prisma.$UserPayload>

export namespace Prisma {
  export type $UserPayload<ExtArgs extends $Extensions.InternalArgs = $Extensions.DefaultArgs> = {
    name: "User"
    objects: {
      posts: string[]
    }
    scalars: $Extensions.GetPayloadResult<{
      id: number
      email: string
    }, ExtArgs["result"]["user"]>
    composites: {}
  }
}
"""

    def test_model_is_its_scalar_fields(self):
        user = exported(self.SOURCE)["User"].type
        assert user.kind == TypeKind.OBJECT
        assert [prop.name for prop in user.properties] == ["id", "email"]
        assert [prop.type.kind for prop in user.properties] == [TypeKind.NUMBER, TypeKind.STRING]
        assert user.alias_name == "User"

    def test_unknown_payload(self):
        source = "import $Result = runtime.Types.Result\nexport type User = $Result.DefaultSelection<Missing>\n"
        user = exported(source)["User"].type
        assert user.kind == TypeKind.REFERENCE
