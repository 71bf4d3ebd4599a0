import logging

import pytest

from prisma_zod_gen.pipeline.analyzer.enum_registry import EnumRegistry
from prisma_zod_gen.pipeline.backends.translator import ANY_SCHEMA, TypeTranslator, enum_expression
from prisma_zod_gen.pipeline.config import GeneratorConfig
from prisma_zod_gen.pipeline.declarations.types import DeclaredProperty, DeclaredType, TypeKind


def string():
    return DeclaredType(kind=TypeKind.STRING, text="string")


def number():
    return DeclaredType(kind=TypeKind.NUMBER, text="number")


def null():
    return DeclaredType(kind=TypeKind.NULL, text="null")


def undefined():
    return DeclaredType(kind=TypeKind.UNDEFINED, text="undefined")


def literal(value):
    return DeclaredType(kind=TypeKind.LITERAL, text=f'"{value}"', literal_value=value)


def union(*members, text=None, alias_name=None):
    return DeclaredType(
        kind=TypeKind.UNION,
        text=text or " | ".join(member.text for member in members),
        members=list(members),
        alias_name=alias_name,
    )


def obj(text="{ }", **properties):
    return DeclaredType(
        kind=TypeKind.OBJECT,
        text=text,
        properties=[DeclaredProperty(name=name, type=prop_type) for name, prop_type in properties.items()],
    )


@pytest.fixture
def registry():
    return EnumRegistry()


@pytest.fixture
def translator(registry):
    return TypeTranslator(registry, GeneratorConfig())


class TestPrimitives:
    """Primitive and array rules"""

    @pytest.mark.parametrize(
        "kind,text,expected",
        [
            (TypeKind.STRING, "string", "z.string()"),
            (TypeKind.NUMBER, "number", "z.number()"),
            (TypeKind.BOOLEAN, "boolean", "z.boolean()"),
            (TypeKind.DATE, "Date", "z.date()"),
            (TypeKind.BIGINT, "bigint", "z.bigint()"),
        ],
    )
    def test_primitive(self, translator, kind, text, expected):
        assert translator.translate(DeclaredType(kind=kind, text=text)) == expected

    def test_date_recognized_by_name(self, translator):
        assert translator.translate(DeclaredType(kind=TypeKind.REFERENCE, text="Date")) == "z.date()"

    def test_nested_arrays(self, translator):
        inner = DeclaredType(kind=TypeKind.ARRAY, text="string[]", element=string())
        outer = DeclaredType(kind=TypeKind.ARRAY, text="string[][]", element=inner)
        assert translator.translate(outer) == "z.array(z.array(z.string()))"

    def test_unknown_kinds_are_any(self, translator):
        assert translator.translate(DeclaredType(kind=TypeKind.OTHER, text="() => void")) == ANY_SCHEMA
        assert translator.translate(DeclaredType(kind=TypeKind.REFERENCE, text="T")) == ANY_SCHEMA

    def test_empty_object_is_any(self, translator):
        assert translator.translate(obj()) == ANY_SCHEMA


class TestUnions:
    """Union, nullable and literal-union rules"""

    def test_literal_union_keeps_order(self, translator):
        declared = union(literal("DRAFT"), literal("LIVE"), literal("ARCHIVED"))
        assert translator.translate(declared) == 'z.enum(["DRAFT", "LIVE", "ARCHIVED"] as const)'

    def test_nullable_single_member(self, translator):
        assert translator.translate(union(string(), null())) == "z.string().nullable()"

    def test_nullable_multiple_members(self, translator):
        declared = union(string(), number(), null())
        assert translator.translate(declared) == "z.union([z.string(), z.number()]).nullable()"

    def test_plain_union(self, translator):
        assert translator.translate(union(string(), number())) == "z.union([z.string(), z.number()])"

    def test_null_only_union_is_any(self, translator):
        assert translator.translate(union(null(), null())) == ANY_SCHEMA


class TestEnumReferences:
    """Registered enums are referenced, never re-expanded"""

    def test_registered_alias_is_referenced(self, registry, translator):
        registry.register("Role", "enum_RoleSchema")
        declared = union(literal("USER"), literal("ADMIN"), alias_name="Role")
        assert translator.translate(declared) == "enum_RoleSchema"

    def test_namespace_reference(self, registry, translator):
        registry.register("Role", "enum_RoleSchema")
        declared = DeclaredType(kind=TypeKind.REFERENCE, text="$Enums.Role")
        assert translator.translate(declared) == "enum_RoleSchema"

    def test_nullable_namespace_reference(self, registry, translator):
        registry.register("Role", "enum_RoleSchema")
        role = DeclaredType(kind=TypeKind.REFERENCE, text="$Enums.Role")
        assert translator.translate(union(role, null())) == "enum_RoleSchema.nullable()"

    def test_missing_namespace_reference_warns(self, translator, caplog):
        declared = DeclaredType(kind=TypeKind.REFERENCE, text="$Enums.Missing")
        with caplog.at_level(logging.WARNING):
            assert translator.translate(declared) == ANY_SCHEMA
        assert "Enum Missing referenced in $Enums not found in enum registry" in caplog.text

    def test_symbol_name(self, registry, translator):
        registry.register("Status", "enum_StatusSchema")
        declared = union(literal("ACTIVE"), literal("BANNED"), text="Status")
        declared.symbol_name = "Status"
        assert translator.translate(declared) == "enum_StatusSchema"

    def test_custom_namespace(self, registry):
        registry.register("Role", "enum_RoleSchema")
        translator = TypeTranslator(registry, GeneratorConfig(enum_namespace="Enums"))
        declared = DeclaredType(kind=TypeKind.REFERENCE, text="Enums.Role")
        assert translator.translate(declared) == "enum_RoleSchema"


class TestOpaqueTypes:
    def test_json_marker(self, translator):
        declared = union(DeclaredType(kind=TypeKind.REFERENCE, text="Prisma.JsonValue"), null())
        assert translator.translate(declared) == ANY_SCHEMA

    def test_marker_is_configurable(self, registry):
        translator = TypeTranslator(registry, GeneratorConfig(opaque_type_marker="Blob"))
        assert translator.translate(DeclaredType(kind=TypeKind.REFERENCE, text="BlobPart")) == ANY_SCHEMA
        assert translator.translate(DeclaredType(kind=TypeKind.STRING, text="Json")) == "z.string()"


class TestProperties:
    """Optional handling and object rendering"""

    def test_optional_equivalence(self, translator):
        question = DeclaredProperty(name="age", type=number(), optional=True)
        with_undefined = DeclaredProperty(name="age", type=union(number(), undefined()))
        assert translator.translate_property(question, set()) == "z.number().optional()"
        assert translator.translate_property(with_undefined, set()) == "z.number().optional()"

    def test_nullable_and_optional(self, translator):
        prop = DeclaredProperty(name="name", type=union(string(), null(), undefined()))
        assert translator.translate_property(prop, set()) == "z.string().nullable().optional()"

    def test_ignored_properties(self, translator):
        declared = obj(
            id=number(),
            map=DeclaredType(kind=TypeKind.OTHER, text="map"),
            **{"__@iterator": DeclaredType(kind=TypeKind.OTHER, text="iterator")},
        )
        assert translator.translate(declared) == "z.object({\n  id: z.number(),\n})"

    def test_quoted_keys(self, translator):
        declared = obj(**{"first-name": string()})
        assert translator.translate(declared) == 'z.object({\n  "first-name": z.string(),\n})'

    def test_nested_indentation(self, translator):
        declared = obj(address=obj(city=string()))
        expected = "z.object({\n  address: z.object({\n    city: z.string(),\n  }),\n})"
        assert translator.translate(declared) == expected


class TestCycles:
    """Recursive references degrade to z.any()"""

    def test_self_reference(self, translator, caplog):
        node = DeclaredType(kind=TypeKind.OBJECT, text="Node", alias_name="Node")
        node.properties = [
            DeclaredProperty(name="value", type=number()),
            DeclaredProperty(name="parent", type=node),
        ]
        with caplog.at_level(logging.WARNING):
            result = translator.translate_shape(node.properties, node)
        assert result == "z.object({\n  value: z.number(),\n  parent: z.any(),\n})"
        assert "Recursive type detected for: Node" in caplog.text

    def test_shared_type_twice_in_one_request(self, translator):
        point = obj(text="Point", x=number())
        line = obj(text="Line", start=point, end=point)
        expected = "z.object({\n  start: z.object({\n    x: z.number(),\n  }),\n  end: z.any(),\n})"
        assert translator.translate(line) == expected

    def test_shape_properties_are_separate_requests(self, translator):
        point = obj(text="Point", x=number())
        owner = obj(text="Line", start=point, end=point)
        expected = (
            "z.object({\n"
            "  start: z.object({\n    x: z.number(),\n  }),\n"
            "  end: z.object({\n    x: z.number(),\n  }),\n"
            "})"
        )
        assert translator.translate_shape(owner.properties, owner) == expected


def test_enum_expression_escapes_values():
    assert enum_expression(['say "hi"', "plain"]) == 'z.enum(["say \\"hi\\"", "plain"] as const)'
