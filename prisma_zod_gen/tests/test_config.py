from prisma_zod_gen.pipeline.config import ARRAY_METHOD_NAMES, GeneratorConfig, OutputMode


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.enum_namespace == "$Enums"
        assert config.opaque_type_marker == "Json"
        assert config.ignore_prefixes == ["Prisma", "_"]
        assert config.ignore_suffixes == ["Input", "Args", "Payload"]
        assert config.ignored_property_prefixes == ["__@"]
        assert config.ignored_property_names == ARRAY_METHOD_NAMES
        assert config.add_generation_comment is False
        assert config.output.mode == OutputMode.FORCE

    def test_defaults_are_not_shared(self):
        first = GeneratorConfig()
        first.ignore_suffixes.append("Select")
        assert GeneratorConfig().ignore_suffixes == ["Input", "Args", "Payload"]

    def test_from_dict(self):
        config = GeneratorConfig.from_dict(
            {
                "enum_namespace": "Enums",
                "ignore_declarations": ["Session"],
                "output": {"mode": "error", "atomic_write": False},
                "unknown_key": 1,
            }
        )
        assert config.enum_namespace == "Enums"
        assert config.ignore_declarations == ["Session"]
        assert config.output.mode == OutputMode.ERROR_IF_EXISTS
        assert config.output.atomic_write is False
        assert config.output.validate_before_write is True
        assert not hasattr(config, "unknown_key")

    def test_dict_round_trip(self):
        config = GeneratorConfig(enum_namespace="Enums", add_generation_comment=True)
        assert GeneratorConfig.from_dict(config.to_dict()) == config
