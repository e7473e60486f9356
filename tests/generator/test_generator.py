import logging
from concurrent.futures import ThreadPoolExecutor
from enum import IntEnum

import pytest
from pytest import raises

from shadergen import (
    CompileDiagnostic,
    EntryPointMatrix,
    Generator,
    NotConfigured,
    SchemaMismatch,
    ShaderGeneratorResult,
    SourceBackend,
    TechniqueFamily,
    TemplateNotFound,
    UnsupportedOption,
    family_names,
    get_family,
    register_family,
)
from shadergen.families import shader
from shadergen.generator import family as family_module
from shadergen.generator.parameters import float1, float4, sampler
from shadergen.schema import MacroRule, Method, OptionSchema
from shadergen.utils.enums import Toggle


class Color(IntEnum):
    red = 0
    green = 1
    broken = 2


def make_family():
    schema = OptionSchema(
        "custom",
        [
            Method(
                "color",
                Color,
                macros=[MacroRule("calc_color_ps", "calc_color_", "_ps")],
                pixel_parameters={
                    Color.red: (),
                    Color.green: (sampler("green_map"),),
                    Color.broken: (),
                },
                vertex_parameters={
                    Color.red: (float4("red_scale"),),
                    Color.green: (),
                    Color.broken: (),
                },
                unsupported=[Color.broken],
            ),
            Method(
                "fog",
                Toggle,
                pixel_parameters={Toggle.off: (), Toggle.on: (float1("fog_density"),)},
            ),
        ],
    )
    matrix = EntryPointMatrix(
        supported=["albedo", "z_only"],
        shared_pixel=["z_only"],
        vertex_formats=["world"],
        shared_vertex=["z_only"],
    )
    return TechniqueFamily(
        schema,
        matrix,
        global_parameters=[float4("screen_constants", "screen_constants")],
    )


TEMPLATES = {
    "pixl_custom.hlsl": '#include "lib/helpers.hlsli"\nvoid entry_albedo() {}\n',
    "glps_custom.hlsl": "void entry_z_only() {}\n",
    "vtsh_custom.hlsl": '#include "lib/helpers.hlsli"\nvoid entry_albedo() {}\n',
    "glvs_custom.hlsl": "void entry_z_only() {}\n",
    "lib/helpers.hlsli": "float helper;\n",
}


@pytest.fixture
def custom_family():
    return make_family()


def test_family(custom_family):
    assert custom_family.name == "custom"
    assert custom_family.template("pixel") == "pixl_custom.hlsl"
    assert custom_family.template("shared_pixel") == "glps_custom.hlsl"
    assert custom_family.template("vertex") == "vtsh_custom.hlsl"
    assert custom_family.template("shared_vertex") == "glvs_custom.hlsl"
    assert custom_family.entry_name("albedo") == "entry_albedo"
    assert custom_family.global_parameters.names() == ("screen_constants",)

    family = TechniqueFamily(
        custom_family.schema, custom_family.matrix, templates={"pixel": "other.hlsl"}
    )
    assert family.template("pixel") == "other.hlsl"
    assert family.template("vertex") == "vtsh_custom.hlsl"

    with raises(ValueError):
        TechniqueFamily(custom_family.schema, custom_family.matrix, templates={"compute": "x"})
    with raises(TypeError):
        TechniqueFamily(custom_family.schema, "matrix")
    with raises(SchemaMismatch):
        TechniqueFamily(custom_family.schema, EntryPointMatrix(["albedo"], shared_method=5))


def test_family_registry(custom_family, monkeypatch):
    monkeypatch.setattr(family_module, "_families", dict(family_module._families))

    assert "shader" in family_names()
    assert "particle" in family_names()
    assert get_family("shader") is shader.family
    with raises(ValueError):
        get_family("custom")

    assert register_family(custom_family) is custom_family
    assert get_family("custom") is custom_family
    assert Generator("custom").family is custom_family
    with raises(ValueError):
        register_family(make_family())
    with raises(TypeError):
        register_family("custom")


def test_generator_construction(custom_family):
    schema = custom_family.schema

    gen = Generator(custom_family)
    assert gen.selection is None
    assert gen.schema is schema
    assert not gen.apply_fixes
    assert gen.backend is None

    # The selection can be given in several forms
    expected = schema.selection("green", "on")
    assert Generator(custom_family, expected).selection is expected
    assert Generator(custom_family, ["green", "on"]).selection == expected
    assert Generator(custom_family, [1, 1]).selection == expected
    assert Generator(custom_family, {"color": "green", "fog": 1}).selection == expected
    assert Generator(custom_family, b"\x01\x01").selection == expected

    with raises(SchemaMismatch):
        Generator(custom_family, shader.schema.default_selection())
    with raises(SchemaMismatch):
        Generator(custom_family, make_family().schema.default_selection())
    with raises(SchemaMismatch):
        Generator(custom_family, b"\x01")
    with raises(TypeError):
        Generator(custom_family, backend="source")
    with raises(TypeError):
        Generator(42)
    with raises(TypeError):
        Generator()


def test_introspection(custom_family):
    gen = Generator(custom_family, ["green", "on"])
    assert gen.get_method_count() == 2
    assert gen.get_method_names() == ("color", "fog")
    assert gen.get_method_option_count(0) == 3
    assert gen.get_method_option_value(0) == 1
    assert gen.get_method_option_value(1) == 1
    with raises(SchemaMismatch):
        gen.get_method_option_value(2)

    assert gen.is_entry_point_supported("albedo")
    assert not gen.is_entry_point_supported("static_sh")
    assert gen.is_pixel_shader_shared("z_only")
    assert gen.is_shared_pixel_shader_without_method("z_only")
    assert not gen.is_shared_pixel_shader_using_methods("z_only")
    assert not gen.is_method_shared_in_entry_point("z_only", 0)
    assert gen.is_vertex_format_supported("world")
    assert not gen.is_vertex_format_supported("rigid")
    assert gen.is_vertex_shader_shared("z_only")
    assert not gen.is_vertex_shader_shared("albedo")

    # Introspection without a selection
    gen = Generator(custom_family)
    assert gen.get_method_count() == 2
    with raises(NotConfigured):
        gen.get_method_option_value(0)


def test_parameters(custom_family):
    gen = Generator(custom_family, ["red", "on"])
    assert gen.get_pixel_shader_parameters().names() == ("fog_density",)
    assert gen.get_vertex_shader_parameters().names() == ("red_scale",)
    assert gen.get_global_parameters() is custom_family.global_parameters
    parameters, path, option_name = gen.get_parameters_in_option("color", "green")
    assert parameters.names() == ("green_map",)
    assert path == "shaders\\custom_options\\color_green"

    gen = Generator(custom_family)
    assert gen.get_pixel_shader_parameters() is None
    assert gen.get_vertex_shader_parameters() is None
    assert gen.get_global_parameters().names() == ("screen_constants",)


def test_generate_pixel_shader(custom_family):
    gen = Generator(
        custom_family, ["green", "off"], backend=SourceBackend(), templates=TEMPLATES
    )
    result = gen.generate_pixel_shader("albedo")
    assert isinstance(result, ShaderGeneratorResult)
    assert result.template == "pixl_custom.hlsl"
    assert result.entry == "entry_albedo"
    assert result.profile == "ps_3_0"
    assert isinstance(result.bytecode, bytes)

    source = result.bytecode.decode()
    assert "#define calc_color_ps calc_color_green_ps\n" in source
    assert "#define color_arg k_color_green\n" in source
    assert "#define shaderstage k_shaderstage_albedo\n" in source
    assert "#define APPLY_HLSL_FIXES 0\n" in source
    assert "float helper;" in source
    assert result.macros.get("fog_arg") == "k_fog_off"

    # Stages that are not supported give None
    assert gen.generate_pixel_shader("static_sh") is None


def test_generate_without_backend_or_selection(custom_family, recording_backend):
    gen = Generator(custom_family, ["red", "off"], templates=TEMPLATES)
    with raises(NotConfigured):
        gen.generate_pixel_shader("albedo")
    with raises(NotConfigured):
        gen.generate_shared_pixel_shader("z_only")
    # Not applicable is still None, without a backend
    assert gen.generate_pixel_shader("static_sh") is None

    gen = Generator(custom_family, backend=recording_backend, templates=TEMPLATES)
    with raises(NotConfigured):
        gen.generate_pixel_shader("albedo")
    with raises(NotConfigured):
        gen.generate_vertex_shader("world", "albedo")
    # Shared programs only need the family
    assert gen.generate_shared_pixel_shader("z_only").bytecode == b"entry_z_only"
    assert gen.generate_shared_vertex_shader("world", "z_only").bytecode == b"entry_z_only"


def test_generate_unsupported_option(custom_family, recording_backend):
    gen = Generator(custom_family, ["broken", "off"], backend=recording_backend)
    with raises(UnsupportedOption) as err:
        gen.generate_pixel_shader("albedo")
    assert err.value.option is Color.broken
    with raises(UnsupportedOption):
        gen.generate_vertex_shader("world", "albedo")
    with raises(UnsupportedOption):
        gen.get_pixel_shader_parameters()
    # Applicability is checked first
    assert gen.generate_pixel_shader("static_sh") is None
    assert recording_backend.calls == []


def test_generate_vertex_shader(custom_family, recording_backend):
    gen = Generator(
        custom_family, ["red", "on"], backend=recording_backend, templates=TEMPLATES
    )

    # The albedo vertex program is specific to the selection
    result = gen.generate_vertex_shader("world", "albedo")
    assert result.template == "vtsh_custom.hlsl"
    assert result.entry == "entry_albedo"
    assert result.profile == "vs_3_0"
    assert result.macros.get("color_arg") == "k_color_red"
    assert result.macros.get("input_vertex_format") == "WORLD_VERTEX"
    assert result.macros.get("calc_vertex_transform") == "calc_vertex_transform_world"
    assert gen.generate_shared_vertex_shader("world", "albedo") is None

    # The z_only vertex program is shared
    assert gen.generate_vertex_shader("world", "z_only") is None
    result = gen.generate_shared_vertex_shader("world", "z_only")
    assert result.template == "glvs_custom.hlsl"
    assert "color_arg" not in result.macros
    assert result.macros.get("vertextype") == "k_vertextype_world"

    # Formats and stages that are not supported
    assert gen.generate_vertex_shader("rigid", "albedo") is None
    assert gen.generate_shared_vertex_shader("skinned", "z_only") is None
    assert gen.generate_vertex_shader("world", "static_sh") is None
    assert gen.generate_shared_vertex_shader("world", "static_sh") is None

    assert len(recording_backend.calls) == 2


def test_generate_vertex_shader_source(custom_family):
    gen = Generator(
        custom_family, ["green", "off"], backend=SourceBackend(), templates=TEMPLATES
    )
    source = gen.generate_vertex_shader("world", "albedo").bytecode.decode()
    assert "#define _VERTEX_SHADER_HELPER_HLSLI 1\n" in source
    assert "float helper;" in source


def test_generate_shared_pixel_shader(custom_family, recording_backend):
    gen = Generator(custom_family, backend=recording_backend, templates=TEMPLATES)
    result = gen.generate_shared_pixel_shader("z_only")
    assert result.template == "glps_custom.hlsl"
    assert result.macros.get("shaderstage") == "k_shaderstage_z_only"
    assert "color_arg" not in result.macros

    # The albedo pixel program is not shared
    assert gen.generate_shared_pixel_shader("albedo") is None
    assert gen.generate_shared_pixel_shader("static_sh") is None


def test_pixel_shader_of_shared_stage(custom_family, recording_backend):
    gen = Generator(
        custom_family, ["green", "on"], backend=recording_backend, templates=TEMPLATES
    )
    # A bound generator gives the shared program for a shared stage
    result = gen.generate_pixel_shader("z_only")
    assert result.template == "glps_custom.hlsl"
    assert result.entry == "entry_z_only"
    assert result.macros.get("shaderstage") == "k_shaderstage_z_only"
    assert "color_arg" not in result.macros
    assert "fog_arg" not in result.macros
    shared = gen.generate_shared_pixel_shader("z_only")
    assert result.macros.to_source() == shared.macros.to_source()


def test_apply_fixes_on_every_path(custom_family, recording_backend):
    gen = Generator(
        custom_family, ["red", "off"], apply_fixes=True, backend=recording_backend
    )
    results = [
        gen.generate_pixel_shader("albedo"),
        gen.generate_vertex_shader("world", "albedo"),
        gen.generate_shared_pixel_shader("z_only"),
        gen.generate_shared_vertex_shader("world", "z_only"),
    ]
    for result in results:
        assert result.macros.get("APPLY_HLSL_FIXES") == "1"


def test_bind(custom_family, recording_backend):
    gen = Generator(custom_family, ["red", "off"], backend=recording_backend)
    gen2 = gen.bind(["green", "on"])
    assert gen2 is not gen
    assert list(gen.selection) == [Color.red, Toggle.off]
    assert list(gen2.selection) == [Color.green, Toggle.on]
    assert gen2.backend is recording_backend
    assert gen2.family is custom_family

    # Subclasses keep their class
    gen = shader.ShaderGenerator()
    gen2 = gen.bind({"albedo": "constant_color"})
    assert isinstance(gen2, shader.ShaderGenerator)
    assert gen.selection is None
    assert gen2.selection["albedo"] is shader.Albedo.constant_color


def test_compile_error_is_propagated(custom_family, monkeypatch, capsys):
    templates = dict(TEMPLATES)
    templates["pixl_custom.hlsl"] = "void entry_other() {}\n"
    gen = Generator(
        custom_family, ["red", "off"], backend=SourceBackend(), templates=templates
    )

    monkeypatch.setattr("shadergen.generator.base.PRINT_SOURCE_ON_ERROR", False)
    with raises(CompileDiagnostic) as err:
        gen.generate_pixel_shader("albedo")
    assert "entry_albedo" in err.value.message
    assert capsys.readouterr().err == ""

    monkeypatch.setattr("shadergen.generator.base.PRINT_SOURCE_ON_ERROR", True)
    with raises(CompileDiagnostic):
        gen.generate_pixel_shader("albedo")
    err = capsys.readouterr().err
    assert "pixl_custom.hlsl entry_albedo ps_3_0" in err
    assert "    1: #define _DEFINITION_HELPER_HLSLI 1" in err


def test_missing_template(custom_family):
    gen = Generator(
        custom_family, ["red", "off"], backend=SourceBackend(), templates={}
    )
    with raises(TemplateNotFound):
        gen.generate_pixel_shader("albedo")


def test_generation_is_logged(custom_family, recording_backend, caplog):
    caplog.set_level(logging.INFO, logger="shadergen")
    gen = Generator(custom_family, ["red", "off"], backend=recording_backend)
    gen.generate_pixel_shader("albedo")
    assert "Compiling pixl_custom.hlsl entry_albedo ps_3_0" in caplog.text


def test_concurrent_generation(custom_family):
    # Each request resolves includes in its own context
    def make_templates(i):
        templates = dict(TEMPLATES)
        templates["lib/helpers.hlsli"] = f"float helper_{i};\n"
        return templates

    generators = [
        Generator(
            custom_family,
            [i % 2, 0],
            backend=SourceBackend(),
            templates=make_templates(i),
        )
        for i in range(8)
    ]

    def generate(i):
        return generators[i].generate_pixel_shader("albedo").bytecode.decode()

    with ThreadPoolExecutor(4) as executor:
        sources = list(executor.map(generate, range(8)))

    for i, source in enumerate(sources):
        assert f"float helper_{i};" in source
        for j in range(8):
            if j != i:
                assert f"float helper_{j};" not in source
        expected = "calc_color_green_ps" if i % 2 else "calc_color_red_ps"
        assert expected in source


if __name__ == "__main__":
    pytest.main(["-x", __file__])
