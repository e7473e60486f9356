from pytest import raises

from shadergen.utils import assert_type, env_flag
from shadergen.utils.enums import (
    RenderMethodExtern,
    ShaderStage,
    ShaderType,
    Toggle,
    VertexType,
    to_member,
)


def test_enums():
    # The values are the ordinals used in the macro tables
    assert list(ShaderStage)[:3] == [0, 1, 2]
    assert [int(v) for v in VertexType] == list(range(len(VertexType)))
    assert [int(t) for t in ShaderType] == list(range(len(ShaderType)))
    assert ShaderStage.shadow_generate == 10
    assert VertexType.particle == 10
    assert ShaderType.particle == 6

    assert RenderMethodExtern.scene_ldr_texture == "scene_ldr_texture"


def test_to_member():
    assert to_member(ShaderStage, ShaderStage.albedo) is ShaderStage.albedo
    assert to_member(ShaderStage, "albedo") is ShaderStage.albedo
    assert to_member(ShaderStage, "ALBEDO") is ShaderStage.albedo
    assert to_member(ShaderStage, 1) is ShaderStage.albedo
    assert to_member(VertexType, "particle_model") is VertexType.particle_model

    with raises(ValueError):
        to_member(ShaderStage, "foo")
    with raises(ValueError):
        to_member(ShaderStage, 99)
    # Members of other enums are not converted by value
    with raises(ValueError):
        to_member(ShaderStage, Toggle.on)


def test_env_flag(monkeypatch):
    monkeypatch.delenv("SHADERGEN_TEST_FLAG", raising=False)
    assert not env_flag("SHADERGEN_TEST_FLAG")
    assert env_flag("SHADERGEN_TEST_FLAG", "1")
    for value in ["1", "true", "yes", "on"]:
        monkeypatch.setenv("SHADERGEN_TEST_FLAG", value)
        assert env_flag("SHADERGEN_TEST_FLAG")
    for value in ["", "0", "false", "False", "no"]:
        monkeypatch.setenv("SHADERGEN_TEST_FLAG", value)
        assert not env_flag("SHADERGEN_TEST_FLAG")


def test_assert_type():
    assert_type("x", 3, int)
    assert_type("x", None, None, int)
    assert_type("x", "s", int, str)

    with raises(TypeError) as err:
        assert_type("x", "s", int)
    assert str(err.value) == "Expected 'x' to be an instance of int, but got str object."

    with raises(TypeError) as err:
        assert_type("x", 3.0, None, int)
    assert "or None" in str(err.value)


if __name__ == "__main__":
    test_enums()
    test_to_member()
    test_assert_type()
