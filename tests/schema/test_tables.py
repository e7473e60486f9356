from enum import IntEnum

import pytest

from shadergen.families import shader
from shadergen.families.shader import Parallax
from shadergen.generator.parameters import float1, float4, sampler
from shadergen.schema import MacroRule, Method
from shadergen.utils import ReadOnlyDict


class Color(IntEnum):
    red = 0
    green = 1
    blue = 2


def make_method(**tables):
    return Method("color", Color, **tables)


def test_substitute_is_read_only():
    rule = MacroRule(
        "calc_parallax_vs",
        "calc_parallax_",
        "_vs",
        substitute={Parallax.simple_detail: Parallax.simple},
    )
    table = rule.substitute
    assert isinstance(table, ReadOnlyDict)
    assert rule.definition(Parallax.simple_detail) == "calc_parallax_simple_vs"

    with pytest.raises(TypeError):
        table[Parallax.simple_detail] = Parallax.off
    with pytest.raises(TypeError):
        table[Parallax.off] = Parallax.simple
    with pytest.raises(TypeError):
        del table[Parallax.simple_detail]
    with pytest.raises(TypeError):
        table.update({Parallax.off: Parallax.simple})
    with pytest.raises(TypeError):
        table.pop(Parallax.simple_detail)
    with pytest.raises(TypeError):
        table.popitem()
    with pytest.raises(TypeError):
        table.setdefault(Parallax.off, Parallax.simple)
    with pytest.raises(TypeError):
        table.clear()
    # No attributes can be added either
    with pytest.raises(AttributeError):
        table.foo = 3

    # The rule still gives the same definition
    assert rule.definition(Parallax.simple_detail) == "calc_parallax_simple_vs"
    assert rule.definition(Parallax.off) == "calc_parallax_off_vs"


def test_substitute_hash():
    rule1 = MacroRule("calc_color", "calc_color_", substitute={Color.blue: Color.red})
    rule2 = MacroRule("calc_color", "calc_color_", substitute={Color.blue: Color.red})
    rule3 = MacroRule(
        "calc_color",
        "calc_color_",
        substitute={Color.green: Color.red, Color.blue: Color.red},
    )
    rule4 = MacroRule(
        "calc_color",
        "calc_color_",
        substitute={Color.blue: Color.red, Color.green: Color.red},
    )
    assert rule1.substitute == rule2.substitute
    assert hash(rule1.substitute) == hash(rule2.substitute)
    # The order of the entries does not matter
    assert rule3.substitute == rule4.substitute
    assert hash(rule3.substitute) == hash(rule4.substitute)

    assert rule1.substitute != rule3.substitute
    assert hash(rule1.substitute) != hash(rule3.substitute)

    # Without substitutions, the table is empty
    rule = MacroRule("calc_color", "calc_color_")
    assert rule.substitute == {}
    assert rule.definition(Color.blue) == "calc_color_blue"

    # Substitutions must be hashable
    with pytest.raises(TypeError):
        MacroRule("calc_color", "calc_color_", substitute={Color.blue: [Color.red]})


def test_parameter_tables_are_read_only():
    method = make_method(
        pixel_parameters={
            Color.red: (),
            Color.green: [sampler("green_map")],
            Color.blue: (float1("blue_scale"),),
        }
    )
    table = method.pixel_parameters
    assert isinstance(table, ReadOnlyDict)
    # Lists are stored as tuples
    assert table[Color.green] == (sampler("green_map"),)

    with pytest.raises(TypeError):
        table[Color.red] = (float4("red_tint"),)
    with pytest.raises(TypeError):
        del table[Color.blue]
    with pytest.raises(TypeError):
        table.update({Color.red: ()})
    with pytest.raises(TypeError):
        table.setdefault(Color.red, ())
    with pytest.raises(TypeError):
        table.clear()
    assert table[Color.red] == ()
    assert len(table) == 3

    # A method without a table has an empty entry for every option
    assert method.vertex_parameters == {Color.red: (), Color.green: (), Color.blue: ()}
    with pytest.raises(TypeError):
        method.vertex_parameters[Color.red] = (float4("red_tint"),)


def test_parameter_tables_hash():
    table = {
        Color.red: (),
        Color.green: (sampler("green_map"),),
        Color.blue: (float1("blue_scale"),),
    }
    reordered = {k: table[k] for k in reversed(list(table))}
    m1 = make_method(pixel_parameters=table)
    m2 = make_method(pixel_parameters=reordered)
    m3 = make_method(pixel_parameters={**table, Color.blue: ()})
    m4 = make_method(pixel_parameters={**table, Color.green: (sampler("other_map"),)})

    assert m1.pixel_parameters == m2.pixel_parameters
    assert hash(m1.pixel_parameters) == hash(m2.pixel_parameters)
    for m in (m3, m4):
        assert m1.pixel_parameters != m.pixel_parameters
        assert hash(m1.pixel_parameters) != hash(m.pixel_parameters)

    # The pixel and vertex tables of the same options are the same table
    m5 = make_method(pixel_parameters=table, vertex_parameters=table)
    assert hash(m5.pixel_parameters) == hash(m5.vertex_parameters)


def test_family_tables_are_hashable():
    # All tables of the builtin families can be used as keys
    for method in shader.schema.methods:
        assert hash(method.pixel_parameters) == hash(
            ReadOnlyDict(dict(method.pixel_parameters))
        )
        hash(method.vertex_parameters)
        for rule in method.macros:
            hash(rule.substitute)

    albedo = shader.schema.get_method("albedo")
    tables = {albedo.pixel_parameters: "albedo"}
    assert tables[ReadOnlyDict(albedo.pixel_parameters)] == "albedo"


if __name__ == "__main__":
    test_substitute_is_read_only()
    test_substitute_hash()
    test_parameter_tables_are_read_only()
    test_parameter_tables_hash()
    test_family_tables_are_hashable()
