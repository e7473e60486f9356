"""
The enums shared by all technique families.

Option domains are ``IntEnum`` classes: the integer value of a member is its
ordinal (used in macro definitions and in the byte encoding of a selection),
and the member name is its display name (used, lower-cased, in macro names).

.. currentmodule:: shadergen.utils.enums

.. autosummary::
    :toctree: utils/enums

    ShaderStage
    VertexType
    ShaderType
    RenderMethodExtern
    Toggle
    AlphaTest

"""

from enum import Enum, IntEnum


__all__ = [
    "AlphaTest",
    "RenderMethodExtern",
    "ShaderStage",
    "ShaderType",
    "Toggle",
    "VertexType",
]


class ShaderStage(IntEnum):
    """The entry points that a template can define."""

    default = 0
    albedo = 1
    static_default = 2
    static_per_pixel = 3
    static_per_vertex = 4
    static_sh = 5
    static_prt_ambient = 6
    static_prt_linear = 7
    static_prt_quadratic = 8
    dynamic_light = 9
    shadow_generate = 10
    shadow_apply = 11
    active_camo = 12
    lightmap_debug_mode = 13
    static_per_vertex_color = 14
    water_tesselation = 15
    water_shading = 16
    dynamic_light_cinematic = 17
    z_only = 18
    sfx_distort = 19


class VertexType(IntEnum):
    """The input vertex layouts."""

    world = 0
    rigid = 1
    skinned = 2
    particle_model = 3
    flat_world = 4
    flat_rigid = 5
    flat_skinned = 6
    screen = 7
    debug = 8
    transparent = 9
    particle = 10
    contrail = 11
    light_volume = 12
    chud_simple = 13
    chud_fancy = 14
    decorator = 15
    tiny_position = 16
    patchy_fog = 17
    water = 18
    ripple = 19
    implicit = 20
    beam = 21


class ShaderType(IntEnum):
    """The technique family tags. A family's name must be one of these."""

    shader = 0
    beam = 1
    contrail = 2
    decal = 3
    halogram = 4
    light_volume = 5
    particle = 6
    terrain = 7
    cortana = 8
    water = 9
    black = 10
    screen = 11
    custom = 12
    foliage = 13
    zonly = 14
    glass = 15


class RenderMethodExtern(str, Enum):
    """Sources for parameters whose value is supplied by the engine rather than the material."""

    texture_global_target_texaccum = "texture_global_target_texaccum"
    texture_global_target_normal = "texture_global_target_normal"
    texture_global_target_z = "texture_global_target_z"
    texture_global_target_shadow_buffer1 = "texture_global_target_shadow_buffer1"
    texture_lightprobe_texture = "texture_lightprobe_texture"
    texture_dynamic_light_gel_0 = "texture_dynamic_light_gel_0"
    texture_dominant_light_intensity_map = "texture_dominant_light_intensity_map"
    texture_dynamic_environment_map_0 = "texture_dynamic_environment_map_0"
    texture_dynamic_environment_map_1 = "texture_dynamic_environment_map_1"
    texture_cook_torrance_cc0236 = "texture_cook_torrance_cc0236"
    texture_cook_torrance_dd0236 = "texture_cook_torrance_dd0236"
    texture_cook_torrance_c78d78 = "texture_cook_torrance_c78d78"
    active_camo_distortion_texture = "active_camo_distortion_texture"
    scene_ldr_texture = "scene_ldr_texture"
    scene_hdr_texture = "scene_hdr_texture"
    debug_tint = "debug_tint"
    screen_constants = "screen_constants"
    object_change_color_primary = "object_change_color_primary"
    object_change_color_secondary = "object_change_color_secondary"
    object_change_color_tertiary = "object_change_color_tertiary"
    object_change_color_quaternary = "object_change_color_quaternary"
    object_change_color_primary_anim = "object_change_color_primary_anim"
    object_change_color_secondary_anim = "object_change_color_secondary_anim"
    flat_envmap_matrix_x = "flat_envmap_matrix_x"
    flat_envmap_matrix_y = "flat_envmap_matrix_y"
    flat_envmap_matrix_z = "flat_envmap_matrix_z"


# Option domains that mean the same thing in every family.


class Toggle(IntEnum):
    """A method that is either disabled or enabled."""

    off = 0
    on = 1


class AlphaTest(IntEnum):
    """Alpha-tested (clip) or not."""

    none = 0
    simple = 1


def to_member(domain, value):
    """Get the member of the given enum for a member, name or value.

    Raises ValueError if there is no such member.
    """
    if isinstance(value, domain):
        return value
    if isinstance(value, str):
        try:
            return domain[value.lower()]
        except KeyError:
            raise ValueError(f"{domain.__name__} has no member {value!r}") from None
    if isinstance(value, Enum):
        raise ValueError(f"Expected a {domain.__name__}, got {value!r}")
    return domain(value)
