"""
The "particle" technique family: sprites and particle models. All per-method
macros are also emitted in the auto-categorized ``category_<method>`` form,
and the vertex program takes a ``category_<method>`` constant for most methods.
"""

from enum import IntEnum

from ..generator import EntryPointMatrix, Generator, TechniqueFamily, register_family
from ..generator.macros import DEFINITION_HELPER
from ..generator.parameters import float1, float4, sampler, sampler_without_xform
from ..schema import MacroRule, Method, OptionSchema
from ..utils.enums import RenderMethodExtern as Extern, Toggle


class Albedo(IntEnum):
    diffuse_only = 0
    diffuse_plus_billboard_alpha = 1
    palettized = 2
    palettized_plus_billboard_alpha = 3
    diffuse_plus_sprite_alpha = 4
    palettized_plus_sprite_alpha = 5
    diffuse_modulated = 6
    palettized_glow = 7
    palettized_plasma = 8
    palettized_2d_plasma = 9


class BlendMode(IntEnum):
    opaque = 0
    additive = 1
    multiply = 2
    alpha_blend = 3
    double_multiply = 4
    maximum = 5
    multiply_add = 6
    add_src_times_dstalpha = 7
    add_src_times_srcalpha = 8
    inv_alpha_blend = 9
    pre_multiplied_alpha = 10


class SpecializedRendering(IntEnum):
    none = 0
    distortion = 1
    distortion_expensive = 2
    distortion_diffuse = 3
    distortion_expensive_diffuse = 4


class Lighting(IntEnum):
    none = 0
    per_pixel_ravi_order_3 = 1
    per_vertex_ravi_order_0 = 2


class RenderTargets(IntEnum):
    ldr_and_hdr = 0
    ldr_only = 1


class SelfIllumination(IntEnum):
    none = 0
    constant_color = 1


# %% Parameter tables

_palette = sampler_without_xform("palette")

albedo_parameters = {
    Albedo.diffuse_only: (sampler("base_map"),),
    Albedo.diffuse_plus_billboard_alpha: (sampler("base_map"), sampler("alpha_map")),
    Albedo.palettized: (sampler("base_map"), _palette),
    Albedo.palettized_plus_billboard_alpha: (
        sampler("base_map"),
        _palette,
        sampler("alpha_map"),
    ),
    Albedo.diffuse_plus_sprite_alpha: (sampler("base_map"), sampler("alpha_map")),
    Albedo.palettized_plus_sprite_alpha: (
        sampler("base_map"),
        _palette,
        sampler("alpha_map"),
    ),
    Albedo.diffuse_modulated: (
        sampler("base_map"),
        float4("tint_color"),
        float1("modulation_factor"),
    ),
    Albedo.palettized_glow: (sampler("base_map"), float4("tint_color")),
    Albedo.palettized_plasma: (
        sampler("base_map"),
        sampler("base_map2"),
        _palette,
        sampler("alpha_map"),
        float1("alpha_modulation_factor"),
    ),
    Albedo.palettized_2d_plasma: (
        sampler("base_map"),
        sampler("base_map2"),
        _palette,
        sampler("alpha_map"),
    ),
}

_distortion = (float1("distortion_scale"),)

specialized_rendering_parameters = {
    SpecializedRendering.none: (),
    SpecializedRendering.distortion: _distortion,
    SpecializedRendering.distortion_expensive: _distortion,
    SpecializedRendering.distortion_diffuse: _distortion,
    SpecializedRendering.distortion_expensive_diffuse: _distortion,
}

depth_fade_parameters = {
    Toggle.off: (),
    Toggle.on: (float1("depth_fade_range"),),
}

frame_blend_vertex_parameters = {
    Toggle.off: (),
    Toggle.on: (float1("starting_uv_scale"), float1("ending_uv_scale")),
}

self_illumination_vertex_parameters = {
    SelfIllumination.none: (),
    SelfIllumination.constant_color: (float4("self_illum_color"),),
}


# %% The family

schema = OptionSchema(
    "particle",
    [
        Method(
            "albedo",
            Albedo,
            macros=[MacroRule("calc_albedo_ps", "calc_albedo_", "_ps")],
            pixel_parameters=albedo_parameters,
            category_parameter=True,
        ),
        Method(
            "blend_mode",
            BlendMode,
            macros=[MacroRule("blend_type", "blend_type_")],
            arg_name="blend_type_arg",
            category_parameter=True,
        ),
        Method(
            "specialized_rendering",
            SpecializedRendering,
            macros=[
                MacroRule("particle_specialized_rendering", "specialized_rendering_")
            ],
            pixel_parameters=specialized_rendering_parameters,
            category_parameter=True,
        ),
        Method(
            "lighting",
            Lighting,
            macros=[MacroRule("particle_lighting", "lighting_")],
            category_parameter=True,
        ),
        Method(
            "render_targets",
            RenderTargets,
            macros=[MacroRule("particle_render_targets", "render_targets_")],
        ),
        Method("depth_fade", Toggle, pixel_parameters=depth_fade_parameters),
        Method("black_point", Toggle),
        Method("fog", Toggle, category_parameter=True),
        Method(
            "frame_blend",
            Toggle,
            vertex_parameters=frame_blend_vertex_parameters,
            category_parameter=True,
        ),
        Method(
            "self_illumination",
            SelfIllumination,
            vertex_parameters=self_illumination_vertex_parameters,
            category_parameter=True,
        ),
    ],
    auto_macros=True,
)

matrix = EntryPointMatrix(
    supported=["default"],
    vertex_formats=["particle", "particle_model"],
)

global_parameters = [
    sampler_without_xform("depth_buffer", Extern.texture_global_target_z),
    float4("screen_constants", Extern.screen_constants),
]

family = register_family(
    TechniqueFamily(
        schema,
        matrix,
        global_parameters=global_parameters,
        vertex_transforms=["calc_vertex_transform", "transform_unknown_vector"],
        vertex_sentinel=DEFINITION_HELPER,
    )
)


class ParticleGenerator(Generator):
    """Generator for the "particle" technique family.

    Parameters
    ----------
    selection : SelectionVector | bytes | dict | sequence | None
        The selection to bind. None for a generator of shared programs only.
    kwargs : dict
        Passed to ``Generator``: apply_fixes, backend and templates.
    """

    family_name = "particle"

    def __init__(self, selection=None, **kwargs):
        super().__init__(self.family_name, selection, **kwargs)
