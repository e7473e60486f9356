"""
The "shader" technique family: the general purpose surface shader for
world geometry, with eleven methods.
"""

from enum import IntEnum

from ..generator import EntryPointMatrix, Generator, TechniqueFamily, register_family
from ..generator.parameters import (
    boolean,
    float1,
    float3,
    float3_color,
    float4,
    float4_color,
    sampler,
    sampler_without_xform,
)
from ..schema import MacroRule, Method, OptionSchema
from ..utils.enums import AlphaTest, RenderMethodExtern as Extern, Toggle


class Albedo(IntEnum):
    default = 0
    detail_blend = 1
    constant_color = 2
    two_change_color = 3
    four_change_color = 4
    three_detail_blend = 5
    two_detail_overlay = 6
    two_detail = 7
    color_mask = 8
    two_detail_black_point = 9
    two_change_color_anim_overlay = 10
    chameleon = 11
    two_change_color_chameleon = 12
    chameleon_masked = 13
    color_mask_hard_light = 14


class BumpMapping(IntEnum):
    off = 0
    standard = 1
    detail = 2
    detail_masked = 3


class SpecularMask(IntEnum):
    no_specular_mask = 0
    specular_mask_from_diffuse = 1
    specular_mask_from_texture = 2
    specular_mask_from_color_texture = 3


class MaterialModel(IntEnum):
    diffuse_only = 0
    cook_torrance = 1
    two_lobe_phong = 2
    foliage = 3
    none = 4
    glass = 5
    organism = 6
    single_lobe_phong = 7
    car_paint = 8  #: not supported by the templates


class EnvironmentMapping(IntEnum):
    none = 0
    per_pixel = 1
    dynamic = 2
    from_flat_texture = 3
    custom_map = 4


class SelfIllumination(IntEnum):
    off = 0
    simple = 1
    _3_channel_self_illum = 2
    plasma = 3
    from_diffuse = 4
    illum_detail = 5
    meter = 6
    self_illum_times_diffuse = 7
    simple_with_alpha_mask = 8
    simple_four_change_color = 9


class BlendMode(IntEnum):
    opaque = 0
    additive = 1
    multiply = 2
    alpha_blend = 3
    double_multiply = 4
    pre_multiplied_alpha = 5


class Parallax(IntEnum):
    off = 0
    simple = 1
    interpolated = 2
    simple_detail = 3


class Misc(IntEnum):
    first_person_never = 0
    first_person_sometimes = 1


# %% Parameter tables


_change_colors = (
    float3_color("primary_change_color", Extern.object_change_color_primary),
    float3_color("secondary_change_color", Extern.object_change_color_secondary),
)

_chameleon = (
    float4_color("chameleon_color0"),
    float4_color("chameleon_color1"),
    float4_color("chameleon_color2"),
    float4_color("chameleon_color3"),
    float1("chameleon_color_offset1"),
    float1("chameleon_color_offset2"),
    float1("chameleon_fresnel_power"),
)

_base_detail = (sampler("base_map"), sampler("detail_map"))

albedo_parameters = {
    Albedo.default: _base_detail + (float4_color("albedo_color"),),
    Albedo.detail_blend: _base_detail + (sampler("detail_map2"),),
    Albedo.constant_color: (float4_color("albedo_color"),),
    Albedo.two_change_color: _base_detail
    + (sampler("change_color_map"),)
    + _change_colors,
    Albedo.four_change_color: _base_detail
    + (sampler("change_color_map"),)
    + _change_colors
    + (
        float3_color("tertiary_change_color", Extern.object_change_color_tertiary),
        float3_color("quaternary_change_color", Extern.object_change_color_quaternary),
    ),
    Albedo.three_detail_blend: _base_detail
    + (sampler("detail_map2"), sampler("detail_map3")),
    Albedo.two_detail_overlay: _base_detail
    + (sampler("detail_map2"), sampler("detail_map_overlay")),
    Albedo.two_detail: _base_detail + (sampler("detail_map2"),),
    Albedo.color_mask: _base_detail
    + (
        sampler("color_mask_map"),
        float4_color("albedo_color"),
        float4_color("albedo_color2"),
        float4_color("albedo_color3"),
        float4_color("neutral_gray"),
    ),
    Albedo.two_detail_black_point: _base_detail + (sampler("detail_map2"),),
    Albedo.two_change_color_anim_overlay: _base_detail
    + (sampler("change_color_map"),)
    + _change_colors
    + (
        float4("primary_change_color_anim", Extern.object_change_color_primary_anim),
        float4("secondary_change_color_anim", Extern.object_change_color_secondary_anim),
    ),
    Albedo.chameleon: _base_detail + _chameleon,
    Albedo.two_change_color_chameleon: _base_detail
    + (sampler("change_color_map"),)
    + _change_colors
    + _chameleon,
    Albedo.chameleon_masked: _base_detail + (sampler("chameleon_mask_map"),) + _chameleon,
    Albedo.color_mask_hard_light: _base_detail
    + (sampler("color_mask_map"), float4_color("albedo_color")),
}

bump_mapping_parameters = {
    BumpMapping.off: (),
    BumpMapping.standard: (sampler("bump_map"),),
    BumpMapping.detail: (
        sampler("bump_map"),
        sampler("bump_detail_map"),
        float1("bump_detail_coefficient"),
    ),
    BumpMapping.detail_masked: (
        sampler("bump_map"),
        sampler("bump_detail_map"),
        sampler("bump_detail_mask_map"),
        float1("bump_detail_coefficient"),
    ),
}

alpha_test_parameters = {
    AlphaTest.none: (),
    AlphaTest.simple: (sampler("alpha_test_map"),),
}

specular_mask_parameters = {
    SpecularMask.no_specular_mask: (),
    SpecularMask.specular_mask_from_diffuse: (),
    SpecularMask.specular_mask_from_texture: (sampler("specular_mask_texture"),),
    SpecularMask.specular_mask_from_color_texture: (sampler("specular_mask_texture"),),
}

material_model_parameters = {
    MaterialModel.diffuse_only: (boolean("no_dynamic_lights"),),
    MaterialModel.cook_torrance: (
        float1("diffuse_coefficient"),
        float1("specular_coefficient"),
        float3_color("specular_tint"),
        float3_color("fresnel_color"),
        float1("use_fresnel_color_environment"),
        float3_color("fresnel_color_environment"),
        float1("fresnel_power"),
        float1("roughness"),
        float1("area_specular_contribution"),
        float1("analytical_specular_contribution"),
        float1("environment_map_specular_contribution"),
        boolean("order3_area_specular"),
        boolean("use_material_texture"),
        sampler("material_texture"),
        boolean("no_dynamic_lights"),
        sampler_without_xform("g_sampler_cc0236", Extern.texture_cook_torrance_cc0236),
        sampler_without_xform("g_sampler_dd0236", Extern.texture_cook_torrance_dd0236),
        sampler_without_xform("g_sampler_c78d78", Extern.texture_cook_torrance_c78d78),
        float1("albedo_blend_with_specular_tint"),
        float1("albedo_blend"),
        float1("analytical_anti_shadow_control"),
        float1("rim_fresnel_coefficient"),
        float3_color("rim_fresnel_color"),
        float1("rim_fresnel_power"),
        float1("rim_fresnel_albedo_blend"),
    ),
    MaterialModel.two_lobe_phong: (
        float1("diffuse_coefficient"),
        float1("specular_coefficient"),
        float1("normal_specular_power"),
        float3_color("normal_specular_tint"),
        float1("glancing_specular_power"),
        float3_color("glancing_specular_tint"),
        float1("fresnel_curve_steepness"),
        float1("area_specular_contribution"),
        float1("analytical_specular_contribution"),
        float1("environment_map_specular_contribution"),
        boolean("order3_area_specular"),
        boolean("no_dynamic_lights"),
        float1("albedo_specular_tint_blend"),
        float1("analytical_anti_shadow_control"),
    ),
    MaterialModel.foliage: (boolean("no_dynamic_lights"),),
    MaterialModel.none: (),
    MaterialModel.glass: (
        float1("diffuse_coefficient"),
        float1("specular_coefficient"),
        float1("fresnel_coefficient"),
        float1("fresnel_curve_steepness"),
        float1("fresnel_curve_bias"),
        float1("roughness"),
        float1("analytical_specular_contribution"),
        float1("area_specular_contribution"),
        boolean("no_dynamic_lights"),
    ),
    MaterialModel.organism: (
        float1("diffuse_coefficient"),
        float3_color("diffuse_tint"),
        float1("analytical_specular_coefficient"),
        float1("area_specular_coefficient"),
        float3_color("specular_tint"),
        float1("specular_power"),
        sampler("specular_map"),
        float1("environment_map_coefficient"),
        float3_color("environment_map_tint"),
        float1("fresnel_curve_steepness"),
        float1("rim_coefficient"),
        float3_color("rim_tint"),
        float1("rim_power"),
        float1("rim_start"),
        float1("rim_maps_transition_ratio"),
        float1("ambient_coefficient"),
        float3_color("ambient_tint"),
        sampler("occlusion_parameter_map"),
        float1("subsurface_coefficient"),
        float3_color("subsurface_tint"),
        float1("subsurface_propagation_bias"),
        float1("subsurface_normal_detail"),
        sampler("subsurface_map"),
        float1("transparence_coefficient"),
        float3_color("transparence_tint"),
        float1("transparence_normal_bias"),
        float1("transparence_normal_detail"),
        sampler("transparence_map"),
        float3_color("final_tint"),
        boolean("no_dynamic_lights"),
    ),
    MaterialModel.single_lobe_phong: (
        float1("diffuse_coefficient"),
        float1("specular_coefficient"),
        float1("roughness"),
        float1("analytical_specular_contribution"),
        float1("area_specular_contribution"),
        float1("environment_map_specular_contribution"),
        float3_color("specular_tint"),
        boolean("order3_area_specular"),
        boolean("no_dynamic_lights"),
    ),
    MaterialModel.car_paint: (),
}

_envmap = (
    sampler_without_xform("environment_map"),
    float3_color("env_tint_color"),
    float1("env_roughness_scale"),
)

environment_mapping_parameters = {
    EnvironmentMapping.none: (),
    EnvironmentMapping.per_pixel: _envmap,
    EnvironmentMapping.dynamic: (
        float3_color("env_tint_color"),
        sampler("dynamic_environment_map_0", Extern.texture_dynamic_environment_map_0),
        sampler("dynamic_environment_map_1", Extern.texture_dynamic_environment_map_1),
        float1("env_roughness_scale"),
    ),
    EnvironmentMapping.from_flat_texture: (
        sampler_without_xform("flat_environment_map"),
        float3_color("env_tint_color"),
        float3("flat_envmap_matrix_x", Extern.flat_envmap_matrix_x),
        float3("flat_envmap_matrix_y", Extern.flat_envmap_matrix_y),
        float3("flat_envmap_matrix_z", Extern.flat_envmap_matrix_z),
        float1("hemisphere_percentage"),
        float4("env_bloom_override"),
        float1("env_bloom_override_intensity"),
    ),
    EnvironmentMapping.custom_map: _envmap,
}

_self_illum_simple = (
    sampler("self_illum_map"),
    float4("self_illum_color"),
    float1("self_illum_intensity"),
)

self_illumination_parameters = {
    SelfIllumination.off: (),
    SelfIllumination.simple: _self_illum_simple,
    SelfIllumination._3_channel_self_illum: (
        sampler("self_illum_map"),
        float4("channel_a"),
        float4("channel_b"),
        float4("channel_c"),
        float1("self_illum_intensity"),
    ),
    SelfIllumination.plasma: (
        sampler("noise_map_a"),
        sampler("noise_map_b"),
        float4("color_medium"),
        float4("color_wide"),
        float4("color_sharp"),
        float1("self_illum_intensity"),
        sampler("alpha_mask_map"),
        float1("thinness_medium"),
        float1("thinness_wide"),
        float1("thinness_sharp"),
    ),
    SelfIllumination.from_diffuse: (
        float4("self_illum_color"),
        float1("self_illum_intensity"),
    ),
    SelfIllumination.illum_detail: (
        sampler("self_illum_map"),
        sampler("self_illum_detail_map"),
        float4("self_illum_color"),
        float1("self_illum_intensity"),
    ),
    SelfIllumination.meter: (
        sampler("meter_map"),
        float4("meter_color_off"),
        float4("meter_color_on"),
        float1("meter_value"),
    ),
    SelfIllumination.self_illum_times_diffuse: _self_illum_simple
    + (float1("primary_change_color_blend"),),
    SelfIllumination.simple_with_alpha_mask: _self_illum_simple,
    SelfIllumination.simple_four_change_color: (
        sampler("self_illum_map"),
        float1("self_illum_intensity"),
    ),
}

parallax_parameters = {
    Parallax.off: (),
    Parallax.simple: (sampler("height_map"), float1("height_scale")),
    Parallax.interpolated: (sampler("height_map"), float1("height_scale")),
    Parallax.simple_detail: (
        sampler("height_map"),
        float1("height_scale"),
        sampler("height_scale_map"),
    ),
}

distortion_parameters = {
    Toggle.off: (),
    Toggle.on: (sampler("distort_map"), float1("distort_scale")),
}


# %% The family

schema = OptionSchema(
    "shader",
    [
        Method(
            "albedo",
            Albedo,
            macros=[
                MacroRule("calc_albedo_ps", "calc_albedo_", "_ps"),
                MacroRule(
                    "calc_albedo_vs",
                    "calc_albedo_",
                    "_vs",
                    only=[Albedo.constant_color],
                ),
            ],
            pixel_parameters=albedo_parameters,
        ),
        Method(
            "bump_mapping",
            BumpMapping,
            macros=[
                MacroRule("calc_bumpmap_ps", "calc_bumpmap_", "_ps"),
                MacroRule("calc_bumpmap_vs", "calc_bumpmap_", "_vs"),
            ],
            pixel_parameters=bump_mapping_parameters,
        ),
        Method(
            "alpha_test",
            AlphaTest,
            macros=[MacroRule("calc_alpha_test_ps", "calc_alpha_test_", "_ps")],
            pixel_parameters=alpha_test_parameters,
        ),
        Method(
            "specular_mask",
            SpecularMask,
            macros=[MacroRule("calc_specular_mask_ps", "calc_", "_ps")],
            pixel_parameters=specular_mask_parameters,
        ),
        Method(
            "material_model",
            MaterialModel,
            macros=[
                MacroRule(
                    "calc_material_analytic_specular",
                    "calc_material_analytic_specular_",
                    "_ps",
                ),
                MacroRule(
                    "calc_material_area_specular", "calc_material_area_specular_", "_ps"
                ),
                MacroRule("calc_lighting_ps", "calc_lighting_", "_ps"),
                MacroRule("calc_dynamic_lighting_ps", "calc_dynamic_lighting_", "_ps"),
                MacroRule("material_type", "material_type_"),
            ],
            arg_name="material_type_arg",
            pixel_parameters=material_model_parameters,
            unsupported=[MaterialModel.car_paint],
        ),
        Method(
            "environment_mapping",
            EnvironmentMapping,
            macros=[MacroRule("envmap_type", "envmap_type_")],
            arg_name="envmap_type_arg",
            pixel_parameters=environment_mapping_parameters,
        ),
        Method(
            "self_illumination",
            SelfIllumination,
            macros=[
                MacroRule("calc_self_illumination_ps", "calc_self_illumination_", "_ps")
            ],
            pixel_parameters=self_illumination_parameters,
        ),
        Method(
            "blend_mode",
            BlendMode,
            macros=[MacroRule("blend_type", "blend_type_")],
            arg_name="blend_type_arg",
        ),
        Method(
            "parallax",
            Parallax,
            macros=[
                MacroRule("calc_parallax_ps", "calc_parallax_", "_ps"),
                # The detail variant only differs in the pixel stage
                MacroRule(
                    "calc_parallax_vs",
                    "calc_parallax_",
                    "_vs",
                    substitute={Parallax.simple_detail: Parallax.simple},
                ),
            ],
            pixel_parameters=parallax_parameters,
        ),
        Method("misc", Misc),
        Method("distortion", Toggle, pixel_parameters=distortion_parameters),
    ],
)

matrix = EntryPointMatrix(
    supported=[
        "albedo",
        "static_prt_ambient",
        "static_prt_linear",
        "static_prt_quadratic",
        "static_per_pixel",
        "static_per_vertex",
        "static_per_vertex_color",
        "active_camo",
        "sfx_distort",
        "dynamic_light",
        "dynamic_light_cinematic",
        "lightmap_debug_mode",
        "static_sh",
        "shadow_generate",
    ],
    shared_pixel=["shadow_generate"],
    shared_method=schema.method_index("alpha_test"),
    vertex_formats=["world", "rigid", "skinned"],
)

global_parameters = [
    sampler_without_xform("albedo_texture", Extern.texture_global_target_texaccum),
    sampler_without_xform("normal_texture", Extern.texture_global_target_normal),
    sampler_without_xform("lightprobe_texture_array", Extern.texture_lightprobe_texture),
    sampler_without_xform("shadow_depth_map_1", Extern.texture_global_target_shadow_buffer1),
    sampler_without_xform("dynamic_light_gel_texture", Extern.texture_dynamic_light_gel_0),
    float4("debug_tint", Extern.debug_tint),
    sampler_without_xform(
        "active_camo_distortion_texture", Extern.active_camo_distortion_texture
    ),
    sampler_without_xform("scene_ldr_texture", Extern.scene_ldr_texture),
    sampler_without_xform("scene_hdr_texture", Extern.scene_hdr_texture),
    sampler_without_xform(
        "dominant_light_intensity_map", Extern.texture_dominant_light_intensity_map
    ),
]

family = register_family(
    TechniqueFamily(
        schema,
        matrix,
        global_parameters=global_parameters,
        vertex_transforms=[
            "calc_vertex_transform",
            "transform_dominant_light",
            "calc_distortion",
        ],
    )
)


class ShaderGenerator(Generator):
    """Generator for the "shader" technique family.

    Parameters
    ----------
    selection : SelectionVector | bytes | dict | sequence | None
        The selection to bind. None for a generator of shared programs only.
    kwargs : dict
        Passed to ``Generator``: apply_fixes, backend and templates.
    """

    family_name = "shader"

    def __init__(self, selection=None, **kwargs):
        super().__init__(self.family_name, selection, **kwargs)
