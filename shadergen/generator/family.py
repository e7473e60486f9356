"""
A technique family bundles everything the generator needs to know about one
kind of shader: its option schema, its entry-point matrix, its global
parameters, and the templates and profiles to compile with.
"""

from ..utils.enums import ShaderStage, to_member
from .entrypoints import EntryPointMatrix
from .macros import VERTEX_SHADER_HELPER
from .parameters import ShaderParameters


class TechniqueFamily:
    """The description of a technique family.

    Parameters
    ----------
    schema : OptionSchema
        The methods and options of this family.
    matrix : EntryPointMatrix
        Which stages and vertex formats the family supports and shares.
    global_parameters : sequence of ParameterDescriptor
        The frame-scope parameters that every program of this family can use.
    vertex_transforms : sequence of str
        The macros that select a vertex-format specific function in the vertex template.
    vertex_sentinel : str
        The helper-include guard that the vertex macro set defines.
    templates : dict | None
        Overrides for the template paths, with keys "pixel", "shared_pixel",
        "vertex" and "shared_vertex". The defaults are ``pixl_<family>.hlsl``,
        ``glps_<family>.hlsl``, ``vtsh_<family>.hlsl`` and ``glvs_<family>.hlsl``.
    pixel_profile : str
        The target profile for pixel programs.
    vertex_profile : str
        The target profile for vertex programs.
    """

    def __init__(
        self,
        schema,
        matrix,
        *,
        global_parameters=(),
        vertex_transforms=("calc_vertex_transform",),
        vertex_sentinel=VERTEX_SHADER_HELPER,
        templates=None,
        pixel_profile="ps_3_0",
        vertex_profile="vs_3_0",
    ):
        if not isinstance(matrix, EntryPointMatrix):
            raise TypeError(f"Expected an EntryPointMatrix, got {matrix!r}")
        if matrix.shared_method is not None:
            schema.get_method(matrix.shared_method)  # raises if out of range

        name = schema.family
        self._schema = schema
        self._matrix = matrix
        self._global_parameters = ShaderParameters(global_parameters)
        self._vertex_transforms = tuple(vertex_transforms)
        self._vertex_sentinel = vertex_sentinel
        self._templates = {
            "pixel": f"pixl_{name}.hlsl",
            "shared_pixel": f"glps_{name}.hlsl",
            "vertex": f"vtsh_{name}.hlsl",
            "shared_vertex": f"glvs_{name}.hlsl",
        }
        for key, path in (templates or {}).items():
            if key not in self._templates:
                raise ValueError(f"Invalid template kind: {key!r}")
            self._templates[key] = path
        self._pixel_profile = pixel_profile
        self._vertex_profile = vertex_profile

    def __repr__(self):
        return f"<TechniqueFamily {self.name}>"

    @property
    def name(self):
        return self._schema.family

    @property
    def schema(self):
        return self._schema

    @property
    def matrix(self):
        return self._matrix

    @property
    def global_parameters(self):
        return self._global_parameters

    @property
    def vertex_transforms(self):
        return self._vertex_transforms

    @property
    def vertex_sentinel(self):
        return self._vertex_sentinel

    @property
    def pixel_profile(self):
        return self._pixel_profile

    @property
    def vertex_profile(self):
        return self._vertex_profile

    def template(self, kind):
        """Get the template path for "pixel", "shared_pixel", "vertex" or "shared_vertex"."""
        return self._templates[kind]

    def entry_name(self, stage):
        """Get the name of the entry function for a stage, e.g. ``entry_albedo``."""
        return f"entry_{to_member(ShaderStage, stage).name}"


_families = {}


def register_family(family):
    """Register a technique family, so that generators can refer to it by name.

    Parameters
    ----------
    family : TechniqueFamily
        The family to register. Each family name can only be registered once.
    """
    if not isinstance(family, TechniqueFamily):
        raise TypeError(f"Expected a TechniqueFamily, got {family!r}")
    if family.name in _families:
        raise ValueError(f"A technique family is already registered for '{family.name}'.")
    _families[family.name] = family
    return family


def get_family(name):
    """Get a registered technique family by name."""
    try:
        return _families[name]
    except KeyError:
        raise ValueError(f"Unknown technique family: {name!r}") from None


def family_names():
    """Get the names of the registered technique families."""
    return tuple(sorted(_families))
