"""
The parameter binder: which runtime bindings (textures, scalars, vectors,
engine-supplied constants) a compiled program needs for a given selection.

Each method maps every one of its options to a fixed tuple of parameter
descriptors. The parameter list of a program is the concatenation of these
tuples in schema order. The order matters, because it determines the
binding-slot assignment downstream.
"""

from enum import Enum

import numpy as np

from ..errors import SchemaMismatch, UnsupportedOption
from ..utils.enums import RenderMethodExtern


class ParameterKind(str, Enum):
    """The kinds of runtime bindings."""

    sampler = "sampler"  #: a texture with a uv transform
    sampler_without_xform = "sampler_without_xform"  #: a texture without transform
    boolean = "boolean"
    float = "float"
    float3 = "float3"
    float4 = "float4"
    color = "color"  #: rgb or argb, see ``ParameterDescriptor.shadertype``


# The uniform type of each kind, in the notation that numpy-based uniform
# arrays use: <n>x<primitive>.
_SHADERTYPES = {
    ParameterKind.boolean: "b4",
    ParameterKind.float: "f4",
    ParameterKind.float3: "3xf4",
    ParameterKind.float4: "4xf4",
}


class ParameterDescriptor:
    """One runtime binding that a compiled program requires.

    Parameters
    ----------
    kind : ParameterKind | str
        The kind of binding.
    name : str
        The name of the parameter in the template.
    extern : RenderMethodExtern | None
        If the value is supplied by the engine rather than by the material,
        the source it comes from.
    shadertype : str | None
        For colors: "3xf4" (rgb, default) or "4xf4" (argb). Derived from the
        kind otherwise; samplers have no shadertype.
    """

    __slots__ = ["extern", "kind", "name", "shadertype"]

    def __init__(self, kind, name, extern=None, shadertype=None):
        self.kind = ParameterKind(kind)
        self.name = name
        self.extern = None if extern is None else RenderMethodExtern(extern)
        if self.kind == ParameterKind.color:
            self.shadertype = shadertype or "3xf4"
            if self.shadertype not in ("3xf4", "4xf4"):
                raise ValueError(f"A color is rgb or argb, not {shadertype!r}")
        elif shadertype is not None:
            raise ValueError(f"Only colors can specify a shadertype, not {self.kind}.")
        else:
            self.shadertype = _SHADERTYPES.get(self.kind)

    @property
    def is_sampler(self):
        return self.kind in (ParameterKind.sampler, ParameterKind.sampler_without_xform)

    def __eq__(self, other):
        if not isinstance(other, ParameterDescriptor):
            return NotImplemented
        return (self.kind, self.name, self.extern, self.shadertype) == (
            other.kind,
            other.name,
            other.extern,
            other.shadertype,
        )

    def __hash__(self):
        return hash((self.kind, self.name, self.extern, self.shadertype))

    def __repr__(self):
        extern = f" <- {self.extern.value}" if self.extern else ""
        return f"<ParameterDescriptor {self.kind.value} {self.name}{extern}>"


# Short constructors, so that the option tables read like a declaration.


def sampler(name, extern=None):
    return ParameterDescriptor(ParameterKind.sampler, name, extern)


def sampler_without_xform(name, extern=None):
    return ParameterDescriptor(ParameterKind.sampler_without_xform, name, extern)


def boolean(name, extern=None):
    return ParameterDescriptor(ParameterKind.boolean, name, extern)


def float1(name, extern=None):
    return ParameterDescriptor(ParameterKind.float, name, extern)


def float3(name, extern=None):
    return ParameterDescriptor(ParameterKind.float3, name, extern)


def float4(name, extern=None):
    return ParameterDescriptor(ParameterKind.float4, name, extern)


def float3_color(name, extern=None):
    return ParameterDescriptor(ParameterKind.color, name, extern, "3xf4")


def float4_color(name, extern=None):
    return ParameterDescriptor(ParameterKind.color, name, extern, "4xf4")


class ShaderParameters:
    """An ordered list of parameter descriptors."""

    __slots__ = ["_parameters"]

    def __init__(self, parameters=()):
        self._parameters = tuple(parameters)
        for p in self._parameters:
            if not isinstance(p, ParameterDescriptor):
                raise TypeError(f"Expected ParameterDescriptor, got {p!r}")

    def __len__(self):
        return len(self._parameters)

    def __iter__(self):
        return iter(self._parameters)

    def __getitem__(self, index):
        return self._parameters[index]

    def __eq__(self, other):
        if isinstance(other, ShaderParameters):
            return self._parameters == other._parameters
        return NotImplemented

    def __hash__(self):
        return hash(self._parameters)

    def __repr__(self):
        return f"<ShaderParameters {', '.join(self.names())}>"

    def names(self):
        return tuple(p.name for p in self._parameters)

    def samplers(self):
        """The sampler parameters, in order."""
        return tuple(p for p in self._parameters if p.is_sampler)

    def externs(self):
        """The parameters whose value is supplied by the engine, in order."""
        return tuple(p for p in self._parameters if p.extern is not None)

    def uniform_type(self):
        """Get a dict name -> shadertype for the non-sampler parameters.

        A parameter that occurs more than once (e.g. ``no_dynamic_lights``
        for several options) is listed once.
        """
        d = {}
        for p in self._parameters:
            if not p.is_sampler:
                d.setdefault(p.name, p.shadertype)
        return d

    def create_constant_array(self):
        """Create a zeroed numpy structured array for the float constants.

        Every float, vector and color parameter takes one float4 constant
        register (16 bytes). Booleans live in separate bool registers and
        are not part of this array.
        """
        fields = []
        for name, shadertype in self.uniform_type().items():
            if shadertype == "b4":
                continue
            fields.append((name, "float32", (4,)))
        return np.zeros((), dtype=fields)


class OptionParameters:
    """The parameters required by one option of one method, in isolation."""

    __slots__ = ["option_name", "parameters", "path"]

    def __init__(self, parameters, path, option_name):
        self.parameters = parameters
        self.path = path
        self.option_name = option_name

    def __iter__(self):
        return iter((self.parameters, self.path, self.option_name))

    def __repr__(self):
        return f"<OptionParameters {self.path}: {', '.join(self.parameters.names())}>"


def _check_supported(method, option):
    if option in method.unsupported:
        raise UnsupportedOption(method.name, option)


def check_supported(selection):
    """Raise UnsupportedOption if the selection contains an unsupported option."""
    for method, option in selection.items():
        _check_supported(method, option)


def _check_selection(schema, selection):
    if selection is None or selection.schema is not schema:
        raise SchemaMismatch(f"Expected a selection for the {schema.family} schema.")


def pixel_parameters(schema, selection):
    """Get the parameters of the pixel program for the given selection."""
    _check_selection(schema, selection)
    result = []
    for method, option in selection.items():
        _check_supported(method, option)
        result += method.pixel_parameters[option]
    return ShaderParameters(result)


def vertex_parameters(schema, selection):
    """Get the parameters of the vertex program for the given selection.

    Methods flagged with ``category_parameter`` add a ``category_<method>``
    float4, after the option's own vertex parameters.
    """
    _check_selection(schema, selection)
    result = []
    for method, option in selection.items():
        _check_supported(method, option)
        result += method.vertex_parameters[option]
        if method.category_parameter:
            result.append(float4(f"category_{method.name}"))
    return ShaderParameters(result)


def parameters_in_option(schema, method_name, option):
    """Get the parameters required by one option of one method.

    Returns
    -------
    result : OptionParameters
        Holds the pixel parameters followed by the vertex parameters of
        the option, a path token that identifies the option (e.g.
        ``shaders\\particle_options\\albedo_palettized``), and the option name.
    """
    method = schema.get_method(method_name)
    option = method.option(option)
    _check_supported(method, option)
    parameters = ShaderParameters(
        method.pixel_parameters[option] + method.vertex_parameters[option]
    )
    path = f"{schema.options_directory}\\{method.name}_{option.name}"
    return OptionParameters(parameters, path, option.name)
