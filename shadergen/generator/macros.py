"""
Assembly of the preprocessor macro sets that select a permutation in a template.

A full macro set is made of:

* The enumeration tables ``k_<method>_<option> = <ordinal>`` for every method
  (and for the stage and shader-type domains), emitted regardless of the selection.
* Optionally the auto-categorized ``category_<method>_option_<option>`` macros.
* The renamed macros for the selected options (e.g. ``calc_albedo_ps =
  calc_albedo_default_ps``), as declared by each method's MacroRule's.
* Control macros: the definition-helper sentinel, ``shaderstage``, ``shadertype``
  and ``APPLY_HLSL_FIXES``.
* One ``<method>_arg = k_<method>_<option>`` macro per method.

No macro set ever contains the same name twice.
"""

from ..errors import DuplicateMacroDefinition, SchemaMismatch
from ..utils.enums import ShaderStage, ShaderType, VertexType, to_member


DEFINITION_HELPER = "_DEFINITION_HELPER_HLSLI"
VERTEX_SHADER_HELPER = "_VERTEX_SHADER_HELPER_HLSLI"
APPLY_FIXES = "APPLY_HLSL_FIXES"


class Macro:
    """A (name, definition) pair, as passed to the compilation backend."""

    __slots__ = ["definition", "name"]

    def __init__(self, name, definition):
        self.name = str(name)
        self.definition = str(definition)

    def __iter__(self):
        return iter((self.name, self.definition))

    def __eq__(self, other):
        if not isinstance(other, Macro):
            return NotImplemented
        return self.name == other.name and self.definition == other.definition

    def __hash__(self):
        return hash((self.name, self.definition))

    def __repr__(self):
        return f"<Macro {self.name}={self.definition}>"


class MacroSet:
    """An ordered, immutable collection of macros with unique names.

    Raises DuplicateMacroDefinition when created from macros that share a name.
    """

    __slots__ = ["_lookup", "_macros"]

    def __init__(self, macros=()):
        macros = tuple(m if isinstance(m, Macro) else Macro(*m) for m in macros)
        check_unique(macros)
        self._macros = macros
        self._lookup = {m.name: m.definition for m in macros}

    def __len__(self):
        return len(self._macros)

    def __iter__(self):
        return iter(self._macros)

    def __getitem__(self, index):
        return self._macros[index]

    def __contains__(self, name):
        return name in self._lookup

    def __eq__(self, other):
        if not isinstance(other, MacroSet):
            return NotImplemented
        return self._macros == other._macros

    def __hash__(self):
        return hash(self._macros)

    def __repr__(self):
        return f"<MacroSet with {len(self._macros)} macros>"

    def get(self, name, default=None):
        """Get the definition of the macro with the given name."""
        return self._lookup.get(name, default)

    def names(self):
        return tuple(m.name for m in self._macros)

    def definitions(self):
        """Get the set of all macro definitions (the right hand sides)."""
        return set(self._lookup.values())

    def to_source(self):
        """Render as ``#define`` lines."""
        return "".join(f"#define {m.name} {m.definition}\n" for m in self._macros)


def check_unique(macros):
    """Raise DuplicateMacroDefinition for the first macro name that occurs twice."""
    seen = set()
    for macro in macros:
        if macro.name in seen:
            raise DuplicateMacroDefinition(macro.name)
        seen.add(macro.name)


# ----- Building blocks


def create_macro(name, option, prefix="", suffix=""):
    """Create a macro that names an option: ``name = <prefix><option><suffix>``."""
    return Macro(name, f"{prefix}{option.name}{suffix}".lower())


def create_auto_macro(name, option):
    """Create the resolved auto-categorized macro for a selected option."""
    return Macro(f"category_{name}", f"category_{name}_option_{option.name}".lower())


def create_vertex_macro(name, vertex_type):
    """Create the macro that names the input vertex format, e.g. ``RIGID_VERTEX``."""
    return Macro(name, f"{vertex_type.name.upper()}_VERTEX")


def enum_definitions(name, domain):
    """Create the ``k_<name>_<option> = <ordinal>`` table for an option domain."""
    name = name.lower()
    return [Macro(f"k_{name}_{option.name}".lower(), int(option)) for option in domain]


def auto_enum_definitions(name, domain):
    """Create the self-referential ``category_<name>_option_<option>`` table."""
    macros = []
    for option in domain:
        full_name = f"category_{name}_option_{option.name}".lower()
        macros.append(Macro(full_name, full_name))
    return macros


def selected_option_macros(method, option):
    """Get the renamed macros for the selected option of a method."""
    return [
        Macro(rule.name, rule.definition(option))
        for rule in method.macros
        if rule.applies_to(option)
    ]


def _check_selection(schema, selection):
    if selection is None or selection.schema is not schema:
        raise SchemaMismatch(f"Expected a selection for the {schema.family} schema.")


# ----- Macro sets


def assemble_macros(schema, selection, stage, apply_fixes=False):
    """Assemble the full macro set for one permutation.

    Parameters
    ----------
    schema : OptionSchema
        The schema of the technique family.
    selection : SelectionVector
        The selected options; must belong to ``schema``.
    stage : ShaderStage | str
        The entry point to generate.
    apply_fixes : bool
        The value of the ``APPLY_HLSL_FIXES`` macro.

    Returns
    -------
    macros : MacroSet
    """
    _check_selection(schema, selection)
    stage = to_member(ShaderStage, stage)

    macros = [Macro(DEFINITION_HELPER, 1)]

    # Enumeration tables
    macros += enum_definitions("shaderstage", ShaderStage)
    macros += enum_definitions("shadertype", ShaderType)
    for method in schema.methods:
        macros += enum_definitions(method.name, method.options)
    if schema.auto_macros:
        for method in schema.methods:
            macros += auto_enum_definitions(method.name, method.options)

    macros.append(Macro(APPLY_FIXES, int(bool(apply_fixes))))

    # Name the selected options (like in the rmdf)
    for method, option in selection.items():
        macros += selected_option_macros(method, option)
    if schema.auto_macros:
        for method, option in selection.items():
            macros.append(create_auto_macro(method.name, option))

    macros.append(create_macro("shaderstage", stage, "k_shaderstage_"))
    macros.append(create_macro("shadertype", schema.shader_type, "k_shadertype_"))

    for method, option in selection.items():
        macros.append(create_macro(method.arg_name, option, f"k_{method.name}_"))

    return MacroSet(macros)


def assemble_shared_pixel_macros(
    schema, stage, method=None, option=None, apply_fixes=False
):
    """Assemble the reduced macro set of a shared pixel program.

    If a method is given, the shared program branches on that method only,
    and its table, renamed macros and ``_arg`` macro are included.
    """
    stage = to_member(ShaderStage, stage)

    macros = [Macro(DEFINITION_HELPER, 1)]
    macros += enum_definitions("shaderstage", ShaderStage)
    macros += enum_definitions("shadertype", ShaderType)
    if method is not None:
        option = method.option(option)
        macros += enum_definitions(method.name, method.options)
    macros.append(Macro(APPLY_FIXES, int(bool(apply_fixes))))

    if method is not None:
        macros += selected_option_macros(method, option)

    macros.append(create_macro("shaderstage", stage, "k_shaderstage_"))
    macros.append(create_macro("shadertype", schema.shader_type, "k_shadertype_"))

    if method is not None:
        macros.append(create_macro(method.arg_name, option, f"k_{method.name}_"))

    return MacroSet(macros)


def assemble_vertex_macros(
    schema,
    vertex_type,
    stage,
    *,
    transforms=("calc_vertex_transform",),
    sentinel=VERTEX_SHADER_HELPER,
    selection=None,
    apply_fixes=False,
):
    """Assemble the macro set of a vertex program.

    The vertex program depends on the vertex format and stage. If a selection
    is given (for stages where the vertex program is not shared), the
    per-selection macros are included as well.

    Parameters
    ----------
    schema : OptionSchema
        The schema of the technique family.
    vertex_type : VertexType | str
        The input vertex format.
    stage : ShaderStage | str
        The entry point to generate.
    transforms : sequence of str
        Names of the macros that select a vertex-format specific function,
        each defined as ``<name>_<vertex_type>``.
    sentinel : str
        The helper-include guard to define.
    selection : SelectionVector | None
        The selection, for non-shared vertex programs.
    apply_fixes : bool
        The value of the ``APPLY_HLSL_FIXES`` macro.
    """
    vertex_type = to_member(VertexType, vertex_type)
    stage = to_member(ShaderStage, stage)

    if selection is not None:
        macros = list(assemble_macros(schema, selection, stage, apply_fixes))
    else:
        macros = [Macro(APPLY_FIXES, int(bool(apply_fixes)))]
        macros += enum_definitions("shaderstage", ShaderStage)
        macros.append(create_macro("shaderstage", stage, "k_shaderstage_"))

    if sentinel not in {m.name for m in macros}:
        macros.insert(0, Macro(sentinel, 1))

    macros += enum_definitions("vertextype", VertexType)
    for name in transforms:
        macros.append(create_macro(name, vertex_type, f"{name}_"))
    macros.append(create_vertex_macro("input_vertex_format", vertex_type))
    macros.append(create_macro("vertextype", vertex_type, "k_vertextype_"))

    return MacroSet(macros)
