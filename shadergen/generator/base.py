"""
The generator facade. A generator is bound to one technique family and,
optionally, to one selection. It answers introspection queries, produces the
parameter lists, and generates programs by assembling the macro set and
delegating the compilation to a backend.
"""

import sys
import copy

from ..errors import CompileDiagnostic, NotConfigured, SchemaMismatch
from ..schema import SelectionVector
from ..utils import assert_type, env_flag, logger
from ..utils.enums import ShaderStage, VertexType, to_member
from .backend import CompilerBackend
from .family import TechniqueFamily, get_family
from .macros import (
    assemble_macros,
    assemble_shared_pixel_macros,
    assemble_vertex_macros,
)
from .parameters import (
    check_supported,
    parameters_in_option,
    pixel_parameters,
    vertex_parameters,
)
from .templating import TemplateRepository, get_default_repository


PRINT_SOURCE_ON_ERROR = env_flag("SHADERGEN_PRINT_SOURCE_ON_COMPILATION_ERROR")


class ShaderGeneratorResult:
    """The result of a generation call: the bytecode plus how it was produced."""

    __slots__ = ["bytecode", "entry", "macros", "profile", "template"]

    def __init__(self, bytecode, macros, template, entry, profile):
        self.bytecode = bytecode
        self.macros = macros
        self.template = template
        self.entry = entry
        self.profile = profile

    def __repr__(self):
        return f"<ShaderGeneratorResult {self.template} {self.entry} {self.profile}, {len(self.bytecode)} bytes>"


class Generator:
    """Generate the programs of a technique family.

    A generator created without a selection can only be used for shared
    programs, global parameters and introspection of the schema.

    Parameters
    ----------
    family : TechniqueFamily | str | None
        The technique family, or the name of a registered one. Subclasses
        provide a default.
    selection : SelectionVector | bytes | dict | sequence | None
        The selection to bind: a selection of the family's schema, its byte
        encoding, a dict of method name -> option, or one option per method.
    apply_fixes : bool
        The value of the ``APPLY_HLSL_FIXES`` macro, on every generation path.
    backend : CompilerBackend | None
        The compilation backend. Required for the generation calls.
    templates : TemplateRepository | loader | None
        Where to read templates from. Default the templates that ship with shadergen.
    """

    family_name = None

    def __init__(
        self,
        family=None,
        selection=None,
        *,
        apply_fixes=False,
        backend=None,
        templates=None,
    ):
        if family is None:
            family = self.family_name
        if isinstance(family, str):
            family = get_family(family)
        assert_type("family", family, TechniqueFamily)
        assert_type("backend", backend, None, CompilerBackend)

        self._family = family
        self._selection = self._to_selection(selection)
        self._apply_fixes = bool(apply_fixes)
        self._backend = backend
        if templates is None or isinstance(templates, TemplateRepository):
            self._templates = templates
        else:
            self._templates = TemplateRepository(templates)

    def __repr__(self):
        if self._selection is None:
            return f"<{self.__class__.__name__} {self._family.name} (shared only)>"
        return f"<{self.__class__.__name__} {self._selection!r}>"

    def _to_selection(self, selection):
        schema = self._family.schema
        if selection is None:
            return None
        elif isinstance(selection, SelectionVector):
            if selection.schema is not schema:
                raise SchemaMismatch(
                    f"Selection is for {selection.schema.family}, not {schema.family}."
                )
            return selection
        elif isinstance(selection, (bytes, bytearray, memoryview)):
            return schema.decode(selection)
        elif isinstance(selection, dict):
            return SelectionVector.from_options(schema, **selection)
        else:
            return SelectionVector(schema, selection)

    def bind(self, selection):
        """Get a new generator with the same configuration, bound to another selection."""
        new = copy.copy(self)
        new._selection = self._to_selection(selection)
        return new

    # ----- Properties

    @property
    def family(self):
        """The TechniqueFamily of this generator."""
        return self._family

    @property
    def schema(self):
        return self._family.schema

    @property
    def selection(self):
        """The bound SelectionVector, or None."""
        return self._selection

    @property
    def apply_fixes(self):
        return self._apply_fixes

    @property
    def backend(self):
        return self._backend

    @property
    def templates(self):
        """The TemplateRepository to read templates from."""
        if self._templates is None:
            self._templates = get_default_repository()
        return self._templates

    def _require_selection(self):
        if self._selection is None:
            raise NotConfigured(
                f"This {self._family.name} generator has no selection; it can only generate shared programs."
            )
        return self._selection

    # ----- Introspection

    def get_method_count(self):
        return self._family.schema.method_count()

    def get_method_option_count(self, method_index):
        return self._family.schema.option_count(method_index)

    def get_method_option_value(self, method_index):
        """Get the ordinal of the selected option for the given method."""
        selection = self._require_selection()
        self._family.schema.get_method(method_index)
        return int(selection[method_index])

    def get_method_names(self):
        return self._family.schema.method_names()

    def is_entry_point_supported(self, stage):
        return self._family.matrix.is_entry_point_supported(stage)

    def is_pixel_shader_shared(self, stage):
        return self._family.matrix.is_pixel_shader_shared(stage)

    def is_shared_pixel_shader_using_methods(self, stage):
        return self._family.matrix.is_shared_pixel_shader_using_methods(stage)

    def is_shared_pixel_shader_without_method(self, stage):
        return self._family.matrix.is_shared_pixel_shader_without_method(stage)

    def is_method_shared_in_entry_point(self, stage, method_index):
        return self._family.matrix.is_method_shared_in_entry_point(stage, method_index)

    def is_vertex_format_supported(self, vertex_type):
        return self._family.matrix.is_vertex_format_supported(vertex_type)

    def is_vertex_shader_shared(self, stage):
        return self._family.matrix.is_vertex_shader_shared(stage)

    # ----- Generation

    def generate_pixel_shader(self, stage):
        """Generate the pixel program of the bound selection for the given stage.

        Returns None if the family does not support the stage. If the pixel
        program of the stage is shared, the shared program is generated
        instead, with the option of the shared method taken from the selection.
        """
        selection = self._require_selection()
        stage = to_member(ShaderStage, stage)
        matrix = self._family.matrix
        if not matrix.is_entry_point_supported(stage):
            logger.debug(f"No {stage.name} pixel shader for {self._family.name}")
            return None
        if matrix.is_pixel_shader_shared(stage):
            method_index = matrix.shared_method
            option = None if method_index is None else selection[method_index]
            return self.generate_shared_pixel_shader(stage, method_index, option)
        check_supported(selection)
        macros = assemble_macros(
            self._family.schema, selection, stage, self._apply_fixes
        )
        return self._compile("pixel", stage, self._family.pixel_profile, macros)

    def generate_vertex_shader(self, vertex_type, stage):
        """Generate the vertex program of the bound selection.

        Returns None if the vertex format or stage is not supported, or if
        the vertex program of this stage is shared (see ``generate_shared_vertex_shader()``).
        """
        selection = self._require_selection()
        vertex_type = to_member(VertexType, vertex_type)
        stage = to_member(ShaderStage, stage)
        matrix = self._family.matrix
        if not matrix.is_vertex_format_supported(vertex_type):
            logger.debug(f"No {vertex_type.name} vertex format for {self._family.name}")
            return None
        if not matrix.is_entry_point_supported(stage):
            logger.debug(f"No {stage.name} vertex shader for {self._family.name}")
            return None
        if matrix.is_vertex_shader_shared(stage):
            logger.debug(f"The {stage.name} vertex shader of {self._family.name} is shared")
            return None
        check_supported(selection)
        macros = assemble_vertex_macros(
            self._family.schema,
            vertex_type,
            stage,
            transforms=self._family.vertex_transforms,
            sentinel=self._family.vertex_sentinel,
            selection=selection,
            apply_fixes=self._apply_fixes,
        )
        return self._compile("vertex", stage, self._family.vertex_profile, macros)

    def generate_shared_pixel_shader(self, stage, method_index=None, option_index=None):
        """Generate the shared pixel program of a stage.

        If the shared program branches on a method, ``method_index`` must be
        that method and ``option_index`` selects its option. Returns None
        if the stage is not supported or not shared, or if the given method
        is not the one that the shared program branches on.
        """
        stage = to_member(ShaderStage, stage)
        matrix = self._family.matrix
        schema = self._family.schema
        if not (
            matrix.is_entry_point_supported(stage) and matrix.is_pixel_shader_shared(stage)
        ):
            logger.debug(f"No shared {stage.name} pixel shader for {self._family.name}")
            return None

        method = option = None
        if matrix.is_shared_pixel_shader_using_methods(stage):
            if not matrix.is_method_shared_in_entry_point(stage, method_index):
                logger.debug(
                    f"The shared {stage.name} pixel shader of {self._family.name} does not use method {method_index}"
                )
                return None
            method = schema.get_method(method_index)
            option = method.option(option_index)

        macros = assemble_shared_pixel_macros(
            schema, stage, method, option, self._apply_fixes
        )
        return self._compile("shared_pixel", stage, self._family.pixel_profile, macros)

    def generate_shared_vertex_shader(self, vertex_type, stage):
        """Generate the shared vertex program for a vertex format and stage.

        Returns None if the vertex format or stage is not supported, or if the
        vertex program of this stage is not shared.
        """
        vertex_type = to_member(VertexType, vertex_type)
        stage = to_member(ShaderStage, stage)
        matrix = self._family.matrix
        if not matrix.is_vertex_format_supported(vertex_type):
            logger.debug(f"No {vertex_type.name} vertex format for {self._family.name}")
            return None
        if not (
            matrix.is_entry_point_supported(stage) and matrix.is_vertex_shader_shared(stage)
        ):
            logger.debug(f"No shared {stage.name} vertex shader for {self._family.name}")
            return None
        macros = assemble_vertex_macros(
            self._family.schema,
            vertex_type,
            stage,
            transforms=self._family.vertex_transforms,
            sentinel=self._family.vertex_sentinel,
            apply_fixes=self._apply_fixes,
        )
        return self._compile(
            "shared_vertex", stage, self._family.vertex_profile, macros
        )

    def _compile(self, kind, stage, profile, macros):
        if self._backend is None:
            raise NotConfigured("Cannot generate shaders without a compilation backend.")

        template = self._family.template(kind)
        entry = self._family.entry_name(stage)
        # A new include context per request
        include = self.templates.include_context(template)

        logger.info(f"Compiling {template} {entry} {profile} ({len(macros)} macros)")
        try:
            bytecode = self._backend.compile(template, entry, profile, macros, include)
        except CompileDiagnostic:
            # Developers can enable this with SHADERGEN_PRINT_SOURCE_ON_COMPILATION_ERROR
            if PRINT_SOURCE_ON_ERROR:
                source_with_line_numbers = "\n".join(
                    f"{i + 1:5d}: {line}"
                    for i, line in enumerate(macros.to_source().splitlines())
                )
                print(f"{template} {entry} {profile}", file=sys.stderr)
                print(source_with_line_numbers, file=sys.stderr)
            raise

        return ShaderGeneratorResult(bytes(bytecode), macros, template, entry, profile)

    # ----- Parameters

    def get_pixel_shader_parameters(self):
        """Get the parameters of the pixel program, or None if no selection is bound."""
        if self._selection is None:
            return None
        return pixel_parameters(self._family.schema, self._selection)

    def get_vertex_shader_parameters(self):
        """Get the parameters of the vertex program, or None if no selection is bound."""
        if self._selection is None:
            return None
        return vertex_parameters(self._family.schema, self._selection)

    def get_global_parameters(self):
        return self._family.global_parameters

    def get_parameters_in_option(self, method_name, option):
        """Get the parameters of one option of one method, see ``parameters_in_option()``."""
        return parameters_in_option(self._family.schema, method_name, option)
