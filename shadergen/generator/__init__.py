"""
The generator turns a selection into macro sets, parameter lists and,
through a compilation backend, into programs.

.. currentmodule:: shadergen.generator

.. autosummary::
    :toctree: generator/

    Generator
    ShaderGeneratorResult
    TechniqueFamily
    EntryPointMatrix
    MacroSet
    ShaderParameters
    TemplateRepository
    IncludeContext
    CompilerBackend
    SourceBackend

"""

# flake8: noqa

from .macros import (
    Macro,
    MacroSet,
    assemble_macros,
    assemble_shared_pixel_macros,
    assemble_vertex_macros,
    check_unique,
)
from .entrypoints import EntryPointMatrix
from .parameters import (
    ParameterKind,
    ParameterDescriptor,
    ShaderParameters,
    OptionParameters,
    pixel_parameters,
    vertex_parameters,
    parameters_in_option,
)
from .templating import TemplateRepository, IncludeContext, get_default_repository
from .backend import CompilerBackend, SourceBackend
from .family import TechniqueFamily, register_family, get_family, family_names
from .base import Generator, ShaderGeneratorResult
