"""Shadergen: shader permutation and parameter-metadata engine."""

# flake8: noqa

from ._version import __version__, version_info
from . import utils

from .errors import *
from .schema import MacroRule, Method, OptionSchema, SelectionVector
from .generator import (
    Generator,
    ShaderGeneratorResult,
    TechniqueFamily,
    EntryPointMatrix,
    MacroSet,
    ShaderParameters,
    ParameterDescriptor,
    ParameterKind,
    TemplateRepository,
    IncludeContext,
    CompilerBackend,
    SourceBackend,
    register_family,
    get_family,
    family_names,
)
from .families import ShaderGenerator, ParticleGenerator
from .utils import enums, logger
from .utils.enums import *
