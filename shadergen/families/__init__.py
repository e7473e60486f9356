"""
The builtin technique families. Importing this module registers them.

.. currentmodule:: shadergen.families

.. autosummary::
    :toctree: families/

    ShaderGenerator
    ParticleGenerator

"""

# flake8: noqa

from . import shader, particle
from .shader import ShaderGenerator
from .particle import ParticleGenerator
