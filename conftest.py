"""Global configuration for pytest"""

import numpy as np
import pytest

from shadergen import CompilerBackend


@pytest.fixture(autouse=True, scope="session")
def numerical_exceptions():
    """
    Ensure any numerical errors raise a warning in our test suite
    The point is that we enforce such cases to be handled explicitly in our code
    Preferably using local `with np.errstate(...)` constructs
    """
    np.seterr(all="raise")


class RecordingBackend(CompilerBackend):
    """A backend that records its calls and returns the entry name as bytecode."""

    def __init__(self):
        self.calls = []

    def compile(self, template, entry, profile, macros, include):
        self.calls.append((template, entry, profile, macros, include))
        return entry.encode()


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def template_dict():
    """A small set of templates for the builtin families, with nested includes."""
    return {
        "pixl_shader.hlsl": '#include "common/helpers.hlsli"\nvoid entry_albedo() {}\nvoid entry_shadow_generate() {}\n',
        "glps_shader.hlsl": '#include "common/helpers.hlsli"\nvoid entry_shadow_generate() {}\n',
        "glvs_shader.hlsl": "#include <common/helpers.hlsli>\nvoid entry_albedo() {}\n",
        "pixl_particle.hlsl": '#include "common/helpers.hlsli"\nvoid entry_default() {}\n',
        "glvs_particle.hlsl": "void entry_default() {}\n",
        "common/helpers.hlsli": '#pragma once\n#include "types.hlsli"\nfloat helper();\n',
        "common/types.hlsli": "struct s_types {};\n",
    }
