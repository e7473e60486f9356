"""
The exceptions raised by shadergen.

Configuration errors (``DuplicateMacroDefinition``, ``SchemaMismatch`` and
``NotConfigured``) are detected before the compilation backend is invoked.
A stage or vertex format that does not apply is not an error: the generation
call returns None instead.
"""


class ShaderGenError(Exception):
    """Base class for all shadergen errors."""


class DuplicateMacroDefinition(ShaderGenError, ValueError):
    """A macro set defines the same name more than once."""

    def __init__(self, name):
        super().__init__(f"Macro {name} is defined multiple times")
        self.name = name


class SchemaMismatch(ShaderGenError, ValueError):
    """A selection (or its byte encoding) does not match the option schema."""


class NotConfigured(ShaderGenError, RuntimeError):
    """A generator was asked for something it was not constructed for."""


class UnsupportedOption(ShaderGenError, ValueError):
    """The selection contains an option that the engine does not support."""

    def __init__(self, method, option):
        super().__init__(f"Option {option.name!r} of method {method!r} is not supported")
        self.method = method
        self.option = option


class TemplateNotFound(ShaderGenError, LookupError):
    """A template or include could not be resolved."""

    def __init__(self, path):
        super().__init__(f"Couldn't find file {path}")
        self.path = path


class CompileDiagnostic(ShaderGenError, RuntimeError):
    """The compilation backend failed; carries its diagnostic text unchanged."""

    def __init__(self, message, template=None, entry=None):
        super().__init__(message)
        self.message = message
        self.template = template
        self.entry = entry
