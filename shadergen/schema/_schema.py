"""
The option schema of a technique family.
"""

import numpy as np

from ..errors import SchemaMismatch
from ..utils.enums import ShaderType
from ._method import Method
from ._selection import SelectionVector


class OptionSchema:
    """The ordered list of methods of a technique family.

    Parameters
    ----------
    family : str
        The family name. Must be the name of a ``ShaderType``, because it is
        used in the ``shadertype`` macro.
    methods : sequence of Method
        The methods, in their fixed order.
    auto_macros : bool
        Whether to also emit the ``category_<method>_option_<option>`` macros.
    options_directory : str | None
        The directory used in the path token of ``parameters_in_option()``.
        Default ``shaders\\<family>_options``.
    """

    def __init__(self, family, methods, *, auto_macros=False, options_directory=None):
        try:
            self._shader_type = ShaderType[family]
        except KeyError:
            raise ValueError(f"Unknown technique family: {family!r}") from None
        methods = tuple(methods)
        for method in methods:
            if not isinstance(method, Method):
                raise TypeError(f"Expected Method objects, got {method!r}")
        names = [method.name for method in methods]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate method names in {family} schema: {names}")
        if len(methods) == 0:
            raise ValueError("An option schema needs at least one method.")

        self._family = family
        self._methods = methods
        self._indices = {name: i for i, name in enumerate(names)}
        self._auto_macros = bool(auto_macros)
        self._options_directory = options_directory or f"shaders\\{family}_options"

    def __repr__(self):
        return f"<OptionSchema {self._family} with {len(self._methods)} methods>"

    @property
    def family(self):
        """The name of the technique family."""
        return self._family

    @property
    def shader_type(self):
        """The ShaderType that corresponds to this family."""
        return self._shader_type

    @property
    def methods(self):
        """The tuple of Method objects."""
        return self._methods

    @property
    def auto_macros(self):
        return self._auto_macros

    @property
    def options_directory(self):
        return self._options_directory

    def method_count(self):
        return len(self._methods)

    def method_names(self):
        return tuple(method.name for method in self._methods)

    def method_index(self, name):
        try:
            return self._indices[name.lower()]
        except KeyError:
            raise SchemaMismatch(f"The {self._family} schema has no method {name!r}") from None

    def get_method(self, key):
        """Get a method by index or by name."""
        if isinstance(key, str):
            return self._methods[self.method_index(key)]
        if not 0 <= key < len(self._methods):
            raise SchemaMismatch(
                f"Method index {key} out of range for the {self._family} schema."
            )
        return self._methods[key]

    def option_count(self, method_index):
        return self.get_method(method_index).option_count

    def selection(self, *options, **named_options):
        """Create a selection, either from one option per method, or from keyword arguments."""
        if options and named_options:
            raise TypeError("Give options either positionally or by name, not both.")
        if options:
            return SelectionVector(self, options)
        return SelectionVector.from_options(self, **named_options)

    def default_selection(self):
        """The selection with the first option of every method."""
        return SelectionVector.from_options(self)

    def encode(self, selection):
        """Encode a selection as bytes: one byte (the option ordinal) per method."""
        if not isinstance(selection, SelectionVector) or selection.schema is not self:
            raise SchemaMismatch(f"Can only encode {self._family} selections.")
        return np.array([int(o) for o in selection], dtype=np.uint8).tobytes()

    def decode(self, data):
        """Decode a selection from bytes as produced by ``encode()``.

        Raises SchemaMismatch if the number of bytes does not match the number
        of methods, or if a byte is not a valid ordinal for its method.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise SchemaMismatch(
                f"Cannot decode {self._family} selection from {data.__class__.__name__}."
            )
        raw = bytes(data)
        values = np.frombuffer(raw, dtype=np.uint8)
        if values.size != len(self._methods):
            raise SchemaMismatch(
                f"A {self._family} selection has {len(self._methods)} bytes, got {values.size}."
            )
        counts = np.array([m.option_count for m in self._methods], dtype=np.int32)
        (invalid,) = np.nonzero(values >= counts)
        if invalid.size:
            i = int(invalid[0])
            raise SchemaMismatch(
                f"Byte {i} ({values[i]}) is out of range for method "
                f"{self._methods[i].name!r} ({counts[i]} options)."
            )
        return SelectionVector(self, [int(v) for v in values])
