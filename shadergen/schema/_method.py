"""
Methods are the axes of variation of a technique family. Next to its option
domain, a method carries the declarative tables that describe how its options
turn into macros and parameters.
"""

from enum import IntEnum

from ..errors import SchemaMismatch
from ..utils import ReadOnlyDict


class MacroRule:
    """A rule to emit a macro that names the selected option of a method.

    The definition is ``prefix + option_name + suffix``, lower-cased.

    Parameters
    ----------
    name : str
        The name of the macro.
    prefix : str
        Prepended to the option name in the definition.
    suffix : str
        Appended to the option name in the definition.
    only : iterable | None
        If given, the macro is only emitted when one of these options is selected.
    substitute : dict | None
        Maps a selected option to the option to use in the definition instead.
    """

    __slots__ = ["name", "only", "prefix", "substitute", "suffix"]

    def __init__(self, name, prefix="", suffix="", *, only=None, substitute=None):
        self.name = name
        self.prefix = prefix
        self.suffix = suffix
        self.only = None if only is None else frozenset(only)
        self.substitute = ReadOnlyDict(substitute or {})

    def __repr__(self):
        return f"<MacroRule {self.name} = {self.prefix}*{self.suffix}>"

    def applies_to(self, option):
        return self.only is None or option in self.only

    def definition(self, option):
        option = self.substitute.get(option, option)
        return f"{self.prefix}{option.name}{self.suffix}".lower()


class Method:
    """A named axis of variation, with its option domain and override tables.

    Parameters
    ----------
    name : str
        The lower-case method name, used in macro names.
    options : type[IntEnum]
        The option domain. Ordinals must be 0..n-1.
    macros : sequence of MacroRule
        The macros that name the selected option.
    arg_name : str | None
        The name of the macro that refers to the ordinal of the selected
        option. Default ``<name>_arg``.
    pixel_parameters : dict | None
        Maps every option to a tuple of parameter descriptors needed by the
        pixel program. None means no option needs parameters.
    vertex_parameters : dict | None
        Same for the vertex program.
    category_parameter : bool
        Whether the vertex program takes a ``category_<name>`` float4
        parameter (after the option's own vertex parameters).
    unsupported : iterable
        Options that exist in the domain but cannot be generated.
    """

    def __init__(
        self,
        name,
        options,
        *,
        macros=(),
        arg_name=None,
        pixel_parameters=None,
        vertex_parameters=None,
        category_parameter=False,
        unsupported=(),
    ):
        if not (isinstance(options, type) and issubclass(options, IntEnum)):
            raise TypeError(f"Method {name!r} needs an IntEnum option domain.")
        if [int(o) for o in options] != list(range(len(options))):
            raise ValueError(f"Options of method {name!r} must be numbered 0..n-1.")

        self._name = name.lower()
        self._options = options
        self._macros = tuple(macros)
        self._arg_name = arg_name or f"{self._name}_arg"
        self._pixel_parameters = self._check_table(pixel_parameters, "pixel")
        self._vertex_parameters = self._check_table(vertex_parameters, "vertex")
        self._category_parameter = bool(category_parameter)
        self._unsupported = frozenset(self.option(o) for o in unsupported)

    def _check_table(self, table, kind):
        if table is None:
            return ReadOnlyDict((option, ()) for option in self._options)
        missing = [o.name for o in self._options if o not in table]
        if missing:
            raise ValueError(
                f"The {kind} parameter table of method {self._name!r} has no entry for: {', '.join(missing)}"
            )
        extra = [k for k in table if not isinstance(k, self._options)]
        if extra:
            raise ValueError(
                f"The {kind} parameter table of method {self._name!r} has foreign keys: {extra}"
            )
        return ReadOnlyDict((option, tuple(table[option])) for option in self._options)

    def __repr__(self):
        return f"<Method {self._name} with {len(self._options)} options>"

    @property
    def name(self):
        """The lower-case name of this method."""
        return self._name

    @property
    def options(self):
        """The option domain (an IntEnum class)."""
        return self._options

    @property
    def option_count(self):
        return len(self._options)

    @property
    def macros(self):
        """The tuple of MacroRule objects for the selected option."""
        return self._macros

    @property
    def arg_name(self):
        return self._arg_name

    @property
    def pixel_parameters(self):
        """A read-only mapping option -> tuple of parameter descriptors."""
        return self._pixel_parameters

    @property
    def vertex_parameters(self):
        """A read-only mapping option -> tuple of parameter descriptors."""
        return self._vertex_parameters

    @property
    def category_parameter(self):
        return self._category_parameter

    @property
    def unsupported(self):
        return self._unsupported

    def option(self, value):
        """Get the option for the given member, ordinal or name.

        Raises SchemaMismatch if the value is not part of this method's domain.
        """
        if isinstance(value, self._options):
            return value
        if isinstance(value, IntEnum):
            raise SchemaMismatch(
                f"Option {value!r} does not belong to method {self._name!r}."
            )
        if isinstance(value, str):
            try:
                return self._options[value.lower()]
            except KeyError:
                raise SchemaMismatch(
                    f"Method {self._name!r} has no option {value!r}."
                ) from None
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < len(self._options):
                return self._options(value)
            raise SchemaMismatch(
                f"Option ordinal {value} out of range for method {self._name!r} ({len(self._options)} options)."
            )
        raise TypeError(f"Invalid option value for method {self._name!r}: {value!r}")

    def is_supported(self, option):
        return self.option(option) not in self._unsupported
