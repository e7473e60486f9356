"""
The selection vector: one chosen option per method of a schema.
"""

from ..errors import SchemaMismatch


class SelectionVector:
    """An immutable ordered list of options, one per method of a schema.

    Usually created with ``schema.selection(...)``, ``schema.decode(data)``
    or ``SelectionVector.from_options(schema, ...)``.

    Items can be obtained by method index or by method name. Selections are
    hashable and compare equal when they are for the same schema and contain
    the same options.
    """

    __slots__ = ["_options", "_schema"]

    def __init__(self, schema, options):
        options = tuple(options)
        if len(options) != schema.method_count():
            raise SchemaMismatch(
                f"A {schema.family} selection needs {schema.method_count()} options, got {len(options)}."
            )
        self._schema = schema
        self._options = tuple(
            method.option(value) for method, value in zip(schema.methods, options)
        )

    @classmethod
    def from_options(cls, schema, **options):
        """Create a selection from keyword arguments (method name -> option).

        Methods that are not given use the first option of their domain.
        """
        unknown = set(options) - set(schema.method_names())
        if unknown:
            raise SchemaMismatch(
                f"Unknown {schema.family} method(s): {', '.join(sorted(unknown))}"
            )
        values = [options.get(method.name, 0) for method in schema.methods]
        return cls(schema, values)

    @property
    def schema(self):
        """The OptionSchema that this selection belongs to."""
        return self._schema

    def replace(self, **options):
        """Get a new selection with the given methods set to other options."""
        current = {m.name: o for m, o in zip(self._schema.methods, self._options)}
        unknown = set(options) - set(current)
        if unknown:
            raise SchemaMismatch(
                f"Unknown {self._schema.family} method(s): {', '.join(sorted(unknown))}"
            )
        current.update(options)
        return SelectionVector(self._schema, current.values())

    def to_bytes(self):
        """Encode as one byte per method."""
        return self._schema.encode(self)

    def items(self):
        """Iterate over (method, option) pairs."""
        return zip(self._schema.methods, self._options)

    def __len__(self):
        return len(self._options)

    def __iter__(self):
        return iter(self._options)

    def __getitem__(self, key):
        if isinstance(key, str):
            return self._options[self._schema.method_index(key)]
        return self._options[key]

    def __eq__(self, other):
        if not isinstance(other, SelectionVector):
            return NotImplemented
        return self._schema is other._schema and self._options == other._options

    def __hash__(self):
        return hash((self._schema.family, self._options))

    def __repr__(self):
        options = ", ".join(
            f"{m.name}={o.name}" for m, o in zip(self._schema.methods, self._options)
        )
        return f"<SelectionVector {self._schema.family}: {options}>"
