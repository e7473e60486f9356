"""
The option schema describes a technique family as an ordered list of methods,
each with an enumeration of mutually exclusive options. A selection vector
picks one option per method; it identifies a single permutation and encodes
to one byte per method.
"""

from ._method import MacroRule, Method  # noqa
from ._schema import OptionSchema  # noqa
from ._selection import SelectionVector  # noqa
