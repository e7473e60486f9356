"""
The compilation backend turns a template, an entry point, a profile and a
macro set into program bytecode. Real backends wrap a native shader compiler;
shadergen ships ``SourceBackend``, which only preprocesses includes.
"""

import re

from ..errors import CompileDiagnostic
from ..utils import logger


class CompilerBackend:
    """The interface of a compilation backend. Subclasses implement ``compile()``."""

    def compile(self, template, entry, profile, macros, include):
        """Compile a template.

        Parameters
        ----------
        template : str
            The path of the top-level template.
        entry : str
            The name of the entry function, e.g. ``entry_albedo``.
        profile : str
            The target profile, e.g. ``ps_3_0``.
        macros : MacroSet
            The macros to define.
        include : IncludeContext
            Resolves the includes of this request.

        Returns
        -------
        bytecode : bytes

        Raises CompileDiagnostic when compilation fails, and TemplateNotFound
        when the template or one of its includes does not exist.
        """
        raise NotImplementedError()


_include_pattern = re.compile(r'^[ \t]*#[ \t]*include[ \t]*(?:"([^"]+)"|<([^>]+)>)', re.M)
_pragma_once_pattern = re.compile(r"^[ \t]*#[ \t]*pragma[ \t]+once\b", re.M)


class SourceBackend(CompilerBackend):
    """A backend that produces preprocessed source instead of bytecode.

    The result is the macro set as ``#define`` lines, followed by the
    template with all includes expanded, encoded as UTF-8. Files that contain
    ``#pragma once`` are expanded only once. Raises CompileDiagnostic when the
    entry function is not present in the expanded source, or when includes
    form a cycle. A missing template or include raises TemplateNotFound.

    Parameters
    ----------
    check_entry : bool
        Whether to check that the entry function exists. Default True.
    """

    def __init__(self, check_entry=True):
        self._check_entry = bool(check_entry)

    def compile(self, template, entry, profile, macros, include):
        source = include.read_template()
        body = self._expand(source, include, None, [include.template], set())

        if self._check_entry and not re.search(rf"\b{re.escape(entry)}\s*\(", body):
            raise CompileDiagnostic(
                f"{template}: entry point '{entry}' not found", template, entry
            )

        header = f"// {template} {entry} {profile}\n"
        return (header + macros.to_source() + body).encode("utf-8")

    def _expand(self, source, include, parent, stack, once):
        if _pragma_once_pattern.search(source):
            once.add(stack[-1])

        def replace(match):
            local_path, system_path = match.groups()
            resolved, text = include.open(
                local_path or system_path, system=system_path is not None, parent=parent
            )
            if resolved in once:
                return ""
            if resolved in stack:
                chain = " -> ".join(stack + [resolved])
                raise CompileDiagnostic(f"Include cycle: {chain}", include.template)
            return self._expand(text, include, resolved, stack + [resolved], once)

        result = _include_pattern.sub(replace, source)
        logger.debug(f"Expanded {stack[-1]}")
        return result
