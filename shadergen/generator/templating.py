"""
Access to template text, and request-scoped resolution of includes.

Templates are looked up through a jinja2 loader, so they can live in a
directory, in a dict, in the shadergen package, or be produced by a function.
Template paths may use backslashes; they are normalized to forward slashes.
"""

import os
import posixpath

import jinja2

from ..errors import TemplateNotFound
from ..utils import logger


# The environment is only passed to the loaders; templates are not rendered by jinja.
jinja_env = jinja2.Environment(undefined=jinja2.StrictUndefined)


def as_loader(loader):
    """Get a jinja2 loader for the given source of templates.

    Parameters
    ----------
    loader : jinja2.BaseLoader | str | os.PathLike | dict | callable
        A loader, a directory, a dict that maps paths to text, or a function
        that accepts one positional argument (the path) and returns the text
        or None.
    """
    if isinstance(loader, jinja2.BaseLoader):
        return loader
    elif isinstance(loader, (str, os.PathLike)):
        return jinja2.FileSystemLoader(loader)
    elif isinstance(loader, dict):
        return jinja2.DictLoader(loader)
    elif callable(loader):
        return jinja2.FunctionLoader(loader)
    else:
        raise TypeError(
            f"The given template loader must be a jinja2.BaseLoader, directory, function, or dict. Not {loader!r}"
        )


def normalize_path(path):
    """Normalize a template path to a relative path with forward slashes."""
    path = str(path).replace("\\", "/")
    return posixpath.normpath(path).lstrip("/")


def join_path(directory, path):
    """Join a (normalized) directory and a relative path.

    Raises TemplateNotFound if the result points outside the template root.
    """
    full = normalize_path(posixpath.join(directory, normalize_path(path)))
    if full == ".." or full.startswith("../"):
        raise TemplateNotFound(path)
    return full


class TemplateRepository:
    """A source of template text.

    Parameters
    ----------
    loader : jinja2.BaseLoader | str | os.PathLike | dict | callable
        Where the templates come from, see ``as_loader()``.
    """

    def __init__(self, loader):
        self._loader = as_loader(loader)

    def __repr__(self):
        return f"<TemplateRepository {self._loader.__class__.__name__}>"

    @property
    def loader(self):
        """The jinja2 loader."""
        return self._loader

    def resolve(self, path, context=""):
        """Get the text of the template at ``path``, relative to directory ``context``.

        Raises TemplateNotFound if there is no such template.
        """
        name = join_path(normalize_path(context) if context else "", path)
        try:
            source, _, _ = self._loader.get_source(jinja_env, name)
        except jinja2.TemplateNotFound:
            raise TemplateNotFound(name) from None
        return source

    def get_source(self, template):
        """Get the text of a top-level template."""
        return self.resolve(template)

    def list_templates(self):
        """Get a sorted list of available templates, or an empty list if the loader cannot list."""
        try:
            return sorted(self._loader.list_templates())
        except TypeError:
            return []

    def include_context(self, template):
        """Create a new IncludeContext for compiling the given template."""
        return IncludeContext(self, template)


def get_default_repository():
    """Get a repository for the templates that ship with shadergen."""
    return TemplateRepository(jinja2.PackageLoader("shadergen", "templates"))


class IncludeContext:
    """The include state of one compilation request.

    Local includes (``#include "file"``) resolve relative to the directory of
    the including file, system includes (``#include <file>``) relative to the
    directory of the top-level template. Each generation request creates its
    own context, so concurrent requests cannot see each other's directories.

    Parameters
    ----------
    repository : TemplateRepository
        Where to read templates from.
    template : str
        The path of the top-level template.
    """

    def __init__(self, repository, template):
        self._repository = repository
        self._template = normalize_path(template)
        self._root = posixpath.dirname(self._template)
        self._opened = []

    def __repr__(self):
        return f"<IncludeContext {self._template}>"

    @property
    def repository(self):
        return self._repository

    @property
    def template(self):
        """The normalized path of the top-level template."""
        return self._template

    @property
    def root(self):
        """The directory of the top-level template."""
        return self._root

    @property
    def opened(self):
        """The paths of the files opened so far, in order."""
        return tuple(self._opened)

    def read_template(self):
        """Get the text of the top-level template."""
        source = self._repository.resolve(self._template)
        self._opened.append(self._template)
        return source

    def open(self, path, system=False, parent=None):
        """Resolve an include.

        Parameters
        ----------
        path : str
            The path as written in the include directive.
        system : bool
            Whether this is a system include (``<...>``).
        parent : str | None
            The resolved path of the including file. None means the top-level template.

        Returns
        -------
        resolved : str
            The resolved path, to pass as ``parent`` for nested includes.
        source : str
            The text of the included file.
        """
        if system or parent is None:
            directory = self._root
        else:
            directory = posixpath.dirname(normalize_path(parent))
        resolved = join_path(directory, path)
        source = self._repository.resolve(resolved)
        logger.debug(f"Resolved include {path!r} as {resolved!r}")
        self._opened.append(resolved)
        return resolved, source
