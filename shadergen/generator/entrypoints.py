"""
The entry-point matrix tells, per technique family, which stages exist and
which of them can share one compiled program between all selections.
"""

from ..utils.enums import ShaderStage, VertexType, to_member


class EntryPointMatrix:
    """Classification of the entry points of a technique family.

    Parameters
    ----------
    supported : iterable of ShaderStage
        The stages for which the family defines a pixel program.
    shared_pixel : iterable of ShaderStage
        The supported stages whose pixel program does not depend on the selection.
    shared_method : int | None
        The index of the single method that shared pixel programs still
        branch on, or None if they branch on nothing.
    vertex_formats : iterable of VertexType
        The vertex formats that the family supports.
    shared_vertex : iterable of ShaderStage | None
        The stages whose vertex program is shared. Default all stages.
    """

    def __init__(
        self,
        supported,
        shared_pixel=(),
        shared_method=None,
        vertex_formats=(),
        shared_vertex=None,
    ):
        self._supported = frozenset(to_member(ShaderStage, s) for s in supported)
        self._shared_pixel = frozenset(to_member(ShaderStage, s) for s in shared_pixel)
        self._shared_method = shared_method
        self._vertex_formats = frozenset(
            to_member(VertexType, v) for v in vertex_formats
        )
        if shared_vertex is None:
            self._shared_vertex = frozenset(ShaderStage)
        else:
            self._shared_vertex = frozenset(
                to_member(ShaderStage, s) for s in shared_vertex
            )

        if not self._shared_pixel <= self._supported:
            raise ValueError("Shared pixel stages must be supported stages.")

    def __repr__(self):
        stages = ", ".join(s.name for s in sorted(self._supported))
        return f"<EntryPointMatrix {stages}>"

    @property
    def supported_stages(self):
        """The supported stages, in enum order."""
        return tuple(sorted(self._supported))

    @property
    def vertex_formats(self):
        """The supported vertex formats, in enum order."""
        return tuple(sorted(self._vertex_formats))

    @property
    def shared_method(self):
        return self._shared_method

    def is_entry_point_supported(self, stage):
        return to_member(ShaderStage, stage) in self._supported

    def is_pixel_shader_shared(self, stage):
        return to_member(ShaderStage, stage) in self._shared_pixel

    def is_shared_pixel_shader_using_methods(self, stage):
        """Whether the shared pixel program of this stage branches on a method."""
        return self.is_pixel_shader_shared(stage) and self._shared_method is not None

    def is_shared_pixel_shader_without_method(self, stage):
        """Whether the shared pixel program of this stage does not branch on any method."""
        return self.is_pixel_shader_shared(stage) and self._shared_method is None

    def is_method_shared_in_entry_point(self, stage, method_index):
        """Whether the given method is the one a shared pixel program branches on."""
        return (
            self.is_shared_pixel_shader_using_methods(stage)
            and method_index == self._shared_method
        )

    def is_vertex_format_supported(self, vertex_type):
        return to_member(VertexType, vertex_type) in self._vertex_formats

    def is_vertex_shader_shared(self, stage):
        return to_member(ShaderStage, stage) in self._shared_vertex
