# src/swc2dot/graph.py
from __future__ import annotations

# General imports (stdlib)
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

# Local imports
from .exceptions import MissingParent
from .swc import Compartment, CompartmentKind, Morphology


@dataclass
class Vertex:
    """
    A compartment plus the ids of its children.

    Children are referenced by id and looked up through the owning Graph.
    """
    data: Compartment
    children: List[int] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.data.id

    @property
    def parent_id(self) -> Optional[int]:
        return self.data.parent_id

    @property
    def kind(self) -> CompartmentKind:
        return self.data.kind

    def add_child(self, child: "Vertex") -> None:
        self.children.append(child.id)


@dataclass(frozen=True)
class ShortTree:
    """
    A tree of height 1: one vertex id and a snapshot of its child ids.

    In DOT, a tree of height 1 can be declared in one line.
    """
    root_id: int
    child_ids: Tuple[int, ...]

    @classmethod
    def from_vertex(cls, vertex: Vertex) -> "ShortTree":
        return cls(root_id=vertex.id, child_ids=tuple(vertex.children))


class Graph:
    """Vertices of one morphology keyed by id, with parent -> children links."""

    def __init__(self) -> None:
        self._vertices: Dict[int, Vertex] = {}

    @classmethod
    def from_morphology(cls, morphology: Morphology) -> "Graph":
        """
        Build a Graph from a Morphology.

        Use:
            Compartments are visited in ascending id order. Because a parent id
            is always smaller than its child's id, the parent vertex already
            exists when the child is linked, and children end up listed in
            ascending id order.

        Args:
            morphology (Morphology): Parsed compartments.

        Returns:
            Graph: One vertex per compartment.

        Raises:
            MissingParent: If a compartment refers to a parent id that is not
                part of the morphology.
            RuntimeError: If an id is inserted twice; Morphology already
                rejects duplicates so this indicates inconsistent state.
        """
        graph = cls()

        for compartment in morphology:
            vertex = Vertex(compartment)

            # Link the vertex to its parent, which was inserted earlier
            if vertex.parent_id is not None:
                parent = graph._vertices.get(vertex.parent_id)
                if parent is None:
                    raise MissingParent(vertex.id, vertex.parent_id)
                parent.add_child(vertex)

            if vertex.id in graph._vertices:
                raise RuntimeError(f"Vertex {vertex.id} inserted twice; morphology ids must be unique.")
            graph._vertices[vertex.id] = vertex

        return graph

    def iter_vertices(self) -> Iterator[Vertex]:
        for vertex_id in sorted(self._vertices):
            yield self._vertices[vertex_id]

    def iter_short_trees(self) -> Iterator[ShortTree]:
        # Snapshot every vertex before yielding so callers see one consistent state
        trees = [ShortTree.from_vertex(v) for v in self.iter_vertices()]
        return iter(trees)

    def vertex(self, vertex_id: int) -> Vertex:
        return self._vertices[vertex_id]

    def children_of(self, vertex_id: int) -> List[Vertex]:
        return [self._vertices[c] for c in self._vertices[vertex_id].children]

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._vertices
