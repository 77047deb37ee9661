"""Biedged representation of a GFA graph and its gray edge contraction."""

import typing
from pathlib import Path

import networkx as nx

from .exceptions import GFAParseError
from .graph import iter_gfa_lines, parse_gfa_link

BLACK = "black"
GRAY = "gray"


class BiedgedGraph(nx.MultiGraph):
    """A multigraph with black edges (segments) and gray edges (links).

    Segment number i is split into its left side, node 2i, and its right side, node 2i+1,
    joined by a black edge. A link joins the side through which the path leaves
    one segment with the side through which it enters the next one.
    """

    def __init__(self, *args, **kwds):
        super().__init__(*args, **kwds)
        self.segment_ids = {}

    def add_segment(self, name: str) -> int:
        """Add the two sides and the black edge of a segment, if not there yet.

        Returns:
            int: the number of the segment.
        """
        if name not in self.segment_ids:
            i = len(self.segment_ids)
            self.segment_ids[name] = i
            self.add_node(2 * i, sides=(name + "-",))
            self.add_node(2 * i + 1, sides=(name + "+",))
            self.add_edge(2 * i, 2 * i + 1, color=BLACK)
        return self.segment_ids[name]

    def exit_side(self, name: str, orient: str) -> int:
        return 2 * self.add_segment(name) + (orient == "+")

    def entry_side(self, name: str, orient: str) -> int:
        return 2 * self.add_segment(name) + (orient == "-")

    def add_link(self, from_segment: str, from_orient: str, to_segment: str, to_orient: str):
        self.add_edge(
            self.exit_side(from_segment, from_orient),
            self.entry_side(to_segment, to_orient),
            color=GRAY,
        )

    @classmethod
    def from_gfa(cls, source: str | Path | typing.Iterable[str]) -> "BiedgedGraph":
        """Read segments ('S') and links ('L') of a GFA; other records are skipped."""
        G = cls()
        for line_no, line in enumerate(iter_gfa_lines(source), start=1):
            if line.startswith("S"):
                fields = line.rstrip("\n").split("\t")
                if len(fields) < 2 or not fields[1]:
                    raise GFAParseError(f"Line {line_no}: segment without a name.")
                G.add_segment(fields[1])
            elif line.startswith("L"):
                G.add_link(*parse_gfa_link(line, line_no))
        return G

    def black_edges(self) -> typing.Iterator[tuple[int, int]]:
        for a, b, color in self.edges(data="color"):
            if color == BLACK:
                yield a, b

    def gray_edges(self) -> typing.Iterator[tuple[int, int]]:
        for a, b, color in self.edges(data="color"):
            if color == GRAY:
                yield a, b

    def label(self, node: int) -> str:
        return ",".join(self.nodes[node]["sides"])

    def contract_all_gray_edges(self) -> "BiedgedGraph":
        """Merge the ends of all gray edges.

        Black edges are all kept, also those that became parallel or loops.
        A merged node takes the smallest id among its members and all their side names.

        Returns:
            BiedgedGraph: the contracted graph, without gray edges.
        """
        groups = nx.utils.UnionFind(self.nodes)
        for a, b in self.gray_edges():
            groups.union(a, b)
        head = {}
        for group in groups.to_sets():
            group_head = min(group)
            for node in group:
                head[node] = group_head

        H = self.__class__()
        H.segment_ids = dict(self.segment_ids)
        for node in sorted(self.nodes):
            if head[node] not in H:
                H.add_node(head[node], sides=())
            H.nodes[head[node]]["sides"] += self.nodes[node]["sides"]
        for a, b in self.black_edges():
            H.add_edge(head[a], head[b], color=BLACK)
        return H

    def __repr__(self):
        return "BiedgedGraph(nodes {} black {} gray {})".format(
            len(self),
            sum(1 for _ in self.black_edges()),
            sum(1 for _ in self.gray_edges()),
        )
