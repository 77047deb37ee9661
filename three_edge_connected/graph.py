"""Adjacency-list graphs over dense node indices, built from GFA links."""

import gzip
import typing
from collections import Counter, defaultdict
from collections.abc import Mapping
from pathlib import Path

import numpy as np
import numpy.typing as npt

from .exceptions import GFAParseError, MalformedGraphError

if typing.TYPE_CHECKING:
    from .biedged import BiedgedGraph

GFA_ORIENTATIONS = ("+", "-")


def iter_gfa_lines(source: str | Path | typing.Iterable[str]) -> typing.Iterator[str]:
    """Iterate lines of a GFA given as a path (possibly gzipped) or as lines."""
    if isinstance(source, (str, Path)):
        path = Path(source).expanduser()
        opener = gzip.open if path.suffix == ".gz" else open
        with opener(path, "rt") as f:
            yield from f
    else:
        yield from source


def parse_gfa_link(line: str, line_no: int = 0) -> tuple[str, str, str, str]:
    """Parse an 'L' line into (from, from_orient, to, to_orient)."""
    fields = line.rstrip("\n").split("\t")
    if len(fields) < 5:
        raise GFAParseError(f"Line {line_no}: link needs at least 5 fields, got {len(fields)}.")
    _, from_segment, from_orient, to_segment, to_orient = fields[:5]
    if from_orient not in GFA_ORIENTATIONS or to_orient not in GFA_ORIENTATIONS:
        raise GFAParseError(f"Line {line_no}: orientations must be '+' or '-': {from_orient} {to_orient}.")
    return from_segment, from_orient, to_segment, to_orient


def adjacency_to_csr(
    adjacency: typing.Mapping[int, typing.Sequence[int]] | typing.Sequence[typing.Sequence[int]],
    node_cnt: int | None = None,
) -> tuple[npt.NDArray, npt.NDArray]:
    """Turn adjacency lists into the CSR arrays `indptr` and `indices`.

    Neighbors of node i are `indices[indptr[i]:indptr[i+1]]`, in the original order.
    Nodes missing from a mapping get no neighbors.
    """
    items = adjacency.items() if isinstance(adjacency, Mapping) else enumerate(adjacency)
    items = list(items)
    if node_cnt is None:
        node_cnt = max((node for node, _ in items), default=-1) + 1
    degrees = np.zeros(node_cnt, dtype=np.int64)
    for node, neighbors in items:
        degrees[node] = len(neighbors)
    indptr = np.zeros(node_cnt + 1, dtype=np.int64)
    np.cumsum(degrees, out=indptr[1:])
    indices = np.empty(indptr[-1], dtype=np.int64)
    for node, neighbors in items:
        indices[indptr[node] : indptr[node + 1]] = neighbors
    return indptr, indices


def check_adjacency(adjacency: typing.Mapping[int, typing.Sequence[int]]) -> None:
    """Check that adjacency lists describe an undirected multigraph on nodes 0..n-1.

    Raises:
        MalformedGraphError: keys are not dense, a neighbor is out of range, or an edge is not listed at both ends equally often.
    """
    node_cnt = len(adjacency)
    if set(adjacency) != set(range(node_cnt)):
        raise MalformedGraphError(f"Node indices must be exactly 0..{node_cnt - 1}.")
    arcs = Counter()
    for node, neighbors in adjacency.items():
        for neighbor in neighbors:
            if not 0 <= neighbor < node_cnt:
                raise MalformedGraphError(f"Node {node} has neighbor {neighbor} outside of 0..{node_cnt - 1}.")
            arcs[(node, neighbor)] += 1
    for (a, b), cnt in arcs.items():
        if a != b and arcs[(b, a)] != cnt:
            raise MalformedGraphError(
                f"Edge ({a}, {b}) listed {cnt} times at {a} but {arcs[(b, a)]} times at {b}."
            )


class Graph:
    """Adjacency lists keyed by dense node indices, with the names of the nodes."""

    def __init__(self, adjacency: dict[int, list[int]], inv_names: list[str] | None = None):
        self.adjacency = adjacency
        if inv_names is None:
            inv_names = [str(i) for i in range(len(adjacency))]
        assert len(inv_names) == len(adjacency), "Every node needs exactly one name."
        self.inv_names = inv_names

    @classmethod
    def from_adjacency(
        cls,
        adjacency: typing.Mapping[int, typing.Sequence[int]] | typing.Sequence[typing.Sequence[int]],
        names: list[str] | None = None,
        check: bool = True,
    ) -> "Graph":
        items = adjacency.items() if isinstance(adjacency, Mapping) else enumerate(adjacency)
        adjacency = {node: list(neighbors) for node, neighbors in sorted(items)}
        if check:
            check_adjacency(adjacency)
        return cls(adjacency, names)

    @classmethod
    def from_edges(
        cls,
        edges: typing.Iterable[tuple[typing.Hashable, typing.Hashable]],
        nodes: typing.Iterable[typing.Hashable] = (),
    ) -> "Graph":
        """Build a graph from an edge list; nodes get indices in order of appearance.

        Arguments:
            edges (iterable): pairs of node names. Repeated pairs make parallel edges.
            nodes (iterable): names of nodes to index first, e.g. isolated ones.
        """
        graph = defaultdict(list)
        name_map = {}

        def get_ix(name):
            if name not in name_map:
                name_map[name] = len(name_map)
                graph[name_map[name]]
            return name_map[name]

        for node in nodes:
            get_ix(node)
        for a, b in edges:
            a_ix = get_ix(a)
            b_ix = get_ix(b)
            graph[a_ix].append(b_ix)
            graph[b_ix].append(a_ix)
        return cls(dict(graph), [str(name) for name in name_map])

    @classmethod
    def from_gfa(
        cls,
        source: str | Path | typing.Iterable[str],
        include_segments: bool = False,
    ) -> "Graph":
        """Build the segment graph of a GFA file, keeping only its links.

        Segment names get indices in order of their first appearance.
        A link from a segment to itself is listed twice in that segment's adjacency.

        Arguments:
            source (str | Path | iterable of str): path to a (gzipped) GFA file, or its lines.
            include_segments (bool): also index segments from 'S' lines, so that segments without links appear as isolated nodes.
        """
        graph = defaultdict(list)
        name_map = {}

        def get_ix(name):
            if name not in name_map:
                name_map[name] = len(name_map)
                graph[name_map[name]]
            return name_map[name]

        for line_no, line in enumerate(iter_gfa_lines(source), start=1):
            if line.startswith("L"):
                from_segment, _, to_segment, _ = parse_gfa_link(line, line_no)
                from_ix = get_ix(from_segment)
                to_ix = get_ix(to_segment)
                graph[from_ix].append(to_ix)
                graph[to_ix].append(from_ix)
            elif include_segments and line.startswith("S"):
                fields = line.rstrip("\n").split("\t")
                if len(fields) < 2 or not fields[1]:
                    raise GFAParseError(f"Line {line_no}: segment without a name.")
                get_ix(fields[1])
        return cls(dict(graph), list(name_map))

    @classmethod
    def from_biedged(cls, biedged: "BiedgedGraph") -> "Graph":
        """Take the black and gray edges of a biedged graph as adjacency lists.

        Biedged node ids are renumbered densely in increasing order.
        After gray edge contraction only black edges remain.
        """
        ids = sorted(biedged.nodes)
        id_to_ix = {node_id: ix for ix, node_id in enumerate(ids)}
        graph = {ix: [] for ix in range(len(ids))}
        for a, b in list(biedged.black_edges()) + list(biedged.gray_edges()):
            graph[id_to_ix[a]].append(id_to_ix[b])
            graph[id_to_ix[b]].append(id_to_ix[a])
        return cls(graph, [biedged.label(node_id) for node_id in ids])

    def to_csr(self) -> tuple[npt.NDArray, npt.NDArray]:
        return adjacency_to_csr(self.adjacency, len(self.adjacency))

    @property
    def node_cnt(self) -> int:
        return len(self.adjacency)

    @property
    def edge_cnt(self) -> int:
        """Number of undirected edges, loops included."""
        return sum(map(len, self.adjacency.values())) // 2

    def __len__(self):
        return self.node_cnt

    def __getitem__(self, node: int) -> list[int]:
        return self.adjacency[node]

    def names(self, nodes: typing.Iterable[int]) -> list[str]:
        return [self.inv_names[n] for n in nodes]

    def __repr__(self):
        return "Graph(nodes {} edges {})".format(self.node_cnt, self.edge_cnt)
