"""Small graphs with known 3-edge-connected components."""

from collections import defaultdict


def from_edges(edges, node_cnt=None):
    graph = defaultdict(list)
    for a, b in edges:
        graph[a].append(b)
        graph[b].append(a)
    if node_cnt is None:
        node_cnt = max(graph, default=-1) + 1
    return {n: graph[n] for n in range(node_cnt)}


def shift(edges, by):
    return [(a + by, b + by) for a, b in edges]


def repeat(edges, times):
    return [e for e in edges for _ in range(times)]


def cycle_edges(k):
    return [(i, (i + 1) % k) for i in range(k)]


def complete_edges(k):
    return [(i, j) for i in range(k) for j in range(i + 1, k)]


PATH = from_edges([(0, 1), (1, 2), (2, 3)])
STAR = from_edges([(0, 1), (0, 2), (0, 3), (3, 4), (3, 5)])
TRIANGLE = from_edges(cycle_edges(3))
DOUBLE_EDGE = from_edges(repeat([(0, 1)], 2))
TRIPLE_EDGE = from_edges(repeat([(0, 1)], 3))
DOUBLED_TRIANGLE = from_edges(repeat(cycle_edges(3), 2))
K4 = from_edges(complete_edges(4))

# two K4s joined by the bridge 3-4
TWO_K4_AND_BRIDGE = from_edges(
    complete_edges(4) + shift(complete_edges(4), 4) + [(3, 4)]
)
TWO_DOUBLED_TRIANGLES_AND_BRIDGE = from_edges(
    repeat(cycle_edges(3), 2) + shift(repeat(cycle_edges(3), 2), 3) + [(2, 3)]
)

# 0 and 1 joined by three paths through 2, 3 and 4
THETA = from_edges([(0, 2), (2, 1), (0, 3), (3, 1), (0, 4), (4, 1)])

# K4, a doubled triangle, and an isolated node
DISCONNECTED = from_edges(
    complete_edges(4) + shift(repeat(cycle_edges(3), 2), 4), node_cnt=8
)
