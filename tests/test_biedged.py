from collections import Counter

from three_edge_connected import three_edge_connected_components
from three_edge_connected.biedged import BiedgedGraph
from three_edge_connected.graph import Graph

# three segments between the same two junctions: a-,b-,c- on one side, a+,b+,c+ on the other
BUBBLE_GFA = [
    "S\ta\tA\n",
    "S\tb\tC\n",
    "S\tc\tG\n",
    "L\ta\t+\tb\t-\t0M\n",
    "L\tb\t+\tc\t-\t0M\n",
    "L\ta\t-\tb\t+\t0M\n",
    "L\tb\t-\tc\t+\t0M\n",
]

CYCLE_GFA = [
    "S\ta\tA\n",
    "S\tb\tC\n",
    "L\ta\t+\tb\t+\t0M\n",
    "L\tb\t+\ta\t+\t0M\n",
]


def test_sides_and_edges():
    G = BiedgedGraph.from_gfa(CYCLE_GFA)
    assert G.segment_ids == {"a": 0, "b": 1}
    assert sorted(G.black_edges()) == [(0, 1), (2, 3)]
    assert sorted(tuple(sorted(e)) for e in G.gray_edges()) == [(0, 3), (1, 2)]
    assert G.label(1) == "a+"
    assert G.exit_side("a", "-") == 0
    assert G.entry_side("a", "-") == 1


def test_contraction_of_cycle():
    H = BiedgedGraph.from_gfa(CYCLE_GFA).contract_all_gray_edges()
    assert sorted(H.nodes) == [0, 1]
    assert list(H.gray_edges()) == []
    assert Counter(tuple(sorted(e)) for e in H.black_edges()) == {(0, 1): 2}
    assert H.label(0) == "a-,b+"
    assert H.label(1) == "a+,b-"

    graph = Graph.from_biedged(H)
    assert graph.adjacency == {0: [1, 1], 1: [0, 0]}
    assert three_edge_connected_components(graph, canonical=True) == [[0], [1]]


def test_contraction_of_bubble():
    H = BiedgedGraph.from_gfa(BUBBLE_GFA).contract_all_gray_edges()
    graph = Graph.from_biedged(H)
    assert graph.adjacency == {0: [1, 1, 1], 1: [0, 0, 0]}
    assert graph.inv_names == ["a-,b-,c-", "a+,b+,c+"]
    assert three_edge_connected_components(graph) == [[0, 1]]


def test_contraction_keeps_loops():
    # a hairpin: leaving a+ and coming back into a-
    G = BiedgedGraph.from_gfa(["S\ta\tA\n", "L\ta\t+\ta\t-\t0M\n"])
    assert sorted(tuple(sorted(e)) for e in G.gray_edges()) == [(1, 1)]
    H = BiedgedGraph.from_gfa(["S\ta\tA\n", "L\ta\t+\ta\t+\t0M\n"]).contract_all_gray_edges()
    assert sorted(H.nodes) == [0]
    assert list(H.black_edges()) == [(0, 0)]
    assert Graph.from_biedged(H).adjacency == {0: [0, 0]}
