import typing
from pathlib import Path

from .algorithm import canonical_order, three_edge_connect
from .biedged import BiedgedGraph
from .graph import Graph


def gfa_three_edge_components(
    gfa: str | Path | typing.Iterable[str],
    contract_gray_edges: bool = False,
    canonical: bool = False,
    verbose: bool = False,
) -> tuple[Graph, list[list[int]]]:
    """Find the 3-edge-connected components of a GFA graph.

    Args:
        gfa (str, pathlib.Path or iterable of lines): Path to a GFA file, or its lines.
        contract_gray_edges (boolean): Go through the biedged graph and contract its gray edges first. Otherwise, segments are nodes and links are edges.
        canonical (boolean): Sort the components by their smallest node.
        verbose (boolean): Show messages?
    Returns:
        tuple: the analysed graph and its components as lists of node indices.
    """
    if isinstance(gfa, (str, Path)):
        gfa = Path(gfa).expanduser()

    if contract_gray_edges:
        if verbose:
            print("Building the biedged graph.")
        biedged = BiedgedGraph.from_gfa(gfa)
        if verbose:
            print("Contracting gray edges.")
        graph = Graph.from_biedged(biedged.contract_all_gray_edges())
    else:
        if verbose:
            print("Reading GFA links.")
        graph = Graph.from_gfa(gfa)

    if verbose:
        print(f"Finding 3-edge-connected components of {graph}.")
    state = three_edge_connect(
        graph, _progressbar_msg="DFS over roots" if verbose else ""
    )
    components = state.components()
    if canonical:
        components = canonical_order(components)
    return graph, components
