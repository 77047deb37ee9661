"""One-pass 3-edge-connected components.

The DFS is driven by an explicit stack of instructions instead of recursion,
so that the depth of the DFS tree is only bounded by memory:

    VISIT(w, v)      first entry to w, coming from its DFS parent v,
    EDGE_STEP(w, v, u) process one adjacency entry (w, u),
    FINISH(w, u)     what happens in w after the call on its child u returns.

The low-point/path bookkeeping follows Tsin's algorithm: a node whose remaining
degree drops to two or less is cut off from its parent by at most two edges and
its collected component is emitted; otherwise it is glued onto the pending path.
"""

import typing

import numba
import numpy as np
import numpy.typing as npt
from tqdm import tqdm

from .graph import Graph, adjacency_to_csr
from .state import COMPONENT_CNT, COUNT, NODES_WRITTEN, PATH_U, State

VISIT = 0
EDGE_STEP = 1
FINISH = 2
NO_NODE = -1


@numba.njit(boundscheck=True)
def absorb_path(root, path, end, degrees, next_sigma, next_on_path):
    """Merge the nodes of a pending path into the component of `root`.

    Walks from `path` along `next_on_path`, up to and including `end`,
    or to the self-linked last node of the path if `end` is NO_NODE.
    The edge joining an absorbed node to `root` turns into a loop and is dropped from the degree.
    """
    if root == end:
        return
    current = root
    step = path
    while current != step:
        degrees[root] += degrees[step] - 2
        next_sigma[root], next_sigma[step] = next_sigma[step], next_sigma[root]
        current = step
        if current != end:
            step = next_on_path[current]


@numba.njit(boundscheck=True)
def add_component(start, next_sigma, registers, component_nodes, component_offsets):
    """Write the circle of nodes merged into `start` as the next output component."""
    i = registers[NODES_WRITTEN]
    component_nodes[i] = start
    i += 1
    current = next_sigma[start]
    while current != start:
        component_nodes[i] = current
        i += 1
        current = next_sigma[current]
    registers[COMPONENT_CNT] += 1
    component_offsets[registers[COMPONENT_CNT]] = i
    registers[NODES_WRITTEN] = i


@numba.njit
def push(stack, top, kind, w, v, u):
    stack[top, 0] = kind
    stack[top, 1] = w
    stack[top, 2] = v
    stack[top, 3] = u
    return top + 1


@numba.njit(boundscheck=True)
def visit(w, v, indptr, indices, stack, top, visited, pre, lowpt, num_descendants, next_on_path, next_sigma, registers):
    visited[w] = True
    next_sigma[w] = w
    next_on_path[w] = w
    pre[w] = registers[COUNT]
    lowpt[w] = registers[COUNT]
    registers[COUNT] += 1
    num_descendants[w] = 1
    # reversed, so that the stack hands out edges in adjacency order
    for i in range(indptr[w + 1] - 1, indptr[w] - 1, -1):
        top = push(stack, top, EDGE_STEP, w, v, indices[i])
    return top


@numba.njit(boundscheck=True)
def edge_step(w, v, u, stack, top, visited, pre, lowpt, num_descendants, degrees, next_on_path, next_sigma):
    if u == w:  # loops never belong to an edge cut
        return top
    degrees[w] += 1
    if not visited[u]:
        top = push(stack, top, FINISH, w, NO_NODE, u)
        top = push(stack, top, VISIT, u, w, NO_NODE)
    elif u != v:
        if pre[u] < pre[w]:  # outgoing back edge, u is an ancestor of w
            if pre[u] < lowpt[w]:
                absorb_path(w, next_on_path[w], NO_NODE, degrees, next_sigma, next_on_path)
                next_on_path[w] = w
                lowpt[w] = pre[u]
        else:  # incoming back edge, already counted at u
            degrees[w] -= 2
            if next_on_path[w] != w:
                parent = w
                child = next_on_path[w]
                while (
                    next_on_path[parent] != parent
                    and pre[child] <= pre[u]
                    and pre[u] < pre[child] + num_descendants[child]
                ):  # child is still an ancestor of u
                    parent = child
                    child = next_on_path[child]
                absorb_path(w, next_on_path[w], parent, degrees, next_sigma, next_on_path)
                if next_on_path[parent] == parent:
                    next_on_path[w] = w
                else:
                    next_on_path[w] = next_on_path[parent]
    return top


@numba.njit(boundscheck=True)
def finish(w, u, lowpt, num_descendants, degrees, next_on_path, next_sigma, registers, component_nodes, component_offsets):
    num_descendants[w] += num_descendants[u]
    if degrees[u] <= 2:
        degrees[w] += degrees[u] - 2
        add_component(u, next_sigma, registers, component_nodes, component_offsets)
        if next_on_path[u] == u:
            registers[PATH_U] = w
        else:
            registers[PATH_U] = next_on_path[u]
    else:
        registers[PATH_U] = u

    path_u = registers[PATH_U]
    if lowpt[w] <= lowpt[u]:
        absorb_path(w, path_u, NO_NODE, degrees, next_sigma, next_on_path)
    else:
        lowpt[w] = lowpt[u]
        absorb_path(w, next_on_path[w], NO_NODE, degrees, next_sigma, next_on_path)
        next_on_path[w] = path_u


@numba.njit(boundscheck=True)
def run_dfs(
    root,
    indptr,
    indices,
    stack,
    visited,
    pre,
    lowpt,
    num_descendants,
    degrees,
    next_on_path,
    next_sigma,
    registers,
    component_nodes,
    component_offsets,
):
    """Run the DFS from `root` until its stack drains and emit the root's component."""
    top = push(stack, 0, VISIT, root, NO_NODE, NO_NODE)
    while top > 0:
        top -= 1
        kind = stack[top, 0]
        w = stack[top, 1]
        v = stack[top, 2]
        u = stack[top, 3]
        if kind == VISIT:
            top = visit(w, v, indptr, indices, stack, top, visited, pre, lowpt, num_descendants, next_on_path, next_sigma, registers)
        elif kind == EDGE_STEP:
            top = edge_step(w, v, u, stack, top, visited, pre, lowpt, num_descendants, degrees, next_on_path, next_sigma)
        else:
            finish(w, u, lowpt, num_descendants, degrees, next_on_path, next_sigma, registers, component_nodes, component_offsets)
    # roots have no caller to finish them
    add_component(root, next_sigma, registers, component_nodes, component_offsets)


def get_instruction_stack(indptr: npt.NDArray) -> npt.NDArray:
    """Allocate the instruction stack.

    At any moment it holds the unprocessed edges of nodes on the DFS path,
    one FINISH per such node and at most one VISIT.
    """
    node_cnt = len(indptr) - 1
    return np.empty(shape=(indptr[-1] + 2 * node_cnt + 1, 4), dtype=np.int64)


def three_edge_connect(
    graph: Graph | typing.Mapping[int, list[int]] | list[list[int]],
    state: State | None = None,
    _progressbar_msg: str = "",
) -> State:
    """Find the 3-edge-connected components of an undirected multigraph.

    Arguments:
        graph (Graph | dict[int, list[int]] | list[list[int]]): adjacency lists over dense node indices. Each undirected edge is listed at both ends, parallel edges repeat.
        state (State): Fresh state to fill. Created if not given.
        _progressbar_msg (str): Description of the tqdm bar over DFS roots. Empty string hides the bar.

    Returns:
        State: the filled state; call `state.components()` for the partition.
    """
    if isinstance(graph, Graph):
        indptr, indices = graph.to_csr()
    else:
        indptr, indices = adjacency_to_csr(graph)
    node_cnt = len(indptr) - 1
    if state is None:
        state = State.initialize(node_cnt)
    assert state.node_cnt == node_cnt, "State was sized for a different graph."
    assert state.count == 0, "State was already used. Pass in a fresh one."

    stack = get_instruction_stack(indptr)
    roots = range(node_cnt)
    if _progressbar_msg != "":
        roots = tqdm(roots, desc=_progressbar_msg)
    for root in roots:
        if not state.visited[root]:
            run_dfs(root, indptr, indices, stack, *state.arrays())

    assert state.is_finished(), "Some nodes were not assigned to any component."
    return state


def canonical_order(components: list[list[int]]) -> list[list[int]]:
    """Sort nodes within components and components by their smallest node."""
    return sorted((sorted(component) for component in components), key=lambda c: c[0])


def three_edge_connected_components(
    graph: Graph | typing.Mapping[int, list[int]] | list[list[int]],
    canonical: bool = False,
    _progressbar_msg: str = "",
) -> list[list[int]]:
    """Get the 3-edge-connected components as lists of node indices.

    Without `canonical`, the order follows the DFS: components are listed in the order they were closed.
    """
    components = three_edge_connect(graph, _progressbar_msg=_progressbar_msg).components()
    if canonical:
        return canonical_order(components)
    return components
