"""Bookkeeping of a single run of the 3-edge-connectivity DFS."""

import numpy as np
import numpy.typing as npt

# indices into State.registers
COUNT = 0
PATH_U = 1
COMPONENT_CNT = 2
NODES_WRITTEN = 3
REGISTERS_CNT = 4


class State:
    """All per-node arrays of the algorithm and the output partition.

    Pending paths and component members are stored as linked lists over dense
    arrays: `next_on_path[w] == w` marks an empty path and `next_sigma` forms
    a circle through all nodes merged so far into the component headed by a node.
    Finished components are appended to `component_nodes`, with boundaries kept in
    `component_offsets` (the same layout as the CSR graph representation).
    """

    def __init__(self, node_cnt: int):
        self.node_cnt = node_cnt
        self.visited = np.zeros(node_cnt, dtype=np.bool_)
        self.pre = np.full(node_cnt, -1, dtype=np.int64)
        self.lowpt = np.full(node_cnt, -1, dtype=np.int64)
        self.num_descendants = np.zeros(node_cnt, dtype=np.int64)
        self.degrees = np.zeros(node_cnt, dtype=np.int64)
        self.next_on_path = np.arange(node_cnt, dtype=np.int64)
        self.next_sigma = np.arange(node_cnt, dtype=np.int64)
        self.registers = np.zeros(REGISTERS_CNT, dtype=np.int64)
        self.component_nodes = np.full(node_cnt, -1, dtype=np.int64)
        self.component_offsets = np.zeros(node_cnt + 1, dtype=np.int64)

    @classmethod
    def initialize(cls, node_cnt: int) -> "State":
        assert node_cnt >= 0, "Negative number of nodes."
        return cls(node_cnt)

    @property
    def count(self) -> int:
        """Next free pre-order number."""
        return int(self.registers[COUNT])

    @property
    def path_u(self) -> int:
        return int(self.registers[PATH_U])

    @property
    def component_cnt(self) -> int:
        return int(self.registers[COMPONENT_CNT])

    def arrays(self) -> tuple[npt.NDArray, ...]:
        """Arrays in the order expected by the numba kernels."""
        return (
            self.visited,
            self.pre,
            self.lowpt,
            self.num_descendants,
            self.degrees,
            self.next_on_path,
            self.next_sigma,
            self.registers,
            self.component_nodes,
            self.component_offsets,
        )

    def is_finished(self) -> bool:
        return int(self.registers[NODES_WRITTEN]) == self.node_cnt

    def components(self) -> list[list[int]]:
        """Get the emitted components, in the order they were closed."""
        offsets = self.component_offsets[: self.component_cnt + 1]
        return [
            self.component_nodes[start:end].tolist()
            for start, end in zip(offsets[:-1], offsets[1:])
        ]

    def labels(self) -> npt.NDArray:
        """Map each node to the number of its component (-1 if not emitted yet)."""
        labels = np.full(self.node_cnt, -1, dtype=np.int64)
        offsets = self.component_offsets[: self.component_cnt + 1]
        written = offsets[-1]
        labels[self.component_nodes[:written]] = np.repeat(
            np.arange(self.component_cnt), np.diff(offsets)
        )
        return labels

    def __repr__(self):
        return "State(nodes {} visited {} components {})".format(
            self.node_cnt, int(self.visited.sum()), self.component_cnt
        )
