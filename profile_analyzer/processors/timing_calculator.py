"""
Timing calculator for computed profile nodes.
"""

from typing import List, Sequence

from ..core.types import ComputedNode, Location


class TimingCalculator:
    """Calculates self, aggregate and per-location times."""

    @staticmethod
    def accumulate_self_times(
        nodes: List[ComputedNode],
        samples: Sequence[int],
        time_deltas: Sequence[float]
    ) -> None:
        """
        Attribute each time delta to the sample that follows it.

        time_deltas[i - 1] is the time elapsed before samples[i] was taken,
        so it is added to that sample's node. The first sample has no
        preceding delta and contributes nothing on its own.

        Args:
            nodes: Computed nodes, indexed by 0-based id (modified in-place)
            samples: 0-based node id of the running node at each sample
            time_deltas: Inter-sample deltas, one fewer than samples
        """
        for i in range(1, min(len(samples), len(time_deltas) + 1)):
            nodes[samples[i]].self_time += time_deltas[i - 1]

    @staticmethod
    def compute_aggregate_time(index: int, nodes: List[ComputedNode], computed: List[bool]) -> float:
        """
        Compute the aggregate time of a node: its self time plus the
        aggregate time of all its children.

        Uses an explicit post-order stack so deep call stacks do not hit the
        recursion limit. Every node is computed at most once; `computed`
        marks nodes whose aggregate time is final.

        Args:
            index: 0-based id of the node
            nodes: All computed nodes (modified in-place)
            computed: Per-node flags, shared across calls

        Returns:
            Aggregate time of the node
        """
        if computed[index]:
            return nodes[index].aggregate_time

        stack = [(index, False)]
        while stack:
            current, children_done = stack.pop()
            if computed[current]:
                continue

            node = nodes[current]
            if children_done:
                node.aggregate_time = node.self_time + sum(
                    nodes[child].aggregate_time for child in node.children
                )
                computed[current] = True
                continue

            stack.append((current, True))
            for child in node.children:
                if not computed[child]:
                    stack.append((child, False))

        return nodes[index].aggregate_time

    def calculate_timings(self, nodes: List[ComputedNode], locations: List[Location]) -> None:
        """
        Compute aggregate times for all nodes and roll node times up into
        their locations.

        Location totals ignore the call path: a location used by several
        nodes sums all of them.

        Args:
            nodes: Computed nodes with self times set (modified in-place)
            locations: Locations referenced by the nodes (modified in-place)
        """
        computed = [False] * len(nodes)
        for i, node in enumerate(nodes):
            location = locations[node.location_id]
            location.aggregate_time += self.compute_aggregate_time(i, nodes, computed)
            location.self_time += node.self_time
