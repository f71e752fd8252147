"""
Bottom-up graph: time grouped by executing location, then by its callers.
"""

from typing import Dict, List, Optional

from ..core.types import CallFrame, Category, ComputedNode, Location, ProfileModel

ROOT_LOCATION_ID = -1


class BottomUpNode:
    """A location in the bottom-up tree. Children are keyed by location id."""

    def __init__(self, location: Location, parent: Optional['BottomUpNode'] = None):
        self.location = location
        self.parent = parent
        self.children: Dict[int, 'BottomUpNode'] = {}
        self.self_time = 0.0
        self.aggregate_time = 0.0
        self.ticks = 0

    @property
    def id(self) -> int:
        return self.location.id

    @property
    def call_frame(self) -> CallFrame:
        return self.location.call_frame

    @property
    def src(self):
        return self.location.src

    @property
    def category(self) -> Category:
        return self.location.category

    def child_for(self, location: Location) -> 'BottomUpNode':
        """Find or create the child for a location."""
        child = self.children.get(location.id)
        if child is None:
            child = BottomUpNode(location, self)
            self.children[location.id] = child
        return child

    def add_time(self, self_time: float, aggregate_time: float, ticks: int = 0) -> None:
        """Add timings and ticks to this node and every ancestor up to the root."""
        node = self
        while node is not None:
            node.self_time += self_time
            node.aggregate_time += aggregate_time
            node.ticks += ticks
            node = node.parent

    def sorted_children(self) -> List['BottomUpNode']:
        """Children ordered by aggregate time, heaviest first."""
        return sorted(self.children.values(), key=lambda c: -c.aggregate_time)


class BottomUpGraphBuilder:
    """Builds a bottom-up graph from a profile model."""

    @staticmethod
    def create_root() -> BottomUpNode:
        return BottomUpNode(Location(
            id=ROOT_LOCATION_ID,
            call_frame=CallFrame(
                function_name='(root)',
                url='',
                script_id='0',
                line_number=-1,
                column_number=-1,
            ),
            category=Category.SYSTEM,
        ))

    def build(self, model: ProfileModel) -> BottomUpNode:
        """
        Create the bottom-up graph for a model.

        The first level holds every location that was running when a sample
        was taken. Below each of those are the locations that called it, and
        so on up to the top of the call stack.

        Leaf nodes seed the graph, as do non-leaf nodes that have self time
        of their own (samples that landed on a frame that also has callees).
        Each seed's time is added once to the deepest caller reached and
        propagates to every node on the way back to the root, so the root
        totals equal the model's total self time.

        Args:
            model: Built profile model

        Returns:
            Synthetic root BottomUpNode (location id -1)
        """
        root = self.create_root()
        for node in model.nodes:
            if node.children and not node.self_time:
                continue
            aggregate = node.aggregate_time if not node.children else node.self_time
            self._process_node(root, node, model).add_time(node.self_time, aggregate, node.ticks)

        return root

    @staticmethod
    def _process_node(root: BottomUpNode, node: ComputedNode, model: ProfileModel) -> BottomUpNode:
        """Walk from a seed node towards the top of its stack, returning the last graph node."""
        current = root.child_for(model.locations[node.location_id])
        parent_id = node.parent
        # The top of the call tree is the profiler's synthetic root frame.
        while parent_id is not None and model.nodes[parent_id].parent is not None:
            caller = model.nodes[parent_id]
            current = current.child_for(model.locations[caller.location_id])
            parent_id = caller.parent

        return current
