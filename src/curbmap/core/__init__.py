"""Core algorithms for curbmap.

This module contains the core algorithms for:

- Partition edits (resize, split, add, relabel, reorder)
- Derived partition positions (offsets, start positions, percentages)
- Geodesic operations (distance, bearing, destination, along-path, slicing)
- Projection of partitions onto blockface geometry

All functions are designed to be:
- Pure (no side effects, inputs are never mutated)
- Total where the reducer is concerned (rejected edits return the input)

Key functions:
- initialize, reduce, apply_action: Partition lifecycle and edits
- offsets: Cumulative segment boundaries
- along_path, slice_between: Point and sub-path extraction on a path
- project_partition: Per-segment geometry for map rendering
- resize_by_delta, reorder: Drag controller entry points

Key classes:
- PartitionStore: Injectable container owning one live partition
- OffsetSelector: Size-one cached offsets
"""

from curbmap.core.adjust import move_segment, reorder, resize_by_delta
from curbmap.core.geodesy import (
    PathLocation,
    along_path,
    blockface_length_feet,
    destination,
    haversine_distance,
    initial_bearing,
    nearest_point_on_path,
    path_length,
    slice_between,
)
from curbmap.core.projection import project_partition, segment_bounds, to_feature_collection
from curbmap.core.reducer import (
    ActionResult,
    SplitPlan,
    add_segment,
    add_segment_left,
    apply_action,
    check_invariants,
    initialize,
    plan_split,
    reduce,
    replace_segments,
    resize,
    set_type,
)
from curbmap.core.selectors import (
    OffsetSelector,
    offsets,
    start_positions,
    total_of_segments,
    unknown_remaining,
    visual_percentages,
)
from curbmap.core.store import PartitionStore

__all__ = [
    # Reducer
    "ActionResult",
    "SplitPlan",
    "add_segment",
    "add_segment_left",
    "apply_action",
    "check_invariants",
    "initialize",
    "plan_split",
    "reduce",
    "replace_segments",
    "resize",
    "set_type",
    # Store
    "PartitionStore",
    # Selectors
    "OffsetSelector",
    "offsets",
    "start_positions",
    "total_of_segments",
    "unknown_remaining",
    "visual_percentages",
    # Geodesy
    "PathLocation",
    "along_path",
    "blockface_length_feet",
    "destination",
    "haversine_distance",
    "initial_bearing",
    "nearest_point_on_path",
    "path_length",
    "slice_between",
    # Projection
    "project_partition",
    "segment_bounds",
    "to_feature_collection",
    # Drag controller surface
    "move_segment",
    "reorder",
    "resize_by_delta",
]
