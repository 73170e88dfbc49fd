"""
Edits applied to a cluster tree by its owner.

The graph view only requests re-parenting; whoever owns the tree applies the
change with reparent_leaf() and rebuilds the graph from the result.
"""

import copy
import logging

from ..domain.models import ClusterTree

logger = logging.getLogger(__name__)


def reparent_leaf(tree: ClusterTree, leaf_ref: str, group_id: str) -> ClusterTree:
    """
    Move the note `leaf_ref` into group `group_id`.

    The input tree is not modified. Unknown groups or notes leave the
    returned copy unchanged.

    Returns:
        New cluster tree
    """
    new_tree = copy.deepcopy(tree)
    target = next((g for g in new_tree if g.id == group_id), None)
    if target is None:
        logger.warning("[TreeEdit] Unknown target group %r", group_id)
        return new_tree

    moved = []
    for group in new_tree:
        if group is target:
            continue
        keep = []
        for leaf in group.leaves:
            if leaf.leaf_ref == leaf_ref:
                moved.append(leaf)
            else:
                keep.append(leaf)
        group.leaves = keep

    if not moved:
        logger.info("[TreeEdit] Note %r not found outside group %r", leaf_ref, group_id)
        return new_tree

    existing = {leaf.id for leaf in target.leaves}
    for leaf in moved:
        if leaf.id not in existing:
            target.leaves.append(leaf)
            existing.add(leaf.id)

    logger.info("[TreeEdit] Moved note %r to group %r", leaf_ref, group_id)
    return new_tree
