"""
Cluster tree loading and validation.

The clustering step (an LLM call, outside this package) returns a JSON list:

    [
        {
            "id": "c1", "name": "Artificial Intelligence", "type": "cluster",
            "description": "...",
            "children": [
                {"id": "c1-n1", "name": "BERT vs GPT", "type": "note", "noteId": "5"}
            ]
        }
    ]

parse_cluster_tree() turns that into ClusterGroup/ClusterLeaf objects. It is
tolerant: malformed entries are skipped and logged, never raised.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Set, Union

from ..domain.models import ROOT_ID, ClusterGroup, ClusterLeaf, ClusterTree

logger = logging.getLogger(__name__)


def parse_cluster_tree(data: Union[str, bytes, List[Any], None]) -> ClusterTree:
    """
    Parse the clustering producer's output into a cluster tree.

    Args:
        data: JSON text (possibly wrapped in prose/code fences) or decoded list

    Returns:
        List of ClusterGroup (empty when nothing usable was found)
    """
    if data is None:
        return []

    if isinstance(data, (str, bytes)):
        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        # Try to find JSON array
        json_match = re.search(r'\[[\s\S]*\]', text)
        if not json_match:
            logger.warning("[TreeLoader] No JSON array in clustering result")
            return []
        try:
            data = json.loads(json_match.group())
        except json.JSONDecodeError as e:
            logger.warning("[TreeLoader] Failed to parse clustering result: %s", e)
            return []

    if not isinstance(data, list):
        logger.warning("[TreeLoader] Expected a list of clusters, got %s", type(data).__name__)
        return []

    tree: ClusterTree = []
    for item in data:
        group = _parse_group(item)
        if group is not None:
            tree.append(group)
    return tree


def _parse_group(item: Any) -> Optional[ClusterGroup]:
    if not isinstance(item, dict):
        logger.warning("[TreeLoader] Skipping non-object cluster entry")
        return None

    group_id = _as_str(item.get("id"))
    if not group_id:
        logger.warning("[TreeLoader] Skipping cluster without id: %r", item.get("name"))
        return None

    leaves: List[ClusterLeaf] = []
    children = item.get("children") or []
    if not isinstance(children, list):
        children = []
    for child in children:
        leaf = _parse_leaf(child)
        if leaf is not None:
            leaves.append(leaf)

    description = item.get("description")
    return ClusterGroup(
        id=group_id,
        name=_as_str(item.get("name")) or group_id,
        description=description if isinstance(description, str) else None,
        leaves=leaves,
    )


def _parse_leaf(child: Any) -> Optional[ClusterLeaf]:
    if not isinstance(child, dict):
        return None
    leaf_id = _as_str(child.get("id"))
    # Producers use both "noteId" and "leafRef"
    leaf_ref = _as_str(child.get("noteId", child.get("leafRef")))
    if not leaf_id or not leaf_ref:
        logger.warning("[TreeLoader] Skipping note without id/noteId: %r", child.get("name"))
        return None
    return ClusterLeaf(
        id=leaf_id,
        name=_as_str(child.get("name")) or leaf_id,
        leaf_ref=leaf_ref,
    )


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value if isinstance(value, str) else ""


def tree_to_dicts(tree: ClusterTree) -> List[Dict[str, Any]]:
    """Serialize a cluster tree back to the producer's JSON shape."""
    return [
        {
            "id": group.id,
            "name": group.name,
            "type": "cluster",
            "description": group.description or "",
            "children": [
                {"id": leaf.id, "name": leaf.name, "type": "note", "noteId": leaf.leaf_ref}
                for leaf in group.leaves
            ],
        }
        for group in tree
    ]


def validate_tree(tree: ClusterTree) -> List[str]:
    """
    List problems in a cluster tree without raising.

    Reported:
    - groups without id, or using the reserved root id
    - leaves without id or leaf_ref (dangling references)
    - duplicate ids (these collapse last-write-wins in the graph)
    """
    issues: List[str] = []
    seen: Set[str] = {ROOT_ID}

    for group in tree:
        if not group.id:
            issues.append(f"Group {group.name!r} has no id")
            continue
        if group.id == ROOT_ID:
            issues.append(f"Group {group.name!r} uses reserved id {ROOT_ID!r}")
            continue
        if group.id in seen:
            issues.append(f"Duplicate id {group.id!r} (group {group.name!r})")
        seen.add(group.id)

        for leaf in group.leaves:
            if not leaf.id or not leaf.leaf_ref:
                issues.append(f"Leaf {leaf.name!r} in group {group.id!r} has no id or leaf_ref")
                continue
            if leaf.id in seen:
                issues.append(f"Duplicate id {leaf.id!r} (leaf {leaf.name!r})")
            seen.add(leaf.id)

    return issues
