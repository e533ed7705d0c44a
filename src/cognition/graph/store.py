from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from cognition.errors import CognitionError, NodeNotFound
from cognition.graph.models import Choice, DecisionNode

logger = logging.getLogger(__name__)

ROOT_ID = "start"

_NULL_TAG = "tag:yaml.org,2002:null"
_MERGE_TAG = "tag:yaml.org,2002:merge"


class _GraphLoader(yaml.SafeLoader):
    """SafeLoader that resolves only nulls implicitly: `choice: yes` stays the string "yes"."""


_GraphLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in (_NULL_TAG, _MERGE_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class GraphStore:
    """
    Read-only, in-memory dialogue graph.

    Lookup is first-match-wins: when several nodes share an id, the earliest
    one in load order is the one returned. Choice targets are resolved to node
    positions once, here, so that following an edge never re-scans the graph.
    Targets that do not exist are kept as `None` and raise `NodeNotFound`
    only when followed (or immediately, with `strict=True`).
    """

    def __init__(self, nodes: Sequence[DecisionNode], *, strict: bool = False):
        self._nodes: Tuple[DecisionNode, ...] = tuple(nodes)
        self._index: Dict[str, int] = {}
        duplicates: List[str] = []
        for pos, node in enumerate(self._nodes):
            if node.id in self._index:
                duplicates.append(node.id)
                continue
            self._index[node.id] = pos

        self._edges: List[List[Optional[int]]] = []
        self._dangling: List[Tuple[str, str]] = []
        for node in self._nodes:
            targets: List[Optional[int]] = []
            for choice in node.choice_list():
                target = self._index.get(choice.next_id)
                if target is None:
                    self._dangling.append((node.id, choice.next_id))
                targets.append(target)
            self._edges.append(targets)

        if duplicates:
            logger.warning("Duplicate decision node ids, first definition wins: %s", sorted(set(duplicates)))
        if self._dangling:
            logger.warning("Dangling choice targets: %s", self._dangling)
        if strict:
            if self._dangling:
                source, target = self._dangling[0]
                raise NodeNotFound(target, source=source)
            if ROOT_ID not in self._index:
                raise NodeNotFound(ROOT_ID)

        logger.info(
            json.dumps(
                {
                    "event": "graph_loaded",
                    "nodes": len(self._nodes),
                    "unique_ids": len(self._index),
                    "dangling_edges": len(self._dangling),
                },
                ensure_ascii=False,
            )
        )

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]], *, strict: bool = False) -> "GraphStore":
        nodes: List[DecisionNode] = []
        for i, record in enumerate(records):
            try:
                nodes.append(DecisionNode.model_validate(record))
            except ValidationError as e:
                raise CognitionError(f"Invalid decision node #{i}: {e}", code="invalid_graph") from e
        return cls(nodes, strict=strict)

    @classmethod
    def from_yaml(cls, text: str, *, strict: bool = False) -> "GraphStore":
        try:
            records = yaml.load(text, Loader=_GraphLoader)
        except yaml.YAMLError as e:
            raise CognitionError(f"Unable to parse the decision graph: {e}", code="invalid_graph") from e
        if records is None:
            records = []
        if not isinstance(records, list):
            raise CognitionError("Decision graph must be a list of nodes", code="invalid_graph")
        return cls.from_records(records, strict=strict)

    @classmethod
    def from_file(cls, path: str | Path, *, strict: bool = False) -> "GraphStore":
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"), strict=strict)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[DecisionNode]:
        return iter(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    @property
    def dangling(self) -> List[Tuple[str, str]]:
        return list(self._dangling)

    def get(self, node_id: str) -> Optional[DecisionNode]:
        pos = self._index.get(node_id)
        return self._nodes[pos] if pos is not None else None

    def lookup(self, node_id: str) -> DecisionNode:
        node = self.get(node_id)
        if node is None:
            raise NodeNotFound(node_id)
        return node

    def follow(self, node_id: str, choice_index: int) -> DecisionNode:
        """Target of the `choice_index`-th choice of node `node_id`."""
        pos = self._index.get(node_id)
        if pos is None:
            raise NodeNotFound(node_id)
        targets = self._edges[pos]
        if not 0 <= choice_index < len(targets):
            raise IndexError(f"Node '{node_id}' has no choice #{choice_index}")
        target = targets[choice_index]
        if target is None:
            choice: Choice = self._nodes[pos].choice_list()[choice_index]
            raise NodeNotFound(choice.next_id, source=node_id)
        return self._nodes[target]
