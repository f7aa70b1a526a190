"""Immutable topology of a problem/cause map."""

from __future__ import annotations

import json
import logging
import math
import numbers
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Literal, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

NodeLevel = Literal["root", "cause", "sub"]
Point2D = Tuple[float, float]

DEFAULT_ARC: Tuple[float, float] = (-160.0, 160.0)

_NODE_KEY_RE = re.compile(r"^t(\d+)(?:c(\d+)(?:s(\d+))?)?$")


class UnknownNodeError(KeyError):
    """Raised when a node id does not exist in the hierarchy."""


class NodeId(NamedTuple):
    """Stable identifier of a node: ``(tree, level, cause, sub)``."""

    tree: int
    level: NodeLevel
    cause: Optional[int] = None
    sub: Optional[int] = None

    @classmethod
    def root(cls, tree: int) -> "NodeId":
        return cls(tree, "root")

    @classmethod
    def for_cause(cls, tree: int, cause: int) -> "NodeId":
        return cls(tree, "cause", cause)

    @classmethod
    def for_sub(cls, tree: int, cause: int, sub: int) -> "NodeId":
        return cls(tree, "sub", cause, sub)

    @property
    def key(self) -> str:
        if self.level == "root":
            return f"t{self.tree}"
        if self.level == "cause":
            return f"t{self.tree}c{self.cause}"
        return f"t{self.tree}c{self.cause}s{self.sub}"

    @property
    def parent(self) -> Optional["NodeId"]:
        if self.level == "sub":
            return NodeId.for_cause(self.tree, self.cause)  # type: ignore[arg-type]
        if self.level == "cause":
            return NodeId.root(self.tree)
        return None


def parse_node_id(key: str) -> NodeId:
    """Inverse of :attr:`NodeId.key`."""

    match = _NODE_KEY_RE.match(key.strip())
    if not match:
        raise ValueError(f"invalid node key {key!r}")
    tree, cause, sub = match.groups()
    if sub is not None:
        return NodeId.for_sub(int(tree), int(cause), int(sub))
    if cause is not None:
        return NodeId.for_cause(int(tree), int(cause))
    return NodeId.root(int(tree))


@dataclass(frozen=True)
class SubSpec:
    label: str


@dataclass(frozen=True)
class CauseSpec:
    label: str
    subs: Tuple[SubSpec, ...] = ()


@dataclass(frozen=True)
class TreeSpec:
    """One root with its causes; ``arc`` is the cause spread in degrees."""

    label: str
    position: Point2D
    causes: Tuple[CauseSpec, ...] = ()
    arc: Tuple[float, float] = DEFAULT_ARC


@dataclass(frozen=True)
class Hierarchy:
    trees: Tuple[TreeSpec, ...] = field(default_factory=tuple)

    def node_ids(self) -> Iterator[NodeId]:
        """Yield every node: roots first, then causes, then sub-causes."""

        for t in range(len(self.trees)):
            yield NodeId.root(t)
        for t, tree in enumerate(self.trees):
            for i in range(len(tree.causes)):
                yield NodeId.for_cause(t, i)
        for t, tree in enumerate(self.trees):
            for i, cause in enumerate(tree.causes):
                for j in range(len(cause.subs)):
                    yield NodeId.for_sub(t, i, j)

    def contains(self, node_id: NodeId) -> bool:
        if not (0 <= node_id.tree < len(self.trees)):
            return False
        tree = self.trees[node_id.tree]
        if node_id.level == "root":
            return node_id.cause is None and node_id.sub is None
        if node_id.cause is None or not (0 <= node_id.cause < len(tree.causes)):
            return False
        if node_id.level == "cause":
            return node_id.sub is None
        if node_id.level == "sub":
            return node_id.sub is not None and 0 <= node_id.sub < len(tree.causes[node_id.cause].subs)
        return False

    def require(self, node_id: NodeId) -> NodeId:
        if not self.contains(node_id):
            raise UnknownNodeError(f"Unknown node {node_id!r}")
        return node_id

    def label(self, node_id: NodeId) -> str:
        tree = self.trees[self.require(node_id).tree]
        if node_id.level == "root":
            return tree.label
        cause = tree.causes[node_id.cause]  # type: ignore[index]
        if node_id.level == "cause":
            return cause.label
        return cause.subs[node_id.sub].label  # type: ignore[index]

    def __len__(self) -> int:
        return sum(1 for _ in self.node_ids())


def _coerce_coord(value: object, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{what} must be a number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{what} must be finite, got {value!r}")
    return result


def _require_label(entry: Mapping[str, Any], where: str) -> str:
    label = entry.get("label")
    if not isinstance(label, str):
        raise ValueError(f"{where}: label must be a string")
    return label


def _tree_from_dict(entry: Mapping[str, Any], index: int) -> TreeSpec:
    where = f"tree {index}"
    if not isinstance(entry, Mapping):
        raise ValueError(f"{where}: expected an object, got {type(entry).__name__}")
    label = _require_label(entry, where)
    if "position" in entry:
        raw = entry["position"]
        if not (isinstance(raw, (list, tuple)) and len(raw) == 2):
            raise ValueError(f"{where}: position must be a pair")
        x, y = raw
    else:
        x, y = entry.get("x"), entry.get("y")
    position = (_coerce_coord(x, f"{where} x"), _coerce_coord(y, f"{where} y"))

    arc_raw = entry.get("arc", DEFAULT_ARC)
    if not (isinstance(arc_raw, (list, tuple)) and len(arc_raw) == 2):
        raise ValueError(f"{where}: arc must be a [start, end] pair")
    arc = (_coerce_coord(arc_raw[0], f"{where} arc start"), _coerce_coord(arc_raw[1], f"{where} arc end"))

    raw_causes = entry.get("causes") or []
    if not isinstance(raw_causes, (list, tuple)):
        raise ValueError(f"{where}: causes must be a list")
    causes: List[CauseSpec] = []
    for i, cause in enumerate(raw_causes):
        cause_where = f"{where} cause {i}"
        if not isinstance(cause, Mapping):
            raise ValueError(f"{cause_where}: expected an object")
        raw_subs = cause.get("subs") or []
        if not isinstance(raw_subs, (list, tuple)):
            raise ValueError(f"{cause_where}: subs must be a list")
        subs = []
        for j, sub in enumerate(raw_subs):
            if not isinstance(sub, Mapping):
                raise ValueError(f"{cause_where} sub {j}: expected an object")
            subs.append(SubSpec(_require_label(sub, f"{cause_where} sub {j}")))
        causes.append(CauseSpec(_require_label(cause, cause_where), tuple(subs)))

    return TreeSpec(label=label, position=position, causes=tuple(causes), arc=arc)


def hierarchy_from_dict(data: Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]) -> Hierarchy:
    """Build a :class:`Hierarchy` from ``[{label, x, y, arc?, causes: [...]}, ...]``.

    A mapping with a ``trees`` key is accepted as well.
    """

    if isinstance(data, Mapping):
        data = data.get("trees") or []
    if not isinstance(data, (list, tuple)):
        raise ValueError("hierarchy must be a list of trees")
    trees = tuple(_tree_from_dict(entry, idx) for idx, entry in enumerate(data))
    logger.info("Loaded hierarchy with %d tree(s)", len(trees))
    return Hierarchy(trees)


def hierarchy_to_dict(hierarchy: Hierarchy) -> List[Dict[str, Any]]:
    return [
        {
            "label": tree.label,
            "x": tree.position[0],
            "y": tree.position[1],
            "arc": list(tree.arc),
            "causes": [
                {"label": cause.label, "subs": [{"label": sub.label} for sub in cause.subs]}
                for cause in tree.causes
            ],
        }
        for tree in hierarchy.trees
    ]


def load_hierarchy(path: Union[str, Path]) -> Hierarchy:
    with Path(path).open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    return hierarchy_from_dict(data)
