"""
Kontent Graph — In-Memory Graph Store

Typed collections of nodes with declared references between them,
consumed by the static-site build after the load completes.

Features:
- Collections created on demand
- One node per id per collection (DuplicateNodeError otherwise)
- Idempotent reference declarations (field -> target type name)
- Node paths from per-collection route templates
- Computed schema fields registered as resolvers
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from kontent_graph.errors import DuplicateNodeError
from kontent_graph.utils.logging_utils import get_component_logger
from kontent_graph.utils.text import slugify


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("GraphStore", component="source")

_ROUTE_PARAM = re.compile(r"\{(\w+)\}")


@dataclass
class Node:
    id: str
    type_name: str
    fields: Dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None
    is_component: bool = False

    def __getitem__(self, key):
        return self.fields[key]

    def get(self, key, default=None):
        return self.fields.get(key, default)


class Collection:

    def __init__(self, type_name: str, route: Optional[str] = None):
        self.type_name = type_name
        self.route = route
        self.references: Dict[str, str] = {}
        self._nodes: Dict[str, Node] = {}

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    # =====================================================
    # FIND
    # =====================================================

    def find_node(self, query: Optional[dict] = None, **kwargs) -> Optional[Node]:

        query = {**(query or {}), **kwargs}

        if set(query) == {"id"}:
            return self._nodes.get(query["id"])

        for node in self._nodes.values():
            if all(node.fields.get(key) == value for key, value in query.items()):
                return node

        return None

    # =====================================================
    # INSERT
    # =====================================================

    def add_node(self, data: dict) -> Node:

        node_id = data.get("id")

        if node_id in self._nodes:
            raise DuplicateNodeError(self.type_name, node_id)

        fields = dict(data)
        fields.setdefault("type_name", self.type_name)

        node = Node(
            id=node_id,
            type_name=self.type_name,
            fields=fields,
            path=self._resolve_path(fields),
            is_component=bool(fields.get("is_component", False)),
        )

        self._nodes[node_id] = node
        return node

    def _resolve_path(self, fields: dict) -> Optional[str]:

        if not self.route:
            return None

        def replace(match):
            return slugify(str(fields.get(match.group(1)) or ""))

        return _ROUTE_PARAM.sub(replace, self.route)

    # =====================================================
    # REFERENCES
    # =====================================================

    def add_reference(self, field_name: str, type_name: str):

        existing = self.references.get(field_name)

        if existing is not None and existing != type_name:
            logger.warning(
                f"Reference {self.type_name}.{field_name} changed "
                f"from {existing} to {type_name}"
            )

        self.references[field_name] = type_name


class GraphStore:

    def __init__(self, routes: Optional[Dict[str, str]] = None):
        self.routes = dict(routes or {})
        self._collections: Dict[str, Collection] = {}
        self._schema_resolvers: Dict[str, Dict[str, dict]] = {}

    @property
    def collections(self) -> Dict[str, Collection]:
        return dict(self._collections)

    @property
    def schema_resolvers(self) -> Dict[str, Dict[str, dict]]:
        return self._schema_resolvers

    # =====================================================
    # COLLECTIONS
    # =====================================================

    def get_collection(self, type_name: str) -> Optional[Collection]:
        return self._collections.get(type_name)

    def add_collection(self, type_name: str) -> Collection:

        collection = self._collections.get(type_name)
        if collection is not None:
            return collection

        collection = Collection(type_name, route=self.routes.get(type_name))
        self._collections[type_name] = collection
        return collection

    # =====================================================
    # SCHEMA RESOLVERS
    # =====================================================

    def add_schema_resolvers(self, resolvers: Dict[str, Dict[str, dict]]):

        for type_name, type_fields in resolvers.items():
            self._schema_resolvers.setdefault(type_name, {}).update(type_fields)

    def resolve_field(self, type_name: str, field_name: str, node_id: str, **args):
        """
        Evaluate a registered computed field for one node.
        Arguments that are not passed take their declared default value.
        """

        resolver = self._schema_resolvers.get(type_name, {}).get(field_name)
        if resolver is None:
            raise KeyError(f"No schema resolver for {type_name}.{field_name}")

        collection = self.get_collection(type_name)
        node = collection.find_node(id=node_id) if collection is not None else None
        if node is None:
            raise KeyError(f"No {type_name} node with id {node_id}")

        declared = resolver.get("args", {})
        unknown = set(args) - set(declared)
        if unknown:
            raise TypeError(
                f"Unknown arguments for {type_name}.{field_name}: {sorted(unknown)}"
            )

        resolved_args = {
            name: args.get(name, definition.get("defaultValue"))
            for name, definition in declared.items()
        }

        resolve: Callable = resolver["resolve"]
        return resolve(node.fields, resolved_args)


def ensure_collection(store, type_name: str):
    """Return the collection for type_name, creating it on first use."""

    collection = store.get_collection(type_name)

    if collection is not None:
        return collection

    logger.info(f"Creating collection {type_name}")

    return store.add_collection(type_name)
