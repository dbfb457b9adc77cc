"""
Kontent Graph — Neo4j Export

Writes a materialized GraphStore to Neo4j:
- Unique id constraint per collection label
- Nodes via batched UNWIND + MERGE (label = collection type name)
- One relationship per declared reference and referenced id
  (relationship type = field name in upper case)

Fully idempotent: running the export twice leaves the same graph.
"""

import json
from typing import Iterable, List, Optional

from neo4j import GraphDatabase

from config.system_loader import get_database_config
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("GraphExporter", component="export")


def _quote(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def _to_property(value):
    # Neo4j properties hold primitives and homogeneous lists of primitives
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, list) and all(isinstance(v, (str, int, float, bool)) for v in value):
        return value
    return json.dumps(value, default=str)


def _batches(rows: List, size: int) -> Iterable[List]:
    for i in range(0, len(rows), size):
        yield rows[i:i + size]


class GraphExporter:

    # =====================================================
    # INIT
    # =====================================================

    def __init__(
        self,
        store,
        driver=None,
        database: Optional[str] = None,
        batch_size: Optional[int] = None
    ):

        self.store = store

        if driver is None or database is None or batch_size is None:
            db_config = get_database_config()["graph_db"]
            conn = db_config["connection"]

            if driver is None:
                logger.info(f"Connecting to Neo4j at {conn['uri']}")
                driver = GraphDatabase.driver(
                    conn["uri"],
                    auth=(conn["username"], conn["password"])
                )

            database = database or conn.get("database", "neo4j")
            batch_size = batch_size or (db_config.get("export") or {}).get("batch_size", 500)

        self.driver = driver
        self.database = database
        self.batch_size = batch_size

    # =====================================================
    # EXPORT
    # =====================================================

    def export(self) -> dict:

        collections = self.store.collections

        stats = {"nodes": 0, "relationships": 0}

        with self.driver.session(database=self.database) as session:

            for type_name in collections:
                session.run(
                    f"CREATE CONSTRAINT IF NOT EXISTS "
                    f"FOR (n:{_quote(type_name)}) REQUIRE n.id IS UNIQUE"
                )

            for type_name, collection in collections.items():
                stats["nodes"] += self._export_nodes(session, type_name, collection)

            for type_name, collection in collections.items():
                stats["relationships"] += self._export_references(session, type_name, collection)

        logger.info(
            f"Exported {stats['nodes']} nodes and "
            f"{stats['relationships']} relationships to Neo4j"
        )

        return stats

    # =====================================================
    # NODES
    # =====================================================

    def _export_nodes(self, session, type_name, collection) -> int:

        rows = [
            {"id": node.id, "props": self._node_properties(node)}
            for node in collection.nodes
        ]

        query = f"""
        UNWIND $nodes AS node
        MERGE (n:{_quote(type_name)} {{id: node.id}})
        SET n += node.props
        """

        for batch in _batches(rows, self.batch_size):
            session.run(query, {"nodes": batch})

        return len(rows)

    @staticmethod
    def _node_properties(node) -> dict:

        props = dict(node.fields)

        # ItemLink records carry the page path as a plain field
        if node.path is not None:
            props.setdefault("path", node.path)

        props.pop("id", None)

        return {key: _to_property(value) for key, value in props.items()}

    # =====================================================
    # RELATIONSHIPS
    # =====================================================

    def _export_references(self, session, type_name, collection) -> int:

        total = 0

        for field_name, target_type in collection.references.items():
            pairs = []

            for node in collection.nodes:
                value = node.get(field_name)
                target_ids = value if isinstance(value, list) else [value]
                pairs.extend([node.id, target_id] for target_id in target_ids if target_id)

            if not pairs:
                continue

            query = f"""
            UNWIND $pairs AS pair
            MATCH (a:{_quote(type_name)} {{id: pair[0]}})
            MATCH (b:{_quote(target_type)} {{id: pair[1]}})
            MERGE (a)-[:{_quote(field_name.upper())}]->(b)
            """

            for batch in _batches(pairs, self.batch_size):
                session.run(query, {"pairs": batch})

            total += len(pairs)

        return total

    # =====================================================
    # CLOSE CONNECTION
    # =====================================================

    def close(self):
        self.driver.close()
        logger.info("Neo4j connection closed")
