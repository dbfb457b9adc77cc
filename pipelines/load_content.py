"""
Kontent Graph — Content Load Pipeline

Purpose:
- Load every content type, taxonomy group and content item of the
  configured Kontent project into a GraphStore
- Print a per-collection summary
- Optionally export the graph to Neo4j

Usage:
    python -m pipelines.load_content [--export] [--verbose]
"""

import asyncio
import logging
import sys
import time

from config.system_loader import get_system_config
from kontent_graph.delivery import DeliveryClient
from kontent_graph.graph import GraphExporter, GraphMaterializer, GraphStore
from kontent_graph.utils import set_log_level


# =====================================================
# Load
# =====================================================

async def load_store(settings: dict) -> GraphStore:

    store = GraphStore(routes=settings.get("routes") or {})

    async with DeliveryClient() as client:
        materializer = GraphMaterializer(client, settings=settings)
        await materializer.load(store)

    return store


# =====================================================
# Pretty Print Summary
# =====================================================

def print_summary(store: GraphStore):

    print("\n" + "=" * 80)
    print("KONTENT GRAPH: COLLECTIONS")
    print("=" * 80)

    for type_name, collection in sorted(store.collections.items()):
        print(f"{type_name:<40} {len(collection):>6} nodes")

        for field_name, target in sorted(collection.references.items()):
            print(f"    {field_name} -> {target}")

    print("=" * 80)


# =====================================================
# Run
# =====================================================

def run(export: bool = False):

    settings = get_system_config()

    start = time.time()
    store = asyncio.run(load_store(settings))
    total_time = round(time.time() - start, 2)

    print_summary(store)
    print(f"\nTotal Load Time: {total_time} seconds")

    if export:
        exporter = GraphExporter(store)
        try:
            stats = exporter.export()
        finally:
            exporter.close()

        print(f"Exported {stats['nodes']} nodes, {stats['relationships']} relationships")

    return store


# =====================================================
# CLI ENTRY
# =====================================================

if __name__ == "__main__":

    args = sys.argv[1:]

    unknown = [arg for arg in args if arg not in ("--export", "--verbose")]
    if unknown:
        print("Usage:")
        print("python -m pipelines.load_content [--export] [--verbose]")
        sys.exit(1)

    if "--verbose" in args:
        set_log_level(logging.DEBUG)

    run(export="--export" in args)
