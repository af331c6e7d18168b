#!/usr/bin/env python3
"""Bind a small social graph template and print the statements.

Usage:
    python examples/social_graph.py            # Descriptors
    python examples/social_graph.py --cypher   # Cypher for Neo4j

What it does:
    1. Builds a digraph template with two declared nodes, one transform
       and one node that only appears on an edge
    2. Binds it against a value bundle where one person likes many posts
    3. Prints every statement as JSON
"""

import json
import sys


def main() -> None:
    from graph_config import GraphConfig, default_factories, neo4j_factories, using

    factories = neo4j_factories() if "--cypher" in sys.argv else default_factories()
    config = GraphConfig(factories)

    person = {"kind": "member"}

    @using("post")
    def to_post(row):
        return {"id": row["slug"], "title": row["title"]}

    save = config.digraph(
        "person [label=Person,idName=personId,", person, "];",
        "post [label=Post,", to_post, "];",
        'person -> post [label="LIKES",dir=forward];',
        'person -> city [label="LIVES_IN",dir=forward];',
    )

    result = save.bind(
        {
            "person": {"personId": 7, "name": "Ada"},
            "post": [
                {"slug": "graphs-101", "title": "Graphs 101"},
                {"slug": "dot-files", "title": "Why DOT"},
            ],
            "city": {"id": "ldn", "label": "City", "name": "London"},
        }
    )

    for statement in result.statements:
        print(json.dumps(statement.model_dump(mode="json")))
    for diagnostic in result.diagnostics:
        print(f"[{diagnostic.kind}] {diagnostic.message}", file=sys.stderr)


if __name__ == "__main__":
    main()
