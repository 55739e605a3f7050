from __future__ import annotations

from pathlib import Path

from pyvis.network import Network

from .models import KnowledgeGraph


def render_graph(graph: KnowledgeGraph, output_html: Path) -> Path:
    net = Network(height="800px", width="100%", bgcolor="#ffffff", font_color="black", directed=True, cdn_resources="remote")

    for node in graph.nodes:
        net.add_node(
            node.id,
            label=node.title,
            title=f"{node.title} ({node.type})\n{node.description}",
            group=node.type,
            level=node.level,
        )

    for edge in graph.edges:
        net.add_edge(edge.source, edge.target)

    output_html.parent.mkdir(parents=True, exist_ok=True)
    net.write_html(str(output_html), notebook=False)
    return output_html
