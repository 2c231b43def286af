"""Graph helpers used to shape the room graph.

All functions work on undirected ``networkx.Graph`` objects. Node keys are
treated as stable handles: removing a node never renames the others, so a
caller can hold on to node keys across pruning.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable

import networkx as nx


def induced_subgraph(graph: nx.Graph, nodes: Iterable[Hashable]) -> nx.Graph:
    """Return an independent copy of the subgraph induced by `nodes`."""
    return graph.subgraph(nodes).copy()


def largest_connected_subgraph(graph: nx.Graph) -> nx.Graph | None:
    """Return the largest connected component as a new graph.

    Returns:
        The induced subgraph of the largest component, or None if the graph
        is already connected (or empty). Ties go to the first component found.
    """
    components = list(nx.connected_components(graph))
    if len(components) <= 1:
        return None
    largest_component = max(components, key=len)
    return induced_subgraph(graph, largest_component)


def prune_outer_nodes_to_reach_size(
    graph: nx.Graph,
    accept_fn: Callable[[nx.Graph], bool],
    desired_size: int,
) -> None:
    """Remove low-degree nodes in place until `desired_size` nodes remain.

    Nodes with exactly one edge are tried first. When a whole pass removes
    nothing, the degree threshold goes up by one. Each removal is tentative:
    the graph is reduced to its largest connected component and handed to
    `accept_fn`; if that returns False the node and its edges are put back.

    Stops early once the threshold exceeds every degree in the graph, so the
    final node count may stay above `desired_size`.

    Args:
        graph: Graph to prune. Modified in place.
        accept_fn: Called with the candidate graph after a removal; return
            False to veto the removal.
        desired_size: Target node count.
    """
    max_edges_per_removed_node = 1
    while True:
        removed_nodes = False
        for n in list(graph.nodes):
            if graph.number_of_nodes() <= desired_size:
                return
            # May have been dropped along with a disconnected piece.
            if n not in graph:
                continue
            if graph.degree(n) != max_edges_per_removed_node:
                continue

            node_attrs = dict(graph.nodes[n])
            edges = list(graph.edges(n, data=True))
            graph.remove_node(n)

            # Removing a node can split the graph, so check the piece we'd keep.
            subgraph = largest_connected_subgraph(graph)
            check_graph = subgraph if subgraph is not None else graph
            if accept_fn(check_graph):
                removed_nodes = True
                if subgraph is not None:
                    graph.remove_nodes_from([m for m in list(graph) if m not in subgraph])
            else:
                graph.add_node(n, **node_attrs)
                graph.add_edges_from(edges)

        if not removed_nodes:
            max_edges_per_removed_node += 1
            max_degree = max((d for _, d in graph.degree), default=0)
            if max_edges_per_removed_node > max_degree:
                return


def longest_path_to_point_in_tree(graph: nx.Graph, target: Hashable) -> list[Hashable]:
    """Longest path from any leaf to `target`, assuming `graph` is a tree.

    Returns:
        Node keys ordered from the far leaf to `target` (inclusive).
    """
    predecessors: dict[Hashable, Hashable] = {}
    has_successor: set[Hashable] = set()
    for u, v in nx.dfs_edges(graph, source=target):
        predecessors[v] = u
        has_successor.add(u)

    reached = set(predecessors)
    reached.add(target)
    leaves = [n for n in graph.nodes if n in reached and n not in has_successor]

    max_path: list[Hashable] = []
    for leaf in leaves:
        path = [leaf]
        node = leaf
        while node != target:
            node = predecessors[node]
            path.append(node)
        if len(path) > len(max_path):
            max_path = path

    return max_path


def longest_path_in_tree(graph: nx.Graph) -> list[Hashable]:
    """Longest path in a tree, found with two depth-first sweeps.

    The farthest node from any start node is one end of a longest path;
    sweeping again from there finds the other end.
    """
    if graph.number_of_nodes() == 0:
        raise ValueError("Cannot find a path in an empty graph")
    start = next(iter(graph.nodes))
    path = longest_path_to_point_in_tree(graph, start)
    return longest_path_to_point_in_tree(graph, path[0])
