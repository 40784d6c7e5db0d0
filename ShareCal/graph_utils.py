"""
Graph utilities for the model's region / sector / subsector hierarchy.

Nodes are named in branch notation, where each level is appended to its parent's name with a
period (e.g. ``ShareCal.USA.electricity.coal``). Edges run from parent to child and are tagged as
structural.
"""
import networkx as nx

from .utils import parameters as PARAM

EDGE_TYPE = "type"
STRUCTURAL = "structural"


def branch_name(*names):
    return '.'.join(names)


def parent_name(curr_node, return_empty=False):
    """
    curr_node is current node name (str)
    CAUTION: when curr_node is tree root, returns root (when return_empty is False)
    """
    parent = '.'.join(curr_node.split('.')[:-1])
    if parent:
        return_val = parent
    elif return_empty:
        return_val = ""
    else:
        return_val = curr_node

    return return_val


def add_node(graph, node, kind, obj=None):
    """
    Add `node` to `graph` along with a structural edge from its parent. The parent must already be
    in the graph.
    """
    graph.add_node(node, kind=kind, object=obj)
    parent = parent_name(node, return_empty=True)
    if parent:
        if parent not in graph:
            raise ValueError(f"Can't add {node}, its parent {parent} is not in the model")
        graph.add_edge(parent, node, **{EDGE_TYPE: [STRUCTURAL]})


def find_next_node(degrees):
    for node, degree in degrees:
        if degree == 0:
            return node


def top_down_traversal(graph, node_process_func, *args, root=None, **kwargs):
    """
    Visit each node in `graph` applying `node_process_func` to each node as its visited.

    A node is only visited once its parent has been visited.

    Parameters
    ----------
    graph : networkx.DiGraph
        The model graph. Must be a tree.

    node_process_func : function (nx.DiGraph, str) -> None
        The function to be applied to each node in `graph`. Doesn't return anything but should
        have an effect on the node data within `graph`.

    root : str, optional
        The node to start from. Only this node and its descendants are visited. Defaults to the
        model root.

    Returns
    -------
    None

    """
    root = root or PARAM.root
    sub_graph = graph.subgraph(nx.descendants(graph, root) | {root})
    sg_cur = nx.DiGraph(sub_graph)

    while len(sg_cur.nodes) > 0:
        n_cur = find_next_node(sg_cur.in_degree)
        if n_cur is None:
            raise ValueError("The model graph contains a loop")
        node_process_func(graph, n_cur, *args, **kwargs)
        sg_cur.remove_node(n_cur)
