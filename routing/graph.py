# This file is part of routing-pq.
#
# routing-pq is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# routing-pq is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with routing-pq.  If not, see <http://www.gnu.org/licenses/>.

import math


def _graphviz_prop_string(d):
    return ','.join('{}="{}"'.format(k, v) for k, v in sorted(d.items()))


def _graphviz_id(node):
    return 'n{}'.format(node.id)


class Entity(object):
    """Base class for graph entities."""
    def __init__(self, props={}):
        self._props = dict(props)

    @property
    def props(self):
        return self._props


class Graph(Entity):
    """Directed graph of nodes joined by weighted edges.

    Nodes are keyed by their identifier. Edge costs must be non-negative so
    that the graph can be searched with Dijkstra or A*.
    """
    def __init__(self, props={}):
        super(Graph, self).__init__(props)
        self._nodes = {}
        self._edges = []
        self._out_edges = {}

    def __len__(self):
        return len(self._nodes)

    def __contains__(self, identifier):
        return identifier in self._nodes

    @property
    def nodes(self):
        return iter(self._nodes.values())

    @property
    def edges(self):
        return iter(self._edges)

    def node(self, identifier):
        return self._nodes[identifier]

    def add_node(self, node):
        if node.id in self._nodes:
            raise ValueError('Duplicate node in graph: {}'.format(node.id))

        self._nodes[node.id] = node
        self._out_edges[node.id] = []

    def add_edge(self, edge):
        if (edge.source.id not in self._nodes or
                edge.dest.id not in self._nodes):
            raise ValueError('Edge nodes not in graph')
        if math.isnan(edge.cost):
            raise ValueError('Edge cost is not a number: {} -> {}'.format(
                edge.source.id, edge.dest.id))
        if edge.cost < 0:
            raise ValueError('Negative edge cost: {} -> {}: {}'.format(
                edge.source.id, edge.dest.id, edge.cost))

        self._edges.append(edge)
        self._out_edges[edge.source.id].append(edge)

    def edges_from(self, identifier):
        return iter(self._out_edges.get(identifier, []))

    def write_graphviz(self, f):
        f.write('digraph {\n')

        for k, v in sorted(self.props.items()):
            f.write(' {}="{}";\n'.format(k, v))

        for node in self.nodes:
            f.write(' "{}"[{}]\n'.format(
                _graphviz_id(node), _graphviz_prop_string(node.props)))

        for edge in self._edges:
            f.write(' "{}" -> "{}"[{}]\n'.format(
                _graphviz_id(edge.source), _graphviz_id(edge.dest),
                _graphviz_prop_string(edge.props)))

        f.write('}\n')


class Node(Entity):
    """Node entity represents a vertex in the graph."""
    def __init__(self, identifier, props={}):
        super(Node, self).__init__(props)
        self.id = identifier

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self.id)


class Edge(Entity):
    """Edge entity represents a weighted connection between nodes."""
    def __init__(self, source, dest, cost, props={}):
        super(Edge, self).__init__(props)
        self.source = source
        self.dest = dest
        self.cost = cost
