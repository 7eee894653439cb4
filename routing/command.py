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

"""Command line interface for finding routes in an edge list."""

import csv
import logging
import argparse

from . import graph, pathways

logger = logging.getLogger(__name__)

_NODE_COLOR = '#b3cde3'
_ACTIVE_COLOR = '#fbb4ae'


class CommandError(Exception):
    """Error from running a command.

    The message is shown to the user as a usage error.
    """


def _open_file(path, mode='r'):
    try:
        return open(path, mode)
    except IOError as e:
        raise CommandError('Unable to open {}: {}'.format(path, e.strerror))


def _parse_rows(f, columns):
    for lineno, row in enumerate(csv.reader(f, delimiter='\t'), start=1):
        if (len(row) == 0 or row[0].strip() == '' or
                row[0].strip().startswith('#')):
            continue
        if len(row) < columns:
            raise CommandError('Line {}: expected {} columns, got {}'.format(
                lineno, columns, len(row)))
        yield lineno, [value.strip() for value in row[:columns]]


def read_edge_list(f, undirected=False):
    """Read graph from tab-separated rows of source, dest and cost."""
    g = graph.Graph()

    def get_node(identifier):
        if identifier not in g:
            g.add_node(graph.Node(identifier))
        return g.node(identifier)

    for lineno, (source, dest, cost) in _parse_rows(f, 3):
        try:
            source, dest, cost = int(source), int(dest), float(cost)
        except ValueError:
            raise CommandError('Line {}: invalid edge: {}, {}, {}'.format(
                lineno, source, dest, cost))

        pairs = [(source, dest)]
        if undirected and source != dest:
            pairs.append((dest, source))

        for s, d in pairs:
            try:
                g.add_edge(graph.Edge(get_node(s), get_node(d), cost))
            except ValueError as e:
                raise CommandError('Line {}: {}'.format(lineno, e))

    return g


def read_node_coordinates(f, g):
    """Read tab-separated rows of node id, x and y into node props."""
    for lineno, (identifier, x, y) in _parse_rows(f, 3):
        try:
            identifier, x, y = int(identifier), float(x), float(y)
        except ValueError:
            raise CommandError(
                'Line {}: invalid coordinates: {}, {}, {}'.format(
                lineno, identifier, x, y))

        if identifier not in g:
            logger.warning('Coordinates given for unknown node {}'.format(
                identifier))
            continue

        props = g.node(identifier).props
        props['x'] = x
        props['y'] = y


def write_route_graph(f, g, path):
    """Write graph in Graphviz format with the route highlighted."""
    route_nodes = set(node.id for node, _, _ in path)
    route_edges = set(edge for _, edge, _ in path if edge is not None)

    out = graph.Graph()
    nodes = {}
    for node in g.nodes:
        color = _ACTIVE_COLOR if node.id in route_nodes else _NODE_COLOR
        nodes[node.id] = graph.Node(node.id, {
            'label': node.id,
            'style': 'filled',
            'fillcolor': color})
        out.add_node(nodes[node.id])

    for edge in g.edges:
        props = {'label': '{:g}'.format(edge.cost)}
        if edge in route_edges:
            props['penwidth'] = 3
        out.add_edge(graph.Edge(
            nodes[edge.source.id], nodes[edge.dest.id], edge.cost, props))

    out.write_graphviz(f)


class Command(object):
    """Base class for commands.

    Subclasses declare their arguments in :meth:`init_parser` and do their
    work in :meth:`run`.
    """

    def __init__(self, args):
        self._args = args

    @classmethod
    def init_parser(cls, parser):
        pass

    def run(self):
        raise NotImplementedError()


class ShortestPathCommand(Command):
    """Find the cheapest route between two nodes."""

    @classmethod
    def init_parser(cls, parser):
        parser.add_argument(
            'edges', type=str, help='Edge list (source, dest, cost)')
        parser.add_argument(
            '--source', type=int, required=True, help='Source node')
        parser.add_argument(
            '--dest', type=int, required=True, help='Destination node')
        parser.add_argument(
            '--nodes', type=str, default=None,
            help='Node coordinates (id, x, y) for the distance estimate')
        parser.add_argument(
            '--scale', type=float, default=1.0,
            help='Lowest edge cost per unit of distance')
        parser.add_argument(
            '--undirected', action='store_true',
            help='Edges can be followed in both directions')
        parser.add_argument(
            '--dot', type=str, default=None,
            help='Write route graph to file in Graphviz format')
        super(ShortestPathCommand, cls).init_parser(parser)

    def run(self):
        with _open_file(self._args.edges) as f:
            g = read_edge_list(f, self._args.undirected)
        logger.info('Loaded graph with {} nodes'.format(len(g)))

        cost_func = None
        if self._args.nodes is not None:
            with _open_file(self._args.nodes) as f:
                read_node_coordinates(f, g)
            cost_func = pathways.EuclideanCostFunction(self._args.scale)

        source, dest = self._args.source, self._args.dest
        for identifier in (source, dest):
            if identifier not in g:
                raise CommandError('Unknown node: {}'.format(identifier))

        logger.info('Searching for {} -> {}...'.format(source, dest))
        result = pathways.find_path(g, source, dest, cost_func)
        if result is None:
            raise CommandError('No path from {} to {}'.format(source, dest))

        path, cost = result
        for node, _, node_cost in path:
            print('{}\t{}'.format(node.id, node_cost))
        print('Total cost: {}'.format(cost))

        if self._args.dot is not None:
            with _open_file(self._args.dot, 'w') as f:
                write_route_graph(f, g, path)


def main(command_class=ShortestPathCommand, args=None):
    """Run the command line interface of command_class."""
    parser = argparse.ArgumentParser(description=command_class.__doc__)
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='Show debug messages')
    command_class.init_parser(parser)
    parsed_args = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    command = command_class(parsed_args)
    try:
        command.run()
    except CommandError as e:
        parser.error(str(e))
