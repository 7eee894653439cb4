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
import logging

from .heap import IndexedPriorityQueue

logger = logging.getLogger(__name__)


class ZeroCostFunction(object):
    """Estimate nothing; A* with this estimate is Dijkstra's algorithm."""

    def admissible_cost(self, source, dest):
        return 0.0


class EuclideanCostFunction(object):
    def __init__(self, scale=1.0):
        self._scale = scale

    def _coordinates(self, node):
        try:
            return float(node.props['x']), float(node.props['y'])
        except KeyError:
            raise ValueError('Node {} has no coordinates'.format(node.id))

    def admissible_cost(self, source, dest):
        """Admissible estimation of the cost from source to dest

        The cost of going from source to dest must never be overestimated by
        this function. The scale must therefore not exceed the lowest cost per
        unit of distance of any edge in the graph.
        """
        if source.id == dest.id:
            return 0.0
        x1, y1 = self._coordinates(source)
        x2, y2 = self._coordinates(dest)
        return self._scale * math.hypot(x2 - x1, y2 - y1)


def _estimate(cost_func, source, dest):
    try:
        return cost_func.admissible_cost(source, dest)
    except ValueError:
        logger.debug('No cost estimate from {} to {}'.format(
            source.id, dest.id))
        return 0.0


def path_to(graph, prev_edge, dist, dest):
    """Return the path to dest as a list of (node, edge, cost) tuples.

    The edge is the one taken to reach the node (None for the first node)
    and cost is the total cost of reaching the node.
    """
    path = []
    identifier = dest
    while True:
        edge = prev_edge[identifier]
        path.append((graph.node(identifier), edge, dist[identifier]))
        if edge is None:
            break
        identifier = edge.source.id

    path.reverse()
    return path


def dijkstra_shortest(graph, source):
    """Dijkstra's shortest paths from source."""

    if source not in graph:
        raise KeyError(source)

    dist = {source: 0.0}
    prev_edge = {source: None}
    open_nodes = IndexedPriorityQueue([(source, 0.0)])
    queued = {source}

    while len(open_nodes) > 0:
        current = open_nodes.pop().identifier
        queued.discard(current)

        for edge in graph.edges_from(current):
            other = edge.dest.id
            alt_dist = dist[current] + edge.cost
            if other in dist and alt_dist >= dist[other]:
                continue

            dist[other] = alt_dist
            prev_edge[other] = edge
            if other in queued:
                open_nodes.update(other, alt_dist)
            else:
                open_nodes.push(other, alt_dist)
                queued.add(other)

    return dist, prev_edge


def find_path(graph, source, dest, cost_func=None):
    """Find the cheapest path from source to dest using A* search.

    Returns a tuple of the path (see :func:`path_to`) and its total cost, or
    None if dest cannot be reached from source.
    """
    if cost_func is None:
        cost_func = ZeroCostFunction()

    dest_node = graph.node(dest)
    initial_cost = _estimate(cost_func, graph.node(source), dest_node)

    g_score = {source: 0.0}
    prev_edge = {source: None}
    open_nodes = IndexedPriorityQueue([(source, initial_cost)])
    queued = {source}

    while len(open_nodes) > 0:
        current = open_nodes.pop().identifier
        queued.discard(current)

        if current == dest:
            logger.info('At end of path: {} -> {}, cost {}'.format(
                source, dest, g_score[dest]))
            return path_to(graph, prev_edge, g_score, dest), g_score[dest]

        for edge in graph.edges_from(current):
            other = edge.dest.id
            score = g_score[current] + edge.cost
            if other in g_score and score >= g_score[other]:
                continue

            g_score[other] = score
            prev_edge[other] = edge
            f_score = score + _estimate(cost_func, edge.dest, dest_node)
            logger.debug(
                'Following edge from {} to {} for new cost {} ({})'.format(
                    current, other, score, f_score))

            # Nodes already expanded are reopened when an inconsistent
            # estimate let them be popped too early.
            if other in queued:
                open_nodes.update(other, f_score)
            else:
                open_nodes.push(other, f_score)
                queued.add(other)

    logger.info('No path from {} to {}'.format(source, dest))
    return None
