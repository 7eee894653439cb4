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

import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from io import StringIO

from routing import command


class TestReadEdgeList(unittest.TestCase):
    def test_read(self):
        f = StringIO('# source\tdest\tcost\n1\t2\t1.5\n\n2\t3\t2\n')
        g = command.read_edge_list(f)
        self.assertEqual(len(g), 3)
        edges = [(e.source.id, e.dest.id, e.cost) for e in g.edges]
        self.assertEqual(edges, [(1, 2, 1.5), (2, 3, 2.0)])

    def test_read_undirected(self):
        g = command.read_edge_list(StringIO('1\t2\t4\n'), undirected=True)
        edges = sorted((e.source.id, e.dest.id) for e in g.edges)
        self.assertEqual(edges, [(1, 2), (2, 1)])

    def test_missing_column(self):
        with self.assertRaises(command.CommandError) as cm:
            command.read_edge_list(StringIO('1\t2\t1\n3\t4\n'))
        self.assertIn('Line 2', str(cm.exception))

    def test_invalid_cost(self):
        with self.assertRaises(command.CommandError):
            command.read_edge_list(StringIO('1\t2\tfar\n'))

    def test_negative_cost(self):
        with self.assertRaises(command.CommandError):
            command.read_edge_list(StringIO('1\t2\t-3\n'))

    def test_nan_cost(self):
        with self.assertRaises(command.CommandError) as cm:
            command.read_edge_list(StringIO('1\t2\tnan\n1\t3\t1\n'))
        self.assertIn('Line 1', str(cm.exception))

    def test_indented_comment(self):
        g = command.read_edge_list(StringIO(' # note\n1\t2\t1\n'))
        self.assertEqual(len(g), 2)

    def test_read_node_coordinates(self):
        g = command.read_edge_list(StringIO('1\t2\t1\n'))
        command.read_node_coordinates(
            StringIO('1\t0\t0\n2\t1\t0.5\n9\t5\t5\n'), g)
        self.assertEqual(g.node(2).props, {'x': 1.0, 'y': 0.5})


class TestShortestPathCommand(unittest.TestCase):
    def setUp(self):
        self._dir = tempfile.mkdtemp()
        self.edges = self.write_file('edges.tsv', '\n'.join([
            '1\t2\t1',
            '2\t3\t1',
            '1\t3\t5',
            '3\t4\t2',
            '5\t1\t1']) + '\n')

    def tearDown(self):
        shutil.rmtree(self._dir)

    def write_file(self, name, contents):
        path = os.path.join(self._dir, name)
        with open(path, 'w') as f:
            f.write(contents)
        return path

    def run_command(self, args):
        out = StringIO()
        with redirect_stdout(out):
            command.main(args=args)
        return out.getvalue()

    def test_route(self):
        output = self.run_command(
            [self.edges, '--source', '1', '--dest', '4'])
        self.assertEqual(output, '\n'.join([
            '1\t0.0',
            '2\t1.0',
            '3\t2.0',
            '4\t4.0',
            'Total cost: 4.0',
            '']))

    def test_route_with_coordinates(self):
        nodes = self.write_file('nodes.tsv', '\n'.join([
            '1\t0\t0', '2\t1\t0', '3\t2\t0', '4\t4\t0', '5\t-1\t0']) + '\n')
        output = self.run_command(
            [self.edges, '--source', '5', '--dest', '4', '--nodes', nodes])
        self.assertTrue(output.endswith('Total cost: 5.0\n'))

    def test_undirected_route(self):
        output = self.run_command(
            [self.edges, '--source', '4', '--dest', '1', '--undirected'])
        self.assertTrue(output.endswith('Total cost: 4.0\n'))

    def test_write_dot(self):
        dot = os.path.join(self._dir, 'route.dot')
        self.run_command(
            [self.edges, '--source', '1', '--dest', '3', '--dot', dot])
        with open(dot, 'r') as f:
            contents = f.read()
        self.assertTrue(contents.startswith('digraph {\n'))
        self.assertIn(' "n1" -> "n2"[label="1",penwidth="3"]\n', contents)
        self.assertIn(' "n1" -> "n3"[label="5"]\n', contents)
        self.assertIn(
            ' "n4"[fillcolor="#b3cde3",label="4",style="filled"]\n',
            contents)

    def assert_command_fails(self, args):
        err = StringIO()
        with redirect_stderr(err):
            with self.assertRaises(SystemExit) as cm:
                self.run_command(args)
        self.assertEqual(cm.exception.code, 2)
        return err.getvalue()

    def test_no_path(self):
        message = self.assert_command_fails(
            [self.edges, '--source', '4', '--dest', '1'])
        self.assertIn('No path from 4 to 1', message)

    def test_unknown_node(self):
        message = self.assert_command_fails(
            [self.edges, '--source', '1', '--dest', '42'])
        self.assertIn('Unknown node: 42', message)

    def test_missing_edges_file(self):
        missing = os.path.join(self._dir, 'missing.tsv')
        message = self.assert_command_fails(
            [missing, '--source', '1', '--dest', '2'])
        self.assertIn('Unable to open {}'.format(missing), message)

    def test_missing_nodes_file(self):
        missing = os.path.join(self._dir, 'missing.tsv')
        message = self.assert_command_fails(
            [self.edges, '--source', '1', '--dest', '4',
             '--nodes', missing])
        self.assertIn('Unable to open {}'.format(missing), message)

    def test_unwritable_dot_file(self):
        dot = os.path.join(self._dir, 'missing', 'route.dot')
        message = self.assert_command_fails(
            [self.edges, '--source', '1', '--dest', '4', '--dot', dot])
        self.assertIn('Unable to open {}'.format(dot), message)


if __name__ == '__main__':
    unittest.main()
