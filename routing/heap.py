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

"""Indexed binary min-heap used by the routing searches."""

import logging
from operator import attrgetter

logger = logging.getLogger(__name__)


class EmptyContainerError(ValueError):
    """Raised when popping from an empty queue."""


class Entry(object):
    """Heap entry"""

    def __init__(self, identifier, priority):
        self._identifier = identifier
        self._priority = priority
        self._slot = -1

    @property
    def identifier(self):
        return self._identifier

    @property
    def priority(self):
        return self._priority

    @property
    def slot(self):
        """Position in the heap array, or -1 once popped."""
        return self._slot

    def __iter__(self):
        return iter((self._identifier, self._priority))

    def __repr__(self):
        return '<{} {} at {}, priority={}>'.format(
            self.__class__.__name__, self._identifier, self._slot,
            self._priority)


class IndexedPriorityQueue(object):
    """Priority queue (min-heap) of identifiers with updatable priorities.

    Entries are ordered by priority only. The same identifier may be pushed
    more than once; :meth:`update` then acts on the first matching entry in
    heap array order.
    """

    def __init__(self, it=[]):
        self._h = []
        self._entries = {}
        for identifier, priority in it:
            self._append(Entry(identifier, priority))

        for i in range(len(self._h) // 2 - 1, -1, -1):
            self._sift_down(i)

    def __len__(self):
        return len(self._h)

    def _append(self, entry):
        entry._slot = len(self._h)
        self._h.append(entry)
        self._entries.setdefault(entry.identifier, []).append(entry)

    def _swap(self, i, j):
        self._h[i], self._h[j] = self._h[j], self._h[i]
        self._h[i]._slot = i
        self._h[j]._slot = j

    def _sift_up(self, i):
        while i > 0:
            parent = (i - 1) // 2
            if not self._h[i].priority < self._h[parent].priority:
                break
            self._swap(i, parent)
            i = parent
        return i

    def _sift_down(self, i):
        n = len(self._h)
        while 2 * i + 1 < n:
            child = 2 * i + 1
            if (child + 1 < n and
                    self._h[child + 1].priority < self._h[child].priority):
                child += 1
            if not self._h[child].priority < self._h[i].priority:
                break
            self._swap(i, child)
            i = child
        return i

    def push(self, identifier, priority):
        entry = Entry(identifier, priority)
        self._append(entry)
        self._sift_up(entry.slot)

    def pop(self):
        """Remove and return the entry with the lowest priority."""
        if len(self._h) == 0:
            raise EmptyContainerError('Pop on empty heap')

        self._swap(0, len(self._h) - 1)
        entry = self._h.pop()
        entry._slot = -1

        entries = self._entries[entry.identifier]
        entries.remove(entry)
        if len(entries) == 0:
            del self._entries[entry.identifier]

        if len(self._h) > 0:
            self._sift_down(0)
        return entry

    def update(self, identifier, priority):
        """Change priority of the entry for identifier and reorder the heap.

        Updating an identifier that is not in the queue does nothing. When
        the identifier was pushed more than once, its entries are scanned for
        the one first in heap order.
        """
        entries = self._entries.get(identifier)
        if not entries:
            logger.debug('Ignoring update of {}: not in heap'.format(
                identifier))
            return

        entry = min(entries, key=attrgetter('slot'))
        old = entry.priority
        entry._priority = priority
        if priority < old:
            self._sift_up(entry.slot)
        elif old < priority:
            self._sift_down(entry.slot)
