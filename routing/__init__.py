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

"""Indexed priority queue and shortest path search for routing."""

from .heap import IndexedPriorityQueue, Entry, EmptyContainerError

__version__ = '0.1'
