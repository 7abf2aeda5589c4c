"""
Multilingual dictionary core package.

The dictionary subsystem fetches a CSV feed, parses it into typed entries
plus the feed's aggregate counters, and serves lookups and filtered searches
from an in-memory snapshot that is swapped atomically on every refresh.
"""
