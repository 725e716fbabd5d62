"""Client-side browser for a remote sales collection.

Cache-first, cursor-paginated access with sorting, filtering and a per-date
sales summary for charting.
"""

__version__ = "0.1.0"
