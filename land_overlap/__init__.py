"""Land Overlap Dashboard Engine.

Filters rural land parcels and indigenous territory boundaries by
administrative region, computes their pairwise polygon intersections,
and aggregates areas and per-region counts for a map and chart front end.
"""

__version__ = "0.1.0"
