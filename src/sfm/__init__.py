"""
Structured Feedback Model (SFM) Package

The authoritative representation of a feedback survey and its results.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - HTTP transport
    - Form rendering or charting
    - Storage engines

This package defines SURVEY STRUCTURE, RESPONSE RULES and AGGREGATION only.

Storage and rendering happen in external layers.
Those layers consume and produce the payloads in `sfm.serialization`.
"""

__version__ = "0.1.0"
