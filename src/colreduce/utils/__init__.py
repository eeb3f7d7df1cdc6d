"""Generic utilities and helpers.

This is a collection of utilities that support the other
components without being part of the computation itself:
naming Python objects, logging, rendering results as text
tables and timing the aggregation strategies.

The ``tabulate`` and ``timing`` modules depend on the compute
engine and have to be imported explicitly.
"""

from . import inspect, logs

__all__ = ("inspect", "logs")
