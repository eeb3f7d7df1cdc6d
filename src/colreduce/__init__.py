"""ColReduce

Column-wise descriptive statistics built from scratch for learning and teaching purposes.

ColReduce shows how a per-column aggregation like "the mean of every column"
can be written in two different styles, an explicit loop managing an index
and an accumulator, or a declarative map of a function over the columns,
and how to verify that both styles agree and compare their speed.

The library is constituted by multiple components, each isolated within its own
package and each self documented in literate programming style.

The primary components are:

* The Compute Engine, in charge of loading, filtering and aggregating the data.
* The Dataframe API, which provides an high level API for the compute engine.
* The Utilities, which render results and time the aggregation strategies.
* The Commands, which expose the functionalities from the shell.

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import compute

__all__ = ("compute",)
