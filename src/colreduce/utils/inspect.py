"""Provide insights about Python objects."""

import inspect
from typing import Any


def get_qualname(obj: Any) -> str:
    """Get the qualified name of the given object.

    Used to give a readable name to the functions
    wrapped by expressions and reducers.

    For functions or methods, this will return
    something like ``module.class.method`` or
    ``module.function``, for instances of a class
    the name of their class.

    >>> import pyarrow.compute as pc
    >>> get_qualname(pc.mean)
    'pyarrow.compute.mean'
    """
    module = inspect.getmodule(obj)
    module_name = module.__name__ if module is not None else "<unknown>"
    if inspect.ismethod(obj):
        return f"{module_name}.{obj.__self__.__class__.__name__}.{obj.__name__}"
    if inspect.isfunction(obj) or inspect.isbuiltin(obj):
        return f"{module_name}.{obj.__qualname__}"
    if inspect.isclass(obj):
        return f"{module_name}.{obj.__name__}"
    if inspect.ismodule(obj):
        return obj.__name__
    return f"{module_name}.{obj.__class__.__name__}"
