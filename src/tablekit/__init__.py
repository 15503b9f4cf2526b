"""
Tablekit: higher-order methods for keyed and ordered collections.

Wraps a mapping so it gains map, filter, reduce, predicate tests, search,
slicing, joining and a colored debug printer. Integer keys 1..N form the
array part, walked in order by the ``i``-prefixed methods.

Usage:
    from tablekit import T, build

    fuel = T([80, 0, 35])
    fuel.ifilter(lambda v: v > 0).sum()   # 115
    build(3, lambda i: i * i).join()      # "1, 4, 9"

    inventory = T({"coal": 12, "torch": 0})
    inventory.filter(lambda n: n > 0)     # T({'coal': 12})
    inventory.print()
"""

from .table import Table, T, build
from .printer import TablePrinter
from .sinks import Color, DisplaySink, RichSink, BufferSink
from .errors import TablekitError, NonNumericValueError, MissingArgumentError
from .logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    # Collections
    "Table",
    "T",
    "build",
    # Display
    "TablePrinter",
    "Color",
    "DisplaySink",
    "RichSink",
    "BufferSink",
    # Errors
    "TablekitError",
    "NonNumericValueError",
    "MissingArgumentError",
    # Logging
    "setup_logger",
]
