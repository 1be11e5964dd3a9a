"""
Product Catalog API — Store Results
=====================================

What:  Tagged outcomes returned by every ProductStore operation.
How:   Three frozen dataclasses; callers branch with isinstance().

    Found(value)           the operation produced a record (or list of records)
    NotFound()             no record matched the identifier (normal outcome)
    StoreFailure(message)  the driver raised; message is the exception text
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class Found:
    value: Any


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class StoreFailure:
    message: str
    operation: str = ""
    error_type: str = ""


StoreResult = Union[Found, NotFound, StoreFailure]

# Convenience aliases for annotations
ProductRecord = Dict[str, Any]
ProductList = List[ProductRecord]
