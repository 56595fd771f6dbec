"""
Storage exceptions

Absence is never an exception: lookups return None and deletes return False.
These cover the invariants storage itself owns.
"""


class StorageError(Exception):
    """Base class for storage failures"""


class ConflictError(StorageError):
    """A write would duplicate an id or a unique key, or break a dependency"""

    def __init__(self, entity: str, field: str, value, reason: str = "conflicts with an existing record"):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field}={value!r} {reason}")


class MissingReferenceError(StorageError):
    """A write references a record that does not exist"""

    def __init__(self, entity: str, field: str, value):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity}.{field} references unknown record {value!r}")
