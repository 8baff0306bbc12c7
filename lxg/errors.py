"""
Failure kinds and the exceptions carrying them.

Every kind is recovered locally by the caller (skip and count); none of them
aborts a run.
"""

from enum import Enum
from typing import Optional


class FailureKind(Enum):
    UNPARSEABLE_ENTRY = 'unparseable_entry'  # whole record skipped
    CLASSIFICATION_FAILURE = 'classification_failure'  # one argument skipped
    UNRESOLVABLE_SPAN = 'unresolvable_span'  # one label, or the whole example if it is the target
    UNRESOLVABLE_REFERENCE = 'unresolvable_reference'  # one cross-resource mapping skipped
    MISSING_RESOURCE = 'missing_resource'  # optional sub-pipeline disabled


class ConversionError(Exception):
    """Base class for recoverable conversion failures."""

    kind: FailureKind = FailureKind.UNPARSEABLE_ENTRY

    def __init__(self, message: str, kind: Optional[FailureKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class ClassificationError(ConversionError):
    """A role code that does not belong to any argument category."""

    kind = FailureKind.CLASSIFICATION_FAILURE

    def __init__(self, code: str):
        super().__init__(f"Unknown argument code: {code!r}")
        self.code = code


class UnparseableEntryError(ConversionError):
    """A resource file whose structure cannot be read at all."""

    kind = FailureKind.UNPARSEABLE_ENTRY

    def __init__(self, path, reason: str):
        super().__init__(f"Unable to parse {path}: {reason}")
        self.path = path
