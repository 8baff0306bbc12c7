"""
Role / argument classification.

Raw role codes are rewritten through the argument bug table first, then
classified into a closed set of categories. Codes outside every category are
a classification failure: the caller skips that argument, nothing is
emitted for it.
"""

import re
from enum import Enum
from typing import Optional, Tuple

from rdflib import URIRef
from rdflib.namespace import RDF, SKOS

from lxg.errors import ClassificationError
from lxg.statements import emit
from lxg.tables import CorrectionTables
from lxg.vocab import PMO

ARG_NUM_PATTERN = re.compile(r'^[0-6]$')
PREPOSITION_PATTERN = re.compile(r'^prep(_[a-z]+)?$')

AGENT_CODE = 'a'
FUNCTION_CODE = 'm'


class ArgumentCategory(Enum):
    M_FUNCTION = 'm_function'
    ADDITIONAL = 'additional'
    PREPOSITION = 'preposition'
    NUMERIC = 'numeric'
    AGENT = 'agent'
    NULL = 'null'


CORE_CATEGORIES = {ArgumentCategory.NUMERIC, ArgumentCategory.AGENT}


def role_code(n: Optional[str], f: Optional[str]) -> Optional[str]:
    """
    Raw argument code of a role / arg element from its 'n' and 'f' attributes.

    'n="m" f="tmp"' gives 'tmp', 'n="0"' gives '0', a bare 'f' (rel elements)
    gives the function tag. None means the element names no argument at all.
    """
    n = (n or '').strip().lower()
    f = (f or '').strip().lower()

    if n == FUNCTION_CODE:
        return f or FUNCTION_CODE
    if n:
        return n
    if f:
        return f
    return None


def categorize(code: Optional[str], adjunct_codes) -> ArgumentCategory:
    """Category of an already corrected code. Raises ClassificationError."""
    if code is None:
        return ArgumentCategory.NULL
    if ARG_NUM_PATTERN.match(code):
        return ArgumentCategory.NUMERIC
    if code in adjunct_codes:
        return ArgumentCategory.ADDITIONAL
    if PREPOSITION_PATTERN.match(code):
        return ArgumentCategory.PREPOSITION
    if code == AGENT_CODE:
        return ArgumentCategory.AGENT
    if code == FUNCTION_CODE:
        return ArgumentCategory.M_FUNCTION
    raise ClassificationError(code)


def classify(raw_code: Optional[str], variant, tables: CorrectionTables) -> Tuple[Optional[str], ArgumentCategory]:
    """(normalized code, category) for a raw role code."""
    if raw_code is None:
        return None, ArgumentCategory.NULL
    code = tables.fix_argument(raw_code)
    return code, categorize(code, variant.adjunct_codes)


def argument_key(code: str, category: ArgumentCategory) -> str:
    """Local part of an argument URI (after the variant's argument label)."""
    if category == ArgumentCategory.ADDITIONAL:
        return FUNCTION_CODE + '-' + code
    return code


class ArgumentClassifier:
    """Builds the statements describing the arguments of one resource."""

    def __init__(self, variant, minter, tables: CorrectionTables, language: str = 'en',
                 skip_definitions: bool = False):
        self.variant = variant
        self.minter = minter
        self.tables = tables
        self.language = language
        self.skip_definitions = skip_definitions

    def classify(self, raw_code: Optional[str]) -> Tuple[Optional[str], ArgumentCategory]:
        return classify(raw_code, self.variant, self.tables)

    def argument_uri(self, roleset_id: str, code: str, category: ArgumentCategory) -> URIRef:
        return self.minter.argument(roleset_id, argument_key(code, category))

    def add_argument(self, sink, roleset_uri: URIRef, argument_uri: URIRef, code: str,
                     category: ArgumentCategory, function_tag: Optional[str] = None,
                     definition: Optional[str] = None):
        """Type, core flag, role class, function tag and definition of one argument."""
        emit(sink, argument_uri, RDF.type, self.variant.semantic_argument)
        emit(sink, argument_uri, self.variant.core_property, category in CORE_CATEGORIES)
        emit(sink, argument_uri, self.variant.role_property, self.variant.role_class(code, category))
        if category == ArgumentCategory.NUMERIC and function_tag:
            emit(sink, argument_uri, self.variant.tag_property, self.variant.tag_class(function_tag))
        if not self.skip_definitions:
            emit(sink, argument_uri, SKOS.definition, definition, language=self.language)
        emit(sink, roleset_uri, PMO.semRole, argument_uri)

    def add_adjuncts(self, sink, roleset_id: str, roleset_uri: URIRef):
        """Generic modifier arguments shared by every roleset of the resource."""
        for code in sorted(self.variant.adjunct_codes):
            argument_uri = self.argument_uri(roleset_id, code, ArgumentCategory.ADDITIONAL)
            emit(sink, argument_uri, self.variant.role_property,
                 self.variant.role_class(code, ArgumentCategory.ADDITIONAL))
            emit(sink, roleset_uri, PMO.semRole, argument_uri)
