"""D-Bus specification code generator."""

from .parser import *
from .registry import TypeRegistry as TypeRegistry
from .resolver import TypeResolver as TypeResolver
from .signature import GrammarError as GrammarError
from .signature import parse_next as parse_next
from .signature import parse_signature as parse_signature
from .types import *
