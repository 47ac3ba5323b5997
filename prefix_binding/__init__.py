'''
Bind the command-line arguments to the dataclass by name prefix and position.
'''
from .exceptions import (
    AmbiguousArgumentError,
    BindingError,
    MissingPositionalSlotError,
    RequiredArgumentMissingError,
    TypeConversionError,
    UnrecognizedArgumentError,
)
from .parser import BindingParser, parse_args
from .types import BindingField, FieldKind, RawArgument
from .utils import build_arg_list

Field = BindingField
