'''
methods to read the command-line arguments, analysis the dataclass and convert the values.
'''
import types
import warnings
from argparse import ArgumentTypeError
from dataclasses import MISSING, Field, fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    Union,
    get_type_hints,
)

from .exceptions import TypeConversionError
from .types import BindingType, DataclassType, FieldKind, RawArgument


def build_arg_list(args: Iterable[str]) -> Iterator[RawArgument]:
    '''
        Read the raw command-line tokens into raw arguments.

        A token starting with `-` keeps the rest of the token as the key of the
        next value. Any other token is yielded as a value together with the
        pending key, which is then cleared. An empty token is yielded as an
        unnamed empty value and leaves the pending key untouched. A key that is
        never followed by a value is dropped.

        Parameters:
        - args (`Iterable[str]`): The command-line tokens without the program name.

        Returns:
        - `Iterator[RawArgument]`, consumed once.
    '''
    key = None
    for arg in args:
        if arg.startswith('-'):
            key = arg[1:]
        elif arg:
            yield RawArgument(key=key, value=arg)
            key = None
        else:
            yield RawArgument(key=None, value=arg)


def str_type_fn(val: str) -> str:
    return val


def bool_type_fn(val: str) -> bool:
    '''
        Convert `true` or `false` (in any case) to a boolean.

        Raises:
        - `ValueError`: If the string is neither of them.
    '''
    normalized = val.strip().lower()
    if normalized == 'true':
        return True
    if normalized == 'false':
        return False
    raise ValueError(f'Not a boolean: {val}')


def datetime_type_fn(val: str) -> datetime:
    '''
        Convert an ISO-8601 string to a datetime, the `Z` suffix stands for UTC.
    '''
    text = val.strip()
    if text.endswith(('Z', 'z')):
        parsed = datetime.fromisoformat(text[:-1])
        if parsed.tzinfo is not None:
            raise ValueError(f'Duplicated time zone: {val}')
        return parsed.replace(tzinfo=timezone.utc)
    return datetime.fromisoformat(text)


def enum_type_fn(val: str, enum_type: Type[Enum]) -> Enum:
    '''
        Convert a string to an enum value.

        The member whose value equals the string after conversion wins,
        otherwise the member whose name equals the string ignoring case.

        Parameters:
        - val (`str`):
            The input string to be converted to an enum value.
        - enum_type (`Type[Enum]`):
            The Enum type to which the string will be converted.

        Returns:
        - `Enum`
            The enum value corresponding to the converted string.

        Raises:
        - `ValueError`:
            If no matching enum value is found for the provided string.
    '''
    for item in enum_type:
        try:
            if type(item.value)(val) == item.value:
                return item
        except (TypeError, ValueError):
            continue
    for item in enum_type:
        if item.name.casefold() == val.casefold():
            return item

    raise ValueError(f'No matching enum value found for the string: {val}')


def _unwrap_optional(dtype):
    origin_type = getattr(dtype, '__origin__', dtype)
    if origin_type is Union or (
        hasattr(types, 'UnionType') and isinstance(dtype, types.UnionType)
    ):
        dtype_generics = list(
            filter(lambda x: x is not type(None), dtype.__args__)
        )
        if len(dtype_generics) > 1:
            raise TypeError(
                "Only `Union[X, NoneType]` (i.e., `Optional[X]`) is allowed for `Union` because"
                " each argument is converted to one type."
            )
        return dtype_generics[0]
    return dtype


def _analysis_type(dtype) -> Tuple[Optional[Callable], FieldKind]:
    if dtype is MISSING:
        return None, FieldKind.Unknown
    dtype = _unwrap_optional(dtype)
    if dtype is str:
        return dtype, FieldKind.String
    if dtype is bool:
        return dtype, FieldKind.Bool
    if dtype is int:
        return dtype, FieldKind.Integer
    if dtype is float:
        return dtype, FieldKind.Float
    if dtype is datetime:
        return dtype, FieldKind.DateTime
    if isinstance(dtype, type) and issubclass(dtype, Enum):
        return dtype, FieldKind.Enum

    return None, FieldKind.Unknown


def convert_value(binding_type: BindingType, val: str) -> Any:
    '''
        Convert the raw string to the declared type of the field.

        Parameters:
        - binding_type (`BindingType`): The field receiving the value.
        - val (`str`): The raw string from the command-line.

        Raises:
        - `TypeConversionError`: If the string could not be converted.
    '''
    kind = binding_type.kind
    try:
        if kind is FieldKind.String:
            return str_type_fn(val)
        if kind is FieldKind.DateTime:
            return datetime_type_fn(val)
        if kind is FieldKind.Integer:
            return int(val, 10)
        if kind is FieldKind.Float:
            return float(val)
        if kind is FieldKind.Bool:
            return bool_type_fn(val)
        if kind is FieldKind.Enum:
            return enum_type_fn(val, binding_type.type)
        return binding_type.type(val)
    except (ArgumentTypeError, TypeError, ValueError, OverflowError) as e:
        raise TypeConversionError(
            binding_type.name, val, binding_type.type_name
        ) from e


def analysis_field(field: Field, hint: Any = None) -> Optional[BindingType]:
    if not field.init:
        return None

    dtype, kind = _analysis_type(hint if hint is not None else field.type)

    if field.metadata.get('type', None):
        if dtype is not None:
            warnings.warn(
                f'The type for "{field.name}" will be occupied with meta.',
                UserWarning
            )
        dtype = field.metadata.get('type')
        kind = FieldKind.Custom

    if kind is FieldKind.Unknown:
        raise TypeError(
            f'The field "{field.name}" is unknown type, you have to specify the type convert function in the meta.'
        )

    default = None
    has_default = False
    if field.default is not MISSING:
        default = field.default
        has_default = True
    elif field.default_factory is not MISSING:
        has_default = True

    return BindingType(
        name=field.name,
        kind=kind,
        type=dtype,
        required=bool(field.metadata.get('required', False)),
        default=default,
        has_default=has_default,
        aliases=field.metadata.get('aliases', None),
        help=field.metadata.get('help', '')
    )


def analysis_dataclass(clz: Type[DataclassType]) -> List[BindingType]:
    '''
        Analysis the init fields of the dataclass into the binding schema, in declaration order.
    '''
    if not (isinstance(clz, type) and is_dataclass(clz)):
        raise TypeError(f'{clz!r} is not a dataclass type.')
    hints = get_type_hints(clz)
    schema: List[BindingType] = []
    for field in fields(clz):
        res = analysis_field(field, hints.get(field.name))
        if res:
            schema.append(res)

    return schema
