'''
defined the data classes to describe the binding schema and the raw arguments.
'''
from collections import OrderedDict
from dataclasses import MISSING, dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, TypeVar

DataclassType = TypeVar('DataclassType')
_ActualDType = TypeVar('_ActualDType')


class FieldKind(Enum):
    '''
        Enum representing the kinds of dataclass fields that could be bound.

        The kind decides which conversion method is used to turn the raw
        command-line string into the final field value.

        Kinds:
        - String: `str`, the value is kept unchanged.
        - DateTime: `datetime.datetime`, parsed as ISO-8601.
        - Integer: `int`.
        - Float: `float`.
        - Bool: `bool`, accepts `true` or `false`.
        - Enum: subclasses of `enum.Enum`.
        - Custom: any type converted by the function given in the field meta.
        - Unknown: unsupported type without a convert function.
    '''
    String = 'string'
    DateTime = 'datetime'
    Integer = 'integer'
    Float = 'float'
    Bool = 'bool'
    Enum = 'enum'
    Custom = 'custom'
    Unknown = 'unknown'

    @staticmethod
    def zero_value(kind: 'FieldKind') -> Any:
        if kind is FieldKind.String:
            return ''
        if kind is FieldKind.Integer:
            return 0
        if kind is FieldKind.Float:
            return 0.0
        if kind is FieldKind.Bool:
            return False
        return None


@dataclass
class BindingType:
    '''
        The binding type describes one field of the target dataclass.

        Attributes:
        - name (str):
            The name of the dataclass field.
        - kind (FieldKind, optional):
            The kind used to select the conversion method.
        - type (Optional[Callable], optional):
            The declared type, or the convert function for `Custom` fields.
        - required (bool, optional):
            Indicates whether the field must receive a value.
        - default (Optional[_ActualDType], optional):
            Default value of the field, only meaningful when `has_default`.
        - has_default (bool, optional):
            Whether the dataclass declares a default or a default factory.
        - aliases (Optional[List[str]], optional):
            Alternative names which are also matched by prefix.
        - help (str, optional):
            Help text for the field, kept for the caller.
    '''
    name: str
    kind: FieldKind = FieldKind.String
    type: Optional[Callable] = None
    required: bool = False
    default: Optional[_ActualDType] = None
    has_default: bool = False
    aliases: Optional[List[str]] = None
    help: str = ''

    @property
    def names(self) -> List[str]:
        names = [self.name]
        if self.aliases is not None:
            names.extend(a for a in self.aliases if a not in names)
        return names

    def matches(self, key: str) -> bool:
        '''
            Check whether the key is a case-insensitive prefix of the field name or any alias.

            Dashes in the key are read as underscores, so `output-dir` reaches `output_dir`.
        '''
        prefix = key.replace('-', '_').casefold()
        return any(
            name.replace('-', '_').casefold().startswith(prefix)
            for name in self.names
        )

    @property
    def type_name(self) -> str:
        return getattr(self.type, '__name__', str(self.type))


@dataclass(frozen=True)
class RawArgument:
    '''
        One value read from the command-line, with the key given before it if any.
    '''
    key: Optional[str]
    value: str

    @property
    def has_key(self) -> bool:
        return self.key is not None and self.key.strip() != ''


class BindingResult(OrderedDict):
    '''
        Mapping from the field name to the raw argument bound to it, in binding order.
    '''

    def __init__(self) -> None:
        super(BindingResult, self).__init__()
        self.keyed = set()

    def bind(self, field: BindingType, argument: RawArgument):
        self[field.name] = argument
        if argument.has_key:
            self.keyed.add(field.name)
        else:
            self.keyed.discard(field.name)


def BindingField(
    default: Optional[Any] = MISSING,
    default_factory: Optional[Callable] = MISSING,
    type: Optional[Callable] = None,
    required: bool = False,
    aliases: Optional[List[str]] = None,
    help: Optional[str] = None
):
    '''
        Create a dataclass field with additional binding information.

        Note: The priority in the metadata is higher than inference based on the type hint.

        Parameters:
        - default (`Optional[Any]`, optional):
            Default value for the field. Defaults to MISSING.
        - default_factory (`Optional[Callable]`, optional):
            Default factory for the field. Defaults to MISSING.
        - type (`Optional[Callable]`, optional):
            Type conversion function for the field. Use type hint if this is not provided.
        - required (`bool`, optional):
            Indicates whether the field must be supplied. Defaults to False.
        - aliases (`Optional[List[str]]`, optional):
            List of alternative names for the field.
        - help (`Optional[str]`, optional):
            Help text for the field.

        Returns:
        - `dataclasses.Field`:
            A dataclass field with the specified metadata.
    '''
    meta_info = {}
    if type is not None:
        meta_info['type'] = type
    meta_info['required'] = required

    if help is not None:
        meta_info['help'] = help
    if aliases is not None:
        meta_info['aliases'] = aliases

    if default is not MISSING:
        return field(default=default, metadata=meta_info)
    elif default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=meta_info)
    else:
        return field(metadata=meta_info)
