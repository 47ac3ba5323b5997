'''
A parser to bind the command-line arguments to the fields of a dataclass by name prefix and position.
'''
import os
import sys
import warnings
from typing import Dict, Iterable, List, Optional, Sequence, Type

from .exceptions import (
    AmbiguousArgumentError,
    BindingError,
    MissingPositionalSlotError,
    RequiredArgumentMissingError,
    UnrecognizedArgumentError,
)
from .types import BindingResult, BindingType, DataclassType, FieldKind, RawArgument
from .utils import analysis_dataclass, build_arg_list, convert_value


class BindingParser:
    '''
        A command-line argument parser designed to bind arguments to a specified data class.
        The parser analyzes the fields of the data class once, then every call of
        `parse_into_dataclass` matches the arguments to the fields:

        - `-key value` binds the only field whose name starts with `key`, ignoring case.
        - values without a key bind the fields in declaration order.
        - fields marked required must receive a value.

        Parameters:
        - clz (`type`): The type of the data class to which the parsed arguments will be bound.
        - prog (`Optional[str]`, optional): The program name used in error messages.
        - exit_on_error (`bool`, optional): Print the error and exit with status 2 instead of raising.

        Example:
        ```python
        from dataclasses import dataclass

        from prefix_binding import BindingParser, Field

        @dataclass
        class MyDataClass:
            name: str = Field(required=True)
            age: int = 0

        parser = BindingParser(MyDataClass)

        # `-na alice -a 30` and `alice 30` give the same result
        args = parser.parse_into_dataclass(['-na', 'alice', '-a', '30'])

        print(args.name, args.age)
        ```
    '''

    def __init__(
        self,
        clz: Type[DataclassType],
        prog: Optional[str] = None,
        exit_on_error: bool = False
    ) -> None:
        self._dataclass = clz
        self._schema: List[BindingType] = analysis_dataclass(clz)
        if prog is None:
            prog = os.path.basename(sys.argv[0]) if sys.argv else None
        self.prog = prog
        self.exit_on_error = exit_on_error

    @property
    def schema(self) -> Sequence[BindingType]:
        return tuple(self._schema)

    def _match_field(self, argument: RawArgument) -> BindingType:
        matching = [f for f in self._schema if f.matches(argument.key)]

        if len(matching) == 0:
            raise UnrecognizedArgumentError(argument.key)
        if len(matching) > 1:
            raise AmbiguousArgumentError(
                argument.key, [f.name for f in matching]
            )

        return matching[0]

    def bind_arguments(self, args: Iterable[str]) -> BindingResult:
        '''
            Bind the raw command-line tokens to the fields of the schema.

            Named arguments are bound first, in input order. The unnamed ones are
            then bound by index into the whole schema, so the i-th unnamed value
            goes to the i-th field even when that field was already named.

            Parameters:
            - args (`Iterable[str]`): The command-line tokens.

            Returns:
            - `BindingResult`: The raw argument bound to each field name.

            Raises:
            - `UnrecognizedArgumentError`, `AmbiguousArgumentError`,
              `MissingPositionalSlotError`, `RequiredArgumentMissingError`.
        '''
        result = BindingResult()
        args_without_keys: List[RawArgument] = []

        for argument in build_arg_list(args):
            if not argument.has_key:
                args_without_keys.append(argument)
                continue
            field = self._match_field(argument)
            if field.name in result.keyed:
                warnings.warn(
                    f'The argument "{field.name}" is given more than once, '
                    f'the value {argument.value!r} is used.', UserWarning
                )
            result.bind(field, argument)

        for i, argument in enumerate(args_without_keys):
            if i >= len(self._schema):
                raise MissingPositionalSlotError(argument.value, i)
            field = self._schema[i]
            if field.name in result.keyed:
                warnings.warn(
                    f'The positional value {argument.value!r} overrides the '
                    f'named argument "{field.name}".', UserWarning
                )
            result.bind(field, argument)

        for field in self._schema:
            if field.name not in result and field.required:
                raise RequiredArgumentMissingError(field.name)

        return result

    def _init_dataclass_with_args(self, result: BindingResult) -> DataclassType:
        init_kwargs: Dict = {}
        for field in self._schema:
            if field.name in result:
                init_kwargs[field.name] = convert_value(
                    field, result[field.name].value
                )
            elif not field.has_default:
                init_kwargs[field.name] = FieldKind.zero_value(field.kind)

        return self._dataclass(**init_kwargs)

    def parse_into_dataclass(
        self, args: Optional[Sequence[str]] = None
    ) -> DataclassType:
        '''
            Parse command-line arguments into an initialized dataclass instance.

            Parameters:
            - args (`Optional[Sequence[str]]`, optional):
                Command-line arguments to be parsed. If not provided, `sys.argv[1:]` is used.

            Returns:
            - `DataclassType`: The dataclass with every bound value converted.

            Raises:
            - `BindingError` when the arguments could not be bound, unless `exit_on_error` is set.
        '''
        if args is None:
            args = sys.argv[1:]
        try:
            result = self.bind_arguments(args)
            return self._init_dataclass_with_args(result)
        except BindingError as e:
            if not self.exit_on_error:
                raise
            self.error(e.message)

    def error(self, message: str):
        '''
            Print the message to stderr and exit with status 2, as `argparse` does.
        '''
        prefix = f'{self.prog}: ' if self.prog else ''
        sys.stderr.write(f'{prefix}error: {message}\n')
        sys.exit(2)


def parse_args(
    clz: Type[DataclassType],
    args: Optional[Sequence[str]] = None,
    **kwargs
) -> DataclassType:
    '''
        Bind the command-line arguments to a new instance of the dataclass.

        The keyword arguments are passed to `BindingParser`.
    '''
    parser = BindingParser(clz, **kwargs)
    return parser.parse_into_dataclass(args)
