'''
errors raised when the command-line arguments could not be bound to the dataclass.
'''
from typing import Sequence


class BindingError(ValueError):
    '''
        Base error for all the failures while binding the command-line arguments.

        Every binding error is terminal: the parse is aborted and no partial
        dataclass is returned. The message is meant to be shown to the user.
    '''

    def __init__(self, message: str) -> None:
        super(BindingError, self).__init__(message)
        self.message = message


class UnrecognizedArgumentError(BindingError):
    '''The key of a named argument matches no field.'''

    def __init__(self, key: str) -> None:
        super(UnrecognizedArgumentError,
              self).__init__(f'Unrecognised argument: {key}')
        self.key = key


class AmbiguousArgumentError(BindingError):
    '''The key of a named argument is a prefix of more than one field.'''

    def __init__(self, key: str, candidates: Sequence[str] = ()) -> None:
        super(AmbiguousArgumentError, self).__init__(
            f'Multiple arguments matched with {key}. Consider adding more of '
            'the argument name so that it matches just one argument.'
        )
        self.key = key
        self.candidates = tuple(candidates)


class MissingPositionalSlotError(BindingError):
    '''More unnamed arguments are given than the fields to receive them.'''

    def __init__(self, value: str, position: int) -> None:
        super(MissingPositionalSlotError,
              self).__init__(f'No positional argument found for {value}.')
        self.value = value
        self.position = position


class RequiredArgumentMissingError(BindingError):
    '''A required field never received a value.'''

    def __init__(self, name: str) -> None:
        super(RequiredArgumentMissingError, self).__init__(
            f'Value for required argument {name} has not been supplied.'
        )
        self.name = name


class TypeConversionError(BindingError):
    '''The raw string could not be converted to the declared type of the field.'''

    def __init__(self, name: str, value: str, type_name: str) -> None:
        message = f'Invalid value {value!r} for argument {name}: expected {type_name}.'
        super(TypeConversionError, self).__init__(message)
        self.name = name
        self.value = value
        self.type_name = type_name
