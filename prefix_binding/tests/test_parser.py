from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

import pytest

from ..exceptions import (
    AmbiguousArgumentError,
    BindingError,
    MissingPositionalSlotError,
    RequiredArgumentMissingError,
    TypeConversionError,
    UnrecognizedArgumentError,
)
from ..parser import BindingParser, parse_args
from ..types import BindingField


class Protocol(Enum):
    PPTP = 'pptp'
    L2TP = 'l2tp'
    SSTP = 'sstp'


@dataclass
class DialArguments:
    entry_name: str = BindingField(required=True, help='The phonebook entry.')
    user_name: str = BindingField(aliases=['login'])
    password: Optional[str] = None
    retries: int = 3
    timeout: float = 30.0
    protocol: Protocol = Protocol.SSTP
    save_password: bool = False
    expires: Optional[datetime] = None


@dataclass
class NameArguments:
    name: str
    namespace: str = 'default'


@dataclass
class PersonArguments:
    name: str
    age: int


def test_bind_by_prefix():
    parser = BindingParser(DialArguments)

    args = parser.parse_into_dataclass(
        [
            '-entry', 'Office VPN', '-us', 'alice', '-pass', 'secret', '-r',
            '5', '-t', '2.5', '-PROTO', 'l2tp', '-sa', 'true', '-exp',
            '2024-01-01T00:00:00Z'
        ]
    )

    assert args.entry_name == 'Office VPN'
    assert args.user_name == 'alice'
    assert args.password == 'secret'
    assert args.retries == 5
    assert args.timeout == 2.5
    assert args.protocol is Protocol.L2TP
    assert args.save_password is True
    assert args.expires == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_bound_value_is_raw():
    parser = BindingParser(DialArguments)

    result = parser.bind_arguments(['-en', 'home', '-re', '007'])

    assert result['entry_name'].value == 'home'
    assert result['retries'].value == '007'
    assert list(result) == ['entry_name', 'retries']


def test_defaults():
    args = parse_args(DialArguments, ['-en', 'home'])

    assert args.user_name == ''
    assert args.password is None
    assert args.retries == 3
    assert args.protocol is Protocol.SSTP
    assert args.expires is None


def test_alias_and_dashes():

    @dataclass
    class OutputArguments:
        output_dir: str = './output'

    args = parse_args(DialArguments, ['-en', 'home', '-login', 'bob'])
    assert args.user_name == 'bob'

    args = parse_args(OutputArguments, ['-output-d', 'checkpoints'])
    assert args.output_dir == 'checkpoints'


def test_ambiguous_argument():
    parser = BindingParser(NameArguments)

    with pytest.raises(AmbiguousArgumentError) as exc_info:
        parser.parse_into_dataclass(['-Nam', 'value'])

    assert 'Nam' in str(exc_info.value)
    assert exc_info.value.candidates == ('name', 'namespace')

    # the full name is still a prefix of the longer one
    with pytest.raises(AmbiguousArgumentError):
        parser.parse_into_dataclass(['-name', 'value'])

    args = parser.parse_into_dataclass(['-names', 'kube', 'value'])
    assert args.namespace == 'kube'
    assert args.name == 'value'


def test_unrecognized_argument():
    parser = BindingParser(NameArguments)

    with pytest.raises(UnrecognizedArgumentError) as exc_info:
        parser.parse_into_dataclass(['-Foo', 'value'])

    assert exc_info.value.key == 'Foo'
    assert str(exc_info.value) == 'Unrecognised argument: Foo'


def test_positional_arguments():
    args = parse_args(PersonArguments, ['alice', '30'])

    assert args.name == 'alice'
    assert args.age == 30


def test_too_many_positional_arguments():
    with pytest.raises(MissingPositionalSlotError) as exc_info:
        parse_args(PersonArguments, ['alice', '30', 'extra'])

    assert exc_info.value.value == 'extra'
    assert exc_info.value.position == 2


def test_positional_overrides_named_argument():
    parser = BindingParser(PersonArguments)

    with pytest.warns(UserWarning):
        args = parser.parse_into_dataclass(['-name', 'bob', 'alice'])

    assert args.name == 'alice'
    assert args.age == 0


def test_named_argument_given_twice():
    with pytest.warns(UserWarning):
        args = parse_args(PersonArguments, ['-a', '1', '-age', '2'])

    assert args.age == 2


def test_required_argument_missing():
    with pytest.raises(RequiredArgumentMissingError) as exc_info:
        parse_args(DialArguments, ['-user', 'alice'])

    assert exc_info.value.name == 'entry_name'
    assert 'entry_name' in str(exc_info.value)


def test_empty_placeholder():
    # the empty token takes the first slot and still counts as supplied
    args = parse_args(DialArguments, ['', 'alice'])

    assert args.entry_name == ''
    assert args.user_name == 'alice'

    with pytest.raises(TypeConversionError):
        parse_args(PersonArguments, ['alice', ''])


def test_type_conversion_error():
    parser = BindingParser(DialArguments)

    with pytest.raises(TypeConversionError) as exc_info:
        parser.parse_into_dataclass(['-en', 'home', '-exp', 'not-a-date'])
    assert exc_info.value.name == 'expires'

    with pytest.raises(TypeConversionError):
        parser.parse_into_dataclass(['-en', 'home', '-prot', 'ipsec'])

    with pytest.raises(TypeConversionError):
        parser.parse_into_dataclass(['-en', 'home', '-save', 'maybe'])


def test_custom_type():

    @dataclass
    class ListArguments:
        names: List[str] = BindingField(
            default_factory=list, type=lambda x: x.split(',')
        )

    args = parse_args(ListArguments, ['-n', 'a,b,c'])
    assert args.names == ['a', 'b', 'c']

    args = parse_args(ListArguments, [])
    assert args.names == []


def test_init_false_field():

    @dataclass
    class Arguments:
        name: str
        created: datetime = field(default=None, init=False)

    with pytest.raises(UnrecognizedArgumentError):
        parse_args(Arguments, ['-c', 'x'])


def test_idempotence():
    parser = BindingParser(DialArguments)
    arg_strs = ['home', '-us', 'alice', '-retries', '4']

    first = parser.parse_into_dataclass(arg_strs)
    second = parser.parse_into_dataclass(arg_strs)

    assert first == second
    assert first is not second
    assert parser.bind_arguments(arg_strs) == parser.bind_arguments(arg_strs)


def test_default_args_from_sys_argv(monkeypatch):
    monkeypatch.setattr('sys.argv', ['prog', 'alice', '30'])

    args = BindingParser(PersonArguments).parse_into_dataclass()

    assert args == PersonArguments(name='alice', age=30)


def test_exit_on_error(capsys):
    parser = BindingParser(NameArguments, prog='dial', exit_on_error=True)

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_into_dataclass(['-x', 'y'])

    assert exc_info.value.code == 2
    assert capsys.readouterr().err == 'dial: error: Unrecognised argument: x\n'


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_args(NameArguments, ['-x', 'y'])
    assert issubclass(TypeConversionError, BindingError)


def test_not_a_dataclass():
    with pytest.raises(TypeError):
        BindingParser(dict)
