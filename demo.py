from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from prefix_binding import BindingParser, Field


class Protocol(Enum):
    PPTP = 'pptp'
    L2TP = 'l2tp'
    SSTP = 'sstp'


@dataclass
class DialOptions:

    entry_name: str = Field(required=True, help='The phonebook entry to dial.')
    user_name: str = Field(aliases=['login'])
    password: Optional[str] = None
    protocol: Protocol = Protocol.SSTP
    retries: int = 3
    expires: Optional[datetime] = None


if __name__ == '__main__':
    parser = BindingParser(DialOptions, exit_on_error=True)

    # e.g. `python demo.py "Office VPN" -login alice -prot l2tp`
    options = parser.parse_into_dataclass()

    print(options)
