from enum import Enum, auto

class Page(Enum):
    HOME = auto()
    SEND = auto()
    RECEIVE = auto()
