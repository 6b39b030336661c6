from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Any


class InputType(Enum):
    KEY_PRESS = auto()
    QUIT = auto()


class Key(Enum):
    ENTER = auto()
    SPACE = auto()
    ESCAPE = auto()
    TAB = auto()

    A = auto()
    B = auto()
    C = auto()
    D = auto()
    E = auto()
    F = auto()
    G = auto()
    H = auto()
    I = auto()  # noqa: E741
    J = auto()
    K = auto()
    L = auto()
    M = auto()
    N = auto()
    O = auto()  # noqa: E741
    P = auto()
    Q = auto()
    R = auto()
    S = auto()
    T = auto()
    U = auto()
    V = auto()
    W = auto()
    X = auto()
    Y = auto()
    Z = auto()

    NUM_0 = auto()
    NUM_1 = auto()
    NUM_2 = auto()
    NUM_3 = auto()
    NUM_4 = auto()
    NUM_5 = auto()
    NUM_6 = auto()
    NUM_7 = auto()
    NUM_8 = auto()
    NUM_9 = auto()

    UNKNOWN = auto()

    @classmethod
    def from_char(cls, char: str) -> "Key":
        """Map a single typed character to a Key."""
        if char in ('\r', '\n'):
            return cls.ENTER
        if char == ' ':
            return cls.SPACE
        if char == '\t':
            return cls.TAB
        if char == '\x1b':
            return cls.ESCAPE
        if len(char) == 1 and char in "0123456789":
            return getattr(cls, f"NUM_{char}")
        if len(char) == 1 and char.isascii() and char.isalpha():
            return getattr(cls, char.upper(), cls.UNKNOWN)
        return cls.UNKNOWN


@dataclass
class InputEvent:
    event_type: InputType
    key: Optional[Key] = None
    raw_data: Optional[Any] = None

    @classmethod
    def quit_event(cls) -> "InputEvent":
        return cls(event_type=InputType.QUIT)

    @classmethod
    def key_press(cls, key: Key, raw_data: Optional[Any] = None) -> "InputEvent":
        return cls(
            event_type=InputType.KEY_PRESS,
            key=key,
            raw_data=raw_data
        )

    @classmethod
    def from_char(cls, char: str) -> "InputEvent":
        return cls.key_press(Key.from_char(char), raw_data=char)
