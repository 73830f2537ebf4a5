
class SproutError(Exception):
    """ Base class for all Sprout errors"""
    pass


class SproutSyntaxError(SproutError):
    """ Raised when source text cannot be parsed"""

    def __init__(self, msg: str, pos: int = 0, line: int = 1, col: int = 1,
                 expected: tuple[str, ...] = ()):
        super().__init__(f"{line}:{col}: {msg}")
        self.pos = pos
        self.line = line
        self.col = col
        self.expected = expected


class SproutIntegerLiteralError(SproutSyntaxError):
    """ Raised when an integer literal does not fit in 64 unsigned bits"""


class SproutUnboundSymbol(SproutError):
    """ Raised when a variable is used before it is defined"""


class SproutTypeError(SproutError):
    """ Raised when a value that is not a function is called"""


class SproutArityError(SproutError):
    """ Raised by host natives when they receive the wrong number of arguments"""
