import logging
import math
import re
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

# Plain ASCII decimal notation only: sign, digits, optional fraction, optional exponent.
# Python-only spellings such as "inf", "nan", "1_000" or non-ASCII digits are rejected.
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class InvalidInputError(ValueError):
    def __init__(self, token: str, position: int) -> None:
        super().__init__(f"Invalid input data: token #{position} {token!r} is not a number")
        self.token = token
        self.position = position


def parse_token(token: str, position: int = 0) -> float:
    if not _NUMBER_RE.fullmatch(token):
        raise InvalidInputError(token, position)
    value = float(token)
    # out of double range, e.g. 1e400
    if math.isinf(value):
        raise InvalidInputError(token, position)
    return value


class ValueReader:
    """
    Splits a text stream into whitespace separated tokens and yields them as
    floats. Stops at end of stream; raises InvalidInputError on the first
    token that is not a number (or on bytes that do not decode), so values
    before it have already been yielded.
    """

    def values(self, lines: Iterable[str]) -> Iterator[float]:
        position = 0
        it = iter(lines)
        while True:
            try:
                line = next(it)
            except StopIteration:
                break
            except UnicodeDecodeError as e:
                raise InvalidInputError(repr(e.object[e.start:e.end]), position + 1) from e
            for token in line.split():
                position += 1
                yield parse_token(token, position)
        logger.debug("Reached end of input after %d tokens", position)
