"""
Response code classification used by error_page.
"""

from dataclasses import dataclass

from .const import REDIRECT_CODES
from .errors import ErrorKind, ParseError
from .tokenizer import Pos


@dataclass(frozen=True)
class Code:
    """A status code, either a redirect or a normal one."""

    code: int

    @property
    def is_redirect(self) -> bool:
        return isinstance(self, Redirect)

    def as_code(self) -> int:
        return self.code

    @staticmethod
    def parse(text: str, pos: Pos | None = None) -> "Code":
        """
        Classify a literal status code string.

        Args:
            text: Code text, without any leading `=`
            pos: Position reported if the text is not a valid code

        Returns:
            Redirect for 301, 302, 303, 307 and 308, Normal for the rest of 200-599

        Raises:
            ParseError: If the text is not a number in the accepted range
        """
        if not text.isascii() or not text.isdigit():
            raise ParseError(ErrorKind.INVALID_RESPONSE_CODE, pos, code=text)

        digits = text.lstrip("0") or "0"
        if len(digits) > 3:
            raise ParseError(ErrorKind.INVALID_RESPONSE_CODE, pos, code=text)

        code = int(digits)
        if code in REDIRECT_CODES:
            return Redirect(code)
        if 200 <= code <= 599:
            return Normal(code)
        raise ParseError(ErrorKind.INVALID_RESPONSE_CODE, pos, code=text)


@dataclass(frozen=True)
class Redirect(Code):
    pass


@dataclass(frozen=True)
class Normal(Code):
    pass
