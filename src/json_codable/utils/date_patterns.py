"""Translation of Unicode date patterns (``MM-dd-yyyy``) to strptime directives."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Tuple


@dataclass(frozen=True)
class PatternToken:
    """One piece of a compiled pattern: a literal or a date field."""
    directive: str
    render: Callable[[datetime], str]


def _literal(text: str) -> PatternToken:
    return PatternToken(text.replace("%", "%%"), lambda moment: text)


def _padded(attr: str, width: int) -> Callable[[datetime], str]:
    return lambda moment: f"{getattr(moment, attr):0{width}d}"


def _hour12(width: int) -> Callable[[datetime], str]:
    return lambda moment: f"{(moment.hour % 12) or 12:0{width}d}"


def _year(count: int) -> Tuple[str, Callable[[datetime], str]]:
    if count == 2:
        return "%y", lambda moment: f"{moment.year % 100:02d}"
    return "%Y", lambda moment: f"{moment.year:0{count}d}"


def _fraction(count: int) -> Tuple[str, Callable[[datetime], str]]:
    return "%f", lambda moment: f"{moment.microsecond:06d}"[:count].ljust(count, "0")


def _offset(colon: bool, zulu: bool) -> Callable[[datetime], str]:
    def render(moment: datetime) -> str:
        offset = moment.strftime("%z")
        if not offset:
            return ""
        if zulu and offset == "+0000":
            return "Z"
        return f"{offset[:3]}:{offset[3:]}" if colon else offset
    return render


def _field(letter: str, count: int) -> PatternToken:
    if letter == "y":
        return PatternToken(*_year(count))
    if letter in ("M", "L"):
        if count >= 4:
            return PatternToken("%B", lambda moment: moment.strftime("%B"))
        if count == 3:
            return PatternToken("%b", lambda moment: moment.strftime("%b"))
        return PatternToken("%m", _padded("month", count))
    if letter == "d" and count <= 2:
        return PatternToken("%d", _padded("day", count))
    if letter == "D" and count <= 3:
        return PatternToken("%j", lambda moment: f"{moment.timetuple().tm_yday:0{count}d}")
    if letter == "E":
        if count >= 4:
            return PatternToken("%A", lambda moment: moment.strftime("%A"))
        return PatternToken("%a", lambda moment: moment.strftime("%a"))
    if letter == "a":
        return PatternToken("%p", lambda moment: moment.strftime("%p"))
    if letter == "H" and count <= 2:
        return PatternToken("%H", _padded("hour", count))
    if letter == "h" and count <= 2:
        return PatternToken("%I", _hour12(count))
    if letter == "m" and count <= 2:
        return PatternToken("%M", _padded("minute", count))
    if letter == "s" and count <= 2:
        return PatternToken("%S", _padded("second", count))
    if letter == "S":
        return PatternToken(*_fraction(count))
    if letter == "Z":
        return PatternToken("%z", _offset(colon=count >= 5, zulu=count >= 5))
    if letter in ("X", "x"):
        return PatternToken("%z", _offset(colon=count in (3, 5), zulu=letter == "X"))
    raise ValueError(f"Unsupported date pattern field: {letter * count!r}")


@dataclass(frozen=True)
class CompiledPattern:
    """A date pattern usable for both parsing and formatting."""
    pattern: str
    tokens: Tuple[PatternToken, ...]

    @property
    def strptime_pattern(self) -> str:
        return "".join(token.directive for token in self.tokens)

    @property
    def has_offset(self) -> bool:
        return "%z" in self.strptime_pattern.replace("%%", "")

    def parse(self, text: str) -> datetime:
        """Parse ``text``; raises ValueError when it does not match."""
        return datetime.strptime(text, self.strptime_pattern)

    def format(self, moment: datetime) -> str:
        return "".join(token.render(moment) for token in self.tokens)


def compile_pattern(pattern: str) -> CompiledPattern:
    """
    Compile a Unicode date pattern.

    Letters are date fields (``yyyy``, ``MM``, ``dd``, ``EEEE``, ``HH`` ...),
    text inside single quotes is literal and ``''`` is a literal quote. A
    pattern that already contains ``%`` is taken as a strftime pattern.

    Args:
        pattern: Pattern such as ``"MM-dd-yyyy"`` or ``"EEEE, MMM d, yyyy"``

    Returns:
        CompiledPattern for the pattern

    Raises:
        ValueError: If the pattern uses a field letter with no strptime equivalent
    """
    if "%" in pattern:
        return CompiledPattern(pattern, (PatternToken(pattern, lambda moment: moment.strftime(pattern)),))

    tokens: List[PatternToken] = []
    literal: List[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "'":
            if pattern[i + 1:i + 2] == "'":
                literal.append("'")
                i += 2
                continue
            start = i + 1
            while True:
                end = pattern.find("'", start)
                if end == -1:
                    raise ValueError(f"Unterminated quote in date pattern {pattern!r}")
                literal.append(pattern[start:end])
                if pattern[end + 1:end + 2] != "'":
                    break
                literal.append("'")
                start = end + 2
            i = end + 1
        elif char.isascii() and char.isalpha():
            count = 1
            while i + count < len(pattern) and pattern[i + count] == char:
                count += 1
            if literal:
                tokens.append(_literal("".join(literal)))
                literal = []
            tokens.append(_field(char, count))
            i += count
        else:
            literal.append(char)
            i += 1
    if literal:
        tokens.append(_literal("".join(literal)))
    return CompiledPattern(pattern, tuple(tokens))
