import logging

from edtfparser.conf import apply_settings
from edtfparser.parser.detection import detect_level
from edtfparser.parser.level0 import parse_level0
from edtfparser.parser.level1 import parse_level1
from edtfparser.parser.level2 import parse_level2
from edtfparser.types import ParseResult

logger = logging.getLogger(__name__)

LEVEL_PARSERS = {
    0: parse_level0,
    1: parse_level1,
    2: parse_level2,
}


def _check_arguments(date_string, level):
    if not isinstance(date_string, str):
        raise TypeError(
            "Input type must be str, got {}".format(type(date_string).__name__)
        )
    if level is not None and level not in LEVEL_PARSERS:
        raise ValueError("Invalid level: {}. Expected 0, 1, 2 or None".format(level))


def _cascade(value: str, start: int, settings) -> ParseResult:
    if start == 2:
        first = parse_level2(value, settings=settings)
        if first.success:
            return first
        for fallback in (1, 0):
            logger.debug(f"Level 2 parse failed for {value!r}, trying level {fallback}")
            result = LEVEL_PARSERS[fallback](value, settings=settings)
            if result.success:
                return result
        return first

    if start == 1:
        first = parse_level1(value, settings=settings)
        if first.success:
            return first
        if detect_level(value) == 1:
            return first
        logger.debug(f"Level 1 parse failed for {value!r}, trying level 0")
        result = parse_level0(value, settings=settings)
        return result if result.success else first

    return parse_level0(value, settings=settings)


@apply_settings
def parse(date_string, level=None, settings=None) -> ParseResult:
    """Parse an EDTF string into an AST node.

    :param date_string:
        An EDTF string such as ``1985-04-12``, ``198X~``, ``2004-06/2006-08``
        or ``[1667, 1668, 1670..1672]``. Surrounding whitespace is ignored.
    :type date_string: str

    :param level:
        Grammar to start from (0, 1 or 2). When omitted, the level is
        detected. A failed Level 2 parse retries at Levels 1 and 0; a failed
        Level 1 parse retries at Level 0 only when the string shows no
        Level 1 feature.
    :type level: int

    :param settings:
        Configure customized behavior using settings defined in :mod:`edtfparser.conf.Settings`.
    :type settings: dict

    :return: A successful result holding the node and its minimum level, or
        a failed result holding one or more :class:`edtfparser.types.ParseError`.
    :rtype: :class:`edtfparser.types.ParseResult`

    :raises:
        ``TypeError``: the input is not a string, ``ValueError``: unknown level,
        ``SettingValidationError``: A provided setting is not valid.

    Example usage::

        >>> import edtfparser
        >>> result = edtfparser.parse("1985-04~")
        >>> result.success, result.level
        (True, 1)
        >>> result.value.qualification.approximate
        True
        >>> edtfparser.parse("1985-13-01").errors[0].code
        'INVALID_MONTH'
    """
    _check_arguments(date_string, level)
    value = date_string.strip()

    if level is None:
        level = detect_level(value)
        logger.debug(f"Detected level {level} for {value!r}")
    return _cascade(value, level, settings)


@apply_settings
def is_valid(date_string, level=None, settings=None) -> bool:
    """Whether ``date_string`` parses, at ``level`` if given."""
    return parse(date_string, level=level, settings=settings).success
