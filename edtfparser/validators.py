"""Predicates over parsed values: range membership and qualification checks."""

from edtfparser.types import EDTFType

_INFINITY = float("inf")


def _span(node):
    low, high = node.min_ms, node.max_ms
    return (-_INFINITY if low is None else low, _INFINITY if high is None else high)


def is_in_range(node, start, end) -> bool:
    """Whether ``node`` shares any instant with the span from ``start`` to ``end``."""
    low, high = _span(node)
    return low <= _span(end)[1] and high >= _span(start)[0]


def is_completely_in_range(node, start, end) -> bool:
    """Whether all of ``node`` lies between the start of ``start`` and the end of ``end``."""
    low, high = _span(node)
    return low >= _span(start)[0] and high <= _span(end)[1]


def _qualifications(node):
    if node is None:
        return
    if node.type is EDTFType.DATE:
        yield node.qualification
        yield from node.component_qualifications
    elif node.type in (EDTFType.SEASON, EDTFType.INTERVAL):
        yield node.qualification
    if node.type is EDTFType.INTERVAL:
        yield from _qualifications(node.start)
        yield from _qualifications(node.end)
    elif node.type in (EDTFType.SET, EDTFType.LIST):
        for value in node.values:
            yield from _qualifications(value)


def is_uncertain(node) -> bool:
    """True if the value, any component or any nested value is marked ``?`` or ``%``."""
    return any(q is not None and q.is_uncertain for q in _qualifications(node))


def is_approximate(node) -> bool:
    """True if the value, any component or any nested value is marked ``~`` or ``%``."""
    return any(q is not None and q.is_approximate for q in _qualifications(node))


def has_unspecified(node) -> bool:
    """True if the value or any nested value carries ``X`` digits."""
    if node is None:
        return False
    if node.type is EDTFType.DATE:
        return node.unspecified is not None
    if node.type is EDTFType.INTERVAL:
        return has_unspecified(node.start) or has_unspecified(node.end)
    if node.type in (EDTFType.SET, EDTFType.LIST):
        return any(has_unspecified(value) for value in node.values)
    return False
