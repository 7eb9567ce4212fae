"""Structural checks on the ``type`` discriminant of AST nodes."""

from edtfparser.types import EDTFType


def _has_type(value, edtf_type: EDTFType) -> bool:
    return getattr(value, "type", None) is edtf_type


def is_date(value) -> bool:
    return _has_type(value, EDTFType.DATE)


def is_date_time(value) -> bool:
    return _has_type(value, EDTFType.DATE_TIME)


def is_interval(value) -> bool:
    return _has_type(value, EDTFType.INTERVAL)


def is_season(value) -> bool:
    return _has_type(value, EDTFType.SEASON)


def is_set(value) -> bool:
    return _has_type(value, EDTFType.SET)


def is_list(value) -> bool:
    return _has_type(value, EDTFType.LIST)
