from functools import wraps

from edtfparser.seasons import DEFAULT_SEASON_MAPPINGS

default_settings = {
    "MAX_RANGE_EXPANSION": 10000,
    "DEFAULT_QUANTIFIER": "ANY",
    "SEASON_MAPPINGS": DEFAULT_SEASON_MAPPINGS,
    "CLAMP_OUT_OF_RANGE": True,
    "FLATTEN_SETS": True,
    "MIN_DB_MS": -8640000000000000,
    "MAX_DB_MS": 8640000000000000,
}


class Settings:
    """Control and configure default behavior of edtfparser.

    Currently, supported settings are:

    * `MAX_RANGE_EXPANSION`: largest number of members a single ``a..b``
      range inside a set or list may expand to.
    * `DEFAULT_QUANTIFIER`: quantifier (``ANY`` or ``ALL``) used by the
      EDTF-level relation helpers when none is given.
    * `SEASON_MAPPINGS`: season code to ``(start_month, end_month)`` table
      used during normalization. Codes an override leaves out keep their
      default span.
    * `CLAMP_OUT_OF_RANGE`, `MIN_DB_MS`, `MAX_DB_MS`: clamping of database
      columns to a storable millisecond range.
    * `FLATTEN_SETS`: store sets and lists as their convex hull.
    """

    _default = True
    _mod_settings = dict()

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for k, v in kwds.items():
            if v is None:
                raise TypeError('Invalid {{"{}": {}}}'.format(k, v))

        if isinstance(kwds.get("SEASON_MAPPINGS"), dict):
            # codes missing from the override keep their ISO month spans
            kwds["SEASON_MAPPINGS"] = {**DEFAULT_SEASON_MAPPINGS, **kwds["SEASON_MAPPINGS"]}

        for x in default_settings.keys():
            kwds.setdefault(x, getattr(self, x))

        kwds["_default"] = False
        if mod_settings:
            kwds["_mod_settings"] = mod_settings

        return self.__class__(settings=kwds)


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")
        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )
            check_settings(kwargs["settings"])

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


class SettingValidationError(ValueError):
    pass


def _check_positive(setting_name, setting_value):
    if setting_value < 1:
        raise SettingValidationError(
            '"{}" must be a positive integer, not {}.'.format(setting_name, setting_value)
        )


def _check_season_mappings(setting_name, setting_value):
    for code, span in setting_value.items():
        if not isinstance(code, int) or not isinstance(span, tuple) or len(span) != 2:
            raise SettingValidationError(
                '"{}" entries must map an int code to a (start_month, end_month) tuple, '
                'got {!r}: {!r}.'.format(setting_name, code, span)
            )
        if not all(isinstance(month, int) and 1 <= month <= 12 for month in span):
            raise SettingValidationError(
                '"{}" months must be between 1 and 12, got {!r} for code {}.'.format(
                    setting_name, span, code
                )
            )


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "MAX_RANGE_EXPANSION": {
            "type": int,
            "extra_check": _check_positive,
        },
        "DEFAULT_QUANTIFIER": {
            "values": ("ANY", "ALL"),
            "type": str,
        },
        "SEASON_MAPPINGS": {
            "type": dict,
            "extra_check": _check_season_mappings,
        },
        "CLAMP_OUT_OF_RANGE": {
            "type": bool,
        },
        "FLATTEN_SETS": {
            "type": bool,
        },
        "MIN_DB_MS": {
            "type": int,
        },
        "MAX_DB_MS": {
            "type": int,
        },
    }

    modified_settings = settings._mod_settings  # check only modified settings

    # check settings keys:
    for setting in modified_settings:
        if setting not in settings_values:
            raise SettingValidationError('"{}" is not a valid setting'.format(setting))

    for setting_name, setting_value in modified_settings.items():
        setting_type = type(setting_value)
        setting_props = settings_values[setting_name]

        # check type:
        if not setting_type == setting_props["type"]:
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_props["type"].__name__, setting_type.__name__
                )
            )

        # check values:
        if setting_props.get("values") and setting_value not in setting_props["values"]:
            raise SettingValidationError(
                '"{}" is not a valid value for "{}", it should be: "{}" or "{}"'.format(
                    setting_value,
                    setting_name,
                    '", "'.join(setting_props["values"][:-1]),
                    setting_props["values"][-1],
                )
            )

        # specific checks
        extra_check = setting_props.get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)

    if settings.MIN_DB_MS >= settings.MAX_DB_MS:
        raise SettingValidationError(
            '"MIN_DB_MS" must be lower than "MAX_DB_MS".'
        )
