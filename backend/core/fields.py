"""
Reusable DRF fields for request bodies and query strings.
"""
import math

from rest_framework import serializers


class PositiveIntegerOrDefaultField(serializers.Field):
    """
    Optional positive integer with a documented fallback.

    Missing, null, non-integer and non-positive values all resolve to `fallback`
    instead of failing validation. `fallback` may be None, meaning "not set".
    """
    minimum = 1

    def __init__(self, fallback=None, **kwargs):
        self.fallback = fallback
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is serializers.empty or data is None or data == '':
            return True, self.fallback
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return self.fallback
        try:
            number = float(data)
        except (TypeError, ValueError):
            return self.fallback
        if not number.is_integer() or number < self.minimum:
            return self.fallback
        return int(number)

    def to_representation(self, value):
        return value


class CategoryScheduleField(serializers.Field):
    """
    Per-day list of preferred categories, e.g. [["museum"], [], ["park", "beach"]].

    Entries that are not lists become an empty list (no preference for that day).
    A value that is not a list at all means no schedule.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is serializers.empty or data is None:
            return True, None
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if not isinstance(data, list):
            return None
        schedule = []
        for entry in data:
            if isinstance(entry, list):
                schedule.append([str(category) for category in entry if category is not None])
            else:
                schedule.append([])
        return schedule

    def to_representation(self, value):
        return value


class LenientIntegerField(serializers.Field):
    """
    Integer that never fails validation: integer-like input ("7", 7, 7.0) is
    converted, anything else becomes None. Range and presence checks are left to
    the service that owns the rule, so clients get one consistent message.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is serializers.empty or data is None or data == '':
            return True, None
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return None
        try:
            number = float(data)
        except (TypeError, ValueError):
            return None
        if not number.is_integer():
            return None
        return int(number)

    def to_representation(self, value):
        return value


class CategoryListField(serializers.Field):
    """List of category names; anything that is not a list means no categories."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is serializers.empty or data is None:
            return True, []
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if not isinstance(data, list):
            return []
        return [str(category) for category in data if category is not None]

    def to_representation(self, value):
        return value


class NonNegativeIntegerOrDefaultField(PositiveIntegerOrDefaultField):
    """Same as PositiveIntegerOrDefaultField but 0 is accepted (e.g. direct flights only)."""
    minimum = 0


class FloatOrDefaultField(serializers.Field):
    """Optional finite number; missing, null or non-numeric values resolve to `fallback`."""

    def __init__(self, fallback=None, **kwargs):
        self.fallback = fallback
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is serializers.empty or data is None or data == '':
            return True, self.fallback
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return self.fallback
        try:
            number = float(data)
        except (TypeError, ValueError):
            return self.fallback
        if not math.isfinite(number):
            return self.fallback
        return number

    def to_representation(self, value):
        return value
