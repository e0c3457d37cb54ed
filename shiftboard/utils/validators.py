from datetime import datetime
from decimal import Decimal, InvalidOperation

from shiftboard.models.daily_report import SHIFTS, PREP_TASKS


class ValidationError(ValueError):
    def __init__(self, errors: dict):
        self.errors = errors
        super().__init__("Invalid data")


def _parse_date(value):
    if not isinstance(value, str) or not value:
        raise ValueError("must be a date string (YYYY-MM-DD)")
    try:
        # Accepts plain dates and full ISO timestamps; only the date part is kept
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    except ValueError:
        raise ValueError("must be a date string (YYYY-MM-DD)")


def _parse_money(value, allow_negative=False):
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError("must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError("must be a number")
    if not amount.is_finite():
        raise ValueError("must be a number")
    if not allow_negative and amount < 0:
        raise ValueError("must not be negative")
    return amount.quantize(Decimal('0.01'))


def _parse_percentage(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a whole number")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("must be a whole number")
    if not 0 <= value <= 100:
        raise ValueError("must be between 0 and 100")
    return int(value)


def _parse_count(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("must be a whole number")
    if value < 0:
        raise ValueError("must not be negative")
    return value


def validate_report_payload(data, allowed_shifts=SHIFTS) -> dict:
    """
    Validates a report submission and returns column values ready for upsert.
    Raises ValidationError with a message per offending field.
    """
    if not isinstance(data, dict):
        raise ValidationError({'body': 'must be a JSON object'})

    errors = {}
    cleaned = {}

    def run(field, parser, required=False, nullable=False, default=None):
        value = data.get(field)
        if value is None:
            if required:
                errors[field] = "is required"
            elif nullable:
                cleaned[field] = None
            elif default is not None:
                cleaned[field] = default
            return
        try:
            cleaned[field] = parser(value)
        except ValueError as e:
            errors[field] = str(e)

    run('date', _parse_date, required=True)

    shift = data.get('shift')
    if shift not in allowed_shifts:
        errors['shift'] = f"must be one of {', '.join(allowed_shifts)}"
    else:
        cleaned['shift'] = shift

    run('starting_amount', _parse_money, required=True)
    run('ending_amount', _parse_money, required=True)
    run('tip_amount', _parse_money, default=Decimal('0'))
    for field in ('total_sales', 'cash_sales', 'card_sales', 'cash_tips'):
        run(field, _parse_money, nullable=True)

    run('morning_prep_completed', _parse_percentage, required=True)
    run('evening_prep_completed', _parse_percentage, required=True)
    run('customer_count', _parse_count, nullable=True)

    for key, _label in PREP_TASKS:
        value = data.get(key, False)
        if not isinstance(value, bool):
            errors[key] = "must be true or false"
        else:
            cleaned[key] = value

    notes = data.get('notes')
    if notes is not None and not isinstance(notes, str):
        errors['notes'] = "must be text"
    else:
        cleaned['notes'] = notes

    if errors:
        raise ValidationError(errors)
    return cleaned


STORE_LIMITS = {'name': 100, 'address': 200, 'phone': 20}


def validate_store_payload(data, partial=False) -> dict:
    if not isinstance(data, dict):
        raise ValidationError({'body': 'must be a JSON object'})

    errors = {}
    cleaned = {}

    for field, limit in STORE_LIMITS.items():
        if field not in data:
            if field == 'name' and not partial:
                errors[field] = "Store name is required"
            continue
        value = data[field]
        if value is not None and not isinstance(value, str):
            errors[field] = "must be text"
            continue
        value = value.strip() if value else None
        if field == 'name' and not value:
            errors[field] = "Store name is required"
        elif value and len(value) > limit:
            errors[field] = f"must be at most {limit} characters"
        else:
            cleaned[field] = value

    if 'is_active' in data:
        if not isinstance(data['is_active'], bool):
            errors['is_active'] = "must be true or false"
        else:
            cleaned['is_active'] = data['is_active']

    if errors:
        raise ValidationError(errors)
    return cleaned
