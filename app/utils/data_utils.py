"""
Data utilities
Helper functions cho data transformation và validation
"""
import math
from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import request

from app.errors import ValidationError


def get_request_data():
    """Lấy request data từ JSON hoặc form."""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError('Request body must be valid JSON')
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')
        return data
    return request.form.to_dict()


def is_blank(value):
    """None, chuỗi rỗng hoặc chỉ có khoảng trắng."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data, *fields):
    """
    Raise ValidationError nếu thiếu một trong các trường bắt buộc,
    hoặc trường không phải chuỗi/số nguyên (mảng, object, bool đều bị từ chối).
    """
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(fields)}")
    for field in fields:
        value = data[field]
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValidationError(f'{field} must be a string or integer')


def parse_finite_number(value, field):
    """Chuyển thành float hữu hạn; bool và NaN/Infinity bị từ chối."""
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'{field} must be a number')
    if not math.isfinite(number):
        raise ValidationError(f'{field} must be a finite number')
    return number


def parse_descriptor(value, field='descriptor'):
    """
    Chuẩn hóa face descriptor thành list[float].
    face-api serialize Float32Array thành object {"0": .., "1": ..} nên cũng chấp nhận dạng này.
    """
    if isinstance(value, dict):
        try:
            value = [value[key] for key in sorted(value, key=int)]
        except (TypeError, ValueError):
            raise ValidationError(f'{field} must be an array of numbers')
    if not isinstance(value, (list, tuple)) or not value:
        raise ValidationError(f'{field} must be a non-empty array of numbers')
    return [parse_finite_number(item, field) for item in value]


def parse_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'{field} must be an integer')
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f'{field} must be an integer')
    return number


def resolve_timezone(name=None):
    """
    Trả về tzinfo theo tên IANA. Không cấu hình thì trả về None:
    giờ local của server được tính theo từng ngày (có DST).
    """
    if not name:
        return None
    if name.upper() == 'UTC':
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ValueError(f'Unknown time zone: {name}')


def local_day_bounds(date_text, tz=None):
    """
    Khoảng [00:00:00.000, 23:59:59.999] của một ngày (YYYY-MM-DD) theo giờ local,
    trả về dạng datetime UTC.
    """
    try:
        day = datetime.strptime(date_text, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError('date must be in YYYY-MM-DD format')
    if tz is None:
        # astimezone() trên datetime naive dùng offset local của chính ngày đó
        start = datetime.combine(day, time.min).astimezone()
        end = datetime.combine(day, time(23, 59, 59, 999000)).astimezone()
    else:
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = datetime.combine(day, time(23, 59, 59, 999000), tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
