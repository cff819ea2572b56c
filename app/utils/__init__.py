"""
Utils package
"""
from .data_utils import (
    get_request_data,
    is_blank,
    require_fields,
    parse_finite_number,
    parse_descriptor,
    parse_int,
    resolve_timezone,
    local_day_bounds,
)

__all__ = [
    'get_request_data',
    'is_blank',
    'require_fields',
    'parse_finite_number',
    'parse_descriptor',
    'parse_int',
    'resolve_timezone',
    'local_day_bounds',
]
