from datetime import date, datetime

from flask import request

from healthsync.errors import ValidationError


def parse_date(value, field="date", required=False):
    if value in (None, ""):
        if required:
            raise ValidationError(f"{field} is required", {field: ["Missing data for required field."]})
        return None
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "")).date()
    except ValueError:
        raise ValidationError("Invalid date format", {field: ["Use YYYY-MM-DD."]})


def get_page_args(default_size=20, max_size=100):
    page = request.args.get("page", 1, type=int) or 1
    per_page = request.args.get("page_size", default_size, type=int) or default_size
    return max(page, 1), max(1, min(per_page, max_size))


def paginated(pagination, items):
    return {
        "items": items,
        "total": pagination.total,
        "page": pagination.page,
        "page_size": pagination.per_page,
        "pages": pagination.pages,
    }


def get_json_body():
    return request.get_json(silent=True) or {}
