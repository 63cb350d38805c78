"""
Admin form helpers

Bulk edit forms post one block of fields per row, named
``<prefix>_<field>_<index>`` plus a ``<prefix>_count`` field.
"""

MAX_FORM_ROWS = 200


def to_int(value, default=None):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def form_text(form, name, default=''):
    value = form.get(name)
    return value if value is not None else default


def read_rows(form, prefix, fields, defaults=None):
    """Collect indexed rows from a bulk edit form.

    Each row gets ``id`` (int) and ``sort_order`` (``<prefix>_order_<i>``,
    defaulting to the row index); rows without a positive id are skipped.
    """
    defaults = defaults or {}
    count = min(max(to_int(form.get(f'{prefix}_count'), 0), 0), MAX_FORM_ROWS)
    rows = []
    for index in range(count):
        row_id = to_int(form.get(f'{prefix}_id_{index}'))
        if row_id is None or row_id <= 0:
            continue
        row = {
            'index': index,
            'id': row_id,
            'sort_order': to_int(form.get(f'{prefix}_order_{index}'), index),
        }
        for field in fields:
            row[field] = form_text(form, f'{prefix}_{field}_{index}', defaults.get(field, ''))
        rows.append(row)
    return rows
