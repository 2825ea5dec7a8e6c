from dataclasses import fields, MISSING

from .exceptions import RecordMappingError
from .logger import logger


def _record_fields(record_cls):
    try:
        return fields(record_cls)
    except TypeError:
        raise RecordMappingError(f"{record_cls!r} is not a dataclass") from None


def to_record(row, record_cls):
    """
    Map ``row`` onto ``record_cls`` by column name. Columns without a matching
    field are ignored, fields without a matching column keep their default.
    """
    mapping = row._mapping
    values = {}
    for field in _record_fields(record_cls):
        if field.name in mapping:
            values[field.name] = mapping[field.name]
        elif field.default is MISSING and field.default_factory is MISSING:
            raise RecordMappingError(
                f"Column '{field.name}' is missing from the row, cannot build {record_cls.__name__}"
            )
    return record_cls(**values)


def scan(result, record_cls):
    records = [to_record(row, record_cls) for row in result]
    logger.debug(f"Scanned {len(records)} {record_cls.__name__} record(s)")
    return records


def scan_one(result, record_cls):
    row = result.first()
    if row is None:
        return None
    return to_record(row, record_cls)


def scan_row(row, record_cls, into):
    into.append(to_record(row, record_cls))
    return into


def iter_rows(result):
    """
    Yield each row of ``result`` as a plain tuple. The result is closed once
    iteration stops, including when the caller stops early.
    """
    try:
        for row in result:
            yield tuple(row)
    finally:
        result.close()
