def iso(value):
    return value.isoformat() if value is not None else None
