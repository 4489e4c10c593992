from contextlib import contextmanager

from flask import current_app
from tourdesk.extensions import db


@contextmanager
def transactional():
    """
    Commit the session when the block finishes; roll back and re-raise when
    it raises. Yields the session.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        current_app.logger.info("Rolled back transaction: %s", exc)
        raise
