# Overview: Transaction and row-locking helpers shared by the mutating services.

from __future__ import annotations

from contextlib import contextmanager

from ..extensions import db


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE, but other DBs will honor it.
    """
    return query.with_for_update()


@contextmanager
def atomic():
    """
    Run a validate-then-write sequence as one DB transaction.

    Commits on success. On any exception the session is rolled back and the
    exception propagates unchanged; no retry is attempted.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
