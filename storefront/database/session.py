from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from storefront.database.engine import engine

# Services hand ORM objects back to routers after commit.
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope(factory=SessionLocal):
    """Commit on success, roll back on error; used by scripts outside HTTP."""
    db: Session = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
