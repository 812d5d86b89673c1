from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from schoolhub.core.database import Base, build_engine
from schoolhub.models.school import School


def test_in_memory_sqlite_shares_one_connection():
    assert isinstance(build_engine("sqlite://").pool, StaticPool)
    assert isinstance(build_engine("sqlite:///:memory:").pool, StaticPool)


def test_file_sqlite_rollback_does_not_touch_other_sessions(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'schoolhub.db'}")
    assert not isinstance(engine.pool, StaticPool)
    Base.metadata.create_all(bind=engine)

    writer = Session(bind=engine)
    reader = Session(bind=engine)
    try:
        writer.add(School(name="Barasho Secondary"))
        writer.flush()

        reader.execute(select(func.count(School.id))).scalar()
        reader.rollback()

        writer.commit()
        assert reader.execute(select(func.count(School.id))).scalar() == 1
    finally:
        writer.close()
        reader.close()
        engine.dispose()
