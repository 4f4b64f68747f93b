# (c) Copyright Datacraft, 2026
"""Shared fixtures: a SQLite database, seeded departments and service factories."""
import uuid
from dataclasses import dataclass, field

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from docroute.core import orm
from docroute.core.db.base import Base
from docroute.core.features.audit.recorder import AuditTrailRecorder
from docroute.core.features.departments.directory import DbDepartmentDirectory
from docroute.core.features.documents.schema import DocumentCreate
from docroute.core.features.documents.service import DocumentService
from docroute.core.features.events.sink import DocumentEvent
from docroute.core.features.recycle_bin.service import RecycleBinService
from docroute.core.features.routing.service import RoutingService
from docroute.core.storage import LocalFileStore


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    async def notify(self, user_id, event_kind, payload):
        self.sent.append((user_id, event_kind, payload))

    def recipients(self, event_kind=None):
        return [u for u, kind, _ in self.sent if event_kind is None or kind == event_kind]


class RecordingEventSink:
    def __init__(self):
        self.events = []

    async def emit(self, event, payload):
        name = event.value if isinstance(event, DocumentEvent) else event
        self.events.append((name, payload))

    @property
    def names(self):
        return [name for name, _ in self.events]


@dataclass
class Departments:
    a: uuid.UUID
    b: uuid.UUID
    c: uuid.UUID
    users: dict = field(default_factory=dict)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'docroute.sqlite'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def departments(db_session):
    """Departments A (two members), B (one member) and C (one member)."""
    users = {}
    ids = {}
    for code, member_count in (("A", 2), ("B", 1), ("C", 1)):
        department = orm.Department(id=uuid.uuid4(), name=f"Department {code}", code=code)
        db_session.add(department)
        ids[code] = department.id
        users[code] = []
        for _ in range(member_count):
            member = orm.DepartmentMember(department_id=department.id, user_id=uuid.uuid4())
            db_session.add(member)
            users[code].append(member.user_id)
    await db_session.commit()
    return Departments(a=ids["A"], b=ids["B"], c=ids["C"], users=users)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def event_sink():
    return RecordingEventSink()


@pytest.fixture
def file_store(tmp_path):
    return LocalFileStore(tmp_path / "media")


@pytest.fixture
def recorder(db_session, notifier):
    return AuditTrailRecorder(db_session, notifier, DbDepartmentDirectory(db_session))


@pytest.fixture
def document_service(db_session, recorder, notifier, event_sink):
    return DocumentService(db_session, recorder, recorder.directory, notifier, event_sink)


@pytest.fixture
def routing_service(db_session, recorder, event_sink):
    return RoutingService(db_session, recorder, recorder.directory, event_sink)


@pytest.fixture
def recycle_bin_service(db_session, recorder, file_store, event_sink):
    return RecycleBinService(db_session, recorder, file_store, event_sink)


@pytest.fixture
def actor_id():
    return uuid.uuid4()


@pytest.fixture
def make_document(document_service, departments, actor_id):
    async def _make(title="Purchase request", origin=None, **kwargs):
        data = DocumentCreate(
            title=title,
            origin=origin or departments.a,
            code=kwargs.pop("code", "PR-001"),
            **kwargs,
        )
        return await document_service.create_document(data, actor_id)

    return _make
