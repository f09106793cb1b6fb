"""Engine lifecycle of the issue store and the SQLAlchemy unit of work.

``startup()`` binds the module to one engine and migrates its schema;
every unit of work and issue cache of the process then draws sessions from
that engine until ``shutdown()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from issueflow.adapters.sqlalchemy.migrations import upgrade_head
from issueflow.adapters.sqlalchemy.repositories import (
    SqlAlchemyBranchRepository,
    SqlAlchemyIssueRepository,
)
from issueflow.config import get_database_config
from issueflow.domain.ports.unit_of_work import IssueRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the issue store is used before ``startup()`` or bound twice."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            None if engine is None else sessionmaker(bind=engine, expire_on_commit=False)
        )

    def require_sessions(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "Issue store not started; call "
                "issueflow.adapters.sqlalchemy.unit_of_work.startup() first"
            )
        return self.sessions


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Bind the issue store to ``engine`` (or a new one for ``database_uri``) and migrate it."""

    if _STATE.engine is not None and not force:
        raise StartupError("Issue store already started; pass force=True to rebind it")

    bound = engine or create_engine(database_uri or get_database_config().uri)
    upgrade_head(engine=bound)
    _STATE.bind(bound)
    log.debug("Issue store bound to %s", bound.url.render_as_string(hide_password=True))
    return bound


def configured_engine() -> Engine | None:
    return _STATE.engine


def session_factory() -> sessionmaker[Session]:
    return _STATE.require_sessions()


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; a later ``startup()`` may bind another one."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyIssueUnitOfWork:
    """One session over the issues of ``branch`` and the branch registry."""

    def __init__(self, *, branch: str) -> None:
        self.branch = branch
        self._sessions = _STATE.require_sessions()
        self._session: Session | None = None
        self._repositories: IssueRepositories | None = None

    def __enter__(self) -> SqlAlchemyIssueUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        session = self._sessions()
        self._session = session
        self._repositories = IssueRepositories(
            issues=SqlAlchemyIssueRepository(session, branch=self.branch),
            branches=SqlAlchemyBranchRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with block")
        return self._session

    @property
    def repositories(self) -> IssueRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with block")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
