"""기본 레포지토리 — 모든 레포지토리의 부모 클래스.

Base Repository — Parent class for all domain repositories.
Provides generic reads plus the staging (add/update/remove) and
save operations shared by every repository. Staged changes become
durable only when ``save_all`` / ``save_all_async`` commits them.

Usage:
    class SeriesRepository(BaseRepository[Series]):
        def __init__(self) -> None:
            super().__init__(Series)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, event, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, UOWTransaction
from sqlalchemy.orm.attributes import flag_modified

from app.database import Base, LibrarySession

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)

# 세션 info 키 — 커밋 전 flush된 변경 존재 여부 (Session.info key for flushed changes)
_FLUSHED_CHANGES_KEY: str = "has_flushed_changes"


def has_pending_changes(session: Session | AsyncSession) -> bool:
    """세션에 아직 flush되지 않은 변경이 있는지 확인합니다.

    Return True when the session holds staged inserts, deletes, or
    attribute changes that have not been flushed yet.
    """
    if session.new or session.deleted:
        return True
    return any(session.is_modified(obj) for obj in session.dirty)


@event.listens_for(LibrarySession, "after_flush")
def _record_flushed_changes(session: Session, flush_context: UOWTransaction) -> None:
    # after_flush 시점에도 new/dirty/deleted는 flush 이전 상태를 유지
    # new/dirty/deleted still describe the pre-flush state here
    if has_pending_changes(session):
        session.info[_FLUSHED_CHANGES_KEY] = True


@event.listens_for(LibrarySession, "after_commit")
@event.listens_for(LibrarySession, "after_rollback")
def _reset_flushed_changes(session: Session) -> None:
    session.info.pop(_FLUSHED_CHANGES_KEY, None)


def _unloaded_columns(obj: Base) -> list[str]:
    state = inspect(obj)
    return [attr.key for attr in state.mapper.column_attrs if attr.key in state.unloaded]


def _mark_modified(obj: Base) -> None:
    """로드된 모든 비-PK 컬럼을 수정됨으로 표시합니다.

    Flag every loaded non primary key column so the next flush issues an
    UPDATE for the row even when no value actually changed.
    """
    state = inspect(obj)
    primary_keys: set[str] = {column.key for column in state.mapper.primary_key}
    for attr in state.mapper.column_attrs:
        if attr.key not in primary_keys and attr.key in state.dict:
            flag_modified(obj, attr.key)


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리.

    Generic repository providing common reads, staging, and commit.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its id, or None when absent.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 ID (Id of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given equality filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값}
                     (Additional filter dict {'column_name': value})
            order_by: 정렬 기준 컬럼 (Column to order by)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = select(self.model)

        # 동적 필터 적용 — Dynamic filter application
        if filters:
            for column_name, value in filters.items():
                if hasattr(self.model, column_name) and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        if order_by is not None:
            query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    def add(self, db: Session | AsyncSession, obj: ModelType) -> None:
        """새 레코드를 삽입 대상으로 등록합니다 (커밋 전까지 미반영).

        Stage a new record for insertion. Nothing is written until save.
        """
        db.add(obj)

    async def update_async(self, db: AsyncSession, obj: ModelType) -> ModelType:
        """기존 레코드를 수정 대상으로 등록합니다.

        Stage an existing record as modified. The instance is reconciled
        with the session through ``merge``, so a detached or re-built
        instance carrying an existing id becomes an UPDATE rather than an
        INSERT. Every loaded column is flagged, so save reports a change
        even when no value differs from the stored row.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj: 수정할 레코드, 분리된 인스턴스도 가능
                 (Record to update, attached or detached)

        Returns:
            ModelType: 세션이 관리하는 인스턴스 (The session-managed instance)
        """
        merged: ModelType = await db.merge(obj)
        unloaded: list[str] = _unloaded_columns(merged)
        if unloaded and inspect(merged).persistent:
            await db.refresh(merged, attribute_names=unloaded)
        _mark_modified(merged)
        return merged

    def update(self, session: Session, obj: ModelType) -> ModelType:
        """기존 레코드를 동기 세션에 수정 대상으로 등록합니다.

        Synchronous variant of ``update_async`` over a plain Session.
        From async code run it with ``await db.run_sync(repo.update, obj)``.
        """
        merged: ModelType = session.merge(obj)
        unloaded: list[str] = _unloaded_columns(merged)
        if unloaded and inspect(merged).persistent:
            session.refresh(merged, attribute_names=unloaded)
        _mark_modified(merged)
        return merged

    async def remove(self, db: AsyncSession, obj: ModelType) -> None:
        """레코드를 삭제 대상으로 등록합니다 (커밋 전까지 미반영).

        Stage a record for removal. Nothing is written until save.
        """
        await db.delete(obj)

    async def save_all_async(self, db: AsyncSession) -> bool:
        """등록된 모든 변경을 커밋합니다.

        Commit all staged changes.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            bool: 삽입/수정/삭제된 행이 있었는지 여부
                  (Whether any row was inserted, modified, or deleted)
        """
        await db.flush()
        changed: bool = bool(db.info.pop(_FLUSHED_CHANGES_KEY, False))
        await db.commit()
        return changed

    def save_all(self, session: Session) -> bool:
        """등록된 모든 변경을 동기 세션으로 커밋합니다.

        Synchronous variant of ``save_all_async`` over a plain Session.
        From async code run it with ``await db.run_sync(repo.save_all)``.
        """
        session.flush()
        changed: bool = bool(session.info.pop(_FLUSHED_CHANGES_KEY, False))
        session.commit()
        return changed
