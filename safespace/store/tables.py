# safespace/store/tables.py
"""
Typed table client over the relational store.

Every page talks to the database through this module only: one ``Table`` per
persisted table with insert / select / update / delete, equality filters as
keyword arguments and extra SQLAlchemy clauses through ``where``. Rows come
back as the pydantic row models in ``safespace.schemas``.

Failures are rolled back and re-raised as ``StoreError`` so callers deal with
a single error type whatever the backend said.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from safespace.models import (
    ChatMessage,
    ConnectPost,
    DirectMessage,
    JournalEntry,
    LearningArticle,
    MoodEntry,
    PostComment,
    PostLike,
    Professional,
    Profile,
    Story,
    UserRole,
    WellnessExercise,
)
from safespace.schemas.chat import ChatMessageRow
from safespace.schemas.common import RowModel
from safespace.schemas.connect import ConnectPostRow, PostCommentRow, PostLikeRow
from safespace.schemas.content import LearningArticleRow, StoryRow, WellnessExerciseRow
from safespace.schemas.journal import JournalEntryRow
from safespace.schemas.message import DirectMessageRow, ProfileRow
from safespace.schemas.mood import MoodEntryRow
from safespace.schemas.professional import ProfessionalRow, UserRoleRow
from safespace.store.errors import RowNotFound, StoreError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=RowModel)

TABLES: Dict[str, tuple] = {
    "chat_messages": (ChatMessage, ChatMessageRow),
    "journal_entries": (JournalEntry, JournalEntryRow),
    "connect_posts": (ConnectPost, ConnectPostRow),
    "post_comments": (PostComment, PostCommentRow),
    "post_likes": (PostLike, PostLikeRow),
    "mood_entries": (MoodEntry, MoodEntryRow),
    "professionals": (Professional, ProfessionalRow),
    "user_roles": (UserRole, UserRoleRow),
    "profiles": (Profile, ProfileRow),
    "direct_messages": (DirectMessage, DirectMessageRow),
    "stories": (Story, StoryRow),
    "wellness_exercises": (WellnessExercise, WellnessExerciseRow),
    "learning_articles": (LearningArticle, LearningArticleRow),
}


class Table(Generic[RowT]):
    def __init__(self, store: "TableStore", name: str, model, row_type: Type[RowT]):
        self._store = store
        self.name = name
        self.model = model
        self.row_type = row_type

    # ---------- helpers ----------

    def _column(self, key: str):
        column = getattr(self.model, key, None)
        if column is None or key not in self.model.__table__.columns:
            raise StoreError(self.name, f"unknown column '{key}'")
        return column

    def _clauses(self, where: Iterable[Any], filters: Dict[str, Any]) -> list:
        clauses = list(where)
        for key, value in filters.items():
            column = self._column(key)
            if isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(column.in_(list(value)))
            elif value is None:
                clauses.append(column.is_(None))
            else:
                clauses.append(column == value)
        return clauses

    def _row(self, obj) -> RowT:
        return self.row_type.model_validate(obj)

    # ---------- reads ----------

    def select(
        self,
        *,
        where: Iterable[Any] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> List[RowT]:
        # Bulk updates bypass the identity map, so always reload from the database
        stmt = (
            select(self.model)
            .where(*self._clauses(where, filters))
            .execution_options(populate_existing=True)
        )
        if order_by:
            column = self._column(order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        with self._store.guard(self.name) as db:
            objs = db.execute(stmt).scalars().all()
            return [self._row(o) for o in objs]

    def first(self, *, where: Iterable[Any] = (), order_by: Optional[str] = None,
              descending: bool = False, **filters: Any) -> Optional[RowT]:
        rows = self.select(where=where, order_by=order_by, descending=descending, limit=1, **filters)
        return rows[0] if rows else None

    def get(self, row_id: str) -> RowT:
        row = self.first(id=row_id)
        if row is None:
            raise RowNotFound(self.name, f"no row with id {row_id}")
        return row

    def count(self, *, where: Iterable[Any] = (), **filters: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._clauses(where, filters))
        with self._store.guard(self.name) as db:
            return int(db.execute(stmt).scalar_one())

    # ---------- writes ----------

    def insert(self, values: Dict[str, Any]) -> RowT:
        return self.insert_many([values])[0]

    def insert_many(self, rows: List[Dict[str, Any]]) -> List[RowT]:
        """Insert rows in one transaction, returning them in the given order."""
        for values in rows:
            for key in values:
                self._column(key)

        with self._store.transaction(self.name) as db:
            objs = [self.model(**values) for values in rows]
            db.add_all(objs)
            db.flush()
            out = [self._row(o) for o in objs]
        logger.debug("inserted %d row(s) into %s", len(out), self.name)
        return out

    def update(self, values: Dict[str, Any], *, where: Iterable[Any] = (), **filters: Any) -> int:
        clauses = self._clauses(where, filters)
        if not clauses:
            raise StoreError(self.name, "refusing to update without a filter")
        for key in values:
            self._column(key)

        stmt = (
            update(self.model)
            .where(*clauses)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._store.transaction(self.name) as db:
            result = db.execute(stmt)
        return result.rowcount

    def delete(self, *, where: Iterable[Any] = (), **filters: Any) -> int:
        clauses = self._clauses(where, filters)
        if not clauses:
            raise StoreError(self.name, "refusing to delete without a filter")

        stmt = delete(self.model).where(*clauses).execution_options(synchronize_session=False)
        with self._store.transaction(self.name) as db:
            result = db.execute(stmt)
        logger.debug("deleted %d row(s) from %s", result.rowcount, self.name)
        return result.rowcount


class TableStore:
    """Entry point handed to every controller."""

    def __init__(self, db: Session):
        self._db = db
        self._tables: Dict[str, Table] = {}

    def table(self, name: str) -> Table:
        if name not in self._tables:
            if name not in TABLES:
                raise StoreError(name, "unknown table")
            model, row_type = TABLES[name]
            self._tables[name] = Table(self, name, model, row_type)
        return self._tables[name]

    @contextmanager
    def guard(self, table: str):
        """Read-side wrapper: translate driver errors without committing."""
        try:
            yield self._db
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Store read failed on %s: %s", table, e)
            raise StoreError(table, str(e)) from e

    @contextmanager
    def transaction(self, table: str):
        try:
            yield self._db
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Store write failed on %s: %s", table, e)
            raise StoreError(table, str(e)) from e
        except Exception:
            self._db.rollback()
            raise

    # ---------- likes ----------

    def add_like(self, post_id: str, user_id: str) -> int:
        """Insert a like row and bump the post counter in the same transaction."""
        with self.transaction("post_likes") as db:
            db.add(PostLike(post_id=post_id, user_id=user_id))
            db.flush()
            result = db.execute(
                update(ConnectPost)
                .where(ConnectPost.id == post_id)
                .values(likes_count=ConnectPost.likes_count + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise RowNotFound("connect_posts", f"no row with id {post_id}")
        return self._stored_likes(post_id)

    def remove_like(self, post_id: str, user_id: str) -> int:
        with self.transaction("post_likes") as db:
            result = db.execute(
                delete(PostLike)
                .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                db.execute(
                    update(ConnectPost)
                    .where(ConnectPost.id == post_id, ConnectPost.likes_count > 0)
                    .values(likes_count=ConnectPost.likes_count - 1)
                    .execution_options(synchronize_session=False)
                )
        return self._stored_likes(post_id)

    def count_likes(self, post_id: str) -> int:
        """Authoritative like count, derived from the like rows."""
        return self.table("post_likes").count(post_id=post_id)

    def _stored_likes(self, post_id: str) -> int:
        with self.guard("connect_posts") as db:
            value = db.execute(
                select(ConnectPost.likes_count).where(ConnectPost.id == post_id)
            ).scalar_one_or_none()
        if value is None:
            raise RowNotFound("connect_posts", f"no row with id {post_id}")
        return int(value)
