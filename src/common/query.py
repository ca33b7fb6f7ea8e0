"""
Single round-trip listing queries.

An ``Aggregation`` is built up stage by stage (match, lookup, derived fields,
sort, project) and compiled into one SELECT. Related rows are never loaded as
ORM objects: joined tables contribute only the columns that were asked for,
and counts / membership tests are correlated subqueries evaluated by the
database.

    docs = (
        Aggregation(Tweet)
        .match(Tweet.owner_id == user_id)
        .project(id=Tweet.id, content=Tweet.content, createdAt=Tweet.created_at)
        .lookup_owner("ownerDetails", fields=("username", "avatar"))
        .add_like_count(LikeKind.TWEET)
        .add_is_liked(LikeKind.TWEET, viewer_id)
        .sort(Tweet.created_at.desc())
        .all(db)
    )
"""
import math

from pydantic.alias_generators import to_camel
from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from src.auth.models import User
from src.like.models import Like, LikeKind

OWNER_FIELDS = ("username", "full_name", "avatar")

_NEST = "__"


class Aggregation:

    def __init__(self, model):
        self.model = model
        self._criteria = []
        self._joins = []
        self._columns = {}
        self._flags = set()
        self._constants = {}
        self._lookups = []
        self._order_by = []

    # -- stages ------------------------------------------------------------

    def match(self, *criteria):
        self._criteria.extend(criteria)
        return self

    def join(self, target, onclause):
        """Inner join used purely for filtering/sorting; contributes no columns."""
        self._joins.append((target, onclause, False))
        return self

    def project(self, **columns):
        self._columns.update(columns)
        return self

    def lookup(self, label: str, target, local_key, fields, foreign_key: str = "id"):
        """
        Left outer join to a single related row, projecting ``fields`` under ``label``.

        The nested document is ``None`` when nothing matched.
        """
        alias = aliased(target)
        self._joins.append((alias, getattr(alias, foreign_key) == local_key, True))
        self._columns[f"{label}{_NEST}id"] = alias.id
        for field in fields:
            self._columns[f"{label}{_NEST}{to_camel(field)}"] = getattr(alias, field)
        self._lookups.append(label)
        return self

    def lookup_owner(self, label: str = "owner", fields=OWNER_FIELDS, local_key=None):
        if local_key is None:
            local_key = self.model.owner_id
        return self.lookup(label, User, local_key, fields)

    def add_field(self, label: str, expression):
        self._columns[label] = expression
        return self

    def add_like_count(self, kind: LikeKind, label: str = "likesCount", local_key=None):
        if local_key is None:
            local_key = self.model.id
        count = (
            select(func.count(Like.id))
            .where(Like.target_type == kind.value, Like.target_id == local_key)
            .correlate_except(Like)
            .scalar_subquery()
        )
        self._columns[label] = count
        return self

    def add_flag(self, label: str, expression):
        """Boolean derived field; a ``None`` expression resolves to ``False``."""
        if expression is None:
            self._constants[label] = False
        else:
            self._columns[label] = expression
            self._flags.add(label)
        return self

    def add_is_liked(self, kind: LikeKind, viewer_id, label: str = "isLiked", local_key=None):
        if viewer_id is None:
            # anonymous viewers have liked nothing
            return self.add_flag(label, None)
        if local_key is None:
            local_key = self.model.id
        liked = (
            select(Like.id)
            .where(
                Like.target_type == kind.value,
                Like.target_id == local_key,
                Like.liked_by == viewer_id,
            )
            .correlate_except(Like)
            .exists()
        )
        return self.add_flag(label, liked)

    def sort(self, *order_by):
        self._order_by.extend(order_by)
        return self

    # -- execution ---------------------------------------------------------

    def statement(self):
        stmt = select(*[column.label(label) for label, column in self._columns.items()])
        stmt = stmt.select_from(self.model)
        for target, onclause, outer in self._joins:
            stmt = stmt.join(target, onclause, isouter=outer)
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        if self._order_by:
            stmt = stmt.order_by(*self._order_by)
        return stmt

    def all(self, db: Session) -> list:
        return [self._to_document(row) for row in db.execute(self.statement())]

    def first(self, db: Session):
        row = db.execute(self.statement().limit(1)).first()
        return self._to_document(row) if row is not None else None

    def count(self, db: Session) -> int:
        inner = self.statement().order_by(None).subquery()
        return db.scalar(select(func.count()).select_from(inner)) or 0

    def paginate(self, db: Session, page: int = 1, limit: int = 10) -> dict:
        total = self.count(db)
        rows = db.execute(self.statement().offset((page - 1) * limit).limit(limit))
        total_pages = math.ceil(total / limit) if limit else 0
        return {
            "docs": [self._to_document(row) for row in rows],
            "totalDocs": total,
            "limit": limit,
            "page": page,
            "totalPages": total_pages,
            "hasPrevPage": page > 1,
            "hasNextPage": page < total_pages,
            "prevPage": page - 1 if page > 1 else None,
            "nextPage": page + 1 if page < total_pages else None,
        }

    def _to_document(self, row) -> dict:
        document = dict(self._constants)
        nested = {label: {} for label in self._lookups}
        for key, value in row._mapping.items():
            if _NEST in key:
                label, field = key.split(_NEST, 1)
                nested[label][field] = value
            elif key in self._flags:
                document[key] = bool(value)
            else:
                document[key] = value
        for label, sub in nested.items():
            document[label] = sub if sub.get("id") is not None else None
        return document
