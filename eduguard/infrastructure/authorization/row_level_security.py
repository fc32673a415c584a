"""Row-level security engine.

Narrows a SQLAlchemy ``select()`` over one of the scoped record models to
the rows the caller's role may see. ``scope`` only composes WHERE clauses;
it never executes. The companions ``can_access`` and ``scope_or_fail`` run
the scoped statement on a session supplied by the caller.

Dispatch is two-level: role first, then the model's ``__entity_kind__``.
Both enums are matched exhaustively, so adding a role or an entity kind
without a predicate fails type checking.

Visibility:
    student  own grades/assignments/submissions; self plus searchable
             students in the directory; all announcements; owner-scoped
             defaults
    teacher  grades/assignments they teach; submissions for their
             assignments; student and teacher directory; everything else
    parent   records of students with an active grant linked to them;
             self plus those students in the directory; nothing else
    admin    everything
    other    nothing (unknown stored role)

Soft-deleted rows are always hidden, except for an admin who asks for
trashed rows while scoping as another account.
"""

from typing import Any, assert_never
from uuid import UUID

from sqlalchemy import (
    ColumnElement,
    Select,
    and_,
    false,
    inspect,
    or_,
    select,
    true,
)
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.domain.entities import Account
from eduguard.domain.enums import AccountRole, EntityKind
from eduguard.domain.errors import AccessDenied
from eduguard.domain.protocols import ClockProtocol
from eduguard.domain.value_objects import DEFAULT_SCOPE, ScopeOptions
from eduguard.infrastructure.persistence.base import BaseModel
from eduguard.infrastructure.persistence.models import (
    AccountModel,
    AssignmentModel,
    ConsentGrantModel,
    StudentProfileModel,
)


def entity_kind_of(model: type[BaseModel]) -> EntityKind:
    """Entity kind declared by a scoped model.

    Raises:
        TypeError: If the model does not declare ``__entity_kind__``.
    """
    kind = getattr(model, "__entity_kind__", None)
    if not isinstance(kind, EntityKind):
        raise TypeError(f"{model.__name__} is not a row-scoped model")
    return kind


def _primary_entity(stmt: Select[Any]) -> type[BaseModel]:
    entity = stmt.column_descriptions[0].get("entity")
    if entity is None:
        raise TypeError("Scoped statements must select from a mapped model")
    return entity


def _has_column(model: type[BaseModel], name: str) -> bool:
    return name in inspect(model).columns


class RowLevelSecurity:
    """Per-role, per-entity query scoping.

    Args:
        clock: Time source for grant expiry in the parent predicates.

    Example:
        >>> rls = RowLevelSecurity(clock)
        >>> stmt = rls.scope(select(GradeModel), parent)
        >>> rows = (await session.execute(stmt)).scalars().all()
    """

    def __init__(self, clock: ClockProtocol) -> None:
        self._clock = clock

    def scope(
        self,
        stmt: Select[Any],
        account: Account,
        options: ScopeOptions = DEFAULT_SCOPE,
    ) -> Select[Any]:
        """Restrict ``stmt`` to the rows ``account`` may see.

        Args:
            stmt: ``select()`` whose first entity is a scoped model.
            account: Caller.
            options: Trash and override options.

        Returns:
            A new statement with the role predicate (and the soft-delete
            filter) appended. Scoping twice yields the same row set.
        """
        model = _primary_entity(stmt)
        entity = entity_kind_of(model)
        is_admin = account.account_role is AccountRole.ADMIN

        if is_admin and options.override_account is not None and options.include_trashed:
            return stmt

        effective = account
        if is_admin and options.override_account is not None:
            effective = options.override_account

        if _has_column(model, "deleted_at"):
            stmt = stmt.where(model.deleted_at.is_(None))  # type: ignore[attr-defined]

        return stmt.where(self.predicate(model, entity, effective))

    def predicate(
        self, model: type[BaseModel], entity: EntityKind, account: Account
    ) -> ColumnElement[bool]:
        """Boolean clause selecting the rows of ``model`` visible to ``account``."""
        role = account.account_role
        if role is None:
            return false()
        match role:
            case AccountRole.STUDENT:
                return self._student(model, entity, account.id)
            case AccountRole.TEACHER:
                return self._teacher(model, entity, account.id)
            case AccountRole.PARENT:
                return self._parent(model, entity, account.id)
            case AccountRole.ADMIN:
                return true()
            case _:
                assert_never(role)

    def _student(
        self, model: type[BaseModel], entity: EntityKind, account_id: UUID
    ) -> ColumnElement[bool]:
        match entity:
            case EntityKind.GRADE | EntityKind.ASSIGNMENT | EntityKind.SUBMISSION:
                return model.student_id == account_id  # type: ignore[attr-defined]
            case EntityKind.USER:
                return or_(
                    AccountModel.id == account_id,
                    and_(
                        AccountModel.role == AccountRole.STUDENT.value,
                        AccountModel.allow_search.is_(True),
                    ),
                )
            case EntityKind.ANNOUNCEMENT:
                return true()
            case EntityKind.COURSE | EntityKind.NOTIFICATION:
                if _has_column(model, "owner_id"):
                    return model.owner_id == account_id  # type: ignore[attr-defined]
                return true()
            case _:
                assert_never(entity)

    def _teacher(
        self, model: type[BaseModel], entity: EntityKind, account_id: UUID
    ) -> ColumnElement[bool]:
        match entity:
            case EntityKind.GRADE | EntityKind.ASSIGNMENT:
                return model.teacher_id == account_id  # type: ignore[attr-defined]
            case EntityKind.SUBMISSION:
                taught = select(AssignmentModel.id).where(
                    AssignmentModel.teacher_id == account_id,
                    AssignmentModel.deleted_at.is_(None),
                )
                return model.assignment_id.in_(taught)  # type: ignore[attr-defined]
            case EntityKind.USER:
                return AccountModel.role.in_(
                    [AccountRole.STUDENT.value, AccountRole.TEACHER.value]
                )
            case EntityKind.ANNOUNCEMENT | EntityKind.COURSE | EntityKind.NOTIFICATION:
                return true()
            case _:
                assert_never(entity)

    def _parent(
        self, model: type[BaseModel], entity: EntityKind, account_id: UUID
    ) -> ColumnElement[bool]:
        match entity:
            case EntityKind.GRADE | EntityKind.ASSIGNMENT | EntityKind.SUBMISSION:
                return model.student_id.in_(  # type: ignore[attr-defined]
                    self._consenting_students(account_id)
                )
            case EntityKind.USER:
                return or_(
                    AccountModel.id == account_id,
                    AccountModel.id.in_(self._consenting_students(account_id)),
                )
            case EntityKind.ANNOUNCEMENT | EntityKind.COURSE | EntityKind.NOTIFICATION:
                return false()
            case _:
                assert_never(entity)

    def _consenting_students(self, guardian_account_id: UUID) -> Select[tuple[UUID]]:
        """Student account ids with an active grant linked to the guardian."""
        now = self._clock.now()
        return (
            select(StudentProfileModel.account_id)
            .join(
                ConsentGrantModel,
                ConsentGrantModel.student_profile_id == StudentProfileModel.id,
            )
            .where(
                ConsentGrantModel.guardian_account_id == guardian_account_id,
                ConsentGrantModel.granted_at.is_not(None),
                ConsentGrantModel.revoked_at.is_(None),
                or_(
                    ConsentGrantModel.expires_at.is_(None),
                    ConsentGrantModel.expires_at > now,
                ),
            )
        )

    async def can_access(
        self,
        session: AsyncSession,
        account: Account,
        model: type[BaseModel],
        record_id: UUID,
    ) -> bool:
        """True if the record exists and is visible to ``account``.

        Database errors propagate; they are not reported as a denial.
        """
        stmt = self.scope(select(model.id).where(model.id == record_id), account)
        result = await session.execute(stmt.limit(1))
        return result.first() is not None

    async def scope_or_fail(
        self,
        session: AsyncSession,
        stmt: Select[Any],
        account: Account,
        options: ScopeOptions = DEFAULT_SCOPE,
    ) -> list[Any]:
        """Execute the scoped statement and return its rows.

        Raises:
            AccessDenied: If no visible row matches.
        """
        model = _primary_entity(stmt)
        result = await session.execute(self.scope(stmt, account, options))
        rows = list(result.scalars().all())
        if not rows:
            raise AccessDenied(account.id, entity_kind_of(model))
        return rows
