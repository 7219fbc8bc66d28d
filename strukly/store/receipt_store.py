"""
Receipt Store: persistence of receipts and of the owner's running totals.

Every operation is scoped to one owner. A receipt that exists but belongs to
somebody else is reported exactly like a missing one.

Running totals (UserRevenueAccount) are maintained with signed deltas in the
same transaction as the receipt write:
- create: +1 receipt, +totalAmount
- update: +(new totalAmount - old totalAmount) when the amount changes
- delete: -1 receipt, -totalAmount
"""

import uuid
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from strukly.exceptions import AccountNotFoundError, ReceiptNotFoundError, StoreError
from strukly.models import Receipt, ReceiptCreate, ReceiptItem, ReceiptUpdate, UserRevenueAccount
from strukly.store.orm import ReceiptRow, UserAccountRow
from strukly.utils.logging_config import logger
from strukly.utils.normalization import normalize_search_term

# Columns a patch may not clear
REQUIRED_FIELDS = frozenset({"store_name", "date", "total_amount", "items"})


def _utcnow() -> datetime:
    # SQLite drops tzinfo, so timestamps are stored as naive UTC everywhere
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _serialize_items(items: List[ReceiptItem]) -> List[dict]:
    return [item.model_dump(by_alias=True) for item in items]


def _to_receipt(row: ReceiptRow) -> Receipt:
    return Receipt(
        id=row.id,
        user_id=row.user_id,
        image_url=row.image_url,
        store_name=row.store_name,
        date=row.date,
        total_amount=row.total_amount,
        items=[ReceiptItem.model_validate(item) for item in (row.items or [])],
        category=row.category,
        payment_method=row.payment_method,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_account(row: UserAccountRow) -> UserRevenueAccount:
    return UserRevenueAccount(
        uid=row.uid,
        email=row.email,
        display_name=row.display_name,
        created_at=row.created_at,
        total_receipts=row.total_receipts,
        total_revenue=row.total_revenue,
    )


class ReceiptStore:
    """
    SQLAlchemy-backed Receipt Store.

    Database errors are wrapped in StoreError; not-found conditions raise
    ReceiptNotFoundError / AccountNotFoundError.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Receipt store failure: {e}")
            raise StoreError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # --- Accounts ---

    def _get_or_create_account(self, session: Session, user_id: str) -> UserAccountRow:
        account = session.get(UserAccountRow, user_id)
        if account is None:
            account = UserAccountRow(
                uid=user_id, email="", display_name="", created_at=_utcnow(),
                total_receipts=0, total_revenue=0,
            )
            session.add(account)
            session.flush()
            logger.info(f"Created revenue account for {user_id}")
        return account

    def ensure_account(self, user_id: str, email: str = "", display_name: str = "") -> UserRevenueAccount:
        """Returns the user's account, creating an empty one if needed."""
        with self._transaction() as session:
            account = self._get_or_create_account(session, user_id)
            if email and not account.email:
                account.email = email
            if display_name and not account.display_name:
                account.display_name = display_name
            return _to_account(account)

    def get_account(self, user_id: str) -> UserRevenueAccount:
        with self._transaction() as session:
            account = session.get(UserAccountRow, user_id)
            if account is None:
                raise AccountNotFoundError(user_id)
            return _to_account(account)

    # --- Receipts ---

    def _owned_row(self, session: Session, user_id: str, receipt_id: str) -> ReceiptRow:
        row = session.get(ReceiptRow, receipt_id)
        if row is None or row.user_id != user_id:
            raise ReceiptNotFoundError(receipt_id)
        return row

    def create(self, receipt: ReceiptCreate) -> Receipt:
        """
        Persists a receipt, assigning its id and timestamps, and increments the
        owner's running totals in the same transaction.
        """
        now = _utcnow()
        with self._transaction() as session:
            account = self._get_or_create_account(session, receipt.user_id)
            row = ReceiptRow(
                id=str(uuid.uuid4()),
                user_id=receipt.user_id,
                image_url=receipt.image_url,
                store_name=receipt.store_name,
                date=receipt.date,
                total_amount=receipt.total_amount,
                items=_serialize_items(receipt.items),
                category=receipt.category,
                payment_method=receipt.payment_method,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            account.total_receipts += 1
            account.total_revenue += receipt.total_amount
            session.flush()
            logger.info(f"Created receipt {row.id} for {receipt.user_id} ({receipt.total_amount})")
            return _to_receipt(row)

    def get(self, user_id: str, receipt_id: str) -> Optional[Receipt]:
        with self._transaction() as session:
            row = session.get(ReceiptRow, receipt_id)
            if row is None or row.user_id != user_id:
                return None
            return _to_receipt(row)

    def list_by_user(
        self,
        user_id: str,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[Receipt], Optional[str]]:
        """
        One page of the user's receipts, newest first.

        Args:
            user_id: Owner.
            limit: Page size.
            cursor: Id of the last receipt of the previous page.

        Returns:
            (receipts, next cursor). The next cursor is None once a page comes
            back short.
        """
        with self._transaction() as session:
            stmt = select(ReceiptRow).where(ReceiptRow.user_id == user_id)
            if cursor:
                last = self._owned_row(session, user_id, cursor)
                stmt = stmt.where(or_(
                    ReceiptRow.created_at < last.created_at,
                    and_(ReceiptRow.created_at == last.created_at, ReceiptRow.id < last.id),
                ))
            stmt = stmt.order_by(ReceiptRow.created_at.desc(), ReceiptRow.id.desc()).limit(limit)
            rows = session.scalars(stmt).all()

            next_cursor = rows[-1].id if rows and len(rows) == limit else None
            return [_to_receipt(row) for row in rows], next_cursor

    def list_in_range(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Receipt]:
        """All of the user's receipts dated within [start_date, end_date], both inclusive."""
        with self._transaction() as session:
            stmt = select(ReceiptRow).where(ReceiptRow.user_id == user_id)
            if start_date is not None:
                stmt = stmt.where(ReceiptRow.date >= start_date.isoformat())
            if end_date is not None:
                stmt = stmt.where(ReceiptRow.date <= end_date.isoformat())
            stmt = stmt.order_by(ReceiptRow.date.desc())
            return [_to_receipt(row) for row in session.scalars(stmt).all()]

    def update(self, user_id: str, receipt_id: str, patch: ReceiptUpdate) -> Receipt:
        """
        Applies the explicitly set fields of `patch`. A changed totalAmount
        applies its signed difference to the owner's running revenue.

        totalAmount is never recomputed from items here, so replacing items
        without a new totalAmount leaves the stored total as it was.
        """
        changes = patch.model_dump(exclude_unset=True)
        with self._transaction() as session:
            row = self._owned_row(session, user_id, receipt_id)
            old_total = row.total_amount

            for field, value in changes.items():
                if value is None and field in REQUIRED_FIELDS:
                    continue
                if field == "items":
                    value = _serialize_items(patch.items or [])
                setattr(row, field, value)
            row.updated_at = _utcnow()

            new_total = changes.get("total_amount")
            if new_total is not None and new_total != old_total:
                account = self._get_or_create_account(session, user_id)
                account.total_revenue += new_total - old_total
                logger.info(f"Receipt {receipt_id} total changed by {new_total - old_total}")

            session.flush()
            return _to_receipt(row)

    def delete(self, user_id: str, receipt_id: str) -> None:
        """Removes the receipt and takes it out of the owner's running totals."""
        with self._transaction() as session:
            row = self._owned_row(session, user_id, receipt_id)
            account = self._get_or_create_account(session, user_id)
            account.total_receipts -= 1
            account.total_revenue -= row.total_amount
            session.delete(row)
            logger.info(f"Deleted receipt {receipt_id} for {user_id}")

    def search(self, user_id: str, term: str) -> List[Receipt]:
        """
        The user's receipts, newest first, whose store name or any item name
        contains `term` (case-insensitive).
        """
        needle = normalize_search_term(term)
        with self._transaction() as session:
            stmt = (
                select(ReceiptRow)
                .where(ReceiptRow.user_id == user_id)
                .order_by(ReceiptRow.created_at.desc(), ReceiptRow.id.desc())
            )
            receipts = [_to_receipt(row) for row in session.scalars(stmt).all()]

        return [
            r for r in receipts
            if needle in r.store_name.lower()
            or any(needle in item.name.lower() for item in r.items)
        ]
