from __future__ import annotations

from dataclasses import astuple, fields
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.enums import PaymentStatus, SalaryType
from ..core.exceptions import DuplicateSlipError, LockedSlipError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, to_decimal
from .model import SalarySlip, SlipSnapshot
from .repository import SalarySlipRepository

_SNAPSHOT_FIELDS = tuple(f.name for f in fields(SlipSnapshot))
_INT_FIELDS = {f.name for f in fields(SlipSnapshot) if f.type in ("int", int)}
_STR_FIELDS = {f.name for f in fields(SlipSnapshot) if f.type in ("str", str)}

_COLUMNS = ", ".join(
    (
        "slip_id",
        "user_id",
        "month",
        "year",
        *_SNAPSHOT_FIELDS,
        "payment_status",
        "locked",
        "payment_date",
        "payment_method",
        "payment_reference",
        "payment_notes",
        "generated_by",
        "generated_at",
        "notes",
    )
)


def _snapshot_params(snapshot: SlipSnapshot) -> tuple[Any, ...]:
    return tuple(v.value if isinstance(v, SalaryType) else v for v in astuple(snapshot))


def _row_to_snapshot(r: Dict[str, Any]) -> SlipSnapshot:
    values: Dict[str, Any] = {}
    for name in _SNAPSHOT_FIELDS:
        raw = r.get(name)
        if name == "salary_type":
            values[name] = SalaryType(raw)
        elif name in _INT_FIELDS:
            values[name] = int(raw or 0)
        elif name in _STR_FIELDS:
            values[name] = raw or ""
        else:
            values[name] = to_decimal(raw)
    return SlipSnapshot(**values)


def _row_to_slip(r: Dict[str, Any]) -> SalarySlip:
    return SalarySlip(
        slip_id=int(r["slip_id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        snapshot=_row_to_snapshot(r),
        payment_status=PaymentStatus(r["payment_status"]),
        locked=bool(r.get("locked")),
        payment_date=r.get("payment_date"),
        payment_method=r.get("payment_method"),
        payment_reference=r.get("payment_reference"),
        payment_notes=r.get("payment_notes"),
        generated_by=r.get("generated_by"),
        generated_at=r.get("generated_at"),
        notes=r.get("notes"),
    )


class MySQLSalarySlipRepository(SalarySlipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _require(self, slip_id: int) -> SalarySlip:
        slip = self.get_by_id(slip_id)
        if not slip:
            raise NotFoundError(f"Salary slip {slip_id} not found")
        return slip

    def get_by_id(self, slip_id: int) -> Optional[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_slips WHERE slip_id=%s", (int(slip_id),))
            r = fetchone(cur)
            return _row_to_slip(r) if r else None

    def get_by_key(self, *, user_id: int, month: int, year: int) -> Optional[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_slips WHERE user_id=%s AND month=%s AND year=%s",
                (int(user_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _row_to_slip(r) if r else None

    def list_by_keys(self, user_ids: Sequence[int], *, month: int, year: int) -> Sequence[SalarySlip]:
        if not user_ids:
            return []

        placeholders, params = in_clause(user_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_slips
                WHERE user_id IN ({placeholders}) AND month=%s AND year=%s
                """,
                (*params, int(month), int(year)),
            )
            return [_row_to_slip(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        snapshot: SlipSnapshot,
        generated_by: Optional[int],
        generated_at: datetime,
    ) -> SalarySlip:
        columns = (
            "user_id",
            "month",
            "year",
            *_SNAPSHOT_FIELDS,
            "payment_status",
            "locked",
            "generated_by",
            "generated_at",
        )
        placeholders = ", ".join(["%s"] * len(columns))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO salary_slips({', '.join(columns)}) VALUES({placeholders})",
                    (
                        int(user_id),
                        int(month),
                        int(year),
                        *_snapshot_params(snapshot),
                        PaymentStatus.PENDING.value,
                        0,
                        generated_by,
                        generated_at,
                    ),
                )
                slip_id = int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateSlipError(f"Slip already exists for user {user_id} {year}-{month:02d}") from e
            raise
        return self._require(slip_id)

    def replace_snapshot(
        self,
        *,
        slip_id: int,
        snapshot: SlipSnapshot,
        generated_by: Optional[int],
        generated_at: datetime,
    ) -> SalarySlip:
        assignments = ", ".join(f"{name}=%s" for name in _SNAPSHOT_FIELDS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE salary_slips
                SET {assignments}, generated_by=%s, generated_at=%s
                WHERE slip_id=%s AND locked=0
                """,
                (*_snapshot_params(snapshot), generated_by, generated_at, int(slip_id)),
            )
            changed = cur.rowcount > 0

        slip = self._require(slip_id)
        if not changed and slip.locked:
            raise LockedSlipError(f"Salary slip {slip_id} is locked")
        return slip

    def update_payment(
        self,
        *,
        slip_id: int,
        payment_status: PaymentStatus,
        locked: bool,
        payment_date: Optional[datetime],
        payment_method: Optional[str],
        payment_reference: Optional[str],
        payment_notes: Optional[str],
    ) -> SalarySlip:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_slips
                SET payment_status=%s, locked=%s, payment_date=%s,
                    payment_method=%s, payment_reference=%s, payment_notes=%s
                WHERE slip_id=%s
                """,
                (
                    payment_status.value,
                    1 if locked else 0,
                    payment_date,
                    payment_method,
                    payment_reference,
                    payment_notes,
                    int(slip_id),
                ),
            )
        return self._require(slip_id)

    def set_locked(self, *, slip_id: int, locked: bool) -> SalarySlip:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE salary_slips SET locked=%s WHERE slip_id=%s", (1 if locked else 0, int(slip_id)))
        return self._require(slip_id)

    def delete(self, slip_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM salary_slips WHERE slip_id=%s AND locked=0 AND payment_status<>%s",
                (int(slip_id), PaymentStatus.PAID.value),
            )
            return cur.rowcount > 0

    @staticmethod
    def _where(
        *,
        month: Optional[int],
        year: Optional[int],
        user_id: Optional[int],
        payment_status: Optional[PaymentStatus],
    ) -> tuple[str, list[object]]:
        clauses = ["1=1"]
        params: list[object] = []
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if payment_status is not None:
            clauses.append("payment_status=%s")
            params.append(payment_status.value)
        return " AND ".join(clauses), params

    def list(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[SalarySlip]:
        where, params = self._where(month=month, year=year, user_id=user_id, payment_status=payment_status)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_slips
                WHERE {where}
                ORDER BY year DESC, month DESC, slip_id DESC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            return [_row_to_slip(r) for r in fetchall(cur)]

    def count(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> int:
        where, params = self._where(month=month, year=year, user_id=user_id, payment_status=payment_status)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM salary_slips WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
