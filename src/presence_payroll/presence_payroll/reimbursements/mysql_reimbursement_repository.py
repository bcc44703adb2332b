from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Mapping, Sequence

from ..core.enums import ReimbursementStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, to_decimal
from .model import ReimbursementLine, ReimbursementTotal
from .repository import ReimbursementRepository


class MySQLReimbursementRepository(ReimbursementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_approved_totals(
        self, user_ids: Sequence[int], start: datetime, end: datetime
    ) -> Mapping[int, ReimbursementTotal]:
        if not user_ids:
            return {}

        placeholders, params = in_clause(user_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT reimbursement_id, user_id, total_amount, status, submitted_at
                FROM reimbursements
                WHERE user_id IN ({placeholders})
                  AND status=%s
                  AND submitted_at BETWEEN %s AND %s
                ORDER BY user_id ASC, submitted_at ASC
                """,
                (*params, ReimbursementStatus.APPROVED.value, start, end),
            )
            rows = fetchall(cur)

        lines: dict[int, list[ReimbursementLine]] = defaultdict(list)
        for r in rows:
            lines[int(r["user_id"])].append(
                ReimbursementLine(
                    reimbursement_id=int(r["reimbursement_id"]),
                    amount=to_decimal(r.get("total_amount")),
                    status=ReimbursementStatus(r["status"]),
                    submitted_at=r["submitted_at"],
                )
            )
        return {uid: ReimbursementTotal.from_lines(tuple(items)) for uid, items in lines.items()}
