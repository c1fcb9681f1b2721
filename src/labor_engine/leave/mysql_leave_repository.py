from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

_REQUEST_COLUMNS = """
    request_id, employee_id, start_date, end_date, leave_type, day_count, status,
    reason, submitted_at, reviewed_by, reviewed_at, remarks
"""


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_balance(self, employee_id: int, year: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, year, annual_granted, annual_used, sick_granted, sick_used,
                       special_granted, special_used
                FROM leave_balances
                WHERE employee_id=%s AND year=%s
                """,
                (employee_id, year),
            )
            row = fetchone(cur)
            if not row:
                return None
            cur.execute(
                "SELECT request_id FROM leave_balance_debits WHERE employee_id=%s AND year=%s",
                (employee_id, year),
            )
            debited = frozenset(int(r["request_id"]) for r in fetchall(cur))
            return LeaveBalance(
                employee_id=int(row["employee_id"]),
                year=int(row["year"]),
                annual_granted=as_decimal(row["annual_granted"]),
                annual_used=as_decimal(row["annual_used"]),
                sick_granted=as_decimal(row["sick_granted"]),
                sick_used=as_decimal(row["sick_used"]),
                special_granted=as_decimal(row["special_granted"]),
                special_used=as_decimal(row["special_used"]),
                debited_request_ids=debited,
                stored=True,
            )

    def save_balance(self, balance: LeaveBalance) -> LeaveBalance:
        with db_cursor(self._conn_factory) as (_, cur):
            self._upsert_balance(cur, balance)
        return replace(balance, stored=True)

    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE request_id=%s", (request_id,))
            row = fetchone(cur)
            return self._to_request(row) if row else None

    def find_overlapping(self, employee_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REQUEST_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s
                  AND status IN (%s, %s)
                  AND start_date <= %s AND end_date >= %s
                ORDER BY request_id
                LIMIT 1
                """,
                (employee_id, LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value, end_date, start_date),
            )
            row = fetchone(cur)
            return self._to_request(row) if row else None

    def create_request(self, request: LeaveRequest) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, start_date, end_date, leave_type, day_count, status, reason, submitted_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.employee_id,
                    request.start_date,
                    request.end_date,
                    request.leave_type.value,
                    request.day_count,
                    request.status.value,
                    request.reason,
                    request.submitted_at,
                ),
            )
            return replace(request, request_id=int(cur.lastrowid))

    def save_review(self, request: LeaveRequest, balance: Optional[LeaveBalance] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded on PENDING so two concurrent reviews cannot both win.
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s, remarks=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    request.status.value,
                    request.reviewed_by,
                    request.reviewed_at,
                    request.remarks,
                    request.request_id,
                    LeaveStatus.PENDING.value,
                ),
            )
            if cur.rowcount != 1:
                return False
            if balance is not None:
                self._upsert_balance(cur, balance)
        return True

    def list_requests(
        self,
        *,
        year: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        where = []
        params: list = []
        if year is not None:
            where.append("start_date BETWEEN %s AND %s")
            params.extend([date(year, 1, 1), date(year, 12, 31)])
        if status is not None:
            where.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            where.append("employee_id=%s")
            params.append(employee_id)

        sql = f"SELECT {_REQUEST_COLUMNS} FROM leave_requests"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY submitted_at DESC, request_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._to_request(r) for r in fetchall(cur)]

    @staticmethod
    def _upsert_balance(cur, balance: LeaveBalance) -> None:
        cur.execute(
            """
            INSERT INTO leave_balances(
                employee_id, year, annual_granted, annual_used, sick_granted, sick_used,
                special_granted, special_used
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE
                annual_granted=VALUES(annual_granted), annual_used=VALUES(annual_used),
                sick_granted=VALUES(sick_granted), sick_used=VALUES(sick_used),
                special_granted=VALUES(special_granted), special_used=VALUES(special_used)
            """,
            (
                balance.employee_id,
                balance.year,
                balance.annual_granted,
                balance.annual_used,
                balance.sick_granted,
                balance.sick_used,
                balance.special_granted,
                balance.special_used,
            ),
        )
        for request_id in sorted(balance.debited_request_ids):
            cur.execute(
                "INSERT IGNORE INTO leave_balance_debits(employee_id, year, request_id) VALUES(%s,%s,%s)",
                (balance.employee_id, balance.year, request_id),
            )

    @staticmethod
    def _to_request(r: dict) -> LeaveRequest:
        return LeaveRequest(
            request_id=int(r["request_id"]),
            employee_id=int(r["employee_id"]),
            start_date=r["start_date"],
            end_date=r["end_date"],
            leave_type=LeaveType(r["leave_type"]),
            day_count=as_decimal(r["day_count"]),
            status=LeaveStatus(r["status"]),
            reason=r.get("reason"),
            submitted_at=r.get("submitted_at"),
            reviewed_by=r.get("reviewed_by"),
            reviewed_at=r.get("reviewed_at"),
            remarks=r.get("remarks"),
        )
