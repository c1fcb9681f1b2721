from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from ..worktime.model import BreakPeriod
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, clock_in, clock_out,
    work_hours, overtime_hours, night_hours, holiday_hours,
    status, remarks, approved_by, approved_at
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            row = fetchone(cur)
            if not row:
                return None
            return self._to_record(row, self._load_breaks(cur, [int(row["attendance_id"])]))

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (employee_id, start_date, end_date),
            )
            rows = fetchall(cur)
            breaks = self._load_breaks(cur, [int(r["attendance_id"]) for r in rows])
            return [self._to_record(r, breaks) for r in rows]

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        values = (
            record.clock_in,
            record.clock_out,
            record.work_hours,
            record.overtime_hours,
            record.night_hours,
            record.holiday_hours,
            record.status.value if record.status else None,
            record.remarks,
            record.approved_by,
            record.approved_at,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    employee_id, work_date, clock_in, clock_out,
                    work_hours, overtime_hours, night_hours, holiday_hours,
                    status, remarks, approved_by, approved_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance_id),
                    clock_in=VALUES(clock_in), clock_out=VALUES(clock_out),
                    work_hours=VALUES(work_hours), overtime_hours=VALUES(overtime_hours),
                    night_hours=VALUES(night_hours), holiday_hours=VALUES(holiday_hours),
                    status=VALUES(status), remarks=VALUES(remarks),
                    approved_by=VALUES(approved_by), approved_at=VALUES(approved_at)
                """,
                (record.employee_id, record.work_date, *values),
            )
            attendance_id = int(cur.lastrowid)

            cur.execute("DELETE FROM attendance_breaks WHERE attendance_id=%s", (attendance_id,))
            for seq, b in enumerate(record.breaks):
                cur.execute(
                    "INSERT INTO attendance_breaks(attendance_id, seq, break_start, break_end) VALUES(%s,%s,%s,%s)",
                    (attendance_id, seq, b.start, b.end),
                )

        if record.attendance_id == attendance_id:
            return record
        return replace(record, attendance_id=attendance_id)

    @staticmethod
    def _load_breaks(cur, attendance_ids: list[int]) -> dict[int, tuple[BreakPeriod, ...]]:
        if not attendance_ids:
            return {}
        placeholders = ",".join(["%s"] * len(attendance_ids))
        cur.execute(
            f"""
            SELECT attendance_id, break_start, break_end
            FROM attendance_breaks
            WHERE attendance_id IN ({placeholders})
            ORDER BY attendance_id, seq
            """,
            tuple(attendance_ids),
        )
        grouped: dict[int, list[BreakPeriod]] = {}
        for r in fetchall(cur):
            grouped.setdefault(int(r["attendance_id"]), []).append(
                BreakPeriod(start=r["break_start"], end=r.get("break_end"))
            )
        return {k: tuple(v) for k, v in grouped.items()}

    @staticmethod
    def _to_record(r: dict, breaks: dict[int, tuple[BreakPeriod, ...]]) -> AttendanceRecord:
        attendance_id = int(r["attendance_id"])
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=int(r["employee_id"]),
            work_date=r["work_date"],
            clock_in=r.get("clock_in"),
            clock_out=r.get("clock_out"),
            breaks=breaks.get(attendance_id, ()),
            work_hours=as_decimal(r.get("work_hours")),
            overtime_hours=as_decimal(r.get("overtime_hours")),
            night_hours=as_decimal(r.get("night_hours")),
            holiday_hours=as_decimal(r.get("holiday_hours")),
            status=AttendanceStatus(r["status"]) if r.get("status") else None,
            remarks=r.get("remarks"),
            approved_by=r.get("approved_by"),
            approved_at=r.get("approved_at"),
        )
