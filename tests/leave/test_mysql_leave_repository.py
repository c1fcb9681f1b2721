from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from labor_engine.core.enums import LeaveStatus, LeaveType
from labor_engine.leave.model import LeaveBalance, LeaveRequest
from labor_engine.leave.mysql_leave_repository import MySQLLeaveRepository


class RecordingCursor:
    def __init__(self, rowcount: int = 1, rows=()):
        self.statements: list[tuple[str, tuple]] = []
        self.rowcount = rowcount
        self.lastrowid = None
        self._rows = list(rows)
        self.closed = False

    def execute(self, sql, params=()):
        self.statements.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        return self._rows.pop(0) if self._rows else []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: RecordingCursor):
        self.cursor_obj = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    def __init__(self, cursor: RecordingCursor):
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


def approved(request_id: int = 5) -> LeaveRequest:
    return LeaveRequest(
        request_id=request_id,
        employee_id=1,
        start_date=date(2025, 3, 3),
        end_date=date(2025, 3, 4),
        leave_type=LeaveType.ANNUAL_LEAVE,
        day_count=Decimal(2),
        status=LeaveStatus.APPROVED,
        reviewed_by=99,
        reviewed_at=datetime(2025, 3, 1, 10, 0),
    )


def test_save_review_without_matching_pending_row_writes_no_balance():
    cur = RecordingCursor(rowcount=0)
    repo = MySQLLeaveRepository(FakeFactory(cur))
    balance = LeaveBalance(
        employee_id=1, year=2025, annual_granted=Decimal(10), annual_used=Decimal(2), debited_request_ids=frozenset({5})
    )

    assert repo.save_review(approved(), balance) is False

    assert len(cur.statements) == 1
    sql, params = cur.statements[0]
    assert sql.startswith("UPDATE leave_requests")
    assert params[-2:] == (5, LeaveStatus.PENDING.value)
    assert not any("leave_balances" in s or "leave_balance_debits" in s for s, _ in cur.statements)


def test_save_review_upserts_balance_then_debits():
    cur = RecordingCursor(rowcount=1)
    factory = FakeFactory(cur)
    repo = MySQLLeaveRepository(factory)
    balance = LeaveBalance(
        employee_id=1,
        year=2025,
        annual_granted=Decimal(10),
        annual_used=Decimal(4),
        debited_request_ids=frozenset({7, 5}),
    )

    assert repo.save_review(approved(), balance) is True

    sqls = [s for s, _ in cur.statements]
    assert sqls[0].startswith("UPDATE leave_requests")
    assert sqls[1].startswith("INSERT INTO leave_balances")
    assert cur.statements[1][1][:4] == (1, 2025, Decimal(10), Decimal(4))
    assert [p for s, p in cur.statements[2:]] == [(1, 2025, 5), (1, 2025, 7)]
    assert all(s.startswith("INSERT IGNORE INTO leave_balance_debits") for s in sqls[2:])
    assert factory.conn.committed


def test_get_balance_reads_debited_requests():
    cur = RecordingCursor(
        rows=[
            {
                "employee_id": 1,
                "year": 2025,
                "annual_granted": Decimal("10.0"),
                "annual_used": Decimal("2.0"),
                "sick_granted": None,
                "sick_used": None,
                "special_granted": Decimal(0),
                "special_used": Decimal(0),
            },
            [{"request_id": 3}, {"request_id": 8}],
        ]
    )
    balance = MySQLLeaveRepository(FakeFactory(cur)).get_balance(1, 2025)

    assert balance.stored
    assert balance.debited_request_ids == frozenset({3, 8})
    assert balance.remaining(LeaveType.ANNUAL_LEAVE) == Decimal(8)
    assert balance.sick_granted == Decimal(0)


def test_get_balance_missing_row():
    cur = RecordingCursor()
    assert MySQLLeaveRepository(FakeFactory(cur)).get_balance(1, 2025) is None
    assert len(cur.statements) == 1
