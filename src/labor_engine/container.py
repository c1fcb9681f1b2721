from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .calendars.model import HolidayTable
from .calendars.rules import CalendarRules
from .compliance.checker import ComplianceChecker
from .core.rules import LaborRules
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.service import LeaveAccrualEngine
from .payroll.service import MonthlyHoursService
from .worktime.calculator import WorkTimeCalculator


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    leave_repo: MySQLLeaveRepository

    calendar: CalendarRules
    calculator: WorkTimeCalculator
    compliance_checker: ComplianceChecker

    attendance_service: AttendanceService
    leave_engine: LeaveAccrualEngine
    monthly_hours_service: MonthlyHoursService


def build_container(
    *,
    db_config: dict,
    rules: Optional[LaborRules] = None,
    holiday_table: Optional[HolidayTable] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)

    rules = rules or LaborRules()
    calendar = CalendarRules(holiday_table)
    calculator = WorkTimeCalculator(calendar, rules)
    compliance_checker = ComplianceChecker(rules)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        calendar=calendar,
        calculator=calculator,
        compliance_checker=compliance_checker,
        attendance_service=AttendanceService(attendance_repo, calculator),
        leave_engine=LeaveAccrualEngine(leave_repo, employees_repo, calendar),
        monthly_hours_service=MonthlyHoursService(attendance_repo, checker=compliance_checker),
    )
