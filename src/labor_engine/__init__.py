"""Labor-time computation and leave accrual engine.

This package is organized by feature modules (calendars, worktime, attendance,
leave, compliance, payroll) with repository protocols at the storage seam and
plain service classes on top. It is meant to be called as a library by the
surrounding HR service.
"""
