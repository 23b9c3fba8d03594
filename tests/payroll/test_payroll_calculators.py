from datetime import date, timedelta

from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus, WageBasis
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.payroll.calculator.factory import PayrollCalculatorFactory
from src.hr_payroll.hr_payroll.payroll.calculator.hourly_calculator import HourlyPayrollCalculator
from src.hr_payroll.hr_payroll.payroll.calculator.monthly_calculator import MonthlyPayrollCalculator


def _records(n, *, regular=8.0, overtime=0.0, status=AttendanceStatus.PRESENT, start=date(2024, 4, 13)):
    return [
        AttendanceRecord(
            work_date=start + timedelta(days=i),
            bs_date="",
            employee_name="Ram",
            status=status,
            gross_hours=regular + overtime,
            regular_hours=regular,
            overtime_hours=overtime,
        )
        for i in range(n)
    ]


def test_monthly_salary_over_thirty_day_month():
    employee = Employee(employee_id=1, name="Ram", wage_basis=WageBasis.MONTHLY, wage_amount=30000)

    row = MonthlyPayrollCalculator().calculate(employee, _records(26), days_in_month=30)

    assert row.regular_hours == 208
    assert row.daily_rate == 1000
    assert row.rate == 125
    assert row.regular_pay == 26000
    assert row.deduction == 0
    assert row.tds == 260
    assert row.net_payment == 25740


def test_monthly_absences_deduct_daily_rate():
    employee = Employee(employee_id=1, name="Ram", wage_amount=30000, allowance=500)
    records = _records(2) + _records(
        3, regular=0, status=AttendanceStatus.ABSENT, start=date(2024, 5, 1)
    ) + _records(1, regular=0, status=AttendanceStatus.CLOCK_OUT_MISS, start=date(2024, 5, 5))

    row = MonthlyPayrollCalculator().calculate(employee, records, days_in_month=30)

    assert row.absent_days == 4
    assert row.deduction == 4000
    assert row.total_pay == 2000
    assert row.salary_total == 2000 + 500 - 4000
    assert row.tds == -15
    assert row.net_payment == -1485


def test_hourly_pay_with_overtime():
    employee = Employee(employee_id=2, name="Sita", wage_basis=WageBasis.HOURLY, wage_amount=200)
    records = _records(20) + _records(10, regular=0, overtime=1, start=date(2024, 5, 10))

    row = HourlyPayrollCalculator().calculate(employee, records, days_in_month=31)

    assert row.regular_hours == 160
    assert row.overtime_hours == 10
    assert row.regular_pay == 32000
    assert row.ot_pay == 3000
    assert row.total_pay == 35000
    assert row.daily_rate == 1600
    assert row.deduction == 0


def test_non_numeric_wage_gives_zero_pay():
    employee = Employee(employee_id=3, name="Hari", wage_amount="not a number")
    row = MonthlyPayrollCalculator().calculate(employee, _records(5), days_in_month=30)
    assert row.total_pay == 0
    assert row.net_payment == 0


def test_factory_picks_by_wage_basis():
    factory = PayrollCalculatorFactory()
    assert isinstance(factory.for_basis(WageBasis.HOURLY), HourlyPayrollCalculator)
    assert isinstance(factory.for_basis(WageBasis.MONTHLY), MonthlyPayrollCalculator)
