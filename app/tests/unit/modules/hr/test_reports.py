"""Unit tests for monthly attendance and payslip reports."""

from datetime import date

import pytest

from infrastructure.notifications import NotFoundError, ValidationError
from infrastructure.notifications.models import Channel
from modules.hr.reports import (
    ATTENDANCE_TEMPLATE,
    PAYSLIP_TEMPLATE,
    count_attendance,
    month_days,
    parse_month,
    send_monthly_reports,
)
from tests.factories import make_employee

REPORT_VARIABLES = [
    "employee_name",
    "month_year",
    "attendance_chart",
    "payslip_summary",
]


@pytest.fixture
def report_templates(seed_template):
    seed_template(
        ATTENDANCE_TEMPLATE,
        [Channel.EMAIL, Channel.WHATSAPP],
        subject="Attendance {{month_year}}",
        body="{{employee_name}}: {{attendance_chart}}",
        variables=REPORT_VARIABLES,
    )
    seed_template(
        PAYSLIP_TEMPLATE,
        [Channel.EMAIL, Channel.WHATSAPP],
        subject="Payslip {{month_year}}",
        body="{{employee_name}}: {{payslip_summary}}",
        variables=REPORT_VARIABLES,
    )


@pytest.mark.unit
class TestReportHelpers:
    def test_parse_month(self):
        assert parse_month("2024-02") == date(2024, 2, 1)

    @pytest.mark.parametrize("value", ["2024-13", "03-2024", "March"])
    def test_parse_month_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_month(value)

    def test_month_days_leap_year(self):
        days = month_days(date(2024, 2, 1))

        assert len(days) == 29
        assert days[0] == "2024-02-01"
        assert days[-1] == "2024-02-29"

    def test_count_attendance(self):
        records = [
            {"flag": "P"},
            {"flag": "a"},
            {"flag": "D"},
            {"flag": "V"},
            {"flag": "L"},
            {},
            {"flag": "X"},
        ]

        assert count_attendance(records) == {
            "present": 4,
            "absent": 1,
            "delayed": 1,
            "leave": 1,
            "visit": 1,
        }


@pytest.mark.unit
class TestSendMonthlyReportsValidation:
    def test_missing_fields(self, hr_service):
        with pytest.raises(ValidationError) as exc_info:
            send_monthly_reports(hr_service, None, None)

        assert exc_info.value.details == {"missing": ["type", "monthYear"]}

    def test_invalid_type(self, hr_service):
        with pytest.raises(ValidationError) as exc_info:
            send_monthly_reports(hr_service, "bonus", "2024-03")

        assert "bonus" in exc_info.value.message

    def test_no_active_employees(self, hr_service, document_store):
        document_store.seed("employees", make_employee(is_active=False))

        with pytest.raises(NotFoundError) as exc_info:
            send_monthly_reports(hr_service, "attendance", "2024-03")

        assert exc_info.value.message == "No matching employees found"


@pytest.mark.unit
class TestAttendanceReports:
    def test_sends_email_and_whatsapp(
        self, hr_service, hr_channels, document_store, report_templates
    ):
        document_store.seed(
            "employees",
            make_employee(),
            make_employee(id="emp-2", full_name="No Email", email=None),
        )
        document_store.seed(
            "attendance_records",
            {"employee_id": "emp-1", "date": "2024-03-01", "flag": "P"},
            {"employee_id": "emp-1", "date": "2024-03-02", "flag": "A"},
            {"employee_id": "emp-1", "date": "2024-03-03", "flag": "D"},
            {"employee_id": "emp-1", "date": "2024-04-01", "flag": "A"},
            {"employee_id": "emp-2", "date": "2024-03-01", "flag": "A"},
        )

        count = send_monthly_reports(hr_service, "attendance", "2024-03")

        assert count == 1
        (email,) = hr_channels[Channel.EMAIL].deliveries
        assert email[0] == "jane@example.com"
        assert email[1] == "Attendance March 2024"
        assert "Present: 2 | Absent: 1 | Delayed: 1" in email[2]
        (whatsapp,) = hr_channels[Channel.WHATSAPP].deliveries
        assert whatsapp[0] == "+1 (555) 010-0100"
        assert "Attendance Report (March 2024):\nPresent: 2\nAbsent: 1" in whatsapp[2]

    def test_target_email_restricts_run(
        self, hr_service, hr_channels, document_store, report_templates
    ):
        document_store.seed(
            "employees",
            make_employee(),
            make_employee(id="emp-2", email="john@example.com", phone=None),
        )

        count = send_monthly_reports(
            hr_service, "attendance", "2024-03", target_email="john@example.com"
        )

        assert count == 1
        assert [d[0] for d in hr_channels[Channel.EMAIL].deliveries] == [
            "john@example.com"
        ]
        assert hr_channels[Channel.WHATSAPP].deliveries == []

    def test_missing_whatsapp_template_does_not_stop_run(
        self, hr_service, hr_channels, document_store, seed_template
    ):
        seed_template(
            ATTENDANCE_TEMPLATE,
            [Channel.EMAIL],
            body="{{attendance_chart}}",
            variables=REPORT_VARIABLES,
        )
        document_store.seed("employees", make_employee())

        count = send_monthly_reports(hr_service, "attendance", "2024-03")

        assert count == 1
        assert len(hr_channels[Channel.EMAIL].deliveries) == 1
        assert hr_channels[Channel.WHATSAPP].deliveries == []


@pytest.mark.unit
class TestPayslipReports:
    def test_sends_to_employees_with_payroll(
        self, hr_service, hr_channels, document_store, report_templates
    ):
        document_store.seed(
            "employees",
            make_employee(),
            make_employee(id="emp-2", email="nopay@example.com"),
            make_employee(id="emp-3", email=None, phone="+15550100103"),
        )
        document_store.seed(
            "payroll_records",
            {
                "employee_id": "emp-1",
                "month": "2024-03",
                "basic_salary": 1200,
                "total_allowances": 400,
                "total_deductions": 100,
                "net_salary": 1500,
            },
            {"employee_id": "emp-3", "month": "2024-03", "basic_salary": 900, "net_salary": 900},
            {"employee_id": "emp-2", "month": "2024-02", "net_salary": 1000},
        )

        count = send_monthly_reports(hr_service, "payslip", "2024-03")

        assert count == 2
        (email,) = hr_channels[Channel.EMAIL].deliveries
        assert email[0] == "jane@example.com"
        assert email[1] == "Payslip March 2024"
        assert "<strong>Net Salary:</strong> 1500" in email[2]
        assert [d[0] for d in hr_channels[Channel.WHATSAPP].deliveries] == [
            "+1 (555) 010-0100",
            "+15550100103",
        ]
        assert "Basic: 900\nNet Salary: 900" in hr_channels[Channel.WHATSAPP].deliveries[1][2]
