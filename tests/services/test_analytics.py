"""
Overview figures and CSV export
"""
import csv
import io
from datetime import datetime
from types import SimpleNamespace

import pytest

from suryaghar.models import Applicant
from suryaghar.services.analytics import applicant_totals, distribution, monthly_trend
from suryaghar.services.export import applicants_csv, to_csv


def make_applicant(status: str = "Pending", state: str = "Kerala", created_at=None) -> Applicant:
    return Applicant(
        full_name="Amit Kumar", state=state, district="Kochi", position="Project Facilitator",
        qualification="B.A.", experience=2, mobile="9812345670", email="amit@example.com",
        resume_url="r", aadhaar_url="a", photo_url="p", status=status,
        created_at=created_at or datetime(2026, 3, 5),
    )


def test_totals_by_status():
    applicants = [make_applicant("Pending"), make_applicant("Approved"), make_applicant("Approved")]
    assert applicant_totals(applicants) == {"total": 3, "pending": 1, "approved": 2, "rejected": 0}


def test_distribution_shape():
    assert distribution(["Kerala", "Rajasthan", "Kerala"]) == [
        {"name": "Kerala", "value": 2},
        {"name": "Rajasthan", "value": 1},
    ]


def test_monthly_trend_keeps_last_months():
    dates = [datetime(2025, m, 1) for m in range(1, 13)] + [datetime(2025, 12, 20)]
    trend = monthly_trend(dates)
    assert len(trend) == 6
    assert trend[0] == {"month": "Jul 2025", "applications": 1}
    assert trend[-1] == {"month": "Dec 2025", "applications": 2}


def test_applicants_csv():
    text = applicants_csv([make_applicant()])
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0][:3] == ["Name", "Email", "Mobile"]
    assert rows[1][7] == "2 years"
    assert rows[1][-1] == "05/03/2026"


def test_applicants_csv_neutralises_formulas():
    applicant = make_applicant()
    applicant.full_name = '=HYPERLINK("http://x","y")'
    applicant.district = "-2+3"
    rows = list(csv.reader(io.StringIO(applicants_csv([applicant]))))
    assert rows[1][0] == '\'=HYPERLINK("http://x","y")'
    assert rows[1][4] == "'-2+3"
    assert rows[1][1] == "amit@example.com"


@pytest.mark.parametrize("text", ["+cmd", "@SUM(A1)", "\tx", "\rx"])
def test_csv_cells_with_formula_prefix(text):
    columns = [("City", lambda a: a.city), ("Rating", lambda a: a.rating)]
    rows = list(csv.reader(io.StringIO(to_csv([SimpleNamespace(city=text, rating=-1)], columns))))
    assert rows[1] == ["'" + text, "-1"]


def test_csv_fractional_experience():
    applicant = make_applicant()
    applicant.experience = 1.5
    rows = list(csv.reader(io.StringIO(applicants_csv([applicant]))))
    assert rows[1][7] == "1.5 years"
