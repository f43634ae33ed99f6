"""Test /doctors and /medical-records endpoints."""
from datetime import date

import pytest

from app.models import Doctor, MedicalRecord


@pytest.fixture
def doctors(db_session):
    rows = [
        Doctor(name="Dr. John Doe", specialization="Cardiology"),
        Doctor(name="Dr. Jane Smith", specialization="Neurology"),
        Doctor(name="Dr. Ada Brown", specialization="Dermatology"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


class TestDoctors:
    def test_list_sorted_by_name(self, client, auth_headers, doctors):
        response = client.get("/doctors", headers=auth_headers)

        assert response.status_code == 200
        assert [d["name"] for d in response.json()] == [
            "Dr. Ada Brown",
            "Dr. Jane Smith",
            "Dr. John Doe",
        ]

    def test_search_matches_name_or_specialization(self, client, auth_headers, doctors):
        by_specialty = client.get("/doctors", params={"search": "neuro"}, headers=auth_headers).json()
        by_name = client.get("/doctors", params={"search": "doe"}, headers=auth_headers).json()

        assert [d["name"] for d in by_specialty] == ["Dr. Jane Smith"]
        assert [d["name"] for d in by_name] == ["Dr. John Doe"]

    def test_filter_by_id(self, client, auth_headers, doctors):
        response = client.get("/doctors", params={"doctorId": doctors[1].id}, headers=auth_headers)

        assert [d["id"] for d in response.json()] == [doctors[1].id]

    def test_create_doctor(self, client, auth_headers, db_session):
        response = client.post(
            "/doctors", json={"name": " Dr. Lee ", "specialization": "Pediatrics"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Dr. Lee"
        assert db_session.query(Doctor).count() == 1

    def test_create_doctor_requires_both_fields(self, client, auth_headers):
        response = client.post("/doctors", json={"name": "Dr. Lee"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Name and specialization are required"


class TestMedicalRecords:
    def test_create_record(self, client, auth_headers, doctor, user_id, db_session):
        response = client.post(
            "/medical-records",
            json={
                "doctorId": doctor.id,
                "date": "2025-05-20",
                "title": "Annual checkup",
                "description": "All values <normal>",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2025-05-20"
        assert data["doctorName"] == "Dr. John Doe"
        assert data["description"] == "All values &lt;normal&gt;"
        assert db_session.query(MedicalRecord).one().user_id == user_id

    def test_missing_fields(self, client, auth_headers, doctor):
        response = client.post(
            "/medical-records",
            json={"doctorId": doctor.id, "date": "2025-05-20", "title": "Checkup"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_bad_date(self, client, auth_headers, doctor):
        response = client.post(
            "/medical-records",
            json={"doctorId": doctor.id, "date": "yesterday", "title": "X", "description": "Y"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "date" in response.json()["detail"]

    def test_unknown_doctor(self, client, auth_headers):
        response = client.post(
            "/medical-records",
            json={"doctorId": "missing", "date": "2025-05-20", "title": "X", "description": "Y"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Doctor not found"

    def test_list_returns_ten_most_recent(self, client, auth_headers, doctor, user_id, db_session):
        for day in range(1, 13):
            db_session.add(
                MedicalRecord(
                    user_id=user_id,
                    doctor_id=doctor.id,
                    date=date(2025, 5, day),
                    title=f"Visit {day}",
                    description="Routine",
                )
            )
        db_session.commit()

        response = client.get("/medical-records", headers=auth_headers)

        dates = [r["date"] for r in response.json()]
        assert len(dates) == 10
        assert dates[0] == "2025-05-12"
        assert dates[-1] == "2025-05-03"

    def test_list_is_scoped_to_user(self, client, other_auth_headers, doctor, user_id, db_session):
        db_session.add(
            MedicalRecord(
                user_id=user_id,
                doctor_id=doctor.id,
                date=date(2025, 5, 1),
                title="Private",
                description="Not yours",
            )
        )
        db_session.commit()

        response = client.get("/medical-records", headers=other_auth_headers)

        assert response.json() == []

    def test_title_too_long_once_escaped(self, client, auth_headers, doctor, db_session):
        response = client.post(
            "/medical-records",
            json={"doctorId": doctor.id, "date": "2025-05-20", "title": "&" * 255, "description": "Y"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Title is too long"
        assert db_session.query(MedicalRecord).count() == 0
