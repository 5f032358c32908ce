"""
Job posting, moderation gates and visibility
"""
from datetime import timedelta

from jobboard.jobs.service import today
from jobboard.models import Application, ApplicationStatus, Job, JobStatus, JobType, Notification, Report, Role

from conftest import COMPLETE_EMPLOYER_PROFILE

JOB_PAYLOAD = {
    "title": "Data Engineer",
    "description": "Pipelines all day",
    "company": "Acme Corp",
    "location": "Remote, EU",
    "category": "Engineering",
    "job_type": "Full-time",
    "openings": 2,
    "required_skills": ["python", "spark"],
}


def test_verified_employer_creates_pending_job(client, db, admin, employer, employer_headers):
    response = client.post("/api/v1/jobs", headers=employer_headers, json={**JOB_PAYLOAD, "status": "approved"})
    assert response.status_code == 201
    job = response.json()["job"]
    assert job["status"] == "pending"
    assert job["posted_by"] == employer.id

    notes = db.query(Notification).filter(Notification.user_id == admin.id).all()
    assert [note.title for note in notes] == ["New Job Posted"]


def test_incomplete_employer_cannot_post(client, create_user, login):
    employer = create_user(Role.EMPLOYER, company_name="Acme")
    response = client.post("/api/v1/jobs", headers=login(employer), json=JOB_PAYLOAD)
    assert response.status_code == 403
    assert "Current completion: 40%" in response.json()["error"]["message"]


def test_unverified_employer_cannot_post(client, create_user, login):
    employer = create_user(Role.EMPLOYER, is_verified=False, **COMPLETE_EMPLOYER_PROFILE)
    response = client.post("/api/v1/jobs", headers=login(employer), json=JOB_PAYLOAD)
    assert response.status_code == 403
    assert "pending admin review" in response.json()["error"]["message"]


def test_seekers_cannot_post(client, seeker_headers):
    assert client.post("/api/v1/jobs", headers=seeker_headers, json=JOB_PAYLOAD).status_code == 403


def test_listing_shows_only_open_jobs(client, db, create_user, create_job, employer):
    other = create_user(Role.JOBSEEKER)
    open_job = create_job(employer, title="Open")
    create_job(employer, title="Pending", status=JobStatus.PENDING)
    create_job(employer, title="Rejected", status=JobStatus.REJECTED)
    create_job(employer, title="Expired", application_deadline=today() - timedelta(days=1))
    filled = create_job(employer, title="Filled", openings=1)
    create_job(employer, title="Due today", application_deadline=today())

    db.add(Application(job_id=filled.id, user_id=other.id, status=ApplicationStatus.ACCEPTED))
    db.commit()

    response = client.get("/api/v1/jobs")
    assert response.status_code == 200
    titles = {job["title"] for job in response.json()}
    assert titles == {"Open", "Due today"}

    listed = next(job for job in response.json() if job["id"] == open_job.id)
    assert listed["filled_positions"] == 0
    assert listed["available_positions"] == 1
    assert listed["poster"]["company_name"] == "Acme Corp"


def test_listing_filters(client, create_job, employer):
    create_job(employer, title="Python Dev", category="Engineering", location="Berlin", job_type=JobType.FULL_TIME)
    create_job(employer, title="Designer", category="Design", location="Paris", job_type=JobType.CONTRACT)

    def titles(**params):
        return [job["title"] for job in client.get("/api/v1/jobs", params=params).json()]

    assert titles(category="Design") == ["Designer"]
    assert titles(type="Contract") == ["Designer"]
    assert titles(location="berl") == ["Python Dev"]
    assert titles(search="python") == ["Python Dev"]
    assert client.get("/api/v1/jobs", params={"type": "Gig"}).status_code == 400


def test_search_matches_wildcard_characters_literally(client, create_job, employer):
    create_job(employer, title="Growth 100% remote")
    create_job(employer, title="Data Engineer", location="New_York")
    create_job(employer, title="Designer", location="Paris")

    def titles(**params):
        return [job["title"] for job in client.get("/api/v1/jobs", params=params).json()]

    assert titles(search="%") == ["Growth 100% remote"]
    assert titles(search="100%") == ["Growth 100% remote"]
    assert titles(location="_") == ["Data Engineer"]
    assert titles(search="\\") == []


def test_unlimited_openings(client, create_job, employer):
    job = create_job(employer, openings=0)
    item = client.get(f"/api/v1/jobs/{job.id}").json()
    assert item["available_positions"] is None


def test_job_detail_counts_views(client, db, create_job, employer):
    job = create_job(employer)
    assert client.get(f"/api/v1/jobs/{job.id}").status_code == 200
    assert client.get(f"/api/v1/jobs/{job.id}", headers={"Authorization": "Bearer junk"}).status_code == 200
    assert db.query(Job).filter(Job.id == job.id).one().views == 2


def test_job_detail_visibility(client, create_user, create_job, login, employer, employer_headers, admin_headers, seeker_headers):
    pending = create_job(employer, status=JobStatus.PENDING)

    assert client.get(f"/api/v1/jobs/{pending.id}").status_code == 404
    assert client.get(f"/api/v1/jobs/{pending.id}", headers=seeker_headers).status_code == 404
    assert client.get(f"/api/v1/jobs/{pending.id}", headers=employer_headers).status_code == 200
    assert client.get(f"/api/v1/jobs/{pending.id}", headers=admin_headers).status_code == 200

    rival = create_user(Role.EMPLOYER, is_verified=True, **COMPLETE_EMPLOYER_PROFILE)
    assert client.get(f"/api/v1/jobs/{pending.id}", headers=login(rival)).status_code == 404
    assert client.get("/api/v1/jobs/9999").status_code == 404


def test_expired_job_detail_is_hidden(client, create_job, employer, employer_headers):
    job = create_job(employer, application_deadline=today() - timedelta(days=1))
    response = client.get(f"/api/v1/jobs/{job.id}", headers=employer_headers)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Job application deadline has passed"


def test_delete_job_cascades(client, db, create_job, employer, employer_headers, seeker):
    job = create_job(employer)
    db.add(Application(job_id=job.id, user_id=seeker.id))
    db.add(Report(job_id=job.id, reported_by=seeker.id, reason="Spam"))
    db.commit()

    response = client.delete(f"/api/v1/jobs/{job.id}", headers=employer_headers)
    assert response.status_code == 200
    assert db.query(Job).count() == 0
    assert db.query(Application).count() == 0
    assert db.query(Report).count() == 0


def test_only_owner_deletes_job(client, create_user, create_job, login, employer):
    job = create_job(employer)
    rival = create_user(Role.EMPLOYER, is_verified=True, **COMPLETE_EMPLOYER_PROFILE)
    assert client.delete(f"/api/v1/jobs/{job.id}", headers=login(rival)).status_code == 403
    assert client.delete("/api/v1/jobs/9999", headers=login(rival)).status_code == 404


def test_employer_dashboard(client, create_user, create_job, login, employer, employer_headers):
    job = create_job(employer, openings=1)
    create_job(employer, title="Old", application_deadline=today() - timedelta(days=3))
    applicant = create_user(Role.JOBSEEKER, resume="resumes/a.pdf")
    client.post("/api/v1/applications", headers=login(applicant), json={"job_id": job.id})

    rows = {row["id"]: row for row in client.get("/api/v1/employer/jobs", headers=employer_headers).json()}
    assert rows[job.id]["has_new_applications"] is True
    assert rows[job.id]["new_applications_count"] == 1
    assert rows[job.id]["available_positions"] == 1
    assert any(row["deadline_status"] == "expired" for row in rows.values())

    # Opening the applicant list clears the badge
    client.get(f"/api/v1/jobs/{job.id}/applications", headers=employer_headers)
    rows = {row["id"]: row for row in client.get("/api/v1/employer/jobs", headers=employer_headers).json()}
    assert rows[job.id]["has_new_applications"] is False
