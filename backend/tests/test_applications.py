"""
Applying to jobs, capacity limits and employer decisions
"""
import pytest
from sqlalchemy.exc import IntegrityError

from jobboard.applications.service import can_transition
from jobboard.models import Application, ApplicationStatus, Job, JobStatus, Notification, NotificationType, Role

from conftest import COMPLETE_EMPLOYER_PROFILE


def apply(client, headers, job_id, cover_letter="Hire me"):
    return client.post("/api/v1/applications", headers=headers, json={"job_id": job_id, "cover_letter": cover_letter})


def decide(client, headers, application_id, status, notes=None):
    payload = {"status": status}
    if notes:
        payload["employer_notes"] = notes
    return client.put(f"/api/v1/applications/{application_id}", headers=headers, json=payload)


def test_apply(client, db, create_job, employer, seeker, seeker_headers):
    job = create_job(employer)
    response = apply(client, seeker_headers, job.id)
    assert response.status_code == 201
    application = response.json()["application"]
    assert application["status"] == "pending"
    assert application["resume_used"] == seeker.resume
    assert application["cover_letter"] == "Hire me"

    assert db.query(Job).filter(Job.id == job.id).one().applications_count == 1
    note = db.query(Notification).filter(Notification.user_id == employer.id).one()
    assert note.title == "New Application"
    assert note.type == NotificationType.APPLICATION


def test_apply_twice_is_conflict(client, create_job, employer, seeker_headers):
    job = create_job(employer)
    assert apply(client, seeker_headers, job.id).status_code == 201
    response = apply(client, seeker_headers, job.id)
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "ConflictError"


def test_apply_requires_resume(client, create_user, create_job, login, employer):
    job = create_job(employer)
    response = apply(client, login(create_user(Role.JOBSEEKER)), job.id)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Please upload your resume before applying"


def test_apply_to_closed_jobs(client, create_job, employer, seeker_headers):
    pending = create_job(employer, status=JobStatus.PENDING)
    response = apply(client, seeker_headers, pending.id)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "This job is not available for applications"

    assert apply(client, seeker_headers, 9999).status_code == 404


def test_only_seekers_apply(client, create_job, employer, employer_headers, admin_headers):
    job = create_job(employer)
    assert apply(client, employer_headers, job.id).status_code == 403
    assert apply(client, admin_headers, job.id).status_code == 403


def test_capacity_limits(client, create_user, create_job, login, employer, employer_headers):
    job = create_job(employer, openings=2)
    seekers = [create_user(Role.JOBSEEKER, resume=f"resumes/{n}.pdf") for n in range(4)]
    ids = [apply(client, login(seeker), job.id).json()["application"]["id"] for seeker in seekers[:3]]

    assert decide(client, employer_headers, ids[0], "accepted").status_code == 200
    listed = next(item for item in client.get("/api/v1/jobs").json() if item["id"] == job.id)
    assert listed["filled_positions"] == 1
    assert listed["available_positions"] == 1

    assert decide(client, employer_headers, ids[1], "shortlisted").status_code == 200

    # Every opening is taken
    assert job.id not in [item["id"] for item in client.get("/api/v1/jobs").json()]
    detail = client.get(f"/api/v1/jobs/{job.id}")
    assert detail.status_code == 404
    assert detail.json()["error"]["message"] == "All positions for this job have been filled"

    late = apply(client, login(seekers[3]), job.id)
    assert late.status_code == 400

    # The employer now only sees the selected candidates
    selected = client.get(f"/api/v1/jobs/{job.id}/applications", headers=employer_headers).json()
    assert {item["id"] for item in selected} == {ids[0], ids[1]}
    assert all(item["applicant"]["email"] for item in selected)


def test_status_outcomes_are_final(client, create_job, employer, employer_headers, seeker_headers):
    job = create_job(employer)
    application_id = apply(client, seeker_headers, job.id).json()["application"]["id"]

    response = decide(client, employer_headers, application_id, "rejected", notes="Not a fit")
    assert response.status_code == 200
    assert response.json()["application"]["employer_notes"] == "Not a fit"

    again = decide(client, employer_headers, application_id, "accepted")
    assert again.status_code == 400
    assert again.json()["error"]["details"]["current_status"] == "rejected"

    assert decide(client, employer_headers, application_id, "pending").status_code == 400


def test_transition_table():
    assert can_transition(ApplicationStatus.PENDING, ApplicationStatus.SHORTLISTED)
    assert can_transition(ApplicationStatus.PENDING, ApplicationStatus.ACCEPTED)
    assert can_transition(ApplicationStatus.PENDING, ApplicationStatus.REJECTED)
    assert not can_transition(ApplicationStatus.PENDING, ApplicationStatus.PENDING)
    assert not can_transition(ApplicationStatus.SHORTLISTED, ApplicationStatus.ACCEPTED)
    assert not can_transition(ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED)


def test_status_update_notifies_applicant(client, db, create_job, employer, employer_headers, seeker, seeker_headers):
    job = create_job(employer)
    application_id = apply(client, seeker_headers, job.id).json()["application"]["id"]
    decide(client, employer_headers, application_id, "shortlisted")

    note = db.query(Notification).filter(Notification.user_id == seeker.id).one()
    assert note.title == "Application shortlisted"
    assert note.link == "/jobseeker/applications"


def test_only_job_owner_decides(client, create_user, create_job, login, employer, seeker_headers):
    job = create_job(employer)
    application_id = apply(client, seeker_headers, job.id).json()["application"]["id"]
    rival = login(create_user(Role.EMPLOYER, is_verified=True, **COMPLETE_EMPLOYER_PROFILE))

    assert decide(client, rival, application_id, "accepted").status_code == 403
    assert client.get(f"/api/v1/jobs/{job.id}/applications", headers=rival).status_code == 403
    assert decide(client, rival, 9999, "accepted").status_code == 404
    assert decide(client, seeker_headers, application_id, "accepted").status_code == 403


def test_my_applications(client, db, create_job, employer, seeker_headers):
    first = create_job(employer, title="First")
    second = create_job(employer, title="Second")
    apply(client, seeker_headers, first.id)
    apply(client, seeker_headers, second.id)

    response = client.get("/api/v1/applications/my", headers=seeker_headers)
    assert response.status_code == 200
    titles = [item["job"]["title"] for item in response.json()]
    assert sorted(titles) == ["First", "Second"]
    assert response.json()[0]["job"]["company_name"] == "Acme Corp"


def test_applicant_job_details(client, db, create_user, create_job, login, employer, seeker_headers):
    job = create_job(employer)
    apply(client, seeker_headers, job.id)

    # Still visible to the applicant after the job leaves the listing
    db.query(Job).filter(Job.id == job.id).update({Job.status: JobStatus.REJECTED})
    db.commit()

    response = client.get(f"/api/v1/applications/job/{job.id}/details", headers=seeker_headers)
    assert response.status_code == 200
    assert response.json()["application_status"] == "pending"
    assert response.json()["status"] == "rejected"

    stranger = login(create_user(Role.JOBSEEKER))
    assert client.get(f"/api/v1/applications/job/{job.id}/details", headers=stranger).status_code == 403


def test_duplicate_pair_rejected_by_database(db, create_job, employer, seeker):
    job = create_job(employer)
    db.add(Application(job_id=job.id, user_id=seeker.id))
    db.commit()
    db.add(Application(job_id=job.id, user_id=seeker.id))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
