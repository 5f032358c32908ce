"""
Email bodies
"""
from html import escape
from typing import Optional

APPLICATION_STATUS_MESSAGES = {
    "shortlisted": "Congratulations! You have been shortlisted for this position.",
    "accepted": "Congratulations! Your application has been accepted!",
    "rejected": "We regret to inform you that your application was not selected for this position.",
}


def welcome(name: str, role: str) -> str:
    note = ""
    if role == "employer":
        note = "<p><strong>Note:</strong> Your account requires admin verification before you can post jobs.</p>"
    return (
        "<h2>Welcome to Job Board!</h2>"
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your account has been created successfully as a <strong>{escape(role)}</strong>.</p>"
        f"{note}"
        "<p>Start exploring opportunities today!</p>"
    )


def password_reset(name: str, reset_url: str) -> str:
    return (
        "<h2>Password Reset Request</h2>"
        f"<p>Hi {escape(name)},</p>"
        "<p>You requested to reset your password. Click the link below to reset it:</p>"
        f'<p><a href="{escape(reset_url, quote=True)}">Reset Password</a></p>'
        "<p>This link will expire in 1 hour.</p>"
        "<p>If you didn't request this, please ignore this email.</p>"
    )


def password_reset_done(name: str) -> str:
    return (
        "<h2>Password Reset Successful</h2>"
        f"<p>Hi {escape(name)},</p>"
        "<p>Your password has been successfully reset.</p>"
        "<p>If you didn't make this change, please contact support immediately.</p>"
    )


def job_reviewed(title: str, status: str, reason: Optional[str] = None) -> str:
    body = (
        f"<h2>Job Posting {escape(status.upper())}</h2>"
        f"<p>Your job posting \"<strong>{escape(title)}</strong>\" has been {escape(status)}.</p>"
    )
    if reason:
        body += f"<p><strong>Reason:</strong> {escape(reason)}</p>"
    return body


def employer_verified() -> str:
    return (
        "<h2>Account Verified!</h2>"
        "<p>Congratulations! Your employer account has been verified.</p>"
        "<p>You can now start posting jobs on our platform.</p>"
    )


def verification_requested(name: str, email: str) -> str:
    return f"<p>{escape(name)} ({escape(email)}) has requested verification.</p>"


def application_submitted(name: str, job_title: str, company: str) -> str:
    return (
        "<h2>Application Submitted Successfully!</h2>"
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your application for <strong>{escape(job_title)}</strong> at "
        f"<strong>{escape(company)}</strong> has been submitted successfully.</p>"
        "<p>We'll notify you once the employer reviews your application.</p>"
        "<p>Good luck!</p>"
    )


def new_application(employer_name: str, applicant_name: str, job_title: str) -> str:
    return (
        "<h2>New Application Received</h2>"
        f"<p>Hi {escape(employer_name)},</p>"
        f"<p><strong>{escape(applicant_name)}</strong> has applied for your job posting: "
        f"<strong>{escape(job_title)}</strong></p>"
        "<p>Please review the application in your dashboard.</p>"
    )


def application_status(name: str, job_title: str, company: str, status: str, notes: Optional[str] = None) -> str:
    body = (
        "<h2>Application Status Update</h2>"
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your application for <strong>{escape(job_title)}</strong> at <strong>{escape(company)}</strong> "
        f"has been <strong>{escape(status)}</strong>.</p>"
        f"<p>{APPLICATION_STATUS_MESSAGES.get(status, '')}</p>"
    )
    if notes:
        body += f"<p><strong>Notes from employer:</strong> {escape(notes)}</p>"
    return body + "<p>Check your dashboard for more details.</p>"
