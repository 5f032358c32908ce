"""
Profile completion scoring
"""
from jobboard.models import Role, User
from jobboard.users.completion import (
    BASE_SCORE,
    EMPLOYER_WEIGHTS,
    SEEKER_WEIGHTS,
    calculate_profile_completion,
    is_employer_ready,
    refresh_profile_completion,
)


def make_user(role, **fields):
    return User(role=role, name="Test", email="t@example.com", hashed_password="x", **fields)


def test_new_accounts_start_at_base_score():
    assert calculate_profile_completion(make_user(Role.JOBSEEKER)) == BASE_SCORE
    assert calculate_profile_completion(make_user(Role.EMPLOYER)) == BASE_SCORE
    assert calculate_profile_completion(make_user(Role.ADMIN)) == BASE_SCORE


def test_seeker_weights():
    user = make_user(Role.JOBSEEKER, phone="555", location="Berlin", resume="resumes/a.pdf")
    assert calculate_profile_completion(user) == 20 + 10 + 10 + 20

    user.skills = ["python"]
    user.education = [{"degree": "BSc"}]
    user.experience = [{"title": "Dev"}]
    assert calculate_profile_completion(user) == 100


def test_empty_values_do_not_count():
    user = make_user(Role.JOBSEEKER, phone="   ", location="", skills=[], education=[])
    assert calculate_profile_completion(user) == BASE_SCORE


def test_employer_weights_ignore_logo_and_tax_id():
    user = make_user(Role.EMPLOYER, company_logo="logos/a.png", tax_id="DE123")
    assert calculate_profile_completion(user) == BASE_SCORE

    user.company_name = "Acme"
    user.company_description = "Rockets"
    assert calculate_profile_completion(user) == 20 + 20 + 35


def test_employer_ready_needs_every_company_field():
    user = make_user(
        Role.EMPLOYER,
        company_name="Acme",
        company_website="https://acme.example",
        industry="Software",
        company_size="10",
    )
    assert not is_employer_ready(user)

    user.company_description = "Rockets"
    assert is_employer_ready(user)


def test_refresh_stores_score_on_record():
    user = make_user(Role.JOBSEEKER, phone="555")
    assert refresh_profile_completion(user) == 30
    assert user.profile_completion == 30


FILLED_VALUES = {
    "phone": "555",
    "location": "Berlin",
    "resume": "resumes/a.pdf",
    "skills": ["python"],
    "education": [{"degree": "BSc"}],
    "experience": [{"title": "Dev"}],
    "company_name": "Acme",
    "company_website": "https://acme.example",
    "industry": "Software",
    "company_size": "10",
    "company_description": "Rockets",
}


def test_filling_fields_never_lowers_the_score():
    for role, weights in ((Role.JOBSEEKER, SEEKER_WEIGHTS), (Role.EMPLOYER, EMPLOYER_WEIGHTS)):
        user = make_user(role)
        scores = [calculate_profile_completion(user)]
        for field, _ in weights:
            setattr(user, field, FILLED_VALUES[field])
            scores.append(calculate_profile_completion(user))

        assert scores == sorted(scores)
        assert all(score <= 100 for score in scores)
        assert scores[0] == BASE_SCORE
        assert scores[-1] == 100

        # Extra fields from the other role never push past the cap
        for field, value in FILLED_VALUES.items():
            setattr(user, field, value)
        assert calculate_profile_completion(user) == 100


def test_admin_score_stays_at_base():
    user = make_user(Role.ADMIN)
    for field, value in FILLED_VALUES.items():
        setattr(user, field, value)
        assert calculate_profile_completion(user) == BASE_SCORE
