"""
Profile completion scoring

The score gates employer job posting, so the weights below are part of the
API contract. Seeker and employer weights each add up to 100 together with
the registration base.
"""
from jobboard.models import Role, User

BASE_SCORE = 20

SEEKER_WEIGHTS = (
    ("phone", 10),
    ("location", 10),
    ("resume", 20),
    ("skills", 15),
    ("education", 15),
    ("experience", 10),
)

# Logo and tax id are optional and not scored
EMPLOYER_WEIGHTS = (
    ("company_name", 20),
    ("company_website", 15),
    ("industry", 15),
    ("company_size", 15),
    ("company_description", 35),
)

EMPLOYER_REQUIRED_FIELDS = tuple(field for field, _ in EMPLOYER_WEIGHTS)


def _filled(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def calculate_profile_completion(user: User) -> int:
    """Completion percentage (0-100) for a user record"""
    if user.role == Role.JOBSEEKER:
        weights = SEEKER_WEIGHTS
    elif user.role == Role.EMPLOYER:
        weights = EMPLOYER_WEIGHTS
    else:
        weights = ()

    score = BASE_SCORE + sum(weight for field, weight in weights if _filled(getattr(user, field, None)))
    return min(score, 100)


def is_employer_ready(user: User) -> bool:
    """Employer has a full profile; every required field is checked again explicitly"""
    return calculate_profile_completion(user) == 100 and all(
        _filled(getattr(user, field, None)) for field in EMPLOYER_REQUIRED_FIELDS
    )


def refresh_profile_completion(user: User) -> int:
    """Recompute the cached score on the record; the caller commits"""
    user.profile_completion = calculate_profile_completion(user)
    return user.profile_completion
