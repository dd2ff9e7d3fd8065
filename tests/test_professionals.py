import pytest
from sqlalchemy.exc import SQLAlchemyError

from safespace.controllers.professionals import (
    ProfessionalReview,
    ProfessionalsController,
    ReviewError,
    TherapistRegistration,
)
from safespace.schemas.professional import ProfessionalRegistration
from safespace.store import RowNotFound

FORM = {
    "full_name": "Dr. Alex Kim",
    "title": "Clinical Psychologist",
    "specializations": ["Anxiety", "Grief"],
    "languages": ["English", "Hindi"],
    "bio": "Ten years with teens.",
}


@pytest.fixture
def registration(make_session, store, notifier):
    return TherapistRegistration(make_session("pro-1"), store, notifier)


@pytest.fixture
def directory(anonymous, store, notifier):
    return ProfessionalsController(anonymous, store, notifier)


def test_registration_is_pending_until_verified(registration, directory, store):
    professional = registration.register(FORM)

    assert professional.status == "pending"
    assert professional.verified_at is None
    assert store.table("user_roles").first(user_id="pro-1", role="professional") is not None
    assert directory.load_verified() == []

    verified = ProfessionalReview(store).verify(professional.id)

    assert verified.status == "verified"
    assert verified.verified_at is not None
    assert [p.id for p in directory.load_verified()] == [professional.id]


def test_review_only_moves_pending_rows(registration, store):
    professional = registration.register(FORM)
    review = ProfessionalReview(store)

    assert [p.id for p in review.pending()] == [professional.id]
    assert review.reject(professional.id).status == "rejected"
    assert review.pending() == []
    with pytest.raises(ReviewError):
        review.verify(professional.id)
    with pytest.raises(RowNotFound):
        review.verify("missing")


def test_registration_accepts_model(registration):
    form = ProfessionalRegistration(full_name="Jo", title="Counselor", specializations=["ADHD"])
    professional = registration.register(form)
    assert professional.languages == ["English"]


@pytest.mark.parametrize(
    "changes",
    [
        {"full_name": "   "},
        {"title": ""},
        {"specializations": []},
        {"languages": []},
        {"specializations": ["Astrology"]},
        {"languages": ["Klingon"]},
    ],
)
def test_invalid_registration(registration, store, notifier, changes):
    assert registration.register(dict(FORM, **changes)) is None
    assert notifier.last.title == "Missing information"
    assert store.table("professionals").count() == 0


def test_duplicate_registration(registration, store, notifier):
    registration.register(FORM)
    assert registration.register(FORM) is None
    assert notifier.last.title == "Already registered"
    assert store.table("professionals").count() == 1
    assert store.table("user_roles").count(user_id="pro-1") == 1


def test_role_failure_leaves_no_profile(registration, store, notifier, monkeypatch):
    def _broken_role(**values):
        raise SQLAlchemyError("user_roles is read-only")

    monkeypatch.setattr("safespace.controllers.professionals.UserRole", _broken_role)

    assert registration.register(FORM) is None
    assert notifier.last.description == "Registration failed. Please try again."
    assert store.table("professionals").count() == 0
    assert store.table("user_roles").count() == 0
    assert registration.submitting is False


def test_anonymous_registration(anonymous, store, notifier):
    assert TherapistRegistration(anonymous, store, notifier).register(FORM) is None
    assert notifier.last.title == "Sign in required"


def test_directory_filter(directory, make_professional):
    make_professional("a", specializations=["Anxiety"], languages=["English"])
    make_professional("b", specializations=["Grief"], languages=["English", "French"])
    make_professional("c", specializations=["Anxiety"], languages=["French"], status="rejected")
    directory.load_verified()

    assert {p.user_id for p in directory.filter()} == {"a", "b"}
    assert {p.user_id for p in directory.filter(specialization="Anxiety")} == {"a"}
    assert {p.user_id for p in directory.filter(language="French")} == {"b"}
    assert directory.filter(specialization="Grief", language="Spanish") == []
