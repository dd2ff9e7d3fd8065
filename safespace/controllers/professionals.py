# safespace/controllers/professionals.py
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from safespace.controllers.base import Controller
from safespace.core.timezone import utc_now
from safespace.models import Professional, UserRole
from safespace.schemas.professional import ProfessionalRegistration, ProfessionalRow
from safespace.store import StoreError, TableStore

logger = logging.getLogger(__name__)


class ProfessionalsController(Controller):
    """Public directory of verified professionals."""

    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.professionals: List[ProfessionalRow] = []

    def load_verified(self) -> List[ProfessionalRow]:
        try:
            self.professionals = self.store.table("professionals").select(
                status="verified", order_by="created_at", descending=True
            )
        except StoreError as e:
            logger.error("Error loading professionals: %s", e)
        return self.professionals

    def filter(self, specialization: Optional[str] = None, language: Optional[str] = None) -> List[ProfessionalRow]:
        out = self.professionals
        if specialization:
            out = [p for p in out if specialization in p.specializations]
        if language:
            out = [p for p in out if language in p.languages]
        return out


class TherapistRegistration(Controller):
    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.submitting = False

    def register(self, form: Union[ProfessionalRegistration, Dict[str, Any]]) -> Optional[ProfessionalRow]:
        """Create a pending professional profile for the signed-in user.

        The profile stays out of the directory until a reviewer verifies it.
        """
        user_id = self.require_user("Please sign in before registering as a professional.")
        if user_id is None or self.submitting:
            return None

        if not isinstance(form, ProfessionalRegistration):
            try:
                form = ProfessionalRegistration.model_validate(form)
            except ValidationError as e:
                logger.info("Rejected registration form: %s", e)
                self.notifier.error(
                    "Missing information",
                    "Please fill in your name, title, at least one specialization and one language.",
                )
                return None

        professionals = self.store.table("professionals")
        roles = self.store.table("user_roles")

        self.submitting = True
        try:
            if professionals.first(user_id=user_id) is not None:
                self.notifier.error("Already registered", "You already have a professional profile.")
                return None

            has_role = roles.first(user_id=user_id, role="professional") is not None

            # Profile and role are written together or not at all
            with self.store.transaction("professionals") as db:
                row = Professional(
                    user_id=user_id,
                    full_name=form.full_name,
                    title=form.title,
                    specializations=form.specializations,
                    languages=form.languages,
                    bio=form.bio,
                    certification_details=form.certification_details,
                    status="pending",
                )
                db.add(row)
                if not has_role:
                    db.add(UserRole(user_id=user_id, role="professional"))
                db.flush()
                professional = ProfessionalRow.model_validate(row)
        except StoreError as e:
            logger.error("Registration failed: %s", e, exc_info=True)
            self.notifier.error("Error", "Registration failed. Please try again.")
            return None
        finally:
            self.submitting = False

        logger.info("professional %s registered (pending review)", professional.id)
        self.notifier.info(
            "Registration submitted",
            "Your profile will appear in the directory once it has been verified.",
        )
        return professional


class ReviewError(Exception):
    pass


class ProfessionalReview:
    """Moves a pending registration to verified or rejected."""

    def __init__(self, store: TableStore):
        self.store = store

    def _decide(self, professional_id: str, status: str) -> ProfessionalRow:
        table = self.store.table("professionals")
        values = {"status": status, "updated_at": utc_now()}
        if status == "verified":
            values["verified_at"] = values["updated_at"]

        # Only a pending row may change; a concurrent decision loses
        changed = table.update(values, id=professional_id, status="pending")
        if not changed:
            current = table.get(professional_id)
            raise ReviewError(f"professional {professional_id} is already {current.status}")

        logger.info("professional %s %s", professional_id, status)
        return table.get(professional_id)

    def verify(self, professional_id: str) -> ProfessionalRow:
        return self._decide(professional_id, "verified")

    def reject(self, professional_id: str) -> ProfessionalRow:
        return self._decide(professional_id, "rejected")

    def pending(self) -> List[ProfessionalRow]:
        return self.store.table("professionals").select(status="pending", order_by="created_at")
