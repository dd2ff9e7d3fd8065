from safespace.controllers.chat import ChatController
from safespace.controllers.connect import ConnectController
from safespace.controllers.layout import NAV_ITEMS, nav_for, sign_out
from safespace.controllers.learn import LearnController
from safespace.controllers.notify import Notification, Notifier
from safespace.controllers.professionals import (
    ProfessionalReview,
    ProfessionalsController,
    ReviewError,
    TherapistRegistration,
)
from safespace.controllers.reflect import ReflectController
from safespace.controllers.session import SessionContext
from safespace.controllers.stories import StoryError, StoryPlayer
from safespace.controllers.therapist import (
    Conversation,
    TherapistChat,
    TherapistConversations,
    TherapistDashboard,
)
from safespace.controllers.wellness import BoxBreathing, WellnessController, gratitude_ready
