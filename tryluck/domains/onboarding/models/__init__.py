from tryluck.domains.onboarding.models.onboarding import Onboarding  # noqa: F401
