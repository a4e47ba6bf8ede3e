"""Input validation package."""

from eazzy.validation.validator import RegistrationValidator

__all__ = ["RegistrationValidator"]
