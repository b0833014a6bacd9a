"""Registration form client."""

from .form import FormInput, FormState, RegistrationForm, SubmissionInProgress, build_payload

__all__ = ["FormInput", "FormState", "RegistrationForm", "SubmissionInProgress", "build_payload"]
