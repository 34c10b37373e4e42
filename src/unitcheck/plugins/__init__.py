from .base import SuitePlugin
from .registrations import RegistrationFn, Registrations

__all__ = [
    "RegistrationFn",
    "Registrations",
    "SuitePlugin",
]
