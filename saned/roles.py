"""
Role constants for Saned users.

Single source of truth for the role values stored on a user profile.
"""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    STARTUP = "startup"
    STARTUP_FOUNDER = "startup_founder"
    RESEARCH = "research"
    CORPORATE = "corporate"
    GOVERNMENT = "government"
    INVESTOR = "investor"
    INVESTOR_INDIVIDUAL = "investor_individual"
    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"
    ACCELERATOR = "accelerator"
    INCUBATOR = "incubator"
    MENTOR = "mentor"


ROLE_VALUES = [r.value for r in UserRole]

INNOVATOR_TYPES = [r.value for r in UserRole if r is not UserRole.ADMIN]

ROLE_DISPLAY_NAMES = {
    UserRole.ADMIN.value: "Administrator",
    UserRole.STARTUP.value: "Startup",
    UserRole.STARTUP_FOUNDER.value: "Startup Founder",
    UserRole.RESEARCH.value: "Research Institution",
    UserRole.CORPORATE.value: "Corporate",
    UserRole.GOVERNMENT.value: "Government",
    UserRole.INVESTOR.value: "Investor",
    UserRole.INVESTOR_INDIVIDUAL.value: "Individual Investor",
    UserRole.INDIVIDUAL.value: "Individual",
    UserRole.ORGANIZATION.value: "Organization",
    UserRole.ACCELERATOR.value: "Accelerator",
    UserRole.INCUBATOR.value: "Incubator",
    UserRole.MENTOR.value: "Mentor",
}


def is_innovator_type(role: str) -> bool:
    return role in INNOVATOR_TYPES


def display_name(role: str) -> str:
    return ROLE_DISPLAY_NAMES.get(role, role)
