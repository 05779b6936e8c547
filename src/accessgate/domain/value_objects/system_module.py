"""System modules that scope permissions."""

from enum import StrEnum


class SystemModule(StrEnum):
    """Functional areas of the portal."""

    USERS = "users"
    HR = "hr"
    DASHBOARD = "dashboard"
    HELPDESK = "helpdesk"
    DOCUMENTS = "documents"
    ASSETS = "assets"
    PROJECTS = "projects"
    TIMESHEET = "timesheet"
    INVOICING = "invoicing"
    TIME_TRACKING = "time-tracking"
    NOTIFICATIONS = "notifications"
    CRM = "crm"
    ADMIN = "admin"
