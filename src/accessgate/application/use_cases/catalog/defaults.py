"""Default permission catalog and roles seeded into an empty store."""

import re

from accessgate.domain.entities import Permission
from accessgate.domain.value_objects import PermissionAction as A
from accessgate.domain.value_objects import SystemModule as M

CRUD = (A.CREATE, A.READ, A.UPDATE, A.DELETE)

# (module, name, description, actions, resource)
DEFAULT_PERMISSIONS = (
    (M.USERS, "View Users", "View user list and profiles", (A.READ,), None),
    (M.USERS, "Manage Users", "Create, update, and delete users", CRUD, None),
    (M.USERS, "Assign User Roles", "Assign roles to users", (A.ASSIGN,), None),
    (M.DASHBOARD, "View Dashboard", "View dashboard metrics and widgets", (A.READ,), None),
    (M.DASHBOARD, "Manage Dashboard", "Customize dashboard layout and widgets", (A.READ, A.UPDATE), None),
    (M.DASHBOARD, "Export Dashboard Data", "Export dashboard metrics and reports", (A.EXPORT,), None),
    (M.HR, "View HR Data", "View HR information", (A.READ,), None),
    (M.HR, "Manage HR Data", "Create, update, and delete HR information", CRUD, None),
    (M.HR, "View Employees", "View employee profiles and information", (A.READ,), "employee"),
    (M.HR, "Manage Employees", "Create, update, and delete employee records", CRUD, "employee"),
    (M.HR, "View Departments", "View department information", (A.READ,), "department"),
    (M.HR, "Manage Departments", "Create, update, and delete departments", CRUD, "department"),
    (M.HR, "View Leave Requests", "View leave requests", (A.READ,), "leave"),
    (M.HR, "Manage Leave Requests", "Create, update, and delete leave requests", CRUD, "leave"),
    (M.HR, "Approve Leave Requests", "Approve or reject leave requests", (A.APPROVE,), "leave"),
    (M.HR, "View Performance Data", "View performance reviews and goals", (A.READ,), "performance"),
    (M.HR, "Manage Performance Data", "Create, update, and delete performance reviews and goals", CRUD, "performance"),
    (M.DOCUMENTS, "View Documents", "View documents", (A.READ,), None),
    (M.DOCUMENTS, "Manage Documents", "Create, update, and delete documents", CRUD, None),
    (M.DOCUMENTS, "Share Documents", "Share documents with other users", (A.ASSIGN,), None),
    (M.ASSETS, "View Assets", "View asset inventory and details", (A.READ,), None),
    (M.ASSETS, "Manage Assets", "Create, update, and delete asset records", CRUD, None),
    (M.ASSETS, "Assign Assets", "Assign assets to users or departments", (A.ASSIGN,), None),
    (M.ASSETS, "Approve Asset Requests", "Approve or reject asset requests", (A.APPROVE,), None),
    (M.PROJECTS, "View Projects", "View project details and progress", (A.READ,), None),
    (M.PROJECTS, "Manage Projects", "Create, update, and delete projects", CRUD, None),
    (M.PROJECTS, "Assign Project Members", "Assign users to projects", (A.ASSIGN,), None),
    (M.PROJECTS, "Manage Project Tasks", "Create, update, and delete project tasks", CRUD, "task"),
    (M.HELPDESK, "View Tickets", "View support tickets", (A.READ,), None),
    (M.HELPDESK, "Create Tickets", "Create new support tickets", (A.CREATE,), None),
    (M.HELPDESK, "Manage Tickets", "Update and close support tickets", (A.UPDATE, A.DELETE), None),
    (M.HELPDESK, "Assign Tickets", "Assign tickets to support agents", (A.ASSIGN,), None),
    (M.CRM, "View Customers", "View customer information", (A.READ,), None),
    (M.CRM, "Manage Customers", "Create, update, and delete customer records", CRUD, None),
    (M.CRM, "View Leads", "View sales leads", (A.READ,), "lead"),
    (M.CRM, "Manage Leads", "Create, update, and delete sales leads", CRUD, "lead"),
    (M.TIMESHEET, "View Timesheets", "View timesheet entries", (A.READ,), None),
    (M.TIMESHEET, "Manage Timesheets", "Create, update, and delete timesheet entries", CRUD, None),
    (M.TIMESHEET, "Approve Timesheets", "Approve or reject timesheet submissions", (A.APPROVE,), None),
    (M.INVOICING, "View Invoices", "View invoice details", (A.READ,), None),
    (M.INVOICING, "Manage Invoices", "Create, update, and delete invoices", CRUD, None),
    (M.INVOICING, "Approve Invoices", "Approve invoices for payment", (A.APPROVE,), None),
    (M.NOTIFICATIONS, "View Notifications", "View system notifications", (A.READ,), None),
    (M.NOTIFICATIONS, "Manage Notifications", "Create and manage notification settings", CRUD, None),
    (M.ADMIN, "Access Admin Settings", "Access and modify system settings", (A.READ, A.UPDATE), None),
    (M.ADMIN, "Initialize Catalog", "Seed the default permission catalog and roles", (A.MANAGE,), None),
    (M.ADMIN, "Manage Permissions", "Create, update, and delete system permissions", CRUD, "permission"),
    (M.ADMIN, "Manage Roles", "Create, update, and delete user roles", CRUD, "role"),
    (M.ADMIN, "Manage System Configuration", "Configure system-wide settings", (A.READ, A.UPDATE), "config"),
)

# Default role contents, as "module:name" keys into DEFAULT_PERMISSIONS.
MANAGER_PERMISSIONS = (
    "users:View Users",
    "hr:View HR Data",
    "hr:Approve Leave Requests",
    "documents:View Documents",
    "documents:Manage Documents",
)
EMPLOYEE_PERMISSIONS = ("hr:View HR Data", "documents:View Documents")
USER_PERMISSIONS = ("documents:View Documents",)


def permission_id(module: str, name: str) -> str:
    """Stable id for a default permission, e.g. ``perm_hr_view_leave_requests``."""
    slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
    return f"perm_{module.replace('-', '_')}_{slug}"


def build_default_permissions() -> list[Permission]:
    return [
        Permission(
            id=permission_id(module, name),
            name=name,
            description=description,
            module=module,
            actions=actions,
            resource=resource,
        )
        for module, name, description, actions, resource in DEFAULT_PERMISSIONS
    ]


def default_role_specs(
    permissions: list[Permission], superuser_role: str
) -> list[tuple[str, str, str, int, list[str]]]:
    """(id, name, description, level, permission ids) for each default role."""
    by_key = {f"{p.module}:{p.name}": p.id for p in permissions}

    def pick(keys):
        return [by_key[k] for k in keys if k in by_key]

    everything = [p.id for p in permissions]
    # admin gets everything except destructive admin-module permissions
    admin = [
        p.id for p in permissions if p.module != M.ADMIN or A.DELETE not in p.actions
    ]
    return [
        ("role_super_admin", superuser_role, "Super Administrator with full system access", 100, everything),
        ("role_admin", "admin", "Administrator with access to most system functions", 90, admin),
        ("role_manager", "manager", "Manager with access to team management and approvals", 70, pick(MANAGER_PERMISSIONS)),
        ("role_employee", "employee", "Regular employee with basic access", 30, pick(EMPLOYEE_PERMISSIONS)),
        ("role_user", "user", "Basic user with minimal access", 10, pick(USER_PERMISSIONS)),
    ]
