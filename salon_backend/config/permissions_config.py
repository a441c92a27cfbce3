"""
Permissions and Roles Configuration
This config defines the permission matrix for every governed table and role.
It is loaded once at startup by the authorization engine and mirrored into the
database by the seed script for admin tooling.
"""

from salon_backend.modules.authorization.domain import Action, ResourceType, Role

C = Action.CREATE
R = Action.READ
U = Action.UPDATE
D = Action.DELETE

CRUD = (C, R, U, D)

ADMINISTRATOR = Role.ADMINISTRATOR
OWNER = Role.OWNER
EMPLOYEE = Role.EMPLOYEE
CLIENT = Role.CLIENT

# Allowed actions per table and role. A missing role means no actions.
PERMISSION_TABLE = {
    # 1. Users and roles
    ResourceType.USERS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R,),  # Own profile only
        CLIENT: (R,),  # Own profile only
    },
    ResourceType.ROLES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.LOGS: {
        ADMINISTRATOR: CRUD,
        OWNER: (),
        EMPLOYEE: (),
        CLIENT: (),
    },

    # 2. Clients and employees
    ResourceType.CLIENTS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (R, U),  # Own record
    },
    ResourceType.EMPLOYEES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own record
        CLIENT: (),
    },
    ResourceType.EMPLOYEE_ABSENCES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own absences
        CLIENT: (),
    },
    ResourceType.EMPLOYEE_SCHEDULES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own schedule
        CLIENT: (),
    },

    # 3. Appointments and calendar
    ResourceType.APPOINTMENTS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R, U),  # Assigned appointments
        CLIENT: (C, R, U),  # Own appointments
    },
    ResourceType.APPOINTMENT_SERVICES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Assigned appointments
        CLIENT: (),
    },
    ResourceType.APPOINTMENT_STATUSES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.GOOGLE_CALENDARS: {
        ADMINISTRATOR: CRUD,
        OWNER: (),
        EMPLOYEE: (R, U),  # Own calendar
        CLIENT: (),
    },
    ResourceType.GOOGLE_CALENDAR_EVENTS: {
        ADMINISTRATOR: CRUD,
        OWNER: (),
        EMPLOYEE: (R, U),  # Own calendar
        CLIENT: (),
    },

    # 4. Products and services catalog
    ResourceType.SERVICES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R,),
        CLIENT: (R,),
    },
    ResourceType.SERVICE_CATEGORIES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.PRODUCTS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R,),  # View and sell
        CLIENT: (R,),
    },
    ResourceType.PRODUCT_CATEGORIES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.PRODUCT_SALE_DETAILS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own sales
        CLIENT: (),
    },
    ResourceType.PRODUCT_SALES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own sales
        CLIENT: (),
    },
    ResourceType.PROMOTIONS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R,),
        CLIENT: (R,),
    },
    ResourceType.PROMOTION_PRODUCTS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.PROMOTION_SERVICES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (),
    },

    # 5. Payments and billing
    ResourceType.PAYMENTS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R, U),  # Own payments
        CLIENT: (R,),  # Own payments
    },
    ResourceType.PAYMENT_METHODS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.PAYMENT_STATUSES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },

    # 6. Communications (email and notifications)
    ResourceType.EMAIL_TEMPLATES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.SCHEDULED_EMAILS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R,),  # Pending ones
        CLIENT: (),
    },
    ResourceType.SENT_EMAILS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R,),  # Own
        CLIENT: (),
    },
    ResourceType.NOTIFICATIONS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own
        CLIENT: (R, U),  # Own
    },
    ResourceType.PUSH_NOTIFICATIONS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # Own
        CLIENT: (R, U),  # Own
    },
    ResourceType.SENT_PUSH_NOTIFICATIONS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R,),  # Own
        CLIENT: (),
    },

    # 7. Media and galleries
    ResourceType.MEDIA: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R,),
        CLIENT: (R,),
    },
    ResourceType.MEDIA_TYPES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.GALLERIES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.GALLERY_MEDIA: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.GALLERY_CATEGORIES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.GALLERY_CATEGORY_LINKS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.CAROUSELS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.CAROUSEL_MEDIA: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (),
        CLIENT: (),
    },

    # 8. Settings and others
    ResourceType.SETTINGS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.GOOGLE_SETTINGS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (),
        CLIENT: (),
    },
    ResourceType.SPECIALTIES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R,),
        CLIENT: (R,),
    },
    ResourceType.EMPLOYEE_SPECIALTIES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R, U),  # Own specialties
        CLIENT: (),
    },
    ResourceType.EMPLOYEE_SERVICES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R, U),  # Own services
        CLIENT: (),
    },
    ResourceType.CLIENT_FILES: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R, U),  # Files of any client
        CLIENT: (R, U),  # Own file
    },
    ResourceType.CLIENT_SERVICE_HISTORY: {
        ADMINISTRATOR: CRUD,
        OWNER: (R,),
        EMPLOYEE: (R, U),  # History of served clients
        CLIENT: (R,),  # Own history
    },
    ResourceType.REVIEWS: {
        ADMINISTRATOR: CRUD,
        OWNER: (R, U),
        EMPLOYEE: (R, U),  # Reviews about them
        CLIENT: (C, R, U),  # Own reviews
    },
}

# Display grouping used by the capability export
DOMAINS = {
    "identity": (
        ResourceType.USERS,
        ResourceType.ROLES,
        ResourceType.LOGS,
    ),
    "personnel": (
        ResourceType.CLIENTS,
        ResourceType.EMPLOYEES,
        ResourceType.EMPLOYEE_ABSENCES,
        ResourceType.EMPLOYEE_SCHEDULES,
    ),
    "scheduling": (
        ResourceType.APPOINTMENTS,
        ResourceType.APPOINTMENT_SERVICES,
        ResourceType.APPOINTMENT_STATUSES,
        ResourceType.GOOGLE_CALENDARS,
        ResourceType.GOOGLE_CALENDAR_EVENTS,
    ),
    "catalog": (
        ResourceType.SERVICES,
        ResourceType.SERVICE_CATEGORIES,
        ResourceType.PRODUCTS,
        ResourceType.PRODUCT_CATEGORIES,
        ResourceType.PRODUCT_SALE_DETAILS,
        ResourceType.PRODUCT_SALES,
        ResourceType.PROMOTIONS,
        ResourceType.PROMOTION_PRODUCTS,
        ResourceType.PROMOTION_SERVICES,
    ),
    "payments": (
        ResourceType.PAYMENTS,
        ResourceType.PAYMENT_METHODS,
        ResourceType.PAYMENT_STATUSES,
    ),
    "communications": (
        ResourceType.EMAIL_TEMPLATES,
        ResourceType.SCHEDULED_EMAILS,
        ResourceType.SENT_EMAILS,
        ResourceType.NOTIFICATIONS,
        ResourceType.PUSH_NOTIFICATIONS,
        ResourceType.SENT_PUSH_NOTIFICATIONS,
    ),
    "media": (
        ResourceType.MEDIA,
        ResourceType.MEDIA_TYPES,
        ResourceType.GALLERIES,
        ResourceType.GALLERY_MEDIA,
        ResourceType.GALLERY_CATEGORIES,
        ResourceType.GALLERY_CATEGORY_LINKS,
        ResourceType.CAROUSELS,
        ResourceType.CAROUSEL_MEDIA,
    ),
    "settings": (
        ResourceType.SETTINGS,
        ResourceType.GOOGLE_SETTINGS,
        ResourceType.SPECIALTIES,
        ResourceType.EMPLOYEE_SPECIALTIES,
        ResourceType.EMPLOYEE_SERVICES,
        ResourceType.CLIENT_FILES,
        ResourceType.CLIENT_SERVICE_HISTORY,
        ResourceType.REVIEWS,
    ),
}

# Owner column for tables checked by the generic fallback, when not the default
GENERIC_OWNER_FIELDS = {
    ResourceType.USERS: "id",
}

ROLE_DESCRIPTIONS = {
    ADMINISTRATOR: "Full access to every table",
    OWNER: "Salon owner; reads most data and manages the catalog",
    EMPLOYEE: "Staff member; works with their own appointments, sales and schedule",
    CLIENT: "Customer; manages their own appointments, reviews and profile",
}


def get_permission_rows():
    """
    Flatten the matrix into rows for the permissions/roles tables
    Format: {
        "permissions": [
            {"name": "appointments:read", "resource": "appointments", "action": "read", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "client", "description": "...", "permissions": ["appointments:create", ...]},
            ...
        ]
    }
    """
    permissions = []
    roles = []

    for resource_type in PERMISSION_TABLE:
        for action in Action:
            permissions.append({
                "name": f"{resource_type.value}:{action.value}",
                "resource": resource_type.value,
                "action": action.value,
                "description": f"{action.value.capitalize()} {resource_type.value.replace('_', ' ')}"
            })

    for role in Role:
        role_permissions = []
        for resource_type, grants in PERMISSION_TABLE.items():
            for action in grants.get(role, ()):
                role_permissions.append(f"{resource_type.value}:{action.value}")
        roles.append({
            "name": role.value,
            "description": ROLE_DESCRIPTIONS[role],
            "permissions": sorted(role_permissions)
        })

    return {
        "permissions": permissions,
        "roles": roles
    }
