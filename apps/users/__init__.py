"""Users app package.

This module initializes the users app: a custom user model that logs in
by email, the member/staff/admin role model with its single
authorisation function (``apps.users.access``), authentication
endpoints and the admin user-management API. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
