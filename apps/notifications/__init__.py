"""Notifications app package.

Handles delivery of notifications in-app and via email. Handlers subscribe
to booking domain events; emails are sent asynchronously through Celery.
"""
