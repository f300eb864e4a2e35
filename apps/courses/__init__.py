"""Courses app package: catalogue, tariffs, tee-time grid settings, condition reports and holidays."""
