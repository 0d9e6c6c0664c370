"""Camp registration app for the medi-ease backend.

This package contains the models, serializers, services, views and
route registrations implementing the camp registration, payment and
analytics API consumed by the medi-ease front-end.
"""
