"""
Database models for the medi-ease backend.

The data model covers users (participants and admins identified by
email), medical camps, the participant<->camp membership records with
their payment and confirmation lifecycle, the append-only payment
ledger, participant feedback and an audit trail.  Camp details are
copied onto memberships, payments and feedback when they are created so
that those records stay readable after a camp is edited or deleted.
"""
from __future__ import annotations

from django.db import models


class Role(models.TextChoices):
    PARTICIPANT = 'participant', 'Participant'
    ADMIN = 'admin', 'Admin'


class PaymentStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PAID = 'paid', 'Paid'


class ConfirmationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'


class User(models.Model):
    """A platform user identified by the email of their identity token.

    This is a domain record, not Django's authentication user: callers
    authenticate with a bearer token issued by the external identity
    provider and the stored ``role`` decides which routes they may use.
    """
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.PARTICIPANT, db_index=True)
    name = models.CharField(max_length=255, blank=True)
    photo_url = models.URLField(max_length=1024, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Camp(models.Model):
    """A medical camp published by an admin."""
    name = models.CharField(max_length=255)
    image = models.URLField(max_length=1024, blank=True)
    fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    scheduled_at = models.DateTimeField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True)
    healthcare_professional = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    # Informational only; joins are not rejected once it is reached.
    capacity = models.PositiveIntegerField(null=True, blank=True)
    participant_count = models.PositiveIntegerField(default=0)
    created_by = models.EmailField(db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        indexes = [
            models.Index(fields=['participant_count'], name='camp_participant_count_idx'),
            models.Index(fields=['created_by', 'created_at'], name='camp_owner_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} (#{self.id})"


class Membership(models.Model):
    """A participant's registration for a camp.

    Created unpaid/pending.  ``payment_status`` moves to paid when a
    payment is recorded and ``confirmation_status`` moves to confirmed
    when an admin accepts the registration.
    """
    camp = models.ForeignKey(Camp, null=True, blank=True, on_delete=models.SET_NULL, related_name='memberships')
    camp_name = models.CharField(max_length=255)
    camp_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    location = models.CharField(max_length=255, blank=True)
    healthcare_professional = models.CharField(max_length=255, blank=True)
    # Email of the admin owning the camp at join time.
    created_by = models.EmailField(db_index=True)
    participant_email = models.EmailField(db_index=True)
    participant_name = models.CharField(max_length=255, blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    gender = models.CharField(max_length=16, blank=True)
    emergency_contact = models.CharField(max_length=64, blank=True)
    payment_status = models.CharField(
        max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID, db_index=True
    )
    confirmation_status = models.CharField(
        max_length=16, choices=ConfirmationStatus.choices, default=ConfirmationStatus.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['camp', 'participant_email'], name='membership_camp_email_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.participant_email} -> {self.camp_name} [{self.payment_status}/{self.confirmation_status}]"


class Payment(models.Model):
    """One row per successful charge; rows are never updated."""
    membership = models.ForeignKey(
        Membership, null=True, blank=True, on_delete=models.SET_NULL, related_name='payments'
    )
    camp_name = models.CharField(max_length=255, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_method = models.CharField(max_length=64, blank=True)
    transaction_id = models.CharField(max_length=255, db_index=True)
    email = models.EmailField(db_index=True)
    payment_status = models.CharField(max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PAID)
    confirmation_status = models.CharField(
        max_length=16, choices=ConfirmationStatus.choices, default=ConfirmationStatus.PENDING
    )
    paid_at = models.DateTimeField(db_index=True)

    class Meta:
        indexes = [
            models.Index(fields=['payment_status', 'paid_at'], name='payment_status_paid_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.transaction_id}: {self.amount} by {self.email}"


class Feedback(models.Model):
    participant_email = models.EmailField(db_index=True)
    participant_name = models.CharField(max_length=255, blank=True)
    photo_url = models.URLField(max_length=1024, blank=True)
    camp = models.ForeignKey(Camp, null=True, blank=True, on_delete=models.SET_NULL, related_name='feedback')
    camp_name = models.CharField(max_length=255, blank=True)
    rating = models.PositiveSmallIntegerField()
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    def __str__(self) -> str:
        return f"{self.participant_email} rated {self.camp_name}: {self.rating}"


class AuditEvent(models.Model):
    actor = models.EmailField(blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.actor}@{self.created_at:%F %T}"
