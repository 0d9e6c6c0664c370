"""
Django admin registrations for the camp models.

Available under ``/django-admin/`` for staff accounts; the API's own
``/admin/...`` routes are unrelated and guarded by the stored role.
"""

from django.contrib import admin

from .models import AuditEvent, Camp, Feedback, Membership, Payment, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'created_at')
    list_filter = ('role',)
    search_fields = ('email', 'name')


@admin.register(Camp)
class CampAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'fee', 'participant_count', 'created_by', 'created_at')
    search_fields = ('name', 'created_by', 'location')


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ('id', 'camp_name', 'participant_email', 'payment_status', 'confirmation_status', 'created_at')
    list_filter = ('payment_status', 'confirmation_status')
    search_fields = ('camp_name', 'participant_email', 'participant_name')


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('transaction_id', 'email', 'camp_name', 'amount', 'paid_at')
    search_fields = ('transaction_id', 'email', 'camp_name')

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('participant_email', 'camp_name', 'rating', 'created_at')
    list_filter = ('rating',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'actor', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
