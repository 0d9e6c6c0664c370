"""
URL mappings for the medi-ease API.

Paths mirror the ones the front-end calls, so trailing slashes are
deliberately omitted and the mixed naming (``registeredCamps``,
``camp-details``) is kept.
"""
from django.urls import path, include

from .views import analytics, camps, feedback, health, payments, registrations, users

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Public
    path('userInfo', users.user_info, name='user_info'),
    path('popular-camps', camps.popular_camps, name='popular_camps'),
    path('all-camps', camps.all_camps, name='all_camps'),
    path('ratings', feedback.ratings, name='ratings'),
    # Participant
    path('user/camp-details/<int:pk>', camps.camp_details, name='camp_details'),
    path('user/join-camp', registrations.join_camp, name='join_camp'),
    path('user/registeredCamps', registrations.registered_camps, name='registered_camps'),
    path('user/camp-cancel/<int:pk>', registrations.camp_cancel, name='camp_cancel'),
    path('user/participant-camp-count', registrations.participant_camp_count, name='participant_camp_count'),
    path('user/is-joined', registrations.is_joined, name='is_joined'),
    path('user/camp-participant/<int:pk>', registrations.camp_participant, name='camp_participant'),
    path('user/feedback', feedback.submit_feedback, name='submit_feedback'),
    path('user/analytics', analytics.participant_analytics, name='participant_analytics'),
    path('user/role/<str:email>', users.user_role, name='user_role'),
    path('participant/updateProfile/<str:email>', users.participant_update_profile, name='participant_update_profile'),
    # Admin
    path('admin/add-camp', camps.add_camp, name='add_camp'),
    path('admin/get-camps', camps.admin_camps, name='admin_camps'),
    path('admin/camps/count', camps.admin_camps_count, name='admin_camps_count'),
    path('admin/get-registered-camps', registrations.admin_registered_camps, name='admin_registered_camps'),
    path('admin/registeredCamp/count', registrations.admin_registered_count, name='admin_registered_count'),
    path('admin/camp-confirm/<int:pk>', registrations.camp_confirm, name='camp_confirm'),
    path('admin/register-camp-delete/<int:pk>', registrations.register_camp_delete, name='register_camp_delete'),
    path('admin/campUpdate/<int:pk>', camps.update_camp, name='update_camp'),
    path('admin/deleteCamp/<int:pk>', camps.delete_camp, name='delete_camp'),
    path('admin/analytics', analytics.admin_analytics, name='admin_analytics'),
    path('admin/updateProfile/<str:email>', users.admin_update_profile, name='admin_update_profile'),
    # Payments
    path('create-payment-intent', payments.create_payment_intent, name='create_payment_intent'),
    path('payment/save-history', payments.save_payment_history, name='save_payment_history'),
    path('payment/history', payments.payment_history, name='payment_history'),
    path('payment/participant-payment-count', payments.participant_payment_count, name='participant_payment_count'),
]
