from django.urls import path
from .views import (
    JobCreateView, ClientActiveJobsView, ClientJobHistoryView, ClientJobDetailView,
    AcceptOfferView, RejectOfferView, ClientCompleteJobView, ClientCancelJobView,
    AvailableJobsView, FreelancerAssignedJobsView, PickupJobView, MakeOfferView,
    OfferCooldownView, MarkWorkDoneView, FreelancerConfirmCompletionView,
)

urlpatterns = [
    path('client/post-job', JobCreateView.as_view(), name='post_job'),
    path('client/my-jobs', ClientActiveJobsView.as_view(), name='client_my_jobs'),
    path('client/job-history', ClientJobHistoryView.as_view(), name='client_job_history'),
    path('client/job/<int:id>', ClientJobDetailView.as_view(), name='client_job_detail'),
    path('client/job/<int:id>/complete', ClientCompleteJobView.as_view(), name='client_job_complete'),
    path('client/job/<int:id>/cancel', ClientCancelJobView.as_view(), name='client_job_cancel'),
    path('client/accept-offer/<int:job_id>', AcceptOfferView.as_view(), name='accept_offer'),
    path('client/reject-offer/<int:job_id>', RejectOfferView.as_view(), name='reject_offer'),
    path('jobs/available', AvailableJobsView.as_view(), name='available_jobs'),
    path('freelancer/assigned-jobs', FreelancerAssignedJobsView.as_view(), name='freelancer_assigned_jobs'),
    path('freelancer/pickup-job/<int:job_id>', PickupJobView.as_view(), name='pickup_job'),
    path('freelancer/make-offer/<int:job_id>', MakeOfferView.as_view(), name='make_offer'),
    path('freelancer/offer-cooldown/<int:job_id>', OfferCooldownView.as_view(), name='offer_cooldown'),
    path('freelancer/mark-complete/<int:job_id>', MarkWorkDoneView.as_view(), name='mark_work_done'),
    path('freelancer/confirm-completion/<int:job_id>', FreelancerConfirmCompletionView.as_view(), name='confirm_completion'),
]
