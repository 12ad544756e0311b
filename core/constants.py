# core/constants.py
USER_ROLE_CHOICES = (
    ('client', 'Client'),
    ('freelancer', 'Freelancer'),
    ('admin', 'Admin'),
)

JOB_STATUS_CHOICES = (
    ('open', 'Open'),                        # Posted, accepting offers or pickup
    ('assigned', 'Assigned'),                # Offer accepted or job picked up
    ('work_done', 'Work Done'),              # Freelancer finished, awaiting payment
    ('completed', 'Completed'),              # Client paid
    ('fully_completed', 'Fully Completed'),  # Payment receipt confirmed
    ('cancelled', 'Cancelled'),              # Withdrawn by the client before assignment
)

# Allowed job status transitions: current status -> statuses reachable from it
JOB_STATUS_TRANSITIONS = {
    'open': ('assigned', 'cancelled'),
    'assigned': ('work_done',),
    'work_done': ('completed',),
    'completed': ('fully_completed',),
    'fully_completed': (),
    'cancelled': (),
}

ACTIVE_JOB_STATUSES = ('open', 'assigned', 'work_done')
HISTORY_JOB_STATUSES = ('completed', 'fully_completed', 'cancelled')

GENDER_PREFERENCE_CHOICES = (
    ('Male', 'Male'),
    ('Female', 'Female'),
    ('Any', 'Any'),
)

PICKUP_METHOD_CHOICES = (
    ('direct', 'Direct'),   # Assigned through an accepted offer
    ('pickup', 'Pickup'),   # Taken directly by the freelancer
)

OFFER_STATUS_CHOICES = (
    ('pending', 'Pending'),      # Freelancer offered, awaiting client response
    ('accepted', 'Accepted'),    # Client accepted the offer
    ('rejected', 'Rejected'),    # Client rejected the offer
)

PAYMENT_METHOD_CHOICES = (
    ('cash', 'Cash'),
    ('upi', 'UPI'),
)

PAYMENT_ORDER_STATUS_CHOICES = (
    ('pending', 'Pending'),
    ('completed', 'Completed'),
    ('failed', 'Failed'),
    ('cancelled', 'Cancelled'),                            # Superseded locally; may still be paid at the gateway
    ('needs_reconciliation', 'Needs Reconciliation'),      # Paid at the gateway after the job was settled
)

COMMISSION_STATUS_CHOICES = (
    ('pending', 'Pending'),
    ('paid', 'Paid'),
)

WALLET_TRANSACTION_TYPE_CHOICES = (
    ('credit', 'Credit'),
    ('debit', 'Debit'),
)

WALLET_TRANSACTION_STATUS_CHOICES = (
    ('pending', 'Pending'),
    ('completed', 'Completed'),
)

REVIEW_STATUS_CHOICES = (
    ('pending', 'Pending'),
    ('approved', 'Approved'),
    ('rejected', 'Rejected'),
)
