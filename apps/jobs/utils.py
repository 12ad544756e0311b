import logging
import re

from django.conf import settings
from django.core.mail import send_mail
from twilio.base.exceptions import TwilioException
from twilio.rest import Client as TwilioClient

logger = logging.getLogger(__name__)

PHONE_NUMBER_PATTERN = re.compile(r'^\+\d{9,15}$')


def send_notification(user, subject, email_message, sms_message=None):
    """
    Send notifications to users via email and SMS.

    Delivery failures are logged and never raised.

    Args:
        user: User object to send notification to
        subject: Email subject
        email_message: Email message content
        sms_message: SMS message content, defaults to the email message
    """
    if user.email:
        try:
            send_mail(
                subject=subject,
                message=email_message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
                fail_silently=False,
            )
            logger.info(f"Email notification sent to user {user.id}")
        except Exception as e:
            logger.error(f"Failed to send email to {user.email}: {str(e)}")

    if not user.phone_number or not settings.TWILIO_ACCOUNT_SID:
        return
    if not PHONE_NUMBER_PATTERN.match(user.phone_number):
        logger.warning(f"Invalid phone number format for user {user.id}: {user.phone_number}")
        return
    try:
        twilio_client = TwilioClient(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        twilio_client.messages.create(
            body=sms_message or email_message,
            from_=settings.TWILIO_PHONE_NUMBER,
            to=user.phone_number
        )
        logger.info(f"SMS notification sent to user {user.id}")
    except TwilioException as e:
        logger.error(f"Failed to send SMS to {user.phone_number}: {str(e)}")
