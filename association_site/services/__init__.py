"""
Services Package

Exports all services for easy importing.
"""

from association_site.services.blob import BlobStore, BlobStoreError, discard_blob, get_blob_store, is_blob_url
from association_site.services.dates import parse_date_only, to_date_only_string, today_utc, utcnow
from association_site.services.mailer import Mailer, get_mailer
from association_site.services.notifications import send_admin_notification, send_confirmation_email

__all__ = [
    'BlobStore',
    'BlobStoreError',
    'discard_blob',
    'get_blob_store',
    'is_blob_url',
    'parse_date_only',
    'to_date_only_string',
    'today_utc',
    'utcnow',
    'Mailer',
    'get_mailer',
    'send_admin_notification',
    'send_confirmation_email',
]
