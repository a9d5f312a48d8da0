import logging
from contextlib import contextmanager

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

# --- Ignorable outcomes on the Delete path ---
CERTIFICATE_NOT_FOUND = 'ResourceNotFoundException'
RECORD_ALREADY_ABSENT = 'InvalidChangeBatch'
RECORD_SET_MISSING = 'NoSuchHostedZone'


class CertificateError(Exception):
    """Base class for conditions raised by the certificate handler itself."""


class ValidationRecordsTimeout(CertificateError):
    pass


class IssuanceTimeout(CertificateError):
    pass


class CertificateIssuanceFailed(CertificateError):
    def __init__(self, status, failure_reason=None):
        self.status = status
        self.failure_reason = failure_reason
        message = f'Bad status "{status}"'
        if failure_reason:
            message += f' ({failure_reason})'
        super().__init__(message)


def error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', '')


@contextmanager
def ignore_client_errors(*error_codes):
    """
    Suppresses a boto ClientError only when its code is one of `error_codes`.
    Any other ClientError, and every other exception, propagates unchanged.
    """
    try:
        yield
    except ClientError as e:
        code = error_code(e)
        if code not in error_codes:
            raise
        logger.warning(f"Ignoring {code}: {e}")
