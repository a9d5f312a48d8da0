import logging
import os
import time
from typing import Any, Dict, List

from errors import CertificateIssuanceFailed, IssuanceTimeout, ValidationRecordsTimeout
from models import CertificateRequest, IssuanceStatus, ValidationRecord

logger = logging.getLogger(__name__)

# --- Polling Configuration ---
METADATA_POLL_SECONDS = float(os.environ.get('METADATA_POLL_SECONDS', 1))
VALIDATION_ATTEMPTS = int(os.environ.get('VALIDATION_ATTEMPTS', 10))
VALIDATION_POLL_SECONDS = float(os.environ.get('VALIDATION_POLL_SECONDS', 10))
ISSUANCE_ATTEMPTS = int(os.environ.get('ISSUANCE_ATTEMPTS', 15))
ISSUANCE_POLL_SECONDS = float(os.environ.get('ISSUANCE_POLL_SECONDS', 20))


def request_certificate(acm, request: CertificateRequest) -> str:
    """
    Requests a DNS-validated certificate and returns its ARN.
    ACM rejects an empty SubjectAlternativeNames list, so it is only sent
    when there is at least one alternative name.
    """
    args = {
        'DomainName': request.domain_name,
        'IdempotencyToken': request.idempotency_token,
        'ValidationMethod': 'DNS',
    }
    if request.subject_alternative_names:
        args['SubjectAlternativeNames'] = list(request.subject_alternative_names)

    logger.info(f"Requesting certificate: {args}")
    resp = acm.request_certificate(**args)
    certificate_arn = resp['CertificateArn']
    logger.info(f"Certificate requested: {certificate_arn}")
    return certificate_arn


def describe_with_validation_options(acm, certificate_arn: str) -> Dict[str, Any]:
    """Polls until ACM has attached DomainValidationOptions to the certificate."""
    while True:
        cert_info = acm.describe_certificate(CertificateArn=certificate_arn)['Certificate']
        if 'DomainValidationOptions' in cert_info:
            return cert_info
        time.sleep(METADATA_POLL_SECONDS)


def get_validation_records(
    acm,
    certificate_arn: str,
    attempts: int = VALIDATION_ATTEMPTS,
    delay: float = VALIDATION_POLL_SECONDS,
) -> List[ValidationRecord]:
    """
    Returns one ValidationRecord per domain name on the certificate.

    The options appear first and their resource records are filled in later,
    so each attempt waits for the options and then checks every record.
    """
    for attempt in range(attempts):
        cert_info = describe_with_validation_options(acm, certificate_arn)
        dvos = cert_info['DomainValidationOptions']

        try:
            return [ValidationRecord.from_resource_record(dvo['ResourceRecord']) for dvo in dvos]
        except KeyError:
            logger.info(f"Waiting for validation records, attempt {attempt + 1}/{attempts}")
            time.sleep(delay)

    raise ValidationRecordsTimeout(
        f"Timed out waiting for validation records of {certificate_arn} after {attempts} attempts"
    )


def wait_for_issuance(
    acm,
    certificate_arn: str,
    attempts: int = ISSUANCE_ATTEMPTS,
    delay: float = ISSUANCE_POLL_SECONDS,
) -> None:
    for attempt in range(attempts):
        cert_info = acm.describe_certificate(CertificateArn=certificate_arn)['Certificate']
        status = cert_info['Status']

        state = IssuanceStatus.parse(status)
        if state is IssuanceStatus.PENDING_VALIDATION:
            logger.info(f"Waiting for issuance, attempt {attempt + 1}/{attempts}")
            time.sleep(delay)
            continue

        if state is IssuanceStatus.ISSUED:
            logger.info(f"Certificate issued: {certificate_arn}")
            return

        raise CertificateIssuanceFailed(status, cert_info.get('FailureReason'))

    raise IssuanceTimeout(
        f"Timed out waiting for issuance of {certificate_arn}: "
        f"still PENDING_VALIDATION after {attempts} attempts"
    )


def delete_certificate(acm, certificate_arn: str) -> None:
    logger.info(f"Deleting certificate: {certificate_arn}")
    acm.delete_certificate(CertificateArn=certificate_arn)


def is_certificate_arn(value) -> bool:
    return bool(value) and value.startswith('arn:') and ':certificate/' in value
