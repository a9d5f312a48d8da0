import logging
import os
from typing import Any, Dict

import boto3

import response
from certificates import (
    delete_certificate,
    get_validation_records,
    is_certificate_arn,
    request_certificate,
    wait_for_issuance,
)
from errors import CERTIFICATE_NOT_FOUND, ValidationRecordsTimeout, ignore_client_errors
from models import CertificateRequest, HandlerResult, resource_properties
from records import DELETE, UPSERT, change_records

# --- Environment Configuration ---
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Lambda attaches its log handler to the root logger
logger = logging.getLogger()
logger.setLevel(LOG_LEVEL)

# Initialize clients outside the handler for connection re-use
acm = boto3.client('acm')
route53 = boto3.client('route53')


def create(event: Dict[str, Any], context: Any, result: HandlerResult) -> None:
    """
    Requests the certificate, publishes its validation records and waits
    until ACM issues it. The ARN is stored on `result` as soon as it exists.
    """
    request = CertificateRequest.from_event(event, context)
    certificate_arn = request_certificate(acm, request)
    result.physical_resource_id = certificate_arn
    result.data['CertificateArn'] = certificate_arn

    records = get_validation_records(acm, certificate_arn)
    change_records(route53, request.hosted_zone_id, records, UPSERT)
    wait_for_issuance(acm, certificate_arn)


def delete(event: Dict[str, Any], result: HandlerResult) -> None:
    """
    Removes the validation records and then the certificate.
    Everything that may already be gone is tolerated, so Delete can be repeated.
    """
    certificate_arn = result.physical_resource_id
    if not is_certificate_arn(certificate_arn):
        # Create failed before a certificate was requested
        logger.info(f"Nothing to delete for physical id {certificate_arn!r}")
        return

    hosted_zone_id = resource_properties(event)['HostedZoneId']

    records = []
    try:
        with ignore_client_errors(CERTIFICATE_NOT_FOUND):
            records = get_validation_records(acm, certificate_arn)
    except ValidationRecordsTimeout as e:
        logger.warning(f"Skipping record cleanup: {e}")

    change_records(route53, hosted_zone_id, records, DELETE)

    with ignore_client_errors(CERTIFICATE_NOT_FOUND):
        delete_certificate(acm, certificate_arn)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Entry point for the Custom::DNSValidatedCertificate resource.
    Update is handled as Create: a new certificate replaces the old one and
    CloudFormation sends a Delete for the previous ARN afterwards.
    Exactly one response is sent, whatever happens.
    """
    request_type = event.get('RequestType')
    logger.info(
        f"RequestType={request_type} RequestId={event.get('RequestId')} "
        f"LogicalResourceId={event.get('LogicalResourceId')}"
    )
    result = HandlerResult(physical_resource_id=event.get('PhysicalResourceId'))

    try:
        if request_type == 'Delete':
            delete(event, result)
        elif request_type in ('Create', 'Update'):
            create(event, context, result)
        else:
            raise ValueError(f"Unsupported RequestType: {request_type}")
    except Exception as e:
        logger.exception(e)
        result.fail(str(e))

    response.send(event, context, result)
    return response.build_body(event, context, result)
