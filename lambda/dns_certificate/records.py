import logging
import os
from typing import Iterable, List

from errors import RECORD_ALREADY_ABSENT, RECORD_SET_MISSING, ignore_client_errors
from models import ValidationRecord

logger = logging.getLogger(__name__)

UPSERT = 'UPSERT'
DELETE = 'DELETE'

# Short TTL so ACM sees new records quickly and deletions converge fast
RECORD_TTL = int(os.environ.get('RECORD_TTL', 60))


def unique_records(records: Iterable[ValidationRecord]) -> List[ValidationRecord]:
    # A wildcard and its apex share one challenge record
    seen = set()
    result = []
    for record in records:
        if record not in seen:
            seen.add(record)
            result.append(record)
    return result


def change_record(route53, hosted_zone_id: str, record: ValidationRecord, action: str) -> None:
    route53.change_resource_record_sets(
        HostedZoneId=hosted_zone_id,
        ChangeBatch={
            'Comment': f'ACM DNS validation ({action})',
            'Changes': [{
                'Action': action,
                'ResourceRecordSet': {
                    'Name': record.name,
                    'Type': record.type,
                    'TTL': RECORD_TTL,
                    'ResourceRecords': [{'Value': record.value}]
                }
            }]
        })


def change_records(route53, hosted_zone_id: str, records: Iterable[ValidationRecord], action: str) -> None:
    """
    Applies one change per validation record, sequentially.

    On DELETE a record that is already gone is skipped so that a partially
    completed teardown can be repeated; any other Route 53 error propagates.
    """
    if action not in (UPSERT, DELETE):
        raise ValueError(f"Unsupported record action: {action}")

    for record in unique_records(records):
        logger.info(f"{action}: {record.name} {record.type}")
        if action == DELETE:
            with ignore_client_errors(RECORD_ALREADY_ABSENT, RECORD_SET_MISSING):
                change_record(route53, hosted_zone_id, record, action)
        else:
            change_record(route53, hosted_zone_id, record, action)
