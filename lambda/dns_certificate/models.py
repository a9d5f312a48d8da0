from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

SUCCESS = 'SUCCESS'
FAILED = 'FAILED'


class IssuanceStatus(Enum):
    PENDING_VALIDATION = 'PENDING_VALIDATION'
    ISSUED = 'ISSUED'
    FAILED = 'FAILED'
    OTHER = 'OTHER'

    @classmethod
    def parse(cls, value: str) -> 'IssuanceStatus':
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


def resource_properties(event: Dict[str, Any]) -> Dict[str, Any]:
    # Older templates nest the properties under 'Parameters'
    props = event.get('ResourceProperties') or {}
    return props.get('Parameters', props)


@dataclass(frozen=True)
class CertificateRequest:
    domain_name: str
    hosted_zone_id: str
    idempotency_token: str
    subject_alternative_names: Tuple[str, ...] = ()

    @classmethod
    def from_event(cls, event: Dict[str, Any], context: Any) -> 'CertificateRequest':
        """
        Builds the request from the custom resource properties.
        The idempotency token is the invocation's request id without dashes,
        so a retried invocation maps onto the same ACM request.
        """
        props = resource_properties(event)
        san_list = props.get('SubjectAlternativeNames') or []
        if isinstance(san_list, str):
            san_list = san_list.split(',')
        # A CommaDelimitedList parameter defaulting to '' arrives as ['']
        sans = tuple(name.strip() for name in san_list if name and name.strip())

        return cls(
            domain_name=props['DomainName'],
            hosted_zone_id=props['HostedZoneId'],
            idempotency_token=context.aws_request_id.replace('-', ''),
            subject_alternative_names=sans,
        )


@dataclass(frozen=True)
class ValidationRecord:
    name: str
    type: str
    value: str

    @classmethod
    def from_resource_record(cls, resource_record: Dict[str, str]) -> 'ValidationRecord':
        # KeyError here means ACM has not finished computing the record
        return cls(
            name=resource_record['Name'],
            type=resource_record['Type'],
            value=resource_record['Value'],
        )


@dataclass
class HandlerResult:
    """
    Outcome of one invocation. The physical id is carried on failure too,
    so a later Delete can target whatever was created.
    """
    status: str = SUCCESS
    physical_resource_id: Optional[str] = None
    data: Dict[str, str] = field(default_factory=dict)
    reason: Optional[str] = None

    def fail(self, reason: str) -> None:
        self.status = FAILED
        self.reason = reason
