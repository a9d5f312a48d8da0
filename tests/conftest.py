import os
from types import SimpleNamespace

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

# The handler creates its clients at import time
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

CERT_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/1234abcd-12ab-34cd-56ef-1234567890ab"
REQUEST_ID = "6f1c8a2e-4b7d-4e0a-9a51-3c2f8d7e9b10"


def resource_record(name, value):
    return {"Name": name, "Type": "CNAME", "Value": value}


def certificate(status="PENDING_VALIDATION", options=None, **extra):
    cert = {"CertificateArn": CERT_ARN, "DomainName": "example.com", "Status": status}
    if options is not None:
        cert["DomainValidationOptions"] = options
    cert.update(extra)
    return {"Certificate": cert}


def validation_option(domain, record=None):
    option = {"DomainName": domain, "ValidationMethod": "DNS"}
    if record is not None:
        option["ResourceRecord"] = record
    return option


class FakeZone:
    """
    In-memory stand-in for a Route53 hosted zone that honours UPSERT/DELETE
    the way the service does for single-value record sets.
    """
    def __init__(self, zone_id="Z1"):
        self.zone_id = zone_id
        self.record_sets = {}
        self.calls = []

    def change_resource_record_sets(self, HostedZoneId, ChangeBatch):
        if HostedZoneId != self.zone_id:
            raise ClientError(
                {"Error": {"Code": "NoSuchHostedZone", "Message": f"No hosted zone found with ID: {HostedZoneId}"}},
                "ChangeResourceRecordSets",
            )
        for change in ChangeBatch["Changes"]:
            rrset = change["ResourceRecordSet"]
            key = (rrset["Name"], rrset["Type"])
            value = rrset["ResourceRecords"][0]["Value"]
            self.calls.append((change["Action"], rrset["Name"], rrset["Type"], value, rrset["TTL"]))
            if change["Action"] == "UPSERT":
                self.record_sets[key] = value
            elif change["Action"] == "DELETE":
                if self.record_sets.get(key) != value:
                    raise ClientError(
                        {"Error": {
                            "Code": "InvalidChangeBatch",
                            "Message": f"Tried to delete resource record set [name='{key[0]}', type='{key[1]}'] but it was not found",
                        }},
                        "ChangeResourceRecordSets",
                    )
                del self.record_sets[key]
        return {"ChangeInfo": {"Id": "/change/C1", "Status": "PENDING"}}


@pytest.fixture
def acm_stub():
    client = boto3.client("acm", region_name="us-east-1")
    with Stubber(client) as stubber:
        yield client, stubber


@pytest.fixture
def route53_stub():
    client = boto3.client("route53", region_name="us-east-1")
    with Stubber(client) as stubber:
        yield client, stubber


@pytest.fixture
def fake_zone():
    return FakeZone()


@pytest.fixture
def sleeps(monkeypatch):
    """Records every requested sleep instead of waiting."""
    calls = []
    monkeypatch.setattr("time.sleep", calls.append)
    return calls


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id=REQUEST_ID,
        log_stream_name="2026/10/19/[$LATEST]0123456789abcdef",
    )
