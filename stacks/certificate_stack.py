import tldextract
from aws_cdk import (
    Stack,
    CfnOutput,
    CustomResource,
    Duration,
    aws_certificatemanager as acm,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_route53 as route53
)
from constructs import Construct

# Must exceed the handler's worst-case polling:
# 10 x (metadata wait + 10s) for validation records plus 15 x 20s for issuance.
HANDLER_TIMEOUT = Duration.minutes(15)

# Bundled public suffix snapshot only, so synth never goes to the network
OFFLINE_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())

class CertificateStack(Stack):
    """
    Deploys a DNS-validated ACM certificate through a custom resource:
    1. Lambda handler that requests the certificate, publishes the validation
       records in Route53 and waits for issuance (and reverses it on delete).
    2. Least-privilege IAM permissions for ACM and the hosted zone.
    3. The Custom::DNSValidatedCertificate resource itself.
    Note: Deploy in us-east-1 when the certificate is meant for CloudFront.
    """
    def __init__(self, scope: Construct, construct_id: str, config, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # 1. HOSTED ZONE
        # =================================================================
        # Extract the Root Zone (e.g., 'example.com' from 'sub.example.com')
        extracted = OFFLINE_EXTRACT(config.domain_name.lstrip("*."))
        zone_name = f"{extracted.domain}.{extracted.suffix}"

        if config.hosted_zone_id:
            hosted_zone = route53.HostedZone.from_hosted_zone_attributes(self, "HostedZone",
                hosted_zone_id=config.hosted_zone_id,
                zone_name=zone_name
            )
        else:
            hosted_zone = route53.HostedZone.from_lookup(self, "HostedZone",
                domain_name=zone_name
            )

        # =================================================================
        # 2. CERTIFICATE HANDLER FUNCTION
        # =================================================================
        self.handler_fn = lambda_.Function(self, "DNSValidatedCertificateFn",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler="main.lambda_handler",
            code=lambda_.Code.from_asset("lambda/dns_certificate"),
            timeout=HANDLER_TIMEOUT,
            environment={
                "LOG_LEVEL": config.log_level
            }
        )

        # =================================================================
        # 3. PERMISSIONS & LEAST PRIVILEGE
        # =================================================================
        self.handler_fn.add_to_role_policy(iam.PolicyStatement(
            actions=["route53:ChangeResourceRecordSets", "route53:ListResourceRecordSets"],
            resources=[hosted_zone.hosted_zone_arn]
        ))
        # ACM does not support resource-level permissions for RequestCertificate
        self.handler_fn.add_to_role_policy(iam.PolicyStatement(
            actions=["acm:RequestCertificate", "acm:DescribeCertificate", "acm:DeleteCertificate"],
            resources=["*"]
        ))

        # =================================================================
        # 4. CUSTOM RESOURCE
        # =================================================================
        certificate_resource = CustomResource(self, "Certificate",
            service_token=self.handler_fn.function_arn,
            resource_type="Custom::DNSValidatedCertificate",
            properties={
                "DomainName": config.domain_name,
                "HostedZoneId": hosted_zone.hosted_zone_id,
                "SubjectAlternativeNames": config.subject_alternative_names
            }
        )

        self.certificate_arn = certificate_resource.get_att_string("CertificateArn")
        self.certificate = acm.Certificate.from_certificate_arn(self, "DNSValidatedCertificate",
            self.certificate_arn
        )

        CfnOutput(self, "CertificateArn", value=self.certificate_arn)
