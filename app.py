import aws_cdk as cdk
from config import get_config
from stacks.certificate_stack import CertificateStack

app = cdk.App()
config = get_config(app)

# =================================================================
# CERTIFICATE STACK (Global - us-east-1)
# =================================================================
# ACM Certificates for CloudFront must be created in us-east-1.
cert_env = cdk.Environment(account=config.account, region="us-east-1")
cert_stack = CertificateStack(
    app, f"DNSValidatedCertificate-{config.name}",
    config=config,
    env=cert_env
)

app.synth()
