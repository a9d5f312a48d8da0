import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from a .env file
load_dotenv()

class EnvConfig:
    """
    Stores environment-specific configuration for the certificate stack.
    """
    def __init__(
        self,
        env_name: str,
        account: str,
        region: str,
        domain: str,
        hosted_zone_id: Optional[str] = None,
        subject_alternative_names: Optional[List[str]] = None,
        log_level: str = "INFO"
    ):
        self.name = env_name
        self.account = account
        self.region = region
        self.domain_name = domain
        self.hosted_zone_id = hosted_zone_id
        self.subject_alternative_names = subject_alternative_names or []
        self.log_level = log_level

def get_required_env(key: str) -> str:
    """
    Retrieves a required environment variable or raises a RuntimeError if missing.
    """
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"❌ MISSING CONFIG: Required environment variable '{key}' not found in .env")
    return value

def parse_name_list(raw: Optional[str]) -> List[str]:
    """
    Splits a comma-separated list of domain names, dropping blanks.
    """
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]

def get_config(scope) -> EnvConfig:
    """
    Factory function to generate the EnvConfig object based on CDK context.
    Usage: cdk deploy -c env=prod
    """
    # Default to 'dev' environment if no context is provided
    env_name = scope.node.try_get_context("env") or "dev"
    prefix = env_name.upper()

    print(f"🔍 Initializing certificate infrastructure for environment: {prefix}")

    # Load Mandatory Variables
    account = get_required_env(f"{prefix}_ACCOUNT")
    region = get_required_env(f"{prefix}_REGION")
    domain = get_required_env(f"{prefix}_DOMAIN_NAME")

    # Load Optional Variables
    hosted_zone_id = os.getenv(f"{prefix}_HOSTED_ZONE_ID")
    sans = parse_name_list(os.getenv(f"{prefix}_SUBJECT_ALTERNATIVE_NAMES"))
    log_level = os.getenv("LOG_LEVEL", "INFO")

    return EnvConfig(
        env_name=env_name,
        account=account,
        region=region,
        domain=domain,
        hosted_zone_id=hosted_zone_id,
        subject_alternative_names=sans,
        log_level=log_level
    )
