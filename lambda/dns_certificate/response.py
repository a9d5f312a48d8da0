import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict

from models import HandlerResult

logger = logging.getLogger(__name__)

RESPONSE_TIMEOUT_SECONDS = 30


def build_body(event: Dict[str, Any], context: Any, result: HandlerResult) -> Dict[str, Any]:
    log_stream = getattr(context, 'log_stream_name', 'unknown')
    return {
        'Status': result.status,
        'Reason': result.reason or f"See the details in CloudWatch Log Stream: {log_stream}",
        # Without a certificate yet, fall back to the log stream like cfnresponse does
        'PhysicalResourceId': result.physical_resource_id or log_stream,
        'StackId': event.get('StackId'),
        'RequestId': event.get('RequestId'),
        'LogicalResourceId': event.get('LogicalResourceId'),
        'NoEcho': False,
        'Data': result.data,
    }


def send(event: Dict[str, Any], context: Any, result: HandlerResult) -> None:
    """
    PUTs the result to the pre-signed ResponseURL of the CloudFormation event.
    Delivery problems are logged; CloudFormation times the resource out itself.
    """
    response_url = event.get('ResponseURL')
    body = build_body(event, context, result)
    logger.info(f"Response body: {json.dumps(body)}")

    if not response_url:
        logger.error("Missing ResponseURL in event; cannot report status")
        return

    data = json.dumps(body).encode('utf-8')
    request = urllib.request.Request(
        response_url,
        data=data,
        headers={'Content-Type': '', 'Content-Length': str(len(data))},
        method='PUT'
    )
    try:
        with urllib.request.urlopen(request, timeout=RESPONSE_TIMEOUT_SECONDS) as resp:
            logger.info(f"CloudFormation response status: {resp.status}")
    except (urllib.error.URLError, OSError, http.client.HTTPException) as e:
        # Covers HTTPError, read timeouts and dropped connections
        logger.error(f"Failed to send response to CloudFormation: {e}")
