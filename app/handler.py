"""AWS Lambda handler serving the cat feed screen."""
import json
import logging
import os
import boto3
from typing import Dict, Any, Optional, Tuple

from cat_client import CatApiClient
from controller import CatFeedController, FETCH_FAILED_MESSAGE

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


def get_secret(secret_name: str) -> Dict[str, str]:
    """Retrieve secret from AWS Secrets Manager.

    Args:
        secret_name: Name of the secret

    Returns:
        Secret values as dict
    """
    try:
        secrets_client = boto3.client('secretsmanager')
        response = secrets_client.get_secret_value(SecretId=secret_name)
        return json.loads(response['SecretString'])
    except Exception as e:
        logger.error(f"Failed to retrieve secret {secret_name}: {e}")
        raise


def get_api_key() -> Optional[str]:
    """Resolve The Cat API key from Secrets Manager or the environment.

    Returns:
        API key, or None to send anonymous requests
    """
    secret_name = os.environ.get('CAT_API_SECRET_NAME')
    if secret_name:
        return get_secret(secret_name).get('CAT_API_KEY')
    return os.environ.get('CAT_API_KEY') or None


def create_client() -> CatApiClient:
    """Create a Cat API client from environment configuration."""
    return CatApiClient(
        api_key=get_api_key(),
        base_url=os.environ.get('CAT_API_BASE_URL', 'https://api.thecatapi.com/v1'),
        timeout=float(os.environ.get('CAT_API_TIMEOUT', '10'))
    )


def parse_request(event: Dict[str, Any]) -> Tuple[str, Optional[str]]:
    """Extract method and requested count from the event.

    Args:
        event: Lambda event

    Returns:
        Tuple of (method, count_text); count_text is None when not submitted

    Raises:
        ValueError: If the body is not a JSON object
    """
    # API Gateway v2 keeps the method under requestContext.http
    method = event.get('httpMethod') or \
        event.get('requestContext', {}).get('http', {}).get('method', 'GET')
    method = method.upper()

    raw_body = event.get('body')
    if method == 'GET' or not raw_body:
        return method, None

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError:
        raise ValueError("Invalid JSON in request body")

    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")

    count = body.get('count')
    if count is None:
        return method, None

    # Numeric JSON values are accepted as if typed into the field
    return method, str(count)


def response_status(error_message: str) -> int:
    """Map the controller's error label to an HTTP status code."""
    if not error_message:
        return 200
    if error_message == FETCH_FAILED_MESSAGE:
        return 502
    return 400


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Main Lambda handler.

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API response carrying the screen view
    """
    try:
        try:
            method, count_text = parse_request(event)
        except ValueError as e:
            return {
                'statusCode': 400,
                'body': json.dumps({
                    'status': 'error',
                    'message': str(e)
                })
            }

        controller = CatFeedController(create_client())
        try:
            if count_text is None:
                logger.info(f"{method} request, loading default cats")
                controller.activate()
            else:
                logger.info(f"{method} request for {count_text!r} cats")
                controller.set_pending_text(count_text)
                controller.submit()
            view = controller.view()
        finally:
            controller.close()

        status_code = response_status(view['errorMessage'])
        return {
            'statusCode': status_code,
            'body': json.dumps({
                'status': 'success' if status_code == 200 else 'error',
                'view': view
            })
        }

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return {
            'statusCode': 500,
            'body': json.dumps({
                'status': 'error',
                'message': 'Internal server error'
            })
        }
