"""
Deployed stack output lookup.

The FrontendURL and BackendURL values only exist once CloudFormation has
deployed the stack; this module reads them back for the CLI.
"""

import boto3
import structlog
from botocore.exceptions import ClientError
from pydantic import BaseModel
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from chapter3_infra.exceptions import StackNotFoundError, StackOutputsError

logger = structlog.get_logger(__name__)

THROTTLING_ERROR_CODES = {"Throttling", "ThrottlingException", "RequestLimitExceeded"}


class StackOutputs(BaseModel):
    """Public URLs of the deployed application."""

    frontend_url: str
    backend_url: str


def _is_throttling_error(exc: BaseException) -> bool:
    return (
        isinstance(exc, ClientError)
        and exc.response.get("Error", {}).get("Code") in THROTTLING_ERROR_CODES
    )


@retry(
    retry=retry_if_exception(_is_throttling_error),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)
def _describe_stack(client, stack_name: str) -> dict:
    response = client.describe_stacks(StackName=stack_name)
    return response["Stacks"][0]


def _match_output(outputs: dict[str, str], name: str) -> str:
    if name in outputs:
        return outputs[name]
    raise StackOutputsError(f"Stack output '{name}' not found")


def fetch_stack_outputs(
    stack_name: str,
    region: str | None = None,
    client=None,
) -> StackOutputs:
    """
    Read the deployed frontend and backend URLs from CloudFormation.

    Args:
        stack_name: Name of the deployed stack
        region: AWS region, defaults to the boto3 session region
        client: Optional pre-built CloudFormation client

    Returns:
        The resolved stack outputs

    Raises:
        StackNotFoundError: If the stack has not been deployed
        StackOutputsError: If an expected output is missing
    """
    if client is None:
        kwargs = {"region_name": region} if region else {}
        client = boto3.client("cloudformation", **kwargs)

    try:
        stack = _describe_stack(client, stack_name)
    except ClientError as e:
        error = e.response.get("Error", {})
        if error.get("Code") == "ValidationError" and "does not exist" in error.get("Message", ""):
            raise StackNotFoundError(stack_name) from e
        logger.error("Failed to describe stack", stack=stack_name, error=str(e))
        raise

    outputs = {o["OutputKey"]: o["OutputValue"] for o in stack.get("Outputs", [])}
    logger.debug("Fetched stack outputs", stack=stack_name, keys=sorted(outputs))

    return StackOutputs(
        frontend_url=_match_output(outputs, "FrontendURL"),
        backend_url=_match_output(outputs, "BackendURL"),
    )
