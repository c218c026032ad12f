"""
Command Line Interface for the Chapter 3 infrastructure.

Provides CLI commands for synthesizing the cloud assembly, summarizing
the synthesized template, and reading the URLs of a deployed stack.
"""

import argparse
import json
import sys
import tempfile
from collections import Counter
from pathlib import Path

import aws_cdk as cdk
import structlog

from chapter3_infra.app import build_app
from chapter3_infra.config import Settings, get_settings
from chapter3_infra.exceptions import (
    AssetDirectoryError,
    StackNotFoundError,
    StackOutputsError,
)
from chapter3_infra.log_config import configure_logging
from chapter3_infra.outputs import fetch_stack_outputs

logger = structlog.get_logger(__name__)


def check_asset_directories(settings: Settings) -> None:
    """Fail early when the container or website sources are missing."""
    source_dir = Path(settings.service.source_dir)
    if not (source_dir / "Dockerfile").is_file():
        raise AssetDirectoryError(f"No Dockerfile found in {source_dir}")

    build_dir = Path(settings.web.build_dir)
    if not build_dir.is_dir():
        raise AssetDirectoryError(f"Web build directory not found: {build_dir}")


def synthesize(
    settings: Settings,
    outdir: str,
    environment: str | None = None,
) -> dict:
    """Synthesize the app into outdir and return the stack template."""
    context = {"environment": environment} if environment else None
    app, stack = build_app(settings, cdk.App(outdir=outdir, context=context))
    assembly = app.synth()
    return assembly.get_stack_by_name(stack.stack_name).template


def summarize_template(stack_name: str, template: dict) -> dict:
    """Count resources by type and list declared outputs."""
    resource_types = Counter(
        resource["Type"] for resource in template.get("Resources", {}).values()
    )
    return {
        "stack_name": stack_name,
        "resource_count": sum(resource_types.values()),
        "resources": dict(sorted(resource_types.items())),
        "outputs": sorted(template.get("Outputs", {})),
    }


def format_output(data: dict, format_type: str = "pretty") -> str:
    """Format output as JSON or pretty print."""
    if format_type == "json":
        return json.dumps(data, indent=2, default=str)

    output = []
    if "stack_name" in data:
        output.append("=" * 60)
        output.append(f"Stack: {data['stack_name']}")
        output.append("=" * 60)

    if "resources" in data:
        output.append(f"Resources ({data['resource_count']}):")
        output.append("-" * 60)
        for resource_type, count in data["resources"].items():
            output.append(f"{count:>4}  {resource_type}")
        output.append("")

    if "outputs" in data:
        output.append("Outputs:")
        output.append("-" * 60)
        for name in data["outputs"]:
            output.append(f"  {name}")
        output.append("")

    if "frontend_url" in data:
        output.append(f"Frontend URL: {data['frontend_url']}")
        output.append(f"Backend URL: http://{data['backend_url']}")

    return "\n".join(output)


def cmd_synth(args, settings: Settings):
    """Synthesize the cloud assembly."""
    try:
        check_asset_directories(settings)
    except AssetDirectoryError as e:
        logger.error("Asset check failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    synthesize(settings, args.output, args.environment)
    logger.info("Synthesized cloud assembly", stack=settings.stack_name, outdir=args.output)


def cmd_describe(args, settings: Settings):
    """Print a summary of the synthesized template."""
    try:
        check_asset_directories(settings)
    except AssetDirectoryError as e:
        logger.error("Asset check failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    with tempfile.TemporaryDirectory(prefix="cdk.out.") as outdir:
        template = synthesize(settings, outdir, args.environment)

    print(format_output(summarize_template(settings.stack_name, template), args.format))


def cmd_outputs(args, settings: Settings):
    """Print the URLs of the deployed stack."""
    stack_name = args.stack_name or settings.stack_name
    try:
        outputs = fetch_stack_outputs(stack_name, region=args.region or settings.region)
    except (StackNotFoundError, StackOutputsError) as e:
        logger.error("Could not read stack outputs", stack=stack_name, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_output(outputs.model_dump(), args.format))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chapter3-infra",
        description="Chapter 3 infrastructure CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Synth command
    synth_parser = subparsers.add_parser("synth", help="Synthesize the cloud assembly")
    synth_parser.add_argument("--output", default="cdk.out", help="Cloud assembly directory")
    synth_parser.add_argument("--environment", help="Deployment environment tag")

    # Describe command
    describe_parser = subparsers.add_parser("describe", help="Summarize the synthesized stack")
    describe_parser.add_argument("--environment", help="Deployment environment tag")
    describe_parser.add_argument(
        "--format", choices=["pretty", "json"], default="pretty", help="Output format"
    )

    # Outputs command
    outputs_parser = subparsers.add_parser("outputs", help="Show URLs of the deployed stack")
    outputs_parser.add_argument("--stack-name", help="Deployed stack name")
    outputs_parser.add_argument("--region", help="AWS region")
    outputs_parser.add_argument(
        "--format", choices=["pretty", "json"], default="pretty", help="Output format"
    )

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "synth":
        cmd_synth(args, settings)

    elif args.command == "describe":
        cmd_describe(args, settings)

    elif args.command == "outputs":
        cmd_outputs(args, settings)

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
