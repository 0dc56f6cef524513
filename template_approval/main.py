"""
Command-line entry point for template approval.

    template-approval request [--argsfile stack-args.yaml]
    template-approval review s3://bucket/path/template.yaml.pending [--profile NAME]
"""

import asyncio
import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv

from template_approval.cli import CLIApprovalHandler
from template_approval.config import Settings
from template_approval.formatting import CLIFormatter
from template_approval.models import (
    ConfigurationError,
    StoreLocation,
    TemplateApprovalError,
)
from template_approval.stores import ObjectStore, S3ObjectStore
from template_approval.templates import FileTemplateSource, load_stack_args
from template_approval.workflow import TemplateApprovalWorkflow, log_error

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIGURATION = 1
EXIT_FAILURE = 2


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(message)s'
    )


def build_store(profile: Optional[str], region: Optional[str]) -> ObjectStore:
    """Create the object store used by a command."""
    return S3ObjectStore.from_profile(profile=profile, region=region)


def _run(coro, color: bool = True) -> int:
    """Run a workflow coroutine and map its errors onto exit codes."""
    try:
        asyncio.run(coro)
    except ConfigurationError as e:
        log_error(str(e), color)
        return EXIT_CONFIGURATION
    except TemplateApprovalError as e:
        logger.debug("Command failed", exc_info=True)
        log_error(f"Error: {e}", color)
        return EXIT_FAILURE
    return EXIT_OK


async def _request(settings: Settings, argsfile: str) -> None:
    stack_args = load_stack_args(argsfile)

    # The S3 client is only created on the first store call, after the
    # workflow has validated the stack args
    store = build_store(
        stack_args.profile or settings.aws_profile,
        stack_args.region or settings.aws_region
    )
    workflow = TemplateApprovalWorkflow(
        store,
        template_source=FileTemplateSource(),
        color=settings.color
    )
    await workflow.request(stack_args, argsfile)


async def _review(settings: Settings, location: str, profile: Optional[str]) -> None:
    store_location = StoreLocation.from_url(location)
    store = build_store(profile or settings.aws_profile, settings.review_region)
    workflow = TemplateApprovalWorkflow(
        store,
        approval_handler=CLIApprovalHandler(color=settings.color),
        color=settings.color
    )
    await workflow.approve_template(store_location)


@click.group()
@click.version_option(package_name="template-approval")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Request and review approval of CloudFormation templates."""
    load_dotenv()
    settings = Settings()
    settings.apply_to_environment()
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option(
    "--argsfile",
    default=None,
    help="Stack args file naming Template and ApprovedTemplateLocation",
)
@click.pass_obj
def request(settings: Settings, argsfile: Optional[str]) -> None:
    """Upload a template for approval."""
    argsfile = argsfile or settings.default_argsfile
    sys.exit(_run(_request(settings, argsfile), settings.color))


@cli.command()
@click.argument("location")
@click.option("--profile", default=None, help="AWS profile used to reach the bucket")
@click.pass_obj
def review(settings: Settings, location: str, profile: Optional[str]) -> None:
    """Review a pending template at LOCATION (s3://bucket/key.pending)."""
    sys.exit(_run(_review(settings, location, profile), settings.color))


def main() -> None:
    try:
        cli()
    except KeyboardInterrupt:
        print(f"\n\n{CLIFormatter.warning('Interrupted by user.')}")
        sys.exit(130)


if __name__ == "__main__":
    main()
