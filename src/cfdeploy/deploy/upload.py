"""The "deploy" stage for Cloud Functions: upload packaged source.

Gen-1 source is uploaded once per codebase, whatever regions it spans.
Gen-2 enforces data residency, so its source is uploaded once per region
that has gen-2 endpoints, and the resulting storage location is recorded in
the deploy context for the stage that creates the functions.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from pathlib import Path
from typing import Any

from cfdeploy.config.defaults import gcfv1_upload_headers
from cfdeploy.deploy.context import CodebaseSource, DeployContext, DeployPayload
from cfdeploy.gcp.base import (
    AccessChecker,
    GenerationOneApi,
    GenerationTwoApi,
    SourceUploader,
)
from cfdeploy.lib.errors import SourceMissingError, UploadError
from cfdeploy.lib.logging_config import get_logger
from cfdeploy.lib.ui import ANSIColors, colorize, log_success, log_warning
from cfdeploy.models.backend import (
    Backend,
    Platform,
    all_endpoints,
    has_platform,
    regional_endpoints,
    regions,
)
from cfdeploy.models.upload import UploadTask

logger = get_logger(__name__)


def plan_uploads(want: Backend) -> list[UploadTask]:
    """Decide which uploads a desired backend needs.

    Returns one gen-1 task, in the region of the first gen-1 endpoint, if
    there are any gen-1 endpoints, followed by one gen-2 task per region
    that has gen-2 endpoints. Regions are visited in sorted order so the
    plan is the same on every run.
    """
    tasks: list[UploadTask] = []

    v1_endpoints = [e for e in all_endpoints(want) if e.platform == Platform.GCFV1]
    if v1_endpoints:
        # Any region works for gen-1; the same archive is uploaded regardless.
        tasks.append(UploadTask(platform=Platform.GCFV1, region=v1_endpoints[0].region))

    for region in regions(want):
        if has_platform(regional_endpoints(want, region), Platform.GCFV2):
            tasks.append(UploadTask(platform=Platform.GCFV2, region=region))

    return tasks


def _require_archive(source: CodebaseSource, codebase: str, platform: Platform) -> Path:
    path = (
        source.functions_source_v1
        if platform == Platform.GCFV1
        else source.functions_source_v2
    )
    if path is None:
        raise SourceMissingError(codebase, platform.value)
    return path


async def upload_source_v1(
    context: DeployContext,
    archive: Path,
    region: str,
    gcf: GenerationOneApi,
    storage: SourceUploader,
) -> None:
    """Upload the gen-1 archive through a URL issued for ``region``."""
    upload_url = await gcf.generate_upload_url(context.project_id, region)
    await storage.upload(archive, upload_url, gcfv1_upload_headers())
    logger.debug("Uploaded gen-1 source via %s", region)


async def upload_source_v2(
    context: DeployContext,
    source: CodebaseSource,
    archive: Path,
    region: str,
    gcfv2: GenerationTwoApi,
    storage: SourceUploader,
) -> None:
    """Upload the gen-2 archive to ``region`` and record where it landed."""
    destination = await gcfv2.generate_upload_url(context.project_id, region)
    if destination.storage_source is None:
        raise UploadError(f"No storage source returned for region {region}")
    await storage.upload(archive, destination.upload_url)
    await source.storage.set(region, destination.storage_source)
    logger.debug("Uploaded gen-2 source to %s", region)


async def deploy(
    context: DeployContext,
    options: Any,
    payload: DeployPayload,
    *,
    checker: AccessChecker,
    gcf: GenerationOneApi,
    gcfv2: GenerationTwoApi,
    storage: SourceUploader,
) -> list[UploadTask]:
    """Upload the codebase's packaged source for every target that needs it.

    Args:
        context: Deploy context; gen-2 storage locations are recorded on the
            codebase's source.
        options: Command-wide options, passed through to the access check.
        payload: Deploy payload holding the desired backend.
        checker: Access check run once before any upload.
        gcf: Gen-1 upload URL API.
        gcfv2: Gen-2 upload URL API.
        storage: Uploader that streams archives to signed URLs.

    Returns:
        The uploads that were performed. Empty if there was nothing to do.

    Raises:
        SourceMissingError: If endpoints of a generation exist but no archive
            was packaged for it.
        DeploymentError: If the access check, an upload URL request or a
            transfer fails. Upload failures are re-raised unchanged after a
            warning is printed.
    """
    if context.config is None:
        return []

    codebase = context.config.codebase
    source = context.source_for(codebase)
    if source is None or not source.has_sources:
        return []

    await checker.check_access(context, options, payload)

    try:
        tasks = plan_uploads(payload.want_backend)
        archives = [_require_archive(source, codebase, t.platform) for t in tasks]

        uploads: list[Awaitable[None]] = []
        for task, archive in zip(tasks, archives, strict=True):
            if task.platform == Platform.GCFV1:
                uploads.append(
                    upload_source_v1(context, archive, task.region, gcf, storage)
                )
            else:
                uploads.append(
                    upload_source_v2(
                        context, source, archive, task.region, gcfv2, storage
                    )
                )

        logger.debug(
            "Uploading source for codebase %s: %s",
            codebase,
            ", ".join(f"{t.platform.value}@{t.region}" for t in tasks) or "nothing",
        )
        # First failure propagates; sibling uploads keep running.
        await asyncio.gather(*uploads)

        if tasks:
            log_success(
                f"{colorize('functions:', ANSIColors.GREEN, ANSIColors.BOLD)} "
                f"{colorize(context.config.source, ANSIColors.BOLD)} "
                "folder uploaded successfully"
            )
        return tasks
    except Exception as exc:
        log_warning(
            f"{colorize('functions:', ANSIColors.YELLOW)} Upload Error: {exc}"
        )
        raise
