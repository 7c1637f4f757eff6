"""
Stack runner for Langfuse declarations.

Every operation works on one local Pulumi stack per project directory. The
stack program is generated from Resource declarations, and each operation
reports a result dictionary instead of raising, so the CLI can render
failures the same way as successes.
"""

import logging
import os
from collections.abc import Callable
from typing import Any

from pulumi import automation as auto

from .models import ProviderConfig
from .resources import Resource
from .settings import get_settings

logger = logging.getLogger(__name__)

CHANGE_OPS = ("create", "update", "delete", "replace")


def _failure(operation: str, error: Exception, **extra: Any) -> dict[str, Any]:
    logger.error(f"Stack {operation} failed: {error}")
    return {"success": False, "error": str(error), "summary": None, **extra}


def _stack_outputs(outputs: dict[str, Any]) -> dict[str, Any]:
    """Plain output values; secret outputs such as project keys are masked."""
    return {
        key: "[secret]" if output.secret else output.value
        for key, output in outputs.items()
    }


class StackRunner:
    """Apply, preview and destroy a stack of Langfuse organizations and projects."""

    def __init__(self, config: ProviderConfig | None = None, stack_name: str | None = None):
        """
        Args:
            config: Provider configuration handed to every declaration
            stack_name: Pulumi stack name (defaults to settings)
        """
        settings = get_settings()
        self.config = config
        self.stack_name = stack_name or settings.stack_name

        # Local backends refuse to run without a passphrase
        os.environ.setdefault(
            "PULUMI_CONFIG_PASSPHRASE", settings.pulumi_config_passphrase
        )

    def create_program(self, resources: list[Resource]) -> Callable:
        """Build the Pulumi program that declares ``resources`` in order."""

        def pulumi_program():
            for resource in resources:
                try:
                    resource.to_pulumi(self.config)
                except Exception as e:
                    logger.error(f"Cannot declare {resource.logical_name}: {e}")
                    raise

        return pulumi_program

    def _select(self, resources: list[Resource], project_name: str):
        return auto.create_or_select_stack(
            stack_name=self.stack_name,
            project_name=project_name,
            program=self.create_program(resources),
        )

    async def apply(
        self, resources: list[Resource], project_name: str = "langfuse"
    ) -> dict[str, Any]:
        """Create, rename or delete Langfuse entities until they match ``resources``.

        Returns:
            ``{"success", "summary", "outputs"}`` or ``{"success", "error", ...}``
        """
        logger.info(f"Applying {len(resources)} declarations to {project_name}/{self.stack_name}")
        try:
            up_result = self._select(resources, project_name).up(on_output=logger.debug)
        except Exception as e:
            return _failure("apply", e, outputs={})

        changes = up_result.summary.resource_changes or {}
        logger.info(f"Stack apply {up_result.summary.result}: {changes}")
        return {
            "success": True,
            "summary": {
                "result": up_result.summary.result,
                "resource_changes": changes,
            },
            "outputs": _stack_outputs(up_result.outputs),
        }

    async def preview(
        self, resources: list[Resource], project_name: str = "langfuse"
    ) -> dict[str, Any]:
        """Report the changes ``apply`` would make without calling the Admin API for writes."""
        try:
            preview_result = self._select(resources, project_name).preview(
                on_output=logger.debug
            )
        except Exception as e:
            return _failure("preview", e)

        change_summary = preview_result.change_summary
        return {
            "success": True,
            "summary": {
                "change_summary": change_summary,
                "total_changes": sum(change_summary.get(op, 0) for op in CHANGE_OPS),
            },
        }

    async def destroy(self, project_name: str = "langfuse") -> dict[str, Any]:
        """Delete every organization and project recorded in the stack's state."""
        logger.info(f"Destroying {project_name}/{self.stack_name}")
        try:
            # Destroy works from recorded state alone
            stack = auto.select_stack(
                stack_name=self.stack_name,
                project_name=project_name,
                program=lambda: None,
            )
            destroy_result = stack.destroy(on_output=logger.debug)
        except Exception as e:
            return _failure("destroy", e)

        return {
            "success": True,
            "summary": {
                "result": destroy_result.summary.result,
                "resource_changes": destroy_result.summary.resource_changes or {},
            },
        }
