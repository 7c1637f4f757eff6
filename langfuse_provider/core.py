"""
Provisioner Core - Loads Langfuse declarations and deploys them with Pulumi.

Apply Pipeline: Load declarations from main.py → Deploy with Pulumi
Plan Pipeline: Load declarations from main.py → Preview with Pulumi
Destroy Pipeline: Destroy the stack using Pulumi
"""

import importlib.util
import logging
from pathlib import Path
from typing import Any

from .provider import LangfuseProvider
from .resources import Resource
from .stack import StackRunner

logger = logging.getLogger(__name__)


class ProvisionerCore:
    """Main coordinator for the provisioning pipeline."""

    def __init__(
        self,
        admin_api_key: str | None = None,
        base_url: str | None = None,
        stack_name: str | None = None,
    ):
        """
        Initialize ProvisionerCore.

        Args:
            admin_api_key: Admin API key (overrides settings/.env)
            base_url: Langfuse base URL (overrides settings/.env)
            stack_name: Pulumi stack name (overrides settings/.env)

        Raises:
            ConfigurationError: If no admin API key is available
        """
        self.provider = LangfuseProvider()
        config = self.provider.configure(admin_api_key=admin_api_key, base_url=base_url)
        self.stack_runner = StackRunner(config=config, stack_name=stack_name)

        logger.info("ProvisionerCore initialized")

    async def apply(self, main_file: Path, dry_run: bool = False) -> dict[str, Any]:
        """
        Full pipeline: load declarations → deploy with Pulumi.

        Args:
            main_file: Path to main.py file with resource declarations
            dry_run: If True, only preview without executing

        Returns:
            Dict with execution results
        """
        logger.info(f"Starting provisioning pipeline for: {main_file}")

        resources = self._load_resources(main_file)
        logger.info(f"Loaded {len(resources)} resources")

        project_name = main_file.parent.name

        if dry_run:
            logger.info("Dry run - running preview only")
            result = await self.stack_runner.preview(resources, project_name)
            return {
                "dry_run": True,
                "resources": len(resources),
                "preview": result,
            }

        return await self.stack_runner.apply(resources, project_name)

    async def plan(self, main_file: Path) -> dict[str, Any]:
        """Plan mode: preview Pulumi changes without deploying."""
        return await self.apply(main_file, dry_run=True)

    async def destroy(self, main_file: Path) -> dict[str, Any]:
        """Destroy every entity in the stack of the project containing ``main_file``."""
        return await self.stack_runner.destroy(main_file.parent.name)

    def _load_resources(self, main_file: Path) -> list[Resource]:
        """
        Load declarations from main.py by executing it.

        Args:
            main_file: Path to main.py

        Returns:
            Module-level Resource instances, in definition order

        Raises:
            FileNotFoundError: If main.py does not exist
            ValueError: If main.py declares no resources
        """
        if not main_file.exists():
            raise FileNotFoundError(f"File not found: {main_file}")

        spec = importlib.util.spec_from_file_location("user_main", main_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Could not load {main_file}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        resources = []
        for name, obj in vars(module).items():
            if isinstance(obj, Resource):
                resources.append(obj)
                logger.debug(f"Found resource: {name} ({type(obj).__name__})")

        if not resources:
            raise ValueError(f"No resources found in {main_file}")

        return resources
