"""Resource template handlers: install script and installation guide.

Both are computed locally from the URI parameters. A missing parameter is
answered with a text explaining what to add, not with an error.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

from ..registry import ContentResult, ResourceTemplateDescriptor

MISSING_PACKAGE_MANAGER = "Missing packageManager parameter. Please specify npm, pnpm, or yarn."
MISSING_COMPONENT = "Missing component parameter. Please specify the component name."
MISSING_FRAMEWORK = "Missing framework parameter. Please specify next, vite, remix, etc."

# Package manager -> command used to run a package binary without installing it
_RUNNERS: dict[str, str] = {
    "npm": "npx",
    "pnpm": "pnpm dlx",
    "yarn": "yarn dlx",
    "bun": "bunx --bun",
}
_DEFAULT_RUNNER = _RUNNERS["npm"]


def runner_for(package_manager: str) -> str:
    """Runner command for a package manager; unknown managers fall back to npx."""
    return _RUNNERS.get(package_manager.lower(), _DEFAULT_RUNNER)


def install_command(package_manager: str, component: str) -> str:
    """`pnpm`, `button` -> `pnpm dlx shadcn@latest add button`. The component is shell-quoted."""
    return f"{runner_for(package_manager)} shadcn@latest add {shlex.quote(component)}"


class InstallScript:
    descriptor: ClassVar[ResourceTemplateDescriptor] = ResourceTemplateDescriptor(
        uri_template=(
            "resource-template:get_install_script_for_component"
            "?packageManager={packageManager}&component={component}"
        ),
        name="get_install_script_for_component",
        description="Generate installation script for a specific shadcn/ui component based on package manager",
    )

    async def invoke(self, params: Mapping[str, str | None]) -> ContentResult:
        package_manager = params.get("packageManager")
        component = params.get("component")
        if not package_manager:
            return ContentResult.from_text(MISSING_PACKAGE_MANAGER)
        if not component:
            return ContentResult.from_text(MISSING_COMPONENT)
        return ContentResult.from_text(install_command(package_manager, component))


# ─────────────────────────────────────────────────────────────────────────────
# Installation guide
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Guide:
    description: str
    setup: tuple[str, ...]

    def render(self, package_manager: str) -> str:
        runner = runner_for(package_manager)
        steps = [
            *self.setup,
            "Add shadcn/ui to your project:",
            f"{runner} shadcn-ui@latest init",
            "",
            "Follow the prompts to select your preferences",
            "",
            "Once initialized, you can add components:",
            f"{runner} shadcn-ui@latest add button",
            "",
            "Now you can use the component in your project!",
        ]
        return f"# {self.description} with {package_manager}\n\n" + "\n".join(steps)


def _tailwind_steps(pm: str) -> tuple[str, ...]:
    verb = "install" if pm == "npm" else "add"
    return (
        "Install dependencies:",
        f"{pm} {verb} -D tailwindcss postcss autoprefixer",
        "",
        "Initialize Tailwind CSS:",
        "npx tailwindcss init -p",
        "",
    )


def _enter_project() -> tuple[str, ...]:
    return ("Navigate to your project directory:", "cd my-app", "")


def guide_for(framework: str, package_manager: str) -> Guide:
    """Guide for next / vite / remix; anything else gets the generic guide."""
    pm = package_manager.lower()
    match framework.lower():
        case "next":
            return Guide("Installation guide for Next.js project", (
                "Create a Next.js project if you don't have one already:",
                f"{package_manager} create next-app my-app",
                "",
                *_enter_project(),
            ))
        case "vite":
            return Guide("Installation guide for Vite project", (
                "Create a Vite project if you don't have one already:",
                f"{package_manager} create vite my-app -- --template react-ts",
                "",
                *_enter_project(),
                *_tailwind_steps(pm),
            ))
        case "remix":
            create = runner_for(pm).removesuffix(" --bun")
            return Guide("Installation guide for Remix project", (
                "Create a Remix project if you don't have one already:",
                f"{create} create-remix my-app",
                "",
                *_enter_project(),
                *_tailwind_steps(pm),
            ))
        case _:
            return Guide("Generic installation guide", ("Make sure you have a React project set up", ""))


class InstallationGuide:
    descriptor: ClassVar[ResourceTemplateDescriptor] = ResourceTemplateDescriptor(
        uri_template="resource-template:get_installation_guide?framework={framework}&packageManager={packageManager}",
        name="get_installation_guide",
        description="Get the installation guide for shadcn/ui based on framework and package manager",
    )

    async def invoke(self, params: Mapping[str, str | None]) -> ContentResult:
        framework = params.get("framework")
        package_manager = params.get("packageManager")
        if not framework:
            return ContentResult.from_text(MISSING_FRAMEWORK)
        if not package_manager:
            return ContentResult.from_text(MISSING_PACKAGE_MANAGER)
        return ContentResult.from_text(guide_for(framework, package_manager).render(package_manager))


TEMPLATES = (InstallScript, InstallationGuide)
