"""Prompt handlers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar

from ..registry import PromptArgument, PromptDescriptor, PromptResult


class BuildWithComponent:
    """Asks the model to build UI with one component, using this server's tools."""

    descriptor: ClassVar[PromptDescriptor] = PromptDescriptor(
        name="build-with-component",
        description="Build a piece of UI with a specific shadcn/ui component",
        arguments=(
            PromptArgument(name="componentName", description="Component to build with (e.g. \"dialog\")", required=True),
            PromptArgument(name="goal", description="What the UI should do. Defaults to a minimal working example"),
        ),
    )

    async def invoke(self, arguments: Mapping[str, str]) -> PromptResult:
        component = arguments["componentName"]
        goal = arguments.get("goal") or "a minimal working example"
        text = (
            f"Build {goal} using the shadcn/ui {component} component.\n\n"
            f"1. Call get_component_details with componentName \"{component}\" to read its documentation.\n"
            "2. Call get_component_demo or get_examples for reference code.\n"
            "3. Use the get_install_script_for_component resource template for the install command.\n"
            "4. Write the final code as a single React component in TypeScript."
        )
        return PromptResult.user(text, description=f"Build with {component}")


class CreateGreeting:
    descriptor: ClassVar[PromptDescriptor] = PromptDescriptor(
        name="create-greeting",
        description="Generate a customized greeting message",
        arguments=(
            PromptArgument(name="name", description="Name of the person to greet", required=True),
            PromptArgument(
                name="style",
                description="The style of greeting, such a formal, excited, or casual. If not specified casual will be used",
            ),
        ),
    )

    async def invoke(self, arguments: Mapping[str, str]) -> PromptResult:
        style = arguments.get("style") or "casual"
        return PromptResult.user(f"Please generate a greeting in {style} style to {arguments['name']}.")


PROMPTS = (BuildWithComponent, CreateGreeting)
