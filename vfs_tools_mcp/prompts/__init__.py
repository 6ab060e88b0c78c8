"""Initializes the prompts module and aggregates prompts from all submodules."""

from .system import get_prompts as get_system_prompts


def get_prompts() -> dict[str, str]:
    """
    Returns a dictionary of all available prompts, including the assembled
    agent system prompt.
    """
    prompts = {}
    prompts.update(get_system_prompts())
    prompts["agent-system-prompt"] = "\n".join(
        [
            prompts["base"],
            prompts["file-system-instructions"],
            prompts["styling-instructions"],
        ]
    )
    return prompts
