"""Planner prompt templates stored as text files next to this module."""
from pathlib import Path
import typing as t

PROMPTS_DIR = Path(__file__).resolve().parent


def load_prompt(prompt_name: str, prompts_dir: t.Optional[str] = None) -> str:
    """
    Read the template ``<prompt_name>.txt``.

    Args:
        prompt_name: Template name without the .txt extension
        prompts_dir: Directory to read from instead of this package.

    Raises:
        FileNotFoundError: If no such template exists.
    """
    prompt_file = Path(prompts_dir or PROMPTS_DIR) / f"{prompt_name}.txt"
    if not prompt_file.is_file():
        raise FileNotFoundError(f"Prompt file not found: {prompt_file}")
    return prompt_file.read_text(encoding="utf-8")


def render_prompt(prompt_name: str, **values: t.Any) -> str:
    """Load a template and fill its ``{placeholders}``; literal braces are doubled."""
    return load_prompt(prompt_name).format(**values)
