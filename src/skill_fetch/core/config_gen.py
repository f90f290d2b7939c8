"""Derive an agent configuration file from a skill's SKILL.md."""

import json
import logging
from pathlib import Path

from skill_fetch.config import settings
from skill_fetch.models import Skill

logger = logging.getLogger("skill-fetch.config_gen")

FRONT_MATTER_DELIMITER = "---"
PROMPT_INDENT = " " * 6

_TOOLS_BLOCK = """\
    tools:
      fs:
        work_dir: "./"
        allowed_paths: ["./"]
      command:
        allowed_commands: ["*"]
        deny_by_default: false
"""


def extract_instructions(content: str) -> str:
    """Return the instruction body of a SKILL.md, without YAML front matter.

    With two or more ``---`` delimiters everything after the second one is
    the body; otherwise the whole file is.
    """
    parts = content.split(FRONT_MATTER_DELIMITER)
    if len(parts) >= 3:
        return FRONT_MATTER_DELIMITER.join(parts[2:]).strip()
    return content.strip()


def _quote(value: str) -> str:
    # a JSON string is a valid YAML double-quoted scalar; keep astral chars unescaped
    return json.dumps(value, ensure_ascii=False)


def render_config(skill: Skill, instructions: str) -> str:
    # splitlines also breaks on \r, \x85, \u2028, \u2029, which YAML treats as line ends
    prompt = "\n".join(f"{PROMPT_INDENT}{line}" for line in instructions.splitlines())
    return (
        f"name: {_quote(skill.name)}\n"
        f"description: {_quote(skill.description)}\n"
        f"version: {_quote(settings.config_version)}\n"
        "\n"
        "agents:\n"
        "  default:\n"
        f"    model: {_quote(settings.agent_model)}\n"
        "    system_prompt: |\n"
        f"{prompt}\n"
        "\n"
        f"{_TOOLS_BLOCK}"
    )


def generate_config(destination: Path, skill: Skill) -> Path | None:
    """Write the agent config next to the skill's instruction file.

    Best effort: returns None (and logs) when SKILL.md is missing or the
    files cannot be read or written.
    """
    destination = Path(destination)
    instruction_path = destination / settings.instruction_file
    config_path = destination / settings.config_file

    if not instruction_path.is_file():
        logger.warning(
            "%s not found at %s, skipping config generation", settings.instruction_file, instruction_path
        )
        return None

    try:
        content = instruction_path.read_text(encoding="utf-8")
        config_path.write_text(render_config(skill, extract_instructions(content)), encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to generate %s for '%s': %s", settings.config_file, skill.name, e)
        return None

    logger.info("Generated %s for skill '%s'", config_path, skill.name)
    return config_path
