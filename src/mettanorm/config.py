"""
Runtime configuration for name resolution and description templates.

Configuration is an explicit value. It is loaded once, before any analysis,
and passed to the resolver and templates it configures. Entries add to (or
override) the built-in defaults; they never remove them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field

CONFIG_ENV_VAR = "METTANORM_CONFIG"


class ActionForms(BaseModel):
    """
    Surface forms of one action verb.
    """

    model_config = {"extra": "forbid", "frozen": True}

    base: str = Field(description="Base form, for example 'pay'.")
    present: str = Field(description="Third-person present form, for example 'pays'.")
    past: str = Field(description="Past form, for example 'paid'.")


class InferenceConfig(BaseModel):
    """
    Extra resolver table entries and template strings.
    """

    model_config = {"extra": "forbid"}

    entity_mappings: dict[str, str] = Field(
        default_factory=dict,
        description="Identifier to display name, checked before the derived fallback.",
    )
    special_characters: dict[str, str] = Field(
        default_factory=dict,
        description="Ordered literal substring replacements applied to derived names.",
    )
    action_mappings: dict[str, ActionForms] = Field(
        default_factory=dict,
        description="Action or eventuality identifier to verb forms.",
    )
    instrument_mappings: dict[str, str] = Field(
        default_factory=dict,
        description="Payment instrument identifier to display name.",
    )
    contradiction_templates: dict[str, str] = Field(default_factory=dict)
    conflict_templates: dict[str, str] = Field(default_factory=dict)
    violation_templates: dict[str, str] = Field(default_factory=dict)
    compliance_templates: dict[str, str] = Field(default_factory=dict)


def load_config(path: Optional[str | Path] = None) -> InferenceConfig:
    """Load configuration from ``path`` or ``METTANORM_CONFIG``.

    Returns an empty configuration (defaults only) when neither is set.
    Raises ``FileNotFoundError`` or ``pydantic.ValidationError`` on bad input.
    """
    raw_path = path if path is not None else os.getenv(CONFIG_ENV_VAR, "").strip()
    if not raw_path:
        return InferenceConfig()

    config_path = Path(raw_path)
    config = InferenceConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    logger.info(
        f"Loaded configuration from {config_path}: "
        f"{len(config.entity_mappings)} entity, {len(config.action_mappings)} action, "
        f"{len(config.instrument_mappings)} instrument mappings"
    )
    return config
