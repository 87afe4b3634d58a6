import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from tplpatch.exceptions import ConfigValidationError
from tplpatch.markers import DEFAULT_BRAND
from tplpatch.updater import (
    PATTERN_METHODS,
    POSITIONAL_METHODS,
    WILDCARD,
    PatchMethod,
    PatchType,
)


class PatchConfig(BaseModel):
    """One patch of a template, as written in the manifest."""

    type: PatchType = Field(
        default=PatchType.ADD,
        description='Patch category: add or delete',
    )
    method: PatchMethod = Field(
        description='Edit method (to_beginning, to_end, before, after, replace, reg_replace)',
    )
    names: list[str] = Field(
        default_factory=lambda: [WILDCARD],
        min_length=1,
        description='Set names to patch; "*" addresses the whole template',
    )
    content: str | None = Field(
        default=None,
        description='Text to insert',
    )
    content_file: Path | None = Field(
        default=None,
        description='File holding the text to insert, relative to the manifest',
    )
    pattern: str | None = Field(
        default=None,
        description='Search text, or a regular expression for reg_replace',
    )

    @field_validator('type', 'method', mode='before')
    @classmethod
    def normalize_enum_spelling(cls, value: Any) -> Any:
        """Accept `To-Beginning` style spellings for enum fields."""
        if isinstance(value, str):
            return value.strip().lower().replace('-', '_')
        return value

    @model_validator(mode='after')
    def validate_patch(self) -> 'PatchConfig':
        """Reject combinations the updater would refuse."""
        if self.content is not None and self.content_file is not None:
            msg = 'Cannot specify both content and content_file'
            raise ConfigValidationError(msg)
        if self.type is PatchType.DELETE and self.method in POSITIONAL_METHODS:
            msg = f"Patch method '{self.method.value}' cannot be used with type 'delete'"
            raise ConfigValidationError(msg)
        if self.method in PATTERN_METHODS and self.pattern is None:
            msg = f"Patch method '{self.method.value}' needs a pattern"
            raise ConfigValidationError(msg)
        if self.method is PatchMethod.REG_REPLACE:
            try:
                re.compile(self.pattern)
            except re.error as e:
                msg = f"Invalid regular expression '{self.pattern}': {e}"
                raise ConfigValidationError(msg) from e
        return self


class TemplateConfig(BaseModel):
    """Patches applied to one template."""

    template: str = Field(
        min_length=1,
        description='Template name, relative to the storage root',
    )
    backup: str | None = Field(
        default=None,
        description='Name the previous version is renamed to before saving',
    )
    patches: list[PatchConfig] = Field(
        default_factory=list,
        description='Patches, applied in order',
    )


class TplPatchConfig(BaseModel):
    """Patch manifest (tplpatch.yaml)."""

    namespace: str = Field(
        min_length=1,
        description='Marker namespace token, usually the installing module id',
    )
    root: Path = Field(
        default=Path(),
        description='Storage root directory, relative to the manifest',
    )
    brand: str = Field(
        default=DEFAULT_BRAND,
        min_length=1,
        description='Word identifying the markers of this tool',
    )
    check_duplicates: bool = Field(
        default=True,
        description='Skip insertions that are already in place',
    )
    templates: list[TemplateConfig] = Field(
        default_factory=list,
        description='Templates to patch',
    )
    # Set when loading from disk; excluded from dumps.
    config_file: Path | None = Field(
        default=None,
        description='Path to the YAML manifest (set by loader)',
        exclude=True,
    )

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, value: str) -> str:
        """Namespaces end up inside markers and must stay on one line."""
        if value != value.strip() or '\n' in value or '\r' in value:
            msg = f"Invalid namespace '{value}': no surrounding spaces or line breaks allowed"
            raise ConfigValidationError(msg)
        return value
